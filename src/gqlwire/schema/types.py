# -*- coding: utf-8 -*-
"""
Immutable data model for parsed schema definitions.

Instances are created by :mod:`gqlwire.schema.registry` and should be
considered read-only: any attribute assignment raises
:class:`~gqlwire.exc.SchemaFrozenError`.
"""

import enum
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    Iterator,
    Mapping,
    Optional,
    Sequence,
    TypeVar,
    Union,
)

from ..exc import SchemaFrozenError
from ..lang import ast as _ast

BUILTIN_SCALARS = ("String", "Int", "Float", "Boolean", "ID")

K = TypeVar("K")
V = TypeVar("V")


class TypeKind(enum.Enum):
    SCALAR = "SCALAR"
    OBJECT = "OBJECT"
    INTERFACE = "INTERFACE"
    UNION = "UNION"
    ENUM = "ENUM"
    INPUT_OBJECT = "INPUT_OBJECT"


class _Frozen:
    __slots__ = ()

    def _set(self, **values: Any) -> None:
        for key, value in values.items():
            object.__setattr__(self, key, value)

    def __setattr__(self, name: str, value: Any) -> None:
        raise SchemaFrozenError(
            'Cannot set "%s", %s is immutable'
            % (name, self.__class__.__name__)
        )

    def __delattr__(self, name: str) -> None:
        raise SchemaFrozenError(
            'Cannot delete "%s", %s is immutable'
            % (name, self.__class__.__name__)
        )


class FrozenMap(Mapping[K, V]):
    """
    Read-only mapping. Item assignment and deletion raise
    :class:`~gqlwire.exc.SchemaFrozenError`.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Optional[Mapping[K, V]] = None):
        self._data = dict(data or {})  # type: Dict[K, V]

    def __getitem__(self, key: K) -> V:
        return self._data[key]

    def __iter__(self) -> Iterator[K]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __setitem__(self, key: K, value: V) -> None:
        raise SchemaFrozenError("Cannot set %r, mapping is immutable" % (key,))

    def __delitem__(self, key: K) -> None:
        raise SchemaFrozenError(
            "Cannot delete %r, mapping is immutable" % (key,)
        )

    def __repr__(self) -> str:
        return "%s(%r)" % (self.__class__.__name__, self._data)


class NamedTypeRef(_Frozen):
    """ Reference to a named type (``Droid``). """

    __slots__ = ("name",)

    def __init__(self, name: str):
        self._set(name=name)

    def __eq__(self, rhs: Any) -> bool:
        return isinstance(rhs, NamedTypeRef) and rhs.name == self.name

    def __hash__(self) -> int:
        return hash(("named", self.name))

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return "<NamedTypeRef %s>" % self


class ListTypeRef(_Frozen):
    """ List wrapper (``[Droid]``). """

    __slots__ = ("of",)

    def __init__(self, of: "TypeRef"):
        self._set(of=of)

    def __eq__(self, rhs: Any) -> bool:
        return isinstance(rhs, ListTypeRef) and rhs.of == self.of

    def __hash__(self) -> int:
        return hash(("list", self.of))

    def __str__(self) -> str:
        return "[%s]" % self.of

    def __repr__(self) -> str:
        return "<ListTypeRef %s>" % self


class NonNullTypeRef(_Frozen):
    """ Non nullable wrapper (``Droid!``). """

    __slots__ = ("of",)

    def __init__(self, of: "TypeRef"):
        if isinstance(of, NonNullTypeRef):
            raise TypeError("Cannot wrap a non-null type reference twice")
        self._set(of=of)

    def __eq__(self, rhs: Any) -> bool:
        return isinstance(rhs, NonNullTypeRef) and rhs.of == self.of

    def __hash__(self) -> int:
        return hash(("non_null", self.of))

    def __str__(self) -> str:
        return "%s!" % self.of

    def __repr__(self) -> str:
        return "<NonNullTypeRef %s>" % self


TypeRef = Union[NamedTypeRef, ListTypeRef, NonNullTypeRef]


def unwrap_type(type_: TypeRef) -> str:
    """ Name of the type at the core of a possibly wrapped reference. """
    while not isinstance(type_, NamedTypeRef):
        type_ = type_.of
    return type_.name


def is_non_null(type_: TypeRef) -> bool:
    return isinstance(type_, NonNullTypeRef)


def is_list(type_: TypeRef) -> bool:
    """ Whether the reference is a list, ignoring a non-null wrapper. """
    if isinstance(type_, NonNullTypeRef):
        type_ = type_.of
    return isinstance(type_, ListTypeRef)


def nullable(type_: TypeRef) -> TypeRef:
    if isinstance(type_, NonNullTypeRef):
        return type_.of
    return type_


def type_ref_from_ast(node: _ast.Type) -> TypeRef:
    if isinstance(node, _ast.NonNullType):
        return NonNullTypeRef(type_ref_from_ast(node.type))
    elif isinstance(node, _ast.ListType):
        return ListTypeRef(type_ref_from_ast(node.type))
    elif isinstance(node, _ast.NamedType):
        return NamedTypeRef(node.name.value)
    raise TypeError("Invalid type node %r" % node)


class ArgumentDefinition(_Frozen):
    """
    Argument of a field or field of an input object type.

    Args:
        name: Argument name
        type: Argument type
        default_value: Default value literal as written in the schema; it is
            coerced against ``type`` whenever the argument is omitted.
        description: Argument description

    Attributes:
        name (str): Argument name
        type (TypeRef): Argument type
        default_value (Optional[gqlwire.lang.ast.Value]): Default value
            literal, ``None`` when the argument has no default.
        description (Optional[str]): Argument description
    """

    __slots__ = ("name", "type", "default_value", "description")

    def __init__(
        self,
        name: str,
        type: TypeRef,
        default_value: Optional[_ast.Value] = None,
        description: Optional[str] = None,
    ):
        self._set(
            name=name,
            type=type,
            default_value=default_value,
            description=description,
        )

    @property
    def has_default_value(self) -> bool:
        return self.default_value is not None

    @property
    def required(self) -> bool:
        """ Non-null arguments without a default must be provided. """
        return is_non_null(self.type) and not self.has_default_value

    def __repr__(self) -> str:
        return "<ArgumentDefinition %s: %s>" % (self.name, self.type)


class FieldDefinition(_Frozen):
    """
    Field of an object or interface type.

    Attributes:
        name (str): Field name
        type (TypeRef): Field type
        arguments (Tuple[ArgumentDefinition, ...]): Field arguments in
            definition order
        description (Optional[str]): Field description
        deprecation_reason (Optional[str]): Set when the field is marked with
            ``@deprecated``
    """

    __slots__ = (
        "name",
        "type",
        "arguments",
        "description",
        "deprecation_reason",
        "argument_map",
    )

    def __init__(
        self,
        name: str,
        type: TypeRef,
        arguments: Optional[Iterable[ArgumentDefinition]] = None,
        description: Optional[str] = None,
        deprecation_reason: Optional[str] = None,
    ):
        arguments = tuple(arguments or ())
        self._set(
            name=name,
            type=type,
            arguments=arguments,
            description=description,
            deprecation_reason=deprecation_reason,
            argument_map=FrozenMap({a.name: a for a in arguments}),
        )

    @property
    def deprecated(self) -> bool:
        return self.deprecation_reason is not None

    def __repr__(self) -> str:
        return "<FieldDefinition %s: %s>" % (self.name, self.type)


class EnumValueDefinition(_Frozen):
    __slots__ = ("name", "description", "deprecation_reason")

    def __init__(
        self,
        name: str,
        description: Optional[str] = None,
        deprecation_reason: Optional[str] = None,
    ):
        self._set(
            name=name,
            description=description,
            deprecation_reason=deprecation_reason,
        )

    def __repr__(self) -> str:
        return "<EnumValueDefinition %s>" % self.name


class TypeDefinition(_Frozen):
    """
    Named type declared in a schema.

    Depending on ``kind`` only some of the collections are relevant:
    ``fields`` for objects and interfaces, ``interfaces`` for objects,
    ``possible_types`` for unions, ``enum_values`` for enums and
    ``input_fields`` for input objects. The others are left empty.

    Attributes:
        name (str): Type name
        kind (TypeKind): Type kind
        fields (Tuple[FieldDefinition, ...]): Output fields
        interfaces (Tuple[str, ...]): Names of the implemented interfaces
        possible_types (Tuple[str, ...]): Union members
        enum_values (Tuple[EnumValueDefinition, ...]): Enum values
        input_fields (Tuple[ArgumentDefinition, ...]): Input object fields
        description (Optional[str]): Type description
    """

    __slots__ = (
        "name",
        "kind",
        "fields",
        "interfaces",
        "possible_types",
        "enum_values",
        "input_fields",
        "description",
        "field_map",
        "input_field_map",
        "enum_value_map",
    )

    def __init__(
        self,
        name: str,
        kind: TypeKind,
        fields: Iterable[FieldDefinition] = (),
        interfaces: Iterable[str] = (),
        possible_types: Iterable[str] = (),
        enum_values: Iterable[EnumValueDefinition] = (),
        input_fields: Iterable[ArgumentDefinition] = (),
        description: Optional[str] = None,
    ):
        fields = tuple(fields)
        enum_values = tuple(enum_values)
        input_fields = tuple(input_fields)
        self._set(
            name=name,
            kind=kind,
            fields=fields,
            interfaces=tuple(interfaces),
            possible_types=tuple(possible_types),
            enum_values=enum_values,
            input_fields=input_fields,
            description=description,
            field_map=FrozenMap({f.name: f for f in fields}),
            input_field_map=FrozenMap(
                {f.name: f for f in input_fields}
            ),
            enum_value_map=FrozenMap({v.name: v for v in enum_values}),
        )

    @property
    def is_abstract(self) -> bool:
        return self.kind in (TypeKind.INTERFACE, TypeKind.UNION)

    @property
    def is_composite(self) -> bool:
        """ Types that must be queried with a selection set. """
        return self.kind in (
            TypeKind.OBJECT,
            TypeKind.INTERFACE,
            TypeKind.UNION,
        )

    @property
    def is_leaf(self) -> bool:
        return self.kind in (TypeKind.SCALAR, TypeKind.ENUM)

    @property
    def is_input(self) -> bool:
        """ Types allowed for arguments and variables. """
        return self.kind in (
            TypeKind.SCALAR,
            TypeKind.ENUM,
            TypeKind.INPUT_OBJECT,
        )

    @property
    def is_output(self) -> bool:
        return self.kind is not TypeKind.INPUT_OBJECT

    def __repr__(self) -> str:
        return "<TypeDefinition %s (%s)>" % (self.name, self.kind.name)


TypeMap = Mapping[str, TypeDefinition]


def builtin_scalar_definitions() -> Sequence[TypeDefinition]:
    return [TypeDefinition(name, TypeKind.SCALAR) for name in BUILTIN_SCALARS]


def is_input_type_ref(type_: TypeRef, types: TypeMap) -> bool:
    definition = types.get(unwrap_type(type_))
    return definition is not None and definition.is_input


def is_output_type_ref(type_: TypeRef, types: TypeMap) -> bool:
    definition = types.get(unwrap_type(type_))
    return definition is not None and definition.is_output


def is_subtype_ref(
    candidate: TypeRef,
    expected: TypeRef,
    is_possible: Callable[[str, str], bool],
) -> bool:
    """
    Check that a field type is a valid (covariant) implementation of an
    interface field type.

    Args:
        candidate: Implementing field type
        expected: Interface field type
        is_possible: ``callable(abstract_name, object_name) -> bool``
    """
    if candidate == expected:
        return True

    if isinstance(expected, NonNullTypeRef):
        return isinstance(candidate, NonNullTypeRef) and is_subtype_ref(
            candidate.of, expected.of, is_possible
        )

    if isinstance(candidate, NonNullTypeRef):
        return is_subtype_ref(candidate.of, expected, is_possible)

    if isinstance(expected, ListTypeRef):
        return isinstance(candidate, ListTypeRef) and is_subtype_ref(
            candidate.of, expected.of, is_possible
        )

    if isinstance(candidate, ListTypeRef):
        return False

    return is_possible(expected.name, candidate.name)
