# -*- coding: utf-8 -*-
"""
Combine a type graph with resolver bindings into an immutable
:class:`ExecutableSchema`.
"""

import functools as ft
import logging
from typing import (
    Any,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Union,
)

from ..exc import (
    DanglingBindingError,
    MissingTypeResolverError,
    SchemaFrozenError,
    SchemaValidationError,
    UnknownType,
)
from .bindings import (
    FieldKey,
    Resolver,
    ResolverBindings,
    ResolverBindingTable,
    TypeResolver,
)
from .registry import TypeGraph
from .types import (
    FieldDefinition,
    FrozenMap,
    NonNullTypeRef,
    TypeDefinition,
    TypeKind,
    is_input_type_ref,
    is_output_type_ref,
    is_subtype_ref,
    unwrap_type,
)

logger = logging.getLogger(__name__)

_OPERATIONS = ("query", "mutation", "subscription")


class ExecutableSchema:
    """
    Validated combination of type definitions and resolver bindings, ready to
    execute queries against. Instances cannot be modified: any attribute
    assignment or deletion raises :class:`~gqlwire.exc.SchemaFrozenError`.

    Use :func:`build_executable_schema` to create instances.

    Attributes:
        types (Mapping[str, TypeDefinition]): All types by name, built-in
            scalars included.
        query_type (TypeDefinition): Query root type
        mutation_type (Optional[TypeDefinition]): Mutation root type
        bindings (ResolverBindings): Bindings the schema was built with
        implementations (Mapping[str, Tuple[str, ...]]): Names of the object
            types implementing each interface.
    """

    __slots__ = (
        "types",
        "query_type",
        "mutation_type",
        "bindings",
        "implementations",
        "_possible_types",
        "_field_resolvers",
    )

    def __init__(
        self,
        types: Mapping[str, TypeDefinition],
        query_type: TypeDefinition,
        mutation_type: Optional[TypeDefinition],
        bindings: ResolverBindings,
    ):
        implementations = {}  # type: Dict[str, List[str]]
        for type_ in types.values():
            if type_.kind is TypeKind.INTERFACE:
                implementations.setdefault(type_.name, [])
            for interface in type_.interfaces:
                implementations.setdefault(interface, []).append(type_.name)

        possible_types = {
            name: frozenset(names) for name, names in implementations.items()
        }
        for type_ in types.values():
            if type_.kind is TypeKind.UNION:
                possible_types[type_.name] = frozenset(type_.possible_types)

        set_ = ft.partial(object.__setattr__, self)
        set_("types", FrozenMap(types))
        set_("query_type", query_type)
        set_("mutation_type", mutation_type)
        set_("bindings", bindings)
        set_(
            "implementations",
            FrozenMap(
                {k: tuple(v) for k, v in implementations.items()}
            ),
        )
        set_("_possible_types", FrozenMap(possible_types))
        set_(
            "_field_resolvers",
            FrozenMap(_effective_resolvers(types, bindings)),
        )

    def __setattr__(self, name: str, value: Any) -> None:
        raise SchemaFrozenError("Executable schemas are immutable")

    def __delattr__(self, name: str) -> None:
        raise SchemaFrozenError("Executable schemas are immutable")

    def get_type(self, name: str) -> TypeDefinition:
        """
        Find a type by name.

        Raises:
            :class:`~gqlwire.exc.UnknownType`: if the type does not exist.
        """
        try:
            return self.types[name]
        except KeyError:
            raise UnknownType(name)

    def has_type(self, name: str) -> bool:
        return name in self.types

    def root_type(self, operation: str) -> Optional[TypeDefinition]:
        """
        Root type for an operation kind (``query``, ``mutation`` or
        ``subscription``), ``None`` if the schema does not support it.
        """
        if operation == "query":
            return self.query_type
        elif operation == "mutation":
            return self.mutation_type
        elif operation in _OPERATIONS:
            return None
        raise ValueError('Unknown operation "%s"' % operation)

    def possible_types(
        self, abstract_type: Union[str, TypeDefinition]
    ) -> List[TypeDefinition]:
        """
        Object types a value of the given interface or union can resolve to,
        in declaration order.
        """
        name = _name(abstract_type)
        names = self._possible_types.get(name, frozenset())
        return [
            t
            for t in self.types.values()
            if t.name in names and t.kind is TypeKind.OBJECT
        ]

    def is_possible_type(
        self,
        abstract_type: Union[str, TypeDefinition],
        object_type: Union[str, TypeDefinition],
    ) -> bool:
        return _name(object_type) in self._possible_types.get(
            _name(abstract_type), frozenset()
        )

    def get_field(
        self, type_name: str, field_name: str
    ) -> Optional[FieldDefinition]:
        type_ = self.types.get(type_name)
        if type_ is None:
            return None
        return type_.field_map.get(field_name)

    def field_resolver(
        self, type_name: str, field_name: str
    ) -> Optional[Resolver]:
        """
        Resolver to use for a field of an object type: its own binding when
        there is one, otherwise a binding on the same field of one of the
        interfaces it implements. ``None`` means default resolution.
        """
        return self._field_resolvers.get((type_name, field_name))

    def type_resolver(self, type_name: str) -> Optional[TypeResolver]:
        return self.bindings.type_resolver(type_name)

    def to_sdl(self, **kwargs: Any) -> str:
        """ Render the schema as SDL text. """
        from .printer import print_schema

        return print_schema(self, **kwargs)

    def __repr__(self) -> str:
        return "<ExecutableSchema query=%s mutation=%s types=%d>" % (
            self.query_type.name,
            self.mutation_type.name if self.mutation_type else None,
            len(self.types),
        )


def _name(type_: Union[str, TypeDefinition]) -> str:
    return type_ if isinstance(type_, str) else type_.name


def _effective_resolvers(
    types: Mapping[str, TypeDefinition], bindings: ResolverBindings
) -> Dict[FieldKey, Resolver]:
    resolvers = dict(bindings.field_resolvers)
    for type_ in types.values():
        if type_.kind is not TypeKind.OBJECT:
            continue
        for field in type_.fields:
            key = (type_.name, field.name)
            if key in resolvers:
                continue
            for interface in type_.interfaces:
                inherited = bindings.field_resolver(interface, field.name)
                if inherited is not None:
                    resolvers[key] = inherited
                    break
    return resolvers


def build_executable_schema(
    types: Union[TypeGraph, Iterable[TypeDefinition]],
    bindings: Union[ResolverBindingTable, ResolverBindings, None] = None,
    *,
    query_type: Optional[str] = None,
    mutation_type: Optional[str] = None
) -> ExecutableSchema:
    """
    Validate and combine type definitions with resolver bindings.

    Args:
        types: Type graph (as returned by
            :func:`~gqlwire.schema.registry.parse_schema_document`) or list
            of type definitions.
        bindings: Resolver bindings. A binding table is built (and therefore
            frozen) by this call, once the schema has been validated.
        query_type: Name of the query root type, overriding the one declared
            in the type graph. Defaults to ``Query``.
        mutation_type: Name of the mutation root type, overriding the one
            declared in the type graph. Defaults to ``Mutation`` when such a
            type exists.

    Raises:
        :class:`~gqlwire.exc.DanglingBindingError`: A binding targets an
            unknown or incompatible type or field.
        :class:`~gqlwire.exc.MissingTypeResolverError`: An interface or union
            has no type resolver.
        :class:`~gqlwire.exc.SchemaValidationError`: The type graph is not a
            valid schema.
    """
    graph = types if isinstance(types, TypeGraph) else TypeGraph(types)

    table = None  # type: Optional[ResolverBindingTable]
    if bindings is None:
        bindings = ResolverBindings()
    elif isinstance(bindings, ResolverBindingTable):
        table, bindings = bindings, bindings.snapshot()

    query_name = query_type or graph.query_type or "Query"
    mutation_name = mutation_type or graph.mutation_type
    if mutation_name is None and "Mutation" in graph.type_map:
        mutation_name = "Mutation"

    validator = _SchemaValidator(graph.type_map, query_name, mutation_name)
    validator.validate()
    _validate_bindings(graph.type_map, bindings)

    if table is not None:
        bindings = table.build()

    schema = ExecutableSchema(
        graph.type_map,
        graph.type_map[query_name],
        graph.type_map[mutation_name] if mutation_name else None,
        bindings,
    )
    logger.debug(
        "Built executable schema with %d types, %d field resolvers and %d "
        "type resolvers",
        len(graph),
        len(bindings.field_resolvers),
        len(bindings.type_resolvers),
    )
    return schema


def _validate_bindings(
    types: Mapping[str, TypeDefinition], bindings: ResolverBindings
) -> None:
    for type_name, field_name in bindings.bound_fields():
        type_ = types.get(type_name)
        if type_ is None:
            raise DanglingBindingError(
                'Resolver bound to "%s.%s" but type "%s" does not exist'
                % (type_name, field_name, type_name)
            )
        if type_.kind not in (TypeKind.OBJECT, TypeKind.INTERFACE):
            raise DanglingBindingError(
                'Resolver bound to "%s.%s" but "%s" is a %s type'
                % (type_name, field_name, type_name, type_.kind.name)
            )
        if field_name not in type_.field_map:
            raise DanglingBindingError(
                'Resolver bound to "%s.%s" but type "%s" has no field "%s"'
                % (type_name, field_name, type_name, field_name)
            )

    for type_name in bindings.bound_types():
        type_ = types.get(type_name)
        if type_ is None:
            raise DanglingBindingError(
                'Type resolver bound to unknown type "%s"' % type_name
            )
        if not type_.is_abstract:
            raise DanglingBindingError(
                'Type resolver bound to "%s" which is not an interface or '
                "union type" % type_name
            )

    for type_ in types.values():
        if type_.is_abstract and bindings.type_resolver(type_.name) is None:
            raise MissingTypeResolverError(
                '%s type "%s" has no type resolver'
                % (type_.kind.name.capitalize(), type_.name)
            )


class _SchemaValidator:
    def __init__(
        self,
        types: Mapping[str, TypeDefinition],
        query_type: str,
        mutation_type: Optional[str],
    ):
        self.types = types
        self.query_type = query_type
        self.mutation_type = mutation_type
        self.errors = []  # type: List[str]

    def add_error(self, msg: str) -> None:
        self.errors.append(msg)

    def is_possible(self, abstract: str, object_name: str) -> bool:
        abstract_type = self.types.get(abstract)
        object_type = self.types.get(object_name)
        if abstract_type is None or object_type is None:
            return False
        if abstract_type.kind is TypeKind.UNION:
            return object_name in abstract_type.possible_types
        if abstract_type.kind is TypeKind.INTERFACE:
            return abstract in object_type.interfaces
        return False

    def validate(self) -> None:
        self.validate_root("Query", self.query_type)
        if self.mutation_type is not None:
            self.validate_root("Mutation", self.mutation_type)

        for type_ in self.types.values():
            if type_.kind is TypeKind.OBJECT:
                self.validate_fields(type_)
                self.validate_interfaces(type_)
            elif type_.kind is TypeKind.INTERFACE:
                self.validate_fields(type_)
            elif type_.kind is TypeKind.UNION:
                self.validate_union_members(type_)
            elif type_.kind is TypeKind.ENUM:
                if not type_.enum_values:
                    self.add_error(
                        'Enum "%s" must define at least one value' % type_.name
                    )
            elif type_.kind is TypeKind.INPUT_OBJECT:
                self.validate_input_fields(type_)

        if self.errors:
            raise SchemaValidationError(
                "Invalid schema: %s" % "; ".join(self.errors), self.errors
            )

    def validate_root(self, kind: str, name: str) -> None:
        type_ = self.types.get(name)
        if type_ is None:
            self.add_error('%s root type "%s" does not exist' % (kind, name))
        elif type_.kind is not TypeKind.OBJECT:
            self.add_error(
                '%s root type "%s" must be an object type' % (kind, name)
            )

    def validate_arguments(self, path: str, arguments: Sequence[Any]) -> None:
        for arg in arguments:
            if not is_input_type_ref(arg.type, self.types):
                self.add_error(
                    'Argument "%s.%s" must be an input type but got "%s"'
                    % (path, arg.name, arg.type)
                )

    def validate_fields(self, type_: TypeDefinition) -> None:
        if not type_.fields:
            self.add_error(
                'Type "%s" must define at least one field' % type_.name
            )

        for field in type_.fields:
            path = "%s.%s" % (type_.name, field.name)
            if not is_output_type_ref(field.type, self.types):
                self.add_error(
                    'Field "%s" must be an output type but got "%s"'
                    % (path, field.type)
                )
            self.validate_arguments(path, field.arguments)

    def validate_interfaces(self, type_: TypeDefinition) -> None:
        for interface_name in type_.interfaces:
            interface = self.types.get(interface_name)
            if interface is None:
                self.add_error(
                    'Type "%s" implements unknown interface "%s"'
                    % (type_.name, interface_name)
                )
                continue
            if interface.kind is not TypeKind.INTERFACE:
                self.add_error(
                    'Type "%s" must only implement interfaces but "%s" is a '
                    "%s type"
                    % (type_.name, interface_name, interface.kind.name)
                )
                continue
            self.validate_implementation(type_, interface)

    def validate_implementation(
        self, type_: TypeDefinition, interface: TypeDefinition
    ) -> None:
        for field in interface.fields:
            interface_path = "%s.%s" % (interface.name, field.name)
            object_field = type_.field_map.get(field.name)

            if object_field is None:
                self.add_error(
                    'Interface field "%s" is not implemented by type "%s"'
                    % (interface_path, type_.name)
                )
                continue

            obj_path = "%s.%s" % (type_.name, field.name)
            if not is_subtype_ref(
                object_field.type, field.type, self.is_possible
            ):
                self.add_error(
                    'Interface field "%s" expects type "%s" but "%s" is type '
                    '"%s"'
                    % (interface_path, field.type, obj_path, object_field.type)
                )
                continue

            for arg in field.arguments:
                object_arg = object_field.argument_map.get(arg.name)
                if object_arg is None:
                    self.add_error(
                        'Interface field argument "%s.%s" is not provided by '
                        '"%s"' % (interface_path, arg.name, obj_path)
                    )
                elif object_arg.type != arg.type:
                    self.add_error(
                        'Interface field argument "%s.%s" expects type "%s" '
                        'but "%s.%s" is type "%s"'
                        % (
                            interface_path,
                            arg.name,
                            arg.type,
                            obj_path,
                            arg.name,
                            object_arg.type,
                        )
                    )

            for arg in object_field.arguments:
                if arg.name not in field.argument_map and isinstance(
                    arg.type, NonNullTypeRef
                ):
                    self.add_error(
                        'Object field argument "%s.%s" is of required type '
                        '"%s" but is not provided by interface field "%s"'
                        % (obj_path, arg.name, arg.type, interface_path)
                    )

    def validate_union_members(self, type_: TypeDefinition) -> None:
        if not type_.possible_types:
            self.add_error(
                'Union "%s" must define at least one member' % type_.name
            )

        for member in type_.possible_types:
            member_type = self.types.get(member)
            if member_type is None or member_type.kind is not TypeKind.OBJECT:
                self.add_error(
                    'Union "%s" expects object types but got "%s"'
                    % (type_.name, member)
                )

    def validate_input_fields(self, type_: TypeDefinition) -> None:
        if not type_.input_fields:
            self.add_error(
                'Input type "%s" must define at least one field' % type_.name
            )

        for field in type_.input_fields:
            if not is_input_type_ref(field.type, self.types):
                self.add_error(
                    'Input field "%s.%s" must be an input type but got "%s"'
                    % (type_.name, field.name, field.type)
                )
            elif unwrap_type(field.type) == type_.name and isinstance(
                field.type, NonNullTypeRef
            ):
                self.add_error(
                    'Input field "%s.%s" cannot reference its own type as a '
                    "non-null field" % (type_.name, field.name)
                )
