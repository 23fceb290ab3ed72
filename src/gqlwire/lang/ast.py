# -*- coding: utf-8 -*-
"""
Parse tree nodes for GraphQL documents: executable documents (queries) as
well as the type definition language used to declare schemas.

Every node declares its child attributes in ``_fields``; the ones listed in
``_list_fields`` default to an empty list. All nodes also carry the
``source`` they were parsed from and their ``loc`` as a ``(start, end)``
tuple of 0-indexed positions when available.
"""

from typing import Any, Dict, Iterator, Optional, Tuple


class Node:
    """
    Base parse tree node.
    """

    __slots__ = ("source", "loc")

    _fields = ()  # type: Tuple[str, ...]
    _list_fields = frozenset()  # type: frozenset

    def __init__(self, *args: Any, **kwargs: Any):
        self.source = kwargs.pop("source", None)  # type: Optional[str]
        self.loc = kwargs.pop("loc", None)  # type: Optional[Tuple[int, int]]

        if len(args) > len(self._fields):
            raise TypeError(
                "%s expects at most %d positional arguments"
                % (self.__class__.__name__, len(self._fields))
            )

        values = dict(zip(self._fields, args))
        for key, value in kwargs.items():
            if key not in self._fields:
                raise TypeError(
                    "%s got an unexpected argument %r"
                    % (self.__class__.__name__, key)
                )
            values[key] = value

        for attr in self._fields:
            value = values.get(attr)
            if value is None and attr in self._list_fields:
                value = []
            setattr(self, attr, value)

    def children(self) -> Iterator[Tuple[str, Any]]:
        for attr in self._fields:
            yield attr, getattr(self, attr)

    def __eq__(self, rhs: Any) -> bool:
        return (
            type(rhs) is type(self)
            and self.loc == rhs.loc
            and all(
                value == getattr(rhs, attr) for attr, value in self.children()
            )
        )

    def __hash__(self) -> int:
        return id(self)

    def __repr__(self) -> str:
        return "<%s %s>" % (
            self.__class__.__name__,
            ", ".join("%s=%r" % entry for entry in self.children()),
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the node and its children to JSON serializable dicts, adding
        a ``__kind__`` key holding the class name. Mostly useful in tests and
        when debugging the parser.
        """
        return _to_json(self)


def _to_json(value: Any) -> Any:
    if isinstance(value, Node):
        converted = {"__kind__": value.__class__.__name__, "loc": value.loc}
        for attr, child in value.children():
            converted[attr] = _to_json(child)
        return converted
    elif isinstance(value, list):
        return [_to_json(entry) for entry in value]
    return value


class Definition(Node):
    __slots__ = ()


class ExecutableDefinition(Definition):
    __slots__ = ()


class TypeSystemDefinition(Definition):
    __slots__ = ()


class TypeDefinition(TypeSystemDefinition):
    __slots__ = ()


class Selection(Node):
    __slots__ = ()


class Value(Node):
    __slots__ = ()


class Type(Node):
    __slots__ = ()


class Name(Node):
    __slots__ = _fields = ("value",)


class NamedType(Type):
    __slots__ = _fields = ("name",)


class ListType(Type):
    __slots__ = _fields = ("type",)


class NonNullType(Type):
    __slots__ = _fields = ("type",)


class Document(Node):
    __slots__ = _fields = ("definitions",)
    _list_fields = frozenset(_fields)

    @property
    def fragments(self) -> Dict[str, "FragmentDefinition"]:
        return {
            definition.name.value: definition
            for definition in self.definitions
            if isinstance(definition, FragmentDefinition)
        }

    @property
    def operations(self) -> Dict[Optional[str], "OperationDefinition"]:
        return {
            (definition.name.value if definition.name else None): definition
            for definition in self.definitions
            if isinstance(definition, OperationDefinition)
        }


class OperationDefinition(ExecutableDefinition):
    __slots__ = _fields = (
        "operation",
        "name",
        "variable_definitions",
        "directives",
        "selection_set",
    )
    _list_fields = frozenset(("variable_definitions", "directives"))


class Variable(Value):
    __slots__ = _fields = ("name",)


class VariableDefinition(Node):
    __slots__ = _fields = ("variable", "type", "default_value", "directives")
    _list_fields = frozenset(("directives",))


class SelectionSet(Node):
    __slots__ = _fields = ("selections",)
    _list_fields = frozenset(_fields)


class Field(Selection):
    __slots__ = _fields = (
        "alias",
        "name",
        "arguments",
        "directives",
        "selection_set",
    )
    _list_fields = frozenset(("arguments", "directives"))

    @property
    def response_name(self) -> str:
        """ Key under which this field appears in the response. """
        return self.alias.value if self.alias else self.name.value


class Argument(Node):
    __slots__ = _fields = ("name", "value")


class FragmentSpread(Selection):
    __slots__ = _fields = ("name", "directives")
    _list_fields = frozenset(("directives",))


class InlineFragment(Selection):
    __slots__ = _fields = ("type_condition", "directives", "selection_set")
    _list_fields = frozenset(("directives",))


class FragmentDefinition(ExecutableDefinition):
    __slots__ = _fields = (
        "name",
        "type_condition",
        "directives",
        "selection_set",
    )
    _list_fields = frozenset(("directives",))


class Directive(Node):
    __slots__ = _fields = ("name", "arguments")
    _list_fields = frozenset(("arguments",))


class IntValue(Value):
    __slots__ = _fields = ("value",)


class FloatValue(Value):
    __slots__ = _fields = ("value",)


class StringValue(Value):
    __slots__ = _fields = ("value", "block")

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.block = bool(self.block)


class BooleanValue(Value):
    __slots__ = _fields = ("value",)


class NullValue(Value):
    __slots__ = ()


class EnumValue(Value):
    __slots__ = _fields = ("value",)


class ListValue(Value):
    __slots__ = _fields = ("values",)
    _list_fields = frozenset(_fields)


class ObjectValue(Value):
    __slots__ = _fields = ("fields",)
    _list_fields = frozenset(_fields)


class ObjectField(Node):
    __slots__ = _fields = ("name", "value")


class SchemaDefinition(TypeSystemDefinition):
    __slots__ = _fields = ("directives", "operation_types")
    _list_fields = frozenset(_fields)


class OperationTypeDefinition(Node):
    __slots__ = _fields = ("operation", "type")


class ScalarTypeDefinition(TypeDefinition):
    __slots__ = _fields = ("name", "directives", "description")
    _list_fields = frozenset(("directives",))


class ObjectTypeDefinition(TypeDefinition):
    __slots__ = _fields = (
        "name",
        "interfaces",
        "directives",
        "fields",
        "description",
    )
    _list_fields = frozenset(("interfaces", "directives", "fields"))


class FieldDefinition(Node):
    __slots__ = _fields = (
        "name",
        "arguments",
        "type",
        "directives",
        "description",
    )
    _list_fields = frozenset(("arguments", "directives"))


class InputValueDefinition(Node):
    __slots__ = _fields = (
        "name",
        "type",
        "default_value",
        "directives",
        "description",
    )
    _list_fields = frozenset(("directives",))


class InterfaceTypeDefinition(TypeDefinition):
    __slots__ = _fields = ("name", "directives", "fields", "description")
    _list_fields = frozenset(("directives", "fields"))


class UnionTypeDefinition(TypeDefinition):
    __slots__ = _fields = ("name", "directives", "types", "description")
    _list_fields = frozenset(("directives", "types"))


class EnumTypeDefinition(TypeDefinition):
    __slots__ = _fields = ("name", "directives", "values", "description")
    _list_fields = frozenset(("directives", "values"))


class EnumValueDefinition(Node):
    __slots__ = _fields = ("name", "directives", "description")
    _list_fields = frozenset(("directives",))


class InputObjectTypeDefinition(TypeDefinition):
    __slots__ = _fields = ("name", "directives", "fields", "description")
    _list_fields = frozenset(("directives", "fields"))
