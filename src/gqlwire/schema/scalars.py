# -*- coding: utf-8 -*-
""" Serialization and parsing rules for scalar types. """

from typing import Any, Callable, Dict, Mapping, Optional, Type

from ..lang import ast as _ast

# Int is a signed 32-bit integer.
MAX_INT = 2147483647
MIN_INT = -2147483648


class ScalarCodec:
    """
    Encode and decode the values of a scalar type.

    Args:
        name: Scalar type name
        serialize: Convert a resolved value to its JSON compatible
            representation.
        parse: Convert a variable value to the Python value passed to
            resolvers.
        parse_literal: Convert a query literal to the Python value passed to
            resolvers. Defaults to extracting the literal's raw value and
            applying ``parse``.

    All callables should raise :py:class:`ValueError` or
    :py:class:`TypeError` for invalid input.
    """

    __slots__ = ("name", "serialize", "parse", "parse_literal")

    def __init__(
        self,
        name: str,
        serialize: Callable[[Any], Any],
        parse: Callable[[Any], Any],
        parse_literal: Optional[
            Callable[[_ast.Value, Mapping[str, Any]], Any]
        ] = None,
    ):
        self.name = name
        self.serialize = serialize
        self.parse = parse
        self.parse_literal = parse_literal or self._default_parse_literal

    def _default_parse_literal(
        self, node: _ast.Value, variables: Mapping[str, Any]
    ) -> Any:
        return self.parse(literal_value(node, variables))

    def __repr__(self) -> str:
        return "<ScalarCodec %s>" % self.name


def literal_value(node: _ast.Value, variables: Mapping[str, Any]) -> Any:
    """
    Convert a literal to a Python value without any type information. Used
    for custom scalars, which accept any well formed literal.
    """
    if isinstance(node, _ast.Variable):
        return variables.get(node.name.value)
    elif isinstance(node, _ast.NullValue):
        return None
    elif isinstance(node, _ast.IntValue):
        return int(node.value)
    elif isinstance(node, _ast.FloatValue):
        return float(node.value)
    elif isinstance(node, (_ast.StringValue, _ast.BooleanValue)):
        return node.value
    elif isinstance(node, _ast.EnumValue):
        return node.value
    elif isinstance(node, _ast.ListValue):
        return [literal_value(value, variables) for value in node.values]
    elif isinstance(node, _ast.ObjectValue):
        return {
            field.name.value: literal_value(field.value, variables)
            for field in node.fields
        }
    raise TypeError("Invalid literal %s" % node.__class__.__name__)


def _typed_literal(
    parse: Callable[[Any], Any], *kinds: Type[_ast.Value]
) -> Callable[[_ast.Value, Mapping[str, Any]], Any]:
    def _parse_literal(node: _ast.Value, _variables: Mapping[str, Any]) -> Any:
        if not isinstance(node, kinds):
            raise TypeError("Invalid literal %s" % node.__class__.__name__)
        return parse(node.value)  # type: ignore

    return _parse_literal


def coerce_int(value: Any) -> int:
    """ Convert a value to a 32-bit integer without losing precision. """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        numeric = value
    elif isinstance(value, float):
        if not value.is_integer():
            raise ValueError(
                "Int cannot represent non integer value: %s" % value
            )
        numeric = int(value)
    elif isinstance(value, str) and value:
        try:
            numeric = int(value, 10)
        except ValueError:
            raise ValueError(
                "Int cannot represent non integer value: %s" % value
            )
    else:
        raise ValueError("Int cannot represent non integer value: %r" % value)

    if not MIN_INT <= numeric <= MAX_INT:
        raise ValueError(
            "Int cannot represent non 32-bit signed integer: %s" % value
        )
    return numeric


def _parse_int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError("Int cannot represent non integer value: %r" % value)
    return coerce_int(value)


def coerce_float(value: Any) -> float:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str) and value:
        try:
            return float(value)
        except ValueError:
            pass
    raise ValueError("Float cannot represent non numeric value: %r" % value)


def _parse_float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError("Float cannot represent non numeric value: %r" % value)
    return float(value)


def _serialize_string(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ValueError("String cannot represent value: %r" % value)


def _parse_string(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(
            "String cannot represent a non string value: %r" % value
        )
    return value


def _serialize_boolean(value: Any) -> bool:
    if isinstance(value, (bool, int, float)):
        return bool(value)
    raise ValueError(
        "Boolean cannot represent a non boolean value: %r" % value
    )


def _parse_boolean(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(
            "Boolean cannot represent a non boolean value: %r" % value
        )
    return value


def _serialize_id(value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ValueError("ID cannot represent value: %r" % value)
    return str(value)


def _parse_id(value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise TypeError("ID cannot represent value: %r" % value)
    return str(value)


String = ScalarCodec(
    "String",
    _serialize_string,
    _parse_string,
    _typed_literal(str, _ast.StringValue),
)

Int = ScalarCodec(
    "Int", coerce_int, _parse_int, _typed_literal(coerce_int, _ast.IntValue)
)

Float = ScalarCodec(
    "Float",
    coerce_float,
    _parse_float,
    _typed_literal(float, _ast.FloatValue, _ast.IntValue),
)

Boolean = ScalarCodec(
    "Boolean",
    _serialize_boolean,
    _parse_boolean,
    _typed_literal(bool, _ast.BooleanValue),
)

ID = ScalarCodec(
    "ID",
    _serialize_id,
    _parse_id,
    _typed_literal(str, _ast.StringValue, _ast.IntValue),
)

SPECIFIED_SCALARS = {
    codec.name: codec for codec in (String, Int, Float, Boolean, ID)
}  # type: Dict[str, ScalarCodec]


def _identity(value: Any) -> Any:
    return value


def scalar_codec(name: str) -> ScalarCodec:
    """
    Codec for a scalar type. Custom scalars are passed through unchanged in
    both directions.
    """
    try:
        return SPECIFIED_SCALARS[name]
    except KeyError:
        return ScalarCodec(name, _identity, _identity, literal_value)
