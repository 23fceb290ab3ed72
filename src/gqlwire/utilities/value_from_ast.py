# -*- coding: utf-8 -*-

from typing import Any, Dict, Mapping, Optional

from ..exc import InvalidValue, UnknownVariable
from ..lang import ast as _ast
from ..schema.scalars import scalar_codec
from ..schema.types import (
    BUILTIN_SCALARS,
    ListTypeRef,
    NonNullTypeRef,
    TypeDefinition,
    TypeKind,
    TypeRef,
    unwrap_type,
)

_SCALAR_LITERALS = (
    _ast.IntValue,
    _ast.FloatValue,
    _ast.StringValue,
    _ast.BooleanValue,
)


def value_from_ast(
    node: _ast.Value,
    type_: TypeRef,
    types: Mapping[str, TypeDefinition],
    variables: Optional[Mapping[str, Any]] = None,
) -> Any:
    """
    Convert a value literal into the Python value passed to resolvers while
    validating it against an input type.

    Warning:
        Variable values are expected to have been coerced already and are
        used as is.

    Args:
        node: The value node
        type_: Type to validate against
        types: Known types by name
        variables: Coerced variables

    Returns:
        Extracted value

    Raises:
        :class:`~gqlwire.exc.InvalidValue`: If the value cannot be converted
        :class:`~gqlwire.exc.UnknownVariable`: If a variable is required and
            doesn't exist
    """
    if isinstance(node, _ast.Variable):
        return _extract_variable(node, type_, variables)

    if isinstance(type_, NonNullTypeRef):
        if isinstance(node, _ast.NullValue):
            raise InvalidValue("Expected non null value.", [node])
        type_ = type_.of

    if isinstance(node, _ast.NullValue):
        return None

    if isinstance(type_, ListTypeRef):
        if not isinstance(node, _ast.ListValue):
            # Single values are accepted where a list is expected.
            return [value_from_ast(node, type_.of, types, variables)]
        return [
            value_from_ast(item, type_.of, types, variables)
            for item in node.values
        ]

    definition = types[unwrap_type(type_)]

    if definition.kind is TypeKind.INPUT_OBJECT:
        if not isinstance(node, _ast.ObjectValue):
            raise InvalidValue(
                "Expected Object but got %s" % node.__class__.__name__, [node]
            )
        return _extract_input_object(node, definition, types, variables)

    if definition.kind is TypeKind.ENUM:
        if not isinstance(node, _ast.EnumValue):
            raise InvalidValue("Expected EnumValue", [node])
        if node.value not in definition.enum_value_map:
            raise InvalidValue(
                "Invalid name %s for enum %s" % (node.value, definition.name),
                [node],
            )
        return node.value

    if definition.kind is TypeKind.SCALAR:
        codec = scalar_codec(definition.name)
        if codec.name in BUILTIN_SCALARS and not isinstance(
            node, _SCALAR_LITERALS
        ):
            raise InvalidValue(
                "Invalid literal %s for scalar type %s"
                % (node.__class__.__name__, definition.name),
                [node],
            )
        try:
            return codec.parse_literal(node, variables or {})
        except (ValueError, TypeError) as err:
            raise InvalidValue(str(err), [node]) from err

    raise TypeError("Invalid type for input coercion %s" % type_)


def _extract_input_object(
    node: _ast.ObjectValue,
    definition: TypeDefinition,
    types: Mapping[str, TypeDefinition],
    variables: Optional[Mapping[str, Any]],
) -> Dict[str, Any]:
    coerced = {}  # type: Dict[str, Any]
    node_fields = {f.name.value: f for f in node.fields}

    for name in node_fields:
        if name not in definition.input_field_map:
            raise InvalidValue(
                "Field %s is not defined by type %s" % (name, definition.name),
                [node],
            )

    for field in definition.input_fields:
        name = field.name
        if name in node_fields:
            value = node_fields[name].value
            if (
                isinstance(value, _ast.Variable)
                and variables is not None
                and value.name.value not in variables
                and field.default_value is not None
            ):
                coerced[name] = value_from_ast(
                    field.default_value, field.type, types
                )
                continue
            coerced[name] = value_from_ast(value, field.type, types, variables)
        elif field.default_value is not None:
            coerced[name] = value_from_ast(
                field.default_value, field.type, types
            )
        elif isinstance(field.type, NonNullTypeRef):
            raise InvalidValue("Missing field %s" % name, [node])

    return coerced


def _extract_variable(
    node: _ast.Variable,
    type_: TypeRef,
    variables: Optional[Mapping[str, Any]],
) -> Any:
    varname = node.name.value
    if not variables or varname not in variables:
        raise UnknownVariable(varname, [node])
    variable_value = variables[varname]
    if isinstance(type_, NonNullTypeRef) and variable_value is None:
        raise InvalidValue(
            'Variable "$%s" used for type "%s" must not be null.'
            % (varname, type_),
            [node],
        )
    return variable_value
