# -*- coding: utf-8 -*-
""" Utilities to validate Python values against input types. """

import json
from typing import (
    Any,
    Dict,
    List,
    Mapping,
    Optional,
    Sequence,
    Union,
    cast,
)

from .._string_utils import stringify_path
from ..exc import (
    CoercionError,
    InvalidValue,
    VariableCoercionError,
    VariablesCoercionError,
)
from ..lang import ast as _ast
from ..schema.printer import print_literal
from ..schema.scalars import scalar_codec
from ..schema.types import (
    ArgumentDefinition,
    ListTypeRef,
    NonNullTypeRef,
    TypeDefinition,
    TypeKind,
    TypeRef,
    type_ref_from_ast,
    unwrap_type,
)
from .value_from_ast import value_from_ast

Path = List[Union[int, str]]
TypeMap = Mapping[str, TypeDefinition]


def _at(path: Path) -> str:
    return " at %s" % stringify_path(["value"] + path) if path else ""


def coerce_value(
    value: Any,
    type_: TypeRef,
    types: TypeMap,
    node: Optional[_ast.Node] = None,
    path: Optional[Path] = None,
) -> Any:
    """ Coerce a Python value (usually decoded JSON) given an input type.

    Args:
        value: Value to coerce
        type_: Expected type
        types: Known types by name
        node: Relevant node
        path: Path into the value for nested values (lists, objects).
            Should only be set on recursive calls.

    Returns:
        The coerced value

    Raises:
        :class:`~gqlwire.exc.CoercionError`: if coercion fails
    """
    if path is None:
        path = []
    nodes = [node] if node is not None else None

    if isinstance(type_, NonNullTypeRef):
        if value is None:
            raise CoercionError(
                "Expected non-nullable type %s not to be null%s"
                % (type_, _at(path)),
                nodes,
            )
        type_ = type_.of

    if value is None:
        return None

    if isinstance(type_, ListTypeRef):
        if isinstance(value, (list, tuple)):
            return [
                coerce_value(entry, type_.of, types, node, path + [index])
                for index, entry in enumerate(value)
            ]
        return [coerce_value(value, type_.of, types, node, path + [0])]

    definition = types[unwrap_type(type_)]

    if definition.kind is TypeKind.SCALAR:
        try:
            return scalar_codec(definition.name).parse(value)
        except (ValueError, TypeError) as err:
            raise CoercionError("%s%s" % (err, _at(path)), nodes) from err

    if definition.kind is TypeKind.ENUM:
        if isinstance(value, str) and value in definition.enum_value_map:
            return value
        raise CoercionError(
            "Invalid value %s for enum %s%s"
            % (json.dumps(value, default=repr), definition.name, _at(path)),
            nodes,
        )

    if definition.kind is TypeKind.INPUT_OBJECT:
        return _coerce_input_object(value, definition, types, node, path)

    raise TypeError("Invalid type for input coercion %s" % type_)


def _coerce_input_object(
    value: Any,
    definition: TypeDefinition,
    types: TypeMap,
    node: Optional[_ast.Node],
    path: Path,
) -> Dict[str, Any]:
    nodes = [node] if node is not None else None

    if not isinstance(value, dict):
        raise CoercionError(
            "Expected type %s to be an object%s" % (definition.name, _at(path)),
            nodes,
        )

    for fieldname in value:
        if fieldname not in definition.input_field_map:
            raise CoercionError(
                "Field %s is not defined by type %s%s"
                % (fieldname, definition.name, _at(path)),
                nodes,
            )

    coerced = {}  # type: Dict[str, Any]
    for field in definition.input_fields:
        if field.name in value:
            coerced[field.name] = coerce_value(
                value[field.name], field.type, types, node, path + [field.name]
            )
        elif field.default_value is not None:
            coerced[field.name] = value_from_ast(
                field.default_value, field.type, types
            )
        elif isinstance(field.type, NonNullTypeRef):
            raise CoercionError(
                "Field %s of required type %s was not provided%s"
                % (field.name, field.type, _at(path)),
                nodes,
            )

    return coerced


def coerce_argument_values(
    arguments: Sequence[ArgumentDefinition],
    node: Union[_ast.Field, _ast.Directive],
    types: TypeMap,
    variables: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Prepare a dict of argument values given argument definitions and the
    field or directive node using them.

    Omitted arguments with a default value get their (coerced) default,
    omitted nullable arguments without default are left out of the result.

    Args:
        arguments: Argument definitions
        node: Parse node
        types: Known types by name
        variables: Coerced variable values

    Returns:
        Coerced arguments

    Raises:
        :class:`~gqlwire.exc.CoercionError`:
            if any argument value fails to coerce, required argument is
            missing, etc.
    """
    variables = {} if variables is None else variables
    coerced_values = {}  # type: Dict[str, Any]

    values = {a.name.value: a for a in node.arguments}
    for arg_def in arguments:
        argname = arg_def.name
        argtype = arg_def.type

        if argname not in values:
            if arg_def.has_default_value:
                coerced_values[argname] = _default(arg_def, types, node)
            elif isinstance(argtype, NonNullTypeRef):
                raise CoercionError(
                    'Argument "%s" of required type "%s" was not provided'
                    % (argname, argtype),
                    [node],
                )
            continue

        arg = values[argname]
        if isinstance(arg.value, _ast.Variable):
            varname = arg.value.name.value
            if varname in variables:
                if variables[varname] is None and isinstance(
                    argtype, NonNullTypeRef
                ):
                    raise CoercionError(
                        'Argument "%s" of required type "%s" was provided '
                        'null variable "$%s"' % (argname, argtype, varname),
                        [node],
                    )
                coerced_values[argname] = variables[varname]
            elif arg_def.has_default_value:
                coerced_values[argname] = _default(arg_def, types, node)
            elif isinstance(argtype, NonNullTypeRef):
                raise CoercionError(
                    'Argument "%s" of required type "%s" was provided the '
                    'missing variable "$%s"' % (argname, argtype, varname),
                    [node],
                )
        else:
            try:
                coerced_values[argname] = value_from_ast(
                    arg.value, argtype, types, variables
                )
            except InvalidValue as err:
                raise CoercionError(
                    'Argument "%s" of type "%s" was provided invalid value '
                    "%s (%s)"
                    % (argname, argtype, print_literal(arg.value), err),
                    [node],
                ) from err

    return coerced_values


def _default(
    arg_def: ArgumentDefinition, types: TypeMap, node: _ast.Node
) -> Any:
    default_value = cast(_ast.Value, arg_def.default_value)
    try:
        return value_from_ast(default_value, arg_def.type, types)
    except InvalidValue as err:
        raise CoercionError(
            'Argument "%s" has invalid default value %s (%s)'
            % (arg_def.name, print_literal(default_value), err),
            [node],
        ) from err


def coerce_variable_values(  # noqa: C901
    types: TypeMap,
    operation: _ast.OperationDefinition,
    variables: Mapping[str, Any],
) -> Dict[str, Any]:
    """
    Prepare a dict of variable values of the correct type based on the
    operation's variable definitions and arbitrary JSON input.

    Extra variables are ignored and filtered out.

    Args:
        types: Known types by name
        operation: Operation definition containing the variable definitions
        variables: Provided raw variables

    Returns:
        Coerced variables

    Raises:
        :class:`~gqlwire.exc.VariablesCoercionError`:
            if any variable cannot be coerced.
    """
    coerced = {}  # type: Dict[str, Any]
    errors = []  # type: List[VariableCoercionError]

    for var_def in operation.variable_definitions:
        name = var_def.variable.name.value
        var_type = type_ref_from_ast(var_def.type)
        definition = types.get(unwrap_type(var_type))

        if definition is None:
            errors.append(
                VariableCoercionError(
                    'Unknown type "%s" for variable "$%s"' % (var_type, name),
                    [var_def],
                )
            )
            continue

        if not definition.is_input:
            errors.append(
                VariableCoercionError(
                    'Variable "$%s" expected value of type "%s" which cannot '
                    "be used as an input type." % (name, var_type),
                    [var_def],
                )
            )
            continue

        if name not in variables:
            if var_def.default_value is not None:
                try:
                    coerced[name] = value_from_ast(
                        var_def.default_value, var_type, types
                    )
                except InvalidValue as err:
                    errors.append(
                        VariableCoercionError(
                            'Variable "$%s" got invalid default value %s (%s)'
                            % (name, print_literal(var_def.default_value), err),
                            [var_def],
                        )
                    )
            elif isinstance(var_type, NonNullTypeRef):
                errors.append(
                    VariableCoercionError(
                        'Variable "$%s" of required type "%s" was not '
                        "provided." % (name, var_type),
                        [var_def],
                    )
                )
            continue

        value = variables[name]
        if value is None and isinstance(var_type, NonNullTypeRef):
            errors.append(
                VariableCoercionError(
                    'Variable "$%s" of required type "%s" must not be null.'
                    % (name, var_type),
                    [var_def],
                )
            )
            continue

        try:
            coerced[name] = coerce_value(value, var_type, types)
        except CoercionError as err:
            errors.append(
                VariableCoercionError(
                    'Variable "$%s" got invalid value %s (%s)'
                    % (
                        name,
                        json.dumps(value, sort_keys=True, default=repr),
                        err,
                    ),
                    [var_def],
                )
            )

    if errors:
        raise VariablesCoercionError(errors)

    return coerced
