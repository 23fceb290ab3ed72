# -*- coding: utf-8 -*-
""" Export schemas and type graphs as SDL. """

import json
from typing import List, Optional, Sequence, Union

from .._string_utils import wrapped_lines
from ..lang import ast as _ast
from .executable import ExecutableSchema
from .registry import DEFAULT_DEPRECATION_REASON, TypeGraph
from .types import (
    BUILTIN_SCALARS,
    ArgumentDefinition,
    TypeDefinition,
    TypeKind,
)


def print_literal(node: _ast.Value) -> str:
    """ Render a value literal (as used for default values) back to text. """
    if isinstance(node, _ast.Variable):
        return "$%s" % node.name.value
    elif isinstance(node, _ast.NullValue):
        return "null"
    elif isinstance(node, _ast.BooleanValue):
        return "true" if node.value else "false"
    elif isinstance(node, (_ast.IntValue, _ast.FloatValue, _ast.EnumValue)):
        return node.value
    elif isinstance(node, _ast.StringValue):
        return json.dumps(node.value)
    elif isinstance(node, _ast.ListValue):
        return "[%s]" % ", ".join(print_literal(v) for v in node.values)
    elif isinstance(node, _ast.ObjectValue):
        return "{%s}" % ", ".join(
            "%s: %s" % (f.name.value, print_literal(f.value))
            for f in node.fields
        )
    raise TypeError("Invalid literal %r" % node)


class SchemaPrinter:
    """
    Args:
        indent (Union[str, int]): Indent string or number of spaces
        include_descriptions (bool): Include descriptions as block strings
    """

    __slots__ = ("indent", "include_descriptions")

    def __init__(
        self, indent: Union[str, int] = 4, include_descriptions: bool = True
    ):
        self.indent = " " * indent if isinstance(indent, int) else indent
        self.include_descriptions = include_descriptions

    def __call__(self, schema: Union[ExecutableSchema, TypeGraph]) -> str:
        if isinstance(schema, ExecutableSchema):
            types = [
                t
                for t in schema.types.values()
                if t.name not in BUILTIN_SCALARS
            ]
            query_name = schema.query_type.name  # type: Optional[str]
            mutation_name = (
                schema.mutation_type.name if schema.mutation_type else None
            )
        else:
            types = list(schema.definitions)
            query_name, mutation_name = schema.query_type, schema.mutation_type

        parts = [self.print_schema_definition(query_name, mutation_name)]
        parts.extend(self.print_type(t) for t in types)
        return "\n\n".join(p for p in parts if p) + "\n"

    def print_schema_definition(
        self, query_name: Optional[str], mutation_name: Optional[str]
    ) -> str:
        if query_name in (None, "Query") and mutation_name in (
            None,
            "Mutation",
        ):
            return ""

        lines = ["schema {"]
        if query_name:
            lines.append("%squery: %s" % (self.indent, query_name))
        if mutation_name:
            lines.append("%smutation: %s" % (self.indent, mutation_name))
        lines.append("}")
        return "\n".join(lines)

    def print_description(
        self, description: Optional[str], depth: int = 0
    ) -> str:
        if not self.include_descriptions or not description:
            return ""

        indent = self.indent * depth
        lines = wrapped_lines(description.split("\n"), 120 - len(indent))
        escaped = [line.replace('"""', '\\"""') for line in lines]

        if len(escaped) == 1 and len(escaped[0]) < 70:
            return '%s"""%s"""\n' % (indent, escaped[0])

        return '%s"""\n%s\n%s"""\n' % (
            indent,
            "\n".join(("%s%s" % (indent, line)).rstrip() for line in escaped),
            indent,
        )

    def print_deprecated(self, reason: Optional[str]) -> str:
        if reason is None:
            return ""
        if reason == DEFAULT_DEPRECATION_REASON:
            return " @deprecated"
        return " @deprecated(reason: %s)" % json.dumps(reason)

    def print_type(self, type_: TypeDefinition) -> str:
        header = self.print_description(type_.description)

        if type_.kind is TypeKind.SCALAR:
            return "%sscalar %s" % (header, type_.name)

        elif type_.kind is TypeKind.OBJECT:
            implements = (
                " implements %s" % " & ".join(type_.interfaces)
                if type_.interfaces
                else ""
            )
            return "%stype %s%s {\n%s\n}" % (
                header,
                type_.name,
                implements,
                self.print_fields(type_),
            )

        elif type_.kind is TypeKind.INTERFACE:
            return "%sinterface %s {\n%s\n}" % (
                header,
                type_.name,
                self.print_fields(type_),
            )

        elif type_.kind is TypeKind.UNION:
            return "%sunion %s = %s" % (
                header,
                type_.name,
                " | ".join(type_.possible_types),
            )

        elif type_.kind is TypeKind.ENUM:
            return "%senum %s {\n%s\n}" % (
                header,
                type_.name,
                "\n".join(
                    "%s%s%s%s"
                    % (
                        self.print_description(value.description, 1),
                        self.indent,
                        value.name,
                        self.print_deprecated(value.deprecation_reason),
                    )
                    for value in type_.enum_values
                ),
            )

        elif type_.kind is TypeKind.INPUT_OBJECT:
            return "%sinput %s {\n%s\n}" % (
                header,
                type_.name,
                "\n".join(
                    "%s%s%s"
                    % (
                        self.print_description(field.description, 1),
                        self.indent,
                        self.print_input_value(field),
                    )
                    for field in type_.input_fields
                ),
            )

        raise TypeError(type_)

    def print_fields(self, type_: TypeDefinition) -> str:
        return "\n".join(
            "%s%s%s%s: %s%s"
            % (
                self.print_description(field.description, 1),
                self.indent,
                field.name,
                self.print_arguments(field.arguments, 1),
                field.type,
                self.print_deprecated(field.deprecation_reason),
            )
            for field in type_.fields
        )

    def print_arguments(
        self, args: Sequence[ArgumentDefinition], depth: int = 0
    ) -> str:
        if not args:
            return ""

        if not (self.include_descriptions and any(a.description for a in args)):
            return "(%s)" % ", ".join(self.print_input_value(a) for a in args)

        indent = self.indent * depth
        lines = []  # type: List[str]
        for arg in args:
            lines.append(
                "%s%s%s"
                % (
                    self.print_description(arg.description, depth + 1),
                    indent + self.indent,
                    self.print_input_value(arg),
                )
            )
        return "(\n%s\n%s)" % ("\n".join(lines), indent)

    def print_input_value(self, arg: ArgumentDefinition) -> str:
        if arg.default_value is None:
            return "%s: %s" % (arg.name, arg.type)
        return "%s: %s = %s" % (
            arg.name,
            arg.type,
            print_literal(arg.default_value),
        )


def print_schema(
    schema: Union[ExecutableSchema, TypeGraph],
    indent: Union[str, int] = 4,
    include_descriptions: bool = True,
) -> str:
    """
    Render an executable schema or a type graph as SDL text.

    Args:
        schema: Schema to print
        indent: Indent string or number of spaces
        include_descriptions: Include descriptions as block strings
    """
    return SchemaPrinter(
        indent=indent, include_descriptions=include_descriptions
    )(schema)
