# -*- coding: utf-8 -*-
"""
Validation rules for executable documents.

These rules are **all** used by default when calling
:func:`~gqlwire.validation.validate_document` and accessible together as
:data:`~gqlwire.validation.SPECIFIED_RULES`.
"""

from typing import Dict, List, Optional, Set

from .._string_utils import quoted_list
from ..lang import ast as _ast
from ..lang.visitor import SkipNode
from ..schema.types import NonNullTypeRef, type_ref_from_ast, unwrap_type
from .visitors import ValidationVisitor, VariablesCollector

__all__ = (
    "ExecutableDefinitionsChecker",
    "UniqueOperationNameChecker",
    "LoneAnonymousOperationChecker",
    "KnownTypeNamesChecker",
    "FragmentsOnCompositeTypesChecker",
    "VariablesAreInputTypesChecker",
    "ScalarLeafsChecker",
    "FieldsOnCorrectTypeChecker",
    "UniqueFragmentNamesChecker",
    "KnownFragmentNamesChecker",
    "NoUnusedFragmentsChecker",
    "NoFragmentCyclesChecker",
    "UniqueVariableNamesChecker",
    "NoUndefinedVariablesChecker",
    "NoUnusedVariablesChecker",
    "KnownDirectivesChecker",
    "KnownArgumentNamesChecker",
    "UniqueArgumentNamesChecker",
    "ProvidedRequiredArgumentsChecker",
)

# Directives usable in executable documents and their boolean argument.
_EXECUTABLE_DIRECTIVES = ("skip", "include")


def _operation_name(node: _ast.OperationDefinition) -> str:
    return node.name.value if node.name else ""


class ExecutableDefinitionsChecker(ValidationVisitor):
    """
    A GraphQL document is only valid for execution if all definitions
    are either operation or fragment definitions.

    Unnecessary if the parser was run with ``allow_type_system=False``.
    """

    def enter_document(self, node: _ast.Document) -> None:
        skip_doc = False
        for definition in node.definitions:
            if not isinstance(definition, _ast.ExecutableDefinition):
                name = (
                    "schema"
                    if isinstance(definition, _ast.SchemaDefinition)
                    else definition.name.value  # type: ignore
                )
                self.add_error(
                    "The %s definition is not executable." % name, [definition]
                )
                skip_doc = True

        if skip_doc:
            raise SkipNode()


class UniqueOperationNameChecker(ValidationVisitor):
    """
    A GraphQL document is only valid if all defined operations have
    unique names.
    """

    def __init__(self, schema, type_info):
        super().__init__(schema, type_info)
        self._names = set()  # type: Set[str]

    def enter_operation_definition(
        self, node: _ast.OperationDefinition
    ) -> None:
        if node.name is None:
            return
        op_name = node.name.value
        if op_name in self._names:
            self.add_error('Duplicate operation "%s".' % op_name, [node])
        self._names.add(op_name)


class LoneAnonymousOperationChecker(ValidationVisitor):
    """
    A GraphQL document is only valid if when it contains an anonymous
    operation (the query short-hand) that it contains only that one
    operation definition.
    """

    def __init__(self, schema, type_info):
        super().__init__(schema, type_info)
        self._operation_count = 0

    def enter_document(self, node: _ast.Document) -> None:
        self._operation_count = len(
            [
                d
                for d in node.definitions
                if isinstance(d, _ast.OperationDefinition)
            ]
        )

    def enter_operation_definition(
        self, node: _ast.OperationDefinition
    ) -> None:
        if not node.name and self._operation_count > 1:
            self.add_error(
                "The anonymous operation must be the only defined operation.",
                [node],
            )


class KnownTypeNamesChecker(ValidationVisitor):
    """
    A GraphQL document is only valid if referenced types (specifically
    variable definitions and fragment conditions) are defined by the
    type schema.
    """

    def enter_named_type(self, node: _ast.NamedType) -> None:
        name = node.name.value
        if name not in self.schema.types:
            self.add_error('Unknown type "%s".' % name, [node])


class FragmentsOnCompositeTypesChecker(ValidationVisitor):
    """
    Fragments use a type condition to determine if they apply, since
    fragments can only be spread into a composite type (object, interface, or
    union), the type condition must also be a composite type.
    """

    def _check(self, node, message):
        if node.type_condition is None:
            return
        type_ = self.schema.types.get(node.type_condition.name.value)
        if type_ is not None and not type_.is_composite:
            self.add_error(message % type_.name, [node.type_condition])

    def enter_inline_fragment(self, node: _ast.InlineFragment) -> None:
        self._check(
            node, 'Fragment cannot condition on non composite type "%s".'
        )

    def enter_fragment_definition(self, node: _ast.FragmentDefinition) -> None:
        self._check(
            node,
            'Fragment "%s" cannot condition on non composite type "%%s".'
            % node.name.value,
        )


class VariablesAreInputTypesChecker(ValidationVisitor):
    """
    A GraphQL operation is only valid if all the variables it defines are of
    input types (scalar, enum, or input object).
    """

    def enter_variable_definition(self, node: _ast.VariableDefinition) -> None:
        type_ref = type_ref_from_ast(node.type)
        type_ = self.schema.types.get(unwrap_type(type_ref))
        if type_ is not None and not type_.is_input:
            self.add_error(
                'Variable "$%s" must be input type but got "%s".'
                % (node.variable.name.value, type_ref),
                [node],
            )


class ScalarLeafsChecker(ValidationVisitor):
    """
    A GraphQL document is valid only if all leaf fields (fields without
    sub selections) are of scalar or enum types.
    """

    def enter_field(self, node: _ast.Field) -> None:
        type_ref = self.type_info.type
        if type_ref is None:
            return

        type_ = self.schema.types.get(unwrap_type(type_ref))
        if type_ is None:
            return

        if type_.is_leaf and node.selection_set:
            self.add_error(
                'Field "%s" must not have a selection since type "%s" has no '
                "subfields." % (node.name.value, type_ref),
                [node],
            )
        elif type_.is_composite and not node.selection_set:
            self.add_error(
                'Field "%s" of type "%s" must have a selection of subfields. '
                'Did you mean "%s { ... }"?'
                % (node.name.value, type_ref, node.name.value),
                [node],
            )


class FieldsOnCorrectTypeChecker(ValidationVisitor):
    """
    A GraphQL document is only valid if all fields selected are defined by
    the parent type, or are an allowed meta field such as __typename.

    Selections on interfaces and unions may also target fields of any of the
    abstract type's possible types.
    """

    def enter_field(self, node: _ast.Field) -> None:
        parent_type = self.type_info.parent_type
        if parent_type is None or self.type_info.field is not None:
            return

        self.add_error(
            'Cannot query field "%s" on type "%s".'
            % (node.name.value, parent_type.name),
            [node],
        )


class UniqueFragmentNamesChecker(ValidationVisitor):
    """
    A GraphQL document is only valid if all defined fragments have unique
    names.
    """

    def __init__(self, schema, type_info):
        super().__init__(schema, type_info)
        self._names = set()  # type: Set[str]

    def enter_fragment_definition(self, node: _ast.FragmentDefinition) -> None:
        name = node.name.value
        if name in self._names:
            self.add_error(
                'There can only be one fragment named "%s".' % name, [node]
            )
        self._names.add(name)


class KnownFragmentNamesChecker(ValidationVisitor):
    """
    A GraphQL document is only valid if all ``...Fragment`` fragment spreads
    refer to fragments defined in the same document.
    """

    def __init__(self, schema, type_info):
        super().__init__(schema, type_info)
        self._fragment_names = set()  # type: Set[str]

    def enter_document(self, node: _ast.Document) -> None:
        self._fragment_names = set(node.fragments)

    def enter_fragment_spread(self, node: _ast.FragmentSpread) -> None:
        name = node.name.value
        if name not in self._fragment_names:
            self.add_error('Unknown fragment "%s".' % name, [node])


class NoUnusedFragmentsChecker(ValidationVisitor):
    """
    A GraphQL document is only valid if all fragment definitions are spread
    within operations, or spread within other fragments spread within
    operations.
    """

    def __init__(self, schema, type_info):
        super().__init__(schema, type_info)
        self._fragments = []  # type: List[_ast.FragmentDefinition]
        self._spreads = {}  # type: Dict[str, List[str]]
        self._operation_spreads = []  # type: List[str]
        self._current = None  # type: Optional[str]

    def enter_operation_definition(self, _: _ast.OperationDefinition) -> None:
        self._current = None

    def enter_fragment_definition(self, node: _ast.FragmentDefinition) -> None:
        self._fragments.append(node)
        self._current = node.name.value
        self._spreads.setdefault(self._current, [])

    def enter_fragment_spread(self, node: _ast.FragmentSpread) -> None:
        if self._current is None:
            self._operation_spreads.append(node.name.value)
        else:
            self._spreads[self._current].append(node.name.value)

    def leave_document(self, _: _ast.Document) -> None:
        used = set()  # type: Set[str]
        stack = list(self._operation_spreads)
        while stack:
            name = stack.pop()
            if name in used:
                continue
            used.add(name)
            stack.extend(self._spreads.get(name, []))

        unused = [
            f.name.value for f in self._fragments if f.name.value not in used
        ]
        if unused:
            self.add_error(
                "Unused fragment(s) %s" % quoted_list(unused),
                [f for f in self._fragments if f.name.value in unused],
            )


class NoFragmentCyclesChecker(ValidationVisitor):
    """
    A GraphQL Document is only valid if fragment definitions do not form
    cycles through their spreads.
    """

    def __init__(self, schema, type_info):
        super().__init__(schema, type_info)
        self._spreads = {}  # type: Dict[str, List[_ast.FragmentSpread]]
        self._definitions = []  # type: List[_ast.FragmentDefinition]
        self._current = None  # type: Optional[str]

    def enter_operation_definition(self, _: _ast.OperationDefinition) -> None:
        self._current = None

    def enter_fragment_definition(self, node: _ast.FragmentDefinition) -> None:
        self._current = node.name.value
        self._definitions.append(node)
        self._spreads.setdefault(self._current, [])

    def enter_fragment_spread(self, node: _ast.FragmentSpread) -> None:
        if self._current is not None:
            self._spreads[self._current].append(node)

    def leave_document(self, _: _ast.Document) -> None:
        visited = set()  # type: Set[str]
        spread_path = []  # type: List[_ast.FragmentSpread]
        path_index = {}  # type: Dict[str, int]

        def _detect(name: str) -> None:
            if name in visited:
                return
            visited.add(name)
            path_index[name] = len(spread_path)

            for spread in self._spreads.get(name, []):
                target = spread.name.value
                cycle_index = path_index.get(target)
                spread_path.append(spread)
                if cycle_index is None:
                    if target in self._spreads:
                        _detect(target)
                else:
                    cycle = spread_path[cycle_index:]
                    via = [s.name.value for s in cycle[:-1]]
                    self.add_error(
                        'Cannot spread fragment "%s" within itself%s.'
                        % (target, (" via %s" % ", ".join(via)) if via else ""),
                        cycle,
                    )
                spread_path.pop()

            del path_index[name]

        for definition in self._definitions:
            _detect(definition.name.value)


class UniqueVariableNamesChecker(ValidationVisitor):
    """
    A GraphQL operation is only valid if all its variables are uniquely
    named.
    """

    def __init__(self, schema, type_info):
        super().__init__(schema, type_info)
        self._names = set()  # type: Set[str]

    def enter_operation_definition(self, _: _ast.OperationDefinition) -> None:
        self._names = set()

    def enter_variable_definition(self, node: _ast.VariableDefinition) -> None:
        name = node.variable.name.value
        if name in self._names:
            self.add_error('Duplicate variable "$%s"' % name, [node])
        self._names.add(name)


class NoUndefinedVariablesChecker(VariablesCollector):
    """
    A GraphQL operation is only valid if all variables encountered, both
    directly and via fragment spreads, are defined by that operation.
    """

    def leave_operation_variables(self, operation, defined, used):
        defined_names = set(d.variable.name.value for d in defined)
        reported = set()  # type: Set[str]
        for variable in used:
            name = variable.name.value
            if name in defined_names or name in reported:
                continue
            reported.add(name)
            op_name = _operation_name(operation)
            if op_name:
                msg = 'Variable "$%s" is not defined by operation "%s".' % (
                    name,
                    op_name,
                )
            else:
                msg = 'Variable "$%s" is not defined.' % name
            self.add_error(msg, [variable, operation])


class NoUnusedVariablesChecker(VariablesCollector):
    """
    A GraphQL operation is only valid if all variables defined by an
    operation are used, either directly or within a spread fragment.
    """

    def leave_operation_variables(self, operation, defined, used):
        used_names = set(v.name.value for v in used)
        unused = [
            d for d in defined if d.variable.name.value not in used_names
        ]
        if not unused:
            return

        op_name = _operation_name(operation)
        names = quoted_list(["$%s" % d.variable.name.value for d in unused])
        if op_name:
            msg = 'Unused variable(s) %s for operation "%s"' % (names, op_name)
        else:
            msg = "Unused variable(s) %s for anonymous operation" % names
        self.add_error(msg, unused)


class KnownDirectivesChecker(ValidationVisitor):
    """
    A GraphQL document is only valid if all directives are known and used on
    fields or fragments, where ``@skip`` and ``@include`` apply.
    """

    def enter_directive(self, node: _ast.Directive) -> None:
        name = node.name.value
        if name not in _EXECUTABLE_DIRECTIVES:
            self.add_error('Unknown directive "%s".' % name, [node])
            return

        names = [arg.name.value for arg in node.arguments]
        for arg_name in names:
            if arg_name != "if":
                self.add_error(
                    'Unknown argument "%s" on directive "@%s".'
                    % (arg_name, name),
                    [node],
                )
        if "if" not in names:
            self.add_error(
                'Directive "@%s" argument "if" of type "Boolean!" is required '
                "but not provided." % name,
                [node],
            )


class KnownArgumentNamesChecker(ValidationVisitor):
    """
    A GraphQL field is only valid if all supplied arguments are defined by
    that field.
    """

    def enter_field(self, node: _ast.Field) -> None:
        field_def = self.type_info.field
        parent_type = self.type_info.parent_type
        if field_def is None or parent_type is None:
            return

        for arg in node.arguments:
            name = arg.name.value
            if name not in field_def.argument_map:
                self.add_error(
                    'Unknown argument "%s" on field "%s" of type "%s".'
                    % (name, field_def.name, parent_type.name),
                    [arg],
                )


class UniqueArgumentNamesChecker(ValidationVisitor):
    """
    A GraphQL field or directive is only valid if all supplied arguments are
    uniquely named.
    """

    def _check(self, node):
        seen = set()  # type: Set[str]
        for arg in node.arguments:
            name = arg.name.value
            if name in seen:
                self.add_error('Duplicate argument "%s".' % name, [arg])
            seen.add(name)

    def enter_field(self, node: _ast.Field) -> None:
        self._check(node)

    def enter_directive(self, node: _ast.Directive) -> None:
        self._check(node)


class ProvidedRequiredArgumentsChecker(ValidationVisitor):
    """
    A field is only valid if all required (non-null without a default value)
    field arguments have been provided.
    """

    def enter_field(self, node: _ast.Field) -> None:
        field_def = self.type_info.field
        if field_def is None:
            return

        provided = set(arg.name.value for arg in node.arguments)
        for arg_def in field_def.arguments:
            if (
                isinstance(arg_def.type, NonNullTypeRef)
                and not arg_def.has_default_value
                and arg_def.name not in provided
            ):
                self.add_error(
                    'Field "%s" argument "%s" of type %s is required but '
                    "not provided."
                    % (field_def.name, arg_def.name, arg_def.type),
                    [node],
                )
