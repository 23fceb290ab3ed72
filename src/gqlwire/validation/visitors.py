# -*- coding: utf-8 -*-

from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Set

from ..exc import ValidationError
from ..lang import ast as _ast
from ..lang.visitor import DispatchingVisitor
from ..utilities.type_info import TypeInfoVisitor

if TYPE_CHECKING:
    from ..schema.executable import ExecutableSchema  # noqa: F401


class ValidationVisitor(DispatchingVisitor):
    """ Visitor class used for validating GraphQL documents.

    Subclass this to implement custom validators. Use :meth:`add_error` to
    register errors.

    Args:
        schema: Schema to validate against.
        type_info: Type information collector provided by
            :func:`~gqlwire.validation.validate_document`.

    Attributes:
        schema (gqlwire.schema.ExecutableSchema): Schema to validate against.
        type_info (TypeInfoVisitor): Type information collector.
        errors (List[ValidationError]): Collected errors.
    """

    def __init__(
        self, schema: "ExecutableSchema", type_info: TypeInfoVisitor
    ):
        super().__init__()
        self.schema = schema
        self.type_info = type_info
        self.errors = []  # type: List[ValidationError]

    def add_error(
        self, message: str, nodes: Optional[Sequence[_ast.Node]] = None
    ) -> None:
        """ Register an error

        Args:
            message: Error description
            nodes: Nodes where the error comes from
        """
        self.errors.append(ValidationError(message, nodes))


class VariablesCollector(ValidationVisitor):
    """
    Validation visitor tracking the variables defined by every operation and
    the variables used by every operation once fragment spreads have been
    followed. Results are available when leaving the document, in
    :meth:`leave_operation_variables`.
    """

    def __init__(
        self, schema: "ExecutableSchema", type_info: TypeInfoVisitor
    ):
        super().__init__(schema, type_info)
        self._current = None  # type: Optional[_ast.Node]
        self._in_var_def = False
        self._defined = (
            {}
        )  # type: Dict[_ast.OperationDefinition, List[_ast.VariableDefinition]]
        self._used = {}  # type: Dict[_ast.Node, List[_ast.Variable]]
        self._spreads = {}  # type: Dict[_ast.Node, List[str]]
        self._fragments = {}  # type: Dict[str, _ast.FragmentDefinition]

    def _enter_definition(self, node: _ast.Node) -> None:
        self._current = node
        self._used[node] = []
        self._spreads[node] = []

    def enter_operation_definition(
        self, node: _ast.OperationDefinition
    ) -> None:
        self._enter_definition(node)
        self._defined[node] = []

    def enter_fragment_definition(self, node: _ast.FragmentDefinition) -> None:
        self._enter_definition(node)
        self._fragments.setdefault(node.name.value, node)

    def enter_variable_definition(self, node: _ast.VariableDefinition) -> None:
        self._in_var_def = True
        if isinstance(self._current, _ast.OperationDefinition):
            self._defined[self._current].append(node)

    def leave_variable_definition(self, _: _ast.VariableDefinition) -> None:
        self._in_var_def = False

    def enter_variable(self, node: _ast.Variable) -> None:
        if not self._in_var_def and self._current is not None:
            self._used[self._current].append(node)

    def enter_fragment_spread(self, node: _ast.FragmentSpread) -> None:
        if self._current is not None:
            self._spreads[self._current].append(node.name.value)

    def _reachable_usages(self, node: _ast.Node) -> List[_ast.Variable]:
        usages = list(self._used.get(node, []))
        seen = set()  # type: Set[str]
        stack = list(self._spreads.get(node, []))
        while stack:
            name = stack.pop()
            if name in seen or name not in self._fragments:
                continue
            seen.add(name)
            fragment = self._fragments[name]
            usages.extend(self._used.get(fragment, []))
            stack.extend(self._spreads.get(fragment, []))
        return usages

    def leave_document(self, _: _ast.Document) -> None:
        for operation, defined in self._defined.items():
            self.leave_operation_variables(
                operation, defined, self._reachable_usages(operation)
            )

    def leave_operation_variables(
        self,
        operation: _ast.OperationDefinition,
        defined: List[_ast.VariableDefinition],
        used: List[_ast.Variable],
    ) -> None:
        """
        Implement this to check variable definitions against their usages.
        """
