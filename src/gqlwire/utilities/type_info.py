# -*- coding: utf-8 -*-

from typing import TYPE_CHECKING, List, Optional, Sequence, TypeVar

from ..lang import ast as _ast
from ..lang.visitor import DispatchingVisitor
from ..schema.types import (
    FieldDefinition,
    NamedTypeRef,
    NonNullTypeRef,
    TypeDefinition,
    TypeRef,
    unwrap_type,
)

if TYPE_CHECKING:
    from ..schema.executable import ExecutableSchema  # noqa: F401

T = TypeVar("T")

TYPENAME_FIELD = FieldDefinition(
    "__typename",
    NonNullTypeRef(NamedTypeRef("String")),
    description="The name of the current Object type at runtime.",
)


def _peek(lst: Sequence[T]) -> Optional[T]:
    return lst[-1] if lst else None


def field_definition(
    schema: "ExecutableSchema",
    parent_type: TypeDefinition,
    name: str,
) -> Optional[FieldDefinition]:
    """
    Find the definition of a field selected on a composite type.

    ``__typename`` is available on every composite type. For interfaces and
    unions, a field that is not declared by the abstract type itself is
    looked up on its possible types.
    """
    if name == "__typename" and parent_type.is_composite:
        return TYPENAME_FIELD

    field_def = parent_type.field_map.get(name)
    if field_def is None and parent_type.is_abstract:
        for possible_type in schema.possible_types(parent_type):
            field_def = possible_type.field_map.get(name)
            if field_def is not None:
                break
    return field_def


class TypeInfoVisitor(DispatchingVisitor):
    """
    Utility visitor tracking the current types and field definitions while
    traversing a document.

    Unknown types and fields are tracked as ``None`` rather than failing,
    leaving the consumer responsible to handle such cases.

    Warning:
        When used alongside other visitors through
        :class:`gqlwire.lang.visitor.ChainedVisitor`, this visitor **must**
        be the first one for the information provided downstream to be
        accurate.

    Args:
        schema: Reference schema to extract types from
    """

    def __init__(self, schema: "ExecutableSchema"):
        self.schema = schema
        self._type_stack = []  # type: List[Optional[TypeRef]]
        self._parent_type_stack = []  # type: List[Optional[TypeDefinition]]
        self._field_stack = []  # type: List[Optional[FieldDefinition]]

    @property
    def type(self) -> Optional[TypeRef]:
        """ Output type of the current node. """
        return _peek(self._type_stack)

    @property
    def parent_type(self) -> Optional[TypeDefinition]:
        """ Composite type on which the current selection set applies. """
        return _peek(self._parent_type_stack)

    @property
    def field(self) -> Optional[FieldDefinition]:
        """ Definition of the field being visited. """
        return _peek(self._field_stack)

    def _named(self, type_: Optional[TypeRef]) -> Optional[TypeDefinition]:
        if type_ is None:
            return None
        return self.schema.types.get(unwrap_type(type_))

    def enter_operation_definition(
        self, node: _ast.OperationDefinition
    ) -> None:
        root = self.schema.root_type(node.operation)
        self._type_stack.append(
            NamedTypeRef(root.name) if root is not None else None
        )

    def leave_operation_definition(self, _: _ast.OperationDefinition) -> None:
        self._type_stack.pop()

    def enter_selection_set(self, _: _ast.SelectionSet) -> None:
        named = self._named(self.type)
        self._parent_type_stack.append(
            named if named is not None and named.is_composite else None
        )

    def leave_selection_set(self, _: _ast.SelectionSet) -> None:
        self._parent_type_stack.pop()

    def enter_field(self, node: _ast.Field) -> None:
        parent_type = self.parent_type
        field_def = (
            field_definition(self.schema, parent_type, node.name.value)
            if parent_type is not None
            else None
        )
        self._field_stack.append(field_def)
        self._type_stack.append(
            field_def.type if field_def is not None else None
        )

    def leave_field(self, _: _ast.Field) -> None:
        self._field_stack.pop()
        self._type_stack.pop()

    def _enter_fragment(self, type_condition: Optional[_ast.NamedType]) -> None:
        if type_condition is None:
            self._type_stack.append(self.type)
        else:
            name = type_condition.name.value
            self._type_stack.append(
                NamedTypeRef(name) if name in self.schema.types else None
            )

    def enter_inline_fragment(self, node: _ast.InlineFragment) -> None:
        self._enter_fragment(node.type_condition)

    def leave_inline_fragment(self, _: _ast.InlineFragment) -> None:
        self._type_stack.pop()

    def enter_fragment_definition(self, node: _ast.FragmentDefinition) -> None:
        self._enter_fragment(node.type_condition)

    def leave_fragment_definition(self, _: _ast.FragmentDefinition) -> None:
        self._type_stack.pop()
