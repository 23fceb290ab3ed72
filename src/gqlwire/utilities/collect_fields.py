# -*- coding: utf-8 -*-

from typing import (
    TYPE_CHECKING,
    Any,
    Dict,
    List,
    Mapping,
    Optional,
    Sequence,
    Set,
    TypeVar,
    Union,
)

from ..lang import ast as _ast
from ..schema.types import ArgumentDefinition, NamedTypeRef, NonNullTypeRef
from .coerce_value import coerce_argument_values

if TYPE_CHECKING:
    from ..schema.executable import ExecutableSchema  # noqa: F401

T = TypeVar("T")
GroupedFields = Dict[str, List[_ast.Field]]

_CONDITION_ARGUMENTS = (
    ArgumentDefinition("if", NonNullTypeRef(NamedTypeRef("Boolean"))),
)


def collect_fields(
    schema: "ExecutableSchema",
    object_type: str,
    selections: Sequence[_ast.Selection],
    fragments: Mapping[str, _ast.FragmentDefinition],
    variables: Mapping[str, Any],
    _seen_fragments: Optional[Set[str]] = None,
) -> GroupedFields:
    """
    Group the fields selected on a concrete object type by response name,
    expanding fragments whose type condition applies and honouring the
    ``@skip`` and ``@include`` directives.

    Args:
        schema: Executable schema
        object_type: Name of the object type the selections apply to
        selections: Selections to collect
        fragments: Document fragments
        variables: Coerced variables

    Returns:
        Field nodes grouped by response name, in selection order.
    """
    if _seen_fragments is None:
        _seen_fragments = set()
    grouped_fields = {}  # type: GroupedFields

    for selection in selections:
        if isinstance(selection, _ast.Field):
            if _skip_selection(selection, schema, variables):
                continue

            grouped_fields.setdefault(selection.response_name, []).append(
                selection
            )

        elif isinstance(selection, _ast.InlineFragment):
            if _skip_selection(
                selection, schema, variables
            ) or not _fragment_type_applies(schema, object_type, selection):
                continue

            _merge(
                collect_fields(
                    schema,
                    object_type,
                    selection.selection_set.selections,
                    fragments,
                    variables,
                    _seen_fragments,
                ),
                into=grouped_fields,
            )

        elif isinstance(selection, _ast.FragmentSpread):
            name = selection.name.value
            fragment = fragments.get(name)

            if (
                fragment is None
                or name in _seen_fragments
                or _skip_selection(selection, schema, variables)
                or not _fragment_type_applies(schema, object_type, fragment)
            ):
                continue

            _seen_fragments.add(name)
            _merge(
                collect_fields(
                    schema,
                    object_type,
                    fragment.selection_set.selections,
                    fragments,
                    variables,
                    _seen_fragments,
                ),
                into=grouped_fields,
            )

    return grouped_fields


def _merge(groups: Dict[str, List[T]], *, into: Dict[str, List[T]]) -> None:
    for key, collected in groups.items():
        into.setdefault(key, []).extend(collected)


def _fragment_type_applies(
    schema: "ExecutableSchema",
    object_type: str,
    fragment: Union[_ast.InlineFragment, _ast.FragmentDefinition],
) -> bool:
    type_condition = fragment.type_condition
    if not type_condition:
        return True

    condition = type_condition.name.value
    return condition == object_type or schema.is_possible_type(
        condition, object_type
    )


def _condition(
    node: Union[_ast.Field, _ast.InlineFragment, _ast.FragmentSpread],
    name: str,
    schema: "ExecutableSchema",
    variables: Mapping[str, Any],
) -> Optional[bool]:
    for directive in node.directives:
        if directive.name.value == name:
            return coerce_argument_values(
                _CONDITION_ARGUMENTS, directive, schema.types, variables
            )["if"]
    return None


def _skip_selection(
    node: Union[_ast.Field, _ast.InlineFragment, _ast.FragmentSpread],
    schema: "ExecutableSchema",
    variables: Mapping[str, Any],
) -> bool:
    skip = _condition(node, "skip", schema, variables)
    include = _condition(node, "include", schema, variables)
    return bool(skip) or include is False
