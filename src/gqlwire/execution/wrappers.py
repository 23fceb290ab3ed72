# -*- coding: utf-8 -*-

import json
from typing import (
    Any,
    Dict,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
)

from .._string_utils import ResponsePath
from ..exc import GraphQLResponseError
from ..lang import ast as _ast
from ..schema import ExecutableSchema, FieldDefinition, TypeDefinition
from ..utilities import GroupedFields, coerce_argument_values, collect_fields
from .runtime import Runtime


class ResolutionContext:
    """Per request state shared by every field resolution."""

    __slots__ = (
        "schema",
        "document",
        "variables",
        "fragments",
        "context_value",
        "_grouped_fields",
        "_argument_values",
        "_errors",
        "_ordinals",
    )

    def __init__(
        self,
        schema: ExecutableSchema,
        document: _ast.Document,
        variables: Dict[str, Any],
        context_value: Any,
    ):
        #: ~gqlwire.schema.ExecutableSchema: Current schema.
        self.schema = schema
        #: ~gqlwire.lang.ast.Document: Parsed document.
        self.document = document
        #: Dict[str, Any]: Coerced variables
        self.variables = variables
        #: Context value
        self.context_value = context_value
        #: Dict[str, ~gqlwire.lang.ast.FragmentDefinition]: Document fragments
        self.fragments = document.fragments

        self._errors = []  # type: List[GraphQLResponseError]
        # Position of each response path in document order, used to report
        # errors deterministically whatever the resolution order.
        self._ordinals = {
            (): ()
        }  # type: Dict[Tuple[Any, ...], Tuple[int, ...]]

        self._grouped_fields = (
            {}
        )  # type: Dict[Tuple[str, Tuple[int, ...]], GroupedFields]
        self._argument_values = (
            {}
        )  # type: Dict[Tuple[int, int], Dict[str, Any]]

    def add_error(self, err: GraphQLResponseError) -> None:
        """Register an error during the current execution."""
        self._errors.append(err)

    def track_path(self, path: ResponsePath, index: int) -> None:
        """Record ``path`` as the ``index``-th child of its parent path."""
        key = tuple(path)
        self._ordinals[key] = self._ordinals.get(key[:-1], ()) + (index,)

    @property
    def errors(self) -> List[GraphQLResponseError]:
        """All field errors collected so far, in document order."""

        def _key(err: GraphQLResponseError) -> Tuple[int, ...]:
            path = getattr(err, "path", None)
            if not path:
                return ()
            return self._ordinals.get(tuple(path), ())

        return sorted(self._errors, key=_key)

    def collect_fields(
        self, object_type: str, selections: Sequence[_ast.Selection]
    ) -> GroupedFields:
        cache_key = object_type, tuple(id(s) for s in selections)
        try:
            return self._grouped_fields[cache_key]
        except KeyError:
            grouped = self._grouped_fields[cache_key] = collect_fields(
                self.schema,
                object_type,
                selections,
                self.fragments,
                self.variables,
            )
            return grouped

    def argument_values(
        self, field_definition: FieldDefinition, node: _ast.Field
    ) -> Dict[str, Any]:
        cache_key = id(field_definition), id(node)
        try:
            return self._argument_values[cache_key]
        except KeyError:
            values = self._argument_values[
                cache_key
            ] = coerce_argument_values(
                field_definition.arguments,
                node,
                self.schema.types,
                self.variables,
            )
            return values


class ResolveInfo:
    """Expose information about the field currently being resolved.

    This is the 3rd positional argument provided to resolver functions (and
    the 2nd one provided to type resolvers) and is constructed internally
    during query execution.
    """

    __slots__ = (
        "field_definition",
        "path",
        "parent_type",
        "nodes",
        "runtime",
        "_context",
    )

    def __init__(
        self,
        field_definition: FieldDefinition,
        path: ResponsePath,
        parent_type: TypeDefinition,
        nodes: List[_ast.Field],
        runtime: Runtime,
        context: ResolutionContext,
    ):
        #: ~gqlwire.schema.FieldDefinition: Field being resolved.
        self.field_definition = field_definition
        #: ResponsePath: Current traversal path through the query.
        self.path = path
        #: ~gqlwire.schema.TypeDefinition: Object type owning the field.
        self.parent_type = parent_type
        #: List[~gqlwire.lang.ast.Field]: AST nodes selecting the field.
        self.nodes = nodes
        #: ~gqlwire.execution.runtime.Runtime: Current runtime.
        self.runtime = runtime

        self._context = context

    @property
    def context(self) -> Any:
        """User provided context value."""
        return self._context.context_value

    @property
    def schema(self) -> ExecutableSchema:
        """Current schema."""
        return self._context.schema

    @property
    def variables(self) -> Dict[str, Any]:
        """Coerced variables."""
        return self._context.variables

    @property
    def fragments(self) -> Dict[str, _ast.FragmentDefinition]:
        """Document fragments."""
        return self._context.fragments

    @property
    def field_name(self) -> str:
        return self.field_definition.name

    def __repr__(self) -> str:
        return "<ResolveInfo %s.%s at %r>" % (
            self.parent_type.name,
            self.field_definition.name,
            self.path,
        )


class ExecutionResult:
    """
    Outcome of executing a document: the ``data`` tree mirroring the
    selection tree and the ordered errors encountered.

    Args:
        data (Optional[Dict[`str`, `Any`]]):
            The data part of the response, ``None`` when execution could not
            start or a failure propagated to the root.

        errors (Optional[Sequence[`GraphQLResponseError`]]):
            The errors part of the response. All errors will be included in the
            response using :meth:`~gqlwire.exc.GraphQLResponseError.to_dict`.
    """

    __slots__ = ("data", "errors")

    def __init__(
        self,
        data: Optional[Mapping[str, Any]] = None,
        errors: Optional[Sequence[GraphQLResponseError]] = None,
    ):
        self.data = data  # type: Any
        self.errors = (
            list(errors) if errors is not None else []
        )  # type: List[GraphQLResponseError]

    def __bool__(self) -> bool:
        return not self.errors

    def __iter__(self) -> Iterator[Any]:
        return iter((self.data, self.errors))

    def __repr__(self) -> str:
        return "<ExecutionResult data=%r errors=%d>" % (
            self.data,
            len(self.errors),
        )

    def response(self) -> Dict[str, Any]:
        """
        Generate the response dict. Both ``data`` and ``errors`` keys are
        always present.
        """
        return {
            "data": self.data,
            "errors": [error.to_dict() for error in self.errors],
        }

    def json(self, **kw: Any) -> str:
        """ Encode response as JSON using the standard lib ``json`` module.

        Args:
            **kw: Keyword args passed to to ``json.dumps``
        """
        return json.dumps(self.response(), **kw)
