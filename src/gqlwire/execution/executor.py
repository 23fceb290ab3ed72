# -*- coding: utf-8 -*-

import enum
import functools as ft
import logging
from typing import (
    Any,
    Callable,
    Dict,
    Iterator,
    List,
    Optional,
    Tuple,
    Union,
)

from .._string_utils import ResponsePath, stringify_path
from .._utils import is_iterable
from ..exc import CoercionError, GraphQLError, ResolverError
from ..lang import ast as _ast
from ..schema import (
    ExecutableSchema,
    FieldDefinition,
    ListTypeRef,
    NonNullTypeRef,
    TypeDefinition,
    TypeKind,
    TypeRef,
)
from ..schema.scalars import scalar_codec
from ..utilities import GroupedFields
from .default_resolver import default_resolver
from .instrumentation import Instrumentation
from .runtime import BlockingRuntime, Runtime
from .wrappers import ResolutionContext, ResolveInfo

logger = logging.getLogger(__name__)

Resolver = Callable[..., Any]


class _NullBubble(Exception):
    # A non-null position could not be completed. Returned in place of the
    # value by the failing field or list item and raised by the enclosing
    # selection set or list, until a nullable position absorbs it.
    def __init__(self, error: ResolverError):
        super().__init__(error.message)
        self.error = error


def _identity(value: Any) -> Any:
    return value


def serialize_enum(definition: TypeDefinition, value: Any) -> str:
    """
    Serialize a resolved value for an enum type. Both enum value names and
    members of a Python :class:`enum.Enum` named after an enum value are
    accepted.

    Raises:
        ValueError: If the value does not match any enum value.
    """
    if isinstance(value, enum.Enum):
        name = value.name
    elif isinstance(value, str):
        name = value
    else:
        raise ValueError("Expected enum value name but got %r" % (value,))

    if name not in definition.enum_value_map:
        raise ValueError(
            'Invalid value "%s" for enum "%s"' % (name, definition.name)
        )
    return name


class Executor(ResolutionContext):
    """Core executor class.

    Implements field resolution and value completion, including null
    propagation, on top of a :class:`~gqlwire.execution.runtime.Runtime`
    which decides how resolvers are scheduled.

    Every field failure is turned into a
    :class:`~gqlwire.exc.ResolverError` located at the field's response
    path. The field's value becomes ``None`` unless its type is non-null, in
    which case the nearest nullable ancestor is nulled instead (the whole
    ``data`` when there is none). Each error is reported once.
    """

    __slots__ = ("instrumentation", "runtime", "_resolver_cache")

    def __init__(
        self,
        schema: ExecutableSchema,
        document: _ast.Document,
        variables: Dict[str, Any],
        context_value: Any,
        *,
        instrumentation: Optional[Instrumentation] = None,
        runtime: Optional[Runtime] = None
    ):
        super().__init__(schema, document, variables, context_value)
        self.instrumentation = instrumentation or Instrumentation()
        self.runtime = runtime or BlockingRuntime()
        self._resolver_cache = {}  # type: Dict[Tuple[str, str], Resolver]

    def field_resolver(
        self, parent_type: TypeDefinition, field_definition: FieldDefinition
    ) -> Resolver:
        key = parent_type.name, field_definition.name
        try:
            return self._resolver_cache[key]
        except KeyError:
            bound = self.schema.field_resolver(*key)
            resolver = (
                self.runtime.wrap_callable(bound)
                if bound is not None
                else default_resolver
            )
            self._resolver_cache[key] = resolver
            return resolver

    def located_error(
        self, err: Exception, path: ResponsePath, nodes: List[_ast.Field]
    ) -> ResolverError:
        """
        Turn any exception raised while resolving a field into a
        :class:`~gqlwire.exc.ResolverError` located at ``path``.
        """
        if isinstance(err, ResolverError):
            if err.path is None:
                err.path = list(path)
            if not err.nodes:
                err.nodes = list(nodes)
            logger.debug(
                'Field "%s" failed: %s', stringify_path(err.path), err
            )
            return err

        if isinstance(err, GraphQLError):
            wrapped = ResolverError(err.message, nodes, path)
            logger.debug('Field "%s" failed: %s', stringify_path(path), err)
        else:
            wrapped = ResolverError(str(err) or type(err).__name__, nodes, path)
            logger.error(
                'Unexpected error resolving field "%s"',
                stringify_path(path),
                exc_info=err,
            )

        wrapped.original_error = err
        wrapped.__cause__ = err
        return wrapped

    def handle_field_error(
        self,
        field_type: TypeRef,
        path: ResponsePath,
        nodes: List[_ast.Field],
        err: Exception,
    ) -> Any:
        if isinstance(err, _NullBubble):
            error = err.error
        else:
            error = self.located_error(err, path, nodes)

        if isinstance(field_type, NonNullTypeRef):
            return _NullBubble(error)

        self.add_error(error)
        return None

    def _raise_bubbles(self, values: List[Any]) -> List[Any]:
        bubbles = [v for v in values if isinstance(v, _NullBubble)]
        if bubbles:
            for bubble in bubbles[1:]:
                self.add_error(bubble.error)
            raise bubbles[0]
        return values

    def _guarded(
        self, fn: Callable[[], Any], on_error: Callable[[Exception], Any]
    ) -> Any:
        try:
            value = fn()
        except Exception as err:
            return on_error(err)
        return self.runtime.map_value(
            self.runtime.unwrap_value(value),
            _identity,
            else_=(Exception, on_error),
        )

    def execute_operation(
        self,
        operation: _ast.OperationDefinition,
        root_type: TypeDefinition,
        root: Any,
    ) -> Any:
        """
        Execute the root selection set of an operation, serially for
        mutations.

        Returns:
            The ``data`` part of the result (maybe wrapped by the runtime).
        """
        try:
            fields = self.collect_fields(
                root_type.name, operation.selection_set.selections
            )
        except CoercionError as err:
            self.add_error(err)
            return None

        def on_bubble(err: _NullBubble) -> None:
            self.add_error(err.error)
            return None

        execute_fields = (
            self.execute_fields_serially
            if operation.operation == "mutation"
            else self.execute_fields
        )

        try:
            data = execute_fields(root_type, root, [], fields)
        except _NullBubble as err:
            return on_bubble(err)

        return self.runtime.map_value(
            self.runtime.unwrap_value(data),
            _identity,
            else_=(_NullBubble, on_bubble),
        )

    def resolve_field(
        self,
        parent_type: TypeDefinition,
        parent_value: Any,
        field_definition: FieldDefinition,
        nodes: List[_ast.Field],
        path: ResponsePath,
    ) -> Any:
        resolver = self.field_resolver(parent_type, field_definition)
        info = ResolveInfo(
            field_definition, path, parent_type, nodes, self.runtime, self
        )

        self.instrumentation.on_field_start(
            parent_value, self.context_value, info
        )

        def complete(value: Any) -> Any:
            return self.complete_value(
                field_definition.type, nodes, path, info, value
            )

        def resolve() -> Any:
            args = self.argument_values(field_definition, nodes[0])
            return self.runtime.map_value(
                self.runtime.unwrap_value(resolver(parent_value, args, info)),
                complete,
            )

        def finish(value: Any) -> Any:
            self.instrumentation.on_field_end(
                parent_value, self.context_value, info
            )
            return value

        return self.runtime.map_value(
            self._guarded(
                resolve,
                ft.partial(
                    self.handle_field_error, field_definition.type, path, nodes
                ),
            ),
            finish,
        )

    def _iterate_fields(
        self,
        parent_type: TypeDefinition,
        path: ResponsePath,
        fields: GroupedFields,
    ) -> Iterator[
        Tuple[str, Optional[FieldDefinition], List[_ast.Field], ResponsePath]
    ]:
        for index, (key, nodes) in enumerate(fields.items()):
            name = nodes[0].name.value
            if name == "__typename":
                field_def = None
            else:
                field_def = parent_type.field_map.get(name)
                # Not applicable to this concrete type.
                if field_def is None:
                    continue

            field_path = path + [key]
            self.track_path(field_path, index)
            yield key, field_def, nodes, field_path

    def execute_fields(
        self,
        parent_type: TypeDefinition,
        root: Any,
        path: ResponsePath,
        fields: GroupedFields,
    ) -> Any:
        keys = []  # type: List[str]
        pending = []  # type: List[Any]

        for key, field_def, nodes, field_path in self._iterate_fields(
            parent_type, path, fields
        ):
            keys.append(key)
            if field_def is None:
                pending.append(parent_type.name)
            else:
                pending.append(
                    self.resolve_field(
                        parent_type, root, field_def, nodes, field_path
                    )
                )

        def _collect(done: List[Any]) -> Dict[str, Any]:
            return dict(zip(keys, self._raise_bubbles(done)))

        return self.runtime.map_value(
            self.runtime.gather_values(pending), _collect
        )

    def execute_fields_serially(
        self,
        parent_type: TypeDefinition,
        root: Any,
        path: ResponsePath,
        fields: GroupedFields,
    ) -> Any:
        entries = list(self._iterate_fields(parent_type, path, fields))
        keys = [entry[0] for entry in entries]
        done = []  # type: List[Any]

        def _next() -> Any:
            if len(done) == len(entries):
                return dict(zip(keys, self._raise_bubbles(done)))

            _, field_def, nodes, field_path = entries[len(done)]
            if field_def is None:
                done.append(parent_type.name)
                return _next()

            def cb(value: Any) -> Any:
                done.append(value)
                return _next()

            return self.runtime.map_value(
                self.resolve_field(
                    parent_type, root, field_def, nodes, field_path
                ),
                cb,
            )

        return self.runtime.unwrap_value(_next())

    def complete_value(  # noqa: C901
        self,
        field_type: TypeRef,
        nodes: List[_ast.Field],
        path: ResponsePath,
        info: ResolveInfo,
        resolved_value: Any,
    ) -> Any:
        if isinstance(field_type, NonNullTypeRef):
            return self.runtime.map_value(
                self.runtime.unwrap_value(
                    self.complete_value(
                        field_type.of, nodes, path, info, resolved_value
                    )
                ),
                lambda value: self._non_nullable_value(nodes, path, value),
            )

        if resolved_value is None:
            return None

        if isinstance(field_type, ListTypeRef):
            if not is_iterable(resolved_value, False):
                raise ResolverError(
                    'Field "%s" is a list type and resolved value should be '
                    "iterable" % stringify_path(path),
                    nodes,
                    path,
                )
            return self.complete_list_value(
                field_type.of, nodes, path, info, resolved_value
            )

        definition = self.schema.get_type(field_type.name)

        if definition.kind is TypeKind.SCALAR:
            try:
                return scalar_codec(definition.name).serialize(resolved_value)
            except (ValueError, TypeError) as err:
                raise self._serialization_error(
                    definition, nodes, path, err
                ) from err

        if definition.kind is TypeKind.ENUM:
            try:
                return serialize_enum(definition, resolved_value)
            except ValueError as err:
                raise self._serialization_error(
                    definition, nodes, path, err
                ) from err

        if definition.is_abstract:
            return self.runtime.unwrap_value(
                self.runtime.map_value(
                    self.resolve_type(resolved_value, info, definition),
                    lambda type_name: self.complete_object_value(
                        self._runtime_type(type_name, definition, nodes, path),
                        nodes,
                        path,
                        resolved_value,
                    ),
                )
            )

        if definition.kind is TypeKind.OBJECT:
            return self.complete_object_value(
                definition, nodes, path, resolved_value
            )

        raise TypeError(
            "Invalid field type %s at %s" % (field_type, stringify_path(path))
        )

    def complete_list_value(
        self,
        item_type: TypeRef,
        nodes: List[_ast.Field],
        path: ResponsePath,
        info: ResolveInfo,
        resolved_value: Any,
    ) -> Any:
        items = []  # type: List[Any]
        for index, entry in enumerate(resolved_value):
            item_path = path + [index]
            self.track_path(item_path, index)
            items.append(
                self._guarded(
                    ft.partial(
                        self.complete_value,
                        item_type,
                        nodes,
                        item_path,
                        info,
                        entry,
                    ),
                    ft.partial(
                        self.handle_field_error, item_type, item_path, nodes
                    ),
                )
            )

        return self.runtime.map_value(
            self.runtime.gather_values(items), self._raise_bubbles
        )

    def complete_object_value(
        self,
        object_type: TypeDefinition,
        nodes: List[_ast.Field],
        path: ResponsePath,
        resolved_value: Any,
    ) -> Any:
        return self.execute_fields(
            object_type,
            resolved_value,
            path,
            self.collect_fields(
                object_type.name,
                [
                    selection
                    for field in nodes
                    if field.selection_set
                    for selection in field.selection_set.selections
                ],
            ),
        )

    def resolve_type(
        self, value: Any, info: ResolveInfo, abstract_type: TypeDefinition
    ) -> Any:
        """
        Call the type resolver bound to an interface or union type.

        Returns:
            The type resolver's result (maybe wrapped by the runtime).
        """
        type_resolver = self.schema.type_resolver(abstract_type.name)
        if type_resolver is None:
            raise ResolverError(
                'No type resolver for abstract type "%s"' % abstract_type.name
            )
        return self.runtime.unwrap_value(type_resolver(value, info))

    def _runtime_type(
        self,
        type_name: Union[str, TypeDefinition, None],
        abstract_type: TypeDefinition,
        nodes: List[_ast.Field],
        path: ResponsePath,
    ) -> TypeDefinition:
        if isinstance(type_name, TypeDefinition):
            type_name = type_name.name

        if not isinstance(type_name, str):
            raise ResolverError(
                'Type resolver of "%s" must return a type name for field "%s".'
                " Received %r"
                % (abstract_type.name, stringify_path(path), type_name),
                nodes,
                path,
            )

        runtime_type = self.schema.types.get(type_name)

        if runtime_type is None or runtime_type.kind is not TypeKind.OBJECT:
            raise ResolverError(
                'Abstract type "%s" must resolve to an object type at '
                'runtime for field "%s". Received "%s"'
                % (abstract_type.name, stringify_path(path), type_name),
                nodes,
                path,
            )

        if not self.schema.is_possible_type(abstract_type, runtime_type):
            raise ResolverError(
                'Runtime object type "%s" is not a possible type for '
                'field "%s" of type "%s".'
                % (type_name, stringify_path(path), abstract_type.name),
                nodes,
                path,
            )

        return runtime_type

    def _serialization_error(
        self,
        definition: TypeDefinition,
        nodes: List[_ast.Field],
        path: ResponsePath,
        err: Exception,
    ) -> ResolverError:
        return ResolverError(
            'Field "%s" cannot be serialized as "%s": %s'
            % (stringify_path(path), definition.name, err),
            nodes,
            path,
        )

    def _non_nullable_value(
        self, nodes: List[_ast.Field], path: ResponsePath, value: Any
    ) -> Any:
        if value is None:
            raise ResolverError(
                'Field "%s" is not nullable' % stringify_path(path),
                nodes,
                path,
            )
        return value
