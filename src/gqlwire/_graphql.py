# -*- coding: utf-8 -*-

from typing import Any, Mapping, Optional, Sequence, Type, Union, cast

from .exc import GraphQLSyntaxError
from .execution import ExecutionResult, Instrumentation, execute
from .execution.runtime import AsyncIORuntime, BlockingRuntime, Runtime
from .lang import parse
from .lang.ast import Document
from .schema import ExecutableSchema
from .validation import ValidationVisitor, validate_document


def process_graphql_query(
    schema: ExecutableSchema,
    document: Union[str, Document],
    *,
    variables: Optional[Mapping[str, Any]] = None,
    operation_name: Optional[str] = None,
    root: Any = None,
    context: Any = None,
    validate: bool = True,
    validation_rules: Optional[Sequence[Type[ValidationVisitor]]] = None,
    instrumentation: Optional[Instrumentation] = None,
    runtime: Optional[Runtime] = None
) -> Any:
    """
    Main GraphQL entrypoint encapsulating query processing from start to
    finish including parsing, validation, variable coercion and execution.

    Warning:
        The returned value will depend on the ``runtime`` argument. Custom
        implementations usually return a type wrapping the
        :class:`~gqlwire.ExecutionResult` object such as `Awaitable[...]`.

    Args:
        schema: Schema to execute the query against.

        document: The query document, as a raw string or already parsed.

        variables: Raw, JSON decoded variables parsed from the request.

        operation_name: Operation to execute.
            If specified, the operation with the given name will be executed.
            If not, this executes the single operation without disambiguation.

        root: Root resolution value passed to the top-level resolvers.

        context: Custom application-specific execution context.
            Use this to pass in anything your resolvers require like database
            connection, user information, etc.

        validate: Set to ``False`` to skip document validation, for instance
            when the document is known to be valid already.

        validation_rules: Custom validation rules.
            Setting this will replace the defaults so if you just want to add
            some rules, append to :obj:`gqlwire.validation.SPECIFIED_RULES`.

        instrumentation: Instrumentation instance.
            Use :class:`~gqlwire.execution.MultiInstrumentation` to compose
            multiple instances together.

        runtime: Runtime against which to execute field resolvers (defaults to
            `~gqlwire.execution.runtime.BlockingRuntime()`).

    Returns:
        Execution result. ``data`` is ``None`` when the query could not be
        parsed, validated or started.
    """
    instrumentation = instrumentation or Instrumentation()
    runtime = runtime or BlockingRuntime()

    instrumentation.on_query_start()

    def _abort(errors):
        # Make sure the value is wrapped similarly to the execution result to
        # make it easier for consumers.
        return cast(Runtime, runtime).ensure_wrapped(
            _on_end(ExecutionResult(None, errors))
        )

    def _on_end(result: ExecutionResult) -> ExecutionResult:
        cast(Instrumentation, instrumentation).on_query_end()
        return result

    if isinstance(document, (str, bytes)):
        instrumentation.on_parsing_start()
        try:
            ast = parse(document)
        except GraphQLSyntaxError as err:
            return _abort([err])
        finally:
            instrumentation.on_parsing_end()
    else:
        ast = document

    if validate:
        instrumentation.on_validation_start()
        validation_errors = validate_document(
            schema, ast, rules=validation_rules
        )
        instrumentation.on_validation_end()

        if validation_errors:
            return _abort(validation_errors)

    return runtime.map_value(
        execute(
            schema,
            ast,
            root,
            variables=variables,
            operation_name=operation_name,
            context=context,
            runtime=runtime,
            instrumentation=instrumentation,
        ),
        _on_end,
    )


async def graphql(
    schema: ExecutableSchema,
    document: Union[str, Document],
    *,
    variables: Optional[Mapping[str, Any]] = None,
    operation_name: Optional[str] = None,
    root: Any = None,
    context: Any = None,
    validate: bool = True,
    instrumentation: Optional[Instrumentation] = None,
    execute_blocking_functions_in_thread: bool = False
) -> ExecutionResult:
    """
    Wrapper around :func:`~gqlwire.process_graphql_query` enforcing usage of
    :class:`~gqlwire.execution.runtime.AsyncIORuntime`.

    Warning:
        Blocking (non async) resolvers will block the current thread unless
        ``execute_blocking_functions_in_thread`` is set.
    """
    return cast(
        ExecutionResult,
        await process_graphql_query(
            schema,
            document,
            variables=variables,
            operation_name=operation_name,
            root=root,
            context=context,
            validate=validate,
            instrumentation=instrumentation,
            runtime=AsyncIORuntime(
                execute_blocking_functions_in_thread=(
                    execute_blocking_functions_in_thread
                )
            ),
        ),
    )


def graphql_blocking(
    schema: ExecutableSchema,
    document: Union[str, Document],
    *,
    variables: Optional[Mapping[str, Any]] = None,
    operation_name: Optional[str] = None,
    root: Any = None,
    context: Any = None,
    validate: bool = True,
    instrumentation: Optional[Instrumentation] = None
) -> ExecutionResult:
    """
    Wrapper around :func:`process_graphql_query` enforcing usage of blocking
    resolvers.
    """
    return cast(
        ExecutionResult,
        process_graphql_query(
            schema,
            document,
            variables=variables,
            operation_name=operation_name,
            root=root,
            context=context,
            validate=validate,
            instrumentation=instrumentation,
            runtime=BlockingRuntime(),
        ),
    )
