# -*- coding: utf-8 -*-

from typing import Any, Mapping, Optional

from ..exc import ExecutionError, VariablesCoercionError
from ..lang import ast as _ast
from ..schema import ExecutableSchema
from ..utilities import coerce_variable_values
from .executor import Executor
from .get_operation import get_operation_with_type
from .instrumentation import Instrumentation
from .runtime import BlockingRuntime, Runtime
from .wrappers import ExecutionResult


def execute(
    schema: ExecutableSchema,
    document: _ast.Document,
    root: Any = None,
    *,
    variables: Optional[Mapping[str, Any]] = None,
    operation_name: Optional[str] = None,
    context: Any = None,
    runtime: Optional[Runtime] = None,
    instrumentation: Optional[Instrumentation] = None
) -> Any:
    """
    Execute a query or mutation against an executable schema. This assumes
    the document has been validated beforehand.

    Args:
        schema: Schema to execute the query against.

        document: The query document.

        root: Root value passed as the parent of the root fields.

        variables: Raw, JSON decoded variables parsed from the request.

        operation_name: Operation to execute.
            If specified, the operation with the given name will be executed.
            If not, this executes the single operation without disambiguation.

        context: Custom application-specific execution context, exposed to
            resolvers as ``info.context``.

        runtime: Runtime against which to execute field resolvers (defaults to
            `~gqlwire.execution.runtime.BlockingRuntime()`).

        instrumentation: Instrumentation instance.
            Use :class:`~gqlwire.execution.MultiInstrumentation` to compose
            multiple instances together.

    Returns:
        Execution result, wrapped by the runtime (e.g. an awaitable
        :class:`ExecutionResult` for :class:`AsyncIORuntime`). Operation
        selection and variable coercion failures give a result with ``data``
        set to ``None``.
    """
    hooks = instrumentation or Instrumentation()
    runtime = runtime or BlockingRuntime()

    try:
        operation, root_type = get_operation_with_type(
            schema, document, operation_name
        )
        coerced_variables = coerce_variable_values(
            schema.types, operation, variables or {}
        )
    except ExecutionError as err:
        return runtime.ensure_wrapped(ExecutionResult(None, [err]))
    except VariablesCoercionError as err:
        return runtime.ensure_wrapped(ExecutionResult(None, err.errors))

    executor = Executor(
        schema,
        document,
        coerced_variables,
        context,
        instrumentation=hooks,
        runtime=runtime,
    )

    hooks.on_execution_start()

    def _on_finish(data: Any) -> ExecutionResult:
        hooks.on_execution_end()
        return ExecutionResult(data, executor.errors)

    return runtime.ensure_wrapped(
        runtime.map_value(
            executor.execute_operation(operation, root_type, root), _on_finish
        )
    )
