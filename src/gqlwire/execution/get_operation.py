# -*- coding: utf-8 -*-

from typing import Optional, Tuple

from ..exc import ExecutionError
from ..lang import ast as _ast
from ..schema import ExecutableSchema, TypeDefinition


def get_operation(
    document: _ast.Document, operation_name: Optional[str] = None
) -> _ast.OperationDefinition:
    """ Extract the relevant operation from a parsed document.

    In case the ``operation_name`` argument is null, the document is
    expected to contain only one operation which will be extracted.

    Args:
        document: Parsed document
        operation_name: Operation to extract

    Returns: Relevant operation definition

    Raises:
        :py:class:`~gqlwire.exc.ExecutionError`: No relevant operation can
            be found.
    """
    operations = [
        definition
        for definition in document.definitions
        if isinstance(definition, _ast.OperationDefinition)
    ]

    if not operations:
        raise ExecutionError("Expected at least one operation definition")

    if not operation_name:
        if len(operations) == 1:
            return operations[0]
        raise ExecutionError(
            "Operation name is required when document "
            "contains multiple operation definitions"
        )

    for operation in operations:
        if operation.name and operation.name.value == operation_name:
            return operation

    raise ExecutionError('No operation "%s" in document' % operation_name)


def get_operation_with_type(
    schema: ExecutableSchema,
    document: _ast.Document,
    operation_name: Optional[str] = None,
) -> Tuple[_ast.OperationDefinition, TypeDefinition]:
    """ Extract the relevant operation from a parsed document along with
    the schema's root type for its kind.

    Raises:
        :py:class:`~gqlwire.exc.ExecutionError`: No relevant operation can
            be found or the schema does not support its kind.
    """
    operation = get_operation(document, operation_name)
    root_type = schema.root_type(operation.operation)

    if root_type is None:
        raise ExecutionError(
            "Schema doesn't support %s operation" % operation.operation
        )

    return operation, root_type
