# -*- coding: utf-8 -*-
"""This module implements all the exceptions exposed by this library."""

from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Sequence

from ._string_utils import ResponsePath, highlight_location, index_to_loc

if TYPE_CHECKING:
    from .lang import ast as _ast  # noqa: F401


class GraphQLError(Exception):
    """
    Base exception from which all others inherit. You should prefer using one
    of its subclasses most of the time.
    """

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class GraphQLResponseError(GraphQLError):
    """
    Implementors of this are suitable for usage in GraphQL responses and
    exposing to end users.
    """

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the exception to a dictionary that can be serialized to
        JSON and exposed in a GraphQL response.

        Returns:
            JSON serializable representation of the error.
        """
        raise NotImplementedError()


class GraphQLSyntaxError(GraphQLResponseError):
    """
    Syntax error while parsing a GraphQL document (query or schema definition).

    Args:
        message: Explanatory message
        position: 0-indexed position locating the syntax error
        source: Source string from which the syntax error originated

    Attributes:
        message (str): Explanatory message
        position (int): 0-indexed position locating the syntax error
        source (str): Source string from which the syntax error originated
    """

    def __init__(self, message: str, position: int, source: str):
        super().__init__(message)
        self.source = source
        self.position = position
        self._highlighted = None  # type: Optional[str]

    @property
    def highlighted(self) -> str:
        """
        str: Message followed by a view of the source document pointing at
        the exact location of the error.
        """
        if self._highlighted is None:
            self._highlighted = "%s %s" % (
                self.message,
                highlight_location(self.source, self.position),
            )
        return self._highlighted

    def __str__(self) -> str:
        return self.highlighted

    def to_dict(self) -> Dict[str, Any]:
        line, col = index_to_loc(self.source, self.position)
        return {
            "message": self.message,
            "locations": [{"line": line, "column": col}],
        }


class InvalidCharacter(GraphQLSyntaxError):
    pass


class UnexpectedCharacter(GraphQLSyntaxError):
    pass


class UnexpectedEOF(GraphQLSyntaxError):
    """
    Args:
        position: 0-indexed position locating the syntax error
        source: Source string from which the syntax error originated
    """

    def __init__(self, position: int, source: str):
        super().__init__("Unexpected <EOF>", position, source)


class NonTerminatedString(GraphQLSyntaxError):
    pass


class InvalidEscapeSequence(GraphQLSyntaxError):
    pass


class UnexpectedToken(GraphQLSyntaxError):
    pass


class GraphQLLocatedError(GraphQLResponseError):
    """
    Response error that can be traced back to specific position(s) and
    parse node(s) in the source document.

    Args:
        message: Explanatory message
        nodes: Nodes relevant to the exception
        path: Location of the error during execution

    Attributes:
        message (str): Explanatory message
        nodes (List[gqlwire.lang.ast.Node]): Nodes relevant to the exception
        path (Optional[Sequence[Union[int, str]]]):
            Location of the error during execution
    """

    def __init__(
        self,
        message: str,
        nodes: "Optional[Sequence[_ast.Node]]" = None,
        path: Optional[ResponsePath] = None,
    ):
        super().__init__(message)
        self.path = list(path) if path is not None else None
        self.nodes = list(nodes) if nodes else []  # type: List[_ast.Node]

    def to_dict(self) -> Dict[str, Any]:
        locations = [
            {"line": line, "column": col}
            for line, col in (
                index_to_loc(node.source, node.loc[0])
                for node in self.nodes
                if node.loc and node.source
            )
        ]
        dict_ = {"message": str(self)}  # type: Dict[str, Any]
        if locations:
            dict_["locations"] = locations
        if self.path is not None:
            dict_["path"] = list(self.path)
        return dict_


class ResolverError(GraphQLLocatedError):
    """
    Raised when an error happens during field resolution.

    Raise this exception (or a subclass) from your own resolvers to report
    errors with a message you control. Any other exception raised by a
    resolver is wrapped into a ``ResolverError`` by the executor and exposed
    through :attr:`original_error`.

    If your exception exposes an ``extensions`` attribute it will be included
    in the serialized version.

    Args:
        message: Explanatory message
        nodes: Node or nodes relevant to the exception
        path: Location of the error during execution
        extensions: Error extensions

    Attributes:
        message (str): Explanatory message
        nodes (List[gqlwire.lang.ast.Node]): Nodes relevant to the exception
        path (Optional[Sequence[Union[int, str]]]):
            Location of the error during execution
        extensions (Optional[Mapping[str, Any]]): Error extensions
        original_error (Optional[Exception]): Wrapped exception, if any
    """

    def __init__(
        self,
        message: str,
        nodes: "Optional[Sequence[_ast.Node]]" = None,
        path: Optional[ResponsePath] = None,
        extensions: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(message, nodes, path)
        self.extensions = extensions
        self.original_error = None  # type: Optional[Exception]

    def to_dict(self) -> Dict[str, Any]:
        dict_ = super().to_dict()
        if self.extensions:
            dict_["extensions"] = dict(self.extensions)
        return dict_


class ValidationError(GraphQLLocatedError):
    pass


class CoercionError(GraphQLLocatedError):
    pass


class InvalidValue(CoercionError):
    """
    A literal or input value does not match its expected input type.
    """


class UnknownVariable(InvalidValue):
    """
    Args:
        name: Variable name
        nodes: Nodes relevant to the exception
    """

    def __init__(
        self, name: str, nodes: "Optional[Sequence[_ast.Node]]" = None
    ):
        super().__init__('Unknown variable "$%s"' % name, nodes)
        self.name = name


class VariableCoercionError(CoercionError):
    pass


class VariablesCoercionError(GraphQLError):
    """
    Collection of multiple :class:`VariableCoercionError`.

    Args:
        errors: Wrapped errors

    Attributes:
        errors (Sequence[VariableCoercionError]): Wrapped errors
    """

    def __init__(self, errors: Sequence[VariableCoercionError]):
        super().__init__("%d errors" % len(errors))
        self.errors = list(errors)

    def __str__(self) -> str:
        if len(self.errors) == 1:
            return str(self.errors[0])
        return ",\n".join(str(err) for err in self.errors)


class ExecutionError(GraphQLResponseError):
    """
    Error that prevented execution of an operation.
    """

    def to_dict(self) -> Dict[str, Any]:
        return {"message": str(self)}


class SchemaError(GraphQLError):
    """
    Base class for errors raised while building a schema. These are
    configuration errors and should prevent serving any request.
    """


class SchemaSyntaxError(GraphQLSyntaxError, SchemaError):
    """
    Malformed schema definition text.
    """


class DuplicateDefinitionError(SchemaError):
    """
    A type, field, argument or enum value has been defined more than once.
    """


class UnknownTypeReference(SchemaError):
    """
    A definition refers to a type that is neither declared nor a built-in
    scalar.

    Attributes:
        type_name (str): Type holding the reference
        field_name (Optional[str]): Field (or argument) holding the reference
        reference (str): Unknown type name
    """

    def __init__(
        self, type_name: str, field_name: Optional[str], reference: str
    ):
        if field_name:
            message = 'Unknown type "%s" referenced by "%s.%s"' % (
                reference,
                type_name,
                field_name,
            )
        else:
            message = 'Unknown type "%s" referenced by "%s"' % (
                reference,
                type_name,
            )
        super().__init__(message)
        self.type_name = type_name
        self.field_name = field_name
        self.reference = reference


class UnknownType(SchemaError, KeyError):
    pass


class DuplicateBindingError(SchemaError):
    """
    A resolver or type resolver has already been bound for the same key.
    """


class SchemaFrozenError(SchemaError):
    """
    Attempt to mutate a schema (or binding table) once it has been built.
    """


class SchemaValidationError(SchemaError):
    """
    The type graph and the resolver bindings cannot form a valid executable
    schema.

    Args:
        message: Explanatory message
        errors: Individual problems, defaults to ``[message]``

    Attributes:
        errors (List[str]): Individual problems
    """

    def __init__(self, message: str, errors: Optional[Sequence[str]] = None):
        super().__init__(message)
        self.errors = list(errors) if errors else [message]


class DanglingBindingError(SchemaValidationError):
    """
    A binding refers to a type or field absent from the type graph.
    """


class MissingTypeResolverError(SchemaValidationError):
    """
    An interface or union type has no registered type resolver.
    """
