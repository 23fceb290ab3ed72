# -*- coding: utf-8 -*-
"""
Visitors provide abstractions for traversing a GraphQL AST.
"""

import re
from typing import Any, Callable, Dict, Optional, Type

from ..exc import GraphQLError
from . import ast as _ast

__all__ = ("SkipNode", "ASTVisitor", "DispatchingVisitor", "ChainedVisitor")

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


class SkipNode(GraphQLError):
    """
    Raise this from :meth:`ASTVisitor.enter` to ignore the node and all its
    children; :meth:`ASTVisitor.leave` is not called for that node.
    """


class ASTVisitor:
    """
    Base visitor class, traversing nodes depth first in the order their
    attributes are declared.
    """

    def enter(self, node: _ast.Node) -> None:
        """
        Called before a node's children are visited. Raise
        :class:`SkipNode` to prevent visiting them.
        """

    def leave(self, node: _ast.Node) -> None:
        """
        Called after a node's children have been visited.
        """

    def visit(self, node: _ast.Node) -> None:
        """
        Apply the visitor to a node and its children.

        Warning:
            In general you should not override this method as this is where
            traversal of a node's children and orchestration around
            :meth:`enter` and :meth:`leave` is encoded.
        """
        try:
            self.enter(node)
        except SkipNode:
            return

        for _, child in node.children():
            if isinstance(child, _ast.Node):
                self.visit(child)
            elif isinstance(child, list):
                for entry in child:
                    if isinstance(entry, _ast.Node):
                        self.visit(entry)

        self.leave(node)


_METHOD_NAMES = {}  # type: Dict[Type[_ast.Node], str]


def _method_suffix(cls: Type[_ast.Node]) -> str:
    try:
        return _METHOD_NAMES[cls]
    except KeyError:
        suffix = _METHOD_NAMES[cls] = _CAMEL_BOUNDARY.sub(
            "_", cls.__name__
        ).lower()
        return suffix


class DispatchingVisitor(ASTVisitor):
    """
    Base class for specialised visitors.

    You should subclass this and implement methods named ``enter_*`` and
    ``leave_*`` where ``*`` represents the node class to be handled.
    For instance to process :class:`gqlwire.lang.ast.FloatValue` nodes,
    implement ``enter_float_value``.

    Default behaviour is noop for all node types.
    """

    def _handler(
        self, prefix: str, node: _ast.Node
    ) -> Optional[Callable[[Any], None]]:
        return getattr(
            self, "%s_%s" % (prefix, _method_suffix(type(node))), None
        )

    def enter(self, node: _ast.Node) -> None:
        handler = self._handler("enter", node)
        if handler is not None:
            handler(node)

    def leave(self, node: _ast.Node) -> None:
        handler = self._handler("leave", node)
        if handler is not None:
            handler(node)


class ChainedVisitor(ASTVisitor):
    """Run multiple visitor instances over a single traversal.

    - ``enter`` is called in order and ``leave`` in reverse order.
    - Raising :class:`SkipNode` in one of them skips the node for all of them;
      the visitors which already entered the node are left immediately.

    Args:
        *visitors: List of visitors to run.

    Attributes:
        visitors (Tuple[ASTVisitor, ...]): Children visitors.
    """

    def __init__(self, *visitors: ASTVisitor):
        self.visitors = tuple(visitors)

    def enter(self, node: _ast.Node) -> None:
        for index, visitor in enumerate(self.visitors):
            try:
                visitor.enter(node)
            except SkipNode:
                for entered in reversed(self.visitors[:index]):
                    entered.leave(node)
                raise

    def leave(self, node: _ast.Node) -> None:
        for visitor in reversed(self.visitors):
            visitor.leave(node)
