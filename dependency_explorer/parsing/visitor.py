"""Registry-driven syntax tree visitor that yields dependency facts."""

from __future__ import annotations

import copy
import logging
from typing import Any, Callable

from dependency_explorer.models import DependencyFact, NodeKind, SyntaxNode
from dependency_explorer.parsing.classifier import (
    NodeCategory,
    NodeClassifier,
    constant_reference,
)

logger = logging.getLogger(__name__)

NodeHandler = Callable[[SyntaxNode], Any]


class NodeHandlerRegistry:
    """Mutable mapping of node kind -> handler."""

    def __init__(self):
        self.handlers: dict[str, NodeHandler] = {}

    def register(self, kind: str, handler: NodeHandler) -> None:
        if not callable(handler):
            raise TypeError(f"Handler for {kind!r} must be callable, got {type(handler).__name__}")
        self.handlers[kind] = handler

    def unregister(self, kind: str) -> None:
        self.handlers.pop(kind, None)

    def registered(self, kind: str) -> bool:
        return kind in self.handlers

    def copy(self) -> NodeHandlerRegistry:
        clone = NodeHandlerRegistry()
        clone.handlers = dict(self.handlers)
        return clone

    def handle(self, kind: str, node: SyntaxNode):
        handler = self.handlers.get(kind)
        if handler is None:
            return []
        return handler(node)


class DependencyVisitor:
    """Walks a SyntaxNode tree and returns the dependency facts it contains.

    ``visit`` returns a nested list; ``facts`` flattens it. Handlers for
    additional node kinds can be added through ``registry`` before a
    traversal starts.
    """

    def __init__(self, classifier: NodeClassifier | None = None):
        self.classifier = classifier or NodeClassifier()
        self.registry = NodeHandlerRegistry()
        self._register_default_handlers()

    def visit(self, node) -> list:
        category = self.classifier.classify(node)
        if category in (NodeCategory.NIL, NodeCategory.PRIMITIVE):
            return []
        if not isinstance(node, SyntaxNode):
            logger.debug("Skipping unsupported tree value %r", node)
            return []

        if self.registry.registered(node.kind):
            result = self.registry.handle(node.kind, node)
            return result if isinstance(result, list) else [result]
        return self.visit_children(node)

    def visit_children(self, node: SyntaxNode) -> list:
        return [self.visit(child) for child in node.children]

    def facts(self, node) -> list[DependencyFact | str]:
        """Visit ``node`` and flatten the result into a list of facts."""
        return list(flatten(self.visit(node)))

    def copy(self) -> DependencyVisitor:
        """Independent visitor with the same classifier and handlers.

        Handlers bound to this visitor are rebound to the copy.
        """
        clone = copy.copy(self)
        clone.registry = self.registry.copy()
        for kind, handler in self.registry.handlers.items():
            if getattr(handler, "__self__", None) is self:
                clone.registry.register(kind, getattr(clone, handler.__name__))
        return clone

    def _register_default_handlers(self) -> None:
        self.registry.register(NodeKind.CONST, self._visit_const)
        self.registry.register(NodeKind.SEND, self._visit_send)

    def _visit_const(self, node: SyntaxNode):
        return constant_reference(node)

    def _visit_send(self, node: SyntaxNode):
        fact = self.classifier.call_fact(node)
        if fact is not None:
            return fact
        return self.visit_children(node)


def flatten(results):
    """Yield facts from an arbitrarily nested visitor result."""
    if isinstance(results, list):
        for item in results:
            yield from flatten(item)
    elif results is not None:
        yield results
