"""Namespace-aware discovery of class and module declarations."""

from __future__ import annotations

from dependency_explorer.models import (
    DECLARATION_KINDS,
    ClassInfo,
    NodeKind,
    SyntaxNode,
)
from dependency_explorer.parsing.accumulator import DependencyAccumulator
from dependency_explorer.parsing.classifier import constant_segments
from dependency_explorer.parsing.visitor import DependencyVisitor


class NamespaceStack:
    """Immutable stack of enclosing namespace segments."""

    def __init__(self, segments=()):
        self._segments = tuple(segments)

    @property
    def segments(self) -> list[str]:
        return list(self._segments)

    def qualify(self, name: str) -> str:
        return "::".join(self._segments + (name,))

    def push(self, name: str) -> NamespaceStack:
        return NamespaceStack(self._segments + tuple(name.split("::")))

    def __len__(self) -> int:
        return len(self._segments)


def is_declaration(node) -> bool:
    return isinstance(node, SyntaxNode) and node.kind in DECLARATION_KINDS


def declared_name(node: SyntaxNode) -> str:
    """Name written in a declaration header (``Admin::User`` for compact style)."""
    return "::".join(constant_segments(node.child(0)))


def body_nodes(node: SyntaxNode) -> tuple:
    # class: (name, superclass, body); module: (name, body)
    start = 2 if node.kind == NodeKind.CLASS else 1
    return node.children[start:]


def has_meaningful_definitions(node) -> bool:
    if not isinstance(node, SyntaxNode):
        return False
    if node.kind in (NodeKind.DEF, NodeKind.DEFS, NodeKind.SEND):
        return True
    if node.kind == NodeKind.BEGIN:
        return any(has_meaningful_definitions(child) for child in node.children)
    return False


def has_meaningful_content(node: SyntaxNode) -> bool:
    """True when a declaration body defines methods or calls macros."""
    return any(has_meaningful_definitions(child) for child in body_nodes(node))


def discover(tree, namespace: NamespaceStack | None = None) -> list[ClassInfo]:
    """Find declarations with meaningful content, in source order."""
    if tree is None:
        return []
    return [
        info for info in _walk(tree, namespace or NamespaceStack())
        if has_meaningful_content(info.node)
    ]


def discover_all(tree, namespace: NamespaceStack | None = None) -> list[ClassInfo]:
    """Find every declaration, including empty namespace modules."""
    if tree is None:
        return []
    return list(_walk(tree, namespace or NamespaceStack()))


def _walk(node, namespace: NamespaceStack):
    if not isinstance(node, SyntaxNode):
        return

    if is_declaration(node):
        name = declared_name(node)
        if name:
            yield ClassInfo(
                qualified_name=namespace.qualify(name),
                node=node,
                namespace_path=namespace.segments,
                kind=node.kind,
            )
            inner = namespace.push(name)
        else:
            inner = namespace
        for child in node.children[1:]:
            yield from _walk(child, inner)
        return

    for child in node.children:
        yield from _walk(child, namespace)


def _skip_nested_declaration(node: SyntaxNode) -> list:
    return []


def declaration_visitor(visitor: DependencyVisitor | None = None) -> DependencyVisitor:
    """Visitor that leaves nested declarations to their own entries.

    A given ``visitor`` is copied; its own registry is left untouched.
    """
    visitor = visitor.copy() if visitor is not None else DependencyVisitor()
    for kind in DECLARATION_KINDS:
        visitor.registry.register(kind, _skip_nested_declaration)
    return visitor


def extract_dependencies(
    tree,
    visitor: DependencyVisitor | None = None,
) -> dict[str, list[dict[str, list[str]]]]:
    """Map each discovered declaration to its grouped dependencies.

    The declaration's own name is not visited; its superclass and body are.
    A class reopened in the same tree accumulates into one entry.
    """
    visitor = declaration_visitor(visitor)
    accumulators: dict[str, DependencyAccumulator] = {}

    for info in discover(tree):
        accumulator = accumulators.setdefault(info.qualified_name, DependencyAccumulator())
        for child in info.node.children[1:]:
            accumulator.record_all(visitor.facts(child))

    return {name: acc.to_grouped_list() for name, acc in accumulators.items()}
