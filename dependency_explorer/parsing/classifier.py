"""Node classification for dependency extraction.

Decides whether a syntax tree value is a primitive, a constant reference, a
method call that yields a dependency, or something that needs recursive
descent.
"""

from __future__ import annotations

import enum
import re

from dependency_explorer.models import (
    RELATIONSHIP_MACROS,
    DependencyFact,
    NodeKind,
    SyntaxNode,
)

# SCREAMING_SNAKE_CASE with at least one underscore; all-caps acronyms
# such as HTTP or API are class names
_VALUE_CONSTANT = re.compile(r"^[A-Z][A-Z0-9]*(?:_[A-Z0-9]+)+$")


class NodeCategory(enum.Enum):
    NIL = "nil"
    PRIMITIVE = "primitive"
    CONSTANT = "constant"
    MEMBER_CALL = "member_call"
    OTHER = "other"


class CallShape(enum.Enum):
    DIRECT = "direct"
    CHAINED = "chained"
    RELATIONSHIP = "relationship"
    OTHER = "other"


def is_primitive(value) -> bool:
    return isinstance(value, (str, int, float, bool))


def is_kind(value, kind: str) -> bool:
    return isinstance(value, SyntaxNode) and value.kind == kind


def classify(node) -> NodeCategory:
    if node is None:
        return NodeCategory.NIL
    if is_primitive(node):
        return NodeCategory.PRIMITIVE
    if not isinstance(node, SyntaxNode):
        return NodeCategory.OTHER
    if node.kind == NodeKind.CONST:
        return NodeCategory.CONSTANT
    if node.kind == NodeKind.SEND:
        return NodeCategory.MEMBER_CALL
    return NodeCategory.OTHER


def constant_segments(node) -> list[str]:
    """Walk a ``const`` scope chain, outermost segment first."""
    parts: list[str] = []
    current = node
    while is_kind(current, NodeKind.CONST):
        parts.insert(0, str(current.child(1)))
        current = current.child(0)
    return parts


def constant_name(node) -> str:
    """Fully qualified name of a constant reference, e.g. ``A::B::C``."""
    return "::".join(constant_segments(node))


def constant_reference(node) -> str | DependencyFact:
    """Dependency produced by a constant used on its own.

    ``Foo`` and ``Services::UserService`` are class references. A scoped
    value constant such as ``Config::MAX_HEALTH`` is recorded as an access
    on its owner. Acronym class names (``Net::HTTP``) stay class references.
    """
    parts = constant_segments(node)
    if len(parts) > 1 and _VALUE_CONSTANT.match(parts[-1]):
        return DependencyFact("::".join(parts[:-1]), (parts[-1],))
    return "::".join(parts)


def model_name(symbol_name: str) -> str:
    """Convert an association symbol (``:posts``) to a model name (``Post``)."""
    name = symbol_name[1:] if symbol_name.startswith(":") else symbol_name
    if name.endswith("ies"):
        name = name[:-3] + "y"
    elif name.endswith("s"):
        name = name[:-1]
    return name.capitalize()


class NodeClassifier:
    """Sub-classifies method calls and builds the facts they produce."""

    def __init__(
        self,
        relationship_macros=RELATIONSHIP_MACROS,
        relationship_prefix: str = "Relationship::",
    ):
        self.relationship_macros = frozenset(relationship_macros)
        self.relationship_prefix = relationship_prefix

    def classify(self, node) -> NodeCategory:
        return classify(node)

    def call_shape(self, node: SyntaxNode) -> CallShape:
        receiver = node.child(0)
        if is_kind(receiver, NodeKind.CONST):
            return CallShape.DIRECT
        if is_kind(receiver, NodeKind.SEND) and is_kind(receiver.child(0), NodeKind.CONST):
            return CallShape.CHAINED
        if receiver is None and str(node.child(1)) in self.relationship_macros:
            return CallShape.RELATIONSHIP
        return CallShape.OTHER

    def call_fact(self, node: SyntaxNode) -> DependencyFact | None:
        """Return the fact for a dependency-bearing call, else ``None``."""
        shape = self.call_shape(node)
        if shape is CallShape.DIRECT:
            return DependencyFact(constant_name(node.child(0)), (str(node.child(1)),))
        if shape is CallShape.CHAINED:
            # GameState.current.update: only the first hop is tracked
            receiver = node.child(0)
            return DependencyFact(constant_name(receiver.child(0)), (str(receiver.child(1)),))
        if shape is CallShape.RELATIONSHIP:
            return self.relationship_fact(node)
        return None

    def relationship_fact(self, node: SyntaxNode) -> DependencyFact:
        macro = str(node.child(1))
        first_arg = node.child(2)
        if is_kind(first_arg, NodeKind.SYM):
            target_model = model_name(str(first_arg.child(0)))
        else:
            target_model = "Unknown"
        return DependencyFact(self.relationship_prefix + macro, (target_model,))

    def is_relationship(self, target: str) -> bool:
        return target.startswith(self.relationship_prefix)
