"""Data models for the dependency-explorer pipeline."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union


class NodeKind:
    """Node kinds produced by the Ruby parser adapter."""
    CONST = "const"
    SEND = "send"
    CLASS = "class"
    MODULE = "module"
    SYM = "sym"
    STR = "str"
    DEF = "def"
    DEFS = "defs"
    BEGIN = "begin"
    BLOCK = "block"
    ARGS = "args"


DECLARATION_KINDS = frozenset({NodeKind.CLASS, NodeKind.MODULE})

DEFAULT_SKIP_DIRS = (
    ".git", "node_modules", "vendor", "tmp", "log",
    "coverage", ".bundle", "public",
)

RELATIONSHIP_MACROS = (
    "belongs_to",
    "has_many",
    "has_one",
    "has_and_belongs_to_many",
)


@dataclass(frozen=True)
class SyntaxNode:
    """A parsed syntax tree node: a kind tag plus ordered children."""
    kind: str
    children: tuple = ()

    def child(self, index: int):
        if index < len(self.children):
            return self.children[index]
        return None

    def __repr__(self) -> str:
        inner = " ".join(repr(c) for c in self.children)
        return f"({self.kind} {inner})" if inner else f"({self.kind})"


Primitive = Union[str, int, float, bool]


@dataclass(frozen=True)
class DependencyFact:
    """One observed reference from the visited class to ``target``."""
    target: str
    members: tuple[str, ...] = ()


@dataclass
class ClassInfo:
    """A discovered class or module declaration."""
    qualified_name: str
    node: SyntaxNode
    namespace_path: list[str] = field(default_factory=list)
    kind: str = NodeKind.CLASS

    @property
    def short_name(self) -> str:
        return self.qualified_name.rsplit("::", 1)[-1]


class Severity(enum.Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass
class NamespaceCycle:
    """A cycle whose participants span more than one namespace."""
    cycle: list[str]
    namespaces: list[str]
    severity: Severity

    def to_dict(self) -> dict:
        return {
            "cycle": list(self.cycle),
            "namespaces": list(self.namespaces),
            "severity": self.severity.value,
        }


@dataclass
class BoundaryViolation:
    """A single dependency edge that crosses a namespace boundary."""
    source_class: str
    target_class: str
    source_namespace: str
    target_namespace: str
    severity: Severity
    recommendation: str = ""

    def to_dict(self) -> dict:
        return {
            "source_class": self.source_class,
            "target_class": self.target_class,
            "source_namespace": self.source_namespace,
            "target_namespace": self.target_namespace,
            "severity": self.severity.value,
            "recommendation": self.recommendation,
        }


@dataclass
class AnalysisConfig:
    """Configuration for a dependency analysis run."""
    source_dir: Path = field(default_factory=lambda: Path("."))
    pattern: str = "*.rb"
    recursive: bool = True
    relationship_macros: tuple[str, ...] = RELATIONSHIP_MACROS
    relationship_prefix: str = "Relationship::"
    external_prefix: str = "External::"
    rails_aware: bool = False
    normalize_cycles: bool = False
    skip_dirs: list[str] = field(default_factory=lambda: list(DEFAULT_SKIP_DIRS))
