"""Syntax tree traversal and dependency extraction."""

from __future__ import annotations

from dependency_explorer.parsing.accumulator import DependencyAccumulator
from dependency_explorer.parsing.classifier import NodeCategory, NodeClassifier
from dependency_explorer.parsing.discovery import discover, extract_dependencies
from dependency_explorer.parsing.visitor import DependencyVisitor, NodeHandlerRegistry

__all__ = [
    "DependencyAccumulator",
    "DependencyVisitor",
    "NodeCategory",
    "NodeClassifier",
    "NodeHandlerRegistry",
    "discover",
    "extract_dependencies",
]
