"""Namespace boundary analysis: cross-namespace cycles and boundary violations."""

from __future__ import annotations

import logging
from typing import Callable

from dependency_explorer.analysis.cycles import find_cycles
from dependency_explorer.analysis.graph_builder import (
    DependencyGraphBuilder,
    iter_groups,
    validate_dependency_data,
)
from dependency_explorer.models import BoundaryViolation, NamespaceCycle, Severity

logger = logging.getLogger(__name__)

DEFAULT_EXTERNAL_PREFIX = "External::"
DEFAULT_RELATIONSHIP_PREFIX = "Relationship::"

# Penalty per violation for the boundary health score
PENALTIES = {
    Severity.HIGH: 3.0,
    Severity.MEDIUM: 2.0,
    Severity.LOW: 1.0,
}
PERFECT_HEALTH_SCORE = 10.0
WORST_HEALTH_SCORE = 0.0


def namespace_of(class_name: str) -> str:
    """``App::Models::User`` -> ``App::Models``; root-level classes -> ``""``."""
    parts = class_name.split("::")
    if len(parts) <= 1:
        return ""
    return "::".join(parts[:-1])


def short_name(class_name: str) -> str:
    return class_name.split("::")[-1]


def cycle_namespaces(cycle: list[str], namespace_fn: Callable[[str], str] = namespace_of) -> list[str]:
    """Distinct namespaces of a cycle's participants, in order of appearance."""
    seen: list[str] = []
    # The last element repeats the first to close the loop
    for class_name in dict.fromkeys(cycle[:-1]):
        ns = namespace_fn(class_name)
        if ns not in seen:
            seen.append(ns)
    return seen


def is_external(namespace: str, external_prefix: str = DEFAULT_EXTERNAL_PREFIX) -> bool:
    bare = external_prefix.rstrip(":")
    return namespace.startswith(external_prefix) or (bool(bare) and namespace == bare)


def cycle_severity(namespaces: list[str], external_prefix: str = DEFAULT_EXTERNAL_PREFIX) -> Severity:
    if any(is_external(ns, external_prefix) for ns in namespaces):
        return Severity.HIGH
    if len(namespaces) > 1:
        return Severity.MEDIUM
    return Severity.LOW


def classify_cycles(
    cycles: list[list[str]],
    namespace_fn: Callable[[str], str] = namespace_of,
    external_prefix: str = DEFAULT_EXTERNAL_PREFIX,
) -> list[NamespaceCycle]:
    """Keep only cycles spanning more than one namespace and rate them."""
    results: list[NamespaceCycle] = []
    for cycle in cycles:
        namespaces = cycle_namespaces(cycle, namespace_fn)
        if len(namespaces) <= 1:
            continue
        results.append(NamespaceCycle(
            cycle=list(cycle),
            namespaces=namespaces,
            severity=cycle_severity(namespaces, external_prefix),
        ))
    return results


class CrossNamespaceCycleAnalyzer:
    """Detects circular dependencies that cross namespace boundaries."""

    def __init__(
        self,
        dependency_data,
        graph_builder: DependencyGraphBuilder | None = None,
        external_prefix: str = DEFAULT_EXTERNAL_PREFIX,
        normalize: bool = False,
    ):
        self.graph = (graph_builder or DependencyGraphBuilder()).build(dependency_data)
        self.external_prefix = external_prefix
        self.normalize = normalize

    def find_cross_namespace_cycles(self) -> list[NamespaceCycle]:
        cycles = find_cycles(self.graph, normalize=self.normalize)
        return classify_cycles(cycles, external_prefix=self.external_prefix)


class NamespaceBoundaryAnalyzer:
    """Flags individual dependencies that cross namespace boundaries.

    Every edge whose source and target live in different namespaces is a
    violation. Dependencies touching the external namespace are ``high``
    severity; other cross-namespace dependencies are ``medium``. Synthetic
    relationship targets are not classes and never count as violations.
    """

    def __init__(self, dependency_data, external_prefix: str = DEFAULT_EXTERNAL_PREFIX,
                 relationship_prefix: str = DEFAULT_RELATIONSHIP_PREFIX):
        dependency_data = dependency_data if dependency_data is not None else {}
        validate_dependency_data(dependency_data)
        self.dependency_data = dependency_data
        self.external_prefix = external_prefix
        self.relationship_prefix = relationship_prefix
        self._violations: list[BoundaryViolation] | None = None

    def analyze(self) -> list[BoundaryViolation]:
        if self._violations is not None:
            return self._violations

        violations: list[BoundaryViolation] = []
        for source_class, groups in self.dependency_data.items():
            if not _valid_class_name(source_class):
                continue
            source_ns = namespace_of(source_class)
            for target_class, _members in iter_groups(groups):
                if not _valid_class_name(target_class) or target_class.startswith(self.relationship_prefix):
                    continue
                target_ns = namespace_of(target_class)
                if source_ns == target_ns:
                    continue
                violations.append(self._violation(source_class, target_class, source_ns, target_ns))

        logger.debug("Found %d namespace boundary violations", len(violations))
        self._violations = violations
        return violations

    boundary_violations = analyze

    def violation_severity(self, source_namespace: str, target_namespace: str) -> Severity:
        if is_external(target_namespace, self.external_prefix):
            return Severity.HIGH
        if is_external(source_namespace, self.external_prefix):
            return Severity.HIGH
        if source_namespace != target_namespace:
            return Severity.MEDIUM
        return Severity.LOW

    def violations_by_namespace_pair(self) -> dict[str, list[BoundaryViolation]]:
        grouped: dict[str, list[BoundaryViolation]] = {}
        for violation in self.analyze():
            key = f"{violation.source_namespace} -> {violation.target_namespace}"
            grouped.setdefault(key, []).append(violation)
        return grouped

    def boundary_health_score(self) -> float:
        """Score from 0.0 (worst) to 10.0 (no violations)."""
        violations = self.analyze()
        if not violations:
            return PERFECT_HEALTH_SCORE

        total_penalty = sum(PENALTIES.get(v.severity, PENALTIES[Severity.LOW]) for v in violations)
        penalty_factor = min(total_penalty / 10.0, PERFECT_HEALTH_SCORE)
        return max(PERFECT_HEALTH_SCORE - penalty_factor, WORST_HEALTH_SCORE)

    def _violation(self, source_class: str, target_class: str,
                   source_ns: str, target_ns: str) -> BoundaryViolation:
        severity = self.violation_severity(source_ns, target_ns)
        return BoundaryViolation(
            source_class=short_name(source_class),
            target_class=short_name(target_class),
            source_namespace=source_ns,
            target_namespace=target_ns,
            severity=severity,
            recommendation=self._recommendation(target_ns, severity),
        )

    def _recommendation(self, target_namespace: str, severity: Severity) -> str:
        if severity is Severity.HIGH:
            if is_external(target_namespace, self.external_prefix):
                return "Consider introducing an adapter or facade to isolate the external dependency"
            return "High-severity cross-namespace dependency detected; consider architectural refactoring"
        if severity is Severity.MEDIUM:
            return "Consider introducing an interface or service layer to reduce direct cross-namespace coupling"
        return "Review dependency necessity and consider refactoring for better encapsulation"


def _valid_class_name(name) -> bool:
    return isinstance(name, str) and bool(name)
