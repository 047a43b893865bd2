"""Per-class accumulation of dependency facts into ordered groups."""

from __future__ import annotations

from dependency_explorer.models import DependencyFact


class DependencyAccumulator:
    """Collects facts for one declaring class.

    Groups keep the order in which each target was first seen; repeated
    references to a target extend that target's member list.
    """

    def __init__(self):
        self._groups: dict[str, list[str]] = {}

    def record(self, target: str, members=()) -> None:
        if isinstance(members, str):
            members = [members]
        group = self._groups.setdefault(target, [])
        for member in members:
            if member not in group:
                group.append(member)

    def record_fact(self, fact) -> None:
        if isinstance(fact, DependencyFact):
            self.record(fact.target, fact.members)
        elif isinstance(fact, str):
            # Bare constant reference, e.g. a superclass
            self.record(fact, [])
        elif isinstance(fact, dict):
            for target, members in fact.items():
                self.record(target, members)
        elif isinstance(fact, tuple) and len(fact) == 2:
            self.record(fact[0], fact[1])
        else:
            raise TypeError(f"Unsupported dependency fact: {fact!r}")

    def record_all(self, facts) -> None:
        for fact in facts:
            self.record_fact(fact)

    def to_grouped_list(self) -> list[dict[str, list[str]]]:
        return [{target: list(members)} for target, members in self._groups.items()]

    def __len__(self) -> int:
        return len(self._groups)
