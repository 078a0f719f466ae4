"""Skill Registry - name-indexed store of skill records and dependency closure."""

from collections import deque
from typing import Any, Deque, Dict, Iterable, Iterator, List, Optional, Union

from .errors import SkillNotFoundError
from .models import Category, SkillEntry


class SkillRegistry:
    """
    Registry of skill records.

    Allows registration and lookup of skills by name, filtering, and
    resolution of transitive dependencies.

    Example:
        registry = SkillRegistry.from_records(index["skills"])

        registry.get("ct-research-agent")
        registry.resolve_dependency_tree(["ct-orchestrator"])
    """

    def __init__(self) -> None:
        self._skills: Dict[str, SkillEntry] = {}

    @classmethod
    def from_records(
        cls, records: Iterable[Union[SkillEntry, Dict[str, Any]]]
    ) -> "SkillRegistry":
        """
        Build a registry from skill entries or raw skills.json records.

        Raises:
            pydantic.ValidationError: If a raw record is malformed
            ValueError: If two records share a name
        """
        registry = cls()
        for record in records:
            if not isinstance(record, SkillEntry):
                record = SkillEntry.model_validate(record)
            registry.register(record)
        return registry

    def register(self, entry: SkillEntry) -> SkillEntry:
        """Register a skill record."""
        if not isinstance(entry, SkillEntry):
            raise TypeError(f"{entry!r} must be a SkillEntry")

        if entry.name in self._skills:
            raise ValueError(f"Skill '{entry.name}' is already registered")

        self._skills[entry.name] = entry
        return entry

    def get(self, name: str) -> Optional[SkillEntry]:
        """Get a skill by name."""
        return self._skills.get(name)

    def get_or_raise(self, name: str) -> SkillEntry:
        """Get a skill by name, raising if not found."""
        entry = self.get(name)
        if entry is None:
            raise SkillNotFoundError(name, self.list_skills())
        return entry

    def list_skills(self) -> List[str]:
        """List all registered skill names."""
        return list(self._skills.keys())

    def core_skills(self) -> List[SkillEntry]:
        """All skills marked as core."""
        return [s for s in self._skills.values() if s.is_core]

    def skills_by_category(self, category: Union[Category, str]) -> List[SkillEntry]:
        """Skills whose category matches exactly."""
        if isinstance(category, Category):
            category = category.value
        return [s for s in self._skills.values() if s.category == category]

    def get_dependencies(self, name: str) -> List[str]:
        """Direct dependencies of a skill; empty for unknown names."""
        entry = self.get(name)
        if entry is None:
            return []
        return list(entry.dependencies)

    def resolve_dependency_tree(self, names: Iterable[str]) -> List[str]:
        """
        Resolve the transitive dependency closure of a set of skill names.

        Breadth-first; every seed is included even if it is not registered.
        Unknown names contribute no further dependencies and cycles are
        skipped, so this never raises.

        Args:
            names: Initial skill names

        Returns:
            Deduplicated names in first-visit order
        """
        resolved: Dict[str, None] = {}
        queue: Deque[str] = deque(names)

        while queue:
            current = queue.popleft()
            if current in resolved:
                continue
            resolved[current] = None

            for dep in self.get_dependencies(current):
                if dep not in resolved:
                    queue.append(dep)

        return list(resolved)

    def __contains__(self, name: object) -> bool:
        return name in self._skills

    def __len__(self) -> int:
        return len(self._skills)

    def __iter__(self) -> Iterator[SkillEntry]:
        return iter(self._skills.values())
