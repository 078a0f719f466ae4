"""Profile loading and resolution."""

import json
from pathlib import Path
from typing import Callable, Dict, List, Optional, Set, Union

import yaml
from pydantic import ValidationError

from .errors import ProfileLoadError
from .models import ProfileDefinition
from .registry import SkillRegistry

ProfileSource = Callable[[str], Optional[ProfileDefinition]]

PROFILE_SUFFIXES = (".json", ".yaml", ".yml")


class ProfileStore:
    """
    Loads profile definitions from a directory of named files.

    Each profile lives in ``<profiles_dir>/<name>.json`` (or ``.yaml``/``.yml``).
    A store instance is callable, so it can be passed directly to
    ProfileResolver as its source.

    Example:
        store = ProfileStore("profiles")
        store.list_profiles()   # ["core", "full", "minimal", "recommended"]
        store.load("core")
    """

    def __init__(self, profiles_dir: Union[str, Path]) -> None:
        self.profiles_dir = Path(profiles_dir)

    def list_profiles(self) -> List[str]:
        """List available profile names, sorted."""
        if not self.profiles_dir.is_dir():
            return []
        return sorted(
            {
                p.stem
                for p in self.profiles_dir.iterdir()
                if p.is_file() and p.suffix in PROFILE_SUFFIXES
            }
        )

    def find(self, name: str) -> Optional[Path]:
        """Path of the file defining a profile, or None."""
        for suffix in PROFILE_SUFFIXES:
            path = self.profiles_dir / f"{name}{suffix}"
            if path.is_file():
                return path
        return None

    def load(self, name: str) -> Optional[ProfileDefinition]:
        """
        Load a profile definition by name.

        Returns:
            The profile, or None if no file defines it

        Raises:
            ProfileLoadError: If the file exists but cannot be parsed
        """
        path = self.find(name)
        if path is None:
            return None

        try:
            content = path.read_text(encoding="utf-8")
            if path.suffix == ".json":
                data = json.loads(content)
            else:
                data = yaml.safe_load(content)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ProfileLoadError(name, path, e) from e

        if not isinstance(data, dict):
            raise ProfileLoadError(
                name, path, TypeError("profile must be a mapping")
            )

        data.setdefault("name", name)
        try:
            return ProfileDefinition.model_validate(data)
        except ValidationError as e:
            raise ProfileLoadError(name, path, e) from e

    def __call__(self, name: str) -> Optional[ProfileDefinition]:
        return self.load(name)


class ProfileResolver:
    """
    Resolves profiles to the full list of skills they install.

    Owns a cache of profile definitions; each profile is fetched from the
    source at most once and kept for the lifetime of the resolver. Profiles
    that are not found are not cached.
    """

    def __init__(self, registry: SkillRegistry, source: ProfileSource) -> None:
        """
        Initialize the resolver.

        Args:
            registry: Registry used for dependency closure
            source: Callable returning a profile definition or None
        """
        self.registry = registry
        self._source = source
        self._cache: Dict[str, ProfileDefinition] = {}

    def get_profile(self, name: str) -> Optional[ProfileDefinition]:
        """Get a profile definition by name, loading it on first use."""
        if name in self._cache:
            return self._cache[name]

        profile = self._source(name)
        if profile is None:
            return None

        self._cache[name] = profile
        return profile

    def collect_skills(self, name: str) -> List[str]:
        """
        Skills nominally selected by a profile and its extends chain.

        The chain stops at the first missing profile or at the first profile
        already visited.
        """
        selected: Dict[str, None] = {}
        visited: Set[str] = set()

        current: Optional[str] = name
        while current and current not in visited:
            visited.add(current)
            profile = self.get_profile(current)
            if profile is None:
                break

            for skill_name in profile.skills:
                selected[skill_name] = None
            current = profile.extends

        return list(selected)

    def resolve_profile(self, name: str) -> List[str]:
        """
        Resolve a profile to its full skill list.

        Follows the extends chain, then adds transitive dependencies of
        every selected skill.

        Args:
            name: Profile name

        Returns:
            Deduplicated skill names
        """
        return self.registry.resolve_dependency_tree(self.collect_skills(name))

    def clear_cache(self) -> None:
        """Drop cached profile definitions (mainly for testing)."""
        self._cache.clear()
