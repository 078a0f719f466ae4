"""Custom exceptions for loading and looking up skills."""

from difflib import get_close_matches
from pathlib import Path
from typing import List, Optional, Union


class SkillRegistryError(Exception):
    """Base exception for skill library errors."""

    pass


class SkillNotFoundError(SkillRegistryError, KeyError):
    """
    Raised when a skill is not found in the registry.

    Provides suggestions for close matches and lists available skills.
    """

    def __init__(self, skill_name: str, available_skills: List[str]):
        """
        Initialize SkillNotFoundError.

        Args:
            skill_name: The skill name that was not found
            available_skills: List of all registered skill names
        """
        self.skill_name = skill_name
        self.available_skills = available_skills
        self.suggestions = get_close_matches(
            skill_name, available_skills, n=3, cutoff=0.6
        )

        message = f"Skill '{skill_name}' not found in registry\n"

        if self.suggestions:
            message += "\nDid you mean one of these?\n"
            for suggestion in self.suggestions:
                message += f"  - {suggestion}\n"

        message += f"\nAvailable skills ({len(available_skills)}):\n"
        for name in sorted(available_skills):
            message += f"  - {name}\n"

        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.message


class LibraryLoadError(SkillRegistryError):
    """
    Raised when a library index file cannot be read or validated.
    """

    def __init__(
        self,
        path: Union[str, Path],
        reason: str,
        original_error: Optional[Exception] = None,
    ):
        """
        Initialize LibraryLoadError.

        Args:
            path: The file that failed to load
            reason: Short description of the failure
            original_error: The underlying exception, if any
        """
        self.path = Path(path)
        self.reason = reason
        self.original_error = original_error

        message = f"Failed to load {self.path}: {reason}"
        if original_error is not None:
            message += f"\n  Error: {type(original_error).__name__}: {original_error}"

        super().__init__(message)


class ProfileLoadError(LibraryLoadError):
    """Raised when a profile definition file cannot be parsed."""

    def __init__(
        self,
        profile_name: str,
        path: Union[str, Path],
        original_error: Exception,
    ):
        self.profile_name = profile_name
        super().__init__(path, f"invalid profile '{profile_name}'", original_error)
