"""Skills - registry, profile resolution and frontmatter validation."""

from .errors import (
    LibraryLoadError,
    ProfileLoadError,
    SkillNotFoundError,
    SkillRegistryError,
)
from .models import (
    Category,
    IssueLevel,
    ProfileDefinition,
    SkillEntry,
    ValidationIssue,
    ValidationResult,
)
from .profiles import ProfileResolver, ProfileStore
from .registry import SkillRegistry
from .validation import FrontmatterValidator

__all__ = [
    "Category",
    "FrontmatterValidator",
    "IssueLevel",
    "LibraryLoadError",
    "ProfileDefinition",
    "ProfileLoadError",
    "ProfileResolver",
    "ProfileStore",
    "SkillEntry",
    "SkillNotFoundError",
    "SkillRegistry",
    "SkillRegistryError",
    "ValidationIssue",
    "ValidationResult",
]
