"""Data models for skill records, profiles and validation results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Category(str, Enum):
    """Category a skill belongs to."""

    CORE = "core"
    RECOMMENDED = "recommended"
    SPECIALIST = "specialist"
    COMPOSITION = "composition"
    META = "meta"

    @classmethod
    def values(cls) -> List[str]:
        return [c.value for c in cls]


class SkillEntry(BaseModel):
    """
    A single skill as listed in skills.json.

    Frontmatter fields that the validator checks are kept as loaded so that
    malformed values can be reported instead of rejected. Whether a key was
    present at all is available from ``model_fields_set``.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    name: str = Field(..., description="Unique skill name")
    version: Any = Field(None, description="Semantic version")
    description: Any = Field(default="", description="What the skill does")
    category: Any = Field(None, description="One of Category")
    core: Any = Field(default=False, description="Whether the skill is mandatory")
    tier: Any = Field(None, description="Rank between 0 and 3")
    protocol: Any = Field(None, description="Protocol name")
    dependencies: List[str] = Field(
        default_factory=list, description="Names of required skills"
    )
    path: Optional[str] = Field(None, description="Skill path relative to root")
    references: List[str] = Field(default_factory=list)
    shared_resources: List[str] = Field(default_factory=list, alias="sharedResources")
    compatibility: List[str] = Field(default_factory=list)
    license: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("dependencies", mode="before")
    @classmethod
    def normalize_dependencies(cls, v: Any) -> List[str]:
        """Anything but a list means no dependencies; names are compared as text."""
        if not isinstance(v, list):
            return []
        return [str(dep) for dep in v]

    @property
    def category_enum(self) -> Optional[Category]:
        """The category as a Category, or None if absent or not a member."""
        try:
            return Category(self.category)
        except (ValueError, TypeError):
            return None

    @property
    def is_core(self) -> bool:
        return self.core is True

    def __repr__(self) -> str:
        return f"<SkillEntry name='{self.name}' version='{self.version}'>"


class ProfileDefinition(BaseModel):
    """
    A named, reusable selection of skills.

    A profile may extend another profile, inheriting its skill list.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str = Field(..., description="Unique profile name")
    description: str = Field(default="", description="Human-readable description")
    extends: Optional[str] = Field(None, description="Parent profile name")
    skills: List[str] = Field(
        default_factory=list, description="Skills directly included"
    )
    include_shared: bool = Field(default=True, alias="includeShared")
    include_protocols: List[str] = Field(
        default_factory=list, alias="includeProtocols"
    )


class IssueLevel(str, Enum):
    """Validation issue severity."""

    ERROR = "error"
    WARN = "warn"


@dataclass
class ValidationIssue:
    """A single problem found in a skill's frontmatter."""

    level: IssueLevel
    field: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"level": self.level.value, "field": self.field, "message": self.message}

    def __str__(self) -> str:
        prefix = "ERROR" if self.level == IssueLevel.ERROR else "WARN "
        return f"{prefix} [{self.field}] {self.message}"


@dataclass
class ValidationResult:
    """Outcome of validating one skill."""

    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        """True when no issue is an error."""
        return not any(i.level == IssueLevel.ERROR for i in self.issues)

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.level == IssueLevel.ERROR]

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.level == IssueLevel.WARN]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "issues": [issue.to_dict() for issue in self.issues],
        }
