"""FrontmatterValidator - checks skill records against the frontmatter rules."""

import re
from numbers import Real
from typing import Any, Callable, Dict, List, Optional

from .models import (
    Category,
    IssueLevel,
    SkillEntry,
    ValidationIssue,
    ValidationResult,
)
from .registry import SkillRegistry

SEMVER_PATTERN = re.compile(r"\d+\.\d+\.\d+")
MAX_DESCRIPTION_LENGTH = 1024
MIN_TIER = 0
MAX_TIER = 3


def _type_name(value: Any) -> str:
    return "null" if value is None else type(value).__name__


def description_length(text: str) -> int:
    """Length in UTF-16 code units, the unit the 1024 limit is defined in."""
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


class FrontmatterValidator:
    """
    Validate skill frontmatter.

    Checks:
    - Required fields (name, description)
    - Version format
    - Category, core and tier values
    - Dependency references against the registry
    - Protocol references (optional)

    Data problems are reported as issues, never raised.
    """

    def __init__(
        self,
        registry: SkillRegistry,
        protocol_exists: Optional[Callable[[str], bool]] = None,
    ) -> None:
        """
        Initialize validator.

        Args:
            registry: Registry holding the skills to validate
            protocol_exists: Optional check used for protocol references
        """
        self.registry = registry
        self.protocol_exists = protocol_exists

    def validate(self, name: str) -> ValidationResult:
        """
        Validate a single skill by name.

        Args:
            name: Skill name

        Returns:
            ValidationResult with every issue found
        """
        skill = self.registry.get(name)
        if skill is None:
            return ValidationResult(
                issues=[
                    ValidationIssue(
                        IssueLevel.ERROR, "name", f"Skill '{name}' not found"
                    )
                ]
            )

        issues: List[ValidationIssue] = []
        self._validate_required(skill, issues)
        self._validate_version(skill, issues)
        self._validate_category(skill, issues)
        self._validate_core(skill, issues)
        self._validate_tier(skill, issues)
        self._validate_dependencies(skill, issues)
        self._validate_protocol(skill, issues)
        self._validate_description_length(skill, issues)

        return ValidationResult(issues=issues)

    def validate_all(self) -> Dict[str, ValidationResult]:
        """Validate every registered skill, keyed by name in registry order."""
        return {name: self.validate(name) for name in self.registry.list_skills()}

    def _validate_required(
        self, skill: SkillEntry, issues: List[ValidationIssue]
    ) -> None:
        if not skill.name:
            issues.append(ValidationIssue(IssueLevel.ERROR, "name", "Missing name"))
        if not skill.description:
            issues.append(
                ValidationIssue(IssueLevel.ERROR, "description", "Missing description")
            )

    def _validate_version(
        self, skill: SkillEntry, issues: List[ValidationIssue]
    ) -> None:
        version = skill.version
        if not version:
            issues.append(
                ValidationIssue(IssueLevel.WARN, "version", "Missing version")
            )
        elif not isinstance(version, str) or not SEMVER_PATTERN.fullmatch(version):
            issues.append(
                ValidationIssue(
                    IssueLevel.WARN, "version", f"Invalid semver: {version}"
                )
            )

    def _validate_category(
        self, skill: SkillEntry, issues: List[ValidationIssue]
    ) -> None:
        if skill.category and skill.category_enum is None:
            issues.append(
                ValidationIssue(
                    IssueLevel.ERROR,
                    "category",
                    f"Invalid category '{skill.category}', must be one of: "
                    f"{', '.join(Category.values())}",
                )
            )

    def _validate_core(
        self, skill: SkillEntry, issues: List[ValidationIssue]
    ) -> None:
        if "core" in skill.model_fields_set and not isinstance(skill.core, bool):
            issues.append(
                ValidationIssue(
                    IssueLevel.ERROR,
                    "core",
                    f"core must be boolean, got {_type_name(skill.core)}",
                )
            )

    def _validate_tier(
        self, skill: SkillEntry, issues: List[ValidationIssue]
    ) -> None:
        if "tier" not in skill.model_fields_set:
            return

        tier = skill.tier
        # bool is a Real subclass but not a tier
        is_number = isinstance(tier, Real) and not isinstance(tier, bool)
        if not is_number or tier < MIN_TIER or tier > MAX_TIER:
            shown = "null" if tier is None else tier
            issues.append(
                ValidationIssue(
                    IssueLevel.WARN,
                    "tier",
                    f"Tier should be {MIN_TIER}-{MAX_TIER}, got {shown}",
                )
            )

    def _validate_dependencies(
        self, skill: SkillEntry, issues: List[ValidationIssue]
    ) -> None:
        for dep in skill.dependencies:
            if dep not in self.registry:
                issues.append(
                    ValidationIssue(
                        IssueLevel.ERROR, "dependencies", f"Unknown dependency: {dep}"
                    )
                )

    def _validate_protocol(
        self, skill: SkillEntry, issues: List[ValidationIssue]
    ) -> None:
        if self.protocol_exists is None:
            return  # Skip if no protocol lookup provided

        if skill.protocol and skill.protocol != "null":
            if not self.protocol_exists(skill.protocol):
                issues.append(
                    ValidationIssue(
                        IssueLevel.WARN,
                        "protocol",
                        f"Protocol file not found: {skill.protocol}.md",
                    )
                )

    def _validate_description_length(
        self, skill: SkillEntry, issues: List[ValidationIssue]
    ) -> None:
        if not isinstance(skill.description, str):
            return

        length = description_length(skill.description)
        if length > MAX_DESCRIPTION_LENGTH:
            issues.append(
                ValidationIssue(
                    IssueLevel.ERROR,
                    "description",
                    f"Description too long: {length} chars "
                    f"(max {MAX_DESCRIPTION_LENGTH})",
                )
            )
