"""SkillLibrary - loads a skills library from disk and exposes its API."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from ..skills.errors import LibraryLoadError
from ..skills.models import Category, ProfileDefinition, SkillEntry, ValidationResult
from ..skills.profiles import ProfileResolver, ProfileStore
from ..skills.registry import SkillRegistry
from ..skills.validation import FrontmatterValidator

__version__ = "2.0.0"

SKILLS_INDEX_FILE = "skills.json"
SKILLS_DIR = "skills"
PROFILES_DIR = "profiles"
PROTOCOLS_DIR = "protocols"
SHARED_DIR = "_shared"
MANIFEST_FILE = "manifest.json"
PLACEHOLDERS_FILE = "placeholders.json"
SKILL_FILE = "SKILL.md"


def read_json(path: Path, required: bool = True) -> Any:
    """
    Read and parse a JSON file.

    Args:
        path: File to read
        required: If False, a missing file yields an empty dict

    Raises:
        LibraryLoadError: If the file is missing (when required) or invalid
    """
    if not path.exists():
        if required:
            raise LibraryLoadError(path, "file not found")
        return {}

    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        raise LibraryLoadError(path, "invalid JSON", e) from e


class SkillLibrary:
    """
    A skills library rooted at a directory.

    Layout:
        skills.json                       flat skills index
        skills/<name>/SKILL.md            skill content
        skills/manifest.json              dispatch manifest
        skills/_shared/placeholders.json  shared placeholder data
        profiles/<name>.json              profile definitions
        protocols/<name>.md               protocol files

    Example:
        library = SkillLibrary.load("/path/to/library")

        library.get_skill("ct-research-agent")
        library.resolve_profile("recommended")
        library.validate_all()
    """

    def __init__(
        self,
        root: Union[str, Path],
        registry: SkillRegistry,
        manifest: Optional[Dict[str, Any]] = None,
        shared: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Initialize the library.

        Args:
            root: Library root directory
            registry: Registry of the library's skills
            manifest: Parsed skills/manifest.json
            shared: Parsed skills/_shared/placeholders.json
        """
        self.root = Path(root)
        self.registry = registry
        self.manifest: Dict[str, Any] = manifest or {}
        self.shared: Dict[str, Any] = shared or {}

        self.skills_root = self.root / SKILLS_DIR
        self.shared_root = self.skills_root / SHARED_DIR
        self.protocols_root = self.root / PROTOCOLS_DIR

        self.profile_store = ProfileStore(self.root / PROFILES_DIR)
        self.profiles = ProfileResolver(registry, self.profile_store)
        self.validator = FrontmatterValidator(
            registry, protocol_exists=self.has_protocol
        )

    @classmethod
    def load(cls, root: Union[str, Path]) -> "SkillLibrary":
        """
        Load a library from its root directory.

        skills.json is required; the manifest and placeholders are optional.

        Raises:
            LibraryLoadError: If the skills index cannot be loaded
        """
        root = Path(root)
        index_path = root / SKILLS_INDEX_FILE
        index = read_json(index_path)

        if not isinstance(index, dict) or not isinstance(index.get("skills"), list):
            raise LibraryLoadError(index_path, "'skills' must be a list")

        try:
            registry = SkillRegistry.from_records(index["skills"])
        except ValidationError as e:
            raise LibraryLoadError(index_path, "invalid skill record", e) from e
        except ValueError as e:
            raise LibraryLoadError(index_path, str(e)) from e

        skills_root = root / SKILLS_DIR
        manifest = read_json(skills_root / MANIFEST_FILE, required=False)
        shared = read_json(skills_root / SHARED_DIR / PLACEHOLDERS_FILE, required=False)

        return cls(root, registry, manifest=manifest, shared=shared)

    # --- Package metadata ---

    @property
    def version(self) -> str:
        return __version__

    @property
    def library_root(self) -> Path:
        return self.root

    # --- Skills ---

    @property
    def skills(self) -> List[SkillEntry]:
        """All skill entries from skills.json."""
        return list(self.registry)

    def list_skills(self) -> List[str]:
        return self.registry.list_skills()

    def get_skill(self, name: str) -> Optional[SkillEntry]:
        return self.registry.get(name)

    def get_skill_dir(self, name: str) -> Path:
        return self.skills_root / name

    def get_skill_path(self, name: str) -> Path:
        """Path to a skill's SKILL.md file (which may not exist)."""
        return self.get_skill_dir(name) / SKILL_FILE

    def read_skill_content(self, name: str) -> str:
        """
        Read a skill's SKILL.md.

        Raises:
            LibraryLoadError: If the file cannot be read
        """
        path = self.get_skill_path(name)
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise LibraryLoadError(path, "cannot read skill content", e) from e

    def get_dispatch_matrix(self) -> Dict[str, Any]:
        """The dispatch matrix from manifest.json."""
        matrix: Dict[str, Any] = self.manifest.get("dispatch_matrix", {})
        return matrix

    def get_core_skills(self) -> List[SkillEntry]:
        return self.registry.core_skills()

    def get_skills_by_category(self, category: Union[Category, str]) -> List[SkillEntry]:
        return self.registry.skills_by_category(category)

    def get_skill_dependencies(self, name: str) -> List[str]:
        return self.registry.get_dependencies(name)

    def resolve_dependency_tree(self, names: List[str]) -> List[str]:
        return self.registry.resolve_dependency_tree(names)

    # --- Profiles ---

    def list_profiles(self) -> List[str]:
        return self.profile_store.list_profiles()

    def get_profile(self, name: str) -> Optional[ProfileDefinition]:
        return self.profiles.get_profile(name)

    def resolve_profile(self, name: str) -> List[str]:
        return self.profiles.resolve_profile(name)

    # --- Shared resources ---

    def list_shared_resources(self) -> List[str]:
        """Names (without extension) of the files in skills/_shared."""
        if not self.shared_root.is_dir():
            return []
        return sorted(
            p.stem
            for p in self.shared_root.iterdir()
            if p.is_file() and not p.name.startswith(".")
        )

    def get_shared_resource_path(self, name: str) -> Optional[Path]:
        if not self.shared_root.is_dir():
            return None
        for path in sorted(self.shared_root.iterdir()):
            if path.is_file() and path.stem == name:
                return path
        return None

    def read_shared_resource(self, name: str) -> Optional[str]:
        path = self.get_shared_resource_path(name)
        if path is None:
            return None
        return path.read_text(encoding="utf-8")

    # --- Protocols ---

    def list_protocols(self) -> List[str]:
        if not self.protocols_root.is_dir():
            return []
        return sorted(p.stem for p in self.protocols_root.glob("*.md") if p.is_file())

    def get_protocol_path(self, name: str) -> Optional[Path]:
        path = self.protocols_root / f"{name}.md"
        return path if path.is_file() else None

    def has_protocol(self, name: str) -> bool:
        return self.get_protocol_path(name) is not None

    def read_protocol(self, name: str) -> Optional[str]:
        path = self.get_protocol_path(name)
        if path is None:
            return None
        return path.read_text(encoding="utf-8")

    # --- Validation ---

    def validate_skill_frontmatter(self, name: str) -> ValidationResult:
        return self.validator.validate(name)

    def validate_all(self) -> Dict[str, ValidationResult]:
        return self.validator.validate_all()

    def __repr__(self) -> str:
        return f"<SkillLibrary root='{self.root}' skills={len(self.registry)}>"
