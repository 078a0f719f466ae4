"""Manifest builder - generates skills/manifest.json from the skills index and dispatch config."""

import json
import sys
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..skills.errors import LibraryLoadError, SkillRegistryError
from .library import MANIFEST_FILE, SKILLS_DIR, SKILLS_INDEX_FILE, read_json

DISPATCH_CONFIG_FILE = "dispatch-config.json"

MANIFEST_SCHEMA = "https://cleo-dev.com/schemas/v1/skills-manifest.schema.json"
MANIFEST_SCHEMA_VERSION = "2.2.0"

DEFAULT_VERSION = "1.0.0"
DEFAULT_STATUS = "active"
DEFAULT_TOKEN_BUDGET = 6000
DEFAULT_SUBAGENT_TYPES = ["general-purpose"]
DEFAULT_CONSTRAINTS = {
    "max_context_tokens": 60000,
    "requires_session": False,
    "requires_epic": False,
}

ARCHITECTURE_NOTE = (
    "Universal Subagent Architecture: All spawns use single agent type "
    "'cleo-subagent' with skill/protocol injection."
)


def build_manifest_skill(
    skill: Dict[str, Any], override: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Merge one skills.json entry with its dispatch override.

    Args:
        skill: Raw skills.json record
        override: Entry from dispatch-config.json skill_overrides

    Returns:
        Manifest skill entry
    """
    override = override or {}
    caps = override.get("capabilities") or {}

    return {
        "name": skill["name"],
        "version": skill.get("version") or DEFAULT_VERSION,
        "description": skill.get("description"),
        "path": f"{SKILLS_DIR}/{skill['name']}",
        "tags": override.get("tags") or [],
        "status": override.get("status") or DEFAULT_STATUS,
        "tier": skill.get("tier"),
        "token_budget": override.get("token_budget") or DEFAULT_TOKEN_BUDGET,
        "references": skill.get("references") or [],
        "capabilities": {
            "inputs": caps.get("inputs") or [],
            "outputs": caps.get("outputs") or [],
            "dependencies": skill.get("dependencies") or [],
            "dispatch_triggers": caps.get("dispatch_triggers") or [],
            "compatible_subagent_types": caps.get("compatible_subagent_types")
            or list(DEFAULT_SUBAGENT_TYPES),
            "chains_to": caps.get("chains_to") or [],
            "dispatch_keywords": caps.get("dispatch_keywords")
            or {"primary": [], "secondary": []},
        },
        "constraints": override.get("constraints") or dict(DEFAULT_CONSTRAINTS),
    }


def build_manifest(
    skills_index: Dict[str, Any],
    dispatch_config: Dict[str, Any],
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """
    Build the dispatch manifest.

    Args:
        skills_index: Parsed skills.json
        dispatch_config: Parsed dispatch-config.json
        today: Date recorded as lastUpdated (default: today)

    Returns:
        Manifest as a JSON-serializable dict
    """
    today = today or date.today()
    overrides: Dict[str, Any] = dispatch_config.get("skill_overrides") or {}

    skills: List[Dict[str, Any]] = [
        build_manifest_skill(skill, overrides.get(skill["name"]))
        for skill in skills_index.get("skills", [])
    ]

    return {
        "$schema": MANIFEST_SCHEMA,
        "_meta": {
            "schemaVersion": MANIFEST_SCHEMA_VERSION,
            "lastUpdated": today.isoformat(),
            "totalSkills": len(skills),
            "generatedFrom": "ct-skills-build-manifest (frontmatter + dispatch-config.json)",
            "architectureNote": ARCHITECTURE_NOTE,
        },
        "dispatch_matrix": dispatch_config.get("dispatch_matrix"),
        "skills": skills,
    }


def write_manifest(
    root: Union[str, Path], today: Optional[date] = None
) -> Dict[str, Any]:
    """
    Generate skills/manifest.json for the library at ``root``.

    Returns:
        The manifest that was written

    Raises:
        LibraryLoadError: If a source file is missing or invalid
    """
    root = Path(root)
    skills_index = read_json(root / SKILLS_INDEX_FILE)
    dispatch_config = read_json(root / DISPATCH_CONFIG_FILE)

    if not isinstance(skills_index, dict) or not isinstance(
        skills_index.get("skills"), list
    ):
        raise LibraryLoadError(root / SKILLS_INDEX_FILE, "'skills' must be a list")
    if not isinstance(dispatch_config, dict):
        raise LibraryLoadError(root / DISPATCH_CONFIG_FILE, "must be a JSON object")

    for i, skill in enumerate(skills_index["skills"]):
        if not isinstance(skill, dict) or not isinstance(skill.get("name"), str):
            raise LibraryLoadError(
                root / SKILLS_INDEX_FILE, f"skill record {i} has no name"
            )

    manifest = build_manifest(skills_index, dispatch_config, today=today)

    output = root / SKILLS_DIR / MANIFEST_FILE
    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open("w", encoding="utf-8") as f:
        json.dump(manifest, f, indent=2, ensure_ascii=False)
        f.write("\n")

    return manifest


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point for manifest generation."""
    import argparse
    import os

    parser = argparse.ArgumentParser(
        description="Generate skills/manifest.json from skills.json and dispatch-config.json"
    )
    parser.add_argument(
        "--root",
        default=os.getenv("CT_SKILLS_ROOT", "."),
        help="Library root directory (default: $CT_SKILLS_ROOT or current directory)",
    )

    args = parser.parse_args(argv)

    try:
        manifest = write_manifest(args.root)
    except SkillRegistryError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    output = Path(SKILLS_DIR) / MANIFEST_FILE
    print(f"Generated {output} ({manifest['_meta']['totalSkills']} skills)")


if __name__ == "__main__":
    main()
