"""Shared fixtures: a small skills library on disk."""

import json
from pathlib import Path

import pytest

SKILLS = [
    {
        "name": "ct-task-executor",
        "description": "Executes a single task",
        "version": "2.1.0",
        "path": "skills/ct-task-executor",
        "references": [],
        "core": True,
        "category": "core",
        "tier": 0,
        "protocol": "implementation",
        "dependencies": [],
        "sharedResources": ["subagent-protocol-base"],
        "compatibility": ["claude-code"],
        "license": "MIT",
        "metadata": {},
    },
    {
        "name": "ct-research-agent",
        "description": "Researches a topic and writes findings",
        "version": "1.4.0",
        "path": "skills/ct-research-agent",
        "references": ["references/sources.md"],
        "core": False,
        "category": "recommended",
        "tier": 1,
        "protocol": "research",
        "dependencies": ["ct-task-executor"],
        "sharedResources": [],
        "compatibility": ["claude-code", "cursor"],
        "license": "MIT",
        "metadata": {},
    },
    {
        "name": "ct-orchestrator",
        "description": "Coordinates subagents",
        "version": "3.0.0",
        "path": "skills/ct-orchestrator",
        "references": [],
        "core": True,
        "category": "composition",
        "tier": 2,
        "protocol": None,
        "dependencies": ["ct-research-agent"],
        "sharedResources": [],
        "compatibility": ["claude-code"],
        "license": "MIT",
        "metadata": {},
    },
    {
        "name": "ct-broken",
        "description": "Declares a dependency that does not exist",
        "version": "0.1",
        "path": "skills/ct-broken",
        "references": [],
        "core": False,
        "category": "specialist",
        "tier": 4,
        "protocol": "missing-protocol",
        "dependencies": ["ghost-skill"],
        "sharedResources": [],
        "compatibility": [],
        "license": "MIT",
        "metadata": {},
    },
]

PROFILES = {
    "minimal": {
        "name": "minimal",
        "description": "Just the executor",
        "skills": ["ct-task-executor"],
        "includeProtocols": [],
    },
    "core": {
        "name": "core",
        "description": "Core skills",
        "extends": "minimal",
        "skills": ["ct-orchestrator"],
        "includeProtocols": ["implementation"],
    },
    "full": {
        "name": "full",
        "description": "Everything",
        "extends": "core",
        "skills": ["ct-broken"],
        "includeProtocols": ["research", "implementation"],
    },
}

MANIFEST = {
    "$schema": "https://cleo-dev.com/schemas/v1/skills-manifest.schema.json",
    "_meta": {"schemaVersion": "2.2.0"},
    "dispatch_matrix": {
        "by_task_type": {"research": "ct-research-agent"},
        "by_keyword": {"investigate": "ct-research-agent"},
        "by_protocol": {"implementation": "ct-task-executor"},
    },
    "skills": [],
}


def write_json(path: Path, data) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


@pytest.fixture
def library_root(tmp_path) -> Path:
    """Create a complete library layout under a temporary directory."""
    root = tmp_path / "library"

    write_json(root / "skills.json", {"skills": SKILLS})
    write_json(root / "skills" / "manifest.json", MANIFEST)
    write_json(
        root / "skills" / "_shared" / "placeholders.json",
        {"TASK_ID": "{{TASK_ID}}", "EPIC_ID": "{{EPIC_ID}}"},
    )
    (root / "skills" / "_shared" / "subagent-protocol-base.md").write_text(
        "# Subagent protocol\n", encoding="utf-8"
    )
    (root / "skills" / "_shared" / ".DS_Store").write_text("", encoding="utf-8")

    for skill in SKILLS:
        skill_dir = root / "skills" / skill["name"]
        skill_dir.mkdir(parents=True, exist_ok=True)
        (skill_dir / "SKILL.md").write_text(
            f"---\nname: {skill['name']}\n---\n\n# {skill['name']}\n",
            encoding="utf-8",
        )

    for name, profile in PROFILES.items():
        write_json(root / "profiles" / f"{name}.json", profile)

    protocols = root / "protocols"
    protocols.mkdir()
    (protocols / "research.md").write_text("# Research protocol\n", encoding="utf-8")
    (protocols / "implementation.md").write_text(
        "# Implementation protocol\n", encoding="utf-8"
    )

    return root
