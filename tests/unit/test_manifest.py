"""Tests for manifest generation."""

import json
from datetime import date

import pytest

from src.library.manifest import (
    DEFAULT_CONSTRAINTS,
    build_manifest,
    build_manifest_skill,
    main,
    write_manifest,
)
from src.skills.errors import LibraryLoadError

DISPATCH_CONFIG = {
    "dispatch_matrix": {
        "by_task_type": {"research": "ct-research-agent"},
        "by_keyword": {},
        "by_protocol": {},
    },
    "skill_overrides": {
        "ct-research-agent": {
            "tags": ["research"],
            "status": "beta",
            "token_budget": 8000,
            "capabilities": {
                "inputs": ["TOPIC"],
                "outputs": ["findings"],
                "dispatch_triggers": ["research"],
                "chains_to": ["ct-task-executor"],
            },
            "constraints": {
                "max_context_tokens": 80000,
                "requires_session": True,
                "requires_epic": False,
            },
        }
    },
}


class TestBuildManifestSkill:
    """Test merging a single skill."""

    def test_defaults_without_override(self):
        """Test defaults applied when no override exists."""
        entry = build_manifest_skill({"name": "ct-x", "description": "X", "tier": 1})

        assert entry["version"] == "1.0.0"
        assert entry["path"] == "skills/ct-x"
        assert entry["status"] == "active"
        assert entry["token_budget"] == 6000
        assert entry["tags"] == []
        assert entry["capabilities"]["compatible_subagent_types"] == ["general-purpose"]
        assert entry["capabilities"]["dispatch_keywords"] == {
            "primary": [],
            "secondary": [],
        }
        assert entry["constraints"] == DEFAULT_CONSTRAINTS

    def test_defaults_are_copies(self):
        """Test that default containers are not shared between entries."""
        first = build_manifest_skill({"name": "a"})
        first["constraints"]["requires_epic"] = True
        first["capabilities"]["compatible_subagent_types"].append("other")

        second = build_manifest_skill({"name": "b"})
        assert second["constraints"]["requires_epic"] is False
        assert second["capabilities"]["compatible_subagent_types"] == ["general-purpose"]

    def test_override_applied(self):
        """Test that override values win."""
        entry = build_manifest_skill(
            {"name": "ct-research-agent", "version": "1.4.0", "dependencies": ["a"]},
            DISPATCH_CONFIG["skill_overrides"]["ct-research-agent"],
        )

        assert entry["version"] == "1.4.0"
        assert entry["status"] == "beta"
        assert entry["token_budget"] == 8000
        assert entry["capabilities"]["inputs"] == ["TOPIC"]
        assert entry["capabilities"]["dependencies"] == ["a"]
        assert entry["capabilities"]["chains_to"] == ["ct-task-executor"]
        assert entry["constraints"]["requires_session"] is True


class TestBuildManifest:
    """Test building the full manifest."""

    def test_meta_and_matrix(self):
        """Test the manifest envelope."""
        manifest = build_manifest(
            {"skills": [{"name": "a"}, {"name": "ct-research-agent"}]},
            DISPATCH_CONFIG,
            today=date(2026, 1, 15),
        )

        assert manifest["$schema"].endswith("skills-manifest.schema.json")
        assert manifest["_meta"]["schemaVersion"] == "2.2.0"
        assert manifest["_meta"]["lastUpdated"] == "2026-01-15"
        assert manifest["_meta"]["totalSkills"] == 2
        assert manifest["dispatch_matrix"] == DISPATCH_CONFIG["dispatch_matrix"]
        assert [s["name"] for s in manifest["skills"]] == ["a", "ct-research-agent"]


class TestWriteManifest:
    """Test writing skills/manifest.json."""

    def test_write(self, library_root):
        """Test writing the manifest next to the skills."""
        (library_root / "dispatch-config.json").write_text(
            json.dumps(DISPATCH_CONFIG), encoding="utf-8"
        )

        manifest = write_manifest(library_root, today=date(2026, 1, 15))

        output = library_root / "skills" / "manifest.json"
        text = output.read_text(encoding="utf-8")
        assert text.endswith("\n")
        assert json.loads(text) == manifest
        assert manifest["_meta"]["totalSkills"] == 4

    def test_missing_dispatch_config(self, library_root):
        """Test that dispatch-config.json is required."""
        with pytest.raises(LibraryLoadError, match="dispatch-config.json"):
            write_manifest(library_root)

    @pytest.mark.parametrize("record", [{"description": "nameless"}, "ct-a", None])
    def test_record_without_name(self, library_root, capsys, record):
        """Test that a record with no name is a load error, also from main."""
        (library_root / "dispatch-config.json").write_text(
            json.dumps(DISPATCH_CONFIG), encoding="utf-8"
        )
        (library_root / "skills.json").write_text(
            json.dumps({"skills": [{"name": "a"}, record]}), encoding="utf-8"
        )

        with pytest.raises(LibraryLoadError, match="skill record 1 has no name"):
            write_manifest(library_root)

        with pytest.raises(SystemExit) as exc_info:
            main(["--root", str(library_root)])
        assert exc_info.value.code == 1
        assert "skill record 1 has no name" in capsys.readouterr().err

    def test_main(self, library_root, capsys):
        """Test the CLI entry point."""
        (library_root / "dispatch-config.json").write_text(
            json.dumps(DISPATCH_CONFIG), encoding="utf-8"
        )

        main(["--root", str(library_root)])

        captured = capsys.readouterr()
        assert "(4 skills)" in captured.out

    def test_main_error(self, tmp_path, capsys):
        """Test the CLI exits 1 when sources are missing."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--root", str(tmp_path)])

        assert exc_info.value.code == 1
        assert "ERROR" in capsys.readouterr().err
