"""ct-skills - command line interface for the skills library."""

import argparse
import os
import shutil
import sys
from typing import Callable, Dict, List, Optional

from ..skills.errors import SkillRegistryError
from ..skills.models import IssueLevel, ValidationResult
from .library import SkillLibrary

INSTALLER = "caamp"
DEFAULT_INSTALL_PROFILE = "full"
DESCRIPTION_PREVIEW = 120


def _format_list(values: List[str]) -> str:
    return ", ".join(values) if values else "none"


def print_validation(name: str, result: ValidationResult) -> None:
    """Print a validation result with one line per issue."""
    status = "PASS" if result.valid else "FAIL"
    print(f"{status}: {name}")
    for issue in result.issues:
        prefix = "  ERROR" if issue.level == IssueLevel.ERROR else "  WARN "
        print(f"{prefix} [{issue.field}] {issue.message}")


def cmd_list(library: SkillLibrary, args: argparse.Namespace) -> int:
    """List skills, optionally filtered."""
    filtered = library.skills

    if args.core:
        filtered = [s for s in filtered if s.is_core]

    if args.category:
        filtered = [s for s in filtered if s.category == args.category]

    if args.profile:
        profile_skills = set(library.resolve_profile(args.profile))
        filtered = [s for s in filtered if s.name in profile_skills]

    if not filtered:
        print("No skills match the given filters.")
        return 0

    max_name = max(len(s.name) for s in filtered)

    for s in filtered:
        core = " [core]" if s.is_core else ""
        proto = f" proto:{s.protocol}" if s.protocol else ""
        print(
            f"  {s.name.ljust(max_name)}  v{s.version}  tier:{s.tier}  "
            f"{s.category}{core}{proto}"
        )

    print(f"\n{len(filtered)} skill(s)")
    return 0


def cmd_info(library: SkillLibrary, args: argparse.Namespace) -> int:
    """Show the details of one skill."""
    skill = library.get_skill(args.name)
    if skill is None:
        print(f"Skill '{args.name}' not found.", file=sys.stderr)
        print(f"Available: {', '.join(library.list_skills())}", file=sys.stderr)
        return 1

    description = str(skill.description or "")
    if len(description) > DESCRIPTION_PREVIEW:
        description = description[:DESCRIPTION_PREVIEW] + "..."

    print(f"Name:           {skill.name}")
    print(f"Version:        {skill.version}")
    print(f"Description:    {description}")
    print(f"Category:       {skill.category}")
    print(f"Tier:           {skill.tier}")
    print(f"Core:           {skill.core}")
    print(f"Protocol:       {skill.protocol or 'none'}")
    print(f"License:        {skill.license}")
    print(f"Dependencies:   {_format_list(skill.dependencies)}")
    print(f"Shared:         {_format_list(skill.shared_resources)}")
    print(f"Compatibility:  {', '.join(skill.compatibility)}")
    print(f"References:     {len(skill.references)}")
    print(f"Path:           {skill.path}")
    return 0


def cmd_validate(library: SkillLibrary, args: argparse.Namespace) -> int:
    """Validate one skill, or all skills when no name is given."""
    if args.name:
        result = library.validate_skill_frontmatter(args.name)
        print_validation(args.name, result)
        return 0 if result.valid else 1

    results = library.validate_all()
    has_errors = False

    for skill_name, result in results.items():
        if result.issues:
            print_validation(skill_name, result)
            if not result.valid:
                has_errors = True

    valid = sum(1 for r in results.values() if r.valid)
    print(f"\n{valid}/{len(results)} skills valid")

    return 1 if has_errors else 0


def cmd_profiles(library: SkillLibrary, args: argparse.Namespace) -> int:
    """List profiles with their resolved sizes."""
    profiles = library.list_profiles()
    if not profiles:
        print("No profiles found.")
        return 0

    for name in profiles:
        profile = library.get_profile(name)
        if profile is None:
            continue
        resolved = library.resolve_profile(name)
        ext = f" (extends: {profile.extends})" if profile.extends else ""
        print(f"  {name.ljust(15)} {len(resolved)} skills{ext}")
        print(f"    {profile.description}")

    return 0


def cmd_protocols(library: SkillLibrary, args: argparse.Namespace) -> int:
    """List protocol names."""
    protocols = library.list_protocols()
    if not protocols:
        print("No protocols found.")
        return 0

    for name in protocols:
        print(f"  {name}")
    print(f"\n{len(protocols)} protocol(s)")
    return 0


def cmd_install(library: SkillLibrary, args: argparse.Namespace) -> int:
    """Resolve the skills to install and hand them off to the installer."""
    if shutil.which(INSTALLER) is None:
        print(f"Error: {INSTALLER} is required for install operations.", file=sys.stderr)
        print("Install it with: npm install -g @cleocode/caamp", file=sys.stderr)
        return 1

    if args.name:
        to_install = library.resolve_dependency_tree([args.name])
        print(f"Installing {args.name} + {len(to_install) - 1} dependencies...")
    else:
        to_install = library.resolve_profile(args.profile)
        print(f"Installing profile '{args.profile}' ({len(to_install)} skills)...")

    for name in to_install:
        skill = library.get_skill(name)
        if skill is None:
            print(f"  SKIP: {name} (not found in registry)", file=sys.stderr)
            continue
        print(f"  {name} v{skill.version}")

    print(f"\nInstall via {INSTALLER.upper()}:")
    print(f"  {INSTALLER} install {' '.join(to_install)}")
    return 0


COMMANDS: Dict[str, Callable[[SkillLibrary, argparse.Namespace], int]] = {
    "list": cmd_list,
    "info": cmd_info,
    "validate": cmd_validate,
    "profiles": cmd_profiles,
    "protocols": cmd_protocols,
    "install": cmd_install,
}


def build_parser() -> argparse.ArgumentParser:
    """Build the ct-skills argument parser."""
    parser = argparse.ArgumentParser(
        prog="ct-skills", description="Skills registry CLI"
    )
    parser.add_argument(
        "--root",
        default=os.getenv("CT_SKILLS_ROOT", "."),
        help="Library root directory (default: $CT_SKILLS_ROOT or current directory)",
    )

    subparsers = parser.add_subparsers(dest="command")

    list_parser = subparsers.add_parser("list", help="List skills")
    list_parser.add_argument("--core", action="store_true", help="Only core skills")
    list_parser.add_argument("--category", help="Only skills in this category")
    list_parser.add_argument("--profile", help="Only skills selected by this profile")

    info_parser = subparsers.add_parser("info", help="Show skill details")
    info_parser.add_argument("name", help="Skill name")

    validate_parser = subparsers.add_parser("validate", help="Validate frontmatter")
    validate_parser.add_argument("name", nargs="?", help="Skill name (default: all)")

    subparsers.add_parser("profiles", help="List install profiles")
    subparsers.add_parser("protocols", help="List available protocols")

    install_parser = subparsers.add_parser(
        "install", help=f"Install skills (requires {INSTALLER})"
    )
    install_parser.add_argument("name", nargs="?", help="Skill name")
    install_parser.add_argument(
        "--profile",
        default=DEFAULT_INSTALL_PROFILE,
        help=f"Profile to install (default: {DEFAULT_INSTALL_PROFILE})",
    )

    subparsers.add_parser("help", help="Show this help")

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point for ct-skills."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command in (None, "help"):
        parser.print_help()
        sys.exit(0)

    try:
        library = SkillLibrary.load(args.root)
        exit_code = COMMANDS[args.command](library, args)
    except SkillRegistryError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
