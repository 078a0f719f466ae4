"""Library - on-disk skills library, manifest generation and CLI."""

from .library import SkillLibrary, __version__
from .manifest import build_manifest, write_manifest

__all__ = ["SkillLibrary", "build_manifest", "write_manifest", "__version__"]
