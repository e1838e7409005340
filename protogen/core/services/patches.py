"""
Naming patches — literal renames applied to generated files.

Each PatchRule rewrites one file: the content is read whole, every
substitution is applied across all of it in table order, and the
result is written back. This is plain ``str.replace``; an ``old``
literal that also occurs inside an unrelated identifier is rewritten
too, so the table is written against known generator output.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path, PurePosixPath

from protogen.core.errors import PatchTargetMissingError
from protogen.core.models.target import PatchRule
from protogen.core.services.outputs import read_generated, write_generated

logger = logging.getLogger(__name__)


def apply_rule(rule: PatchRule, root: Path | None = None) -> bool:
    """Apply one rule in place. Returns whether the file changed.

    Raises:
        PatchTargetMissingError: If the target file does not exist.
        GeneratedFileError: If it cannot be read as UTF-8 or written back.
    """
    path = (root or Path.cwd()) / rule.target_file
    if not path.is_file():
        raise PatchTargetMissingError("patch", f"generated file not found: {rule.target_file}")

    original = read_generated(path, step="patch")
    patched = rule.apply(original)
    changed = patched != original
    if changed:
        write_generated(path, patched, step="patch")

    logger.debug(
        "Patched %s (%d substitutions, %s)",
        rule.target_file,
        len(rule.substitutions),
        "changed" if changed else "unchanged",
    )
    return changed


def apply_patches(rules: Iterable[PatchRule], root: Path | None = None) -> int:
    """Apply rules in order. Returns the number of files that changed."""
    changed = 0
    for rule in rules:
        if apply_rule(rule, root):
            changed += 1
    return changed


def rules_for_dir(rules: Iterable[PatchRule], out_dir: str) -> list[PatchRule]:
    """Rules whose target file lives directly under ``out_dir``.

    Generated output is flat, so only direct children count; a nested
    namespace directory belongs to a different target.
    """
    base = PurePosixPath(out_dir)
    return [r for r in rules if PurePosixPath(r.target_file).parent == base]
