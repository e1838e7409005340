"""
Output directory lifecycle and generated-file I/O.

Generation never writes into an existing directory: the target
directory is removed and recreated first, so nothing from a previous
schema shape survives into the next run.

Generated files are read and written with ``newline=""`` so line
endings pass through untouched; only the rewrites themselves change
bytes.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from protogen.core.errors import GeneratedFileError, OutputDirError

logger = logging.getLogger(__name__)


def recreate_dir(path: Path, step: str = "output") -> Path:
    """Delete ``path`` if it exists, then create it (with parents)."""
    try:
        if path.exists():
            logger.debug("Removing %s", path)
            shutil.rmtree(path)
        path.mkdir(parents=True)
    except OSError as e:
        raise OutputDirError(step, f"cannot recreate {path}: {e}") from e
    return path


def clear_dir(path: Path, step: str = "output") -> None:
    """Remove every entry inside ``path``, keeping the directory itself."""
    try:
        for entry in sorted(path.iterdir()):
            if entry.is_dir() and not entry.is_symlink():
                shutil.rmtree(entry)
            else:
                entry.unlink()
    except OSError as e:
        raise OutputDirError(step, f"cannot clear {path}: {e}") from e


def read_generated(path: Path, step: str) -> str:
    """Read a generated file as UTF-8 without newline translation."""
    try:
        with path.open(encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise GeneratedFileError(step, f"cannot read {path}: {e}") from e


def write_generated(path: Path, content: str, step: str) -> None:
    """Replace a generated file's content, newlines written as given."""
    try:
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as e:
        raise GeneratedFileError(step, f"cannot write {path}: {e}") from e


def append_generated(path: Path, content: str, step: str) -> None:
    try:
        with path.open("a", encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as e:
        raise GeneratedFileError(step, f"cannot append to {path}: {e}") from e
