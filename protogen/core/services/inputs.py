"""
Input resolution — which schema files a target compiles, in what order.

The schema compiler records files in the order it receives them, so
the list is sorted here rather than trusting directory iteration.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path, PurePosixPath

from protogen.core.errors import InputResolutionError

logger = logging.getLogger(__name__)


def resolve_inputs(
    include_root: str,
    packages: Iterable[str],
    root: Path | None = None,
    suffix: str = ".proto",
) -> list[str]:
    """List the schema files directly under each ``include_root/package``.

    Args:
        include_root: Include directory, as passed to the compiler.
        packages: Package subpaths under ``include_root``.
        root: Directory relative paths are resolved against
            (default: cwd).
        suffix: Schema file extension.

    Returns:
        ``"<include_root>/<package>/<file>"`` strings, unique, sorted.

    Raises:
        InputResolutionError: If a package directory is missing or
            cannot be listed.
    """
    base = root or Path.cwd()
    found: set[str] = set()

    for package in packages:
        rel_dir = str(PurePosixPath(include_root, package))
        pkg_dir = base / rel_dir
        if not pkg_dir.is_dir():
            raise InputResolutionError("resolve", f"package directory not found: {rel_dir}")

        try:
            entries = list(pkg_dir.iterdir())
        except OSError as e:
            raise InputResolutionError("resolve", f"cannot list {rel_dir}: {e}") from e

        for entry in entries:
            if entry.suffix == suffix and entry.is_file():
                found.add(f"{rel_dir}/{entry.name}")

    inputs = sorted(found)
    logger.debug("Resolved %d schema files under %s", len(inputs), include_root)
    return inputs
