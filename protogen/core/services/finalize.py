"""
Merge & cleanup for primary codec output.

Two passes over the generated directory:

    merge  — every ``<module>_grpc.rs`` gets a re-export appended to its
             sibling ``<module>.rs``, so callers reach the service stubs
             through the message module.
    strip  — every generated file loses the lines that pin the runtime
             library version (``::protobuf::VERSION``), which differ
             between generator releases.

Files are visited in sorted order; the directory was recreated just
before generation, so each pair is merged exactly once per run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from protogen.core.errors import GeneratedFileError, MalformedOutputError
from protogen.core.services.outputs import append_generated, read_generated, write_generated

logger = logging.getLogger(__name__)


@dataclass
class FinalizeReport:
    """What finalize() touched."""

    merged: list[str] = field(default_factory=list)
    stripped: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"merged": self.merged, "stripped": self.stripped}


def reexport_line(stub_module: str) -> str:
    """The statement that pulls a stub module into its message module."""
    return f"pub use super::{stub_module}::*;"


def _lines(content: str):
    """Split at line feeds only; each piece keeps its own terminator."""
    start = 0
    while start < len(content):
        end = content.find("\n", start) + 1 or len(content)
        yield content[start:end]
        start = end


def strip_matching_lines(content: str, marker: str) -> tuple[str, int]:
    """Drop every line containing ``marker``. Returns (content, removed).

    Lines end at a line feed. A carriage return before it stays part of
    the line, and no other character counts as a line break.
    """
    kept: list[str] = []
    removed = 0
    for line in _lines(content):
        if marker in line:
            removed += 1
            continue
        kept.append(line)
    return "".join(kept), removed


def finalize(
    out_dir: Path,
    generated_suffix: str = ".rs",
    stub_suffix: str = "_grpc",
    version_marker: str = "::protobuf::VERSION",
) -> FinalizeReport:
    """Merge stub files into their message files and strip version checks.

    Raises:
        MalformedOutputError: If a stub file has no message-file sibling.
        GeneratedFileError: If a generated file cannot be read or written.
    """
    report = FinalizeReport()
    try:
        entries = list(out_dir.iterdir())
    except OSError as e:
        raise GeneratedFileError("finalize", f"cannot list {out_dir}: {e}") from e
    generated = sorted(p for p in entries if p.is_file() and p.suffix == generated_suffix)

    for path in generated:
        module = path.stem
        if not module.endswith(stub_suffix):
            continue
        sibling = path.with_name(f"{module[: -len(stub_suffix)]}{generated_suffix}")
        if not sibling.is_file():
            raise MalformedOutputError(
                "finalize",
                f"{path.name} has no message file {sibling.name} in {out_dir}",
            )
        append_generated(sibling, f"\n{reexport_line(module)}\n", step="finalize")
        report.merged.append(sibling.name)
        logger.debug("Merged %s into %s", path.name, sibling.name)

    for path in generated:
        content, removed = strip_matching_lines(
            read_generated(path, step="finalize"), version_marker
        )
        if removed:
            write_generated(path, content, step="finalize")
            report.stripped[path.name] = removed

    logger.info(
        "Finalized %s: %d merged, %d files stripped",
        out_dir,
        len(report.merged),
        len(report.stripped),
    )
    return report
