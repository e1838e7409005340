"""
Generation target and patch rule models.

A GenerationTarget is one unit of work for the orchestrator: an include
root, the packages under it whose schemas should be compiled, and where
the generated code lands. PatchRules describe the literal renames applied
to generated files afterwards.

Both are frozen: the tables are built once at process start and never
mutated during a run.
"""

from __future__ import annotations

from pathlib import PurePosixPath

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GenerationTarget(BaseModel):
    """One (include root, packages, output root, namespace) row."""

    model_config = ConfigDict(frozen=True)

    include_root: str
    packages: list[str] = Field(min_length=1)
    output_root: str
    namespace_label: str = ""

    @field_validator("packages")
    @classmethod
    def _unique_packages(cls, value: list[str]) -> list[str]:
        # Ordered set of normalized spellings ("a/b/" and "a/b" are one package).
        return list(dict.fromkeys(str(PurePosixPath(p)) for p in value))

    def output_dir(self, codec_dir: str) -> str:
        """``<output_root>/<codec_dir>/<namespace_label>`` without a trailing slash."""
        parts = [self.output_root, codec_dir]
        if self.namespace_label:
            parts.append(self.namespace_label)
        return str(PurePosixPath(*parts))

    @property
    def label(self) -> str:
        """Display name used in logs and reports."""
        return self.namespace_label or PurePosixPath(self.output_root).parts[0]


class Substitution(BaseModel):
    """A single exact literal replacement."""

    model_config = ConfigDict(frozen=True)

    old: str = Field(min_length=1)
    new: str


class PatchRule(BaseModel):
    """Ordered literal substitutions for one generated file.

    Substitutions fire strictly in listed order, each across the whole
    file content. A later entry may rely on an earlier one having
    already consumed its longer match (``NOT_SERVING`` before
    ``SERVING``).
    """

    model_config = ConfigDict(frozen=True)

    target_file: str
    substitutions: list[Substitution] = Field(default_factory=list)

    @field_validator("substitutions", mode="before")
    @classmethod
    def _accept_pairs(cls, value: object) -> object:
        # YAML tables may spell entries as [old, new] pairs.
        if isinstance(value, list):
            return [
                {"old": item[0], "new": item[1]}
                if isinstance(item, (list, tuple)) and len(item) == 2
                else item
                for item in value
            ]
        return value

    def apply(self, content: str) -> str:
        """Apply every substitution to ``content``, left to right, once each."""
        for sub in self.substitutions:
            content = content.replace(sub.old, sub.new)
        return content
