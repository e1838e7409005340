"""
CodegenConfig — the root configuration model.

Loaded from codegen.yml when present. Any section the file leaves out
falls back to the built-in tables in ``protogen.core.data``, so an
empty (or missing) file reproduces the stock generation run.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from protogen.core.data import default_naming_patches, default_targets
from protogen.core.models.target import GenerationTarget, PatchRule
from protogen.core.models.toolchain import Toolchain


class CodegenConfig(BaseModel):
    """Everything a generation run needs besides the filesystem."""

    version: int = 1

    toolchain: Toolchain = Field(default_factory=Toolchain)
    targets: list[GenerationTarget] = Field(default_factory=default_targets)
    naming_patches: list[PatchRule] = Field(default_factory=default_naming_patches)

    def get_target(self, label: str) -> GenerationTarget | None:
        """Look up a target by its display label."""
        for target in self.targets:
            if target.label == label:
                return target
        return None
