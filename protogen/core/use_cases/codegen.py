"""
Codegen use case — regenerate code for every configured target.

This is the top-level orchestrator: it loads config, locates the
external tools, and for each target in table order runs

    resolve inputs → primary codec → naming patches → merge & cleanup
                   → alternate codec

then reformats the workspace once. Everything is sequential; the first
failure stops the run and its exit code becomes the run's exit code.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from protogen.adapters.registry import AdapterRegistry, default_registry
from protogen.core.config.loader import ConfigError, load_config, project_root
from protogen.core.engine.executor import StepRunner, resolve_tool
from protogen.core.errors import EXIT_FAILURE, CodegenError
from protogen.core.models.config import CodegenConfig
from protogen.core.models.target import GenerationTarget
from protogen.core.services.alternate_codec import generate_alternate
from protogen.core.services.finalize import FinalizeReport, finalize
from protogen.core.services.inputs import resolve_inputs
from protogen.core.services.patches import apply_patches, rules_for_dir
from protogen.core.services.primary_codec import generate_primary

logger = logging.getLogger(__name__)


@dataclass
class TargetResult:
    """Outcome of one fully generated target."""

    label: str
    include_root: str
    inputs: list[str] = field(default_factory=list)
    primary_dir: str = ""
    alternate_dir: str = ""
    patched_files: int = 0
    finalize: FinalizeReport = field(default_factory=FinalizeReport)

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "include_root": self.include_root,
            "inputs": self.inputs,
            "primary_dir": self.primary_dir,
            "alternate_dir": self.alternate_dir,
            "patched_files": self.patched_files,
            "finalize": self.finalize.to_dict(),
        }


@dataclass
class CodegenResult:
    """Result of a whole generation run."""

    project_root: Path | None = None
    targets: list[TargetResult] = field(default_factory=list)
    targets_planned: int = 0
    formatted: bool = False
    error: str | None = None
    failed_step: str | None = None
    exit_code: int = 0

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def to_dict(self) -> dict:
        result: dict = {
            "ok": self.ok,
            "exit_code": self.exit_code,
            "project_root": str(self.project_root) if self.project_root else None,
            "targets_planned": self.targets_planned,
            "targets_completed": len(self.targets),
            "formatted": self.formatted,
            "targets": [t.to_dict() for t in self.targets],
        }
        if self.error:
            result["error"] = self.error
            result["failed_step"] = self.failed_step
        return result


def run_target(
    target: GenerationTarget,
    config: CodegenConfig,
    runner: StepRunner,
    protoc: str,
    cargo: str,
) -> TargetResult:
    """Run every generation step for one target."""
    toolchain = config.toolchain
    root = runner.project_root
    logger.info("── target %s (%s)", target.label, target.include_root)

    result = TargetResult(label=target.label, include_root=target.include_root)
    result.inputs = resolve_inputs(
        target.include_root,
        target.packages,
        root=root,
        suffix=toolchain.schema_suffix,
    )

    result.primary_dir = target.output_dir(toolchain.primary.output_dir)
    generate_primary(
        runner, toolchain, protoc, cargo, target.include_root, result.inputs, result.primary_dir
    )

    rules = rules_for_dir(config.naming_patches, result.primary_dir)
    result.patched_files = apply_patches(rules, root=root)

    result.finalize = finalize(
        root / result.primary_dir,
        generated_suffix=toolchain.generated_suffix,
        stub_suffix=toolchain.stub_suffix,
        version_marker=toolchain.version_check_marker,
    )

    result.alternate_dir = target.output_dir(toolchain.alternate.output_dir)
    generate_alternate(
        runner, toolchain, protoc, cargo, target.include_root, result.inputs, result.alternate_dir
    )
    return result


def run_all(
    targets: list[GenerationTarget],
    config: CodegenConfig,
    runner: StepRunner,
    protoc: str,
    cargo: str,
    completed: list[TargetResult] | None = None,
) -> list[TargetResult]:
    """Generate every target in order, then format once.

    Completed targets are appended to ``completed`` as they finish, so
    a caller still sees them when a later target raises.

    Raises:
        CodegenError: On the first failing step; later targets and the
            formatter do not run.
    """
    if completed is None:
        completed = []

    for target in targets:
        completed.append(run_target(target, config, runner, protoc, cargo))

    runner.run("format", [cargo, *config.toolchain.formatter])
    return completed


def run_codegen(
    config_path: Path | None = None,
    labels: list[str] | None = None,
    registry: AdapterRegistry | None = None,
) -> CodegenResult:
    """Load configuration and run the whole generation pipeline.

    Args:
        config_path: Optional path to codegen.yml (None = built-in tables).
        labels: Optional target labels to restrict the run to.
        registry: Optional pre-configured adapter registry.

    Returns:
        CodegenResult; ``exit_code`` is the process exit status to use.
    """
    result = CodegenResult()

    try:
        config = load_config(config_path)
    except ConfigError as e:
        result.error = str(e)
        result.failed_step = "config"
        result.exit_code = EXIT_FAILURE
        return result

    root = project_root(config_path)
    result.project_root = root

    targets = config.targets
    if labels:
        unknown = [label for label in labels if config.get_target(label) is None]
        if unknown:
            result.error = f"Unknown target(s): {', '.join(unknown)}"
            result.failed_step = "config"
            result.exit_code = EXIT_FAILURE
            return result
        targets = [t for t in targets if t.label in labels]
    result.targets_planned = len(targets)

    runner = StepRunner(registry=registry or default_registry(), project_root=root)

    try:
        protoc = resolve_tool(config.toolchain.protoc, "PROTOC", "protoc")
        cargo = resolve_tool(config.toolchain.cargo, "CARGO", "cargo")
        run_all(targets, config, runner, protoc, cargo, completed=result.targets)
        result.formatted = True
    except CodegenError as e:
        logger.error("Generation aborted at %s: %s", e.step, e.message)
        result.error = e.message
        result.failed_step = e.step
        result.exit_code = e.exit_code
        return result

    logger.info("Generated %d targets", len(result.targets))
    return result
