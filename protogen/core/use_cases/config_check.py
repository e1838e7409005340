"""
Config check use case — validate codegen.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from protogen.core.config.loader import ConfigError, load_config, project_root
from protogen.core.models.config import CodegenConfig


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: CodegenConfig | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "target_count": len(self.config.targets) if self.config else 0,
            "patch_count": len(self.config.naming_patches) if self.config else 0,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate generation configuration and report issues.

    Args:
        config_path: Optional explicit path to codegen.yml
            (None = built-in tables against the cwd).

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    result = ConfigCheckResult(config_path=config_path)

    try:
        config = load_config(config_path)
        result.config = config
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    if not config.targets:
        result.warnings.append("No targets defined. Nothing will be generated.")

    # Two targets writing the same directory would delete each other's output.
    toolchain = config.toolchain
    seen: dict[str, str] = {}
    for target in config.targets:
        for codec_dir in (toolchain.primary.output_dir, toolchain.alternate.output_dir):
            out_dir = target.output_dir(codec_dir)
            if out_dir in seen and seen[out_dir] != target.label:
                result.errors.append(
                    f"Targets '{seen[out_dir]}' and '{target.label}' share output directory {out_dir}"
                )
            else:
                seen.setdefault(out_dir, target.label)

    if toolchain.primary.output_dir == toolchain.alternate.output_dir:
        result.errors.append(
            f"Primary and alternate codecs share output directory name '{toolchain.primary.output_dir}'"
        )

    # Patch targets must land in some target's primary output.
    primary_dirs = {t.output_dir(toolchain.primary.output_dir) for t in config.targets}
    for rule in config.naming_patches:
        if str(PurePosixPath(rule.target_file).parent) not in primary_dirs:
            result.warnings.append(
                f"Naming patch for {rule.target_file} is outside every primary output directory "
                "and will never be applied"
            )
        if not rule.substitutions:
            result.warnings.append(f"Naming patch for {rule.target_file} has no substitutions")

    # Include roots / packages should exist (relative to project root).
    root = project_root(config_path)
    for target in config.targets:
        for package in target.packages:
            pkg_dir = root / target.include_root / package
            if not pkg_dir.is_dir():
                result.warnings.append(
                    f"Target '{target.label}' package directory does not exist: "
                    f"{target.include_root}/{package}"
                )

    result.valid = len(result.errors) == 0
    return result
