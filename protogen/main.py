"""
protogen — CLI entrypoint.

Usage:
    protogen --help
    protogen codegen
    protogen targets
    protogen config check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from protogen import __version__
from protogen.core.observability.logging_config import (
    LOG_FILE_ENV,
    LOG_FILE_LEVEL_ENV,
    resolve_level,
    setup_logging,
)


@click.group()
@click.version_option(version=__version__, prog_name="protogen")
@click.option("--verbose", "-v", is_flag=True, help="Show each generation step.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to codegen.yml (default: auto-detect, else built-in tables).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """protogen — regenerate gRPC/protobuf bindings for the workspace."""
    from protogen.core.config.loader import find_config_file

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else find_config_file()

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(LOG_FILE_ENV),
        log_file_level=os.environ.get(LOG_FILE_LEVEL_ENV),
    )


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--target", "-t", "labels", multiple=True, help="Only generate these targets.")
@click.pass_context
def codegen(ctx: click.Context, as_json: bool, labels: tuple[str, ...]) -> None:
    """Generate code for every target, then format the workspace.

    Examples:

        protogen codegen

        protogen -v codegen --target testing --target example
    """
    from protogen.core.use_cases.codegen import run_codegen

    result = run_codegen(
        config_path=ctx.obj.get("config_path"),
        labels=list(labels) if labels else None,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(result.exit_code)

    quiet = ctx.obj.get("quiet", False)

    for target in result.targets:
        if quiet:
            continue
        click.secho(f"   ✓ {target.label}", fg="green", nl=False)
        click.echo(f"  ({len(target.inputs)} schemas)")
        if ctx.obj.get("verbose"):
            click.echo(f"     │ {target.primary_dir}")
            click.echo(f"     │ {target.alternate_dir}")

    if result.error:
        click.secho(f"❌ {result.failed_step}: {result.error}", fg="red", err=True)
        sys.exit(result.exit_code)

    if not quiet:
        click.secho(
            f"\n   Generated {len(result.targets)}/{result.targets_planned} targets",
            fg="green",
            bold=True,
        )
        click.echo()


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def targets(ctx: click.Context, as_json: bool) -> None:
    """List generation targets and naming patches."""
    from protogen.core.config.loader import ConfigError, load_config

    try:
        config = load_config(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    primary = config.toolchain.primary.output_dir
    alternate = config.toolchain.alternate.output_dir

    if as_json:
        data = {
            "targets": [
                {
                    **t.model_dump(),
                    "label": t.label,
                    "primary_dir": t.output_dir(primary),
                    "alternate_dir": t.output_dir(alternate),
                }
                for t in config.targets
            ],
            "naming_patches": [r.model_dump() for r in config.naming_patches],
        }
        click.echo(json.dumps(data, indent=2))
        return

    click.secho(f"\n🎯 Targets: {len(config.targets)}", fg="cyan", bold=True)
    for t in config.targets:
        click.echo(f"   • {t.label}  {t.include_root} [{', '.join(t.packages)}]")
        click.echo(f"       → {t.output_dir(primary)}")
        click.echo(f"       → {t.output_dir(alternate)}")

    if config.naming_patches:
        click.echo()
        click.secho(f"   Naming patches: {len(config.naming_patches)}", fg="white", bold=True)
        for rule in config.naming_patches:
            click.echo(f"     • {rule.target_file}")
            for sub in rule.substitutions:
                click.echo(f"         {sub.old} → {sub.new}")

    click.echo()


@cli.group()
def config() -> None:
    """Generation configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate codegen.yml configuration."""
    from protogen.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.config is not None  # guaranteed when valid
        source = result.config_path or "built-in tables"
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Source: {source}")
        click.echo(f"   Targets: {len(result.config.targets)}")
        click.echo(f"   Naming patches: {len(result.config.naming_patches)}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)

    click.echo()


# ── Register maintenance task commands from protogen/ui/cli/ ──────

from protogen.ui.cli.tasks import bindgen, clang_lint, refresh_package, submodule  # noqa: E402

cli.add_command(bindgen)
cli.add_command(submodule)
cli.add_command(clang_lint)
cli.add_command(refresh_package)


if __name__ == "__main__":
    cli()
