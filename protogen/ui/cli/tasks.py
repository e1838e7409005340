"""
CLI commands for workspace maintenance tasks.

Thin wrappers over ``protogen.core.use_cases.tasks``.
"""

from __future__ import annotations

import json
import sys

import click


def _run(ctx: click.Context, task: str, as_json: bool) -> None:
    """Run a task, print its outcome, exit with its status."""
    from protogen.core.use_cases.tasks import run_task

    result = run_task(task, config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(result.exit_code)

    if not ctx.obj.get("quiet"):
        for command in result.commands:
            click.echo(f"   $ {command}")

    if result.error:
        label = f"{result.failed_step}: " if result.failed_step else ""
        click.secho(f"❌ {label}{result.error}", fg="red", err=True)
        sys.exit(result.exit_code)

    if not ctx.obj.get("quiet"):
        click.secho(f"✅ {task} done", fg="green", bold=True)


@click.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def bindgen(ctx: click.Context, as_json: bool) -> None:
    """Generate the low-level C bindings for grpcio-sys."""
    _run(ctx, "bindgen", as_json)


@click.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def submodule(ctx: click.Context, as_json: bool) -> None:
    """Init the submodules needed for compilation."""
    _run(ctx, "submodule", as_json)


@click.command("clang-lint")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def clang_lint(ctx: click.Context, as_json: bool) -> None:
    """Lint and format the C++ wrapper in grpcio-sys."""
    _run(ctx, "clang-lint", as_json)


@click.command("refresh-package")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def refresh_package(ctx: click.Context, as_json: bool) -> None:
    """Regenerate grpc-sys/link-deps.rs with the current link dependencies."""
    _run(ctx, "refresh-package", as_json)
