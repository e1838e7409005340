"""
Maintenance tasks — the workspace chores that sit beside code generation.

Each task is a short fixed sequence of external commands run through
the same fail-fast StepRunner as the generator, so a failing command
ends the task with that command's exit code.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from protogen.adapters.registry import AdapterRegistry, default_registry
from protogen.core.config.loader import ConfigError, load_config, project_root
from protogen.core.data import GRPC_THIRD_PARTY_SUBMODULES
from protogen.core.engine.executor import StepRunner, resolve_tool
from protogen.core.errors import EXIT_FAILURE, CodegenError
from protogen.core.services.outputs import clear_dir

logger = logging.getLogger(__name__)

GRPC_SYS = "grpc-sys"
GRPC_THIRD_PARTY = "grpc-sys/grpc/third_party"
BORINGSSL_DIR = "grpc-sys/grpc/third_party/boringssl-with-bazel"
ZLIB_DIR = "grpc-sys/grpc/third_party/zlib"
WRAPPER_SOURCE = "grpc-sys/grpc_wrap.cc"
LINK_DEPS = "grpc-sys/link-deps.rs"


@dataclass
class TaskResult:
    """Result of running a maintenance task."""

    task: str
    commands: list[str] = field(default_factory=list)
    error: str | None = None
    failed_step: str | None = None
    exit_code: int = 0

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def to_dict(self) -> dict:
        result: dict = {
            "task": self.task,
            "ok": self.ok,
            "exit_code": self.exit_code,
            "commands": self.commands,
        }
        if self.error:
            result["error"] = self.error
            result["failed_step"] = self.failed_step
        return result


def bindgen(runner: StepRunner, cargo: str | None = None) -> None:
    """Regenerate the low-level C bindings."""
    runner.run(
        "bindgen",
        [
            resolve_tool(cargo, "CARGO", "cargo"),
            "build",
            "-p",
            "grpcio-sys",
            "--features",
            "_gen-bindings",
        ],
        cwd=GRPC_SYS,
    )


def submodule(runner: StepRunner) -> None:
    """Initialise the vendored gRPC checkout and the submodules it needs."""
    runner.run("submodule: grpc", ["git", "submodule", "update", "--init", "grpc-sys/grpc"])
    for name in GRPC_THIRD_PARTY_SUBMODULES:
        runner.run(
            f"submodule: {name}",
            ["git", "submodule", "update", "--init", name],
            cwd=GRPC_THIRD_PARTY,
        )

    boringssl = runner.project_root / BORINGSSL_DIR
    if boringssl.is_dir():
        clear_dir(boringssl, step="submodule: boringssl")
        logger.info("Cleared %s", BORINGSSL_DIR)

    runner.run("submodule: zlib clean", ["git", "clean", "-df"], cwd=ZLIB_DIR)
    runner.run("submodule: zlib reset", ["git", "reset", "--hard"], cwd=ZLIB_DIR)


def clang_lint(runner: StepRunner) -> None:
    """Lint then format the C++ wrapper."""
    runner.run(
        "clang-tidy",
        [
            "clang-tidy",
            WRAPPER_SOURCE,
            "--",
            "-Igrpc-sys/grpc/include",
            "-x",
            "c++",
            "-std=c++11",
        ],
    )
    runner.run("clang-format", ["clang-format", "-i", WRAPPER_SOURCE])


def refresh_package(runner: StepRunner, cargo: str | None = None) -> None:
    """Regenerate the list of native link dependencies."""
    runner.run(
        "refresh-package: build",
        [
            resolve_tool(cargo, "CARGO", "cargo"),
            "build",
            "-p",
            "grpcio-sys",
            "--features",
            "_list-package",
        ],
        cwd=GRPC_SYS,
    )
    runner.run("refresh-package: rustfmt", ["rustfmt", LINK_DEPS])


TASKS = ("bindgen", "submodule", "clang-lint", "refresh-package")


def run_task(
    task: str,
    config_path: Path | None = None,
    registry: AdapterRegistry | None = None,
) -> TaskResult:
    """Run one maintenance task by name.

    Args:
        task: One of ``TASKS``.
        config_path: Optional path to codegen.yml (for the project root
            and the configured cargo).
        registry: Optional pre-configured adapter registry.
    """
    result = TaskResult(task=task)

    if task not in TASKS:
        result.error = f"Unknown task '{task}'. Valid: {', '.join(sorted(TASKS))}"
        result.exit_code = EXIT_FAILURE
        return result

    try:
        config = load_config(config_path)
    except ConfigError as e:
        result.error = str(e)
        result.failed_step = "config"
        result.exit_code = EXIT_FAILURE
        return result

    runner = StepRunner(
        registry=registry or default_registry(),
        project_root=project_root(config_path),
    )

    try:
        if task == "bindgen":
            bindgen(runner, config.toolchain.cargo)
        elif task == "submodule":
            submodule(runner)
        elif task == "clang-lint":
            clang_lint(runner)
        elif task == "refresh-package":
            refresh_package(runner, config.toolchain.cargo)
    except CodegenError as e:
        result.error = e.message
        result.failed_step = e.step
        result.exit_code = e.exit_code
    finally:
        result.commands = list(runner.commands)

    return result
