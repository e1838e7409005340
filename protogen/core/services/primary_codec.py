"""
Primary codec — message structs from the compiler, service stubs from a plugin.

Two compiler passes write into the same fresh directory:

    1. ``protoc -I<include> --rust_out=<out> <inputs...>``
       → one ``<module>.rs`` per schema file
    2. ``protoc -I<include> --grpc_out=<out> --plugin=<name>=<path> <inputs...>``
       → one ``<module>_grpc.rs`` per schema file with services

The plugin binary is built from the local workspace between the passes.
"""

from __future__ import annotations

import logging
from pathlib import Path

from protogen.core.engine.executor import StepRunner
from protogen.core.models.toolchain import Toolchain
from protogen.core.services.outputs import recreate_dir

logger = logging.getLogger(__name__)


def generate_primary(
    runner: StepRunner,
    toolchain: Toolchain,
    protoc: str,
    cargo: str,
    include_root: str,
    inputs: list[str],
    out_dir: str,
) -> None:
    """Generate message and service-stub files for ``inputs`` into ``out_dir``.

    ``out_dir`` is recreated from scratch first. Any failing invocation
    raises ``StepFailedError`` and leaves the directory incomplete.
    """
    codec = toolchain.primary
    recreate_dir(runner.project_root / out_dir, step="primary")

    runner.run(
        "primary: messages",
        [protoc, f"-I{include_root}", f"{codec.message_out_flag}={out_dir}", *inputs],
    )

    runner.run("primary: build stub plugin", [cargo, *codec.plugin_build])

    runner.run(
        "primary: service stubs",
        [
            protoc,
            f"-I{include_root}",
            f"{codec.stub_out_flag}={out_dir}",
            f"--plugin={codec.plugin_name}={codec.plugin_path}",
            *inputs,
        ],
    )

    logger.info("Primary codec wrote %s", Path(out_dir))
