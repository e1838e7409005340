"""
Alternate codec — one self-built generator, one merged file per module.

The generator shells out to the schema compiler itself; it learns which
binary to use from an environment variable set on its process.
"""

from __future__ import annotations

import logging

from protogen.core.engine.executor import StepRunner
from protogen.core.models.toolchain import Toolchain
from protogen.core.services.outputs import recreate_dir

logger = logging.getLogger(__name__)


def generate_alternate(
    runner: StepRunner,
    toolchain: Toolchain,
    protoc: str,
    cargo: str,
    include_root: str,
    inputs: list[str],
    out_dir: str,
) -> None:
    """Build the alternate generator and run it once over ``inputs``."""
    codec = toolchain.alternate
    env = {codec.compiler_env_var: protoc}

    recreate_dir(runner.project_root / out_dir, step="alternate")

    runner.run(
        "alternate: build generator",
        [cargo, *codec.build],
        cwd=codec.build_cwd,
        env=env,
    )
    runner.run(
        "alternate: generate",
        [
            codec.binary,
            f"--protos={','.join(inputs)}",
            f"--includes={include_root}",
            f"--out-dir={out_dir}",
        ],
        env=env,
    )

    logger.info("Alternate codec wrote %s", out_dir)
