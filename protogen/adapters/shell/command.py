"""
Shell command adapter — run one external program as a subprocess.

protoc, cargo, the generator binaries, git and the clang tools all run
through here. No shell is involved: argv goes to the OS as given, with
the Action's env layered over the inherited environment.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time
from pathlib import Path

from protogen.adapters.base import Adapter, ExecutionContext
from protogen.core.models.action import Receipt

logger = logging.getLogger(__name__)


class ShellCommandAdapter(Adapter):
    """Subprocess-backed adapter.

    stdout ends up in ``Receipt.output`` and stderr in ``Receipt.error``
    (or metadata, on success). A child killed by a signal yields
    ``return_code=None``.
    """

    @property
    def name(self) -> str:
        return "shell"

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        argv = context.action.argv
        if not argv:
            return False, "Empty command"
        if not Path(context.working_dir).is_dir():
            return False, f"Working directory does not exist: {context.working_dir}"
        # Bare names must resolve on PATH; paths are left to the OS.
        if os.sep not in argv[0] and shutil.which(argv[0]) is None:
            return False, f"{argv[0]}: command not found on PATH"
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        action = context.action
        env = {**os.environ, **action.env} if action.env else None

        logger.debug("exec %s (cwd=%s)", action.command_line, context.working_dir)
        started = time.monotonic()
        try:
            proc = subprocess.run(
                action.argv,
                cwd=context.working_dir,
                env=env,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            return self._failed(action.id, f"Cannot run {action.argv[0]}: {e}")
        elapsed = int((time.monotonic() - started) * 1000)

        stdout, stderr = proc.stdout.strip(), proc.stderr.strip()
        if proc.returncode == 0:
            return Receipt.success(
                adapter=self.name,
                action_id=action.id,
                output=stdout,
                duration_ms=elapsed,
                metadata={"stderr": stderr},
            )
        if proc.returncode < 0:
            signum = -proc.returncode
            return self._failed(
                action.id,
                stderr or f"{action.argv[0]} killed by signal {signum}",
                duration_ms=elapsed,
                metadata={"signal": signum},
            )
        return self._failed(
            action.id,
            stderr or f"{action.argv[0]} exited with status {proc.returncode}",
            return_code=proc.returncode,
            output=stdout,
            duration_ms=elapsed,
        )

    def _failed(self, action_id: str, error: str, **kwargs) -> Receipt:
        return Receipt.failure(adapter=self.name, action_id=action_id, error=error, **kwargs)
