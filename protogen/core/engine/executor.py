"""
Engine executor — run external tools, fail fast.

Every compiler, builder and formatter call in the pipeline goes through
``StepRunner.run``. Adapters report failures as receipts; the runner is
the one place that turns a failed receipt into a ``StepFailedError`` so
the whole run stops with the tool's own exit status.

Flow:
    step + argv → Action → registry → Receipt → (ok: record | failed: raise)
"""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from protogen.adapters.registry import AdapterRegistry
from protogen.core.errors import SIGNAL_EXIT_CODE, StepFailedError, ToolNotFoundError
from protogen.core.models.action import Action, Receipt

logger = logging.getLogger(__name__)


@dataclass
class StepRunner:
    """Dispatch tool invocations and abort on the first failure."""

    registry: AdapterRegistry
    project_root: Path = field(default_factory=Path.cwd)
    receipts: list[Receipt] = field(default_factory=list)
    commands: list[str] = field(default_factory=list)

    def run(
        self,
        step: str,
        argv: list[str],
        cwd: str | None = None,
        env: dict[str, str] | None = None,
    ) -> Receipt:
        """Run one external command; raise ``StepFailedError`` if it fails.

        The exit code carried by the error is the tool's own status, or
        ``SIGNAL_EXIT_CODE`` when there is none (signal, spawn failure).
        """
        action = Action(
            id=f"{step}:{len(self.receipts) + 1}",
            name=step,
            argv=[str(a) for a in argv],
            cwd=cwd,
            env=env or {},
        )
        logger.info("▶ %s", step)
        logger.debug("  $ %s", action.command_line)
        self.commands.append(action.command_line)

        receipt = self.registry.execute_action(action, project_root=str(self.project_root))
        self.receipts.append(receipt)

        if receipt.ok:
            logger.debug("✓ %s (%dms)", step, receipt.duration_ms)
            return receipt

        exit_code = receipt.return_code if receipt.return_code else SIGNAL_EXIT_CODE
        logger.error("✗ %s failed (exit %d): %s", step, exit_code, action.command_line)
        if receipt.error:
            for line in receipt.error.splitlines()[-20:]:
                logger.error("  │ %s", line)
        raise StepFailedError(step, receipt.error or "command failed", exit_code=exit_code)


def resolve_tool(configured: str | None, env_var: str, program: str) -> str:
    """Locate an external tool.

    Precedence: explicit configuration, then ``$env_var``, then
    ``program`` on ``PATH``.

    Raises:
        ToolNotFoundError: If none of those yields a usable command.
    """
    if configured:
        return configured

    from_env = os.environ.get(env_var)
    if from_env:
        return from_env

    found = shutil.which(program)
    if found:
        return found

    raise ToolNotFoundError(
        "toolchain",
        f"{program} not found: set {env_var} or add it to PATH",
    )
