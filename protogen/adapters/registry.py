"""
Adapter registry — routes each Action to the adapter it names.

``execute_action`` always returns a Receipt: a missing adapter, a failed
pre-flight check or an adapter that raised all come back as failed
receipts, so the StepRunner has exactly one failure path to handle.
"""

from __future__ import annotations

import logging
import time

from protogen.adapters.base import Adapter, ExecutionContext
from protogen.core.models.action import Action, Receipt

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Name → adapter table plus the dispatch entry point."""

    def __init__(self) -> None:
        self._adapters: dict[str, Adapter] = {}

    def register(self, adapter: Adapter) -> None:
        if adapter.name in self._adapters:
            logger.warning("Replacing adapter %r", adapter.name)
        self._adapters[adapter.name] = adapter

    def execute_action(self, action: Action, project_root: str = ".") -> Receipt:
        """Validate then run ``action``; the receipt carries the elapsed time."""
        started = time.monotonic()
        receipt = self._dispatch(ExecutionContext(action=action, project_root=project_root))
        receipt.duration_ms = int((time.monotonic() - started) * 1000)
        return receipt

    def _dispatch(self, context: ExecutionContext) -> Receipt:
        action = context.action
        adapter = self._adapters.get(action.adapter)
        if adapter is None:
            return Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"No adapter registered for '{action.adapter}'",
            )

        ok, reason = adapter.validate(context)
        if not ok:
            logger.debug("Rejected %s: %s", action.id, reason)
            return Receipt.failure(
                adapter=adapter.name,
                action_id=action.id,
                error=reason,
                metadata={"validation": True},
            )

        try:
            return adapter.execute(context)
        except Exception as e:
            # Adapter bug: report it like any other failed command.
            logger.exception("Adapter %s raised on %s", adapter.name, action.id)
            return Receipt.failure(
                adapter=adapter.name,
                action_id=action.id,
                error=f"{type(e).__name__}: {e}",
            )


def default_registry() -> AdapterRegistry:
    """Registry with the real subprocess adapter."""
    from protogen.adapters.shell.command import ShellCommandAdapter

    registry = AdapterRegistry()
    registry.register(ShellCommandAdapter())
    return registry
