"""
Action and Receipt — one external command and what became of it.

The StepRunner builds an Action for every compiler, builder or formatter
call and gets a Receipt back from the adapter. A failed command is a
Receipt with ``status="failed"``, not an exception.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class Action(BaseModel):
    """An argv to run, where to run it, and extra environment.

    ``argv`` is never passed through a shell. A relative ``cwd`` is
    taken from the project root; ``env`` is layered over the inherited
    environment for this command only.
    """

    id: str                         # "<step>:<n>", unique within a run
    name: str = ""                  # step name, used in errors and logs
    adapter: str = "shell"
    argv: list[str] = Field(default_factory=list)
    cwd: str | None = None
    env: dict[str, str] = Field(default_factory=dict)

    @property
    def command_line(self) -> str:
        """Space-joined argv, for logs and reports."""
        return " ".join(self.argv)


class Receipt(BaseModel):
    """Outcome of one Action.

    ``return_code`` is the process exit status, or None when the process
    never exited on its own (killed by a signal, could not be started,
    rejected before launch).
    """

    adapter: str
    action_id: str
    status: Literal["ok", "failed"] = "ok"
    duration_ms: int = 0
    output: str = ""
    error: str | None = None
    return_code: int | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @classmethod
    def success(cls, adapter: str, action_id: str, output: str = "", **kwargs: Any) -> Receipt:
        """An ok receipt; exit status defaults to 0."""
        kwargs.setdefault("return_code", 0)
        return cls(adapter=adapter, action_id=action_id, output=output, **kwargs)

    @classmethod
    def failure(cls, adapter: str, action_id: str, error: str, **kwargs: Any) -> Receipt:
        """A failed receipt carrying the tool's stderr (or a reason)."""
        return cls(adapter=adapter, action_id=action_id, status="failed", error=error, **kwargs)
