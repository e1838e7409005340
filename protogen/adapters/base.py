"""
Adapter base — how the generator reaches compilers, builders and formatters.

Pipeline code never spawns a process itself. It describes the command as
an Action and hands it to an adapter, which answers with a Receipt.
Swapping the adapter (see ``MockAdapter``) is how tests run the whole
pipeline without protoc or cargo installed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import BaseModel

from protogen.core.models.action import Action, Receipt


class ExecutionContext(BaseModel):
    """One command, bound to the checkout it runs in."""

    action: Action
    project_root: str = "."

    @property
    def working_dir(self) -> str:
        """``action.cwd`` resolved against the project root."""
        if not self.action.cwd:
            return self.project_root
        cwd = Path(self.action.cwd)
        return str(cwd if cwd.is_absolute() else Path(self.project_root) / cwd)


class Adapter(ABC):
    """A way of running tool invocations.

    ``execute`` reports every outcome in the returned Receipt, including
    a tool that could not be started. Turning a failed receipt into a
    fatal error is the engine's job.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Key that ``Action.adapter`` refers to."""

    @abstractmethod
    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        """Cheap pre-flight checks: (ok, reason-if-not)."""

    @abstractmethod
    def execute(self, context: ExecutionContext) -> Receipt:
        """Run the command and describe what happened."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name}>"
