"""
Mock adapter — stands in for the shell adapter in tests.

Every call is recorded. Unless a failure has been scripted, the call
succeeds and the optional ``side_effect`` runs, which is where a test
writes the files protoc or the generator would have produced.
"""

from __future__ import annotations

from collections.abc import Callable

from protogen.adapters.base import Adapter, ExecutionContext
from protogen.core.models.action import Receipt

SideEffect = Callable[[ExecutionContext], None]


class MockAdapter(Adapter):
    """Recording adapter with scripted responses.

    Lookup order for a call: response for its action ID, then response
    for its program (argv[0]), then success plus ``side_effect``.
    """

    def __init__(
        self,
        adapter_name: str = "shell",
        default_output: str = "",
        side_effect: SideEffect | None = None,
    ):
        self._name = adapter_name
        self._default_output = default_output
        self._side_effect = side_effect
        self._by_action: dict[str, Receipt] = {}
        self._by_program: dict[str, Receipt] = {}
        self.call_log: list[ExecutionContext] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_count(self) -> int:
        return len(self.call_log)

    @property
    def argvs(self) -> list[list[str]]:
        """argv of every recorded call, oldest first."""
        return [ctx.action.argv for ctx in self.call_log]

    def set_response(self, action_id: str, receipt: Receipt) -> None:
        self._by_action[action_id] = receipt

    def set_failure(self, action_id: str, error: str = "mock failure", return_code: int | None = 1) -> None:
        self._by_action[action_id] = Receipt.failure(
            adapter=self._name, action_id=action_id, error=error, return_code=return_code
        )

    def set_program_failure(
        self, program: str, error: str = "mock failure", return_code: int | None = 1
    ) -> None:
        """Make every call whose argv[0] is ``program`` fail."""
        self._by_program[program] = Receipt.failure(
            adapter=self._name, action_id=program, error=error, return_code=return_code
        )

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        self.call_log.append(context)
        action = context.action

        scripted = self._by_action.get(action.id)
        if scripted is None and action.argv:
            scripted = self._by_program.get(action.argv[0])
        if scripted is not None:
            return scripted.model_copy()

        if self._side_effect is not None:
            self._side_effect(context)
        return Receipt.success(
            adapter=self._name,
            action_id=action.id,
            output=self._default_output,
            metadata={"mock": True},
        )

    def reset(self) -> None:
        """Forget recorded calls and scripted responses."""
        self.call_log.clear()
        self._by_action.clear()
        self._by_program.clear()
