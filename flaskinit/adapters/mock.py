"""
Mock adapter — stands in for the package manager.

Backs ``--mock`` runs and the test suite: the provisioning workflow
runs end to end without creating real environments or touching the
network. Individual steps can be scripted to fail.
"""

from __future__ import annotations

from pathlib import Path

from flaskinit.adapters.base import Adapter, ExecutionContext
from flaskinit.core.models.action import Receipt
from flaskinit.core.services.paths import VENV_DIR, activate_script


class MockAdapter(Adapter):
    """Records every call and answers from a script of receipts.

    Unscripted actions succeed. A ``venv`` action lays down
    ``<venv>/bin/activate`` (unless ``create_venv`` is off) and a
    ``pip_freeze`` action reports every package installed so far at 0.0.0,
    so the files a real run leaves behind are there for later steps.
    """

    def __init__(
        self,
        adapter_name: str = "mock",
        available: bool = True,
        default_output: str = "[mock] executed",
        create_venv: bool = True,
    ):
        self._name = adapter_name
        self._available = available
        self._default_output = default_output
        self._create_venv = create_venv
        self._scripted: dict[str, Receipt] = {}
        self._calls: list[ExecutionContext] = []
        self._installed: list[str] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[ExecutionContext]:
        return self._calls

    @property
    def call_count(self) -> int:
        return len(self._calls)

    @property
    def called_ids(self) -> list[str]:
        """Action IDs in call order."""
        return [ctx.action.id for ctx in self._calls]

    def is_available(self) -> bool:
        return self._available

    def set_response(self, action_id: str, receipt: Receipt) -> None:
        self._scripted[action_id] = receipt

    def set_failure(self, action_id: str, error: str = "Mock failure") -> None:
        """Make the step with ``action_id`` fail with ``error``."""
        self.set_response(
            action_id,
            Receipt.failure(adapter=self._name, action_id=action_id, error=error),
        )

    def reset(self) -> None:
        self._calls.clear()
        self._scripted.clear()
        self._installed.clear()

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        self._calls.append(context)
        action = context.action

        scripted = self._scripted.get(action.id)
        if scripted is not None:
            return scripted

        output = self._default_output
        if action.operation == "venv" and self._create_venv:
            script = activate_script(Path(context.working_dir) / action.params.get("path", VENV_DIR))
            script.parent.mkdir(parents=True, exist_ok=True)
            script.touch()
        elif action.operation == "pip_install":
            for pkg in action.params.get("packages", []):
                if pkg not in self._installed:
                    self._installed.append(pkg)
        elif action.operation == "pip_freeze":
            output = "\n".join(f"{pkg}==0.0.0" for pkg in self._installed)

        return Receipt.success(
            adapter=self._name,
            action_id=action.id,
            output=output,
            metadata={"mock": True, "operation": action.operation},
        )
