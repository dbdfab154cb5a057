"""
Action and Receipt models — one provisioning command and its outcome.

The provisioner describes each external command it wants run (create
a venv, upgrade pip, install packages, freeze) as an Action. Adapters
answer with a Receipt and never raise.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

ReceiptStatus = Literal["ok", "skipped", "failed"]


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


class Action(BaseModel):
    """A requested package-manager operation.

    ``operation`` selects the capability (``venv``, ``pip_upgrade``,
    ``pip_install``, ``pip_freeze``); ``params`` carries its arguments.
    """

    id: str                         # step identifier, e.g. "install"
    name: str = ""                  # human-readable step name
    adapter: str = "python"
    operation: str = ""
    params: dict[str, Any] = Field(default_factory=dict)


class Receipt(BaseModel):
    """Outcome of one adapter call.

    Failures are data, not exceptions: the provisioner inspects
    ``failed`` and decides whether to abort.
    """

    adapter: str
    action_id: str
    status: ReceiptStatus = "ok"
    started_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    output: str = ""
    error: str | None = None

    command: str = ""               # command line as run, if any
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
        return cls(adapter=adapter, action_id=action_id, status="ok", output=output, **kwargs)

    @classmethod
    def failure(cls, adapter: str, action_id: str, error: str, **kwargs: Any) -> Receipt:
        return cls(adapter=adapter, action_id=action_id, status="failed", error=error, **kwargs)

    @classmethod
    def skip(cls, adapter: str, action_id: str, reason: str = "", **kwargs: Any) -> Receipt:
        """Step already satisfied; ``reason`` lands in ``output``."""
        return cls(adapter=adapter, action_id=action_id, status="skipped", output=reason, **kwargs)
