"""
Error taxonomy for the scaffold workflow.

Services raise these; the use case layer converts them into a
result with a message and a non-zero exit code.
"""

from __future__ import annotations

from flaskinit.core.models.action import Receipt
from flaskinit.core.models.state import ActivationState


class ScaffoldError(Exception):
    """Base class for every abort of the scaffold workflow."""


class PageNameError(ScaffoldError):
    """A page name sanitized to an empty identifier."""

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(
            f"Page name {raw!r} contains no letters, digits or underscores"
        )


class ProjectConflictError(ScaffoldError):
    """The target already holds a project (or is not a directory)."""


class UserAbortError(ScaffoldError):
    """The user declined the confirmation prompt."""


class ProvisionError(ScaffoldError):
    """An external step (directory creation, venv, pip) failed."""

    def __init__(
        self,
        step: str,
        detail: str = "",
        receipt: Receipt | None = None,
        state: ActivationState | None = None,
    ):
        self.step = step
        self.receipt = receipt
        self.state = state  # activation state after cleanup
        message = f"Step failed: {step}"
        if detail:
            message += f" — {detail}"
        super().__init__(message)
