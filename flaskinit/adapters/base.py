"""
Adapter base — how the provisioner reaches the package manager.

The provisioner never calls subprocess itself. Each external command
is an Action handed to an Adapter, which answers with a Receipt, so
every command can be logged, mocked and reported the same way.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from pydantic import BaseModel

from flaskinit.core.models.action import Action, Receipt

logger = logging.getLogger(__name__)


class ExecutionContext(BaseModel):
    """An Action plus where and with which environment to run it.

    ``env`` is the full process environment for the command; it
    carries the activation state (``VIRTUAL_ENV``/``PATH``) chosen by
    the caller. ``None`` means inherit the current process environment.
    """

    action: Action
    project_root: str = "."
    env: dict[str, str] | None = None

    @property
    def working_dir(self) -> str:
        """Commands run from the project root."""
        return self.project_root


class Adapter(ABC):
    """A package-manager backend.

    Subclasses report failures as ``status="failed"`` receipts;
    ``execute`` must not let exceptions escape.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Identifier recorded on every receipt ('python', 'mock')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the backing tool can be found. Cheap and side-effect free."""

    @abstractmethod
    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        """Check an action before running it; returns (ok, reason)."""

    @abstractmethod
    def execute(self, context: ExecutionContext) -> Receipt:
        """Run an already validated action."""

    def run(self, context: ExecutionContext) -> Receipt:
        """Validate, then execute. A rejected action becomes a failure receipt."""
        valid, message = self.validate(context)
        if not valid:
            logger.debug("%s rejected %s: %s", self.name, context.action.id, message)
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=message,
            )
        return self.execute(context)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
