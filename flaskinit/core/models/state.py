"""
State models — what the target directory looks like, and which
virtual environment (if any) is active.

Neither is persisted: both are computed once per invocation.
"""

from __future__ import annotations

import os
from collections.abc import Mapping, MutableMapping
from enum import Enum

from pydantic import BaseModel, ConfigDict


class ProjectState(str, Enum):
    """Classification of the target directory before scaffolding."""

    ABSENT = "absent"
    EMPTY_DIR = "empty"
    RECOGNIZED_EXISTING = "recognized-existing"
    UNRECOGNIZED_NON_EMPTY = "unrecognized-non-empty"


class ActivationState(BaseModel):
    """Snapshot of the activation-relevant process environment.

    Mirrors what a venv ``activate`` script manipulates: the
    ``VIRTUAL_ENV`` marker, ``PATH``, and the ``PATH`` saved before
    activation so it can be restored.
    """

    model_config = ConfigDict(frozen=True)

    virtual_env: str | None = None
    path: str = ""
    old_path: str | None = None

    @property
    def active(self) -> bool:
        return bool(self.virtual_env)

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> ActivationState:
        """Capture the state from a process environment (default: os.environ)."""
        env = os.environ if environ is None else environ
        return cls(
            virtual_env=env.get("VIRTUAL_ENV") or None,
            path=env.get("PATH", ""),
            old_path=env.get("_OLD_VIRTUAL_PATH"),
        )

    def to_environ(self, base: Mapping[str, str] | None = None) -> dict[str, str]:
        """Return a copy of ``base`` with this state applied.

        Used as the ``env`` of package-manager subprocesses.
        """
        env = dict(os.environ if base is None else base)
        self.apply(env)
        return env

    def apply(self, environ: MutableMapping[str, str]) -> None:
        """Write this state into a mutable environment mapping."""
        environ["PATH"] = self.path
        if self.virtual_env:
            environ["VIRTUAL_ENV"] = self.virtual_env
        else:
            environ.pop("VIRTUAL_ENV", None)
        if self.old_path is not None:
            environ["_OLD_VIRTUAL_PATH"] = self.old_path
        else:
            environ.pop("_OLD_VIRTUAL_PATH", None)
