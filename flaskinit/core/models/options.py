"""
Option Set — the immutable request the workflow runs against.

Resolved once from CLI arguments (plus optional file defaults) and
never mutated afterwards.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 5000


class EnvironmentMode(str, Enum):
    """Runtime mode baked into the generated app as its FLASK_ENV default."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"


class OptionSet(BaseModel):
    """Parsed scaffold options.

    A request without ``project_dir`` and with neither activation flag
    set asks for nothing; see :attr:`is_noop`.
    """

    model_config = ConfigDict(frozen=True)

    project_dir: str | None = None
    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    environment_mode: EnvironmentMode = EnvironmentMode.DEVELOPMENT
    deactivate: bool = False
    activate: bool = False
    pages: tuple[str, ...] = ()

    @field_validator("host")
    @classmethod
    def _host_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("host must not be empty")
        return v.strip()

    @property
    def is_noop(self) -> bool:
        """True when no directory and no activation change was requested."""
        return not self.project_dir and not self.activate and not self.deactivate
