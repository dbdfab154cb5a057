"""
Activation controller — toggle which virtual environment is active.

Activation is modelled as an explicit :class:`ActivationState` value:
functions here take a state and return a new one, mirroring what a
venv ``activate`` script and its ``deactivate`` function do to
``VIRTUAL_ENV`` and ``PATH``. Callers decide where the state goes
(subprocess environments, ``os.environ``, shell hints).
"""

from __future__ import annotations

import logging
import os
import shlex
from dataclasses import dataclass
from pathlib import Path

from flaskinit.core.models.options import OptionSet
from flaskinit.core.models.state import ActivationState
from flaskinit.core.services.paths import activate_script, venv_bin_dir, venv_dir

logger = logging.getLogger(__name__)


@dataclass
class ActivationOutcome:
    """Result of applying activation flags to a state."""

    state: ActivationState
    changed: bool = False
    message: str = ""
    shell_command: str | None = None

    def to_dict(self) -> dict:
        return {
            "active": self.state.active,
            "virtual_env": self.state.virtual_env,
            "changed": self.changed,
            "message": self.message,
            "shell_command": self.shell_command,
        }


def is_active_for(state: ActivationState, venv: Path) -> bool:
    """Whether ``venv`` is the environment currently active in ``state``."""
    if not state.virtual_env:
        return False
    return os.path.normpath(state.virtual_env) == os.path.normpath(str(venv))


def activate(state: ActivationState, venv: Path) -> ActivationState:
    """Return ``state`` with ``venv`` active.

    An already-active different environment is deactivated first, as
    sourcing a second ``activate`` script would do.
    """
    if is_active_for(state, venv):
        return state
    base = deactivate(state)
    bin_dir = str(venv_bin_dir(venv))
    path = bin_dir + os.pathsep + base.path if base.path else bin_dir
    logger.info("Activating %s", venv)
    return ActivationState(virtual_env=str(venv), path=path, old_path=base.path)


def deactivate(state: ActivationState) -> ActivationState:
    """Return ``state`` with no environment active.

    Restores the saved ``PATH`` when there is one; otherwise removes the
    environment's executable directory from ``PATH``.
    """
    if not state.active:
        return state
    assert state.virtual_env is not None
    if state.old_path is not None:
        path = state.old_path
    else:
        bin_dir = os.path.normpath(str(venv_bin_dir(Path(state.virtual_env))))
        path = os.pathsep.join(
            entry for entry in state.path.split(os.pathsep)
            if entry and os.path.normpath(entry) != bin_dir
        )
    logger.info("Deactivating %s", state.virtual_env)
    return ActivationState(virtual_env=None, path=path, old_path=None)


def activate_hint(venv: Path) -> str:
    """Shell command that activates ``venv`` in an interactive shell."""
    return f"source {shlex.quote(str(activate_script(venv)))}"


# ── Flag handling ───────────────────────────────────────────────


def handle_activation_request(
    options: OptionSet,
    state: ActivationState,
    cwd: Path,
) -> ActivationOutcome:
    """Apply ``-dvenv`` / ``-avenv`` when no project directory was given.

    Deactivation wins when both flags are present: it returns
    immediately without looking for an environment.
    """
    if options.deactivate:
        if not state.active:
            return ActivationOutcome(state=state, message="No virtual environment is active.")
        new_state = deactivate(state)
        return ActivationOutcome(
            state=new_state,
            changed=True,
            message=f"Deactivated {state.virtual_env}.",
            shell_command="deactivate",
        )

    if options.activate:
        venv = venv_dir(cwd)
        if not venv.is_dir():
            return ActivationOutcome(
                state=state,
                message=f"No virtual environment found at {venv}.",
            )
        if is_active_for(state, venv):
            return ActivationOutcome(
                state=state,
                message=f"{venv} is already active.",
                shell_command=activate_hint(venv),
            )
        return ActivationOutcome(
            state=activate(state, venv),
            changed=True,
            message=f"Activated {venv}.",
            shell_command=activate_hint(venv),
        )

    return ActivationOutcome(state=state)


def finalize_activation(
    options: OptionSet,
    state: ActivationState,
    root: Path,
) -> ActivationOutcome:
    """End-of-run policy: leave the environment active unless ``-dvenv`` was given."""
    venv = venv_dir(root)
    if options.deactivate:
        new_state = deactivate(state)
        return ActivationOutcome(
            state=new_state,
            changed=new_state != state,
            message="Virtual environment deactivated.",
            shell_command="deactivate" if state.active else None,
        )
    return ActivationOutcome(
        state=state,
        message=f"Virtual environment {venv} is active.",
        shell_command=activate_hint(venv),
    )
