"""
Create use case — the full scaffold workflow.

    resolve path → probe state (abort / confirm) → create directory
    → provision venv → generate scaffold → final activation

This is the vertical slice the CLI calls. Services raise typed
``ScaffoldError`` subclasses; this layer turns them into a
``CreateResult`` carrying the message and the activation state the
run ended in.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from flaskinit.adapters.base import Adapter
from flaskinit.adapters.languages.python import PythonEnvAdapter
from flaskinit.core.errors import (
    ProjectConflictError,
    ProvisionError,
    ScaffoldError,
    UserAbortError,
)
from flaskinit.core.models.options import OptionSet
from flaskinit.core.models.state import ActivationState, ProjectState
from flaskinit.core.services.activation import ActivationOutcome, finalize_activation
from flaskinit.core.services.paths import ENTRY_POINT, VENV_DIR, resolve_project_dir
from flaskinit.core.services.probe import probe_project_state
from flaskinit.core.services.provisioner import (
    DEFAULT_DEPENDENCIES,
    EnvironmentProvisioner,
    ProvisionResult,
)
from flaskinit.core.services.scaffold import ScaffoldGenerator, ScaffoldResult

logger = logging.getLogger(__name__)

ConfirmFn = Callable[[str], bool]


@dataclass
class CreateResult:
    """Result of one scaffold run."""

    project_root: Path | None = None
    project_state: ProjectState | None = None
    provision: ProvisionResult | None = None
    scaffold: ScaffoldResult | None = None
    activation: ActivationOutcome | None = None
    state: ActivationState | None = None
    error: str | None = None
    failed_step: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1

    def to_dict(self) -> dict:
        result: dict = {
            "ok": self.ok,
            "project_root": str(self.project_root) if self.project_root else None,
            "project_state": self.project_state.value if self.project_state else None,
        }
        if self.error:
            result["error"] = self.error
            if self.failed_step:
                result["failed_step"] = self.failed_step
        if self.provision:
            result["provision"] = self.provision.to_dict()
        if self.scaffold:
            result["scaffold"] = self.scaffold.to_dict()
        if self.activation:
            result["activation"] = self.activation.to_dict()
        return result


def create_project(
    options: OptionSet,
    *,
    adapter: Adapter | None = None,
    activation_state: ActivationState | None = None,
    confirm: ConfirmFn | None = None,
    dependencies: tuple[str, ...] | list[str] = DEFAULT_DEPENDENCIES,
    cwd: Path | None = None,
) -> CreateResult:
    """Scaffold a project according to ``options``.

    Args:
        options: Parsed options; ``project_dir`` is required.
        adapter: Package-manager adapter (default: real PythonEnvAdapter).
        activation_state: Activation state at start (default: from os.environ).
        confirm: Asked before scaffolding into a non-empty directory that
            is not a recognized project. ``None`` means "no".
        dependencies: Packages installed into the environment.
        cwd: Base for a relative ``project_dir`` (default: process cwd).

    Returns:
        CreateResult. ``state`` is always set to the activation state the
        run ended in, including after failures.
    """
    if not options.project_dir:
        raise ValueError("create_project requires options.project_dir")

    state = activation_state if activation_state is not None else ActivationState.from_environ()
    result = CreateResult(state=state)

    root = resolve_project_dir(options.project_dir, cwd)
    result.project_root = root
    logger.info("Scaffolding project at %s", root)

    try:
        # ── Probe ───────────────────────────────────────────────
        project_state = probe_project_state(root)
        result.project_state = project_state

        if project_state is ProjectState.RECOGNIZED_EXISTING:
            raise ProjectConflictError(
                f"{root} already contains a project ({ENTRY_POINT} and {VENV_DIR}/). "
                "Refusing to overwrite it."
            )
        if project_state is ProjectState.UNRECOGNIZED_NON_EMPTY:
            prompt = f"{root} is not empty. Scaffold a project into it anyway?"
            if confirm is None or not confirm(prompt):
                raise UserAbortError("Aborted: directory is not empty and was left untouched.")

        if project_state is ProjectState.ABSENT:
            try:
                root.mkdir(parents=True)
            except OSError as e:
                raise ProvisionError("create project directory", str(e)) from e
            logger.info("Created %s", root)

        # ── Provision ───────────────────────────────────────────
        provisioner = EnvironmentProvisioner(adapter or PythonEnvAdapter(), dependencies)
        result.provision = provisioner.provision(root, state)
        result.state = result.provision.state

        # ── Scaffold ────────────────────────────────────────────
        result.scaffold = ScaffoldGenerator(root, options).generate()

    except ProvisionError as e:
        result.error = str(e)
        result.failed_step = e.step
        if e.state is not None:
            result.state = e.state
        return result
    except ScaffoldError as e:
        # environment stays as provisioning left it
        result.error = str(e)
        return result

    # ── Final activation ────────────────────────────────────────
    assert result.state is not None
    result.activation = finalize_activation(options, result.state, root)
    result.state = result.activation.state
    return result
