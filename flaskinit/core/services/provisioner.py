"""
Environment provisioner — make sure the project's virtual environment
exists, is active, and has the web stack installed.

Steps (each idempotent on its own):

    1. create the environment if its activation script is missing
    2. activate it if it is not already the active one
    3. upgrade pip inside it
    4. install the declared dependencies
    5. freeze the installed set into requirements.txt (always rewritten)

Every external command goes through an :class:`Adapter`; a failed
receipt stops the sequence with a :class:`ProvisionError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from flaskinit.adapters.base import Adapter, ExecutionContext
from flaskinit.core.errors import ProvisionError
from flaskinit.core.models.action import Action, Receipt
from flaskinit.core.models.state import ActivationState
from flaskinit.core.services.activation import activate, deactivate, is_active_for
from flaskinit.core.services.paths import REQUIREMENTS, VENV_DIR, activate_script, venv_dir

logger = logging.getLogger(__name__)

DEFAULT_DEPENDENCIES: tuple[str, ...] = ("flask", "python-dotenv")


@dataclass
class ProvisionResult:
    """What provisioning did and the activation state it left behind."""

    state: ActivationState
    activated_here: bool = False
    created_env: bool = False
    receipts: list[Receipt] = field(default_factory=list)
    requirements: str = ""

    def to_dict(self) -> dict:
        return {
            "virtual_env": self.state.virtual_env,
            "activated_here": self.activated_here,
            "created_env": self.created_env,
            "steps": [
                {"id": r.action_id, "status": r.status, "duration_ms": r.duration_ms}
                for r in self.receipts
            ],
        }


class EnvironmentProvisioner:
    """Drive the package-manager adapter through the provisioning steps."""

    def __init__(
        self,
        adapter: Adapter,
        dependencies: tuple[str, ...] | list[str] = DEFAULT_DEPENDENCIES,
    ):
        self._adapter = adapter
        self._dependencies = tuple(dependencies)

    @property
    def dependencies(self) -> tuple[str, ...]:
        return self._dependencies

    def provision(self, root: Path, state: ActivationState) -> ProvisionResult:
        """Run all steps against ``root``.

        Args:
            root: Absolute project root (must exist).
            state: Activation state before provisioning.

        Returns:
            ProvisionResult whose ``state`` has the project environment active.

        Raises:
            ProvisionError: On the first failed step. If this call activated
                the environment, the error's ``state`` is deactivated again.
        """
        result = ProvisionResult(state=state)
        venv = venv_dir(root)

        # ── 1. Create ───────────────────────────────────────────
        if activate_script(venv).is_file():
            logger.info("Virtual environment already present at %s", venv)
            result.receipts.append(
                Receipt.skip(adapter=self._adapter.name, action_id="create_env",
                             reason="environment exists")
            )
        else:
            self._step(result, root, "create_env", "create virtual environment",
                       "venv", {"path": VENV_DIR})
            if not activate_script(venv).is_file():
                raise ProvisionError(
                    "create virtual environment",
                    f"activation script not found at {activate_script(venv)}",
                    state=result.state,
                )
            result.created_env = True

        # ── 2. Activate ─────────────────────────────────────────
        if not is_active_for(result.state, venv):
            result.state = activate(result.state, venv)
            result.activated_here = True

        try:
            # ── 3. Upgrade pip ──────────────────────────────────
            self._step(result, root, "upgrade_pip", "upgrade pip", "pip_upgrade",
                       {"path": VENV_DIR})

            # ── 4. Install ──────────────────────────────────────
            self._step(result, root, "install", f"install {', '.join(self._dependencies)}",
                       "pip_install", {"path": VENV_DIR, "packages": list(self._dependencies)})

            # ── 5. Freeze ───────────────────────────────────────
            freeze = self._step(result, root, "freeze", "freeze dependencies",
                                "pip_freeze", {"path": VENV_DIR})
            result.requirements = _write_requirements(root, freeze.output)
        except ProvisionError as e:
            if result.activated_here:
                e.state = deactivate(result.state)
            else:
                e.state = result.state
            raise

        return result

    def _step(
        self,
        result: ProvisionResult,
        root: Path,
        action_id: str,
        step_name: str,
        operation: str,
        params: dict[str, Any],
    ) -> Receipt:
        logger.info("→ %s", step_name)
        ctx = ExecutionContext(
            action=Action(id=action_id, name=step_name, adapter=self._adapter.name,
                          operation=operation, params=params),
            project_root=str(root),
            env=result.state.to_environ(),
        )
        receipt = self._adapter.run(ctx)
        result.receipts.append(receipt)
        if receipt.failed:
            logger.error("%s failed: %s", step_name, receipt.error)
            raise ProvisionError(step_name, receipt.error or "", receipt=receipt,
                                 state=result.state)
        return receipt


def _write_requirements(root: Path, frozen: str) -> str:
    content = frozen.strip() + "\n" if frozen.strip() else ""
    try:
        (root / REQUIREMENTS).write_text(content, encoding="utf-8")
    except OSError as e:
        raise ProvisionError(f"write {REQUIREMENTS}", str(e)) from e
    return content
