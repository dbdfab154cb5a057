"""
Python adapter — virtual environment and pip operations.

This is the package-manager capability the provisioner drives:
create an environment, upgrade pip inside it, install packages,
and freeze the installed set.
"""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
import time
from collections.abc import Callable
from pathlib import Path

from flaskinit.adapters.base import Adapter, ExecutionContext
from flaskinit.core.models.action import Receipt
from flaskinit.core.services.paths import VENV_DIR, venv_python

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 300
INSTALL_TIMEOUT = 600


class PythonEnvAdapter(Adapter):
    """Python virtual-environment toolchain adapter.

    Action params:
        path (str): Environment directory relative to the project root
            (default: ``venv``).
        packages (list[str]): Package names (for 'pip_install').
        timeout (int): Timeout in seconds (default: 300, 600 for installs).

    pip operations always run through the environment's own interpreter,
    so they act on the environment regardless of ``PATH``.
    """

    def __init__(self, interpreter: str | None = None):
        self._interpreter = interpreter
        self._operations: dict[str, Callable[[ExecutionContext], Receipt]] = {
            "venv": self._create_venv,
            "pip_upgrade": self._pip_upgrade,
            "pip_install": self._pip_install,
            "pip_freeze": self._pip_freeze,
        }

    @property
    def name(self) -> str:
        return "python"

    @property
    def operations(self) -> list[str]:
        return sorted(self._operations)

    def is_available(self) -> bool:
        return self._base_interpreter() is not None

    def _base_interpreter(self) -> str | None:
        """Interpreter used to create environments: explicit, else python3, else python."""
        if self._interpreter:
            return self._interpreter
        for candidate in ("python3", "python"):
            if shutil.which(candidate):
                return candidate
        return None

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        operation = context.action.operation
        if not operation:
            return False, "Missing required field: 'operation'"
        if operation not in self._operations:
            return False, f"Unknown operation '{operation}'. Valid: {', '.join(self.operations)}"
        if operation == "pip_install" and not context.action.params.get("packages"):
            return False, "Missing required param: 'packages'"
        if not Path(context.working_dir).is_dir():
            return False, f"Working directory does not exist: {context.working_dir}"
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        handler = self._operations.get(context.action.operation)
        if handler is None:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Unknown operation: {context.action.operation}",
            )
        try:
            return handler(context)
        except Exception as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Python error: {e}",
            )

    # ── Operations ──────────────────────────────────────────────

    def _create_venv(self, ctx: ExecutionContext) -> Receipt:
        interpreter = self._base_interpreter()
        if interpreter is None:
            return Receipt.failure(
                adapter=self.name,
                action_id=ctx.action.id,
                error="No Python interpreter found on PATH (tried python3, python)",
            )
        venv_path = ctx.action.params.get("path", VENV_DIR)
        return self._exec(ctx, [interpreter, "-m", "venv", venv_path])

    def _pip_upgrade(self, ctx: ExecutionContext) -> Receipt:
        cmd = [*self._pip(ctx), "install", "--upgrade", "pip"]
        return self._exec(ctx, cmd, timeout=INSTALL_TIMEOUT)

    def _pip_install(self, ctx: ExecutionContext) -> Receipt:
        packages = ctx.action.params.get("packages", [])
        cmd = [*self._pip(ctx), "install", *packages]
        return self._exec(ctx, cmd, timeout=INSTALL_TIMEOUT)

    def _pip_freeze(self, ctx: ExecutionContext) -> Receipt:
        return self._exec(ctx, [*self._pip(ctx), "freeze"])

    # ── Helpers ─────────────────────────────────────────────────

    def _pip(self, ctx: ExecutionContext) -> list[str]:
        venv = Path(ctx.working_dir) / ctx.action.params.get("path", VENV_DIR)
        return [str(venv_python(venv)), "-m", "pip"]

    def _exec(
        self,
        ctx: ExecutionContext,
        cmd: list[str],
        timeout: int = DEFAULT_TIMEOUT,
    ) -> Receipt:
        timeout = ctx.action.params.get("timeout", timeout)
        command = shlex.join(cmd)
        logger.debug("Executing: %s (cwd=%s)", command, ctx.working_dir)
        start = time.monotonic()
        try:
            result = subprocess.run(
                cmd,
                cwd=ctx.working_dir,
                env=ctx.env,
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            return Receipt.failure(
                adapter=self.name,
                action_id=ctx.action.id,
                error=f"Command timed out after {timeout}s",
                command=command,
            )
        except FileNotFoundError:
            return Receipt.failure(
                adapter=self.name,
                action_id=ctx.action.id,
                error=f"Command not found: {cmd[0]}",
                command=command,
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        if result.returncode == 0:
            return Receipt.success(
                adapter=self.name,
                action_id=ctx.action.id,
                output=result.stdout.strip(),
                duration_ms=elapsed_ms,
                command=command,
                return_code=0,
            )
        return Receipt.failure(
            adapter=self.name,
            action_id=ctx.action.id,
            error=result.stderr.strip() or f"Exit code {result.returncode}",
            duration_ms=elapsed_ms,
            command=command,
            return_code=result.returncode,
        )
