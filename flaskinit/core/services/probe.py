"""
Project state prober — classify the target directory before any write.
"""

from __future__ import annotations

import logging
from pathlib import Path

from flaskinit.core.errors import ProjectConflictError
from flaskinit.core.models.state import ProjectState
from flaskinit.core.services.paths import ENTRY_POINT, VENV_DIR

logger = logging.getLogger(__name__)


def probe_project_state(root: Path) -> ProjectState:
    """Classify ``root``.

    Checks run in order: existence, emptiness, then the two markers of
    a project this tool generated (the entry point and the environment
    directory).

    Raises:
        ProjectConflictError: If ``root`` exists but is not a directory.
    """
    if not root.exists():
        state = ProjectState.ABSENT
    elif not root.is_dir():
        raise ProjectConflictError(f"{root} exists and is not a directory")
    elif not any(root.iterdir()):
        state = ProjectState.EMPTY_DIR
    elif (root / ENTRY_POINT).is_file() and (root / VENV_DIR).is_dir():
        state = ProjectState.RECOGNIZED_EXISTING
    else:
        state = ProjectState.UNRECOGNIZED_NON_EMPTY

    logger.debug("Project state of %s: %s", root, state.value)
    return state


_AFFIRMATIVE = {"y", "yes"}


def is_affirmative(answer: str | None) -> bool:
    """Only ``y``/``yes`` (any case, surrounding blanks ignored) count as yes."""
    return (answer or "").strip().lower() in _AFFIRMATIVE
