"""
Path resolution and the fixed project layout.

Everything here is pure: no function touches the filesystem.
"""

from __future__ import annotations

import os
from pathlib import Path

VENV_DIR = "venv"
ENTRY_POINT = "app/app.py"
README = "README.md"
REQUIREMENTS = "requirements.txt"
LOG_DIR = "logs"
LOG_FILE = "logs/app.log"
TEMPLATES_DIR = "app/templates"
CSS_DIR = "app/static/css"
JS_DIR = "app/static/js"

_BIN_DIR = "Scripts" if os.name == "nt" else "bin"


def resolve_project_dir(raw: str, cwd: Path | str | None = None) -> Path:
    """Turn a possibly relative directory argument into an absolute path.

    ``~`` is expanded; relative paths are joined onto ``cwd`` (default:
    the current working directory). The result is normalized but
    symlinks are not followed.
    """
    candidate = Path(os.path.expanduser(raw))
    if not candidate.is_absolute():
        base = Path(cwd) if cwd is not None else Path.cwd()
        candidate = base / candidate
    return Path(os.path.normpath(candidate))


def venv_dir(root: Path) -> Path:
    return root / VENV_DIR


def venv_bin_dir(venv: Path) -> Path:
    """Executable directory inside a virtual environment."""
    return venv / _BIN_DIR


def activate_script(venv: Path) -> Path:
    """The environment's activation entry point."""
    return venv_bin_dir(venv) / "activate"


def venv_python(venv: Path) -> Path:
    """The environment's interpreter."""
    name = "python.exe" if os.name == "nt" else "python"
    return venv_bin_dir(venv) / name
