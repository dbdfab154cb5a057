"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from flaskinit.adapters.mock import MockAdapter
from flaskinit.core.models.state import ActivationState


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> str:
    """Process environment with no virtual environment active."""
    path = "/usr/local/bin:/usr/bin:/bin"
    # set before deleting so monkeypatch restores the original values
    for name in ("VIRTUAL_ENV", "_OLD_VIRTUAL_PATH"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.setenv("PATH", path)
    return path


@pytest.fixture
def inactive_state() -> ActivationState:
    """Activation state with nothing active."""
    return ActivationState(path="/usr/local/bin:/usr/bin:/bin")


@pytest.fixture
def mock_adapter() -> MockAdapter:
    """Package-manager double that fakes venv creation."""
    return MockAdapter(adapter_name="python")


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Path of a not-yet-existing project directory."""
    return tmp_path / "demo"
