"""
Tests for domain models — options, activation state, actions, receipts.
"""

import pytest
from pydantic import ValidationError

from flaskinit.core.errors import ProvisionError
from flaskinit.core.models import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    Action,
    ActivationState,
    EnvironmentMode,
    GeneratedFile,
    OptionSet,
    ProjectState,
    Receipt,
)


class TestOptionSet:
    """OptionSet model tests."""

    def test_defaults(self):
        o = OptionSet()
        assert o.project_dir is None
        assert o.host == DEFAULT_HOST == "127.0.0.1"
        assert o.port == DEFAULT_PORT == 5000
        assert o.environment_mode is EnvironmentMode.DEVELOPMENT
        assert o.pages == ()
        assert not o.activate
        assert not o.deactivate

    def test_is_noop(self):
        assert OptionSet().is_noop
        assert not OptionSet(project_dir="x").is_noop
        assert not OptionSet(activate=True).is_noop
        assert not OptionSet(deactivate=True).is_noop

    def test_mode_from_string(self):
        o = OptionSet(environment_mode="production")
        assert o.environment_mode is EnvironmentMode.PRODUCTION

    def test_port_range(self):
        with pytest.raises(ValidationError):
            OptionSet(port=0)
        with pytest.raises(ValidationError):
            OptionSet(port=70000)
        assert OptionSet(port=65535).port == 65535

    def test_host_stripped(self):
        assert OptionSet(host="  0.0.0.0 ").host == "0.0.0.0"

    def test_blank_host_rejected(self):
        with pytest.raises(ValidationError):
            OptionSet(host="   ")

    def test_frozen(self):
        o = OptionSet(project_dir="x")
        with pytest.raises(ValidationError):
            o.port = 8080

    def test_pages_keep_order(self):
        o = OptionSet(pages=["Zeta", "Alpha", "Zeta"])
        assert o.pages == ("Zeta", "Alpha", "Zeta")


class TestProjectState:
    def test_values(self):
        assert ProjectState.ABSENT.value == "absent"
        assert ProjectState.EMPTY_DIR.value == "empty"
        assert ProjectState("recognized-existing") is ProjectState.RECOGNIZED_EXISTING


class TestActivationState:
    """ActivationState model tests."""

    def test_from_environ_inactive(self):
        s = ActivationState.from_environ({"PATH": "/usr/bin"})
        assert not s.active
        assert s.path == "/usr/bin"
        assert s.old_path is None

    def test_from_environ_active(self):
        s = ActivationState.from_environ({
            "PATH": "/p/venv/bin:/usr/bin",
            "VIRTUAL_ENV": "/p/venv",
            "_OLD_VIRTUAL_PATH": "/usr/bin",
        })
        assert s.active
        assert s.virtual_env == "/p/venv"
        assert s.old_path == "/usr/bin"

    def test_empty_virtual_env_is_inactive(self):
        s = ActivationState.from_environ({"PATH": "", "VIRTUAL_ENV": ""})
        assert not s.active
        assert s.virtual_env is None

    def test_to_environ_keeps_other_keys(self):
        s = ActivationState(virtual_env="/p/venv", path="/p/venv/bin:/usr/bin")
        env = s.to_environ({"HOME": "/home/u", "PATH": "/usr/bin"})
        assert env["HOME"] == "/home/u"
        assert env["PATH"] == "/p/venv/bin:/usr/bin"
        assert env["VIRTUAL_ENV"] == "/p/venv"

    def test_to_environ_does_not_mutate_base(self):
        base = {"PATH": "/usr/bin"}
        ActivationState(virtual_env="/v", path="/v/bin").to_environ(base)
        assert base == {"PATH": "/usr/bin"}

    def test_apply_removes_markers(self):
        env = {"PATH": "/v/bin:/usr/bin", "VIRTUAL_ENV": "/v", "_OLD_VIRTUAL_PATH": "/usr/bin"}
        ActivationState(path="/usr/bin").apply(env)
        assert env == {"PATH": "/usr/bin"}

    def test_frozen(self):
        s = ActivationState(path="/usr/bin")
        with pytest.raises(ValidationError):
            s.path = "/bin"


class TestAction:
    def test_minimal(self):
        a = Action(id="install")
        assert a.adapter == "python"
        assert a.operation == ""
        assert a.params == {}


class TestReceipt:
    """Receipt model tests."""

    def test_success(self):
        r = Receipt.success(adapter="python", action_id="freeze", output="flask==3.0.0")
        assert r.ok
        assert not r.failed
        assert r.output == "flask==3.0.0"

    def test_failure(self):
        r = Receipt.failure(adapter="python", action_id="install", error="no network")
        assert r.failed
        assert not r.ok
        assert r.error == "no network"

    def test_skip(self):
        r = Receipt.skip(adapter="python", action_id="create_env", reason="exists")
        assert r.status == "skipped"
        assert not r.ok
        assert not r.failed
        assert r.output == "exists"

    def test_command_fields_default(self):
        r = Receipt.success(adapter="a", action_id="b")
        assert r.started_at
        assert r.command == ""
        assert r.return_code is None


class TestGeneratedFile:
    def test_defaults(self):
        f = GeneratedFile(path="app/app.py", content="x")
        assert f.policy == "create"


class TestProvisionError:
    def test_message_carries_detail(self):
        receipt = Receipt.failure(adapter="python", action_id="install", error="no network")
        err = ProvisionError("install flask", "no network", receipt=receipt)
        assert str(err) == "Step failed: install flask — no network"
        assert err.step == "install flask"
        assert err.receipt is receipt
        assert err.state is None

    def test_message_without_detail(self):
        assert str(ProvisionError("create venv")) == "Step failed: create venv"
