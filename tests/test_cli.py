"""
Tests for the CLI — argument parsing, exit codes, and mock runs.
"""

import json
import os
from pathlib import Path

import pytest
from click.testing import CliRunner

from flaskinit.main import cli


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch, clean_env) -> Path:
    """Isolated cwd with no config file and no active environment."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestCLIParsing:
    """Argument handling and exit codes."""

    def test_no_arguments_prints_usage(self, workdir: Path):
        result = CliRunner().invoke(cli, [])
        assert result.exit_code == 0
        assert "Usage:" in result.output

    def test_unknown_option_exits_1(self, workdir: Path):
        result = CliRunner().invoke(cli, ["--frobnicate"])
        assert result.exit_code == 1
        assert "No such option" in result.output

    def test_two_directories_exit_1(self, workdir: Path):
        result = CliRunner().invoke(cli, ["one", "two", "--mock"])
        assert result.exit_code == 1
        assert "Only one project directory" in result.output
        assert not (workdir / "one").exists()

    def test_port_out_of_range(self, workdir: Path):
        result = CliRunner().invoke(cli, ["demo", "-pt", "70000", "--mock"])
        assert result.exit_code == 1
        assert not (workdir / "demo").exists()

    def test_port_not_a_number(self, workdir: Path):
        result = CliRunner().invoke(cli, ["demo", "-pt", "http"])
        assert result.exit_code == 1

    def test_blank_host(self, workdir: Path):
        result = CliRunner().invoke(cli, ["demo", "-ht", " ", "--mock"])
        assert result.exit_code == 1
        assert "host" in result.output

    def test_missing_option_value(self, workdir: Path):
        result = CliRunner().invoke(cli, ["demo", "-p"])
        assert result.exit_code == 1


class TestCLICreate:
    """Full scaffold runs with the mock adapter."""

    def test_mock_run(self, workdir: Path):
        result = CliRunner().invoke(
            cli, ["demo", "--mock", "-p", "About", "-p", "Contact Us"]
        )
        assert result.exit_code == 0, result.output
        assert "Project ready" in result.output
        assert "/about, /contactus" in result.output
        root = workdir / "demo"
        assert (root / "app/app.py").is_file()
        assert (root / "app/templates/contactus.html").is_file()
        assert os.environ["VIRTUAL_ENV"] == str(root / "venv")

    def test_short_flags(self, workdir: Path):
        result = CliRunner().invoke(
            cli, ["demo", "--mock", "-pt", "9090", "-ht", "0.0.0.0", "-prod"]
        )
        assert result.exit_code == 0, result.output
        source = (workdir / "demo/app/app.py").read_text()
        assert "'0.0.0.0'" in source
        assert "9090" in source
        assert "'production'" in source

    def test_long_flags(self, workdir: Path):
        result = CliRunner().invoke(
            cli, ["demo", "--mock", "--port", "8081", "--host", "localhost", "--page", "Blog"]
        )
        assert result.exit_code == 0, result.output
        assert "8081" in (workdir / "demo/app/app.py").read_text()
        assert (workdir / "demo/app/templates/blog.html").is_file()

    def test_deactivate_after_create(self, workdir: Path, clean_env):
        result = CliRunner().invoke(cli, ["demo", "--mock", "-dvenv"])
        assert result.exit_code == 0, result.output
        assert "VIRTUAL_ENV" not in os.environ
        assert os.environ["PATH"] == clean_env

    def test_existing_project_refused(self, workdir: Path):
        runner = CliRunner()
        assert runner.invoke(cli, ["demo", "--mock"]).exit_code == 0
        app_py = workdir / "demo/app/app.py"
        before = app_py.read_text()
        result = runner.invoke(cli, ["demo", "--mock", "-pt", "9999"])
        assert result.exit_code == 1
        assert "already contains a project" in result.output
        assert app_py.read_text() == before

    def test_non_empty_prompt_declined(self, workdir: Path):
        (workdir / "demo").mkdir()
        (workdir / "demo" / "notes.txt").write_text("x")
        result = CliRunner().invoke(cli, ["demo", "--mock"], input="n\n")
        assert result.exit_code == 1
        assert "not empty" in result.output
        assert not (workdir / "demo/app").exists()

    def test_non_empty_prompt_accepted(self, workdir: Path):
        (workdir / "demo").mkdir()
        (workdir / "demo" / "notes.txt").write_text("x")
        result = CliRunner().invoke(cli, ["demo", "--mock"], input="yes\n")
        assert result.exit_code == 0, result.output
        assert (workdir / "demo/app/app.py").is_file()

    def test_non_empty_with_yes_flag(self, workdir: Path):
        (workdir / "demo").mkdir()
        (workdir / "demo" / "notes.txt").write_text("x")
        result = CliRunner().invoke(cli, ["demo", "--mock", "--yes"])
        assert result.exit_code == 0, result.output

    def test_bad_page_name(self, workdir: Path):
        result = CliRunner().invoke(cli, ["demo", "--mock", "-p", "!!!"])
        assert result.exit_code == 1
        assert "'!!!'" in result.output

    def test_json_output(self, workdir: Path):
        result = CliRunner().invoke(cli, ["demo", "--mock", "--json", "-p", "About"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["scaffold"]["pages"] == [{"name": "About", "route": "/about"}]

    def test_config_defaults(self, workdir: Path):
        (workdir / ".flaskinit.yml").write_text("port: 7000\npages: [Docs]\n")
        result = CliRunner().invoke(cli, ["demo", "--mock"])
        assert result.exit_code == 0, result.output
        assert "7000" in (workdir / "demo/app/app.py").read_text()
        assert (workdir / "demo/app/templates/docs.html").is_file()

    def test_flags_override_config(self, workdir: Path):
        (workdir / ".flaskinit.yml").write_text("port: 7000\n")
        result = CliRunner().invoke(cli, ["demo", "--mock", "-pt", "7100"])
        assert result.exit_code == 0, result.output
        source = (workdir / "demo/app/app.py").read_text()
        assert "7100" in source
        assert "7000" not in source

    def test_invalid_config(self, workdir: Path):
        bad = workdir / "bad.yml"
        bad.write_text("port: nope\n")
        result = CliRunner().invoke(cli, ["demo", "--mock", "--config", str(bad)])
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


class TestCLIActivation:
    """-avenv / -dvenv without a project directory."""

    def _make_venv(self, root: Path) -> Path:
        venv = root / "venv"
        (venv / "bin").mkdir(parents=True)
        (venv / "bin" / "activate").write_text("")
        return venv

    def test_activate(self, workdir: Path):
        venv = self._make_venv(workdir)
        result = CliRunner().invoke(cli, ["-avenv"])
        assert result.exit_code == 0
        assert "Activated" in result.output
        assert "source " in result.output
        assert os.environ["VIRTUAL_ENV"] == str(venv)

    def test_activate_without_venv(self, workdir: Path):
        result = CliRunner().invoke(cli, ["-avenv"])
        assert result.exit_code == 0
        assert "No virtual environment found" in result.output
        assert "VIRTUAL_ENV" not in os.environ

    def test_deactivate(self, workdir: Path, monkeypatch):
        venv = self._make_venv(workdir)
        monkeypatch.setenv("VIRTUAL_ENV", str(venv))
        monkeypatch.setenv("PATH", f"{venv / 'bin'}:/usr/bin")
        result = CliRunner().invoke(cli, ["-dvenv"])
        assert result.exit_code == 0
        assert "Deactivated" in result.output
        assert "VIRTUAL_ENV" not in os.environ
        assert os.environ["PATH"] == "/usr/bin"

    def test_deactivate_when_inactive(self, workdir: Path):
        result = CliRunner().invoke(cli, ["-dvenv"])
        assert result.exit_code == 0
        assert "No virtual environment is active" in result.output

    def test_both_flags_deactivate_wins(self, workdir: Path):
        self._make_venv(workdir)
        result = CliRunner().invoke(cli, ["-avenv", "-dvenv"])
        assert result.exit_code == 0
        assert "VIRTUAL_ENV" not in os.environ

    def test_json(self, workdir: Path):
        self._make_venv(workdir)
        result = CliRunner().invoke(cli, ["-avenv", "--json"])
        data = json.loads(result.output)
        assert data["active"] is True
        assert data["changed"] is True


class TestCLIRealAdapter:
    """Runs without --mock that stop before any command is executed."""

    def test_no_interpreter(self, workdir: Path, monkeypatch):
        monkeypatch.setattr("shutil.which", lambda name: None)
        result = CliRunner().invoke(cli, ["demo"])
        assert result.exit_code == 1
        assert "No Python interpreter" in result.output
        assert not (workdir / "demo").exists()
