"""
Tests for path resolution and page name sanitizing.
"""

from pathlib import Path

import pytest

from flaskinit.core.errors import PageNameError, ScaffoldError
from flaskinit.core.services.pages import Page, sanitize_page_name
from flaskinit.core.services.paths import (
    activate_script,
    resolve_project_dir,
    venv_dir,
    venv_python,
)

# ── Paths ────────────────────────────────────────────────────────────


class TestResolveProjectDir:
    def test_relative_joined_onto_cwd(self, tmp_path: Path):
        assert resolve_project_dir("demo", tmp_path) == tmp_path / "demo"

    def test_absolute_kept(self, tmp_path: Path):
        target = tmp_path / "elsewhere"
        assert resolve_project_dir(str(target), "/somewhere/else") == target

    def test_normalized(self, tmp_path: Path):
        assert resolve_project_dir("a/../b/./c", tmp_path) == tmp_path / "b" / "c"

    def test_home_expanded(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("HOME", str(tmp_path))
        assert resolve_project_dir("~/proj", "/ignored") == tmp_path / "proj"

    def test_defaults_to_process_cwd(self, monkeypatch, tmp_path: Path):
        monkeypatch.chdir(tmp_path)
        assert resolve_project_dir("demo") == Path.cwd() / "demo"


class TestVenvPaths:
    def test_layout(self, tmp_path: Path):
        venv = venv_dir(tmp_path)
        assert venv == tmp_path / "venv"
        assert activate_script(venv) == venv / "bin" / "activate"
        assert venv_python(venv) == venv / "bin" / "python"


# ── Pages ────────────────────────────────────────────────────────────


class TestSanitizePageName:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("About", "about"),
            ("About Us!", "aboutus"),
            ("contact-form", "contactform"),
            ("my_page2", "my_page2"),
            ("  FAQ  ", "faq"),
        ],
    )
    def test_sanitize(self, raw, expected):
        assert sanitize_page_name(raw) == expected

    def test_non_ascii_letters_dropped(self):
        assert sanitize_page_name("Café") == "caf"

    @pytest.mark.parametrize("raw", ["", "!!!", "---", "   ", "é"])
    def test_empty_result_rejected(self, raw):
        with pytest.raises(PageNameError) as exc_info:
            sanitize_page_name(raw)
        assert exc_info.value.raw == raw

    def test_error_is_scaffold_error(self):
        with pytest.raises(ScaffoldError):
            sanitize_page_name("***")


class TestPage:
    def test_from_raw(self):
        p = Page.from_raw("About Us")
        assert p.raw == "About Us"
        assert p.ident == "aboutus"
        assert p.title == "About Us"

    def test_function_name_plain(self):
        assert Page.from_raw("Contact").function_name == "contact"

    def test_function_name_leading_digit(self):
        p = Page.from_raw("2024 Report")
        assert p.ident == "2024report"
        assert p.function_name == "page_2024report"

    def test_function_name_keyword(self):
        assert Page.from_raw("Class").function_name == "page_class"
