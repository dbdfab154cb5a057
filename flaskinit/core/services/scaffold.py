"""
Scaffold generator — materialize the project layout on disk.

Creates the fixed directory tree and writes every generated file,
honouring each file's write semantics:

    - app/app.py     rewritten every run
    - README.md      appended every run
    - everything else  created if missing, left alone if it existed
                       before this run

A file written earlier in the same run may be written again later in
that run. That is what makes two pages with the same sanitized
identifier collide with last-one-wins behaviour.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from flaskinit.core.errors import ScaffoldError
from flaskinit.core.models.options import OptionSet
from flaskinit.core.models.template import GeneratedFile
from flaskinit.core.services.generators.app_source import generate_app_source
from flaskinit.core.services.generators.readme import generate_readme_block
from flaskinit.core.services.generators.static_assets import (
    generate_index_script,
    generate_page_script,
    generate_stylesheet,
)
from flaskinit.core.services.generators.web_templates import (
    generate_base_template,
    generate_index_template,
    generate_page_template,
)
from flaskinit.core.services.pages import Page
from flaskinit.core.services.paths import (
    CSS_DIR,
    JS_DIR,
    LOG_DIR,
    LOG_FILE,
    README,
    TEMPLATES_DIR,
)

logger = logging.getLogger(__name__)

LOG_DIR_MODE = 0o700
LOG_FILE_MODE = 0o600

_TREE_DIRS = (TEMPLATES_DIR, CSS_DIR, JS_DIR)


@dataclass
class ScaffoldResult:
    """Files and directories touched by one scaffold pass."""

    root: Path
    pages: list[Page] = field(default_factory=list)
    directories: list[str] = field(default_factory=list)
    created: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "root": str(self.root),
            "pages": [{"name": p.raw, "route": f"/{p.ident}"} for p in self.pages],
            "directories": self.directories,
            "created": self.created,
            "updated": self.updated,
            "skipped": self.skipped,
        }


class ScaffoldGenerator:
    """Write the project skeleton for one set of options into ``root``."""

    def __init__(self, root: Path, options: OptionSet):
        self._root = root
        self._options = options
        self._written: set[str] = set()
        self._result = ScaffoldResult(root=root)

    @property
    def project_name(self) -> str:
        return self._root.name

    def generate(self) -> ScaffoldResult:
        """Create directories and files.

        Pages are processed in request order; each page's template and
        script are written before the next name is sanitized. The index
        template, entry point and README need the full page list and
        are written last.

        Raises:
            PageNameError: A page name sanitized to nothing. Files of
                earlier pages stay on disk; nothing after is written.
            ScaffoldError: A directory or file could not be written.
        """
        self._create_directories()

        self.write(generate_base_template(self.project_name))
        self.write(generate_stylesheet())
        self.write(generate_index_script())
        self._create_log_file()

        for raw in self._options.pages:
            page = Page.from_raw(raw)
            logger.debug("Page %r → /%s", raw, page.ident)
            self.write(generate_page_template(page))
            self.write(generate_page_script(page))
            self._result.pages.append(page)

        pages = self._result.pages
        self.write(generate_index_template(self.project_name, pages))
        self.write(generate_app_source(self._options, pages))
        self.write(generate_readme_block(
            self.project_name,
            self._options,
            pages,
            include_title=not (self._root / README).exists(),
        ))
        return self._result

    # ── Writing ─────────────────────────────────────────────────

    def write(self, generated: GeneratedFile) -> str:
        """Materialize one generated file.

        Returns:
            "created", "updated" or "skipped".
        """
        target = self._root / generated.path
        existed = target.exists()

        if existed and generated.policy == "create" and generated.path not in self._written:
            logger.debug("Keeping existing %s", generated.path)
            self._result.skipped.append(generated.path)
            return "skipped"

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            if generated.policy == "append" and existed:
                separator = _append_separator(target)
                with target.open("ab") as fh:
                    fh.write((separator + generated.content).encode("utf-8"))
            else:
                target.write_text(generated.content, encoding="utf-8")
        except OSError as e:
            raise ScaffoldError(f"Cannot write {target}: {e}") from e

        self._written.add(generated.path)
        if existed:
            self._result.updated.append(generated.path)
            logger.info("Updated %s", generated.path)
            return "updated"
        self._result.created.append(generated.path)
        logger.info("Created %s", generated.path)
        return "created"

    def _create_directories(self) -> None:
        try:
            for rel in _TREE_DIRS:
                path = self._root / rel
                if not path.is_dir():
                    path.mkdir(parents=True)
                    self._result.directories.append(rel)

            logs = self._root / LOG_DIR
            if not logs.is_dir():
                logs.mkdir(mode=LOG_DIR_MODE)
                # mkdir's mode is filtered by the umask
                logs.chmod(LOG_DIR_MODE)
                self._result.directories.append(LOG_DIR)
        except OSError as e:
            raise ScaffoldError(f"Cannot create project directories in {self._root}: {e}") from e

    def _create_log_file(self) -> None:
        log_file = self._root / LOG_FILE
        if log_file.exists():
            self._result.skipped.append(LOG_FILE)
            return
        try:
            fd = os.open(log_file, os.O_CREAT | os.O_WRONLY, LOG_FILE_MODE)
            os.close(fd)
            log_file.chmod(LOG_FILE_MODE)
        except OSError as e:
            raise ScaffoldError(f"Cannot create {log_file}: {e}") from e
        self._written.add(LOG_FILE)
        self._result.created.append(LOG_FILE)


def _append_separator(target: Path) -> str:
    """Blank line between an existing README and the appended block.

    Only the trailing bytes are inspected, so the existing file may be
    in any encoding.
    """
    with target.open("rb") as fh:
        fh.seek(0, os.SEEK_END)
        size = fh.tell()
        fh.seek(max(size - 2, 0))
        tail = fh.read()
    if not tail or tail.endswith(b"\n\n"):
        return ""
    return "\n" if tail.endswith(b"\n") else "\n\n"
