"""
README generator — project layout diagram and usage notes.

The block is appended to README.md on every run, so a regenerated
project accumulates one structure section per run.
"""

from __future__ import annotations

from flaskinit.core.models.options import OptionSet
from flaskinit.core.models.template import GeneratedFile
from flaskinit.core.services.generators import fill
from flaskinit.core.services.pages import Page
from flaskinit.core.services.paths import README, VENV_DIR
from flaskinit.core.services.tree import TreeNode, render_tree


_USAGE = """\
## Usage

1. Activate the virtual environment:

   ```bash
   source __VENV__/bin/activate
   ```

2. Start the server:

   ```bash
   python app/app.py
   ```

3. Open http://__HOST__:__PORT__/ in your browser.

The `HOST`, `PORT` and `FLASK_ENV` environment variables override the
defaults (`__HOST__`, `__PORT__`, `__ENV__`). `FLASK_ENV` must be
`development` or `production`.

Application logs are written to `logs/app.log` and rotated automatically.
"""


def build_layout_tree(project_name: str, pages: list[Page]) -> TreeNode:
    """In-memory layout of a scaffolded project, pages in request order."""
    templates = TreeNode.directory(
        "templates",
        TreeNode.file("base.html"),
        TreeNode.file("index.html"),
    )
    scripts = TreeNode.directory("js", TreeNode.file("index.js"))
    for page in pages:
        templates.add(TreeNode.file(f"{page.ident}.html"))
        scripts.add(TreeNode.file(f"{page.ident}.js"))

    return TreeNode.directory(
        project_name,
        TreeNode.directory(
            "app",
            TreeNode.file("app.py"),
            templates,
            TreeNode.directory(
                "static",
                TreeNode.directory("css", TreeNode.file("style.css")),
                scripts,
            ),
        ),
        TreeNode.directory("logs", TreeNode.file("app.log")),
        TreeNode.directory(VENV_DIR),
        TreeNode.file("README.md"),
        TreeNode.file("requirements.txt"),
    )


def generate_readme_block(
    project_name: str,
    options: OptionSet,
    pages: list[Page],
    *,
    include_title: bool = False,
) -> GeneratedFile:
    """README section: structure diagram plus usage instructions.

    Args:
        project_name: Directory name of the project.
        options: Supplies host, port and mode for the usage text.
        pages: Extra pages, one tree entry each under templates/ and js/.
        include_title: Prefix a top-level heading (first write only).
    """
    parts = []
    if include_title:
        parts.append(f"# {project_name}\n")
    parts.append("## Project Structure\n")
    parts.append("```\n" + render_tree(build_layout_tree(project_name, pages)) + "\n```\n")
    parts.append(
        fill(
            _USAGE,
            VENV=VENV_DIR,
            HOST=options.host,
            PORT=options.port,
            ENV=options.environment_mode.value,
        )
    )

    return GeneratedFile(
        path=README,
        content="\n".join(parts),
        policy="append",
        reason="Project structure and usage",
    )
