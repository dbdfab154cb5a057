"""
Static asset generators — stylesheet, index script, per-page scripts.
"""

from __future__ import annotations

import json

from flaskinit.core.models.template import GeneratedFile
from flaskinit.core.services.generators import fill
from flaskinit.core.services.pages import Page
from flaskinit.core.services.paths import CSS_DIR, JS_DIR


_STYLE_CSS = """\
* {
    box-sizing: border-box;
}

body {
    margin: 0;
    font-family: system-ui, -apple-system, "Segoe UI", Roboto, sans-serif;
    line-height: 1.5;
    color: #222;
    background: #f7f7f7;
}

.container {
    max-width: 960px;
    margin: 0 auto;
    padding: 2rem 1rem;
}

.pages {
    display: flex;
    flex-wrap: wrap;
    gap: 0.5rem;
}

.pages button {
    padding: 0.5rem 1rem;
    border: 1px solid #888;
    border-radius: 4px;
    background: #fff;
    cursor: pointer;
}

.pages button:hover {
    background: #eaeaea;
}
"""

_INDEX_JS = """\
document.addEventListener("DOMContentLoaded", function () {
    console.log("Index page loaded");
});
"""

_PAGE_JS = """\
// Scripts for the __TITLE__ page.
console.log(__MESSAGE__);
"""


def generate_stylesheet() -> GeneratedFile:
    return GeneratedFile(path=f"{CSS_DIR}/style.css", content=_STYLE_CSS, reason="Site stylesheet")


def generate_index_script() -> GeneratedFile:
    return GeneratedFile(path=f"{JS_DIR}/index.js", content=_INDEX_JS, reason="Shared script")


def generate_page_script(page: Page) -> GeneratedFile:
    """Placeholder script logging that the page loaded."""
    content = fill(
        _PAGE_JS,
        MESSAGE=json.dumps(f"{page.ident} page loaded"),
        TITLE=page.title.replace("\n", " "),
    )
    return GeneratedFile(
        path=f"{JS_DIR}/{page.ident}.js",
        content=content,
        reason=f"Script for page {page.raw!r}",
    )
