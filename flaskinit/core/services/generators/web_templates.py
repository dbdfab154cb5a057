"""
Jinja template generators — base layout, index, and one page each.

The generated files are Jinja2 templates for the scaffolded Flask app;
here they are plain text with a handful of placeholders.
"""

from __future__ import annotations

import html

from flaskinit.core.models.template import GeneratedFile
from flaskinit.core.services.generators import fill
from flaskinit.core.services.pages import Page
from flaskinit.core.services.paths import TEMPLATES_DIR


_JINJA_DELIMITERS = str.maketrans({"{": "&#123;", "}": "&#125;"})

_BASE_HTML = """\
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{% block title %}__PROJECT__{% endblock %}</title>
    <link rel="stylesheet" href="{{ url_for('static', filename='css/style.css') }}">
</head>
<body>
    <main class="container">
        {% block content %}{% endblock %}
    </main>
    <script src="{{ url_for('static', filename='js/index.js') }}"></script>
    {% block scripts %}{% endblock %}
</body>
</html>
"""

_INDEX_HTML = """\
{% extends "base.html" %}

{% block title %}__PROJECT__{% endblock %}

{% block content %}
<h1>Welcome to __PROJECT__</h1>
<nav class="pages">
__BUTTONS__</nav>
{% endblock %}
"""

_BUTTON = """\
    <button type="button" onclick="window.location.href='/__IDENT__'">__TITLE__</button>
"""

_PAGE_HTML = """\
{% extends "base.html" %}

{% block title %}__TITLE__{% endblock %}

{% block content %}
<h1>__TITLE__</h1>
<p><a href="{{ url_for('index') }}">Back to home</a></p>
{% endblock %}

{% block scripts %}
<script src="{{ url_for('static', filename='js/__IDENT__.js') }}"></script>
{% endblock %}
"""


def template_text(value: str) -> str:
    """Escape ``value`` for HTML and keep Jinja from reading it as markup."""
    return html.escape(value).translate(_JINJA_DELIMITERS)


def generate_base_template(project_name: str) -> GeneratedFile:
    return GeneratedFile(
        path=f"{TEMPLATES_DIR}/base.html",
        content=fill(_BASE_HTML, PROJECT=template_text(project_name)),
        reason="Base page shell",
    )


def generate_index_template(project_name: str, pages: list[Page]) -> GeneratedFile:
    """Index page with one navigation button per extra page, in order."""
    buttons = "".join(
        fill(_BUTTON, IDENT=page.ident, TITLE=template_text(page.title))
        for page in pages
    )
    content = fill(_INDEX_HTML, PROJECT=template_text(project_name), BUTTONS=buttons)
    return GeneratedFile(
        path=f"{TEMPLATES_DIR}/index.html",
        content=content,
        reason=f"Index page linking {len(pages)} page(s)",
    )


def generate_page_template(page: Page) -> GeneratedFile:
    content = fill(_PAGE_HTML, IDENT=page.ident, TITLE=template_text(page.title))
    return GeneratedFile(
        path=f"{TEMPLATES_DIR}/{page.ident}.html",
        content=content,
        reason=f"Template for page {page.raw!r}",
    )
