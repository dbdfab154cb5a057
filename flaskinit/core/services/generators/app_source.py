"""
Entry-point generator — produce ``app/app.py`` for the scaffolded project.

The file is rebuilt from scratch on every run: a fixed header, the
index route, one route per page, a deliberate error route, and a
main block that reads HOST / PORT / FLASK_ENV with the scaffold
options as defaults.
"""

from __future__ import annotations

from flaskinit.core.models.options import OptionSet
from flaskinit.core.models.template import GeneratedFile
from flaskinit.core.services.generators import fill
from flaskinit.core.services.pages import Page
from flaskinit.core.services.paths import ENTRY_POINT

LOG_MAX_BYTES = 10240
LOG_BACKUP_COUNT = 10


_HEADER = """\
import logging
import os
from logging.handlers import RotatingFileHandler

from flask import Flask, render_template

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
LOG_DIR = os.path.join(os.path.dirname(BASE_DIR), "logs")
LOG_FILE = os.path.join(LOG_DIR, "app.log")

VALID_ENVIRONMENTS = ("development", "production")

os.makedirs(LOG_DIR, mode=0o700, exist_ok=True)

app = Flask(__name__)

handler = RotatingFileHandler(LOG_FILE, maxBytes=__MAX_BYTES__, backupCount=__BACKUP_COUNT__)
handler.setFormatter(logging.Formatter(
    "%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]"
))
handler.setLevel(logging.INFO)
app.logger.addHandler(handler)
app.logger.setLevel(logging.INFO)
app.logger.info("Application startup")
"""

_INDEX_ROUTE = """

@app.route("/")
def index():
    app.logger.info("Index page accessed")
    return render_template("index.html")
"""

_PAGE_ROUTE = """

@app.route("/__IDENT__")
def __FUNCTION__():
    app.logger.info(__LOG_MESSAGE__)
    return render_template("__IDENT__.html")
"""

_ERROR_ROUTE = """

@app.route("/error")
def error():
    app.logger.warning("Error route accessed, raising on purpose")
    raise RuntimeError("Deliberate error to exercise error logging")
"""

_MAIN = """

def resolve_settings(environ=None):
    \"\"\"Read HOST, PORT and FLASK_ENV, falling back to the scaffold defaults.\"\"\"
    environ = os.environ if environ is None else environ
    host = environ.get("HOST", __HOST__)
    port = int(environ.get("PORT", __PORT__))
    env = environ.get("FLASK_ENV", __ENV__)
    if env not in VALID_ENVIRONMENTS:
        raise ValueError(
            f"Invalid FLASK_ENV {env!r}: expected one of {', '.join(VALID_ENVIRONMENTS)}"
        )
    return host, port, env


if __name__ == "__main__":
    host, port, env = resolve_settings()
    app.logger.info("Starting server on %s:%s (%s)", host, port, env)
    app.run(host=host, port=port, debug=env == "development")
"""


def render_page_route(page: Page) -> str:
    """Route block for one extra page."""
    return fill(
        _PAGE_ROUTE,
        IDENT=page.ident,
        FUNCTION=page.function_name,
        LOG_MESSAGE=repr(f"{page.title} page accessed"),
    )


def generate_app_source(options: OptionSet, pages: list[Page]) -> GeneratedFile:
    """Generate ``app/app.py``.

    Args:
        options: Scaffold options; host, port and mode become the defaults
            of the generated main block.
        pages: Extra pages in request order. Duplicate identifiers are
            emitted as-is.

    Returns:
        GeneratedFile with the overwrite policy.
    """
    parts = [
        fill(_HEADER, MAX_BYTES=LOG_MAX_BYTES, BACKUP_COUNT=LOG_BACKUP_COUNT),
        _INDEX_ROUTE,
    ]
    parts.extend(render_page_route(page) for page in pages)
    parts.append(_ERROR_ROUTE)
    parts.append(
        fill(
            _MAIN,
            HOST=repr(options.host),
            PORT=options.port,
            ENV=repr(options.environment_mode.value),
        )
    )

    return GeneratedFile(
        path=ENTRY_POINT,
        content="".join(parts),
        policy="overwrite",
        reason=f"Flask entry point with {len(pages)} extra page(s)",
    )
