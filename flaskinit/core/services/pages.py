"""
Page names — turn raw ``-p`` arguments into route identifiers.
"""

from __future__ import annotations

import keyword
import re
from dataclasses import dataclass

from flaskinit.core.errors import PageNameError

_DISALLOWED = re.compile(r"[^a-z0-9_]")


def sanitize_page_name(raw: str) -> str:
    """Lowercase ``raw`` and drop every character outside ``[a-z0-9_]``.

    The result names the route, the view function, the template and
    the script of the page.

    Raises:
        PageNameError: If nothing is left after stripping.
    """
    ident = _DISALLOWED.sub("", raw.lower())
    if not ident:
        raise PageNameError(raw)
    return ident


@dataclass(frozen=True)
class Page:
    """An extra page: the name as typed and its route identifier."""

    raw: str
    ident: str

    @classmethod
    def from_raw(cls, raw: str) -> Page:
        return cls(raw=raw, ident=sanitize_page_name(raw))

    @property
    def title(self) -> str:
        return self.raw.strip() or self.ident

    @property
    def function_name(self) -> str:
        """View function name; ``page_`` prefix only where Python syntax demands it."""
        if self.ident.isidentifier() and not keyword.iskeyword(self.ident):
            return self.ident
        return f"page_{self.ident}"
