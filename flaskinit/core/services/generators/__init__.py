"""
Generators — produce the content of every scaffolded file.

Each generator module exposes ``generate_*()`` functions returning
``GeneratedFile`` instances. Generators are pure: the scaffold
service decides what actually lands on disk.
"""

from __future__ import annotations

import re

_PLACEHOLDER = re.compile(r"__([A-Z](?:[A-Z_]*[A-Z])?)__")


def fill(template: str, **values: object) -> str:
    """Substitute ``__NAME__`` placeholders in a single pass.

    Substituted text is never rescanned, so a value that itself looks
    like a placeholder lands verbatim. Unknown placeholders are kept.
    """

    def _sub(match: re.Match[str]) -> str:
        key = match.group(1)
        return str(values[key]) if key in values else match.group(0)

    return _PLACEHOLDER.sub(_sub, template)
