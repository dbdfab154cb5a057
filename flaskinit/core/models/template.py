"""
Generated file model — what every content generator returns.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

# create:    write only if the file did not exist before this run
# overwrite: always rewrite
# append:    add to the end of an existing file
WritePolicy = Literal["create", "overwrite", "append"]


class GeneratedFile(BaseModel):
    """A file produced by one of the content generators.

    ``path`` is relative to the project root; ``policy`` tells the
    scaffold writer how to treat a file that is already there.
    """

    path: str
    content: str
    policy: WritePolicy = "create"
    reason: str = ""
