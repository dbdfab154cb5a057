"""
Directory tree diagrams for generated documentation.

A tiny in-memory node structure plus a recursive printer producing
the familiar ``├──`` / ``└──`` layout.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class TreeNode:
    """A directory (has children) or a file (leaf) in a diagram."""

    name: str
    children: list[TreeNode] = field(default_factory=list)
    is_dir: bool = False

    @classmethod
    def directory(cls, name: str, *children: TreeNode) -> TreeNode:
        return cls(name=name, children=list(children), is_dir=True)

    @classmethod
    def file(cls, name: str) -> TreeNode:
        return cls(name=name)

    def add(self, child: TreeNode) -> TreeNode:
        self.children.append(child)
        return child

    def label(self) -> str:
        return f"{self.name}/" if self.is_dir else self.name


def render_tree(root: TreeNode) -> str:
    """Render ``root`` and its descendants, children in insertion order."""
    lines = [root.label()]
    lines.extend(_render_children(root, prefix=""))
    return "\n".join(lines)


def _render_children(node: TreeNode, prefix: str) -> list[str]:
    lines: list[str] = []
    for i, child in enumerate(node.children):
        last = i == len(node.children) - 1
        connector = "└── " if last else "├── "
        lines.append(f"{prefix}{connector}{child.label()}")
        if child.children:
            extension = "    " if last else "│   "
            lines.extend(_render_children(child, prefix + extension))
    return lines
