"""
Tests for the directory tree printer.
"""

import textwrap

from flaskinit.core.services.tree import TreeNode, render_tree


class TestTreeNode:
    def test_labels(self):
        assert TreeNode.directory("app").label() == "app/"
        assert TreeNode.file("app.py").label() == "app.py"

    def test_add_returns_child(self):
        root = TreeNode.directory("root")
        child = root.add(TreeNode.file("a"))
        assert root.children == [child]

    def test_empty_directory_stays_directory(self):
        assert TreeNode.directory("venv").is_dir


class TestRenderTree:
    def test_single_node(self):
        assert render_tree(TreeNode.directory("demo")) == "demo/"

    def test_nested(self):
        tree = TreeNode.directory(
            "demo",
            TreeNode.directory(
                "app",
                TreeNode.file("app.py"),
                TreeNode.directory("static", TreeNode.file("style.css")),
            ),
            TreeNode.directory("venv"),
            TreeNode.file("README.md"),
        )
        expected = textwrap.dedent("""\
            demo/
            ├── app/
            │   ├── app.py
            │   └── static/
            │       └── style.css
            ├── venv/
            └── README.md""")
        assert render_tree(tree) == expected

    def test_last_branch_has_no_rail(self):
        tree = TreeNode.directory(
            "r",
            TreeNode.directory("last", TreeNode.file("leaf")),
        )
        assert render_tree(tree).splitlines() == ["r/", "└── last/", "    └── leaf"]

    def test_insertion_order_kept(self):
        tree = TreeNode.directory("r", TreeNode.file("zeta"), TreeNode.file("alpha"))
        lines = render_tree(tree).splitlines()
        assert lines[1].endswith("zeta")
        assert lines[2].endswith("alpha")
