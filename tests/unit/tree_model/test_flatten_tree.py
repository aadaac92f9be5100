"""Tests for tree-pane rows and the ordered document index."""

from __future__ import annotations

import unittest
from pathlib import Path

from lazymd.tree_model import (
    FileNode,
    collect_documents,
    count_nodes,
    flatten_tree,
    is_document_line,
    tree_line_for_document,
)

ROOT = Path("/work")


def _doc(*parts: str) -> FileNode:
    return FileNode(name=parts[-1], path=ROOT.joinpath(*parts), is_dir=False)


def _dir(*parts: str, children: tuple[FileNode, ...] = ()) -> FileNode:
    return FileNode(name=parts[-1], path=ROOT.joinpath(*parts), is_dir=True, children=children)


def _sample_tree() -> FileNode:
    return FileNode(
        name="work",
        path=ROOT,
        is_dir=True,
        children=(
            _dir(
                "docs",
                children=(
                    _dir("docs", "api", children=(_doc("docs", "api", "index.md"),)),
                    _doc("docs", "guide.md"),
                ),
            ),
            _dir("empty"),
            _doc("README.md"),
        ),
    )


class FlattenTreeTests(unittest.TestCase):
    def test_rows_use_branch_glyphs_and_markers(self) -> None:
        self.assertEqual(
            flatten_tree(_sample_tree()),
            [
                "    ├── [+] docs/",
                "    │   ├── [+] api/",
                "    │   │   └── [-] index.md",
                "    │   └── [-] guide.md",
                "    ├── [+] empty/",
                "    └── [-] README.md",
            ],
        )

    def test_row_count_is_node_count_minus_root(self) -> None:
        tree = _sample_tree()
        self.assertEqual(len(flatten_tree(tree)), count_nodes(tree) - 1)

    def test_document_index_matches_document_rows_in_order(self) -> None:
        tree = _sample_tree()
        lines = flatten_tree(tree)
        documents = collect_documents(tree)
        document_rows = [line for line in lines if is_document_line(line)]

        self.assertEqual(
            documents,
            [ROOT / "docs" / "api" / "index.md", ROOT / "docs" / "guide.md", ROOT / "README.md"],
        )
        self.assertEqual(len(document_rows), len(documents))
        for row, path in zip(document_rows, documents):
            self.assertTrue(row.endswith(f"[-] {path.name}"))

    def test_flatten_is_deterministic(self) -> None:
        tree = _sample_tree()
        self.assertEqual(flatten_tree(tree), flatten_tree(tree))

    def test_empty_and_missing_trees_have_no_rows(self) -> None:
        self.assertEqual(flatten_tree(None), [])
        self.assertEqual(collect_documents(None), [])
        self.assertEqual(flatten_tree(FileNode(name="r", path=ROOT, is_dir=True)), [])


class TreeLineForDocumentTests(unittest.TestCase):
    def test_maps_index_to_display_row(self) -> None:
        tree = _sample_tree()
        lines = flatten_tree(tree)
        documents = collect_documents(tree)

        self.assertEqual(tree_line_for_document(0, lines, documents), 2)
        self.assertEqual(tree_line_for_document(1, lines, documents), 3)
        self.assertEqual(tree_line_for_document(2, lines, documents), 5)

    def test_same_base_name_resolves_to_first_match(self) -> None:
        tree = FileNode(
            name="work",
            path=ROOT,
            is_dir=True,
            children=(
                _dir("a", children=(_doc("a", "README.md"),)),
                _dir("b", children=(_doc("b", "README.md"),)),
            ),
        )
        lines = flatten_tree(tree)
        documents = collect_documents(tree)

        self.assertEqual(tree_line_for_document(0, lines, documents), 1)
        self.assertEqual(tree_line_for_document(1, lines, documents), 1)

    def test_out_of_range_or_unmatched_falls_back_to_first_row(self) -> None:
        tree = _sample_tree()
        lines = flatten_tree(tree)
        documents = collect_documents(tree)

        self.assertEqual(tree_line_for_document(-1, lines, documents), 0)
        self.assertEqual(tree_line_for_document(3, lines, documents), 0)
        self.assertEqual(tree_line_for_document(0, lines, [ROOT / "gone.md"]), 0)
        self.assertEqual(tree_line_for_document(0, ["Loading markdown files..."], documents), 0)


if __name__ == "__main__":
    unittest.main()
