"""Flatten document trees into tree-pane rows and the document index.

Both projections walk the same depth-first, sorted order, so the n-th
document row and the n-th indexed document always name the same file.
"""

from __future__ import annotations

from pathlib import Path

from .types import FileNode

BRANCH = "├── "
LAST_BRANCH = "└── "
CONTINUATION = "│   "
BLANK = "    "
DIRECTORY_MARKER = "[+] "
DOCUMENT_MARKER = "[-] "


def format_node_label(node: FileNode) -> str:
    """Return the marker-prefixed label for one node (no branch glyphs)."""
    if node.is_dir:
        return f"{DIRECTORY_MARKER}{node.name}/"
    return f"{DOCUMENT_MARKER}{node.name}"


def flatten_tree(tree: FileNode | None) -> list[str]:
    """Return one display row per node below ``tree``; the root has no row."""
    lines: list[str] = []
    if tree is None:
        return lines

    def visit(node: FileNode, indent: str) -> None:
        count = len(node.children)
        for idx, child in enumerate(node.children):
            is_last = idx == count - 1
            glyph = LAST_BRANCH if is_last else BRANCH
            lines.append(f"{indent}{glyph}{format_node_label(child)}")
            if child.children:
                visit(child, indent + (BLANK if is_last else CONTINUATION))

    visit(tree, BLANK)
    return lines


def collect_documents(tree: FileNode | None) -> list[Path]:
    """Return document paths in the same order their rows appear."""
    documents: list[Path] = []
    if tree is None:
        return documents

    def visit(node: FileNode) -> None:
        if not node.is_dir:
            documents.append(node.path)
        for child in node.children:
            visit(child)

    visit(tree)
    return documents


def is_document_line(line: str) -> bool:
    return DOCUMENT_MARKER in line


def tree_line_for_document(index: int, lines: list[str], documents: list[Path]) -> int:
    """Map a document index to the row that displays it.

    Matches the first document row whose trailing name equals the document's
    base name, so same-named documents in different directories resolve to
    the first one. Falls back to row 0 when nothing matches.
    """
    if index < 0 or index >= len(documents):
        return 0
    suffix = DOCUMENT_MARKER + documents[index].name
    for line_idx, line in enumerate(lines):
        if is_document_line(line) and line.endswith(suffix):
            return line_idx
    return 0


__all__ = [
    "BRANCH",
    "LAST_BRANCH",
    "DIRECTORY_MARKER",
    "DOCUMENT_MARKER",
    "collect_documents",
    "flatten_tree",
    "format_node_label",
    "is_document_line",
    "tree_line_for_document",
]
