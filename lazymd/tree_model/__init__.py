"""Document tree scanning and tree-pane projections.

Defines ``FileNode`` plus the scanners that build trees from disk and the
pure helpers that turn a tree into display rows and an ordered document index.
"""

from __future__ import annotations

from .build import (
    DOCUMENT_SUFFIX,
    UNBOUNDED_DEPTH,
    count_nodes,
    is_document_name,
    scan_documents,
    scan_documents_quick,
)
from .flatten import (
    DOCUMENT_MARKER,
    DIRECTORY_MARKER,
    collect_documents,
    flatten_tree,
    is_document_line,
    tree_line_for_document,
)
from .types import FileNode

__all__ = [
    "FileNode",
    "DOCUMENT_SUFFIX",
    "UNBOUNDED_DEPTH",
    "DOCUMENT_MARKER",
    "DIRECTORY_MARKER",
    "count_nodes",
    "is_document_name",
    "scan_documents",
    "scan_documents_quick",
    "collect_documents",
    "flatten_tree",
    "is_document_line",
    "tree_line_for_document",
]
