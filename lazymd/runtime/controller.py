"""Dual-pane controller: tree discovery, selection, and content state machine.

All state lives here and is only mutated from ``update`` on the event loop.
Scans, document reads, engine construction, and renders are returned as
``Task`` commands and come back as messages. The first scan reads only the
root directory; after that the tree deepens one level at a time on a timer
until the configured ceiling, replacing the tree only when a deeper scan
finds more documents than are currently known.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from pathlib import Path

from loguru import logger

from ..render import RendererCache
from ..tree_model import (
    FileNode,
    collect_documents,
    flatten_tree,
    scan_documents,
    scan_documents_quick,
    tree_line_for_document,
)
from .config import ScanPolicy
from .content import ContentPane, ViewMode, load_document_task
from .layout import (
    DEFAULT_SPLIT_RATIO,
    SPLIT_RATIO_STEP,
    clamp_split_ratio,
    clamp_viewport,
    keep_line_visible,
    pane_rows,
    tree_pane_width,
    wrap_width_for,
)
from .messages import (
    Command,
    ContentRendered,
    DocumentLoaded,
    ExpandTree,
    ExpansionDone,
    InitialScanDone,
    Key,
    Message,
    MouseWheel,
    PerformExpansion,
    Quit,
    RendererReady,
    Resize,
    StartScan,
    Task,
    Tick,
    deliver,
)

LOADING_PLACEHOLDER = "Loading markdown files..."


class Focus(Enum):
    TREE = "tree"
    CONTENT = "content"

    @property
    def label(self) -> str:
        return "Tree" if self is Focus.TREE else "Content"


class ScanState(Enum):
    UNINITIALIZED = "uninitialized"
    SCANNING = "scanning"
    READY = "ready"
    SETTLED = "settled"


QuickScan = Callable[[Path, bool], FileNode]
DepthScan = Callable[[Path, bool, int], FileNode]


def initial_scan_task(scan_quick: QuickScan, root: Path, include_ignored: bool) -> InitialScanDone:
    try:
        tree = scan_quick(root, include_ignored)
    except Exception as exc:
        logger.exception("initial scan of {} failed", root)
        return InitialScanDone(tree=None, error=str(exc))
    return InitialScanDone(tree=tree)


def expansion_scan_task(scan: DepthScan, root: Path, include_ignored: bool, depth: int) -> ExpansionDone:
    try:
        tree = scan(root, include_ignored, depth)
    except Exception as exc:
        logger.exception("scan of {} to depth {} failed", root, depth)
        return ExpansionDone(depth=depth, tree=None, error=str(exc))
    return ExpansionDone(depth=depth, tree=tree)


class DualPaneController:
    """Tree pane + content pane viewer rooted at one directory."""

    def __init__(
        self,
        root: Path,
        cache: RendererCache,
        include_ignored: bool = False,
        split_ratio: float = DEFAULT_SPLIT_RATIO,
        scan_policy: ScanPolicy | None = None,
        view_mode: ViewMode = ViewMode.RENDERED,
        scan_quick: QuickScan = scan_documents_quick,
        scan: DepthScan = scan_documents,
        on_split_ratio_change: Callable[[float], None] | None = None,
    ) -> None:
        self.root = root
        self.include_ignored = include_ignored
        self.split_ratio = clamp_split_ratio(split_ratio)
        self.scan_policy = scan_policy or ScanPolicy()
        self._scan_quick = scan_quick
        self._scan = scan
        self._on_split_ratio_change = on_split_ratio_change

        self.tree = FileNode(name="Loading...", path=root, is_dir=True)
        self.documents: list[Path] = []
        self.tree_lines: list[str] = [LOADING_PLACEHOLDER]
        self.selected_index = 0
        self.tree_selected_line = 0
        self.tree_top = 0
        self.width = 0
        self.height = 0
        self.focus = Focus.TREE
        self.depth = -1
        self.scanning = False
        self.content = ContentPane(cache, view_mode=view_mode)
        self.dirty = True

    @property
    def visible_rows(self) -> int:
        return pane_rows(self.height)

    @property
    def view_mode(self) -> ViewMode:
        return self.content.view_mode

    @property
    def scan_state(self) -> ScanState:
        if self.depth < 0:
            return ScanState.UNINITIALIZED
        if self.scanning:
            return ScanState.SCANNING
        if self.depth >= self.scan_policy.depth_ceiling:
            return ScanState.SETTLED
        return ScanState.READY

    @property
    def selected_path(self) -> Path | None:
        if 0 <= self.selected_index < len(self.documents):
            return self.documents[self.selected_index]
        return None

    @property
    def tree_width(self) -> int:
        return tree_pane_width(self.width, self.split_ratio)

    def init(self) -> list[Command]:
        return [deliver(StartScan())]

    def update(self, message: Message) -> list[Command]:
        handler = self._handlers().get(type(message))
        if handler is None:
            return []
        self.dirty = True
        return handler(message)

    def _handlers(self) -> dict[type, Callable[[Message], list[Command]]]:
        return {
            StartScan: self._on_start_scan,
            InitialScanDone: self._on_initial_scan_done,
            ExpandTree: self._on_expand_tree,
            PerformExpansion: self._on_perform_expansion,
            ExpansionDone: self._on_expansion_done,
            DocumentLoaded: self._on_document_loaded,
            RendererReady: self._on_renderer_ready,
            ContentRendered: self._on_content_rendered,
            Resize: self._on_resize,
            Key: self._on_key,
            MouseWheel: self._on_mouse_wheel,
        }

    def _on_start_scan(self, _message: StartScan) -> list[Command]:
        if self.depth != -1:
            return []
        self.depth = 0
        self.scanning = True
        return [
            Task(
                initial_scan_task,
                (self._scan_quick, self.root, self.include_ignored),
                name="initial-scan",
            )
        ]

    def _on_initial_scan_done(self, message: InitialScanDone) -> list[Command]:
        self.scanning = False
        if message.error is not None or message.tree is None:
            self.tree_lines = [f"Error loading files: {message.error}"]
            return []

        self._replace_tree(message.tree, collect_documents(message.tree))
        commands: list[Command] = []
        if self.documents:
            commands.extend(self.select_document(0, force_load=True))
        if self.scan_policy.depth_ceiling > 0:
            commands.append(Tick(self.scan_policy.initial_delay_seconds, ExpandTree()))
        return commands

    def _on_expand_tree(self, _message: ExpandTree) -> list[Command]:
        return self.request_expansion()

    def request_expansion(self) -> list[Command]:
        """Schedule one deepening step unless a scan is already running."""
        if self.scanning:
            return []
        return [Tick(self.scan_policy.step_delay_seconds, PerformExpansion())]

    def _on_perform_expansion(self, _message: PerformExpansion) -> list[Command]:
        if self.scanning:
            return []
        self.scanning = True
        self.depth += 1
        return [
            Task(
                expansion_scan_task,
                (self._scan, self.root, self.include_ignored, self.depth),
                name=f"scan-depth-{self.depth}",
            )
        ]

    def _on_expansion_done(self, message: ExpansionDone) -> list[Command]:
        self.scanning = False
        commands: list[Command] = []
        if message.error is None and message.tree is not None:
            new_documents = collect_documents(message.tree)
            if len(new_documents) > len(self.documents):
                commands.extend(self._apply_deeper_tree(message.tree, new_documents))
            else:
                logger.debug("depth {} scan found no new documents", message.depth)
        if self.depth < self.scan_policy.depth_ceiling:
            commands.append(Tick(self.scan_policy.step_delay_seconds, PerformExpansion()))
        return commands

    def _apply_deeper_tree(self, tree: FileNode, documents: list[Path]) -> list[Command]:
        had_documents = bool(self.documents)
        previous = self.selected_path
        self._replace_tree(tree, documents)
        if not had_documents:
            return self.select_document(0, force_load=True)
        if previous is not None and previous in documents:
            self.selected_index = documents.index(previous)
        else:
            self.selected_index = min(self.selected_index, len(documents) - 1)
        self._sync_tree_selection()
        return []

    def _replace_tree(self, tree: FileNode, documents: list[Path]) -> None:
        self.tree = tree
        self.documents = documents
        self.tree_lines = flatten_tree(tree)
        self.tree_top = clamp_viewport(self.tree_top, len(self.tree_lines), self.visible_rows)

    def _sync_tree_selection(self) -> None:
        self.tree_selected_line = tree_line_for_document(self.selected_index, self.tree_lines, self.documents)
        self.adjust_tree_viewport()

    def adjust_tree_viewport(self) -> None:
        """Scroll the tree so the selected row is inside the window."""
        self.tree_top = keep_line_visible(self.tree_top, self.tree_selected_line, self.visible_rows)

    def select_document(self, index: int, force_load: bool = False) -> list[Command]:
        """Select document ``index`` (clamped) and load it when the selection changes."""
        if not self.documents:
            return []
        index = max(0, min(index, len(self.documents) - 1))
        changed = index != self.selected_index
        self.selected_index = index
        self._sync_tree_selection()
        if not (changed or force_load):
            return []
        self.content.top = 0
        path = self.documents[index]
        return [Task(load_document_task, (path,), name="load-document")]

    def _on_document_loaded(self, message: DocumentLoaded) -> list[Command]:
        if message.path != self.selected_path:
            return []
        if message.error is not None:
            self.content.show_error(f"Error loading file: {message.error}")
            return []
        return self.content.load(message.content)

    def _on_renderer_ready(self, message: RendererReady) -> list[Command]:
        return self.content.on_renderer_ready(message)

    def _on_content_rendered(self, message: ContentRendered) -> list[Command]:
        self.content.on_rendered(message)
        return []

    def _update_wrap_width(self) -> list[Command]:
        if self.width <= 0:
            return []
        return self.content.set_wrap_width(wrap_width_for(self.width, self.split_ratio))

    def _on_resize(self, message: Resize) -> list[Command]:
        self.width = message.width
        self.height = message.height
        self.content.visible_height = self.visible_rows
        self.content.clamp()
        self.tree_top = clamp_viewport(self.tree_top, len(self.tree_lines), self.visible_rows)
        return self._update_wrap_width()

    def adjust_split_ratio(self, delta: float) -> list[Command]:
        ratio = clamp_split_ratio(self.split_ratio + delta)
        if ratio == self.split_ratio:
            return []
        self.split_ratio = ratio
        if self._on_split_ratio_change is not None:
            self._on_split_ratio_change(ratio)
        return self._update_wrap_width()

    def _on_key(self, message: Key) -> list[Command]:
        key = message.name
        if key in {"q", "CTRL_C"}:
            return [Quit()]
        if key == "TAB":
            self.focus = Focus.CONTENT if self.focus is Focus.TREE else Focus.TREE
            return []
        if key in {"h", "LEFT"}:
            self.focus = Focus.TREE
            return []
        if key in {"l", "RIGHT"}:
            self.focus = Focus.CONTENT
            return []
        if key == "ENTER":
            if self.focus is Focus.TREE and self.selected_path is not None:
                self.focus = Focus.CONTENT
                self.content.scroll_to_top()
            return []
        if key == "r":
            return self.content.toggle_view_mode()
        if key in {"<", "{"}:
            return self.adjust_split_ratio(-SPLIT_RATIO_STEP)
        if key in {">", "}"}:
            return self.adjust_split_ratio(SPLIT_RATIO_STEP)
        if key == "e":
            return self.request_expansion()
        if self.focus is Focus.TREE:
            return self._on_tree_key(key)
        self._on_content_key(key)
        return []

    def _on_tree_key(self, key: str) -> list[Command]:
        if key in {"j", "DOWN"}:
            if self.selected_index < len(self.documents) - 1:
                return self.select_document(self.selected_index + 1)
            return []
        if key in {"k", "UP"}:
            if self.selected_index > 0:
                return self.select_document(self.selected_index - 1)
            return []
        if key in {"g", "HOME"}:
            commands = self.select_document(0)
            self.tree_top = 0
            return commands
        if key in {"G", "END"}:
            return self.select_document(len(self.documents) - 1)
        return []

    def _on_content_key(self, key: str) -> None:
        page = self.visible_rows
        if key in {"j", "DOWN"}:
            self.content.scroll(1)
        elif key in {"k", "UP"}:
            self.content.scroll(-1)
        elif key in {"CTRL_D", "PGDN"}:
            self.content.scroll(page // 2)
        elif key in {"CTRL_U", "PGUP"}:
            self.content.scroll(-(page // 2))
        elif key in {" ", "f"}:
            self.content.scroll(page)
        elif key == "b":
            self.content.scroll(-page)
        elif key in {"g", "HOME"}:
            self.content.scroll_to_top()
        elif key in {"G", "END"}:
            self.content.scroll_to_bottom()

    def _on_mouse_wheel(self, message: MouseWheel) -> list[Command]:
        delta = -1 if message.direction == "up" else 1
        if message.x < self.tree_width:
            self.tree_top = clamp_viewport(self.tree_top + delta, len(self.tree_lines), self.visible_rows)
        else:
            self.content.scroll(delta)
        return []


__all__ = [
    "DualPaneController",
    "Focus",
    "LOADING_PLACEHOLDER",
    "ScanState",
    "expansion_scan_task",
    "initial_scan_task",
]
