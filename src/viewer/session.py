"""
TreeViewer: one interactive session over a document.

Accepts the UI commands (rebuild, toggle, search, navigate, highlight, camera) and
reports results to listeners registered at construction. Every command runs to
completion before returning; callers serialize commands on one thread.
"""
from __future__ import annotations

import logging
from typing import Any, Callable

from ..layout.engine import LinkGroup, NodeLayout, TreeLayout, layout_tree
from ..tree.builder import build_tree
from ..tree.model import BuildResult, Node
from ..tree.stats import TreeStats, tree_stats
from .camera import Camera, CameraMove
from .path import PathHighlighter
from .reconcile import Frame, Transition, reconcile, snapshot
from .search import SearchIndex, SearchMatch
from .state import COLLAPSE, EXPAND, TreeState

logger = logging.getLogger(__name__)

LayoutListener = Callable[[list[NodeLayout], list[LinkGroup], Transition], None]
SearchListener = Callable[[list[SearchMatch], int], None]
CountListener = Callable[[int, int], None]


class TreeViewer:
    def __init__(
        self,
        *,
        viewport: tuple[float, float] = (1280, 800),
        search_hidden: bool = False,
        on_layout_updated: LayoutListener | None = None,
        on_search_results_changed: SearchListener | None = None,
        on_node_count_changed: CountListener | None = None,
    ) -> None:
        self.camera = Camera(*viewport)
        self.search_index = SearchIndex(include_hidden=search_hidden)
        self.highlighter = PathHighlighter()
        self.state = TreeState(BuildResult(root=None), generation=0)
        self.layout = TreeLayout()
        self.transition: Transition | None = None
        self._frame: Frame | None = None
        self._on_layout = on_layout_updated
        self._on_search = on_search_results_changed
        self._on_count = on_node_count_changed

    @property
    def generation(self) -> int:
        return self.state.generation

    @property
    def root(self) -> Node | None:
        return self.state.root

    # --- structure -------------------------------------------------------

    def rebuild(self, document: Any) -> TreeLayout:
        """
        Start a new generation from document. Pending transitions of the previous
        generation are dropped; the new tree appears in its steady state.
        """
        build = build_tree(document)
        self.state = TreeState(build, generation=self.state.generation + 1)
        self.highlighter.clear()
        self._frame = None
        self.camera.reset()
        logger.info(
            "Rebuilt generation %d: %d nodes, %d issues",
            self.generation,
            len(build.nodes),
            len(build.issues),
        )
        self._relayout(anchor_id=None)
        if self.search_index.term:
            self.search_index.current_index = 0
            self._rescan()
        return self.layout

    def toggle_node(self, node_id: str) -> TreeLayout:
        self.state.toggle(node_id)
        self._relayout(anchor_id=node_id)
        return self.layout

    def toggle_all(self, direction: str | None = None) -> TreeLayout:
        """Collapse or expand everything; with no direction, flip like the Collapse/Expand All button."""
        if direction is None:
            direction = COLLAPSE if self.state.all_expanded else EXPAND
        self.state.toggle_all(direction)
        anchor = self.root.id if self.root is not None else None
        self._relayout(anchor_id=anchor)
        return self.layout

    def _relayout(self, anchor_id: str | None) -> None:
        root = self.root
        self.layout = layout_tree(root) if root is not None else TreeLayout()
        self.transition = reconcile(self._frame, self.layout, anchor_id, generation=self.generation)
        self._frame = snapshot(self.layout)
        if root is not None:
            for node in root.iter_visible():
                node.layout.x0, node.layout.y0 = node.layout.x, node.layout.y
        if self._on_layout:
            self._on_layout(self.layout.nodes, self.layout.links, self.transition)
        visible, total = self.state.counts()
        if self._on_count:
            self._on_count(visible, total)
        if self.search_index.term and anchor_id is not None:
            self._rescan()

    # --- search ----------------------------------------------------------

    def _rescan(self) -> None:
        self.search_index.search(self.root, self.search_index.term)
        if self._on_search:
            self._on_search(list(self.search_index.matches), self.search_index.current_index)

    def search(self, term: str) -> list[SearchMatch]:
        """Scan for term; an empty term clears results. Focuses the camera on the first match."""
        if not term:
            self.search_index.clear()
        else:
            self.search_index.search(self.root, term)
        if self._on_search:
            self._on_search(list(self.search_index.matches), self.search_index.current_index)
        self._focus_current()
        return self.search_index.matches

    def navigate(self, direction: str) -> SearchMatch | None:
        match = self.search_index.navigate(direction)
        if match is not None:
            if self._on_search:
                self._on_search(list(self.search_index.matches), self.search_index.current_index)
            self._focus_current()
        return match

    def _focus_current(self) -> CameraMove | None:
        match = self.search_index.current
        if match is None:
            return None
        box = self.layout.by_id().get(match.node_id)
        if box is None:
            # hidden node found with search_hidden; nothing on screen to pan to
            return None
        return self.camera.focus(box.x, box.y)

    # --- path ------------------------------------------------------------

    def highlight_path(self, node_id: str) -> list[str]:
        self.state.node(node_id)
        return self.highlighter.highlight(self.state.build.node_map(), node_id)

    def clear_highlight(self) -> None:
        self.highlighter.clear()

    # --- camera ----------------------------------------------------------

    def zoom_in(self) -> CameraMove:
        return self.camera.zoom_in()

    def zoom_out(self) -> CameraMove:
        return self.camera.zoom_out()

    def zoom_to_fit(self) -> CameraMove | None:
        return self.camera.zoom_to_fit(self.layout.bounds())

    def reset_view(self) -> CameraMove:
        return self.camera.reset()

    # --- output ----------------------------------------------------------

    def stats(self, **limits: int | None) -> TreeStats:
        return tree_stats(self.state.build, **limits)

    def node_count(self) -> tuple[int, int]:
        return self.state.counts()

    def render_nodes(self) -> list[dict[str, Any]]:
        """Node list for a rendering layer."""
        return [
            {
                "id": n.id,
                "name": n.name,
                "properties": list(n.properties),
                "x": n.x,
                "y": n.y,
                "width": n.width,
                "height": n.height,
                "hasChildren": n.has_children,
                "isExpanded": n.is_expanded,
                "highlighted": n.id in self.highlighter,
            }
            for n in self.layout.nodes
        ]
