"""
Collapse/expand state of the canonical tree.

A node's child list is either Visible or Hidden; toggling swaps the tag and never
copies or rebuilds the list, so a re-expanded node can be re-collapsed instantly.
"""
from __future__ import annotations

import logging

from ..tree.model import BuildResult, Node

logger = logging.getLogger(__name__)

COLLAPSE = "collapse"
EXPAND = "expand"
DIRECTIONS = (COLLAPSE, EXPAND)


def toggle(node: Node) -> bool:
    """Collapse an expanded node or expand a collapsed one. Leaves are left alone (returns False)."""
    if node.is_expanded:
        return node.collapse()
    return node.expand()


def collapse_all(root: Node) -> int:
    """
    Hide every child list below root, and root's own children.
    Already-hidden lists are not touched, but their subtrees are still visited so a
    later expand_all finds every level collapsed consistently. Returns nodes changed.
    """
    changed = 0
    for node in reversed(list(root.iter_all())):
        if node.collapse():
            changed += 1
    return changed


def expand_all(root: Node) -> int:
    """Show every hidden child list at any depth. Returns nodes changed."""
    changed = 0
    for node in root.iter_all():
        if node.expand():
            changed += 1
    return changed


def node_counts(root: Node | None) -> tuple[int, int]:
    """(visible, total); total counts hidden descendants too."""
    if root is None:
        return 0, 0
    visible = sum(1 for _ in root.iter_visible())
    total = sum(1 for _ in root.iter_all())
    return visible, total


class TreeState:
    """Owns one generation of the canonical tree and every structural mutation of it."""

    def __init__(self, build: BuildResult, generation: int = 0) -> None:
        self.build = build
        self.generation = generation
        self._by_id = build.node_map()

    @property
    def root(self) -> Node | None:
        return self.build.root

    def node(self, node_id: str) -> Node:
        try:
            return self._by_id[node_id]
        except KeyError:
            raise KeyError(f"Unknown node id {node_id!r} in generation {self.generation}") from None

    def toggle(self, node_id: str) -> bool:
        node = self.node(node_id)
        changed = toggle(node)
        logger.debug("Toggle %s (%s): %s", node_id, node.name, "expanded" if node.is_expanded else "collapsed")
        return changed

    def toggle_all(self, direction: str) -> int:
        if direction not in DIRECTIONS:
            raise ValueError(f"direction must be one of {DIRECTIONS}, got {direction!r}")
        if self.root is None:
            return 0
        if direction == COLLAPSE:
            changed = collapse_all(self.root)
        else:
            changed = expand_all(self.root)
        logger.debug("Toggle all (%s): %d nodes changed", direction, changed)
        return changed

    @property
    def all_expanded(self) -> bool:
        """True when no child list anywhere is hidden."""
        if self.root is None:
            return True
        return all(n.backup_children is None for n in self.root.iter_all())

    def counts(self) -> tuple[int, int]:
        return node_counts(self.root)
