"""Tree: document -> canonical Node tree (ids, edges, levels) and tree statistics."""
from .model import (
    CHILD_KEYS,
    DOCUMENT_SHAPE_ERROR,
    MALFORMED_CHILD_ERROR,
    Box,
    BuildIssue,
    BuildResult,
    Edge,
    Hidden,
    Node,
    Visible,
)
from .builder import CYCLE_MARK, IdCounter, build_tree, resolve_root, scalar_text
from .stats import LAYOUT_OVERFLOW, TreeStats, tree_stats

__all__ = [
    "CHILD_KEYS",
    "DOCUMENT_SHAPE_ERROR",
    "MALFORMED_CHILD_ERROR",
    "LAYOUT_OVERFLOW",
    "Box",
    "BuildIssue",
    "BuildResult",
    "Edge",
    "Hidden",
    "Node",
    "Visible",
    "CYCLE_MARK",
    "IdCounter",
    "build_tree",
    "resolve_root",
    "scalar_text",
    "TreeStats",
    "tree_stats",
]
