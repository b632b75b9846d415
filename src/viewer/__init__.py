"""Viewer: collapse/expand state, transitions, search, path highlight, camera and the TreeViewer session."""
from .camera import Camera, CameraMove, Transform
from .path import PathHighlighter, path_to_node
from .reconcile import Frame, Move, Transition, reconcile, snapshot
from .search import NAME, NEXT, PREV, PROPERTY, SearchIndex, SearchMatch, find_matches
from .session import TreeViewer
from .state import COLLAPSE, EXPAND, TreeState, collapse_all, expand_all, node_counts, toggle

__all__ = [
    "Camera",
    "CameraMove",
    "Transform",
    "PathHighlighter",
    "path_to_node",
    "Frame",
    "Move",
    "Transition",
    "reconcile",
    "snapshot",
    "NAME",
    "NEXT",
    "PREV",
    "PROPERTY",
    "SearchIndex",
    "SearchMatch",
    "find_matches",
    "TreeViewer",
    "COLLAPSE",
    "EXPAND",
    "TreeState",
    "collapse_all",
    "expand_all",
    "node_counts",
    "toggle",
]
