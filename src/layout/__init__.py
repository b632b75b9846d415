"""Layout: visible tree -> positioned boxes and link groups; HTML, PNG and XMind output."""
from .engine import (
    HORIZONTAL_SPACING,
    LEVEL_OFFSET,
    Connector,
    LinkGroup,
    NodeLayout,
    TreeLayout,
    box_size,
    layout_tree,
    link_groups,
    separation,
    spacing_unit,
)
from .render_html import render_tree_to_html
from .render_png import render_tree_to_png
from .layout_mind import build_xmind, load_xmind_topic_titles, load_xmind_parent_child_pairs

__all__ = [
    "HORIZONTAL_SPACING",
    "LEVEL_OFFSET",
    "Connector",
    "LinkGroup",
    "NodeLayout",
    "TreeLayout",
    "box_size",
    "layout_tree",
    "link_groups",
    "separation",
    "spacing_unit",
    "render_tree_to_html",
    "render_tree_to_png",
    "build_xmind",
    "load_xmind_topic_titles",
    "load_xmind_parent_child_pairs",
]
