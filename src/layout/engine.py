"""
Layout of the visible part of the canonical tree: box sizes, one shared vertical
spacing unit, per-level stacking with post-order parent centering, and link groups.

Depth alone decides x. Within a level, boxes are stacked top-down in tree order; a
parent is centered on its first and last visible child, and a subtree is pushed down
whenever that center would crowd the previous box on the parent's level. Hidden
subtrees contribute nothing.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..tree.model import Box, Node

logger = logging.getLogger(__name__)

HORIZONTAL_SPACING = 500
LEVEL_OFFSET = 100

CHAR_WIDTH = 8
WIDTH_PADDING = 40
MIN_WIDTH = 220
MAX_WIDTH = 500
# Bold header text renders wider than property text
NAME_WIDTH_FACTOR = 1.2

BASE_HEIGHT = 50
MIN_HEIGHT = 70
PROPERTY_HEIGHT = 24

# Spacing unit: estimated height of the busiest level's average node, plus headroom
UNIT_BASE_HEIGHT = 70
UNIT_PADDING = 1.3
SEPARATION_PADDING = 1.15


@dataclass
class NodeLayout:
    """One positioned box; x/y is the box center."""
    id: str
    name: str
    properties: list[tuple[str, str]]
    level: int
    parent_id: str | None
    x: float
    y: float
    width: float
    height: float
    has_children: bool
    is_expanded: bool

    @property
    def left(self) -> float:
        return self.x - self.width / 2

    @property
    def right(self) -> float:
        return self.x + self.width / 2

    @property
    def top(self) -> float:
        return self.y - self.height / 2

    @property
    def bottom(self) -> float:
        return self.y + self.height / 2


@dataclass
class Connector:
    """Horizontal segment at height y from x1 to x2."""
    x1: float
    x2: float
    y: float
    child_id: str | None = None


@dataclass
class LinkGroup:
    """All edges from one parent: parent connector, one vertical spine, one connector per child."""
    parent_id: str
    child_ids: list[str]
    spine_x: float
    spine_top: float
    spine_bottom: float
    parent_connector: Connector
    child_connectors: list[Connector] = field(default_factory=list)


@dataclass
class TreeLayout:
    nodes: list[NodeLayout] = field(default_factory=list)
    links: list[LinkGroup] = field(default_factory=list)
    unit: float = 0.0

    def by_id(self) -> dict[str, NodeLayout]:
        return {n.id: n for n in self.nodes}

    def bounds(self) -> tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y) over all boxes; zeros when empty."""
        if not self.nodes:
            return 0.0, 0.0, 0.0, 0.0
        return (
            min(n.left for n in self.nodes),
            min(n.top for n in self.nodes),
            max(n.right for n in self.nodes),
            max(n.bottom for n in self.nodes),
        )


def box_size(node: Node) -> tuple[float, float]:
    """(width, height) of a node box from its name and property lines."""
    longest = len(node.name) * NAME_WIDTH_FACTOR
    for key, value in node.properties.items():
        longest = max(longest, len(f"{key}: {value}"))
    width = max(MIN_WIDTH, min(longest * CHAR_WIDTH + WIDTH_PADDING, MAX_WIDTH))
    height = max(MIN_HEIGHT, BASE_HEIGHT + len(node.properties) * PROPERTY_HEIGHT)
    return float(width), float(height)


def spacing_unit(levels: dict[int, list[Node]]) -> float:
    """
    Vertical unit shared by all levels, sized for the level carrying the most
    properties (node count x mean properties per node).
    """
    if not levels:
        return UNIT_BASE_HEIGHT * UNIT_PADDING
    busiest = min(levels)
    most = 0
    for level in sorted(levels):
        total = sum(len(n.properties) for n in levels[level])
        if total > most:
            most = total
            busiest = level
    nodes = levels[busiest]
    mean_props = sum(len(n.properties) for n in nodes) / len(nodes)
    return (mean_props * PROPERTY_HEIGHT + UNIT_BASE_HEIGHT) * UNIT_PADDING


def separation(a: Node, b: Node, heights: dict[str, float], unit: float) -> float:
    """Center distance multiplier between neighbours on one level; cousins get one extra unit."""
    tallest = max(heights[a.id], heights[b.id])
    base = max(1.0, tallest * SEPARATION_PADDING / unit)
    if a.parent_id != b.parent_id:
        return base + 1.0
    return base


def _shift(node: Node, delta: float, centers: dict[str, float]) -> None:
    for d in node.iter_visible():
        if d is not node:
            centers[d.id] += delta


def layout_tree(
    root: Node,
    *,
    horizontal_spacing: float = HORIZONTAL_SPACING,
    level_offset: float = LEVEL_OFFSET,
) -> TreeLayout:
    """
    Lay out every node reachable from root through visible children.
    Writes x/y/width/height onto each node's cached Box (x0/y0 are left untouched)
    and returns the positioned nodes in pre-order plus link groups.
    """
    visible = list(root.iter_visible())
    levels: dict[int, list[Node]] = {}
    for n in visible:
        levels.setdefault(n.level, []).append(n)
    unit = spacing_unit(levels)
    sizes = {n.id: box_size(n) for n in visible}
    heights = {k: v[1] for k, v in sizes.items()}

    centers: dict[str, float] = {}
    last_on_level: dict[int, Node] = {}

    def place(node: Node) -> None:
        kids = node.children or []
        for kid in kids:
            place(kid)
        prev = last_on_level.get(node.level)
        floor = None
        if prev is not None:
            floor = centers[prev.id] + separation(prev, node, heights, unit) * unit
        if kids:
            y = (centers[kids[0].id] + centers[kids[-1].id]) / 2
            if floor is not None and y < floor:
                _shift(node, floor - y, centers)
                y = floor
        else:
            y = floor if floor is not None else 0.0
        centers[node.id] = y
        last_on_level[node.level] = node

    place(root)
    origin = centers[root.id]

    result = TreeLayout(unit=unit)
    for n in visible:
        width, height = sizes[n.id]
        x = n.level * horizontal_spacing + level_offset
        y = centers[n.id] - origin
        if n.layout is None:
            n.layout = Box(x=x, y=y, width=width, height=height)
        else:
            n.layout.x, n.layout.y = x, y
            n.layout.width, n.layout.height = width, height
        result.nodes.append(
            NodeLayout(
                id=n.id,
                name=n.name,
                properties=list(n.properties.items()),
                level=n.level,
                parent_id=n.parent_id,
                x=x,
                y=y,
                width=width,
                height=height,
                has_children=n.has_children,
                is_expanded=n.is_expanded,
            )
        )
    result.links = link_groups(result.nodes)
    logger.debug(
        "Layout: %d visible nodes, %d link groups, unit=%.1f",
        len(result.nodes),
        len(result.links),
        unit,
    )
    return result


def link_groups(nodes: list[NodeLayout]) -> list[LinkGroup]:
    """Group parent->child edges by parent into one spine plus per-child connectors."""
    by_id = {n.id: n for n in nodes}
    children: dict[str, list[NodeLayout]] = {}
    for n in nodes:
        if n.parent_id is not None and n.parent_id in by_id:
            children.setdefault(n.parent_id, []).append(n)

    groups: list[LinkGroup] = []
    for parent_id, kids in children.items():
        parent = by_id[parent_id]
        spine_x = (parent.right + min(k.left for k in kids)) / 2
        groups.append(
            LinkGroup(
                parent_id=parent_id,
                child_ids=[k.id for k in kids],
                spine_x=spine_x,
                spine_top=min(min(k.y for k in kids), parent.y),
                spine_bottom=max(max(k.y for k in kids), parent.y),
                parent_connector=Connector(x1=parent.right, x2=spine_x, y=parent.y),
                child_connectors=[
                    Connector(x1=spine_x, x2=k.left, y=k.y, child_id=k.id) for k in kids
                ],
            )
        )
    return groups
