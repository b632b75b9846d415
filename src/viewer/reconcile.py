"""
Classify consecutive layout passes into entering, persisting and exiting elements.

Pure functions: the result only describes where each box and link group starts and
ends; how (or whether) it is animated is up to the renderer.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from ..layout.engine import TreeLayout

NODE_DURATION_MS = 300

Point = tuple[float, float]


@dataclass
class Frame:
    """What was on screen after a pass: node positions and link groups by parent id."""
    positions: dict[str, Point] = field(default_factory=dict)
    link_parents: list[str] = field(default_factory=list)


@dataclass
class Move:
    id: str
    start: Point
    end: Point


@dataclass
class Transition:
    generation: int
    entered: list[Move] = field(default_factory=list)
    updated: list[Move] = field(default_factory=list)
    exited: list[Move] = field(default_factory=list)
    links_entered: list[str] = field(default_factory=list)
    links_updated: list[str] = field(default_factory=list)
    links_exited: list[str] = field(default_factory=list)
    duration_ms: int = NODE_DURATION_MS

    @property
    def is_steady(self) -> bool:
        """Nothing moves: every box starts where it ends and nothing leaves."""
        return not self.exited and all(m.start == m.end for m in self.entered + self.updated)


def snapshot(layout: TreeLayout) -> Frame:
    return Frame(
        positions={n.id: (n.x, n.y) for n in layout.nodes},
        link_parents=[g.parent_id for g in layout.links],
    )


def reconcile(
    previous: Frame | None,
    current: TreeLayout,
    anchor_id: str | None = None,
    *,
    generation: int = 0,
) -> Transition:
    """
    Compare the previous frame with a new layout.

    Entering boxes start at the anchor's previous position; exiting boxes end at the
    anchor's new position. With no previous frame (a fresh generation) every box simply
    appears at its final position.
    """
    transition = Transition(generation=generation)
    if previous is None:
        transition.entered = [Move(n.id, (n.x, n.y), (n.x, n.y)) for n in current.nodes]
        transition.links_entered = [g.parent_id for g in current.links]
        return transition

    now = {n.id: (n.x, n.y) for n in current.nodes}
    origin: Point = (0.0, 0.0)
    target: Point = (0.0, 0.0)
    if anchor_id is not None:
        origin = previous.positions.get(anchor_id) or now.get(anchor_id) or origin
        target = now.get(anchor_id) or origin

    for node_id, end in now.items():
        if node_id in previous.positions:
            transition.updated.append(Move(node_id, previous.positions[node_id], end))
        else:
            transition.entered.append(Move(node_id, origin, end))
    for node_id, start in previous.positions.items():
        if node_id not in now:
            transition.exited.append(Move(node_id, start, target))

    old_links = set(previous.link_parents)
    new_links = [g.parent_id for g in current.links]
    for parent_id in new_links:
        if parent_id in old_links:
            transition.links_updated.append(parent_id)
        else:
            transition.links_entered.append(parent_id)
    new_set = set(new_links)
    transition.links_exited = [p for p in previous.link_parents if p not in new_set]
    return transition
