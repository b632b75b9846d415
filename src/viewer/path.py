"""Root-to-node ancestor chain for path highlighting."""
from __future__ import annotations

from ..tree.model import Node


def path_to_node(nodes_by_id: dict[str, Node], node_id: str) -> list[Node]:
    """[root, ..., node] following parent_id links."""
    path: list[Node] = []
    current: Node | None = nodes_by_id[node_id]
    while current is not None:
        path.append(current)
        current = nodes_by_id.get(current.parent_id) if current.parent_id is not None else None
    path.reverse()
    return path


class PathHighlighter:
    """At most one highlighted path at a time."""

    def __init__(self) -> None:
        self.node_ids: list[str] = []

    def highlight(self, nodes_by_id: dict[str, Node], node_id: str) -> list[str]:
        self.node_ids = [n.id for n in path_to_node(nodes_by_id, node_id)]
        return self.node_ids

    def clear(self) -> None:
        self.node_ids = []

    @property
    def edges(self) -> list[tuple[str, str]]:
        """(parent, child) pairs along the highlighted path."""
        return list(zip(self.node_ids, self.node_ids[1:]))

    def __contains__(self, node_id: str) -> bool:
        return node_id in self.node_ids
