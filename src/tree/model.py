"""
Canonical tree model: Node with a tagged visible/hidden child state, build issues and build result.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Union

# Reserved keys whose array value introduces tree structure
CHILD_KEYS = ("children", "nodes")

DOCUMENT_SHAPE_ERROR = "DocumentShapeError"
MALFORMED_CHILD_ERROR = "MalformedChildError"


@dataclass(eq=False)
class Visible:
    """Child list currently shown."""
    children: list["Node"]


@dataclass(eq=False)
class Hidden:
    """Child list hidden by a collapse; kept for instant re-expansion."""
    children: list["Node"]


ChildState = Union[Visible, Hidden, None]


@dataclass
class Box:
    """Cached layout of one node; x0/y0 hold the previous pass for transitions."""
    x: float
    y: float
    width: float
    height: float
    x0: float | None = None
    y0: float | None = None


@dataclass(eq=False)
class Node:
    """One element of the canonical tree."""
    id: str
    name: str
    properties: dict[str, str] = field(default_factory=dict)
    level: int = 0
    parent_id: str | None = None
    state: ChildState = None
    layout: Box | None = None

    @property
    def children(self) -> list[Node] | None:
        return self.state.children if isinstance(self.state, Visible) else None

    @property
    def backup_children(self) -> list[Node] | None:
        return self.state.children if isinstance(self.state, Hidden) else None

    @property
    def all_children(self) -> list[Node]:
        """Children regardless of visibility; empty for a permanent leaf."""
        return self.state.children if self.state is not None else []

    @property
    def has_children(self) -> bool:
        return self.state is not None

    @property
    def is_expanded(self) -> bool:
        return isinstance(self.state, Visible)

    def collapse(self) -> bool:
        """Hide children. Returns False when there was nothing visible to hide."""
        if not isinstance(self.state, Visible):
            return False
        self.state = Hidden(self.state.children)
        return True

    def expand(self) -> bool:
        """Show hidden children (same list object). Returns False when nothing was hidden."""
        if not isinstance(self.state, Hidden):
            return False
        self.state = Visible(self.state.children)
        return True

    def iter_visible(self) -> Iterator[Node]:
        """Pre-order over this node and every descendant reachable through visible children."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            kids = node.children
            if kids:
                stack.extend(reversed(kids))

    def iter_all(self) -> Iterator[Node]:
        """Pre-order over this node and every descendant, hidden ones included."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.all_children))


@dataclass(frozen=True)
class Edge:
    id: str
    source: str
    target: str


@dataclass(frozen=True)
class BuildIssue:
    """A shape problem absorbed into a degraded-but-valid tree."""
    kind: str
    path: str
    message: str


@dataclass
class BuildResult:
    """One generation of the canonical tree plus derived flat structures."""
    root: Node | None
    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)
    levels: dict[int, list[Node]] = field(default_factory=dict)
    issues: list[BuildIssue] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.root is None

    def node_map(self) -> dict[str, Node]:
        return {n.id: n for n in self.nodes}
