"""
Build the canonical Node tree from a parsed YAML/JSON document.

Root shape, in priority order:
  1. mapping with a "name" field plus at least one more field -> built as-is (flat root)
  2. single-key mapping -> root named after the key, built from its value (wrapped)
  3. anything else -> synthetic "Root"

Inside a mapping, "children"/"nodes" arrays become child nodes, nested mappings become
child nodes named after their key, and every other value (arrays included) is a
stringified property. Malformed input never raises; it degrades to leaf nodes and is
reported through BuildResult.issues.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from .model import (
    CHILD_KEYS,
    DOCUMENT_SHAPE_ERROR,
    MALFORMED_CHILD_ERROR,
    BuildIssue,
    BuildResult,
    Edge,
    Node,
    Visible,
)

logger = logging.getLogger(__name__)

ROOT_NAME = "Root"
# Stands in for a container reached again through a YAML alias cycle
CYCLE_MARK = "<cycle>"


class IdCounter:
    """Node id source scoped to one build call."""

    def __init__(self, prefix: str = "node") -> None:
        self._prefix = prefix
        self._next = 0

    def next_id(self) -> str:
        node_id = f"{self._prefix}-{self._next}"
        self._next += 1
        return node_id


def scalar_text(value: Any) -> str:
    """Stringify a scalar the way YAML would print it."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _item_text(value: Any) -> str:
    if isinstance(value, (Mapping, list, tuple)):
        try:
            return json.dumps(value, ensure_ascii=False, default=str)
        except ValueError:
            # circular reference
            return scalar_text(value)
    return scalar_text(value)


def join_array(values: list[Any] | tuple[Any, ...]) -> str:
    """Array-valued field -> one comma-joined property value."""
    return ", ".join(_item_text(v) for v in values)


class _Builder:
    def __init__(self, counter: IdCounter) -> None:
        self.counter = counter
        self.result = BuildResult(root=None)
        # ids of containers on the current root-to-node path
        self._active: set[int] = set()

    def issue(self, kind: str, path: str, message: str) -> None:
        self.result.issues.append(BuildIssue(kind=kind, path=path, message=message))
        logger.warning("%s at %s: %s", kind, path or "/", message)

    def node(self, data: Any, name: str, level: int, parent_id: str | None, path: str) -> Node:
        node = Node(id=self.counter.next_id(), name=name, level=level, parent_id=parent_id)
        self.result.nodes.append(node)
        self.result.levels.setdefault(level, []).append(node)
        if parent_id is not None:
            self.result.edges.append(
                Edge(id=f"edge-{parent_id}-{node.id}", source=parent_id, target=node.id)
            )

        if isinstance(data, (Mapping, list, tuple)) and id(data) in self._active:
            self.issue(DOCUMENT_SHAPE_ERROR, path, "alias refers back to an enclosing node; cut into a leaf")
            node.properties["value"] = CYCLE_MARK
            return node

        children: list[Node] = []
        if isinstance(data, Mapping):
            self._active.add(id(data))
            for raw_key, value in data.items():
                key = str(raw_key)
                child_path = f"{path}/{key}"
                if key in CHILD_KEYS and isinstance(value, (list, tuple)):
                    children.extend(self.child_items(value, node, child_path))
                elif isinstance(value, Mapping):
                    children.append(self.node(value, key, level + 1, node.id, child_path))
                elif isinstance(value, (list, tuple)):
                    node.properties[key] = join_array(value)
                else:
                    node.properties[key] = scalar_text(value)
            self._active.discard(id(data))
        else:
            node.properties["value"] = scalar_text(data)

        if children:
            node.state = Visible(children)
        return node

    def child_items(self, items: list[Any] | tuple[Any, ...], parent: Node, path: str) -> list[Node]:
        out: list[Node] = []
        for idx, item in enumerate(items):
            item_path = f"{path}/{idx}"
            if isinstance(item, Mapping):
                name = item.get("name")
                label = scalar_text(name) if name not in (None, "") else f"Child-{idx + 1}"
                out.append(self.node(item, label, parent.level + 1, parent.id, item_path))
            else:
                self.issue(
                    MALFORMED_CHILD_ERROR,
                    item_path,
                    f"bare {type(item).__name__} in child list coerced to Item-{idx + 1}",
                )
                out.append(
                    self.node({"value": item}, f"Item-{idx + 1}", parent.level + 1, parent.id, item_path)
                )
        return out


def resolve_root(document: Any) -> tuple[str, Any, str | None]:
    """
    Pick the root name and the data it is built from.
    Returns (name, data, shape) where shape is "flat", "wrapped", "sequence" or None for a scalar.
    """
    if isinstance(document, Mapping):
        name = document.get("name")
        if name not in (None, "", False) and len(document) > 1:
            return scalar_text(name), document, "flat"
        if len(document) == 1:
            key, value = next(iter(document.items()))
            if isinstance(value, Mapping):
                return str(key), value, "wrapped"
            return str(key), document, "wrapped"
        return ROOT_NAME, document, "flat"
    if isinstance(document, (list, tuple)):
        return ROOT_NAME, {CHILD_KEYS[0]: list(document)}, "sequence"
    return ROOT_NAME, document, None


def build_tree(document: Any, *, counter: IdCounter | None = None) -> BuildResult:
    """
    Convert one parsed document into a fresh generation of the canonical tree.
    A None document (nothing loaded) returns the sentinel empty result.
    """
    if document is None:
        logger.warning("No document to build; returning empty tree")
        return BuildResult(root=None)

    builder = _Builder(counter or IdCounter())
    name, data, shape = resolve_root(document)
    if shape is None:
        builder.issue(
            DOCUMENT_SHAPE_ERROR,
            "",
            f"top level is a {type(document).__name__}, not a mapping or sequence",
        )
    root = builder.node(data, name, 0, None, "")
    builder.result.root = root
    logger.debug(
        "Built tree: %d nodes, %d edges, %d levels (%s root)",
        len(builder.result.nodes),
        len(builder.result.edges),
        len(builder.result.levels),
        shape or "fallback",
    )
    return builder.result
