"""
Export the canonical tree to an XMind mind map; hidden (collapsed) children are included.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any

from ..tree.model import Node


def _topic_title(node: Node) -> str:
    return node.name or node.id


def build_xmind(
    root: Node | None,
    out_path: Path | str,
    *,
    sheet_title: str = "Tree",
    with_properties: bool = True,
) -> Path:
    """
    Build an XMind mind map from the tree: one topic per node, subtopics follow child order.
    Properties become "key: value" notes-like subtopics when with_properties is set.
    Saves to out_path (e.g. document.xmind).
    """
    try:
        from py_xmind16 import Workbook
    except ImportError as e:
        raise ImportError("py-xmind16 is required for --xmind. Install with: pip install py-xmind16") from e

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    workbook = Workbook()
    sheet = workbook.create_sheet(sheet_title)
    topic = sheet.get_root_topic()

    if root is None:
        topic.title = "(No content)"
        workbook.save(str(out_path))
        return out_path

    def add_children(parent_topic: Any, node: Node) -> None:
        if with_properties:
            for key, value in node.properties.items():
                if key == "name" and value == node.name:
                    continue
                parent_topic.add_subtopic(f"{key}: {value}")
        for child in node.all_children:
            sub = parent_topic.add_subtopic(_topic_title(child))
            add_children(sub, child)

    topic.title = _topic_title(root)
    add_children(topic, root)
    workbook.save(str(out_path))
    return out_path


def load_xmind_topic_titles(xmind_path: Path | str) -> list[str]:
    """Load an .xmind file and return all topic titles in traversal order (for tests)."""
    from py_xmind16 import Workbook

    w = Workbook.load(str(xmind_path))
    titles: list[str] = []

    def walk(topic: Any) -> None:
        t = getattr(topic, "title", None)
        if t:
            titles.append(str(t).strip())
        for st in getattr(topic, "subtopics", []) or []:
            walk(st)

    for sheet in (w.get_sheet(i) for i in range(w.sheet_count)):
        root = sheet.root_topic
        if root:
            walk(root)
    return titles


def load_xmind_parent_child_pairs(xmind_path: Path | str) -> list[tuple[str, str]]:
    """Load an .xmind file and return (parent_title, child_title) for each link (for validation)."""
    from py_xmind16 import Workbook

    w = Workbook.load(str(xmind_path))
    pairs: list[tuple[str, str]] = []

    def walk(parent_title: str | None, topic: Any) -> None:
        t = getattr(topic, "title", None)
        if t:
            current = str(t).strip()
            if parent_title is not None:
                pairs.append((parent_title, current))
            for st in getattr(topic, "subtopics", []) or []:
                walk(current, st)

    for sheet in (w.get_sheet(i) for i in range(w.sheet_count)):
        root = sheet.root_topic
        if root:
            walk(None, root)
    return pairs
