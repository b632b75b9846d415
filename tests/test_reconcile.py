"""Tests for transition classification between layout passes."""
from __future__ import annotations

from src.layout.engine import layout_tree
from src.tree import build_tree
from src.viewer.reconcile import NODE_DURATION_MS, reconcile, snapshot


def test_first_pass_is_steady(simple_doc: dict) -> None:
    layout = layout_tree(build_tree(simple_doc).root)
    transition = reconcile(None, layout, generation=1)
    assert transition.generation == 1
    assert len(transition.entered) == 3
    assert transition.updated == [] and transition.exited == []
    assert transition.is_steady
    assert transition.duration_ms == NODE_DURATION_MS


def test_collapse_exits_into_anchor(service_doc: dict) -> None:
    result = build_tree(service_doc)
    before = layout_tree(result.root)
    frame = snapshot(before)
    auth = result.root.children[0]
    auth.collapse()
    after = layout_tree(result.root)
    transition = reconcile(frame, after, auth.id)

    exited = {m.id: m for m in transition.exited}
    assert set(exited) == {c.id for c in auth.backup_children}
    auth_now = after.by_id()[auth.id]
    assert all(m.end == (auth_now.x, auth_now.y) for m in exited.values())
    assert transition.entered == []
    assert auth.id in transition.links_exited
    assert result.root.id in transition.links_updated


def test_expand_enters_from_anchor_previous_position(service_doc: dict) -> None:
    result = build_tree(service_doc)
    auth = result.root.children[0]
    auth.collapse()
    frame = snapshot(layout_tree(result.root))
    start = frame.positions[auth.id]
    auth.expand()
    after = layout_tree(result.root)
    transition = reconcile(frame, after, auth.id)

    assert {m.id for m in transition.entered} == {c.id for c in auth.children}
    assert all(m.start == start for m in transition.entered)
    assert auth.id in transition.links_entered
    assert not transition.is_steady


def test_updated_nodes_carry_both_positions(simple_doc: dict) -> None:
    result = build_tree(simple_doc)
    first = layout_tree(result.root)
    frame = snapshot(first)
    second = layout_tree(result.root)
    transition = reconcile(frame, second, result.root.id)
    assert len(transition.updated) == 3
    assert transition.is_steady


def test_snapshot(simple_doc: dict) -> None:
    result = build_tree(simple_doc)
    layout = layout_tree(result.root)
    frame = snapshot(layout)
    assert frame.positions[result.root.id] == (layout.nodes[0].x, layout.nodes[0].y)
    assert frame.link_parents == [result.root.id]
