"""Tests for building the canonical tree from documents."""
from __future__ import annotations

import pytest

from src.document import parse_document
from src.tree import (
    CYCLE_MARK,
    DOCUMENT_SHAPE_ERROR,
    MALFORMED_CHILD_ERROR,
    IdCounter,
    build_tree,
    resolve_root,
)


def _shape(node) -> tuple:
    """Structure without ids: (name, properties, children shapes)."""
    return (node.name, tuple(node.properties.items()), tuple(_shape(c) for c in node.all_children))


def test_scenario_flat_root(simple_doc: dict) -> None:
    """Root with two children: 3 nodes, 2 edges, two levels."""
    result = build_tree(simple_doc)
    assert result.root.name == "Root"
    assert len(result.nodes) == 3
    assert len(result.edges) == 2
    assert [n.name for n in result.root.children] == ["A", "B"]
    assert {lvl: [n.name for n in nodes] for lvl, nodes in result.levels.items()} == {
        0: ["Root"],
        1: ["A", "B"],
    }


def test_single_root_at_level_zero(simple_doc: dict) -> None:
    result = build_tree(simple_doc)
    roots = [n for n in result.nodes if n.parent_id is None]
    assert roots == [result.root]
    assert result.root.level == 0
    for child in result.root.children:
        assert child.parent_id == result.root.id
        assert child.level == 1


def test_ids_unique_and_generation_local(service_doc: dict) -> None:
    first = build_tree(service_doc)
    second = build_tree(service_doc)
    ids = [n.id for n in first.nodes]
    assert len(ids) == len(set(ids))
    # each build starts its own counter
    assert first.root.id == second.root.id == "node-0"


def test_rebuild_is_structurally_idempotent(service_doc: dict) -> None:
    a = build_tree(service_doc)
    b = build_tree(service_doc)
    assert _shape(a.root) == _shape(b.root)
    assert [(e.source, e.target) for e in a.edges] == [(e.source, e.target) for e in b.edges]


def test_counter_is_threaded_through() -> None:
    counter = IdCounter(prefix="gen7")
    result = build_tree({"name": "X", "children": [{"name": "Y"}]}, counter=counter)
    assert [n.id for n in result.nodes] == ["gen7-0", "gen7-1"]
    assert counter.next_id() == "gen7-2"


def test_edges_point_parent_to_child(simple_doc: dict) -> None:
    result = build_tree(simple_doc)
    root_id = result.root.id
    assert all(e.source == root_id for e in result.edges)
    assert result.edges[0].id == f"edge-{root_id}-{result.edges[0].target}"


def test_nodes_key_is_same_as_children() -> None:
    with_children = build_tree({"name": "R", "children": [{"name": "A"}]})
    with_nodes = build_tree({"name": "R", "nodes": [{"name": "A"}]})
    assert [c.name for c in with_children.root.children] == [c.name for c in with_nodes.root.children]


def test_other_array_key_stays_a_property() -> None:
    """An "items" array of objects is scalar data, not structure."""
    result = build_tree({"name": "R", "items": [{"a": 1}, {"b": 2}]})
    assert result.root.children is None
    assert len(result.nodes) == 1
    assert result.root.properties["items"] == '{"a": 1}, {"b": 2}'


def test_bare_scalar_child_becomes_item_leaf() -> None:
    result = build_tree({"name": "R", "children": ["just-a-string"]})
    (child,) = result.root.children
    assert child.name == "Item-1"
    assert child.properties == {"value": "just-a-string"}
    assert child.has_children is False
    assert [i.kind for i in result.issues] == [MALFORMED_CHILD_ERROR]


def test_unnamed_mapping_child_is_numbered() -> None:
    result = build_tree({"name": "R", "children": [{"name": "A"}, {"port": 80}]})
    assert [c.name for c in result.root.children] == ["A", "Child-2"]


def test_nested_mapping_becomes_child_named_after_key(service_doc: dict) -> None:
    result = build_tree(service_doc)
    billing = result.root.children[1]
    db = billing.children[0]
    assert db.name == "database"
    assert db.properties == {"engine": "postgres", "replicas": "2"}
    assert billing.properties["tags"] == "payments, invoices"


def test_scalar_stringification() -> None:
    result = build_tree({"name": "R", "enabled": True, "off": False, "nothing": None, "ratio": 1.5})
    props = result.root.properties
    assert props["enabled"] == "true"
    assert props["off"] == "false"
    assert props["nothing"] == "null"
    assert props["ratio"] == "1.5"


def test_name_is_kept_as_property(simple_doc: dict) -> None:
    result = build_tree(simple_doc)
    assert result.root.properties["name"] == "Root"


def test_wrapped_root() -> None:
    result = build_tree({"Service": {"port": 80, "children": [{"name": "Worker"}]}})
    assert result.root.name == "Service"
    assert result.root.properties == {"port": "80"}
    assert result.root.children[0].name == "Worker"


def test_wrapped_scalar_value() -> None:
    result = build_tree({"version": "1.2"})
    assert result.root.name == "version"
    assert result.root.properties == {"version": "1.2"}


def test_multi_key_mapping_without_name_falls_back_to_root() -> None:
    result = build_tree({"a": 1, "b": {"c": 2}})
    assert result.root.name == "Root"
    assert result.root.properties == {"a": "1"}
    assert result.root.children[0].name == "b"


def test_top_level_sequence_items_become_children() -> None:
    result = build_tree([{"name": "A"}, "loose"])
    assert result.root.name == "Root"
    assert [c.name for c in result.root.children] == ["A", "Item-2"]


def test_top_level_scalar_degrades_to_root_leaf() -> None:
    result = build_tree("hello")
    assert result.root.name == "Root"
    assert result.root.properties == {"value": "hello"}
    assert [i.kind for i in result.issues] == [DOCUMENT_SHAPE_ERROR]


def test_absent_document_gives_empty_sentinel() -> None:
    result = build_tree(None)
    assert result.is_empty
    assert result.nodes == []
    assert result.edges == []


@pytest.mark.parametrize(
    "doc, shape",
    [
        ({"name": "X", "children": []}, "flat"),
        ({"Only": {"a": 1}}, "wrapped"),
        ([1, 2], "sequence"),
        (42, None),
    ],
)
def test_resolve_root_shapes(doc, shape) -> None:
    assert resolve_root(doc)[2] == shape


def test_empty_children_list_is_a_leaf() -> None:
    result = build_tree({"name": "X", "children": []})
    assert result.root.has_children is False
    assert result.root.children is None
    assert result.root.backup_children is None


def test_self_referencing_child_alias_is_cut() -> None:
    """A child list that aliases its own parent ends in a leaf instead of recursing."""
    result = build_tree(parse_document("&a {name: R, children: [*a]}"))
    assert result.root.name == "R"
    (child,) = result.root.children
    assert child.name == "R"
    assert child.properties == {"value": CYCLE_MARK}
    assert child.has_children is False
    assert [i.kind for i in result.issues] == [DOCUMENT_SHAPE_ERROR]


def test_self_referencing_alias_in_array_property() -> None:
    result = build_tree(parse_document("&a {name: R, items: [*a]}"))
    assert result.root.children is None
    assert "R" in result.root.properties["items"]
    assert len(result.nodes) == 1


def test_self_referencing_nested_mapping_is_cut() -> None:
    result = build_tree(parse_document("&a {name: R, port: 80, loop: *a}"))
    loop = result.root.children[0]
    assert loop.name == "loop"
    assert loop.properties == {"value": CYCLE_MARK}
    assert len(result.nodes) == 2


def test_self_referencing_top_level_sequence() -> None:
    result = build_tree(parse_document("&s [*s]"))
    (item,) = result.root.children
    assert item.name == "Item-1"
    assert item.has_children is False
