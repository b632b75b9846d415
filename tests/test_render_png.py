"""Tests for PNG snapshots of a layout."""
from __future__ import annotations

from pathlib import Path

from PIL import Image

from src.layout import layout_tree, render_tree_to_png
from src.tree import build_tree


def test_png_written_with_minimum_size(tmp_path: Path, simple_doc: dict) -> None:
    layout = layout_tree(build_tree(simple_doc).root)
    out = render_tree_to_png(layout, tmp_path / "tree.png")
    assert out.is_file()
    with Image.open(out) as img:
        assert img.format == "PNG"
        assert img.size[0] >= 800
        assert img.size[1] >= 600


def test_png_grows_with_tree(tmp_path: Path) -> None:
    doc = {"name": "R", "children": [{"name": f"n{i}", "k": "v"} for i in range(20)]}
    layout = layout_tree(build_tree(doc).root)
    out = render_tree_to_png(layout, tmp_path / "wide.png", highlighted=[layout.nodes[0].id])
    min_x, min_y, max_x, max_y = layout.bounds()
    with Image.open(out) as img:
        assert img.size[1] == int(max_y - min_y) + 200


def test_png_scale(tmp_path: Path, service_doc: dict) -> None:
    layout = layout_tree(build_tree(service_doc).root)
    small = render_tree_to_png(layout, tmp_path / "a.png", scale=1.0)
    big = render_tree_to_png(layout, tmp_path / "b.png", scale=2.0)
    with Image.open(small) as a, Image.open(big) as b:
        assert b.size[0] > a.size[0]
