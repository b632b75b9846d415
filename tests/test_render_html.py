"""Tests for the standalone HTML tree page."""
from __future__ import annotations

from pathlib import Path

from src.layout import layout_tree, render_tree_to_html
from src.layout.engine import TreeLayout
from src.tree import build_tree, tree_stats


class TestRenderTreeHtml:
    def _render(self, tmp_path: Path, doc: dict, **kwargs) -> str:
        result = build_tree(doc)
        layout = layout_tree(result.root)
        out = render_tree_to_html(
            layout,
            tmp_path / "tree.html",
            stats=tree_stats(result).to_dict(),
            **kwargs,
        )
        return out.read_text(encoding="utf-8")

    def test_nodes_and_links(self, tmp_path: Path, service_doc: dict) -> None:
        text = self._render(tmp_path, service_doc, title="Services")
        assert "<title>Services</title>" in text
        assert text.count('class="node"') == 6
        assert 'class="link"' in text
        assert "Auth-Service" in text
        assert 'title="JWT"' in text

    def test_info_panel(self, tmp_path: Path, service_doc: dict) -> None:
        text = self._render(tmp_path, service_doc)
        assert "Nodes: 6 | Levels: 3 | Edges: 5" in text
        assert "<b>Level 0</b>: 1 node<" in text
        assert "<b>Level 2</b>: 3 nodes<" in text

    def test_highlight_classes(self, tmp_path: Path, simple_doc: dict) -> None:
        result = build_tree(simple_doc)
        a = result.root.children[0]
        layout = layout_tree(result.root)
        out = render_tree_to_html(
            layout,
            tmp_path / "hl.html",
            highlighted=[result.root.id, a.id],
            matched=[a.id],
        )
        text = out.read_text(encoding="utf-8")
        assert f'class="node path-highlight search-highlight" id="{a.id}"' in text
        assert f'class="node path-highlight" id="{result.root.id}"' in text

    def test_expand_icons(self, tmp_path: Path, service_doc: dict) -> None:
        result = build_tree(service_doc)
        result.root.children[0].collapse()
        text = render_tree_to_html(layout_tree(result.root), tmp_path / "icons.html").read_text(encoding="utf-8")
        assert '<span class="expand-icon">+</span>' in text
        assert '<span class="expand-icon">−</span>' in text
        assert "TokenStore" not in text

    def test_escapes_names(self, tmp_path: Path) -> None:
        text = self._render(tmp_path, {"name": "<b>x</b>", "v": "a&b"})
        assert "&lt;b&gt;x&lt;/b&gt;" in text
        assert "a&amp;b" in text

    def test_empty_layout(self, tmp_path: Path) -> None:
        out = render_tree_to_html(TreeLayout(), tmp_path / "sub" / "empty.html")
        assert out.is_file()
        assert "No Data Available" in out.read_text(encoding="utf-8")
