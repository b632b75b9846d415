"""
Laid-out tree -> standalone HTML page: positioned boxes, grouped link paths, tree info panel.
Drag to pan, wheel to zoom, click a box to highlight its path from the root.
"""
from __future__ import annotations

import html
import json
from pathlib import Path
from typing import Any

from .engine import LinkGroup, NodeLayout, TreeLayout

# Margin around the tree bounds, in layout units
PAGE_PADDING = 60


def _esc(s: str) -> str:
    return html.escape(str(s))


def _link_paths(group: LinkGroup, dx: float, dy: float) -> list[str]:
    """SVG path data for one group: parent connector, spine, child connectors."""
    pc = group.parent_connector
    parts = [f"M {pc.x1 + dx:.1f} {pc.y + dy:.1f} H {pc.x2 + dx:.1f}"]
    if group.spine_bottom > group.spine_top:
        parts.append(
            f"M {group.spine_x + dx:.1f} {group.spine_top + dy:.1f} V {group.spine_bottom + dy:.1f}"
        )
    for c in group.child_connectors:
        parts.append(f"M {c.x1 + dx:.1f} {c.y + dy:.1f} H {c.x2 + dx:.1f}")
    return parts


def _node_div(
    n: NodeLayout,
    dx: float,
    dy: float,
    highlighted: set[str],
    matched: set[str],
) -> str:
    classes = ["node"]
    if n.id in highlighted:
        classes.append("path-highlight")
    if n.id in matched:
        classes.append("search-highlight")
    icon = ""
    if n.has_children:
        icon = f'<span class="expand-icon">{"−" if n.is_expanded else "+"}</span>'
    props = "".join(
        f'<div class="prop"><span class="prop-key">{_esc(k)}: </span>'
        f'<span class="prop-value" title="{_esc(v)}">{_esc(v)}</span></div>'
        for k, v in n.properties
    )
    sep = '<div class="sep"></div>' if n.properties else ""
    parent = _esc(n.parent_id or "")
    return (
        f'<div class="{" ".join(classes)}" id="{_esc(n.id)}" data-parent="{parent}" '
        f'data-level="{n.level}" style="left:{n.left + dx:.1f}px;top:{n.top + dy:.1f}px;'
        f'width:{n.width:.0f}px;height:{n.height:.0f}px">'
        f'<div class="node-name">{_esc(n.name)}{icon}</div>{sep}{props}</div>'
    )


def _info_panel(stats: dict[str, Any] | None) -> str:
    if not stats:
        return ""
    rows = "".join(
        f'<li><b>Level {row["level"]}</b>: {row["count"]} node{"s" if row["count"] != 1 else ""}</li>'
        for row in stats.get("nodesPerLevel", [])
    )
    warnings = "".join(f'<li class="warn">{_esc(w)}</li>' for w in stats.get("warnings", []))
    return f"""<aside class="tree-info">
  <div>Nodes: {stats.get('totalNodes', 0)} | Levels: {stats.get('maxDepth', 0) + 1} | Edges: {stats.get('totalEdges', 0)}</div>
  <ul>{rows}{warnings}</ul>
</aside>"""


def render_tree_to_html(
    layout: TreeLayout,
    out_path: Path | str,
    *,
    title: str = "Tree",
    stats: dict[str, Any] | None = None,
    highlighted: list[str] | None = None,
    matched: list[str] | None = None,
) -> Path:
    """
    Write one HTML page for a layout. stats is TreeStats.to_dict(); highlighted and
    matched are node ids to mark as path / search hits.
    """
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    if not layout.nodes:
        out_path.write_text("<!DOCTYPE html><html><body><p>No Data Available</p></body></html>", encoding="utf-8")
        return out_path

    min_x, min_y, max_x, max_y = layout.bounds()
    dx = PAGE_PADDING - min_x
    dy = PAGE_PADDING - min_y
    width = max_x - min_x + PAGE_PADDING * 2
    height = max_y - min_y + PAGE_PADDING * 2

    hl = set(highlighted or [])
    mt = set(matched or [])
    divs = [_node_div(n, dx, dy, hl, mt) for n in layout.nodes]
    paths = []
    for group in layout.links:
        for d in _link_paths(group, dx, dy):
            paths.append(f'<path class="link" data-parent="{_esc(group.parent_id)}" d="{d}"/>')
    parents = json.dumps({n.id: n.parent_id for n in layout.nodes}, ensure_ascii=False)

    html_content = f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8"/>
<meta name="viewport" content="width=device-width, initial-scale=1"/>
<title>{_esc(title)}</title>
<style>
  :root {{ font-family: sans-serif; font-size: 14px; color: #2c3e50; }}
  body {{ margin: 0; overflow: hidden; background: linear-gradient(135deg, #f8f9fa, #e2e8f0); }}
  .viewport {{ position: fixed; inset: 0; cursor: grab; }}
  .viewport:active {{ cursor: grabbing; }}
  .canvas {{ position: absolute; left: 0; top: 0; transform-origin: 0 0; width: {width:.0f}px; height: {height:.0f}px; }}
  .links {{ position: absolute; left: 0; top: 0; overflow: visible; pointer-events: none; }}
  .link {{ fill: none; stroke: #a0aec0; stroke-width: 2; }}
  .link.path-highlight {{ stroke: #667eea; stroke-width: 3; }}
  .node {{ position: absolute; box-sizing: border-box; background: #fff; border: 2px solid #cbd5e1; border-radius: 10px; padding: 6px 10px; overflow: hidden; user-select: none; }}
  .node.path-highlight {{ border-color: #667eea; box-shadow: 0 0 0 3px rgba(102,126,234,0.3); }}
  .node.search-highlight {{ border-color: #f6ad55; }}
  .node-name {{ font-weight: bold; text-align: center; position: relative; }}
  .expand-icon {{ position: absolute; right: 0; font-size: 18px; }}
  .sep {{ border-top: 1px solid #e2e8f0; margin: 4px 0; }}
  .prop {{ font-family: Monaco, Menlo, monospace; font-size: 12px; white-space: nowrap; overflow: hidden; text-overflow: ellipsis; line-height: 24px; }}
  .prop-key {{ color: #667eea; font-weight: 600; }}
  .tree-info {{ position: fixed; right: 1rem; top: 1rem; background: rgba(255,255,255,0.9); padding: 0.5rem 1rem; border-radius: 8px; max-height: 80vh; overflow: auto; }}
  .tree-info ul {{ padding-left: 1rem; margin: 0.5rem 0 0 0; }}
  .tree-info .warn {{ color: #c53030; }}
</style>
</head>
<body>
<div class="viewport" id="viewport">
  <div class="canvas" id="canvas">
    <svg class="links" width="{width:.0f}" height="{height:.0f}" xmlns="http://www.w3.org/2000/svg">
{chr(10).join(paths)}
    </svg>
{chr(10).join(divs)}
  </div>
</div>
{_info_panel(stats)}
<script>
(function() {{
  var viewport = document.getElementById("viewport");
  var canvas = document.getElementById("canvas");
  var parents = {parents};
  var t = {{ x: 100, y: 0, k: 0.5 }};
  var dragging = false, startX, startY, startTx, startTy;

  function apply() {{
    canvas.style.transform = "translate(" + t.x + "px," + t.y + "px) scale(" + t.k + ")";
  }}
  t.y = window.innerHeight / 2 - {PAGE_PADDING - min_y:.1f} * t.k;
  apply();

  viewport.addEventListener("mousedown", function(e) {{
    if (e.button !== 0) return;
    dragging = true;
    startX = e.clientX; startY = e.clientY; startTx = t.x; startTy = t.y;
  }});
  document.addEventListener("mousemove", function(e) {{
    if (!dragging) return;
    e.preventDefault();
    t.x = startTx + (e.clientX - startX);
    t.y = startTy + (e.clientY - startY);
    apply();
  }});
  document.addEventListener("mouseup", function() {{ dragging = false; }});
  viewport.addEventListener("wheel", function(e) {{
    e.preventDefault();
    var k = Math.max(0.1, Math.min(3, t.k * (e.deltaY < 0 ? 1.1 : 0.9)));
    t.x = e.clientX - (e.clientX - t.x) * k / t.k;
    t.y = e.clientY - (e.clientY - t.y) * k / t.k;
    t.k = k;
    apply();
  }}, {{ passive: false }});

  canvas.querySelectorAll(".node").forEach(function(el) {{
    el.addEventListener("click", function(e) {{
      e.stopPropagation();
      document.querySelectorAll(".path-highlight").forEach(function(h) {{ h.classList.remove("path-highlight"); }});
      var id = el.id;
      while (id) {{
        var n = document.getElementById(id);
        if (n) n.classList.add("path-highlight");
        var parent = parents[id];
        if (parent) {{
          document.querySelectorAll('.link[data-parent="' + parent + '"]').forEach(function(p) {{ p.classList.add("path-highlight"); }});
        }}
        id = parent;
      }}
    }});
  }});
}})();
</script>
</body>
</html>
"""
    out_path.write_text(html_content, encoding="utf-8")
    return out_path
