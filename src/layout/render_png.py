"""
Laid-out tree -> PNG snapshot: boxes, names, property lines and grouped links.
"""
from __future__ import annotations

from pathlib import Path

from .engine import TreeLayout

MIN_IMAGE_SIZE = (800, 600)
IMAGE_PADDING = 100
FONT_SIZE = 12

BACKGROUND = (248, 249, 250)
BOX_FILL = (255, 255, 255)
BOX_OUTLINE = (203, 213, 225)
HIGHLIGHT_OUTLINE = (102, 126, 234)
LINK_COLOR = (160, 174, 192)
NAME_COLOR = (44, 62, 80)
KEY_COLOR = (102, 126, 234)

_FONT_PATHS = [
    "/System/Library/Fonts/Supplemental/Arial Unicode.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/noto/NotoSansCJK-Regular.ttc",
]


def _load_font(size: int):
    from PIL import ImageFont

    for try_path in _FONT_PATHS:
        try:
            return ImageFont.truetype(try_path, size)
        except (OSError, IOError):
            continue
    try:
        return ImageFont.load_default()
    except Exception:
        return None


def render_tree_to_png(
    layout: TreeLayout,
    out_path: Path | str,
    *,
    scale: float = 1.0,
    highlighted: list[str] | None = None,
) -> Path:
    """Draw the layout at scale onto a canvas sized from its bounds (at least 800x600)."""
    from PIL import Image, ImageDraw

    out_path = Path(out_path)
    min_x, min_y, max_x, max_y = layout.bounds()
    w = max(MIN_IMAGE_SIZE[0], int((max_x - min_x) * scale) + IMAGE_PADDING * 2)
    h = max(MIN_IMAGE_SIZE[1], int((max_y - min_y) * scale) + IMAGE_PADDING * 2)
    img = Image.new("RGB", (w, h), BACKGROUND)
    draw = ImageDraw.Draw(img)
    font = _load_font(max(8, int(FONT_SIZE * scale)))

    def px(x: float) -> float:
        return (x - min_x) * scale + IMAGE_PADDING

    def py(y: float) -> float:
        return (y - min_y) * scale + IMAGE_PADDING

    def text(xy: tuple[float, float], s: str, fill: tuple[int, int, int]) -> None:
        if font:
            draw.text(xy, s, fill=fill, font=font)
        else:
            draw.text(xy, s, fill=fill)

    line_width = max(1, int(2 * scale))
    for group in layout.links:
        pc = group.parent_connector
        draw.line([(px(pc.x1), py(pc.y)), (px(pc.x2), py(pc.y))], fill=LINK_COLOR, width=line_width)
        if group.spine_bottom > group.spine_top:
            draw.line(
                [(px(group.spine_x), py(group.spine_top)), (px(group.spine_x), py(group.spine_bottom))],
                fill=LINK_COLOR,
                width=line_width,
            )
        for c in group.child_connectors:
            draw.line([(px(c.x1), py(c.y)), (px(c.x2), py(c.y))], fill=LINK_COLOR, width=line_width)

    marked = set(highlighted or [])
    row = 24 * scale
    for n in layout.nodes:
        outline = HIGHLIGHT_OUTLINE if n.id in marked else BOX_OUTLINE
        draw.rectangle(
            [px(n.left), py(n.top), px(n.right), py(n.bottom)],
            fill=BOX_FILL,
            outline=outline,
            width=line_width,
        )
        label = n.name + ("  -" if n.is_expanded else "  +" if n.has_children else "")
        text((px(n.left) + 10 * scale, py(n.top) + 8 * scale), label, NAME_COLOR)
        for i, (key, value) in enumerate(n.properties):
            y = py(n.top) + 32 * scale + i * row
            text((px(n.left) + 10 * scale, y), f"{key}: {value}", KEY_COLOR)

    out_path.parent.mkdir(parents=True, exist_ok=True)
    img.save(out_path, "PNG")
    return out_path
