"""Overlay rendering — draws detection results on top of the source raster.

Bounding box in green, simplified outline in a per-category colour, and a
"<category> (<confidence%>)" label on a dark strip above the box.
"""

from __future__ import annotations

from PIL import Image, ImageDraw

from shapesight.engine.context import Raster, Shape
from shapesight.utils.math_helpers import round_half_up

BOX_COLOR = "#22c55e"
DEFAULT_COLOR = "#ffffff"
LABEL_BACKGROUND = (0, 0, 0, 153)  # black at 60%
LABEL_TEXT_COLOR = "#ffffff"
LABEL_HEIGHT = 18
LABEL_WIDTH = 140

CATEGORY_COLORS = {
    "circle": "#3b82f6",
    "circle-ish": "#60a5fa",
    "triangle": "#eab308",
    "square": "#8b5cf6",
    "rectangle": "#a855f7",
    "pentagon": "#ef4444",
    "star": "#f97316",
    "polygon": "#94a3b8",
}


def category_color(category: str) -> str:
    return CATEGORY_COLORS.get(category, DEFAULT_COLOR)


def format_label(shape: Shape) -> str:
    return f"{shape.category} ({round_half_up(shape.confidence * 100)}%)"


def draw_shapes(raster: Raster, shapes: list[Shape]) -> Image.Image:
    """Return a copy of the raster with every shape's overlay drawn on it."""
    base = raster.to_image().convert("RGBA")
    layer = Image.new("RGBA", base.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)

    for shape in shapes:
        box = shape.bounding_box
        draw.rectangle(
            [box.x, box.y, box.x + box.width, box.y + box.height],
            outline=BOX_COLOR,
            width=2,
        )

        if len(shape.vertices) > 2:
            outline = list(shape.vertices) + [shape.vertices[0]]
            draw.line(outline, fill=category_color(shape.category), width=3)

        top = box.y - LABEL_HEIGHT
        draw.rectangle(
            [box.x, top, box.x + LABEL_WIDTH, box.y],
            fill=LABEL_BACKGROUND,
        )
        draw.text((box.x + 4, top + 3), format_label(shape), fill=LABEL_TEXT_COLOR)

    return Image.alpha_composite(base, layer)
