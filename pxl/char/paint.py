"""Clipped painting helpers shared by the part and body generators.

Generators sketch with a handful of fixed placeholder colors and then scan the
result for recolorable regions, so the drawing code never tracks coordinates
itself.
"""

from pxl.core.canvas import Canvas
from pxl.core.color import Color
from pxl.core.draw import draw_circle


def dot(canvas: Canvas, x: int, y: int, color: Color):
    if canvas.contains(x, y):
        canvas.set(x, y, color)


def hline(canvas: Canvas, x0: int, x1: int, y: int, color: Color):
    for x in range(min(x0, x1), max(x0, x1) + 1):
        dot(canvas, x, y, color)


def vline(canvas: Canvas, x: int, y0: int, y1: int, color: Color):
    for y in range(min(y0, y1), max(y0, y1) + 1):
        dot(canvas, x, y, color)


def box(canvas: Canvas, x0: int, y0: int, x1: int, y1: int, color: Color):
    for y in range(min(y0, y1), max(y0, y1) + 1):
        hline(canvas, x0, x1, y, color)


def disc(canvas: Canvas, cx: int, cy: int, radius: int, fill: Color, rim: Color = None):
    draw_circle(canvas.buffer, canvas.width, canvas.height, cx, cy, radius, fill, filled=True)
    if rim is not None:
        draw_circle(canvas.buffer, canvas.width, canvas.height, cx, cy, radius, rim)


def triangle_up(canvas: Canvas, tip_x: int, tip_y: int, base_y: int, color: Color,
                edge: Color = None, slant: int = 0):
    """Filled spike from (tip_x, tip_y) widening down to ``base_y``.

    ``slant`` shifts the base sideways relative to the tip, one pixel per
    two rows.
    """
    for y in range(tip_y, base_y + 1):
        depth = y - tip_y
        half = depth // 2
        center = tip_x + (slant * depth) // 2
        hline(canvas, center - half, center + half, y, color)
        if edge is not None and half > 0:
            dot(canvas, center + half, y, edge)


def collect_regions(canvas: Canvas, primary: Color, shadow: Color, highlight: Color = None):
    """Row-major coordinate lists of the pixels painted with each placeholder."""
    regions = {"primary": [], "shadow": [], "highlight": []}
    lookup = {tuple(primary): "primary", tuple(shadow): "shadow"}
    if highlight is not None:
        lookup[tuple(highlight)] = "highlight"
    for y in range(canvas.height):
        for x in range(canvas.width):
            key = lookup.get(tuple(canvas.get(x, y)))
            if key is not None:
                regions[key].append((x, y))
    return regions
