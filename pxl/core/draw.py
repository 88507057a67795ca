"""Drawing primitives operating in place on RGBA buffers."""

from pxl.core.canvas import BYTES_PER_PIXEL, check_pixel, get_pixel, in_bounds, set_pixel
from pxl.core.color import Color


def draw_line(buffer, width: int, x0: int, y0: int, x1: int, y1: int, color: Color):
    """Bresenham line, both endpoints included."""
    check_pixel(buffer, width, x0, y0)
    check_pixel(buffer, width, x1, y1)
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    x, y = x0, y0
    while True:
        set_pixel(buffer, width, x, y, *color)
        if x == x1 and y == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x += sx
        if e2 <= dx:
            err += dx
            y += sy


def draw_rect(buffer, width: int, x0: int, y0: int, x1: int, y1: int,
              color: Color, filled: bool = True):
    left, right = sorted((x0, x1))
    top, bottom = sorted((y0, y1))
    # Every written pixel lies between these corners, so nothing is written on failure.
    check_pixel(buffer, width, left, top)
    check_pixel(buffer, width, right, bottom)
    for y in range(top, bottom + 1):
        for x in range(left, right + 1):
            edge = x in (left, right) or y in (top, bottom)
            if filled or edge:
                set_pixel(buffer, width, x, y, *color)


def draw_circle(buffer, width: int, height: int, cx: int, cy: int, radius: int,
                color: Color, filled: bool = False):
    """Midpoint circle. Pixels outside the buffer are clipped."""
    def plot(x, y):
        if in_bounds(width, height, x, y):
            set_pixel(buffer, width, x, y, *color)

    def span(x_from, x_to, y):
        for x in range(x_from, x_to + 1):
            plot(x, y)

    if radius < 0:
        return
    if radius == 0:
        plot(cx, cy)
        return

    x, y = radius, 0
    err = 1 - radius
    while x >= y:
        if filled:
            span(cx - x, cx + x, cy + y)
            span(cx - x, cx + x, cy - y)
            span(cx - y, cx + y, cy + x)
            span(cx - y, cx + y, cy - x)
        else:
            for px, py in ((x, y), (y, x), (-y, x), (-x, y),
                           (-x, -y), (-y, -x), (y, -x), (x, -y)):
                plot(cx + px, cy + py)
        y += 1
        if err < 0:
            err += 2 * y + 1
        else:
            x -= 1
            err += 2 * (y - x) + 1


def flood_fill(buffer, width: int, height: int, x: int, y: int, color: Color) -> int:
    """4-connected fill from (x, y). Returns the number of pixels changed."""
    target = get_pixel(buffer, width, x, y)
    fill = Color(*color)
    if target == fill:
        return 0

    changed = 0
    stack = [(x, y)]
    while stack:
        px, py = stack.pop()
        if not in_bounds(width, height, px, py):
            continue
        if get_pixel(buffer, width, px, py) != target:
            continue
        set_pixel(buffer, width, px, py, *fill)
        changed += 1
        stack.extend(((px + 1, py), (px - 1, py), (px, py + 1), (px, py - 1)))
    return changed


def replace_color(buffer, old: Color, new: Color) -> int:
    """Swap every exact RGBA match of ``old`` for ``new``. Returns the count."""
    old_bytes = bytes(old)
    new_bytes = bytes(new)
    count = 0
    for i in range(0, len(buffer), BYTES_PER_PIXEL):
        if buffer[i:i + 4] == old_bytes:
            buffer[i:i + 4] = new_bytes
            count += 1
    return count
