"""draw: pixel-level edits on plain PNGs or one layer of a layered sprite."""

from pxl.cli.common import open_drawable, parse_color, parse_point
from pxl.core.canvas import Canvas
from pxl.core.draw import draw_circle, draw_line, draw_rect, flood_fill, replace_color
from pxl.core.outline import add_outline
from pxl.errors import OutOfBoundsError, ValidationError


def _point_in(canvas: Canvas, text: str) -> tuple[int, int]:
    x, y = parse_point(text)
    if not canvas.contains(x, y):
        raise OutOfBoundsError(
            f"Coordinates ({x},{y}) are out of bounds for {canvas.width}x{canvas.height} image"
        )
    return x, y


def cmd_pixel(args):
    canvas, save = open_drawable(args.path, args.layer)
    x, y = _point_in(canvas, args.point)
    canvas.set(x, y, parse_color(args.color))
    save()
    print(f"Set pixel at ({x},{y}) to {args.color} in {args.path}")


def cmd_line(args):
    canvas, save = open_drawable(args.path, args.layer)
    x0, y0 = _point_in(canvas, args.start)
    x1, y1 = _point_in(canvas, args.end)
    draw_line(canvas.buffer, canvas.width, x0, y0, x1, y1, parse_color(args.color))
    save()
    print(f"Drew line ({x0},{y0})-({x1},{y1}) in {args.path}")


def cmd_rect(args):
    canvas, save = open_drawable(args.path, args.layer)
    x0, y0 = _point_in(canvas, args.start)
    x1, y1 = _point_in(canvas, args.end)
    draw_rect(canvas.buffer, canvas.width, x0, y0, x1, y1, parse_color(args.color),
              filled=not args.outline)
    save()
    kind = "outlined" if args.outline else "filled"
    print(f"Drew {kind} rect ({x0},{y0})-({x1},{y1}) in {args.path}")


def cmd_circle(args):
    canvas, save = open_drawable(args.path, args.layer)
    cx, cy = parse_point(args.center)
    if args.radius < 0:
        raise ValidationError(f"Invalid radius: {args.radius}. Must be non-negative")
    draw_circle(canvas.buffer, canvas.width, canvas.height, cx, cy, args.radius,
                parse_color(args.color), filled=not args.outline)
    save()
    print(f"Drew circle at ({cx},{cy}) r={args.radius} in {args.path}")


def cmd_fill(args):
    canvas, save = open_drawable(args.path, args.layer)
    x, y = _point_in(canvas, args.point)
    changed = flood_fill(canvas.buffer, canvas.width, canvas.height, x, y, parse_color(args.color))
    save()
    print(f"Filled {changed} pixels from ({x},{y}) in {args.path}")


def cmd_replace(args):
    canvas, save = open_drawable(args.path, args.layer)
    changed = replace_color(canvas.buffer, parse_color(args.old), parse_color(args.new))
    save()
    print(f"Replaced {changed} pixels of {args.old} with {args.new} in {args.path}")


def cmd_outline(args):
    canvas, save = open_drawable(args.path, args.layer)
    canvas.buffer[:] = add_outline(canvas.buffer, canvas.width, canvas.height,
                                   parse_color(args.color))
    save()
    print(f"Added {args.color} outline in {args.path}")


def _add(cmds, name, help_text, func, *positionals):
    p = cmds.add_parser(name, help=help_text)
    p.add_argument("path", help="PNG file, or base path of a layered sprite")
    for arg, arg_help in positionals:
        p.add_argument(arg, help=arg_help)
    p.add_argument("--layer", help="Layer to draw on (layered sprites; default: top layer)")
    p.set_defaults(func=func)
    return p


def register(sub):
    group = sub.add_parser("draw", help="Draw pixels, lines, shapes and fills")
    group.set_defaults(group_parser=group)
    cmds = group.add_subparsers(dest="draw_command")

    color = ("color", "Hex color, e.g. #FF0000, #f00, #FF000080")

    _add(cmds, "pixel", "Set a single pixel", cmd_pixel, ("point", "X,Y"), color)
    _add(cmds, "line", "Draw a line", cmd_line, ("start", "X0,Y0"), ("end", "X1,Y1"), color)

    p = _add(cmds, "rect", "Draw a rectangle", cmd_rect,
             ("start", "X0,Y0"), ("end", "X1,Y1"), color)
    p.add_argument("--outline", action="store_true", help="Draw only the border")

    p = cmds.add_parser("circle", help="Draw a circle")
    p.add_argument("path", help="PNG file, or base path of a layered sprite")
    p.add_argument("center", help="CX,CY")
    p.add_argument("radius", type=int)
    p.add_argument("color", help=color[1])
    p.add_argument("--layer", help="Layer to draw on (layered sprites; default: top layer)")
    p.add_argument("--outline", action="store_true", help="Draw only the ring")
    p.set_defaults(func=cmd_circle)

    _add(cmds, "fill", "Flood fill from a pixel", cmd_fill, ("point", "X,Y"), color)
    _add(cmds, "replace", "Replace every pixel of one color", cmd_replace,
         ("old", "Color to replace"), ("new", "Replacement color"))
    _add(cmds, "outline", "Outline opaque pixels", cmd_outline, color)
