"""sprite: create, inspect, preview and upscale sprites."""

from pathlib import Path

from pxl.cli.common import load_canvas, parse_size, print_json
from pxl.core.canvas import create_canvas
from pxl.core.layer import create_layered_canvas
from pxl.errors import ValidationError
from pxl.storage.meta import flat_path, is_layered, read_meta, write_layered_sprite
from pxl.storage.png import PREVIEW_SCALE, render_preview, write_png

EXPORT_SCALES = (1, 4, 8, 16)


def cmd_create(args):
    width, height = parse_size(args.size)
    if args.layered:
        write_layered_sprite(args.path, create_layered_canvas(width, height))
        print(f"Created {width}x{height} layered sprite: {flat_path(args.path)}")
    else:
        write_png(create_canvas(width, height), args.path)
        print(f"Created {width}x{height} transparent sprite: {args.path}")


def cmd_info(args):
    canvas = load_canvas(args.path)
    opaque = sum(1 for i in range(3, len(canvas.buffer), 4) if canvas.buffer[i] > 0)
    info = {
        "width": canvas.width,
        "height": canvas.height,
        "nonTransparentPixels": opaque,
    }
    if is_layered(args.path):
        info["layers"] = len(read_meta(args.path)["layers"])
    print_json(info)


def _with_suffix(path, tag: str) -> Path:
    path = Path(path)
    stem = path.name[:-4] if path.name.endswith(".png") else path.name
    return path.with_name(f"{stem}{tag}.png")


def cmd_preview(args):
    if args.scale < 1:
        raise ValidationError(f"Invalid scale: {args.scale}. Must be at least 1")
    canvas = load_canvas(args.path)
    output = Path(args.output) if args.output else _with_suffix(args.path, ".preview")
    output.parent.mkdir(parents=True, exist_ok=True)
    render_preview(canvas, args.scale).save(output)
    print(f"Preview ({args.scale}x): {output}")


def cmd_export(args):
    """Write nearest-neighbour upscaled copies, one per scale."""
    canvas = load_canvas(args.path)
    for scale in args.scales:
        if scale < 1:
            raise ValidationError(f"Invalid scale: {scale}. Must be at least 1")
        output = _with_suffix(args.path, f"_{scale}x")
        write_png(canvas, output, scale=scale)
        print(f"  {scale}x: {output} ({canvas.width * scale}x{canvas.height * scale})")


def register(sub):
    group = sub.add_parser("sprite", help="Create and inspect sprites")
    group.set_defaults(group_parser=group)
    cmds = group.add_subparsers(dest="sprite_command")

    p = cmds.add_parser("create", help="Create a transparent sprite")
    p.add_argument("path", help="Output PNG path (base path for --layered)")
    p.add_argument("--size", required=True, help="WIDTHxHEIGHT, e.g. 32x48")
    p.add_argument("--layered", action="store_true",
                   help="Create a layered sprite (.meta.json + layer PNGs)")
    p.set_defaults(func=cmd_create)

    p = cmds.add_parser("info", help="Print sprite dimensions and pixel counts as JSON")
    p.add_argument("path")
    p.set_defaults(func=cmd_info)

    p = cmds.add_parser("preview", help="Write an upscaled preview on a checkerboard")
    p.add_argument("path")
    p.add_argument("--scale", type=int, default=PREVIEW_SCALE,
                   help=f"Upscale factor (default: {PREVIEW_SCALE})")
    p.add_argument("--output", help="Output path (default: <name>.preview.png)")
    p.set_defaults(func=cmd_preview)

    p = cmds.add_parser("export", help="Write upscaled copies (<name>_<N>x.png)")
    p.add_argument("path")
    p.add_argument("--scales", type=int, nargs="+", default=list(EXPORT_SCALES),
                   help="Scale factors (default: 1 4 8 16)")
    p.set_defaults(func=cmd_export)
