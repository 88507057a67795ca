"""export: pack arbitrary PNGs into a sprite sheet."""

from pathlib import Path

from pxl.cli.common import export_defaults, load_canvas, write_json
from pxl.export.sheet import Frame, SheetLayout, generate_tiled_metadata, pack_sheet
from pxl.storage.png import write_png


def cmd_sheet(args):
    defaults = export_defaults()
    layout = args.layout or defaults.get("sheetLayout", SheetLayout.GRID.value)
    padding = args.padding if args.padding is not None else defaults.get("sheetPadding", 0)

    frames = []
    for path in args.inputs:
        canvas = load_canvas(path)
        frames.append(Frame(canvas.buffer, canvas.width, canvas.height, Path(path).stem))
    sheet = pack_sheet(frames, layout, padding)

    output = Path(args.output)
    base = output.with_suffix("")
    json_path = base.with_name(base.name + ".json")
    tiled_path = base.with_name(base.name + "-tiled.json")
    write_png(sheet.canvas, output)
    write_json(json_path, sheet.metadata)
    write_json(tiled_path, generate_tiled_metadata(sheet, output.name))

    print(f"Packed {len(frames)} frames ({sheet.tile_width}x{sheet.tile_height} tiles, "
          f"{sheet.width}x{sheet.height} sheet)")
    print(f"  PNG: {output}")
    print(f"  Metadata: {json_path}")
    print(f"  Tiled: {tiled_path}")


def register(sub):
    group = sub.add_parser("export", help="Sprite sheet export")
    group.set_defaults(group_parser=group)
    cmds = group.add_subparsers(dest="export_command")

    p = cmds.add_parser("sheet", help="Pack PNG frames into one sheet")
    p.add_argument("output", help="Sheet PNG to write")
    p.add_argument("inputs", nargs="+", help="Frame PNGs, in order; frames are named by file stem")
    p.add_argument("--layout", help="grid, strip-horizontal or strip-vertical "
                                    "(default: pxl.json export.sheetLayout or grid)")
    p.add_argument("--padding", type=int,
                   help="Pixels between frames (default: pxl.json export.sheetPadding or 0)")
    p.set_defaults(func=cmd_sheet)
