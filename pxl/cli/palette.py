"""palette: project palettes stored as palettes/<name>.json."""

import re
from pathlib import Path

from pxl.cli.common import load_canvas, open_drawable, parse_color
from pxl.core.palette import (PRESET_PALETTES, Palette, extract_palette, get_preset,
                              palette_from_json, palette_to_json, remap_to_palette)
from pxl.errors import ValidationError

PALETTES_DIR = Path("palettes")


def palette_file(name: str) -> Path:
    slug = re.sub(r"[^a-z0-9-]", "-", name.lower())
    return PALETTES_DIR / f"{slug}.json"


def save_palette(palette: Palette, name: str) -> Path:
    path = palette_file(name)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="\n") as f:
        f.write(palette_to_json(palette))
    return path


def load_palette(name: str) -> Palette:
    path = palette_file(name)
    if not path.exists():
        raise ValidationError(
            f'Palette not found: {path}. Use "pxl palette list" to see available palettes.'
        )
    with open(path) as f:
        return palette_from_json(f.read())


def cmd_create(args):
    colors = []
    for text in args.colors:
        try:
            colors.append(parse_color(text))
        except ValidationError as e:
            raise ValidationError(f'Invalid hex color "{text}": {e}') from e
    path = save_palette(Palette(args.name, colors), args.name)
    print(f'Created palette "{args.name}" with {len(colors)} colors: {path}')


def cmd_preset(args):
    palette = get_preset(args.preset)
    path = save_palette(palette, args.save_as or args.preset)
    print(f"Created {palette.name} preset palette with {len(palette.colors)} colors: {path}")


def cmd_extract(args):
    canvas = load_canvas(args.path)
    colors = [c for c in extract_palette(canvas.buffer) if c.a > 0]
    if not colors:
        raise ValidationError("No colors found in source image")
    path = save_palette(Palette(args.name, colors), args.name)
    print(f'Extracted palette "{args.name}" with {len(colors)} unique colors '
          f"from {args.path}: {path}")


def cmd_apply(args):
    palette = load_palette(args.name)
    if not palette.colors:
        raise ValidationError(f'Palette "{palette.name}" has no colors')
    canvas, save = open_drawable(args.path, args.layer)
    canvas.buffer[:] = remap_to_palette(canvas.buffer, palette.colors)
    save()
    print(f'Applied palette "{palette.name}" to {args.path}')


def cmd_list(args):
    if not PALETTES_DIR.is_dir():
        print('No palettes directory found. Use "pxl palette create" or '
              '"pxl palette preset" to create palettes.')
    else:
        files = sorted(PALETTES_DIR.glob("*.json"))
        if not files:
            print("No palettes found in palettes/ directory.")
        else:
            print(f"Available palettes ({len(files)}):")
            for path in files:
                try:
                    with open(path) as f:
                        palette = palette_from_json(f.read())
                except ValidationError:
                    print(f"  {path.name}: (invalid palette file)")
                    continue
                print(f'  {path.stem}: "{palette.name}" ({len(palette.colors)} colors)')

    print()
    print("Built-in presets:")
    for key, preset in PRESET_PALETTES.items():
        print(f'  {key}: "{preset.name}" ({len(preset.colors)} colors)')


def register(sub):
    group = sub.add_parser("palette", help="Create, extract and apply palettes")
    group.set_defaults(group_parser=group)
    cmds = group.add_subparsers(dest="palette_command")

    p = cmds.add_parser("create", help="Create a palette from hex colors")
    p.add_argument("name")
    p.add_argument("colors", nargs="+", help="Hex colors")
    p.set_defaults(func=cmd_create)

    p = cmds.add_parser("preset", help="Copy a built-in palette into the project")
    p.add_argument("preset", help=f"One of: {', '.join(PRESET_PALETTES)}")
    p.add_argument("--as", dest="save_as", help="File name to save under (default: preset name)")
    p.set_defaults(func=cmd_preset)

    p = cmds.add_parser("extract", help="Build a palette from a sprite's colors")
    p.add_argument("path", help="Source PNG or layered sprite")
    p.add_argument("name", help="Palette name")
    p.set_defaults(func=cmd_extract)

    p = cmds.add_parser("apply", help="Snap every pixel of a sprite to a palette")
    p.add_argument("path")
    p.add_argument("name", help="Palette name")
    p.add_argument("--layer", help="Layer to remap (layered sprites; default: top layer)")
    p.set_defaults(func=cmd_apply)

    p = cmds.add_parser("list", help="List project palettes and built-in presets")
    p.set_defaults(func=cmd_list)
