"""char: create, dress, color, render and export characters.

Characters live in chars/<name>/char.json.
"""

import logging
import shutil
from pathlib import Path

from pxl.char.character import (create_character, equip_part, load_character,
                                render_character, render_turnaround, save_character,
                                set_character_colors, unequip_part)
from pxl.char.color import COLOR_CATEGORIES, COLOR_PRESETS
from pxl.char.parts import create_part, parse_part_slot
from pxl.char.registry import builtin_registry
from pxl.char.view import ViewDirection, parse_view_directions
from pxl.cli.common import export_defaults, parse_color, print_json, write_json
from pxl.core.canvas import Canvas
from pxl.core.color import to_hex
from pxl.errors import ValidationError
from pxl.export.sheet import generate_tiled_metadata, pack_sheet
from pxl.storage.png import write_png

logger = logging.getLogger(__name__)

CHARS_DIR = Path("chars")
EXPORTS_DIR = Path("exports")
CHAR_FILE = "char.json"

# Sheet layouts accepted by `char export`; grid-8dir packs as a plain grid
CHAR_SHEET_LAYOUTS = {
    "grid-8dir": "grid",
    "strip-horizontal": "strip-horizontal",
    "strip-vertical": "strip-vertical",
}

PRESET_GROUPS = {
    "skin": "skin",
    "hair": "hair",
    "eyes": "eyes",
    "outfit-primary": "outfit",
    "outfit-secondary": "outfit",
}


def char_dir(name: str) -> Path:
    return CHARS_DIR / name


def load_from_disk(name: str):
    path = char_dir(name) / CHAR_FILE
    if not path.exists():
        raise ValidationError(f"Character not found: {name}")
    with open(path) as f:
        return load_character(f.read())


def save_to_disk(character):
    path = char_dir(character.id) / CHAR_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="\n") as f:
        f.write(save_character(character))
    logger.debug("wrote %s", path)


def resolve_color(value: str, category: str):
    """A preset name from the category's table, or a hex string."""
    presets = COLOR_PRESETS[PRESET_GROUPS[category]]
    if value in presets:
        return presets[value]
    try:
        return parse_color(value)
    except ValidationError:
        raise ValidationError(
            f'Invalid {category} color "{value}". '
            f"Use a hex color or one of: {', '.join(presets)}"
        ) from None


def _write_assembly(assembly, path: Path, scale: int = 1):
    write_png(Canvas(assembly.width, assembly.height, assembly.buffer), path, scale=scale)


# ─── Commands ───────────────────────────────────────────────────────────────


def cmd_create(args):
    if (char_dir(args.name) / CHAR_FILE).exists():
        raise ValidationError(f'Character "{args.name}" already exists')
    character = create_character(args.name, args.build, args.height)
    save_to_disk(character)
    print(f"Created character: {args.name}")
    print(f"  Build: {character.build.value}")
    print(f"  Height: {character.height.value}")


def cmd_list(args):
    names = []
    if CHARS_DIR.is_dir():
        names = sorted(d.name for d in CHARS_DIR.iterdir() if (d / CHAR_FILE).is_file())
    if not names:
        print('No characters found. Use "pxl char create" to make one.')
        return
    print(f"Characters ({len(names)}):")
    for name in names:
        character = load_from_disk(name)
        print(f"  {name} ({character.build.value}, {character.height.value}, "
              f"{len(character.equipped_parts)} parts)")


def cmd_show(args):
    character = load_from_disk(args.name)
    scheme = character.color_scheme
    print_json({
        "id": character.id,
        "build": character.build.value,
        "height": character.height.value,
        "equippedParts": {
            slot.value: part.id
            for slot, part in sorted(character.equipped_parts.items(), key=lambda kv: kv[0].value)
        },
        "colors": {
            "skin": to_hex(scheme.skin.primary),
            "hair": to_hex(scheme.hair.primary),
            "eyes": to_hex(scheme.eyes),
            "outfitPrimary": to_hex(scheme.outfit_primary.primary),
            "outfitSecondary": to_hex(scheme.outfit_secondary.primary),
        },
        "created": character.created.isoformat(),
        "lastModified": character.last_modified.isoformat(),
    })


def cmd_parts(args):
    registry = builtin_registry()
    parts = registry.get_by_slot(args.slot) if args.slot else registry.list()
    for part in parts:
        style = part.id.partition("-")[2]
        print(f"  {part.slot.value:<12} {style:<12} {part.width}x{part.height}")


def cmd_equip(args):
    character = load_from_disk(args.name)
    part = create_part(args.slot, args.part)
    character = equip_part(character, args.slot, part)
    save_to_disk(character)
    print(f"Equipped {part.id} to {args.name} ({part.slot.value})")


def cmd_unequip(args):
    character = load_from_disk(args.name)
    slot = parse_part_slot(args.slot)
    if slot not in character.equipped_parts:
        raise ValidationError(f"No part equipped in slot {slot.value} for {args.name}")
    save_to_disk(unequip_part(character, slot))
    print(f"Unequipped {slot.value} from {args.name}")


def cmd_color(args):
    changes = {}
    for category in COLOR_CATEGORIES:
        value = getattr(args, category.replace("-", "_"))
        if value is not None:
            changes[category.replace("-", "_")] = resolve_color(value, category)
    if not changes:
        raise ValidationError(
            "No colors given. Use --skin, --hair, --eyes, --outfit-primary or --outfit-secondary"
        )
    character = set_character_colors(load_from_disk(args.name), **changes)
    save_to_disk(character)
    print(f"Updated colors for {args.name}:")
    for key, color in changes.items():
        print(f"  {key.replace('_', '-')}: {to_hex(color)}")


def cmd_render(args):
    if args.scale < 1:
        raise ValidationError(f"Invalid scale: {args.scale}. Must be at least 1")
    character = load_from_disk(args.name)

    if not args.views:
        output = Path(args.output) if args.output else char_dir(args.name) / "render.png"
        _write_assembly(render_character(character, ViewDirection.FRONT), output, args.scale)
        print(f"Rendered {args.name} to {output}")
        return

    directions = parse_view_directions(args.views)
    if len(directions) == 1 and args.output:
        _write_assembly(render_character(character, directions[0]), Path(args.output), args.scale)
        print(f"Rendered {args.name} ({directions[0].value}) to {args.output}")
        return

    out_dir = Path(args.output) if args.output else char_dir(args.name) / "renders"
    for direction in directions:
        path = out_dir / f"{direction.value}.png"
        _write_assembly(render_character(character, direction), path, args.scale)
        print(f"  {direction.value}: {path}")
    print(f"Rendered {len(directions)} views of {args.name}")


def cmd_remove(args):
    folder = char_dir(args.name)
    if not (folder / CHAR_FILE).exists():
        raise ValidationError(f"Character not found: {args.name}")
    if not args.confirm:
        raise ValidationError(f"Refusing to remove {args.name} without --confirm")
    shutil.rmtree(folder)
    print(f"Removed character: {args.name}")


def _export_sheet(character, layout: str, padding: int) -> list[Path]:
    sheet = pack_sheet(render_turnaround(character), layout, padding)
    EXPORTS_DIR.mkdir(parents=True, exist_ok=True)
    png_path = EXPORTS_DIR / f"{character.id}-sheet.png"
    json_path = EXPORTS_DIR / f"{character.id}-sheet.json"
    tiled_path = EXPORTS_DIR / f"{character.id}-tiled.json"
    write_png(sheet.canvas, png_path)
    write_json(json_path, sheet.metadata)
    write_json(tiled_path, generate_tiled_metadata(sheet, png_path.name))
    return [png_path, json_path, tiled_path]


def cmd_export(args):
    character = load_from_disk(args.name)

    if args.format == "json":
        output = Path(args.output) if args.output else char_dir(args.name) / "export.json"
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w", newline="\n") as f:
            f.write(save_character(character))
        print(f"Exported character {args.name} to {output}")
        return

    if args.format != "sheet":
        raise ValidationError(f"Invalid format: {args.format}. Valid options: json, sheet")
    layout = args.layout or "grid-8dir"
    if layout not in CHAR_SHEET_LAYOUTS:
        raise ValidationError(
            f"Invalid layout: {layout}. Valid options: {', '.join(CHAR_SHEET_LAYOUTS)}"
        )
    padding = args.padding
    if padding is None:
        padding = export_defaults().get("sheetPadding", 0)
    png_path, json_path, tiled_path = _export_sheet(character, CHAR_SHEET_LAYOUTS[layout], padding)
    print("Exported sprite sheet to:")
    print(f"  PNG: {png_path}")
    print(f"  Metadata: {json_path}")
    print(f"  Tiled: {tiled_path}")


def register(sub):
    group = sub.add_parser("char", help="Build and render characters")
    group.set_defaults(group_parser=group)
    cmds = group.add_subparsers(dest="char_command")

    p = cmds.add_parser("create", help="Create a character")
    p.add_argument("name")
    p.add_argument("--build", default="normal", help="skinny, normal or muscular")
    p.add_argument("--height", default="average", help="short, average or tall")
    p.set_defaults(func=cmd_create)

    p = cmds.add_parser("list", help="List characters")
    p.set_defaults(func=cmd_list)

    p = cmds.add_parser("show", help="Print a character summary as JSON")
    p.add_argument("name")
    p.set_defaults(func=cmd_show)

    p = cmds.add_parser("parts", help="List the built-in parts")
    p.add_argument("--slot", help="Only parts for this slot")
    p.set_defaults(func=cmd_parts)

    p = cmds.add_parser("equip", help="Equip a generated part")
    p.add_argument("name")
    p.add_argument("--slot", required=True, help="hair-front, hair-back, eyes or torso")
    p.add_argument("--part", required=True, help="Part style, e.g. spiky, anime, armor")
    p.set_defaults(func=cmd_equip)

    p = cmds.add_parser("unequip", help="Remove the part in a slot")
    p.add_argument("name")
    p.add_argument("--slot", required=True)
    p.set_defaults(func=cmd_unequip)

    p = cmds.add_parser("color", help="Set character colors (hex or preset name)")
    p.add_argument("name")
    for category in COLOR_CATEGORIES:
        presets = ", ".join(COLOR_PRESETS[PRESET_GROUPS[category]])
        p.add_argument(f"--{category}", help=f"Hex or preset ({presets})")
    p.set_defaults(func=cmd_color)

    p = cmds.add_parser("render", help="Render a character to PNG")
    p.add_argument("name")
    p.add_argument("--views", help='"all" or a comma list, e.g. front,back,left')
    p.add_argument("--output", help="Output PNG (single view) or folder (several views)")
    p.add_argument("--scale", type=int, default=1, help="Upscale factor (default: 1)")
    p.set_defaults(func=cmd_render)

    p = cmds.add_parser("remove", help="Delete a character folder")
    p.add_argument("name")
    p.add_argument("--confirm", action="store_true", help="Required to actually delete")
    p.set_defaults(func=cmd_remove)

    p = cmds.add_parser("export", help="Export character JSON or an 8-direction sheet")
    p.add_argument("name")
    p.add_argument("--format", default="json", help="json or sheet")
    p.add_argument("--layout", help=f"Sheet layout ({', '.join(CHAR_SHEET_LAYOUTS)})")
    p.add_argument("--padding", type=int, help="Pixels between frames (default: pxl.json or 0)")
    p.add_argument("--output", help="Output path (json format only)")
    p.set_defaults(func=cmd_export)
