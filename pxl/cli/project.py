"""init and status: project scaffolding and overview."""

from pathlib import Path

from pxl.cli.common import print_json
from pxl.errors import ValidationError
from pxl.storage.project import PROJECT_FILE, init_project, read_project


def cmd_init(args):
    project_dir = Path.cwd()
    name = args.name or project_dir.name
    print(f'Initializing pxl project "{name}" in {project_dir}')
    for folder in init_project(project_dir, name):
        print(f"  Created directory: {folder.name}/")
    print(f"  Created {PROJECT_FILE}")
    print()
    print("Next steps:")
    print("  pxl palette preset gameboy                  # Create a palette")
    print("  pxl sprite create sprites/hero.png --size 32x48")
    print("  pxl status                                  # Check project overview")


def _count_files(folder: Path, suffixes: tuple[str, ...]) -> int:
    if not folder.is_dir():
        return 0
    return sum(1 for f in folder.iterdir() if f.is_file() and f.suffix in suffixes)


def _count_characters(folder: Path) -> int:
    if not folder.is_dir():
        return 0
    return sum(1 for d in folder.iterdir() if (d / "char.json").is_file())


def cmd_status(args):
    root = Path.cwd()
    if not (root / PROJECT_FILE).exists():
        raise ValidationError(f'Not a pxl project (no {PROJECT_FILE} found). Use "pxl init" to create one.')
    config = read_project(root)

    parts_by_slot = {}
    parts_dir = root / "parts"
    if parts_dir.is_dir():
        for slot_dir in sorted(parts_dir.iterdir()):
            if slot_dir.is_dir():
                parts_by_slot[slot_dir.name] = _count_files(slot_dir, (".json", ".png"))

    print_json({
        "name": config["name"],
        "version": config["version"],
        "description": config.get("description", ""),
        "resolution": config["resolution"]["default"],
        "counts": {
            "palettes": _count_files(root / "palettes", (".json",)),
            "sprites": _count_files(root / "sprites", (".png",)),
            "characters": _count_characters(root / "chars"),
            "parts": sum(parts_by_slot.values()),
            "tiles": _count_files(root / "tiles", (".png",)),
            "scenes": _count_files(root / "scenes", (".json",)),
        },
        "partsBySlot": parts_by_slot,
    })


def register(sub):
    p = sub.add_parser("init", help="Create pxl.json and the project folders here")
    p.add_argument("--name", help="Project name (defaults to the directory name)")
    p.set_defaults(func=cmd_init)

    p = sub.add_parser("status", help="Print a JSON overview of the project")
    p.set_defaults(func=cmd_status)
