"""Project configuration (pxl.json) and directory scaffolding."""

import json
import logging
from pathlib import Path

from pxl.errors import ValidationError

logger = logging.getLogger(__name__)

# ─── Configuration ──────────────────────────────────────────────────────────

PROJECT_FILE = "pxl.json"

PROJECT_DIRS = (
    "docs",
    "palettes",
    "templates",
    "parts",
    "chars",
    "sprites",
    "tiles",
    "scenes",
    "exports",
)

RESOLUTION_TIERS = ("micro", "small", "medium", "large")


def default_project_config(name: str) -> dict:
    return {
        "name": name,
        "version": "0.1.0",
        "description": "A pixel art game project",
        "resolution": {
            "default": "medium",
            "tiers": {
                "micro": [8, 12],
                "small": [16, 24],
                "medium": [48, 64],
                "large": [64, 96],
            },
        },
        "palette": "palettes/main.json",
        "defaultTemplate": "chibi-medium",
        "export": {
            "sheetPadding": 1,
            "sheetLayout": "grid",
            "metadataFormat": "json",
            "targets": ["tiled", "unity", "godot"],
        },
    }


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_project_config(config) -> dict:
    if not isinstance(config, dict):
        raise ValidationError("Invalid pxl.json: must be an object")
    for key in ("name", "version", "palette", "defaultTemplate"):
        if not isinstance(config.get(key), str):
            raise ValidationError(f"Invalid pxl.json: {key} must be a string")
    if "description" in config and not isinstance(config["description"], str):
        raise ValidationError("Invalid pxl.json: description must be a string if provided")

    resolution = config.get("resolution")
    if not isinstance(resolution, dict):
        raise ValidationError("Invalid pxl.json: resolution must be an object")
    if not isinstance(resolution.get("default"), str):
        raise ValidationError("Invalid pxl.json: resolution.default must be a string")
    tiers = resolution.get("tiers")
    if not isinstance(tiers, dict):
        raise ValidationError("Invalid pxl.json: resolution.tiers must be an object")
    for tier in RESOLUTION_TIERS:
        size = tiers.get(tier)
        if not isinstance(size, list) or len(size) != 2 or not all(_is_number(v) for v in size):
            raise ValidationError(
                f"Invalid pxl.json: resolution.tiers.{tier} must be an array of 2 numbers"
            )

    export = config.get("export")
    if export is not None:
        if not isinstance(export, dict):
            raise ValidationError("Invalid pxl.json: export must be an object if provided")
        padding = export.get("sheetPadding", 0)
        if not isinstance(padding, int) or isinstance(padding, bool) or padding < 0:
            raise ValidationError("Invalid pxl.json: export.sheetPadding must be a non-negative integer")
    return config


def read_project(project_dir=".") -> dict:
    path = Path(project_dir) / PROJECT_FILE
    if not path.exists():
        raise ValidationError(f"{PROJECT_FILE} not found in {project_dir}")
    try:
        with open(path) as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Failed to parse {PROJECT_FILE}: {e}") from e
    return validate_project_config(config)


def write_project(project_dir, config: dict):
    validate_project_config(config)
    project_dir = Path(project_dir)
    project_dir.mkdir(parents=True, exist_ok=True)
    path = project_dir / PROJECT_FILE
    with open(path, "w", newline="\n") as f:
        json.dump(config, f, indent=2)
        f.write("\n")
    logger.debug("wrote %s", path)


def init_project(project_dir, name: str) -> list[Path]:
    """Write a default pxl.json and create the standard folders. Returns the folders."""
    project_dir = Path(project_dir)
    if (project_dir / PROJECT_FILE).exists():
        raise ValidationError(
            f"{PROJECT_FILE} already exists. Use a different directory or remove the existing file."
        )
    write_project(project_dir, default_project_config(name))
    created = []
    for folder_name in PROJECT_DIRS:
        folder = project_dir / folder_name
        folder.mkdir(parents=True, exist_ok=True)
        created.append(folder)
    return created
