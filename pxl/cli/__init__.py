"""
pxl: terminal pixel-art editor.

Usage:
    pxl init [--name NAME]
    pxl status
    pxl sprite create hero.png --size 32x48 [--layered]
    pxl draw pixel hero.png 3,4 "#ff0000"
    pxl layer add hero --name outline
    pxl palette preset pico8
    pxl char create hero --build muscular
    pxl char render hero --views all
    pxl export sheet sheet.png a.png b.png --layout strip-horizontal

Run any group with --help for its commands.
"""

import argparse
import logging
import sys

from pxl import __version__
from pxl.cli import char, draw, export, layer, palette, project, sprite
from pxl.cli.common import die
from pxl.errors import PxlError

COMMAND_GROUPS = (project, sprite, draw, layer, palette, char, export)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pxl",
        description="Terminal pixel-art editor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"pxl {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    sub = parser.add_subparsers(dest="command")
    for group in COMMAND_GROUPS:
        group.register(sub)
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    handler = getattr(args, "func", None)
    if handler is None:
        # Group given without a command prints that group's help
        (getattr(args, "group_parser", None) or parser).print_help()
        sys.exit(1)

    try:
        handler(args)
    except PxlError as e:
        die(str(e))
    except OSError as e:
        die(f"{e.strerror or e}: {e.filename}" if e.filename else str(e))
