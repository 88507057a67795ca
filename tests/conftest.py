"""Shared pytest fixtures for pxl tests."""

import pytest

from pxl.char.character import create_character
from pxl.char.parts import CharacterPart, ColorRegions, PartSlot
from pxl.cli import main
from pxl.core.canvas import Canvas, create_canvas
from pxl.core.color import Color
from pxl.core.layer import create_layered_canvas
from pxl.storage.project import init_project


# =============================================================================
# Colors
# =============================================================================

RED = Color(255, 0, 0, 255)
GREEN = Color(0, 255, 0, 255)
BLUE = Color(0, 0, 255, 255)


@pytest.fixture
def red() -> Color:
    return RED


@pytest.fixture
def green() -> Color:
    return GREEN


@pytest.fixture
def blue() -> Color:
    return BLUE


# =============================================================================
# Canvases
# =============================================================================


@pytest.fixture
def blank_canvas() -> Canvas:
    """A transparent 4x4 canvas."""
    return create_canvas(4, 4)


@pytest.fixture
def two_layer_canvas():
    """2x2 stack: opaque red 'Layer 0' under a transparent 'top'."""
    canvas = create_layered_canvas(2, 2)
    canvas.layers[0].buffer[:] = bytes(RED) * 4
    canvas.add_layer("top")
    return canvas


# =============================================================================
# Characters
# =============================================================================


@pytest.fixture
def simple_part() -> CharacterPart:
    """A 2x1 custom part: one primary pixel, one shadow pixel."""
    buffer = bytearray(bytes(Color(10, 10, 10, 255)) + bytes(Color(5, 5, 5, 255)))
    return CharacterPart(
        id="custom-band",
        slot=PartSlot.TORSO,
        width=2,
        height=1,
        buffer=buffer,
        colorable=True,
        color_regions=ColorRegions([(0, 0)], [(1, 0)]),
    )


@pytest.fixture
def hero():
    return create_character("hero")


# =============================================================================
# Projects and CLI
# =============================================================================


@pytest.fixture
def project_dir(tmp_path, monkeypatch):
    """An initialized project, used as the working directory."""
    init_project(tmp_path, "test-project")
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def pxl(capsys):
    """Run the CLI in-process and return its stdout."""
    def run(*argv):
        main(list(argv))
        return capsys.readouterr().out
    return run
