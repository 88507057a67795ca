"""PNG files <-> canvases, through Pillow."""

import logging
from pathlib import Path

from PIL import Image

from pxl.core.canvas import BYTES_PER_PIXEL, Canvas
from pxl.errors import BufferSizeError

logger = logging.getLogger(__name__)

# ─── Configuration ──────────────────────────────────────────────────────────

PREVIEW_SCALE = 8
CHECKER_LIGHT = (220, 220, 220, 255)
CHECKER_DARK = (180, 180, 180, 255)
CHECKER_SIZE = 4  # checkerboard square size in source pixels (before scaling)


def canvas_to_image(canvas: Canvas) -> Image.Image:
    expected = canvas.width * canvas.height * BYTES_PER_PIXEL
    if len(canvas.buffer) != expected:
        raise BufferSizeError(
            f"Buffer length {len(canvas.buffer)} does not match "
            f"{canvas.width}x{canvas.height} (expected {expected})"
        )
    return Image.frombytes("RGBA", (canvas.width, canvas.height), bytes(canvas.buffer))


def image_to_canvas(img: Image.Image) -> Canvas:
    if img.mode != "RGBA":
        img = img.convert("RGBA")
    return Canvas(img.width, img.height, bytearray(img.tobytes()))


def read_png(path) -> Canvas:
    path = Path(path)
    with Image.open(path) as img:
        canvas = image_to_canvas(img)
    logger.debug("read %s (%dx%d)", path, canvas.width, canvas.height)
    return canvas


def write_png(canvas: Canvas, path, scale: int = 1):
    """Save as RGBA PNG, optionally upscaled with nearest-neighbour sampling."""
    path = Path(path)
    img = canvas_to_image(canvas)
    if scale != 1:
        img = img.resize((canvas.width * scale, canvas.height * scale), Image.NEAREST)
    path.parent.mkdir(parents=True, exist_ok=True)
    img.save(path)
    logger.debug("wrote %s (%dx%d)", path, img.width, img.height)


def render_preview(canvas: Canvas, scale: int = PREVIEW_SCALE) -> Image.Image:
    """Scaled image with transparency shown as a checkerboard."""
    background = Image.new("RGBA", (canvas.width, canvas.height))
    for y in range(canvas.height):
        for x in range(canvas.width):
            checker = ((y // CHECKER_SIZE) + (x // CHECKER_SIZE)) % 2
            background.putpixel((x, y), CHECKER_LIGHT if checker == 0 else CHECKER_DARK)
    preview = Image.alpha_composite(background, canvas_to_image(canvas))
    return preview.resize((canvas.width * scale, canvas.height * scale), Image.NEAREST)
