"""Alpha compositing and layer flattening.

``alpha_blend`` is source-over: the blend mode changes how color channels mix,
while the alpha math is always plain "over".
"""

from pxl.core.blend import BlendMode, apply_blend_mode, round_half_up
from pxl.core.canvas import BYTES_PER_PIXEL, Canvas
from pxl.errors import BufferSizeError


def alpha_blend(dst, src, opacity: int = 255, mode: BlendMode = BlendMode.NORMAL):
    """Composite the 4-byte ``src`` pixel onto ``dst`` in place.

    ``dst`` must be mutable (a bytearray, a list, or a writable memoryview slice).
    """
    if len(dst) < 4 or len(src) < 4:
        raise BufferSizeError("Pixel buffers must hold at least 4 bytes (RGBA)")

    src_alpha = src[3] * (opacity / 255) / 255
    if src_alpha == 0:
        return

    dst_alpha = dst[3] / 255
    out_alpha = src_alpha + dst_alpha * (1 - src_alpha)
    if out_alpha == 0:
        dst[0] = dst[1] = dst[2] = dst[3] = 0
        return

    for ch in range(3):
        blended = apply_blend_mode(dst[ch], src[ch], mode)
        src_part = blended * src_alpha
        dst_part = dst[ch] * dst_alpha * (1 - src_alpha)
        dst[ch] = round_half_up((src_part + dst_part) / out_alpha)
    dst[3] = round_half_up(out_alpha * 255)


def composite_buffer(dst: bytearray, src, opacity: int = 255,
                     mode: BlendMode = BlendMode.NORMAL):
    """Blend every pixel of ``src`` onto the same-sized ``dst`` in place."""
    if len(dst) != len(src):
        raise BufferSizeError(
            f"Cannot composite buffers of different sizes ({len(src)} onto {len(dst)})"
        )
    view = memoryview(dst)
    for i in range(0, len(dst), BYTES_PER_PIXEL):
        if src[i + 3] == 0:
            continue
        alpha_blend(view[i:i + 4], src[i:i + 4], opacity, mode)


def flatten_layers(canvas) -> Canvas:
    """Composite ``canvas.layers`` bottom-to-top into a new canvas.

    Invisible layers are skipped. Layer buffers are never modified.
    """
    expected = canvas.width * canvas.height * BYTES_PER_PIXEL
    out = Canvas(canvas.width, canvas.height)
    for layer in canvas.layers:
        if not layer.visible:
            continue
        if len(layer.buffer) != expected:
            raise BufferSizeError(
                f"Layer '{layer.name}' has {len(layer.buffer)} bytes, "
                f"expected {expected} for {canvas.width}x{canvas.height}"
            )
        composite_buffer(out.buffer, layer.buffer, layer.opacity, layer.blend)
    return out


def composite_onto(dst: Canvas, src: Canvas, x: int = 0, y: int = 0, opacity: int = 255,
                   mode: BlendMode = BlendMode.NORMAL):
    """Blend ``src`` onto ``dst`` with its top-left at (x, y), clipping at the edges."""
    view = memoryview(dst.buffer)
    for sy in range(src.height):
        dy = y + sy
        if not 0 <= dy < dst.height:
            continue
        for sx in range(src.width):
            dx = x + sx
            if not 0 <= dx < dst.width:
                continue
            s = (sy * src.width + sx) * BYTES_PER_PIXEL
            if src.buffer[s + 3] == 0:
                continue
            d = (dy * dst.width + dx) * BYTES_PER_PIXEL
            alpha_blend(view[d:d + 4], src.buffer[s:s + 4], opacity, mode)
