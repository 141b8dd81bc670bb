"""PNG output: rasterise the module matrix onto a canvas and encode it."""

from __future__ import annotations

import struct
import zlib

from qrforge.encoder import QRCode
from qrforge.render.colors import parse_hex_color, scale_size
from qrforge.render.drawing import RGBA, Canvas, draw_module
from qrforge.render.options import build_config

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class RenderCancelledError(RuntimeError):
    """Raised when a render is cancelled before its output is produced."""


def _chunk(kind: bytes, payload: bytes) -> bytes:
    crc = zlib.crc32(kind + payload) & 0xFFFFFFFF
    return struct.pack(">I", len(payload)) + kind + payload + struct.pack(">I", crc)


def encode_png(canvas: Canvas) -> bytes:
    """Encode a canvas as PNG: 8-bit RGB when fully opaque, RGBA otherwise."""
    if canvas.width <= 0 or canvas.height <= 0:
        raise ValueError(f"invalid image size: {canvas.width}x{canvas.height}")
    rows = list(canvas.rows())
    opaque_alpha = b"\xff" * canvas.width
    opaque = all(row[3::4] == opaque_alpha for row in rows)
    raw = bytearray()
    for row in rows:
        raw.append(0)
        if opaque:
            rgb = bytearray(canvas.width * 3)
            rgb[0::3] = row[0::4]
            rgb[1::3] = row[1::4]
            rgb[2::3] = row[2::4]
            raw += rgb
        else:
            raw += row
    color_type = 2 if opaque else 6
    header = struct.pack(">IIBBBBB", canvas.width, canvas.height, 8, color_type, 0, 0, 0)
    return (
        PNG_SIGNATURE
        + _chunk(b"IHDR", header)
        + _chunk(b"IDAT", zlib.compress(bytes(raw)))
        + _chunk(b"IEND", b"")
    )


class PNGRenderer:
    """Renders QR codes as PNG images."""

    def render(self, qr: QRCode, **kwargs) -> bytes:
        """PNG bytes of the symbol.

        Accepts the options of ``build_config`` and ``cancel``, an object with
        ``is_set()``; a set cancel raises RenderCancelledError.
        """
        cancel = kwargs.pop("cancel", None)
        cfg = build_config(**kwargs)
        fg_r, fg_g, fg_b = parse_hex_color(cfg.foreground_color)
        bg_r, bg_g, bg_b = parse_hex_color(cfg.background_color)

        scale = scale_size(qr.size, cfg.quiet_zone, cfg.width)
        image_size = (qr.size + 2 * cfg.quiet_zone) * scale
        canvas = Canvas(image_size, image_size)
        canvas.fill(RGBA(bg_r, bg_g, bg_b, 255))
        fg = RGBA(fg_r, fg_g, fg_b, 255)

        style = cfg.module_style
        if style is not None and style.use_advanced():
            style.validate()
        else:
            style = None
        for row_index, row in enumerate(qr.modules[: qr.size]):
            for col_index, dark in enumerate(row[: qr.size]):
                if dark:
                    draw_module(
                        canvas,
                        (col_index + cfg.quiet_zone) * scale,
                        (row_index + cfg.quiet_zone) * scale,
                        scale,
                        style,
                        fg,
                    )

        if cancel is not None and cancel.is_set():
            raise RenderCancelledError("render cancelled")
        return encode_png(canvas)