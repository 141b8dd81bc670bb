import struct
import threading
import zlib

import pytest

from qrforge.encoder import encode
from qrforge.render.colors import scale_size
from qrforge.render.drawing import RGBA, Canvas
from qrforge.render.options import ModuleStyle
from qrforge.render.png import (
    PNG_SIGNATURE,
    PNGRenderer,
    RenderCancelledError,
    encode_png,
)


@pytest.fixture(scope="module")
def qr():
    return encode(b"test-render", 1)


def _read_png(data):
    assert data[:8] == PNG_SIGNATURE
    pos = 8
    header = None
    idat = b""
    while pos < len(data):
        (length,) = struct.unpack(">I", data[pos : pos + 4])
        kind = data[pos + 4 : pos + 8]
        payload = data[pos + 8 : pos + 8 + length]
        (crc,) = struct.unpack(">I", data[pos + 8 + length : pos + 12 + length])
        assert crc == zlib.crc32(kind + payload) & 0xFFFFFFFF
        if kind == b"IHDR":
            header = struct.unpack(">IIBBBBB", payload)
        elif kind == b"IDAT":
            idat += payload
        pos += 12 + length
    width, height, _depth, color_type = header[:4]
    return width, height, color_type, zlib.decompress(idat)


def test_render_produces_png(qr):
    data = PNGRenderer().render(qr, width=256, height=256)
    assert data.startswith(PNG_SIGNATURE)


def test_render_dimensions_and_pixels(qr):
    data = PNGRenderer().render(qr)
    scale = scale_size(qr.size, 4, 256)
    width, height, color_type, raw = _read_png(data)
    expected = (qr.size + 8) * scale
    assert (width, height) == (expected, expected)
    assert color_type == 2
    stride = 1 + width * 3

    def pixel(x, y):
        start = y * stride + 1 + x * 3
        return raw[start : start + 3]

    assert pixel(0, 0) == b"\xff\xff\xff"
    assert qr.modules[0][0] is True
    assert pixel(4 * scale, 4 * scale) == b"\x00\x00\x00"


def test_render_invalid_color(qr):
    with pytest.raises(ValueError):
        PNGRenderer().render(qr, foreground_color="bad")


def test_render_cancelled(qr):
    cancel = threading.Event()
    cancel.set()
    with pytest.raises(RenderCancelledError):
        PNGRenderer().render(qr, cancel=cancel)


@pytest.mark.parametrize(
    "options",
    [
        {"rounded_modules": 0.5, "width": 128},
        {"circle_modules": True, "width": 128},
        {"module_style": ModuleStyle(shape="diamond", transparency=1.0), "width": 128},
        {"gradient": ("#FF0000", "#0000FF", 45), "width": 128},
        {"transparency": 0.5, "width": 128},
    ],
)
def test_render_advanced_styles(qr, options):
    data = PNGRenderer().render(qr, **options)
    width, height, _, _ = _read_png(data)
    assert width == height > 0


def test_transparency_gives_rgba(qr):
    _, _, color_type, _ = _read_png(PNGRenderer().render(qr, transparency=0.5, width=128))
    assert color_type == 6


def test_invalid_advanced_style_raises(qr):
    with pytest.raises(ValueError):
        PNGRenderer().render(qr, module_style=ModuleStyle(shape="star"))


@pytest.mark.parametrize("size", [100, 200, 400, 1000])
def test_render_edge_sizes(qr, size):
    data = PNGRenderer().render(qr, width=size, height=size)
    width, _, _, _ = _read_png(data)
    assert width == (qr.size + 8) * scale_size(qr.size, 4, size)


def test_encode_png_opaque_rgb():
    canvas = Canvas(2, 1)
    canvas.set(0, 0, RGBA(255, 0, 0))
    canvas.set(1, 0, RGBA(0, 0, 255))
    width, height, color_type, raw = _read_png(encode_png(canvas))
    assert (width, height, color_type) == (2, 1, 2)
    assert raw == b"\x00\xff\x00\x00\x00\x00\xff"


def test_encode_png_transparent_rgba():
    width, height, color_type, raw = _read_png(encode_png(Canvas(1, 1)))
    assert (width, height, color_type) == (1, 1, 6)
    assert raw == b"\x00\x00\x00\x00\x00"


def test_encode_png_empty_raises():
    with pytest.raises(ValueError):
        encode_png(Canvas(0, 0))