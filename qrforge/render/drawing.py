"""A small RGBA canvas and the shape and colour helpers used to draw modules on it."""

from __future__ import annotations

import math
from collections.abc import Iterator
from typing import NamedTuple

from qrforge.render.colors import parse_hex_color
from qrforge.render.options import ModuleStyle


class RGBA(NamedTuple):
    """An 8-bit-per-channel colour."""

    r: int
    g: int
    b: int
    a: int = 255


TRANSPARENT = RGBA(0, 0, 0, 0)


class Canvas:
    """A width x height grid of RGBA pixels, initially fully transparent."""

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"invalid canvas size {width}x{height}")
        self.width = width
        self.height = height
        self._pixels = bytearray(width * height * 4)

    def _offset(self, x: int, y: int) -> int | None:
        if 0 <= x < self.width and 0 <= y < self.height:
            return (y * self.width + x) * 4
        return None

    def set(self, x: int, y: int, color: RGBA) -> None:
        """Set one pixel; coordinates outside the canvas are ignored."""
        offset = self._offset(x, y)
        if offset is not None:
            self._pixels[offset : offset + 4] = bytes(color)

    def get(self, x: int, y: int) -> RGBA:
        """Colour of one pixel; transparent black outside the canvas."""
        offset = self._offset(x, y)
        if offset is None:
            return TRANSPARENT
        return RGBA(*self._pixels[offset : offset + 4])

    def fill(self, color: RGBA) -> None:
        """Set every pixel to ``color``."""
        self._pixels[:] = bytes(color) * (self.width * self.height)

    def rows(self) -> Iterator[bytes]:
        """Each row as packed RGBA bytes, top to bottom."""
        stride = self.width * 4
        for y in range(self.height):
            yield bytes(self._pixels[y * stride : (y + 1) * stride])


def _fill_rect(canvas: Canvas, x: int, y: int, w: int, h: int, color: RGBA) -> None:
    for py in range(y, y + h):
        for px in range(x, x + w):
            canvas.set(px, py, color)


def _resolve_color(
    x: int, y: int, width: int, height: int, style: ModuleStyle | None, fg: RGBA
) -> RGBA:
    color = fg
    if style is not None and style.gradient_enabled:
        try:
            start, end = parse_gradient(style.gradient_start, style.gradient_end)
        except ValueError:
            start = end = TRANSPARENT
        color = gradient_color(x, y, width, height, style.gradient_angle, start, end)
    if style is not None and style.transparency < 1.0:
        color = apply_transparency(color, style.transparency)
    return color


def draw_module(
    canvas: Canvas, x: int, y: int, scale: int, style: ModuleStyle | None, fg_color: RGBA
) -> None:
    """Draw one module with its top-left pixel at (x, y) in the style's shape."""
    color = _resolve_color(x, y, canvas.width, canvas.height, style, fg_color)
    if style is None or style.shape == "square":
        _fill_rect(canvas, x, y, scale, scale, color)
    elif style.shape == "rounded":
        radius = int(scale * style.roundness * 0.5)
        radius = min(max(radius, 0), scale // 2)
        draw_rounded_rect(canvas, x, y, scale, scale, radius, color)
    elif style.shape == "circle":
        draw_circle(canvas, x + scale // 2, y + scale // 2, scale // 2, color)
    elif style.shape == "diamond":
        draw_diamond(canvas, x + scale // 2, y + scale // 2, scale // 2, scale // 2, color)


def draw_rounded_rect(
    canvas: Canvas, x: int, y: int, w: int, h: int, radius: int, color: RGBA
) -> None:
    """Fill a rectangle whose corners are rounded with ``radius`` pixels."""
    radius = max(min(radius, w // 2, h // 2), 0)
    left, right = x + radius, x + w - 1 - radius
    top, bottom = y + radius, y + h - 1 - radius
    r2 = radius * radius
    for py in range(y, y + h):
        if py < y + radius:
            cy: int | None = top
        elif py >= y + h - radius:
            cy = bottom
        else:
            cy = None
        for px in range(x, x + w):
            if cy is not None:
                if px < x + radius:
                    cx: int | None = left
                elif px >= x + w - radius:
                    cx = right
                else:
                    cx = None
                if cx is not None and (px - cx) ** 2 + (py - cy) ** 2 > r2:
                    continue
            canvas.set(px, py, color)


def draw_circle(canvas: Canvas, cx: int, cy: int, radius: int, color: RGBA) -> None:
    """Fill a circle centred on (cx, cy)."""
    r2 = radius * radius
    for py in range(cy - radius, cy + radius + 1):
        for px in range(cx - radius, cx + radius + 1):
            if (px - cx) ** 2 + (py - cy) ** 2 <= r2:
                canvas.set(px, py, color)


def draw_diamond(
    canvas: Canvas, cx: int, cy: int, half_w: int, half_h: int, color: RGBA
) -> None:
    """Fill a diamond centred on (cx, cy); nothing is drawn for non-positive sizes."""
    if half_w <= 0 or half_h <= 0:
        return
    for py in range(cy - half_h, cy + half_h + 1):
        for px in range(cx - half_w, cx + half_w + 1):
            if abs(px - cx) / half_w + abs(py - cy) / half_h <= 1.0:
                canvas.set(px, py, color)


def parse_gradient(start_hex: str, end_hex: str) -> tuple[RGBA, RGBA]:
    """Parse the two ``"#RRGGBB"`` end colours of a gradient as opaque colours."""
    return RGBA(*parse_hex_color(start_hex)), RGBA(*parse_hex_color(end_hex))


def interpolate_color(start: RGBA, end: RGBA, t: float) -> RGBA:
    """Linear interpolation between two colours; ``t`` is clamped to [0, 1]."""
    t = min(max(t, 0.0), 1.0)
    return RGBA(*(int(s + t * (e - s)) for s, e in zip(start, end)))


def gradient_color(
    x: int, y: int, width: int, height: int, angle: float, start: RGBA, end: RGBA
) -> RGBA:
    """Colour of a linear gradient at pixel (x, y) of a width x height area."""
    if width == 0 or height == 0:
        return start
    rad = angle * math.pi / 180.0
    diag = math.sqrt(width * width + height * height)
    along = x * math.cos(rad) + y * math.sin(rad)
    return interpolate_color(start, end, (along + diag / 2) / diag)


def apply_transparency(color: RGBA, alpha: float) -> RGBA:
    """The colour with its alpha set to ``alpha`` (clamped to [0, 1]) of full opacity."""
    alpha = min(max(alpha, 0.0), 1.0)
    return RGBA(color.r, color.g, color.b, int(alpha * 255))