"""Colour parsing and module scaling helpers shared by the renderers."""

from __future__ import annotations

import string

_HEX_DIGITS = frozenset(string.hexdigits)


def _component(hex_color: str, part: str, name: str) -> int:
    if not part or not set(part) <= _HEX_DIGITS:
        raise ValueError(f"invalid {name} component in {hex_color!r}")
    return int(part, 16)


def parse_hex_color(hex_color: str) -> tuple[int, int, int]:
    """Parse a ``"#RRGGBB"`` colour into its red, green and blue components."""
    if len(hex_color) != 7 or not hex_color.startswith("#"):
        raise ValueError(f'invalid hex color format {hex_color!r}: expected "#RRGGBB"')
    return (
        _component(hex_color, hex_color[1:3], "red"),
        _component(hex_color, hex_color[3:5], "green"),
        _component(hex_color, hex_color[5:7], "blue"),
    )


def scale_size(matrix_size: int, quiet_zone: int, target_pixels: int) -> int:
    """Pixels per module so that the symbol and quiet zone fit ``target_pixels``; at least 1."""
    total_modules = matrix_size + 2 * quiet_zone
    if total_modules <= 0:
        return 1
    return max(target_pixels // total_modules, 1)