"""Terminal output using half-block characters and optional 24-bit ANSI colour."""

from __future__ import annotations

from qrforge.encoder import QRCode
from qrforge.render.colors import parse_hex_color
from qrforge.render.options import build_config

_ANSI_RESET = "\033[0m"
_FULL = "\u2588\u2588"
_UPPER = "\u2580\u2580"
_LOWER = "\u2584\u2584"
_EMPTY = "  "


class TerminalRenderer:
    """Renders QR codes as text, two module rows per line."""

    def render(self, qr: QRCode, **kwargs) -> bytes:
        """UTF-8 text of the symbol; colours other than the defaults add ANSI escapes."""
        kwargs.pop("cancel", None)
        cfg = build_config(**kwargs)
        try:
            fg = parse_hex_color(cfg.foreground_color)
        except ValueError as exc:
            raise ValueError(f"invalid foreground color: {exc}") from exc
        try:
            bg = parse_hex_color(cfg.background_color)
        except ValueError as exc:
            raise ValueError(f"invalid background color: {exc}") from exc

        qz = cfg.quiet_zone
        total = qr.size + 2 * qz

        def is_dark(row: int, col: int) -> bool:
            if not (qz <= row < qz + qr.size and qz <= col < qz + qr.size):
                return False
            return qr.modules[row - qz][col - qz]

        ansi_fg = "\033[38;2;{};{};{}m".format(*fg)
        ansi_bg = "\033[48;2;{};{};{}m".format(*bg)
        use_ansi = cfg.foreground_color != "#000000" or cfg.background_color != "#FFFFFF"

        lines = []
        for row in range(0, total, 2):
            parts = [ansi_bg] if use_ansi else []
            for col in range(total):
                top = is_dark(row, col)
                bottom = is_dark(row + 1, col)
                if use_ansi:
                    parts.append(ansi_fg)
                if top and bottom:
                    parts.append(_FULL)
                elif top:
                    parts.append(_UPPER)
                elif bottom:
                    parts.append(_LOWER)
                else:
                    parts.append(_EMPTY)
            if use_ansi:
                parts.append(_ANSI_RESET)
            lines.append("".join(parts) + "\n")
        return "".join(lines).encode("utf-8")