"""SVG output."""

from __future__ import annotations

from qrforge.encoder import QRCode
from qrforge.render.colors import parse_hex_color, scale_size
from qrforge.render.options import build_config
from qrforge.render.svg_helpers import svg_gradient_definition, svg_module_element


class SVGRenderer:
    """Renders QR codes as SVG documents."""

    def render(self, qr: QRCode, **kwargs) -> bytes:
        """UTF-8 SVG document of the symbol; accepts the options of ``build_config``."""
        kwargs.pop("cancel", None)
        cfg = build_config(**kwargs)
        try:
            parse_hex_color(cfg.foreground_color)
        except ValueError as exc:
            raise ValueError(f"invalid foreground color: {exc}") from exc
        try:
            parse_hex_color(cfg.background_color)
        except ValueError as exc:
            raise ValueError(f"invalid background color: {exc}") from exc
        style = cfg.module_style
        if style is not None:
            style.validate()
        advanced = style is not None and style.use_advanced()

        module_size = scale_size(qr.size, cfg.quiet_zone, cfg.width)
        canvas = (qr.size + 2 * cfg.quiet_zone) * module_size
        lines = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {canvas} {canvas}" '
            f'width="{canvas}" height="{canvas}">',
            f'  <rect width="{canvas}" height="{canvas}" fill="{cfg.background_color}"/>',
        ]
        if advanced and style.gradient_enabled:
            lines.append(
                svg_gradient_definition(
                    style.gradient_start, style.gradient_end, style.gradient_angle, "qrgradient"
                )
            )
        for row_index, row in enumerate(qr.modules[: qr.size]):
            for col_index, dark in enumerate(row[: qr.size]):
                if not dark:
                    continue
                col = col_index + cfg.quiet_zone
                r = row_index + cfg.quiet_zone
                if advanced:
                    lines.append(
                        "  " + svg_module_element(col, r, module_size, style, cfg.foreground_color)
                    )
                else:
                    lines.append(
                        f'  <rect x="{col * module_size}" y="{r * module_size}" '
                        f'width="{module_size}" height="{module_size}" '
                        f'fill="{cfg.foreground_color}"/>'
                    )
        lines.append("</svg>")
        return ("\n".join(lines) + "\n").encode("utf-8")