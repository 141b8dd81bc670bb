"""SVG fragments for individual modules, gradients and rounded rectangles."""

from __future__ import annotations

import math

from qrforge.render.options import ModuleStyle


def svg_module_element(
    col: int, row: int, scale: int, style: ModuleStyle | None, fg_color: str
) -> str:
    """An SVG element for the module at (col, row) in the style's shape."""
    x = col * scale
    y = row * scale
    fill = fg_color
    opacity = ""
    if style is not None and style.transparency < 1.0:
        opacity = f' opacity="{style.transparency:.2f}"'
    if style is not None and style.gradient_enabled:
        fill = "url(#qrgradient)"

    shape = "square" if style is None else style.shape
    if shape == "rounded":
        radius = scale * style.roundness * 0.5
        path = svg_rounded_rect_path(float(x), float(y), float(scale), float(scale), radius)
        return f'<path d="{path}" fill="{fill}"{opacity}/>'
    if shape == "circle":
        half = scale // 2
        return f'<circle cx="{x + half}" cy="{y + half}" r="{half}" fill="{fill}"{opacity}/>'
    if shape == "diamond":
        cx = x + scale // 2
        cy = y + scale // 2
        points = f"{cx},{y} {x + scale},{cy} {cx},{y + scale} {x},{cy}"
        return f'<polygon points="{points}" fill="{fill}"{opacity}/>'
    return f'<rect x="{x}" y="{y}" width="{scale}" height="{scale}" fill="{fill}"{opacity}/>'


def svg_gradient_definition(
    start_color: str, end_color: str, angle: float, element_id: str
) -> str:
    """A ``<defs>`` block holding a linear gradient with the given id."""
    rad = (angle - 90) * math.pi / 180.0
    cos_a = math.cos(rad)
    sin_a = math.sin(rad)
    x1 = 0.5 - 0.5 * cos_a
    y1 = 0.5 - 0.5 * sin_a
    x2 = 0.5 + 0.5 * cos_a
    y2 = 0.5 + 0.5 * sin_a
    return (
        f'<defs><linearGradient id="{element_id}" '
        f'x1="{x1:.4f}" y1="{y1:.4f}" x2="{x2:.4f}" y2="{y2:.4f}" '
        'gradientUnits="objectBoundingBox">'
        f'<stop offset="0%" stop-color="{start_color}"/>'
        f'<stop offset="100%" stop-color="{end_color}"/>'
        "</linearGradient></defs>"
    )


def svg_rounded_rect_path(x: float, y: float, w: float, h: float, r: float) -> str:
    """Path data for a rounded rectangle; the radius is clamped to [0, min(w, h)/2]."""
    r = max(min(r, w / 2, h / 2), 0.0)
    if r == 0:
        return f"M{x:.1f},{y:.1f} H{x + w:.1f} V{y + h:.1f} H{x:.1f} Z"
    return (
        f"M{x + r:.1f},{y:.1f} "
        f"H{x + w - r:.1f} A{r:.1f},{r:.1f} 0 0,1 {x + w:.1f},{y + r:.1f} "
        f"V{y + h - r:.1f} A{r:.1f},{r:.1f} 0 0,1 {x + w - r:.1f},{y + h:.1f} "
        f"H{x + r:.1f} A{r:.1f},{r:.1f} 0 0,1 {x:.1f},{y + h - r:.1f} "
        f"V{y + r:.1f} A{r:.1f},{r:.1f} 0 0,1 {x + r:.1f},{y:.1f} Z"
    )