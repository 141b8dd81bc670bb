"""Rendering configuration: sizes, colours, quiet zone and module style."""

from __future__ import annotations

from dataclasses import dataclass, replace

from qrforge.render.colors import parse_hex_color

SHAPES = ("square", "rounded", "circle", "diamond")


@dataclass
class ModuleStyle:
    """Shape, gradient and transparency of the dark modules."""

    shape: str = "square"
    roundness: float = 0.0
    gradient_enabled: bool = False
    gradient_start: str = ""
    gradient_end: str = ""
    gradient_angle: float = 0.0
    transparency: float = 1.0

    @property
    def is_rounded(self) -> bool:
        return self.shape == "rounded"

    @property
    def is_circle(self) -> bool:
        return self.shape == "circle"

    @property
    def is_diamond(self) -> bool:
        return self.shape == "diamond"

    def use_advanced(self) -> bool:
        """Whether the style needs more than plain opaque squares."""
        return self.shape != "square" or self.gradient_enabled or self.transparency < 1.0

    def validate(self) -> None:
        """Raise ValueError if any field is out of range."""
        if self.shape not in SHAPES:
            raise ValueError(
                f"invalid module shape {self.shape!r}: must be one of square, rounded, circle, diamond"
            )
        if not 0.0 <= self.roundness <= 1.0:
            raise ValueError(f"invalid roundness {self.roundness:f}: must be between 0.0 and 1.0")
        if not 0.0 <= self.transparency <= 1.0:
            raise ValueError(
                f"invalid transparency {self.transparency:f}: must be between 0.0 and 1.0"
            )
        if self.gradient_enabled:
            try:
                parse_hex_color(self.gradient_start)
            except ValueError as exc:
                raise ValueError(f"invalid gradient start color: {exc}") from exc
            try:
                parse_hex_color(self.gradient_end)
            except ValueError as exc:
                raise ValueError(f"invalid gradient end color: {exc}") from exc


def default_module_style() -> ModuleStyle:
    """An opaque square style."""
    return ModuleStyle()


@dataclass
class RenderConfig:
    """Per-call rendering parameters."""

    width: int = 256
    height: int = 256
    foreground_color: str = "#000000"
    background_color: str = "#FFFFFF"
    quiet_zone: int = 4
    border_width: int = 0
    module_style: ModuleStyle | None = None


_PLAIN_FIELDS = (
    "width",
    "height",
    "foreground_color",
    "background_color",
    "quiet_zone",
    "border_width",
)
_STYLE_OPTIONS = ("module_style", "gradient", "rounded_modules", "circle_modules", "transparency")


def build_config(**kwargs) -> RenderConfig:
    """Build a RenderConfig from the defaults and keyword overrides.

    Besides the RenderConfig fields, accepts ``gradient=(start, end, angle)``,
    ``rounded_modules=roundness``, ``circle_modules=True`` and
    ``transparency=alpha``, which adjust the module style (starting from the
    default style when none is given).
    """
    unknown = set(kwargs) - set(_PLAIN_FIELDS) - set(_STYLE_OPTIONS)
    if unknown:
        raise TypeError(f"unknown render options: {', '.join(sorted(unknown))}")
    cfg = RenderConfig(**{name: kwargs[name] for name in _PLAIN_FIELDS if name in kwargs})

    style = kwargs.get("module_style")
    cfg.module_style = replace(style) if style is not None else None

    def styled() -> ModuleStyle:
        if cfg.module_style is None:
            cfg.module_style = default_module_style()
        return cfg.module_style

    if "gradient" in kwargs:
        start, end, angle = kwargs["gradient"]
        s = styled()
        s.gradient_enabled = True
        s.gradient_start = start
        s.gradient_end = end
        s.gradient_angle = float(angle)
    if "rounded_modules" in kwargs:
        s = styled()
        s.shape = "rounded"
        s.roundness = float(kwargs["rounded_modules"])
    if kwargs.get("circle_modules"):
        styled().shape = "circle"
    if "transparency" in kwargs:
        styled().transparency = float(kwargs["transparency"])
    return cfg