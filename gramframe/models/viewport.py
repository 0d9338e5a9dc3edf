"""
Geometry value types: margins, viewport and the two point spaces.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace

from .. import config


@dataclass(frozen=True)
class Margins:
    """Axis margins around the image, in surface units."""
    top: float = 15.0
    right: float = 15.0
    bottom: float = 50.0
    left: float = 60.0

    def __post_init__(self):
        for name in ("top", "right", "bottom", "left"):
            if getattr(self, name) < 0:
                raise ValueError(f"Margin '{name}' must be >= 0")

    @classmethod
    def from_config(cls) -> "Margins":
        cfg = config.get_all()
        return cls(top=cfg["margin_top"], right=cfg["margin_right"],
                   bottom=cfg["margin_bottom"], left=cfg["margin_left"])

    @classmethod
    def uniform(cls, value: float) -> "Margins":
        return cls(value, value, value, value)


@dataclass(frozen=True)
class ScreenPoint:
    """A point on the rendering surface (natural image units, margins included)."""
    x: float
    y: float


@dataclass(frozen=True)
class DataPoint:
    """A (time, frequency) pair in the measurement domain."""
    time: float
    freq: float


@dataclass(frozen=True)
class Viewport:
    """
    Zoom level, pan centre and image geometry.

    ``zoom_level`` of 1.0 is the identity. The centre is the normalised image
    point shown in the middle of the image area. Instances are immutable;
    the viewport controller replaces them on every change.
    """

    natural_width: int
    natural_height: int
    margins: Margins = field(default_factory=Margins)
    zoom_level: float = 1.0
    center_x: float = 0.5
    center_y: float = 0.5

    def __post_init__(self):
        if self.natural_width <= 0 or self.natural_height <= 0:
            raise ValueError("Natural image size must be positive, "
                             f"got {self.natural_width}x{self.natural_height}")
        if self.zoom_level < 1.0:
            raise ValueError(f"zoom_level must be >= 1.0, got {self.zoom_level}")
        if not (0.0 <= self.center_x <= 1.0 and 0.0 <= self.center_y <= 1.0):
            raise ValueError(f"Centre must lie in [0,1], got ({self.center_x}, {self.center_y})")

    @property
    def surface_width(self) -> float:
        return self.natural_width + self.margins.left + self.margins.right

    @property
    def surface_height(self) -> float:
        return self.natural_height + self.margins.top + self.margins.bottom

    @property
    def is_zoomed(self) -> bool:
        return self.zoom_level > 1.0

    def with_zoom(self, level: float, center_x: float, center_y: float) -> "Viewport":
        return replace(self, zoom_level=level, center_x=center_x, center_y=center_y)

    def to_dict(self) -> dict:
        return {
            "zoom_level": self.zoom_level,
            "center_x": self.center_x,
            "center_y": self.center_y,
            "natural_width": self.natural_width,
            "natural_height": self.natural_height,
            "margins": {
                "top": self.margins.top,
                "right": self.margins.right,
                "bottom": self.margins.bottom,
                "left": self.margins.left,
            },
        }
