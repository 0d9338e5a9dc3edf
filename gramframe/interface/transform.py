"""
Screen <-> data coordinate mapping.

Screen coordinates are surface units: the natural image size plus the axis
margins, origin at the top-left of the surface. The horizontal image axis is
frequency and the vertical axis is time, with the latest time at the top.

Zoom and pan are applied in normalised image space::

    on_screen = 0.5 + (normalised - centre) * zoom
    normalised = centre + (on_screen - 0.5) / zoom
"""
from __future__ import annotations

import logging

import numpy as np

from ..models import AxisConfig, DataPoint, ScreenPoint, Viewport

logger = logging.getLogger(__name__)


def _finite_unit(value: float) -> float:
    """Clamp into [0, 1]; NaN and -inf go to 0, +inf to 1."""
    v = float(np.nan_to_num(value, nan=0.0, posinf=1.0, neginf=0.0))
    return float(np.clip(v, 0.0, 1.0))


class CoordinateTransform:
    """
    Pure forward/inverse mapping for one viewport, config and rate.

    Parameters
    ----------
    viewport : Viewport
        Active zoom/pan and geometry.
    config : AxisConfig
        Data ranges the image spans.
    rate : float, default 1.0
        Frequency divider applied to reported frequencies.
    """

    def __init__(self, viewport: Viewport, config: AxisConfig, rate: float = 1.0):
        self.viewport = viewport
        self.config = config
        self.rate = rate

    # ---- normalised space -------------------------------------------------
    def screen_to_normalized(self, x: float, y: float) -> tuple[float, float]:
        vp = self.viewport
        sx = (x - vp.margins.left) / vp.natural_width
        sy = (y - vp.margins.top) / vp.natural_height
        nx = vp.center_x + (sx - 0.5) / vp.zoom_level
        ny = vp.center_y + (sy - 0.5) / vp.zoom_level
        return _finite_unit(nx), _finite_unit(ny)

    def normalized_to_screen(self, nx: float, ny: float) -> ScreenPoint:
        vp = self.viewport
        sx = 0.5 + (nx - vp.center_x) * vp.zoom_level
        sy = 0.5 + (ny - vp.center_y) * vp.zoom_level
        return ScreenPoint(vp.margins.left + sx * vp.natural_width,
                           vp.margins.top + sy * vp.natural_height)

    # ---- data space ------------------------------------------------------------
    def screen_to_data(self, x: float, y: float) -> DataPoint:
        """
        Map a surface point to (time, freq).

        Points outside the image, or non-finite input, clamp to the nearest
        edge of the data domain.
        """
        nx, ny = self.screen_to_normalized(x, y)
        cfg = self.config
        freq = cfg.freq_min + nx * cfg.freq_range
        time = cfg.time_max - ny * cfg.time_range
        return DataPoint(time=time, freq=freq / self.rate)

    def data_to_screen(self, time: float, freq: float) -> ScreenPoint:
        """Exact inverse of :meth:`screen_to_data` for in-range data."""
        cfg = self.config
        nx = (freq * self.rate - cfg.freq_min) / cfg.freq_range
        ny = (cfg.time_max - time) / cfg.time_range
        return self.normalized_to_screen(nx, ny)

    # ---- extents ---------------------------------------------------------------
    def image_rect(self) -> tuple[float, float, float, float]:
        """Screen extent (x0, y0, x1, y1) of the whole image under the viewport."""
        tl = self.normalized_to_screen(0.0, 0.0)
        br = self.normalized_to_screen(1.0, 1.0)
        return tl.x, tl.y, br.x, br.y

    def plot_rect(self) -> tuple[float, float, float, float]:
        """Screen extent of the image area (the part inside the margins)."""
        vp = self.viewport
        return (vp.margins.left, vp.margins.top,
                vp.margins.left + vp.natural_width, vp.margins.top + vp.natural_height)

    def contains(self, x: float, y: float) -> bool:
        x0, y0, x1, y1 = self.plot_rect()
        return x0 <= x <= x1 and y0 <= y <= y1

    def visible_data_bounds(self) -> dict:
        """Time and frequency window currently on screen."""
        x0, y0, x1, y1 = self.plot_rect()
        top_left = self.screen_to_data(x0, y0)
        bottom_right = self.screen_to_data(x1, y1)
        return {
            "time_min": bottom_right.time,
            "time_max": top_left.time,
            "freq_min": top_left.freq,
            "freq_max": bottom_right.freq,
        }

    def pixels_per_unit(self) -> tuple[float, float]:
        """Screen units per second and per (rate-scaled) Hz at the current zoom."""
        vp = self.viewport
        cfg = self.config
        per_sec = vp.natural_height * vp.zoom_level / cfg.time_range
        per_hz = vp.natural_width * vp.zoom_level * self.rate / cfg.freq_range
        return per_sec, per_hz
