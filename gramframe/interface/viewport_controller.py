"""
Zoom and pan state for one spectrogram surface.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

import numpy as np

from .. import config
from ..models import Margins, Viewport

logger = logging.getLogger(__name__)


class ViewportController:
    """
    Owns the zoom level and pan centre and hands out immutable ``Viewport``s.

    Every accepted change replaces ``self.viewport`` and calls ``on_change``
    with the new viewport. The rendered surface size is tracked separately
    so that resizing never alters zoom or centre.
    """

    def __init__(self, natural_width: int, natural_height: int,
                 margins: Optional[Margins] = None,
                 on_change: Optional[Callable[[Viewport], None]] = None):
        self.viewport = Viewport(natural_width, natural_height,
                                 margins if margins is not None else Margins.from_config())
        self.on_change = on_change
        # rendered size in device pixels; defaults to 1:1 with surface units
        self.surface_size = (self.viewport.surface_width, self.viewport.surface_height)

    # ---- read-only helpers -----------------------------------------------------
    @property
    def zoom_level(self) -> float:
        return self.viewport.zoom_level

    @property
    def is_zoomed(self) -> bool:
        return self.viewport.is_zoomed

    @property
    def scale_ratio(self) -> tuple[float, float]:
        """Surface units per rendered pixel along x and y."""
        vp = self.viewport
        w, h = self.surface_size
        return vp.surface_width / w, vp.surface_height / h

    # ---- mutation ------------------------------------------------------------------
    def set_zoom(self, level: float, center_x: float, center_y: float) -> Viewport:
        """Clamp and store a new zoom/centre. Always publishes the result."""
        level = max(1.0, float(np.nan_to_num(level, nan=1.0)))
        cx = float(np.clip(np.nan_to_num(center_x, nan=0.5), 0.0, 1.0))
        cy = float(np.clip(np.nan_to_num(center_y, nan=0.5), 0.0, 1.0))
        self.viewport = self.viewport.with_zoom(level, cx, cy)
        logger.debug(f"Viewport set: zoom={level:.3f} centre=({cx:.3f}, {cy:.3f})")
        if callable(self.on_change):
            self.on_change(self.viewport)
        return self.viewport

    def pan(self, delta_px_x: float, delta_px_y: float) -> bool:
        """
        Shift the centre by a rendered-pixel delta.

        Dragging right moves the view left (the image follows the pointer).
        Returns False without change when the view is not zoomed.
        """
        vp = self.viewport
        if vp.zoom_level <= 1.0:
            return False
        ratio_x, ratio_y = self.scale_ratio
        dnx = -(delta_px_x * ratio_x / vp.natural_width) / vp.zoom_level
        dny = -(delta_px_y * ratio_y / vp.natural_height) / vp.zoom_level
        self.set_zoom(vp.zoom_level, vp.center_x + dnx, vp.center_y + dny)
        return True

    def zoom_in(self) -> Viewport:
        vp = self.viewport
        level = min(vp.zoom_level * config.get("zoom_step"), config.get("zoom_max"))
        return self.set_zoom(level, vp.center_x, vp.center_y)

    def zoom_out(self) -> Viewport:
        vp = self.viewport
        level = max(vp.zoom_level / config.get("zoom_step"), 1.0)
        return self.set_zoom(level, vp.center_x, vp.center_y)

    def reset_zoom(self) -> Viewport:
        """Back to 1x; the centre snaps to the middle of the image."""
        return self.set_zoom(1.0, 0.5, 0.5)

    def zoom_about(self, nx: float, ny: float, factor: Optional[float] = None) -> Viewport:
        """Zoom in by ``factor`` and centre on the normalised point (nx, ny)."""
        factor = factor or config.get("zoom_step")
        level = min(self.viewport.zoom_level * factor, config.get("zoom_max"))
        return self.set_zoom(level, nx, ny)

    def zoom_to_normalized_rect(self, nx0: float, ny0: float, nx1: float, ny1: float) -> Viewport:
        """Fit the normalised rectangle into the image area."""
        w = abs(nx1 - nx0)
        h = abs(ny1 - ny0)
        if w <= 0 or h <= 0:
            raise ValueError("Zoom rectangle must have a non-zero area")
        level = min(1.0 / w, 1.0 / h, config.get("zoom_max"))
        return self.set_zoom(level, (nx0 + nx1) / 2, (ny0 + ny1) / 2)

    def resize(self, width_px: float, height_px: float):
        """Record the rendered size. Zoom and centre are left untouched."""
        if width_px <= 0 or height_px <= 0:
            logger.debug(f"Ignoring degenerate resize {width_px}x{height_px}")
            return
        self.surface_size = (float(width_px), float(height_px))
