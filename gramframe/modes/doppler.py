"""
Doppler mode: fit an f+ / f- pair and estimate source speed.
"""
from __future__ import annotations

import logging

from .. import config
from ..interface.measurements import doppler_speed, midpoint, screen_distance, to_knots
from ..models import DataPoint, DopplerFit, Mode
from .base import LEFT, RIGHT
from .registry import register_mode

logger = logging.getLogger(__name__)


@register_mode
class DopplerMode:
    MODE = Mode.DOPPLER
    cursor = "crosshair"

    def __init__(self, host):
        self.host = host
        self._dragged = None         # 'f_plus' | 'f_minus' | 'f_zero'
        self._placing_from = None    # DataPoint where placement started
        self._placing_screen = None

    @staticmethod
    def initial_state() -> dict:
        return {"doppler": DopplerFit()}

    @property
    def fit(self) -> DopplerFit:
        return self.host.doppler

    # ---- lifecycle ---------------------------------------------------------------
    def activate(self):
        logger.debug("Doppler mode active")

    def deactivate(self):
        pass

    def cleanup(self):
        # transient only; placed points survive mode switches
        if self._placing_from is not None:
            self._abandon_placement()
        self._dragged = None

    # ---- helpers -------------------------------------------------------------------
    def _point_near(self, event):
        t = self.host.transform
        threshold = config.get("doppler_marker_radius")
        best, best_d = None, threshold
        for name, p in self.fit.points().items():
            s = t.data_to_screen(p.time, p.freq)
            d = screen_distance(event.x, event.y, s.x, s.y)
            if d <= best_d:
                best, best_d = name, d
        return best

    def _assign_pair(self, a: DataPoint, b: DataPoint):
        early, late = (a, b) if a.time <= b.time else (b, a)
        fit = self.fit
        fit.f_minus, fit.f_plus = early, late
        fit.f_zero = midpoint(late, early)
        self._recompute()

    def _recompute(self):
        fit = self.fit
        if not fit.is_complete:
            fit.speed = None
            return
        try:
            fit.speed = doppler_speed(fit.f_plus, fit.f_minus, fit.f_zero)
        except ValueError as e:
            logger.warning(f"Doppler speed unavailable: {e}")
            fit.speed = None
            return
        logger.info(f"Doppler speed {fit.speed:.2f} m/s ({to_knots(fit.speed):.1f} kn)")

    def _abandon_placement(self):
        fit = self.fit
        fit.f_plus = fit.f_minus = fit.f_zero = None
        fit.speed = None
        self._placing_from = None
        self._placing_screen = None
        self.host.refresh()

    # ---- pointer -------------------------------------------------------------------
    def handle_mouse_down(self, event, data):
        if event.button == RIGHT:
            self.reset_state()
            return
        if event.button != LEFT:
            return
        name = self._point_near(event)
        if name is not None:
            self._dragged = name
            self.host.drag.dragged_id = name
            self.host.drag.start_position = data
            self.host.set_cursor("grabbing")
            return
        if self.fit.is_complete:
            logger.debug("Doppler pair already placed; right-click to reset")
            return
        self._placing_from = data
        self._placing_screen = (event.x, event.y)
        self.host.drag.start_position = data

    def handle_mouse_move(self, event, data):
        fit = self.fit
        if self._dragged is not None:
            setattr(fit, self._dragged, data)
            if self._dragged != "f_zero" and fit.is_complete:
                fit.f_zero = midpoint(fit.f_plus, fit.f_minus)
            self._recompute()
            self.host.refresh()
            return
        if self._placing_from is not None:
            self._assign_pair(self._placing_from, data)
            self.host.refresh()
            return
        self.host.set_cursor("grab" if self._point_near(event) else self.cursor)

    def handle_mouse_up(self, event, data):
        if self._dragged is not None:
            self._dragged = None
            self.host.drag.reset()
            self.host.set_cursor(self.cursor)
            return
        if self._placing_from is None:
            return
        sx, sy = self._placing_screen
        if screen_distance(sx, sy, event.x, event.y) < config.get("click_threshold"):
            # a click without a drag leaves nothing behind
            self._abandon_placement()
        else:
            self._assign_pair(self._placing_from, data)
            self._placing_from = None
            self._placing_screen = None
            self.host.refresh()
        self.host.drag.reset()

    def handle_mouse_leave(self):
        if self._placing_from is not None:
            self._abandon_placement()
        self._dragged = None
        self.host.drag.reset()

    def guidance_text(self) -> str:
        return ("Doppler Mode\n"
                "- Click & drag to place markers for f+ and f-\n"
                "- Drag markers to adjust positions\n"
                "- f₀ marker shows automatically at the midpoint\n"
                "- Right-click to reset all markers")

    def reset_state(self):
        self._dragged = None
        self._placing_from = None
        self._placing_screen = None
        fit = self.fit
        fit.f_plus = fit.f_minus = fit.f_zero = None
        fit.speed = None
        logger.info("Doppler markers reset")
        self.host.refresh()
