"""
Arrow-key fine positioning of the selected marker or harmonic set.
"""
from __future__ import annotations

import logging

import numpy as np

from .. import config

logger = logging.getLogger(__name__)

_ARROWS = {
    "left": (-1, 0),
    "right": (1, 0),
    "up": (0, -1),
    "down": (0, 1),
}


def parse_key(key: str) -> tuple[str, bool]:
    """Split a matplotlib-style key name (``shift+left``) into (name, shift)."""
    parts = (key or "").lower().split("+")
    name = parts[-1]
    if name.startswith("arrow"):
        name = name[len("arrow"):]
    return name, "shift" in parts[:-1]


class KeyboardNudger:
    """
    Moves the current selection by one (or, with Shift, five) screen pixels.

    Steps are divided by the zoom level so one key press moves one pixel on
    screen whatever the magnification.
    """

    def __init__(self, host):
        self.host = host

    def handle_key(self, key: str, shift: bool = False) -> bool:
        """Apply an arrow key. Returns True when the key moved something."""
        name, shifted = parse_key(key)
        if name not in _ARROWS:
            return False
        selection = self.host.selection
        if selection.is_empty:
            return False
        step = config.get("nudge_large") if (shift or shifted) else config.get("nudge_small")
        step /= self.host.viewport_controller.zoom_level
        ux, uy = _ARROWS[name]
        dx, dy = ux * step, uy * step
        try:
            if selection.kind == "marker":
                self._move_marker(selection.id, dx, dy)
            elif selection.kind == "harmonic_set":
                self._move_harmonic_set(selection.id, dx, dy)
            else:
                return False
        except KeyError:
            logger.warning(f"Selected {selection.kind} '{selection.id}' no longer exists")
            selection.clear()
            return False
        return True

    def _move_marker(self, marker_id, dx, dy):
        vp = self.host.viewport_controller.viewport
        cfg = self.host.config
        marker = self.host.store.get_marker(marker_id)
        rate = self.host.rate
        # dx/dy are natural-image pixels; y grows downwards while time grows upwards
        freq = marker.freq + dx * (cfg.freq_range / rate) / vp.natural_width
        time = marker.time - dy * cfg.time_range / vp.natural_height
        freq = float(np.clip(freq, cfg.freq_min / rate, cfg.freq_max / rate))
        time = float(np.clip(time, cfg.time_min, cfg.time_max))
        self.host.store.update_marker(marker_id, time=time, freq=freq)

    def _move_harmonic_set(self, set_id, dx, dy):
        vp = self.host.viewport_controller.viewport
        cfg = self.host.config
        hs = self.host.store.get_harmonic_set(set_id)
        changes = {}
        if dx:
            per_px = (cfg.freq_range / self.host.rate) / vp.natural_width
            changes["spacing"] = max(config.get("harmonic_min_spacing"), hs.spacing + dx * per_px)
        if dy:
            time = hs.anchor_time - dy * cfg.time_range / vp.natural_height
            changes["anchor_time"] = float(np.clip(time, cfg.time_min, cfg.time_max))
        self.host.store.update_harmonic_set(set_id, **changes)
