"""
Harmonics mode: create and adjust harmonic ladders.

Grabbing harmonic N and dragging it by ``delta_freq`` rescales the whole
ladder so that line N stays under the pointer::

    spacing = (N * original_spacing + delta_freq) / N
"""
from __future__ import annotations

import logging
from typing import Optional

from .. import config
from ..interface.measurements import dragged_spacing, find_harmonic_at
from ..models import HarmonicSet, Mode
from .base import LEFT, RIGHT, DragHandler
from .registry import register_mode

logger = logging.getLogger(__name__)


@register_mode
class HarmonicsMode:
    MODE = Mode.HARMONICS
    cursor = "crosshair"

    def __init__(self, host):
        self.host = host
        self.dragger = DragHandler(host, self._find_line, self._start_drag,
                                   self._update_drag, idle_cursor=self.cursor)

    # ---- drag callbacks ----------------------------------------------------------
    def _find_line(self, event, data):
        fmin, fmax = self.host.freq_bounds
        return find_harmonic_at(data, self.host.store.harmonic_sets(), fmin, fmax,
                                self.host.config.time_range)

    def _start_drag(self, hit, event, data):
        hs, n = hit
        drag = self.host.drag
        drag.dragged_id = hs.id
        drag.original_spacing = hs.spacing
        drag.original_anchor_time = hs.anchor_time
        drag.grabbed_harmonic = n
        self.host.store.update_harmonic_set(hs.id, selected_harmonic_number=n)
        self.host.select("harmonic_set", hs.id)

    def _update_drag(self, hit, event, data):
        drag = self.host.drag
        delta_freq = data.freq - drag.start_position.freq
        delta_time = data.time - drag.start_position.time
        changes = {"anchor_time": drag.original_anchor_time + delta_time}
        spacing = dragged_spacing(drag.original_spacing, drag.grabbed_harmonic, delta_freq)
        if spacing > 0:
            changes["spacing"] = spacing
        self.host.store.update_harmonic_set(drag.dragged_id, **changes)

    # ---- lifecycle ---------------------------------------------------------------
    def activate(self):
        logger.debug("Harmonics mode active")

    def deactivate(self):
        pass

    def cleanup(self):
        self.dragger.release()

    # ---- pointer -------------------------------------------------------------------
    def handle_mouse_down(self, event, data):
        if event.button == RIGHT:
            hit = self._find_line(event, data)
            if hit is not None:
                self.host.remove_harmonic_set(hit[0].id)
            return
        if event.button != LEFT:
            return
        if self.dragger.press(event, data):
            return
        if data.freq < config.get("harmonic_min_spacing"):
            logger.debug(f"Click at {data.freq:.2f}Hz is below the minimum spacing; ignored")
            return
        # new ladder with its first harmonic under the pointer; keep dragging to tune it
        hs = self.add_harmonic_set(data.time, data.freq)
        self.dragger.begin((hs, 1), event, data)

    def handle_mouse_move(self, event, data):
        if not self.dragger.move(event, data):
            self.dragger.hover(event, data)

    def handle_mouse_up(self, event, data):
        self.dragger.release()

    def handle_mouse_leave(self):
        self.dragger.release()

    def guidance_text(self) -> str:
        return ("Harmonics Mode\n"
                "- Click & drag to generate harmonic lines\n"
                "- Drag existing harmonic lines to adjust spacing intervals\n"
                "- Manually add harmonic lines using [+ Manual] button\n"
                "- Right-click a harmonic line to delete its set")

    def reset_state(self):
        for hs in self.host.store.harmonic_sets():
            self.host.remove_harmonic_set(hs.id)

    # ---- operations ----------------------------------------------------------------
    def add_harmonic_set(self, anchor_time: float, spacing: float,
                         color: Optional[str] = None) -> HarmonicSet:
        color = color or self.host.selected_color or self.host.next_harmonic_color()
        return self.host.store.add_harmonic_set(
            HarmonicSet(anchor_time=anchor_time, spacing=spacing, color=color))

    def add_manual(self, spacing: float, anchor_time: Optional[float] = None) -> HarmonicSet:
        """
        Add a ladder from typed values.

        Raises ValueError when ``spacing`` is below the configured minimum.
        Without an anchor, the cursor time is used, or the middle of the
        time range when the pointer is off the image.
        """
        spacing = float(spacing)
        minimum = config.get("harmonic_min_spacing")
        if spacing < minimum:
            raise ValueError(f"Harmonic spacing must be at least {minimum}Hz, got {spacing}")
        if anchor_time is None:
            cursor = self.host.cursor
            if cursor is not None:
                anchor_time = cursor.time
            else:
                cfg = self.host.config
                anchor_time = (cfg.time_min + cfg.time_max) / 2
        logger.info(f"Manual harmonic set: spacing={spacing}Hz anchor={anchor_time:.3f}s")
        return self.add_harmonic_set(anchor_time, spacing)
