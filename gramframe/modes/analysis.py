"""
Analysis mode: place, drag and delete single-point markers.
"""
from __future__ import annotations

import logging

from .. import config
from ..interface.measurements import data_tolerance, nearest_within
from ..models import Marker, Mode
from .base import LEFT, RIGHT, DragHandler
from .registry import register_mode

logger = logging.getLogger(__name__)


@register_mode
class AnalysisMode:
    MODE = Mode.ANALYSIS
    cursor = "crosshair"

    def __init__(self, host):
        self.host = host
        self.dragger = DragHandler(host, self._find_marker, self._start_drag,
                                   self._update_drag, idle_cursor=self.cursor)

    # ---- drag callbacks ----------------------------------------------------------
    def _find_marker(self, event, data):
        tol = data_tolerance(self.host.transform, config.get("analysis_pixel_radius"))
        return nearest_within(data, self.host.store.markers(), tol)

    def _start_drag(self, marker, event, data):
        self.host.drag.dragged_id = marker.id
        self.host.select("marker", marker.id)

    def _update_drag(self, marker, event, data):
        self.host.store.update_marker(marker.id, time=data.time, freq=data.freq)

    # ---- lifecycle ---------------------------------------------------------------
    def activate(self):
        logger.debug("Analysis mode active")

    def deactivate(self):
        pass

    def cleanup(self):
        self.dragger.release()

    # ---- pointer -------------------------------------------------------------------
    def handle_mouse_down(self, event, data):
        if event.button == RIGHT:
            marker = self._find_marker(event, data)
            if marker is not None:
                self.host.remove_marker(marker.id)
            return
        if event.button != LEFT:
            return
        if self.dragger.press(event, data):
            return
        color = self.host.selected_color or config.get("marker_color")
        marker = self.host.store.add_marker(Marker(time=data.time, freq=data.freq, color=color))
        self.host.select("marker", marker.id)

    def handle_mouse_move(self, event, data):
        if not self.dragger.move(event, data):
            self.dragger.hover(event, data)

    def handle_mouse_up(self, event, data):
        self.dragger.release()

    def handle_mouse_leave(self):
        self.dragger.release()

    def guidance_text(self) -> str:
        return ("Analysis Mode\n"
                "- Click to place persistent markers\n"
                "- Drag existing markers to reposition them\n"
                "- Right-click markers to delete them\n"
                "- Click table row + arrow keys (Shift for larger steps)")

    def reset_state(self):
        for m in self.host.store.markers():
            self.host.remove_marker(m.id)
