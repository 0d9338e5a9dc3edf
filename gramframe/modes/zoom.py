"""
Zoom mode: drag a rectangle to zoom into it, click to zoom in about a point,
right-click to zoom out.
"""
from __future__ import annotations

import logging

from .. import config
from ..interface.measurements import screen_distance
from ..models import Mode
from .base import LEFT, RIGHT
from .registry import register_mode

logger = logging.getLogger(__name__)


@register_mode
class ZoomMode:
    MODE = Mode.ZOOM
    cursor = "zoom-in"

    def __init__(self, host):
        self.host = host
        self._anchor = None

    def activate(self):
        logger.debug("Zoom mode active")

    def deactivate(self):
        pass

    def cleanup(self):
        self._cancel()

    def _cancel(self):
        if self._anchor is None:
            return
        self._anchor = None
        self.host.preview_rect = None
        self.host.refresh()

    def handle_mouse_down(self, event, data):
        if event.button == RIGHT:
            self.host.viewport_controller.zoom_out()
            return
        if event.button != LEFT:
            return
        self._anchor = (event.x, event.y)
        self.host.drag.start_position = data
        self.host.drag.start_screen = self._anchor

    def handle_mouse_move(self, event, data):
        if self._anchor is None:
            return
        ax, ay = self._anchor
        self.host.preview_rect = (ax, ay, event.x, event.y)
        self.host.refresh()

    def handle_mouse_up(self, event, data):
        if self._anchor is None:
            return
        ax, ay = self._anchor
        self._anchor = None
        self.host.preview_rect = None
        self.host.drag.reset()
        t = self.host.transform
        if screen_distance(ax, ay, event.x, event.y) < config.get("click_threshold"):
            nx, ny = t.screen_to_normalized(event.x, event.y)
            self.host.viewport_controller.zoom_about(nx, ny)
            return
        nx0, ny0 = t.screen_to_normalized(ax, ay)
        nx1, ny1 = t.screen_to_normalized(event.x, event.y)
        try:
            self.host.viewport_controller.zoom_to_normalized_rect(nx0, ny0, nx1, ny1)
        except ValueError as e:
            # rectangle collapsed against an image edge
            logger.info(f"Zoom selection ignored: {e}")
            self.host.refresh()

    def handle_mouse_leave(self):
        self._cancel()
        self.host.drag.reset()

    def guidance_text(self) -> str:
        return ("Zoom Mode\n"
                "- Select an area to zoom into, or use zoom controls\n"
                "- Click to zoom in about a point\n"
                "- Right-click to zoom out")

    def reset_state(self):
        self._cancel()
        self.host.viewport_controller.reset_zoom()
