"""
Pan mode: drag the zoomed image around.
"""
from __future__ import annotations

import logging

from ..models import Mode
from .base import LEFT
from .registry import register_mode

logger = logging.getLogger(__name__)


@register_mode
class PanMode:
    MODE = Mode.PAN
    cursor = "grab"

    def __init__(self, host):
        self.host = host
        self._last = None   # rendered-pixel position of the previous move

    @property
    def is_dragging(self) -> bool:
        return self._last is not None

    def activate(self):
        logger.debug("Pan mode active")

    def deactivate(self):
        pass

    def cleanup(self):
        self._end()

    def _end(self):
        self._last = None
        self.host.drag.reset()
        self.host.set_cursor(self.cursor)

    def handle_mouse_down(self, event, data):
        if event.button != LEFT or not self.host.viewport_controller.is_zoomed:
            return
        self._last = (event.px, event.py)
        self.host.drag.start_position = data
        self.host.drag.start_screen = (event.x, event.y)
        self.host.set_cursor("grabbing")

    def handle_mouse_move(self, event, data):
        if self._last is None:
            return
        lx, ly = self._last
        self._last = (event.px, event.py)
        self.host.viewport_controller.pan(event.px - lx, event.py - ly)

    def handle_mouse_up(self, event, data):
        self._end()

    def handle_mouse_leave(self):
        self._end()

    def guidance_text(self) -> str:
        return ("Pan Mode\n"
                "- Drag to move the zoomed view\n"
                "- Reset zoom to return to the previous mode")

    def reset_state(self):
        self._end()
