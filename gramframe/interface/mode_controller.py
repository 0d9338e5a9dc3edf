"""
Finite state machine over the interaction modes.

Exactly one mode is active. ``transition`` is the only way to change it and
runs the same teardown/activate sequence every time, so drag state and
selectors never leak from one mode into the next.
"""
from __future__ import annotations

import logging
from typing import Optional

from ..models import Mode
from ..modes import PointerEvent, check_complete, create_mode, mode_class

logger = logging.getLogger(__name__)


class ModeController:
    """
    Owns one instance of every mode and routes pointer events to the active one.

    Parameters
    ----------
    host : GramFrame
        The engine that owns the transform, store and viewport the modes act on.
    initial : Mode, default Mode.ANALYSIS
    """

    def __init__(self, host, initial: Mode = Mode.ANALYSIS):
        check_complete()
        self.host = host
        self.modes = {m: create_mode(m, host) for m in Mode}
        self.current: Mode = Mode.from_key(initial)
        self.previous: Optional[Mode] = None
        self.active.activate()

    @staticmethod
    def initial_state() -> dict:
        """Merged ``initial_state()`` of every mode that defines one."""
        state = {}
        for m in Mode:
            init = getattr(mode_class(m), "initial_state", None)
            if callable(init):
                state.update(init())
        return state

    @property
    def active(self):
        return self.modes[self.current]

    def mode(self, key):
        return self.modes[Mode.from_key(key)]

    # ---- transitions -------------------------------------------------------------
    def transition(self, target) -> bool:
        """
        Switch to ``target``.

        Returns False when the switch is refused (Pan while unzoomed).
        """
        target = Mode.from_key(target)
        host = self.host
        if target is Mode.PAN and not host.viewport_controller.is_zoomed:
            logger.info("Pan mode refused: view is not zoomed")
            return False
        if target is self.current:
            return True

        old = self.active
        old.cleanup()
        old.deactivate()

        self.previous, self.current = self.current, target
        host.drag.reset()
        new = self.active
        new.activate()

        host.set_cursor(new.cursor)
        host.guidance = new.guidance_text()
        logger.info(f"Mode changed: {self.previous.value} -> {target.value}")
        host.refresh()
        return True

    def on_viewport_changed(self):
        """Leave Pan for the previous mode once the view is no longer zoomed."""
        if self.current is Mode.PAN and not self.host.viewport_controller.is_zoomed:
            fallback = self.previous if self.previous not in (None, Mode.PAN) else Mode.ANALYSIS
            logger.info(f"View unzoomed while panning; returning to {fallback.value}")
            self.transition(fallback)

    # ---- pointer dispatch ----------------------------------------------------------
    def mouse_down(self, event: PointerEvent):
        data = self.host.update_cursor(event)
        self.active.handle_mouse_down(event, data)

    def mouse_move(self, event: PointerEvent):
        data = self.host.update_cursor(event)
        self.active.handle_mouse_move(event, data)

    def mouse_up(self, event: PointerEvent):
        data = self.host.update_cursor(event)
        self.active.handle_mouse_up(event, data)
        self.host.drag.reset()

    def mouse_leave(self):
        self.host.clear_cursor()
        self.active.handle_mouse_leave()
        self.host.drag.reset()

    def reset_active(self):
        self.active.reset_state()
