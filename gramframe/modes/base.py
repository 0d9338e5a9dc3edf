"""
Shared pieces for interaction modes: the pointer event record, the
capability protocol every mode satisfies, and a composable drag helper.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Optional, Protocol

from ..models import DataPoint, Mode

logger = logging.getLogger(__name__)

LEFT = 1
RIGHT = 3


@dataclass(frozen=True)
class PointerEvent:
    """
    A pointer event on the spectrogram surface.

    ``x``/``y`` are surface units (natural image size plus margins).
    ``pixel_x``/``pixel_y`` are rendered-pixel positions and fall back to the
    surface position when the host does not supply them.
    """
    x: float
    y: float
    button: int = LEFT
    pixel_x: Optional[float] = None
    pixel_y: Optional[float] = None
    shift: bool = False

    @property
    def px(self) -> float:
        return self.x if self.pixel_x is None else self.pixel_x

    @property
    def py(self) -> float:
        return self.y if self.pixel_y is None else self.pixel_y


class InteractionMode(Protocol):
    """Capability set each mode implements. Modes are looked up by ``MODE``."""

    MODE: ClassVar[Mode]
    cursor: ClassVar[str]

    def activate(self) -> None: ...

    def deactivate(self) -> None: ...

    def cleanup(self) -> None: ...

    def handle_mouse_down(self, event: PointerEvent, data: DataPoint) -> None: ...

    def handle_mouse_move(self, event: PointerEvent, data: DataPoint) -> None: ...

    def handle_mouse_up(self, event: PointerEvent, data: DataPoint) -> None: ...

    def handle_mouse_leave(self) -> None: ...

    def guidance_text(self) -> str: ...

    def reset_state(self) -> None: ...


class DragHandler:
    """
    Drag bookkeeping shared by feature-editing modes.

    The owning mode supplies the callbacks:

    - ``find_target(event, data)`` returns the feature under the pointer or None
    - ``on_start(target, event, data)`` runs once when the drag begins
    - ``on_update(target, event, data)`` runs on every move while dragging
    - ``on_end(target)`` runs on release (optional)

    Drag fields live on the host's ``DragState`` and are reset on release.
    """

    def __init__(self, host, find_target: Callable, on_start: Callable,
                 on_update: Callable, on_end: Optional[Callable] = None,
                 idle_cursor: str = "crosshair"):
        self.host = host
        self.find_target = find_target
        self.on_start = on_start
        self.on_update = on_update
        self.on_end = on_end
        self.idle_cursor = idle_cursor
        self.target: Any = None

    @property
    def active(self) -> bool:
        return self.target is not None

    def begin(self, target, event: PointerEvent, data: DataPoint):
        """Start dragging a known target (used right after creating a feature)."""
        self.target = target
        drag = self.host.drag
        drag.start_position = data
        drag.start_screen = (event.x, event.y)
        self.on_start(target, event, data)
        self.host.set_cursor("grabbing")

    def press(self, event: PointerEvent, data: DataPoint) -> bool:
        target = self.find_target(event, data)
        if target is None:
            return False
        self.begin(target, event, data)
        return True

    def move(self, event: PointerEvent, data: DataPoint) -> bool:
        if self.target is None:
            return False
        self.on_update(self.target, event, data)
        return True

    def hover(self, event: PointerEvent, data: DataPoint):
        over = self.find_target(event, data) is not None
        self.host.set_cursor("grab" if over else self.idle_cursor)

    def release(self) -> bool:
        if self.target is None:
            return False
        target, self.target = self.target, None
        if self.on_end is not None:
            self.on_end(target)
        self.host.drag.reset()
        self.host.set_cursor(self.idle_cursor)
        return True
