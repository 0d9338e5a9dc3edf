"""
GramFrame engine: one interactive spectrogram.

Ties together the coordinate transform, viewport controller, feature store,
renderer, mode controller and state notifier. All mutation happens inside
synchronous event handlers; every change ends with a render pass followed by
a snapshot published to listeners.

Typical usage
-------------
::

    frame = GramFrame({"image_url": "gram.png", "time_min": 0, "time_max": 60,
                       "freq_min": 0, "freq_max": 100}, 800, 400)
    frame.add_state_listener(print)
    frame.mouse_down(440, 240)
    frame.transition(Mode.HARMONICS)
"""
from __future__ import annotations

import logging
import time as _time
import uuid
from contextlib import contextmanager
from dataclasses import replace
from typing import Mapping, Optional, Union

from . import config
from .interface.feature_store import PersistentFeatureStore
from .interface.keyboard import KeyboardNudger
from .interface.mode_controller import ModeController
from .interface.notifier import GLOBAL_LISTENERS, ListenerRegistry, StateNotifier
from .interface.renderer import FeatureRenderer, RecordingSurface, RenderSurface
from .interface.transform import CoordinateTransform
from .interface.viewport_controller import ViewportController
from .models import (
    AxisConfig,
    CursorPosition,
    DataPoint,
    DragState,
    Margins,
    Marker,
    Mode,
    Selection,
    StateSnapshot,
)
from .modes import PointerEvent

logger = logging.getLogger(__name__)


class GramFrame:
    """
    Interaction engine for one spectrogram image.

    Parameters
    ----------
    axis_config : AxisConfig | Mapping
        Image reference and axis bounds. A mapping is validated through
        ``AxisConfig.from_dict``; malformed input raises ``ConfigError``.
    natural_width, natural_height : int
        Natural pixel size of the image.
    surface : RenderSurface | None
        Where primitives are drawn. Defaults to an in-memory RecordingSurface.
    margins : Margins | None
        Axis margins; defaults come from ``config.con_dict``.
    registry : ListenerRegistry | None
        Process-wide listener registry whose listeners are adopted at
        construction. Defaults to ``GLOBAL_LISTENERS``.
    rate : float, default 1.0
        Frequency divider.
    """

    def __init__(self, axis_config: Union[AxisConfig, Mapping], natural_width: int,
                 natural_height: int, surface: Optional[RenderSurface] = None, *,
                 margins: Optional[Margins] = None,
                 registry: Optional[ListenerRegistry] = GLOBAL_LISTENERS,
                 rate: float = 1.0):
        self.config = (axis_config if isinstance(axis_config, AxisConfig)
                       else AxisConfig.from_dict(axis_config))
        self.instance_id = uuid.uuid4().hex[:12]
        self._rate = 1.0
        self._batch_depth = 0
        self._dirty = False
        self._ready = False

        self.viewport_controller = ViewportController(natural_width, natural_height, margins,
                                                      on_change=self._on_viewport_changed)
        self.transform = CoordinateTransform(self.viewport_controller.viewport, self.config)
        self.store = PersistentFeatureStore(on_change=self.refresh)
        self.surface = surface if surface is not None else RecordingSurface()
        self.renderer = FeatureRenderer(self.surface)
        self.notifier = StateNotifier(registry, snapshot_fn=self.snapshot)

        self.drag = DragState()
        self.selection = Selection()
        self.cursor: Optional[CursorPosition] = None
        self.cursor_style = "default"
        self.preview_rect = None
        self.selected_color: Optional[str] = None
        self.guidance = ""
        self._color_index = 0

        self.mode_state = ModeController.initial_state()
        self.modes = ModeController(self)
        self.keyboard = KeyboardNudger(self)
        if rate != 1.0:
            self.set_rate(rate)

        self.set_cursor(self.modes.active.cursor)
        self.guidance = self.modes.active.guidance_text()
        self._ready = True
        logger.info(f"GramFrame {self.instance_id} ready: {natural_width}x{natural_height} "
                    f"image '{self.config.image_url}'")
        self.refresh()

    # ---- derived state -------------------------------------------------------------
    @property
    def mode(self) -> Mode:
        return self.modes.current

    @property
    def viewport(self):
        return self.viewport_controller.viewport

    @property
    def rate(self) -> float:
        return self._rate

    @property
    def doppler(self):
        return self.mode_state["doppler"]

    @property
    def freq_bounds(self) -> tuple[float, float]:
        """Full frequency range after the rate divider."""
        return self.config.freq_min / self._rate, self.config.freq_max / self._rate

    def _rebuild_transform(self):
        self.transform = CoordinateTransform(self.viewport_controller.viewport,
                                             self.config, self._rate)

    # ---- render / notify -------------------------------------------------------------
    @contextmanager
    def batch(self):
        """Defer render and notify until the outermost batch exits."""
        self._batch_depth += 1
        try:
            yield self
        finally:
            self._batch_depth -= 1
            if self._batch_depth == 0 and self._dirty:
                self.refresh()

    def refresh(self):
        """Render every feature and publish a snapshot."""
        if not self._ready:
            return
        if self._batch_depth:
            self._dirty = True
            return
        self._dirty = False
        self.renderer.render(self.transform, self.store, mode=self.mode,
                             doppler=self.doppler, cursor=self.cursor,
                             selection=self.selection, preview_rect=self.preview_rect)
        self.notifier.notify(self.snapshot())

    def snapshot(self) -> StateSnapshot:
        return StateSnapshot(
            instance_id=self.instance_id,
            mode=self.mode,
            previous_mode=self.modes.previous,
            viewport=self.viewport,
            config=self.config,
            rate=self._rate,
            cursor_position=self.cursor,
            markers=self.store.markers(),
            harmonic_sets=self.store.harmonic_sets(),
            doppler=replace(self.doppler),
            selection=replace(self.selection),
            timestamp=_time.time(),
        )

    def _on_viewport_changed(self, viewport):
        self._rebuild_transform()
        if not self._ready:
            return
        with self.batch():
            self.modes.on_viewport_changed()
            self._dirty = True

    def set_cursor(self, name: str):
        self.cursor_style = name
        self.surface.set_cursor(name)

    # ---- pointer --------------------------------------------------------------------
    def _event(self, x, y, button=1, pixel_x=None, pixel_y=None, shift=False) -> PointerEvent:
        return PointerEvent(float(x), float(y), button, pixel_x, pixel_y, shift)

    def update_cursor(self, event: PointerEvent) -> DataPoint:
        data = self.transform.screen_to_data(event.x, event.y)
        if self.transform.contains(event.x, event.y):
            self.cursor = CursorPosition(event.x, event.y, data.time, data.freq)
        else:
            self.cursor = None
        self._dirty = True
        return data

    def clear_cursor(self):
        self.cursor = None
        self._dirty = True

    def mouse_down(self, x, y, button=1, **kw):
        with self.batch():
            self.modes.mouse_down(self._event(x, y, button, **kw))

    def mouse_move(self, x, y, button=1, **kw):
        with self.batch():
            self.modes.mouse_move(self._event(x, y, button, **kw))

    def mouse_up(self, x, y, button=1, **kw):
        with self.batch():
            self.modes.mouse_up(self._event(x, y, button, **kw))

    def mouse_leave(self):
        with self.batch():
            self.modes.mouse_leave()

    def key_press(self, key: str, shift: bool = False) -> bool:
        return self.keyboard.handle_key(key, shift=shift)

    # ---- modes ----------------------------------------------------------------------
    def transition(self, target) -> bool:
        return self.modes.transition(target)

    # ---- viewport ---------------------------------------------------------------------
    def set_zoom(self, level, center_x, center_y):
        return self.viewport_controller.set_zoom(level, center_x, center_y)

    def zoom_in(self):
        return self.viewport_controller.zoom_in()

    def zoom_out(self):
        return self.viewport_controller.zoom_out()

    def reset_zoom(self):
        return self.viewport_controller.reset_zoom()

    def pan(self, dx_px, dy_px) -> bool:
        return self.viewport_controller.pan(dx_px, dy_px)

    def resize(self, width_px, height_px):
        self.viewport_controller.resize(width_px, height_px)

    def set_rate(self, rate: float):
        rate = float(rate)
        if not rate > 0:
            raise ValueError(f"Rate must be positive, got {rate}")
        self._rate = rate
        self._rebuild_transform()
        logger.info(f"Rate set to {rate}")
        self.refresh()

    # ---- features -----------------------------------------------------------------------
    def add_marker(self, time: float, freq: float, color: Optional[str] = None) -> Marker:
        color = color or self.selected_color or config.get("marker_color")
        return self.store.add_marker(Marker(time=time, freq=freq, color=color))

    def remove_marker(self, marker_id: str):
        with self.batch():
            if self.selection.kind == "marker" and self.selection.id == marker_id:
                self.selection.clear()
            return self.store.remove_marker(marker_id)

    def add_harmonic_set(self, anchor_time: float, spacing: float, color: Optional[str] = None):
        return self.modes.mode(Mode.HARMONICS).add_harmonic_set(anchor_time, spacing, color)

    def add_manual_harmonic(self, spacing: float, anchor_time: Optional[float] = None):
        return self.modes.mode(Mode.HARMONICS).add_manual(spacing, anchor_time)

    def remove_harmonic_set(self, set_id: str):
        with self.batch():
            if self.selection.kind == "harmonic_set" and self.selection.id == set_id:
                self.selection.clear()
            return self.store.remove_harmonic_set(set_id)

    def next_harmonic_color(self) -> str:
        colors = config.harmonic_colors
        color = colors[self._color_index % len(colors)]
        self._color_index += 1
        return color

    def set_selected_color(self, color: Optional[str]):
        self.selected_color = color

    def select(self, kind: str, feature_id: str):
        if kind == "marker":
            items = self.store.markers()
        elif kind == "harmonic_set":
            items = self.store.harmonic_sets()
        else:
            raise ValueError(f"Unknown selection kind '{kind}'")
        ids = [f.id for f in items]
        if feature_id not in ids:
            raise KeyError(f"No {kind} with id '{feature_id}'")
        self.selection.kind = kind
        self.selection.id = feature_id
        self.selection.index = ids.index(feature_id)
        self.refresh()

    def clear_selection(self):
        self.selection.clear()
        self.refresh()

    # ---- listeners ------------------------------------------------------------------------
    def add_state_listener(self, listener, immediate: bool = True) -> bool:
        return self.notifier.add_listener(listener, immediate=immediate)

    def remove_state_listener(self, listener) -> bool:
        return self.notifier.remove_listener(listener)

    def teardown(self):
        """Drop listeners and end any in-flight interaction."""
        self.modes.active.cleanup()
        self.drag.reset()
        self.notifier.teardown()
        self._ready = False
        logger.info(f"GramFrame {self.instance_id} torn down")


def hot_reload(frame: GramFrame, registry: Optional[ListenerRegistry] = None) -> GramFrame:
    """
    Rebuild an engine in place of ``frame``, keeping its global listeners.

    The registry is drained and refilled around the rebuild so the new
    instance adopts exactly the listeners that were registered before.
    """
    registry = registry if registry is not None else (frame.notifier.registry or GLOBAL_LISTENERS)
    saved = registry.listeners()
    registry.clear()
    frame.teardown()
    for listener in saved:
        registry.add(listener)
    vp = frame.viewport
    fresh = GramFrame(frame.config, vp.natural_width, vp.natural_height, frame.surface,
                      margins=vp.margins, registry=registry, rate=frame.rate)
    logger.info(f"Hot reload: {frame.instance_id} -> {fresh.instance_id} "
                f"with {len(saved)} global listener(s)")
    return fresh
