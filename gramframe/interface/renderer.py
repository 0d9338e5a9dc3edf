"""
Projection of features into positioned visual primitives.

The renderer is agnostic to the graphics technology: it produces a list of
``Primitive`` records in surface coordinates and hands the complete list to
a ``RenderSurface``. Each pass rebuilds the list from scratch and the
surface replaces its contents by key, so repeated passes never duplicate or
drift.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

import numpy as np

from .. import config
from ..models import CursorPosition, DopplerFit, Mode, Selection
from .feature_store import PersistentFeatureStore
from .measurements import harmonic_line_extent
from .transform import CoordinateTransform

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Primitive:
    """
    One positioned shape on the surface.

    ``kind`` is one of ``image``, ``line``, ``circle``, ``rect`` or ``label``.
    Lines and rects use both corners; circles and labels use (x0, y0).
    """
    key: str
    kind: str
    x0: float
    y0: float
    x1: float = 0.0
    y1: float = 0.0
    group: str = ""
    color: str = "#ffffff"
    width: float = 1.0
    radius: float = 0.0
    text: str = ""
    dashed: bool = False
    interactive: bool = False


class RenderSurface(Protocol):
    def draw(self, primitives: Sequence[Primitive]) -> None: ...

    def clear(self) -> None: ...

    def set_cursor(self, name: str) -> None: ...


class RecordingSurface:
    """In-memory surface that keeps the last frame, keyed by primitive key."""

    def __init__(self):
        self.primitives: dict[str, Primitive] = {}
        self.cursor = "default"
        self.draw_count = 0

    def draw(self, primitives):
        self.primitives = {p.key: p for p in primitives}
        self.draw_count += 1

    def clear(self):
        self.primitives = {}

    def set_cursor(self, name):
        self.cursor = name

    def by_group(self, group: str) -> list[Primitive]:
        return [p for p in self.primitives.values() if p.group == group]


class FeatureRenderer:
    """Builds the primitive list for one frame and pushes it to the surface."""

    def __init__(self, surface: RenderSurface):
        self.surface = surface
        self.last_frame: tuple[Primitive, ...] = ()

    def render(self, transform: CoordinateTransform, store: PersistentFeatureStore, *,
               mode: Mode,
               doppler: Optional[DopplerFit] = None,
               cursor: Optional[CursorPosition] = None,
               selection: Optional[Selection] = None,
               preview_rect: Optional[tuple] = None) -> tuple[Primitive, ...]:
        self._transform = transform
        self._plot = transform.plot_rect()
        self._mode = mode
        self._selection = selection or Selection()

        prims: list[Primitive] = []
        prims.extend(self._image())
        prims.extend(self._axes())
        prims.extend(self._markers(store))
        prims.extend(self._harmonics(store))
        if doppler is not None:
            prims.extend(self._doppler(doppler))
        if preview_rect is not None:
            prims.extend(self._preview(preview_rect))
        if cursor is not None:
            prims.extend(self._cursor(cursor))

        frame = tuple(prims)
        self.last_frame = frame
        self.surface.draw(frame)
        logger.debug(f"Rendered {len(frame)} primitives in {mode.value} mode")
        return frame

    # ---- helpers -------------------------------------------------------------------
    def _inside(self, x, y) -> bool:
        x0, y0, x1, y1 = self._plot
        return x0 <= x <= x1 and y0 <= y <= y1

    def _is_selected(self, kind, fid) -> bool:
        return self._selection.kind == kind and self._selection.id == fid

    def _image(self):
        x0, y0, x1, y1 = self._transform.image_rect()
        return [Primitive("image", "image", x0, y0, x1, y1, group="image")]

    def _axes(self, ticks: int = 6):
        """Tick labels along the bottom (frequency) and left (time) margins."""
        b = self._transform.visible_data_bounds()
        x0, y0, x1, y1 = self._plot
        out = []
        for i, freq in enumerate(np.linspace(b["freq_min"], b["freq_max"], ticks)):
            p = self._transform.data_to_screen(b["time_min"], freq)
            out.append(Primitive(f"axis:freq:{i}", "label", p.x, y1 + 14, text=f"{freq:.4g}",
                                 group="axes", color="#dddddd"))
        for i, t in enumerate(np.linspace(b["time_min"], b["time_max"], ticks)):
            p = self._transform.data_to_screen(t, b["freq_min"])
            out.append(Primitive(f"axis:time:{i}", "label", x0 - 6, p.y, text=f"{t:.3g}",
                                 group="axes", color="#dddddd"))
        return out

    def _markers(self, store):
        size = config.get("marker_size") / 2
        live = self._mode is Mode.ANALYSIS
        out = []
        for m in store.markers():
            p = self._transform.data_to_screen(m.time, m.freq)
            if not self._inside(p.x, p.y):
                continue
            width = 3.0 if self._is_selected("marker", m.id) else 2.0
            out.append(Primitive(f"marker:{m.id}:h", "line", p.x - size, p.y, p.x + size, p.y,
                                 group="analysis", color=m.color, width=width, interactive=live))
            out.append(Primitive(f"marker:{m.id}:v", "line", p.x, p.y - size, p.x, p.y + size,
                                 group="analysis", color=m.color, width=width, interactive=live))
            out.append(Primitive(f"marker:{m.id}:dot", "circle", p.x, p.y, radius=3.0,
                                 group="analysis", color=m.color, interactive=live))
        return out

    def _harmonics(self, store):
        t = self._transform
        bounds = t.visible_data_bounds()
        time_range = t.config.time_range
        x0, y0, x1, y1 = self._plot
        live = self._mode is Mode.HARMONICS
        out = []
        for hs in store.harmonic_sets():
            start, end = harmonic_line_extent(hs.anchor_time, time_range)
            width = 3.0 if self._is_selected("harmonic_set", hs.id) else 2.0
            for n in hs.harmonic_range(bounds["freq_min"], bounds["freq_max"]):
                freq = n * hs.spacing
                top = t.data_to_screen(end, freq)
                bottom = t.data_to_screen(start, freq)
                ya, yb = max(top.y, y0), min(bottom.y, y1)
                if ya > yb or not (x0 <= top.x <= x1):
                    continue
                out.append(Primitive(f"harmonic:{hs.id}:{n}", "line", top.x, ya, top.x, yb,
                                     group="harmonics", color=hs.color, width=width,
                                     interactive=live))
                out.append(Primitive(f"harmonic:{hs.id}:{n}:label", "label", top.x, ya,
                                     text=str(n), group="harmonics", color=hs.color,
                                     interactive=live))
        return out

    def _doppler(self, fit: DopplerFit):
        t = self._transform
        live = self._mode is Mode.DOPPLER
        labels = {"f_plus": "f+", "f_minus": "f-", "f_zero": "f₀"}
        colors = {"f_plus": "#ff6b6b", "f_minus": "#45b7d1", "f_zero": "#ffc93c"}
        out = []
        pts = {}
        for name, p in fit.points().items():
            s = t.data_to_screen(p.time, p.freq)
            pts[name] = s
            if not self._inside(s.x, s.y):
                continue
            out.append(Primitive(f"doppler:{name}", "circle", s.x, s.y, radius=5.0,
                                 group="doppler", color=colors[name], interactive=live))
            out.append(Primitive(f"doppler:{name}:label", "label", s.x + 6, s.y - 6,
                                 text=labels[name], group="doppler", color=colors[name],
                                 interactive=live))
        if "f_plus" in pts and "f_minus" in pts:
            a, b = pts["f_minus"], pts["f_plus"]
            out.append(Primitive("doppler:curve", "line", a.x, a.y, b.x, b.y, group="doppler",
                                 color="#ff0000", dashed=True, interactive=live))
        return out

    def _preview(self, rect):
        sx0, sy0, sx1, sy1 = rect
        return [Primitive("zoom:preview", "rect", min(sx0, sx1), min(sy0, sy1),
                          max(sx0, sx1), max(sy0, sy1), group="zoom", color="#ffffff",
                          dashed=True, interactive=self._mode is Mode.ZOOM)]

    def _cursor(self, cursor: CursorPosition):
        p = self._transform.data_to_screen(cursor.time, cursor.freq)
        if not self._inside(p.x, p.y):
            return []
        x0, y0, x1, y1 = self._plot
        return [
            Primitive("cursor:v", "line", p.x, y0, p.x, y1, group="cursor",
                      color="#00ff00", width=1.0),
            Primitive("cursor:h", "line", x0, p.y, x1, p.y, group="cursor",
                      color="#00ff00", width=1.0),
        ]
