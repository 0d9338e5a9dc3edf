"""
Measurement features placed on the spectrogram, plus the ephemeral cursor,
selection and drag records that accompany them.
"""
from __future__ import annotations

import math
import random
import string
import time as _time
from dataclasses import dataclass, field
from typing import Optional

from .viewport import DataPoint


def _new_id(prefix: str) -> str:
    stamp = int(_time.time() * 1000)
    tail = "".join(random.choices(string.ascii_lowercase + string.digits, k=9))
    return f"{prefix}-{stamp}-{tail}"


def new_marker_id() -> str:
    return _new_id("marker")


def new_harmonic_id() -> str:
    return _new_id("harmonic")


@dataclass
class Marker:
    """
    A persistent single-point marker.

    Attributes
    ----------
    id : str
        Unique identifier (``marker-<ms>-<random>``).
    time : float
        Time in seconds.
    freq : float
        Frequency in Hz (after the rate divider).
    color : str
        Hex colour used for rendering.
    created_at : float
        Epoch seconds at creation.
    """
    time: float
    freq: float
    color: str = "#ff6b6b"
    id: str = field(default_factory=new_marker_id)
    created_at: float = field(default_factory=_time.time)


@dataclass
class HarmonicSet:
    """
    A ladder of harmonic lines at integer multiples of ``spacing``.

    The lines are drawn around ``anchor_time``. ``selected_harmonic_number``
    records which line was last grabbed, if any.
    """
    anchor_time: float
    spacing: float
    color: str = "#ff6b6b"
    id: str = field(default_factory=new_harmonic_id)
    selected_harmonic_number: Optional[int] = None

    def __post_init__(self):
        if self.spacing <= 0:
            raise ValueError(f"Harmonic spacing must be > 0, got {self.spacing}")
        if self.selected_harmonic_number is not None and self.selected_harmonic_number < 1:
            raise ValueError("selected_harmonic_number must be >= 1")

    def harmonic_range(self, freq_min: float, freq_max: float) -> range:
        """Harmonic numbers whose frequency falls inside [freq_min, freq_max]."""
        first = max(1, math.ceil(freq_min / self.spacing))
        last = math.floor(freq_max / self.spacing)
        return range(first, last + 1)


@dataclass
class DopplerFit:
    """Doppler measurement: the f+ / f- pair, their midpoint and derived speed (m/s)."""
    f_plus: Optional[DataPoint] = None
    f_minus: Optional[DataPoint] = None
    f_zero: Optional[DataPoint] = None
    speed: Optional[float] = None

    @property
    def is_complete(self) -> bool:
        return self.f_plus is not None and self.f_minus is not None

    def points(self) -> dict:
        return {name: p for name, p in (("f_plus", self.f_plus),
                                         ("f_minus", self.f_minus),
                                         ("f_zero", self.f_zero)) if p is not None}


@dataclass(frozen=True)
class CursorPosition:
    """Last-known pointer position in both spaces."""
    screen_x: float
    screen_y: float
    time: float
    freq: float


@dataclass
class Selection:
    """Feature currently targeted by keyboard nudging."""
    kind: Optional[str] = None      # 'marker' | 'harmonic_set' | None
    id: Optional[str] = None
    index: Optional[int] = None

    def clear(self):
        self.kind = self.id = self.index = None

    @property
    def is_empty(self) -> bool:
        return self.id is None


@dataclass
class DragState:
    """
    Transient drag bookkeeping scoped to the active mode.

    Cleared on every mode transition and on mouse-up / mouse-leave.
    """
    start_position: Optional[DataPoint] = None
    start_screen: Optional[tuple] = None
    dragged_id: Optional[str] = None
    original_spacing: Optional[float] = None
    original_anchor_time: Optional[float] = None
    grabbed_harmonic: Optional[int] = None

    @property
    def is_dragging(self) -> bool:
        return self.start_position is not None

    def reset(self):
        self.start_position = None
        self.start_screen = None
        self.dragged_id = None
        self.original_spacing = None
        self.original_anchor_time = None
        self.grabbed_harmonic = None
