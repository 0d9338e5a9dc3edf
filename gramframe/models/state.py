"""
Mode enumeration and the immutable state snapshot published to listeners.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Optional

from .axis_config import AxisConfig
from .features import CursorPosition, DopplerFit, HarmonicSet, Marker, Selection
from .viewport import Viewport

STATE_VERSION = "1.0.0"


class Mode(Enum):
    ANALYSIS = "analysis"
    HARMONICS = "harmonics"
    DOPPLER = "doppler"
    ZOOM = "zoom"
    PAN = "pan"

    @classmethod
    def from_key(cls, key) -> "Mode":
        """Accept a ``Mode`` or its string value (case-insensitive)."""
        if isinstance(key, cls):
            return key
        try:
            return cls(str(key).strip().lower())
        except ValueError:
            raise KeyError(f"Unknown mode '{key}'") from None

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class StateSnapshot:
    """
    Read-only aggregate of the engine state at one instant.

    Listeners receive deep copies; mutating one has no effect on the engine.
    """
    instance_id: str
    mode: Mode
    previous_mode: Optional[Mode]
    viewport: Viewport
    config: AxisConfig
    rate: float
    cursor_position: Optional[CursorPosition]
    markers: tuple[Marker, ...] = ()
    harmonic_sets: tuple[HarmonicSet, ...] = ()
    doppler: DopplerFit = field(default_factory=DopplerFit)
    selection: Selection = field(default_factory=Selection)
    timestamp: float = 0.0
    version: str = STATE_VERSION

    def to_dict(self) -> dict:
        """Plain-dict view suitable for JSON export."""
        out = asdict(self)
        out["mode"] = self.mode.value
        out["previous_mode"] = self.previous_mode.value if self.previous_mode else None
        out["markers"] = [asdict(m) for m in self.markers]
        out["harmonic_sets"] = [asdict(h) for h in self.harmonic_sets]
        return out
