"""
GramFrame models package.

Plain data structures shared by the interaction engine and the Qt host.

Classes
-------
AxisConfig
    Image reference plus time/frequency bounds, validated at construction.
Viewport, Margins
    Zoom level, pan centre and the image geometry the transform is built on.
Marker, HarmonicSet, DopplerFit
    Measurement features placed by the user.
CursorPosition, Selection, DragState
    Ephemeral interaction records.
Mode, StateSnapshot
    The closed set of interaction modes and the read-only snapshot delivered
    to state listeners.

Notes
-----
Nothing in this package knows about Qt or matplotlib; every type can be
built and inspected headless.
"""

from .axis_config import AxisConfig, ConfigError
from .features import (
    CursorPosition,
    DopplerFit,
    DragState,
    HarmonicSet,
    Marker,
    Selection,
    new_harmonic_id,
    new_marker_id,
)
from .state import STATE_VERSION, Mode, StateSnapshot
from .viewport import DataPoint, Margins, ScreenPoint, Viewport

__all__ = [
    "AxisConfig",
    "ConfigError",
    "CursorPosition",
    "DataPoint",
    "DopplerFit",
    "DragState",
    "HarmonicSet",
    "Margins",
    "Marker",
    "Mode",
    "ScreenPoint",
    "Selection",
    "STATE_VERSION",
    "StateSnapshot",
    "Viewport",
    "new_harmonic_id",
    "new_marker_id",
]
