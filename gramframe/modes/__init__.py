"""
GramFrame interaction modes.

Each mode is a plain class satisfying the ``InteractionMode`` protocol and
registered against a ``Mode`` member with ``@register_mode``. Importing this
package registers all five:

- AnalysisMode   : single-point markers
- HarmonicsMode  : harmonic ladders with grabbed-harmonic drag
- DopplerMode    : f+ / f- pair and speed estimate
- ZoomMode       : rectangle and point zoom
- PanMode        : drag the zoomed view

Typical usage
-------------
The ModeController builds one instance per mode through the registry::

    from gramframe.modes import create_mode
    mode = create_mode(Mode.HARMONICS, host)
"""

from .base import LEFT, RIGHT, DragHandler, InteractionMode, PointerEvent
from .analysis import AnalysisMode
from .doppler import DopplerMode
from .harmonics import HarmonicsMode
from .pan import PanMode
from .registry import check_complete, create_mode, list_modes, mode_class, register_mode
from .zoom import ZoomMode

__all__ = [
    "AnalysisMode",
    "DopplerMode",
    "DragHandler",
    "HarmonicsMode",
    "InteractionMode",
    "LEFT",
    "PanMode",
    "PointerEvent",
    "RIGHT",
    "ZoomMode",
    "check_complete",
    "create_mode",
    "list_modes",
    "mode_class",
    "register_mode",
]
