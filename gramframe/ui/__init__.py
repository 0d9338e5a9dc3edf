"""
UI module for GramFrame.

Qt widgets that host the interaction engine on the desktop:

- SpectrogramCanvas:
    matplotlib canvas that shows the image, draws render primitives and
    forwards pointer/key/resize events through a ToolDispatcher.

- ModeRibbon:
    toolbar with one checkable action per interaction mode, zoom controls
    and tool buttons.

- ReadoutTable, FeatureTable, HarmonicTable:
    side panels that mirror each state snapshot.

- ManualHarmonicDialog, SettingsDialog, busy_cursor:
    small dialogs and helpers used by the main window.

Nothing in the engine depends on this package; it can be replaced by any
other host that implements the render surface protocol.
"""

from .canvas import SpectrogramCanvas
from .panels import FeatureTable, HarmonicTable, ReadoutTable
from .ribbon import ModeRibbon
from .util_windows import ManualHarmonicDialog, SettingsDialog, busy_cursor

__all__ = [
    "SpectrogramCanvas",
    "ModeRibbon",
    "ReadoutTable",
    "FeatureTable",
    "HarmonicTable",
    "ManualHarmonicDialog",
    "SettingsDialog",
    "busy_cursor",
]
