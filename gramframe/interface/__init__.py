"""
GramFrame Interface Package
===========================

This package contains the interaction layer between pointer/keyboard
gestures and the spectrogram state.

It provides:

- ``CoordinateTransform``
  Pure forward/inverse mapping between surface coordinates and
  (time, frequency) for one viewport.

- ``ViewportController``
  Owns zoom level and pan centre; clamps every change and never lets a
  resize alter them.

- ``PersistentFeatureStore`` and ``FeatureRenderer``
  Mode-independent storage of markers and harmonic sets, and their
  projection into positioned primitives on a ``RenderSurface``.

- ``StateNotifier`` and ``ListenerRegistry``
  Deep-copied snapshot fan-out with per-listener fault isolation.

- ``ToolDispatcher``
  A small router that binds canvas callbacks to the engine, with
  temporary handlers taking precedence over permanent ones.

- ``KeyboardNudger`` and ``measurements``
  Arrow-key fine positioning, hit-test tolerances, harmonic drag
  arithmetic and the Doppler speed estimate.

Design Notes
------------
The mode state machine lives in :mod:`gramframe.interface.mode_controller`
and is imported explicitly; it depends on :mod:`gramframe.modes`, which in
turn uses the helpers exported here.

Typical Usage
-------------
The main window wraps its canvas in a ``ToolDispatcher`` and binds it to an
engine::

    disp = ToolDispatcher(canvas)
    disp.bind_engine(frame)
"""

from .feature_store import PersistentFeatureStore
from .keyboard import KeyboardNudger
from .notifier import GLOBAL_LISTENERS, ListenerRegistry, StateNotifier
from .renderer import FeatureRenderer, Primitive, RecordingSurface, RenderSurface
from .tool_dispatcher import ToolDispatcher
from .transform import CoordinateTransform
from .viewport_controller import ViewportController

__all__ = [
    "CoordinateTransform",
    "FeatureRenderer",
    "GLOBAL_LISTENERS",
    "KeyboardNudger",
    "ListenerRegistry",
    "PersistentFeatureStore",
    "Primitive",
    "RecordingSurface",
    "RenderSurface",
    "StateNotifier",
    "ToolDispatcher",
    "ViewportController",
]
