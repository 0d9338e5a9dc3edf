"""
GramFrame application package.

Interactive measurement overlay for static spectrogram images: place and
drag markers, harmonic ladders and a Doppler fit on an image whose time and
frequency bounds are known, with zoom and pan.

Subpackages
-----------
- models
    Plain data structures: AxisConfig, Viewport, Marker, HarmonicSet,
    DopplerFit, Mode and the StateSnapshot delivered to listeners.

- interface
    The interaction layer: coordinate transform, viewport controller,
    feature store and renderer, state notifier, keyboard nudging and the
    ToolDispatcher that binds canvas events to the engine.

- modes
    The five interaction modes (Analysis, Harmonics, Doppler, Zoom, Pan),
    registered in an enum-keyed table.

- ui
    Qt widgets: the matplotlib SpectrogramCanvas, the mode ribbon, side
    panels and dialogs.

Other modules
-------------
- config
    Single in-memory configuration dictionary (con_dict) with interaction
    defaults and helpers to read and mutate it.

- engine
    ``GramFrame``, the headless engine that owns one spectrogram's state,
    and ``hot_reload``.

- main
    Entry point defining GramFrameWindow and the `main()` function.

Typical usage
-------------
Launch the desktop tool:

    python -m gramframe.main gram.png --time-max 60 --freq-max 100

Or drive the engine headless:

    from gramframe.engine import GramFrame
    from gramframe.models import Mode
"""

__version__ = "0.1.0"
