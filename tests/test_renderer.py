"""
Renderer tests: stable keys, idempotent passes and viewport culling.
"""
from gramframe.interface import (
    CoordinateTransform,
    FeatureRenderer,
    PersistentFeatureStore,
    RecordingSurface,
)
from gramframe.models import (
    AxisConfig,
    CursorPosition,
    HarmonicSet,
    Margins,
    Marker,
    Mode,
    Viewport,
)

from .conftest import PIXEL_CONFIG


def _setup(zoom=1.0, cx=0.5, cy=0.5):
    vp = Viewport(800, 400, Margins.uniform(0), zoom, cx, cy)
    t = CoordinateTransform(vp, AxisConfig.from_dict(PIXEL_CONFIG))
    surface = RecordingSurface()
    return t, FeatureRenderer(surface), surface


# ============================================================================
# IDEMPOTENCE
# ============================================================================

def test_repeated_render_produces_identical_frames():
    t, renderer, surface = _setup()
    store = PersistentFeatureStore()
    store.add_marker(Marker(time=50, freq=100, id="marker-a"))
    store.add_harmonic_set(HarmonicSet(anchor_time=50, spacing=100, id="harmonic-a"))

    first = renderer.render(t, store, mode=Mode.ANALYSIS)
    keys = set(surface.primitives)
    second = renderer.render(t, store, mode=Mode.ANALYSIS)

    assert first == second
    assert set(surface.primitives) == keys
    assert len(keys) == len(second)
    assert surface.draw_count == 2


def test_primitive_keys_follow_feature_ids():
    t, renderer, surface = _setup()
    store = PersistentFeatureStore()
    store.add_marker(Marker(time=50, freq=100, id="marker-a"))
    store.add_harmonic_set(HarmonicSet(anchor_time=50, spacing=100, id="harmonic-a"))
    renderer.render(t, store, mode=Mode.HARMONICS)

    assert {"marker:marker-a:h", "marker:marker-a:v", "marker:marker-a:dot"} <= set(surface.primitives)
    lines = [p for p in surface.by_group("harmonics") if p.kind == "line"]
    assert sorted(int(p.key.split(":")[-1]) for p in lines) == list(range(1, 9))
    assert all(p.interactive for p in lines)
    assert not surface.primitives["marker:marker-a:dot"].interactive


# ============================================================================
# CULLING AND PLACEMENT
# ============================================================================

def test_features_outside_the_view_are_not_drawn():
    t, renderer, surface = _setup(zoom=4.0)
    store = PersistentFeatureStore()
    store.add_marker(Marker(time=50, freq=10, id="far"))
    store.add_marker(Marker(time=50, freq=400, id="near"))
    renderer.render(t, store, mode=Mode.ANALYSIS)
    assert "marker:near:dot" in surface.primitives
    assert "marker:far:dot" not in surface.primitives


def test_marker_positions_track_zoom():
    t, renderer, surface = _setup()
    store = PersistentFeatureStore()
    store.add_marker(Marker(time=50, freq=500, id="m"))
    renderer.render(t, store, mode=Mode.ANALYSIS)
    assert surface.primitives["marker:m:dot"].x0 == 500.0

    t2, _, _ = _setup(zoom=2.0)
    renderer.render(t2, store, mode=Mode.ANALYSIS)
    # 0.5 + (0.625 - 0.5) * 2 of the width
    assert surface.primitives["marker:m:dot"].x0 == 600.0


def test_cursor_and_preview_are_transient():
    t, renderer, surface = _setup()
    store = PersistentFeatureStore()
    renderer.render(t, store, mode=Mode.ZOOM, cursor=CursorPosition(100, 100, 75, 100),
                    preview_rect=(10, 10, 50, 60))
    assert {"cursor:v", "cursor:h", "zoom:preview"} <= set(surface.primitives)
    renderer.render(t, store, mode=Mode.ZOOM)
    assert not surface.by_group("cursor")
    assert not surface.by_group("zoom")


def test_engine_renders_once_per_event(pixel_frame):
    before = pixel_frame.surface.draw_count
    pixel_frame.mouse_down(100, 200)
    pixel_frame.mouse_up(100, 200)
    assert pixel_frame.surface.draw_count == before + 2
