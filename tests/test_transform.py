"""
Coordinate transform tests: screen <-> (time, freq) under zoom, pan and rate.
"""
import math

import pytest

from gramframe.interface import CoordinateTransform
from gramframe.models import AxisConfig, Margins, Mode, Viewport

from .conftest import CENTRE_CONFIG


def _assert_close(actual, expected, tol=1e-9, label=""):
    assert math.isclose(actual, expected, abs_tol=tol), f"{label}: {actual} != {expected}"


def _transform(zoom=1.0, cx=0.5, cy=0.5, rate=1.0):
    vp = Viewport(800, 400, Margins.uniform(40), zoom, cx, cy)
    return CoordinateTransform(vp, AxisConfig.from_dict(CENTRE_CONFIG), rate)


# ============================================================================
# CENTRE OF THE IMAGE
# ============================================================================

def test_image_centre_maps_to_mid_range():
    p = _transform().screen_to_data(440, 240)
    _assert_close(p.time, 30.0, label="time")
    _assert_close(p.freq, 50.0, label="freq")


def test_centre_is_invariant_under_symmetric_zoom():
    for zoom in (2.0, 3.7, 10.0):
        p = _transform(zoom=zoom).screen_to_data(440, 240)
        _assert_close(p.time, 30.0, label=f"time@{zoom}")
        _assert_close(p.freq, 50.0, label=f"freq@{zoom}")


def test_click_in_analysis_mode_then_zoom(centre_frame):
    centre_frame.mouse_down(440, 240)
    centre_frame.mouse_up(440, 240)
    (marker,) = centre_frame.store.markers()
    _assert_close(marker.time, 30.0, label="time")
    _assert_close(marker.freq, 50.0, label="freq")

    centre_frame.set_zoom(2.0, 0.5, 0.5)
    centre_frame.mouse_down(440, 240)
    centre_frame.mouse_up(440, 240)
    assert centre_frame.mode is Mode.ANALYSIS
    _assert_close(centre_frame.cursor.time, 30.0, label="cursor time")
    _assert_close(centre_frame.cursor.freq, 50.0, label="cursor freq")
    # the re-click grabbed the existing marker rather than adding one
    assert len(centre_frame.store.markers()) == 1


# ============================================================================
# ROUND TRIP
# ============================================================================

@pytest.mark.parametrize("zoom,cx,cy", [(1.0, 0.5, 0.5), (2.0, 0.25, 0.75), (6.0, 0.9, 0.1)])
def test_data_to_screen_inverts_screen_to_data(zoom, cx, cy):
    t = _transform(zoom, cx, cy)
    bounds = t.visible_data_bounds()
    time = (bounds["time_min"] + bounds["time_max"]) / 2 + 0.01
    freq = (bounds["freq_min"] + bounds["freq_max"]) / 2 - 0.02
    s = t.data_to_screen(time, freq)
    back = t.screen_to_data(s.x, s.y)
    _assert_close(back.time, time, 1e-6, "time")
    _assert_close(back.freq, freq, 1e-6, "freq")


@pytest.mark.parametrize("zoom,cx,cy", [(1.0, 0.5, 0.5), (2.0, 0.25, 0.75), (6.0, 0.9, 0.1)])
def test_screen_points_round_trip(zoom, cx, cy):
    t = _transform(zoom, cx, cy)
    for x in (40, 150, 440, 730, 840):
        for y in (40, 130, 240, 350, 440):
            p = t.screen_to_data(x, y)
            s = t.data_to_screen(p.time, p.freq)
            _assert_close(s.x, x, 1e-6, f"x at ({x}, {y})")
            _assert_close(s.y, y, 1e-6, f"y at ({x}, {y})")


def test_time_axis_runs_upwards():
    t = _transform()
    top = t.screen_to_data(440, 40)
    bottom = t.screen_to_data(440, 440)
    _assert_close(top.time, 60.0)
    _assert_close(bottom.time, 0.0)


# ============================================================================
# CLAMPING AND NON-FINITE INPUT
# ============================================================================

def test_points_outside_the_image_clamp_to_edges():
    t = _transform()
    p = t.screen_to_data(-1000, -1000)
    assert p.freq == 0.0 and p.time == 60.0
    p = t.screen_to_data(5000, 5000)
    assert p.freq == 100.0 and p.time == 0.0


def test_non_finite_input_clamps():
    t = _transform()
    p = t.screen_to_data(float("nan"), float("nan"))
    assert p.freq == 0.0 and p.time == 60.0
    p = t.screen_to_data(float("inf"), float("inf"))
    assert p.freq == 100.0 and p.time == 0.0
    p = t.screen_to_data(float("-inf"), float("-inf"))
    assert p.freq == 0.0 and p.time == 60.0


def test_contains_uses_plot_rect():
    t = _transform(zoom=3.0)
    assert t.contains(40, 40)
    assert t.contains(840, 440)
    assert not t.contains(39, 100)
    assert not t.contains(100, 441)


# ============================================================================
# RATE AND VISIBLE WINDOW
# ============================================================================

def test_rate_divides_reported_frequency():
    t = _transform(rate=2.0)
    p = t.screen_to_data(440, 240)
    _assert_close(p.freq, 25.0)
    s = t.data_to_screen(30.0, 25.0)
    _assert_close(s.x, 440.0)
    _assert_close(s.y, 240.0)


def test_visible_bounds_at_two_x():
    b = _transform(zoom=2.0).visible_data_bounds()
    _assert_close(b["freq_min"], 25.0)
    _assert_close(b["freq_max"], 75.0)
    _assert_close(b["time_min"], 15.0)
    _assert_close(b["time_max"], 45.0)


def test_pixels_per_unit_scale_with_zoom():
    per_sec, per_hz = _transform().pixels_per_unit()
    _assert_close(per_sec, 400 / 60)
    _assert_close(per_hz, 8.0)
    per_sec2, per_hz2 = _transform(zoom=2.0).pixels_per_unit()
    _assert_close(per_sec2, 2 * per_sec)
    _assert_close(per_hz2, 2 * per_hz)
