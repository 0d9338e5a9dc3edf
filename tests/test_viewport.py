"""
ViewportController tests: clamping, pan gating, reset policy and resize.
"""
import math

import pytest

from gramframe import config
from gramframe.interface import ViewportController
from gramframe.models import Margins, Viewport


def _controller(**kw):
    return ViewportController(800, 400, Margins.uniform(0), **kw)


def _assert_centre(vp, cx, cy):
    assert math.isclose(vp.center_x, cx, abs_tol=1e-9), vp
    assert math.isclose(vp.center_y, cy, abs_tol=1e-9), vp


# ============================================================================
# INVARIANTS
# ============================================================================

def test_viewport_rejects_invalid_geometry():
    with pytest.raises(ValueError):
        Viewport(0, 400)
    with pytest.raises(ValueError):
        Viewport(800, 400, zoom_level=0.5)
    with pytest.raises(ValueError):
        Viewport(800, 400, center_x=1.5)
    with pytest.raises(ValueError):
        Margins(top=-1)


def test_set_zoom_clamps_level_and_centre():
    vc = _controller()
    vp = vc.set_zoom(0.25, 1.7, -3.0)
    assert vp.zoom_level == 1.0
    _assert_centre(vp, 1.0, 0.0)
    vp = vc.set_zoom(float("nan"), float("nan"), 0.2)
    assert vp.zoom_level == 1.0
    _assert_centre(vp, 0.5, 0.2)


def test_on_change_receives_every_viewport():
    seen = []
    vc = _controller(on_change=seen.append)
    vc.zoom_in()
    vc.zoom_out()
    assert [v.zoom_level for v in seen] == [1.5, 1.0]


def test_zoom_steps_and_limits():
    vc = _controller()
    vc.zoom_out()
    assert vc.zoom_level == 1.0
    for _ in range(20):
        vc.zoom_in()
    assert vc.zoom_level == config.get("zoom_max")


# ============================================================================
# PAN
# ============================================================================

def test_pan_is_a_no_op_when_not_zoomed():
    seen = []
    vc = _controller(on_change=seen.append)
    before = vc.viewport
    assert vc.pan(100, 50) is False
    assert vc.viewport == before
    assert seen == []


def test_pan_moves_centre_opposite_to_drag():
    vc = _controller()
    vc.set_zoom(2.0, 0.5, 0.5)
    assert vc.pan(80, -40) is True
    # -(80 / 800) / 2 and +(40 / 400) / 2
    _assert_centre(vc.viewport, 0.45, 0.55)


def test_pan_accounts_for_rendered_scale():
    vc = _controller()
    vc.set_zoom(2.0, 0.5, 0.5)
    vc.resize(1600, 800)
    assert vc.scale_ratio == (0.5, 0.5)
    vc.pan(80, 0)
    _assert_centre(vc.viewport, 0.475, 0.5)


def test_pan_clamps_at_image_edge():
    vc = _controller()
    vc.set_zoom(2.0, 0.5, 0.5)
    vc.pan(-10000, 10000)
    _assert_centre(vc.viewport, 1.0, 0.0)


# ============================================================================
# RESET, RECT ZOOM, RESIZE
# ============================================================================

def test_reset_zoom_snaps_centre():
    vc = _controller()
    vc.set_zoom(4.0, 0.1, 0.9)
    vp = vc.reset_zoom()
    assert vp.zoom_level == 1.0
    _assert_centre(vp, 0.5, 0.5)
    assert not vc.is_zoomed


def test_zoom_to_rect_fits_the_tighter_axis():
    vc = _controller()
    vp = vc.zoom_to_normalized_rect(0.25, 0.25, 0.75, 0.5)
    assert vp.zoom_level == 2.0
    _assert_centre(vp, 0.5, 0.375)


def test_zoom_to_rect_rejects_zero_area():
    vc = _controller()
    with pytest.raises(ValueError):
        vc.zoom_to_normalized_rect(0.3, 0.2, 0.3, 0.8)


def test_resize_never_changes_zoom():
    vc = _controller()
    vc.set_zoom(3.0, 0.3, 0.6)
    before = vc.viewport
    vc.resize(400, 200)
    vc.resize(0, 200)
    assert vc.viewport == before
    assert vc.surface_size == (400.0, 200.0)
