"""
Arrow-key nudging of the selected marker or harmonic set.
"""
import math

import pytest

from gramframe.interface.keyboard import parse_key


def _assert_close(actual, expected, tol=1e-9):
    assert math.isclose(actual, expected, abs_tol=tol), f"{actual} != {expected}"


@pytest.mark.parametrize("key,expected", [
    ("left", ("left", False)),
    ("shift+right", ("right", True)),
    ("ArrowUp", ("up", False)),
    ("ctrl+shift+down", ("down", True)),
    ("a", ("a", False)),
    ("", ("", False)),
])
def test_parse_key(key, expected):
    assert parse_key(key) == expected


# ============================================================================
# MARKERS
# ============================================================================

def test_arrow_moves_selected_marker_one_pixel(pixel_frame):
    m = pixel_frame.add_marker(50.0, 400.0)
    pixel_frame.select("marker", m.id)
    assert pixel_frame.key_press("right")
    _assert_close(pixel_frame.store.get_marker(m.id).freq, 401.0)
    assert pixel_frame.key_press("up", shift=True)
    # 5 px of 0.25 s each, upwards is later
    _assert_close(pixel_frame.store.get_marker(m.id).time, 51.25)


def test_step_shrinks_with_zoom(pixel_frame):
    m = pixel_frame.add_marker(50.0, 400.0)
    pixel_frame.select("marker", m.id)
    pixel_frame.set_zoom(2.0, 0.5, 0.5)
    pixel_frame.key_press("left")
    _assert_close(pixel_frame.store.get_marker(m.id).freq, 399.5)


def test_marker_nudge_clamps_to_data_range(pixel_frame):
    m = pixel_frame.add_marker(100.0, 800.0)
    pixel_frame.select("marker", m.id)
    pixel_frame.key_press("shift+right")
    pixel_frame.key_press("shift+up")
    moved = pixel_frame.store.get_marker(m.id)
    assert moved.freq == 800.0
    assert moved.time == 100.0


# ============================================================================
# HARMONIC SETS
# ============================================================================

def test_arrows_adjust_spacing_and_anchor(pixel_frame):
    hs = pixel_frame.add_harmonic_set(50.0, 100.0)
    pixel_frame.select("harmonic_set", hs.id)
    pixel_frame.key_press("right")
    pixel_frame.key_press("down")
    hs = pixel_frame.store.get_harmonic_set(hs.id)
    _assert_close(hs.spacing, 101.0)
    _assert_close(hs.anchor_time, 49.75)


def test_spacing_never_drops_below_minimum(pixel_frame):
    hs = pixel_frame.add_harmonic_set(50.0, 2.0)
    pixel_frame.select("harmonic_set", hs.id)
    pixel_frame.key_press("shift+left")
    assert pixel_frame.store.get_harmonic_set(hs.id).spacing == 1.0


# ============================================================================
# NOTHING TO MOVE
# ============================================================================

def test_keys_ignored_without_selection(pixel_frame):
    pixel_frame.add_marker(50.0, 400.0)
    assert pixel_frame.key_press("right") is False


def test_non_arrow_keys_ignored(pixel_frame):
    m = pixel_frame.add_marker(50.0, 400.0)
    pixel_frame.select("marker", m.id)
    assert pixel_frame.key_press("x") is False
    assert pixel_frame.store.get_marker(m.id).freq == 400.0


def test_stale_selection_is_cleared(pixel_frame):
    pixel_frame.selection.kind = "marker"
    pixel_frame.selection.id = "marker-gone"
    assert pixel_frame.key_press("left") is False
    assert pixel_frame.selection.is_empty


def test_select_validates_kind_and_id(pixel_frame):
    with pytest.raises(ValueError):
        pixel_frame.select("doppler", "x")
    with pytest.raises(KeyError):
        pixel_frame.select("marker", "missing")
