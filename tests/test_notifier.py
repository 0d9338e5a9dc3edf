"""
State listener tests: isolation, deep copies, global adoption and hot reload.
"""
import logging

import pytest

from gramframe.engine import GramFrame, hot_reload
from gramframe.interface import ListenerRegistry
from gramframe.models import Margins, StateSnapshot

from .conftest import PIXEL_CONFIG


def _frame(registry):
    return GramFrame(PIXEL_CONFIG, 800, 400, margins=Margins.uniform(0), registry=registry)


# ============================================================================
# REGISTRY
# ============================================================================

def test_registry_rejects_non_callables_and_duplicates():
    reg = ListenerRegistry()
    with pytest.raises(TypeError):
        reg.add("not a function")
    fn = lambda snap: None  # noqa: E731
    assert reg.add(fn) is True
    assert reg.add(fn) is False
    assert len(reg) == 1
    assert reg.remove(fn) is True
    assert reg.remove(fn) is False


# ============================================================================
# DELIVERY
# ============================================================================

def test_new_listener_gets_current_state_immediately(pixel_frame):
    got = []
    pixel_frame.add_state_listener(got.append)
    assert len(got) == 1
    assert isinstance(got[0], StateSnapshot)
    assert got[0].instance_id == pixel_frame.instance_id

    pixel_frame.add_state_listener(lambda s: None, immediate=False)
    assert len(got) == 1


def test_failing_listener_does_not_block_others(pixel_frame, caplog):
    got = []

    def broken(snapshot):
        raise RuntimeError("boom")

    pixel_frame.add_state_listener(broken, immediate=False)
    pixel_frame.add_state_listener(got.append, immediate=False)
    with caplog.at_level(logging.ERROR, logger="gramframe"):
        pixel_frame.mouse_down(100, 200)
    assert len(got) == 1
    assert len(got[0].markers) == 1
    assert "boom" in caplog.text


def test_listeners_receive_independent_copies(pixel_frame):
    got_a, got_b = [], []
    pixel_frame.add_state_listener(got_a.append, immediate=False)
    pixel_frame.add_state_listener(got_b.append, immediate=False)
    pixel_frame.mouse_down(100, 200)
    a, b = got_a[-1], got_b[-1]
    assert a is not b
    a.markers[0].time = -1.0
    a.selection.clear()
    assert pixel_frame.store.markers()[0].time == 50.0
    assert not pixel_frame.selection.is_empty
    assert b.markers[0].time == 50.0


def test_snapshot_contents(pixel_frame):
    pixel_frame.set_zoom(2.0, 0.5, 0.5)
    pixel_frame.set_rate(2.0)
    snap = pixel_frame.snapshot()
    assert snap.viewport.zoom_level == 2.0
    assert snap.rate == 2.0
    assert snap.config.freq_max == 800.0
    data = snap.to_dict()
    assert data["mode"] == "analysis"
    assert data["version"] == "1.0.0"


def test_removed_listener_stops_receiving(pixel_frame):
    got = []
    pixel_frame.add_state_listener(got.append, immediate=False)
    assert pixel_frame.remove_state_listener(got.append)
    pixel_frame.mouse_down(100, 200)
    assert got == []


# ============================================================================
# GLOBAL REGISTRY AND HOT RELOAD
# ============================================================================

def test_engine_adopts_global_listeners_at_construction():
    reg = ListenerRegistry()
    got = []
    reg.add(got.append)
    frame = _frame(reg)
    assert got and got[-1].instance_id == frame.instance_id

    late = []
    reg.add(late.append)
    frame.mouse_down(100, 200)
    assert late == []


def test_instances_do_not_share_listeners():
    reg = ListenerRegistry()
    a, b = _frame(reg), _frame(reg)
    got = []
    a.add_state_listener(got.append, immediate=False)
    b.mouse_down(100, 200)
    assert got == []


def test_hot_reload_keeps_global_listeners_once():
    reg = ListenerRegistry()
    got = []
    reg.add(got.append)
    frame = _frame(reg)
    frame.set_rate(4.0)

    fresh = hot_reload(frame, reg)
    assert fresh.instance_id != frame.instance_id
    assert len(reg) == 1
    assert fresh.notifier.listeners == [got.append]
    assert frame.notifier.listeners == []
    assert fresh.rate == 4.0

    got.clear()
    fresh.mouse_down(100, 200)
    assert len(got) == 1
    assert got[0].instance_id == fresh.instance_id


def test_set_rate_rejects_non_positive(pixel_frame):
    with pytest.raises(ValueError):
        pixel_frame.set_rate(0)
