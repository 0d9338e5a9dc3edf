"""
Configuration tests: AxisConfig validation and the con_dict helpers.
"""
import logging

import pytest

from gramframe import config
from gramframe.engine import GramFrame
from gramframe.interface import ListenerRegistry
from gramframe.logging_config import LOG_FORMAT, setup_logging
from gramframe.models import AxisConfig, ConfigError, Margins


# ============================================================================
# AXIS CONFIG
# ============================================================================

def test_from_dict_accepts_aliases_and_numeric_strings():
    cfg = AxisConfig.from_dict({
        "imageUrl": "gram.png",
        "timeMin": "0", "time-end": " 60.5 ",
        "freq-start": 10, "freqMax": "100",
    })
    assert cfg.image_url == "gram.png"
    assert cfg.time_max == 60.5
    assert cfg.freq_min == 10.0
    assert cfg.time_range == 60.5
    assert cfg.freq_range == 90.0
    assert AxisConfig.from_dict(cfg.to_dict()) == cfg


@pytest.mark.parametrize("raw", [
    None,
    {"time_min": 0, "time_max": 60, "freq_min": 0, "freq_max": 100},
    {"image": "g.png", "time_max": 60, "freq_min": 0, "freq_max": 100},
    {"image": "g.png", "time_min": "abc", "time_max": 60, "freq_min": 0, "freq_max": 100},
    {"image": "g.png", "time_min": 0, "time_max": float("nan"), "freq_min": 0, "freq_max": 100},
    {"image": "g.png", "time_min": True, "time_max": 60, "freq_min": 0, "freq_max": 100},
    {"image": "g.png", "time_min": 60, "time_max": 60, "freq_min": 0, "freq_max": 100},
    {"image": "g.png", "time_min": 0, "time_max": 60, "freq_min": 200, "freq_max": 100},
])
def test_malformed_config_raises(raw):
    with pytest.raises(ConfigError):
        AxisConfig.from_dict(raw)


def test_engine_validates_config_before_building():
    with pytest.raises(ConfigError):
        GramFrame({"image": "g.png", "time_min": 5, "time_max": 1,
                   "freq_min": 0, "freq_max": 100}, 800, 400, registry=ListenerRegistry())


def test_config_error_is_a_value_error():
    assert issubclass(ConfigError, ValueError)


# ============================================================================
# CON_DICT
# ============================================================================

def test_set_value_casts_to_existing_type():
    config.set_value("zoom_step", "2")
    assert config.get("zoom_step") == 2.0
    assert isinstance(config.get("zoom_step"), float)


def test_set_value_rejects_unknown_and_bad_values():
    with pytest.raises(KeyError):
        config.set_value("no_such_setting", 1)
    with pytest.raises(ValueError):
        config.set_value("zoom_max", "lots")


def test_margins_default_from_config():
    config.set_value("margin_left", 12)
    m = Margins.from_config()
    assert m.left == 12.0
    assert m.bottom == config.get("margin_bottom")


def test_zoom_step_setting_is_live(pixel_frame):
    config.set_value("zoom_step", 3)
    pixel_frame.zoom_in()
    assert pixel_frame.viewport.zoom_level == 3.0


# ============================================================================
# LOGGING
# ============================================================================

def test_setup_logging_replaces_handlers_and_writes_file(tmp_path):
    log_file = tmp_path / "gramframe.log"
    setup_logging(logging.DEBUG)
    logger = setup_logging(logging.DEBUG, str(log_file))
    try:
        assert len(logger.handlers) == 2
        assert all(h.formatter._fmt == LOG_FORMAT for h in logger.handlers)
        assert all(h.formatter.datefmt is None for h in logger.handlers)
        logger.debug("zoom reset")
        for h in logger.handlers:
            h.flush()
        line = log_file.read_text(encoding="utf-8").splitlines()[-1]
        assert line.endswith(" - gramframe - DEBUG - zoom reset")
    finally:
        for h in list(logger.handlers):
            logger.removeHandler(h)
            h.close()
