"""
Shared fixtures for the GramFrame test suite.

Every engine is built headless on a RecordingSurface with its own
ListenerRegistry so tests never leak listeners into GLOBAL_LISTENERS.
"""
import logging

import pytest

from gramframe import config
from gramframe.engine import GramFrame
from gramframe.interface import ListenerRegistry
from gramframe.models import Margins

logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)
logging.getLogger("matplotlib").setLevel(logging.CRITICAL)
logging.getLogger("PIL").setLevel(logging.CRITICAL)

# ============================================================================
# TEST CONFIGURATION
# ============================================================================

# 60 s by 100 Hz on an 800x400 image with 40 px margins all round:
# the image centre sits at surface (440, 240).
CENTRE_CONFIG = {
    "image_url": "gram.png",
    "time_min": 0, "time_max": 60,
    "freq_min": 0, "freq_max": 100,
}

# 1 px == 1 Hz horizontally, 1 px == 0.25 s vertically, no margins.
PIXEL_CONFIG = {
    "image_url": "gram.png",
    "time_min": 0, "time_max": 100,
    "freq_min": 0, "freq_max": 800,
}


@pytest.fixture(autouse=True)
def restore_config():
    """Undo any con_dict mutation a test makes."""
    saved = dict(config.con_dict)
    yield
    config.con_dict.clear()
    config.con_dict.update(saved)


@pytest.fixture
def registry():
    return ListenerRegistry()


@pytest.fixture
def centre_frame(registry):
    return GramFrame(CENTRE_CONFIG, 800, 400, margins=Margins.uniform(40), registry=registry)


@pytest.fixture
def pixel_frame(registry):
    return GramFrame(PIXEL_CONFIG, 800, 400, margins=Margins.uniform(0), registry=registry)
