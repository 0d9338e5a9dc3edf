"""
Entry point and main application window for GramFrame.

This module defines `GramFrameWindow`, the top-level Qt window that hosts one
spectrogram. It owns the `GramFrame` engine, wires the `SpectrogramCanvas`
to it through a `ToolDispatcher`, and keeps the ribbon and side panels in
step with every state snapshot:

    - ModeRibbon       (Analysis / Harmonics / Doppler / Zoom / Pan, zoom controls)
    - ReadoutTable     (cursor time and frequency, zoom, rate, Doppler speed)
    - FeatureTable     (markers and harmonic sets; click a row to select it)
    - HarmonicTable    (harmonics of the selected set)

Run this module directly via:

    python -m gramframe.main path/to/gram.png --time-max 60 --freq-max 100

or call the top-level `main()` function.
"""
import argparse
import logging
import sys

import numpy as np
from PIL import Image
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QColor
from PyQt5.QtWidgets import (
    QAction,
    QApplication,
    QColorDialog,
    QInputDialog,
    QLabel,
    QMainWindow,
    QMessageBox,
    QSplitter,
    QVBoxLayout,
    QWidget,
)

from . import config
from .engine import GramFrame, hot_reload
from .interface import ToolDispatcher
from .logging_config import setup_logging
from .models import AxisConfig, ConfigError, Mode
from .ui import (
    FeatureTable,
    HarmonicTable,
    ManualHarmonicDialog,
    ModeRibbon,
    ReadoutTable,
    SettingsDialog,
    SpectrogramCanvas,
    busy_cursor,
)

logger = logging.getLogger(__name__)


def load_image(path):
    """Read an image as an RGB array."""
    with Image.open(path) as im:
        return np.asarray(im.convert("RGB"))


class GramFrameWindow(QMainWindow):
    """
    Main window that:
      - Hosts the mode ribbon, the spectrogram canvas and the side panels
      - Routes canvas events into the engine via a ToolDispatcher
      - Mirrors each state snapshot into the ribbon and tables
    """
    def __init__(self, axis_config: AxisConfig, image, rate=1.0, parent=None):
        super().__init__(parent)
        self.setWindowTitle(f"GramFrame - {axis_config.image_url}")
        self.resize(1400, 800)

        self.image = image
        h, w = image.shape[:2]

        # --- UI shell: ribbon + canvas | panels ---
        central = QWidget(self)
        outer = QVBoxLayout(central)
        outer.setContentsMargins(0, 0, 0, 0)
        self.setCentralWidget(central)

        self.ribbon = ModeRibbon(self)
        outer.addWidget(self.ribbon, 0)

        self.guidance = QLabel(self)
        self.guidance.setWordWrap(True)
        self.guidance.setTextFormat(Qt.PlainText)

        splitter = QSplitter(Qt.Horizontal, self)
        self.canvas = SpectrogramCanvas(splitter)
        side = QWidget(splitter)
        side_lay = QVBoxLayout(side)
        self.readout = ReadoutTable(side)
        self.features = FeatureTable(side)
        self.harmonics = HarmonicTable(side)
        side_lay.addWidget(self.guidance)
        side_lay.addWidget(self.readout, 1)
        side_lay.addWidget(self.features, 2)
        side_lay.addWidget(self.harmonics, 1)
        splitter.addWidget(self.canvas)
        splitter.addWidget(side)
        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 1)
        outer.addWidget(splitter, 1)

        # ===== Engine
        self.engine = GramFrame(axis_config, w, h, self.canvas, rate=rate)
        self.canvas.set_image(image, self.engine.viewport)
        self._dispatcher = None
        self.activate()

        self.features.featureSelected.connect(self.engine.select)
        self.ribbon.modeRequested.connect(self.request_mode)
        self._init_ribbon()

        settings_act = QAction("Settings", self)
        settings_act.triggered.connect(self.on_settings)
        self.menuBar().addAction(settings_act)

        self.engine.refresh()
        self.statusBar().showMessage("Ready.")

    # =============== Ribbon population ====================
    def _init_ribbon(self):
        self.ribbon.populate([
            ("mode", "Analysis", Mode.ANALYSIS, "Place and drag markers"),
            ("mode", "Harmonics", Mode.HARMONICS, "Place and drag harmonic ladders"),
            ("mode", "Doppler", Mode.DOPPLER, "Fit f+ / f- and estimate speed"),
            ("mode", "Zoom", Mode.ZOOM, "Drag a rectangle to zoom into it"),
            ("mode", "Pan", Mode.PAN, "Drag the zoomed view (only while zoomed)"),
            ("separator",),
            ("button", "Zoom In", lambda: self.engine.zoom_in()),
            ("button", "Zoom Out", lambda: self.engine.zoom_out()),
            ("button", "Reset Zoom", lambda: self.engine.reset_zoom()),
            ("separator",),
            ("button", "+ Manual", self.add_manual_harmonic, "Add a harmonic set by spacing"),
            ("button", "Colour", self.choose_color, "Colour for new markers and harmonic sets"),
            ("button", "Rate", self.ask_rate, "Set the frequency divider"),
            ("button", "Reset Mode", lambda: self.engine.modes.reset_active(),
             "Clear everything the current mode has placed"),
            ("button", "Reload", self.reload_engine, "Rebuild the engine, keeping listeners"),
        ])
        self.ribbon.sync(self.engine.mode, self.engine.viewport_controller.is_zoomed)

    # --- lifecycle -----------------------------------------------------------
    def activate(self):
        """Recreate the dispatcher and bind it to the current engine."""
        self._dispatcher = ToolDispatcher(self.canvas)
        self._dispatcher.bind_engine(self.engine, temporary=False)
        self.canvas.on_resize = self.engine.resize
        self.engine.add_state_listener(self._on_state)

    def teardown(self):
        if self._dispatcher:
            self._dispatcher.clear()
        self.canvas.on_resize = None
        self.engine.teardown()

    def closeEvent(self, ev):
        self.teardown()
        super().closeEvent(ev)

    # --- state mirror ----------------------------------------------------------
    def _on_state(self, snap):
        self.ribbon.sync(snap.mode, snap.viewport.is_zoomed)
        self.guidance.setText(self.engine.guidance)
        self.readout.show_snapshot(snap)
        self.features.show_snapshot(snap)
        self.harmonics.show_snapshot(snap)

    # --- actions --------------------------------------------------------------
    def request_mode(self, mode):
        if not self.engine.transition(mode):
            self.statusBar().showMessage("Zoom in before panning.", 3000)
            self.ribbon.sync(self.engine.mode, self.engine.viewport_controller.is_zoomed)

    def add_manual_harmonic(self):
        cursor = self.engine.cursor
        ok, spacing, anchor = ManualHarmonicDialog.get_harmonic(
            self, anchor_default=cursor.time if cursor else None)
        if not ok:
            return
        try:
            self.engine.add_manual_harmonic(spacing, anchor)
        except ValueError as e:
            QMessageBox.warning(self, "Harmonics", str(e))

    def choose_color(self):
        current = QColor(self.engine.selected_color or config.get("marker_color"))
        color = QColorDialog.getColor(current, self, "Feature colour")
        if color.isValid():
            self.engine.set_selected_color(color.name())
            self.statusBar().showMessage(f"New features will use {color.name()}", 3000)

    def ask_rate(self):
        rate, ok = QInputDialog.getDouble(self, "Rate", "Frequency divider:",
                                          self.engine.rate, 0.0001, 1e9, 4)
        if ok:
            self.engine.set_rate(rate)

    def reload_engine(self):
        if self._dispatcher:
            self._dispatcher.clear()
        self.engine = hot_reload(self.engine)
        self.canvas.set_image(self.image, self.engine.viewport)
        self.activate()
        self.features.featureSelected.disconnect()
        self.features.featureSelected.connect(self.engine.select)
        self.engine.refresh()
        self.statusBar().showMessage("Engine reloaded.", 3000)

    def on_settings(self):
        dlg = SettingsDialog(self)
        if dlg.exec_():
            self.engine.refresh()


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="GramFrame spectrogram measurement tool")
    parser.add_argument("image", help="Spectrogram image file")
    parser.add_argument("--time-min", type=float, default=0.0)
    parser.add_argument("--time-max", type=float, required=True)
    parser.add_argument("--freq-min", type=float, default=0.0)
    parser.add_argument("--freq-max", type=float, required=True)
    parser.add_argument("--rate", type=float, default=1.0, help="Frequency divider")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", default=None)
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(getattr(logging, args.log_level), args.log_file)
    try:
        axis_config = AxisConfig.from_dict({
            "image_url": args.image,
            "time_min": args.time_min,
            "time_max": args.time_max,
            "freq_min": args.freq_min,
            "freq_max": args.freq_max,
        })
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(2)

    app = QApplication(sys.argv)
    with busy_cursor():
        image = load_image(axis_config.image_url)
    win = GramFrameWindow(axis_config, image, rate=args.rate)
    win.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
