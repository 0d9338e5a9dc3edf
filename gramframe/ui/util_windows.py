"""
Auxiliary modal dialogues and small Qt helpers.

Contains the manual-harmonic entry dialog, the settings editor for
``config.con_dict`` and the busy-cursor context manager.
"""

import logging
from contextlib import contextmanager

from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import (
    QApplication,
    QDialog,
    QDialogButtonBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
)

from .. import config

logger = logging.getLogger(__name__)


@contextmanager
def busy_cursor(msg=None, window=None):
    """Temporarily set the cursor to busy; restores automatically."""
    QApplication.setOverrideCursor(Qt.WaitCursor)
    if window and hasattr(window, "statusBar") and msg:
        window.statusBar().showMessage(msg)
    try:
        yield
    finally:
        QApplication.restoreOverrideCursor()
        if window and hasattr(window, "statusBar"):
            window.statusBar().clearMessage()


class ManualHarmonicDialog(QDialog):
    """
    Dialog to request a harmonic spacing (Hz) and optional anchor time (s).
    Usage:
        ok, spacing, anchor = ManualHarmonicDialog.get_harmonic(parent, anchor_default=12.5)
    """

    def __init__(self, parent=None, anchor_default=None):
        super().__init__(parent)

        self.setWindowTitle("Add Harmonic Set")

        spacing_label = QLabel("Spacing (Hz):")
        anchor_label = QLabel("Anchor time (s):")

        self.spacing_edit = QLineEdit()
        self.anchor_edit = QLineEdit()
        self.anchor_edit.setPlaceholderText("cursor / centre")
        if anchor_default is not None:
            self.anchor_edit.setText(f"{anchor_default:.3f}")

        buttons = QDialogButtonBox(
            QDialogButtonBox.Ok | QDialogButtonBox.Cancel,
            orientation=Qt.Horizontal,
            parent=self,
        )
        buttons.accepted.connect(self._on_accept)
        buttons.rejected.connect(self.reject)

        spacing_layout = QHBoxLayout()
        spacing_layout.addWidget(spacing_label)
        spacing_layout.addWidget(self.spacing_edit)

        anchor_layout = QHBoxLayout()
        anchor_layout.addWidget(anchor_label)
        anchor_layout.addWidget(self.anchor_edit)

        main_layout = QVBoxLayout()
        main_layout.addLayout(spacing_layout)
        main_layout.addLayout(anchor_layout)
        main_layout.addWidget(buttons)

        self.setLayout(main_layout)

    def get_values(self):
        """Return (spacing, anchor) as floats; anchor may be None, spacing None if invalid."""
        try:
            spacing = float(self.spacing_edit.text())
        except ValueError:
            return None, None
        text = self.anchor_edit.text().strip()
        if not text:
            return spacing, None
        try:
            return spacing, float(text)
        except ValueError:
            return None, None

    def _on_accept(self):
        spacing, _anchor = self.get_values()
        minimum = config.get("harmonic_min_spacing")
        if spacing is None or spacing < minimum:
            QMessageBox.warning(self, "Invalid spacing",
                                f"Enter a spacing of at least {minimum} Hz.")
            return
        self.accept()

    @classmethod
    def get_harmonic(cls, parent=None, anchor_default=None):
        """
        Convenience one-shot:
            ok, spacing, anchor = ManualHarmonicDialog.get_harmonic(...)
        """
        dlg = cls(parent, anchor_default)
        result = dlg.exec_()
        if result == QDialog.Accepted:
            spacing, anchor = dlg.get_values()
            return True, spacing, anchor
        return False, None, None


class SettingsDialog(QDialog):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.resize(420, 480)
        cfg = config.get_all()

        # Build dynamic table: Key | Value
        self.tbl = QTableWidget(len(cfg), 2)
        self.tbl.setHorizontalHeaderLabels(["Setting", "Value"])
        self.tbl.horizontalHeader().setStretchLastSection(True)

        for row, (k, v) in enumerate(cfg.items()):
            key_item = QTableWidgetItem(k)
            key_item.setFlags(Qt.ItemIsSelectable | Qt.ItemIsEnabled)
            val_item = QTableWidgetItem(str(v))
            self.tbl.setItem(row, 0, key_item)
            self.tbl.setItem(row, 1, val_item)

        btn_save = QPushButton("Save")
        btn_cancel = QPushButton("Cancel")
        btn_save.clicked.connect(self._on_save)
        btn_cancel.clicked.connect(self.reject)

        row = QHBoxLayout()
        row.addStretch(1)
        row.addWidget(btn_cancel)
        row.addWidget(btn_save)

        root = QVBoxLayout(self)
        root.addWidget(self.tbl)
        root.addLayout(row)

    def _on_save(self):
        for r in range(self.tbl.rowCount()):
            key = self.tbl.item(r, 0).text()
            val = self.tbl.item(r, 1).text()
            try:
                config.set_value(key, val)
            except (KeyError, ValueError) as e:
                logger.warning(f"Setting '{key}' not saved: {e}")
                QMessageBox.warning(self, "Invalid setting", f"{key}: {val!r} is not valid.")
                return
        self.accept()
