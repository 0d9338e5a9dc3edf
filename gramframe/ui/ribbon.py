"""
Mode ribbon: one checkable action per interaction mode plus view controls.
"""

from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtWidgets import QAction, QActionGroup, QToolBar

from ..models import Mode


class ModeRibbon(QToolBar):
    """Toolbar holding the mode selector and zoom / tool buttons.

    Entry formats:
      ("mode",   label, Mode)
      ("mode",   label, Mode, tooltip)
      ("button", label, callback)
      ("button", label, callback, tooltip)
      ("separator",)
    """
    modeRequested = pyqtSignal(object)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setMovable(False)
        self.setFloatable(False)
        self.setToolButtonStyle(Qt.ToolButtonTextOnly)
        self._group = QActionGroup(self)
        self._group.setExclusive(True)
        self.mode_actions = {}
        self.buttons = {}

    def populate(self, entries):
        for entry in entries:
            if not entry:
                continue
            kind = entry[0]

            if kind == "separator":
                self.addSeparator()

            elif kind == "mode":
                # ("mode", label, Mode[, tooltip])
                label, mode = entry[1], entry[2]
                tooltip = entry[3] if len(entry) == 4 else None
                act = QAction(label, self)
                act.setCheckable(True)
                act.triggered.connect(lambda _checked=False, m=mode: self.modeRequested.emit(m))
                if tooltip:
                    act.setToolTip(tooltip)
                    act.setStatusTip(tooltip)
                self._group.addAction(act)
                self.addAction(act)
                self.mode_actions[mode] = act

            elif kind == "button":
                # ("button", label, callback[, tooltip])
                label, callback = entry[1], entry[2]
                tooltip = entry[3] if len(entry) == 4 else None
                act = QAction(label, self)
                act.triggered.connect(callback)
                if tooltip:
                    act.setToolTip(tooltip)
                    act.setStatusTip(tooltip)
                self.addAction(act)
                self.buttons[label] = act

            else:
                raise ValueError(f"Unknown ribbon entry kind '{kind}'")

    def sync(self, mode: Mode, zoomed: bool):
        """Reflect the engine state: check the active mode, gate Pan on zoom."""
        act = self.mode_actions.get(mode)
        if act is not None and not act.isChecked():
            act.setChecked(True)
        pan = self.mode_actions.get(Mode.PAN)
        if pan is not None:
            pan.setEnabled(zoomed)
        for label in ("Zoom Out", "Reset Zoom"):
            if label in self.buttons:
                self.buttons[label].setEnabled(zoomed)
