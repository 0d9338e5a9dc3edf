"""
Readout and feature tables shown beside the spectrogram.
"""

from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtGui import QBrush, QColor
from PyQt5.QtWidgets import (
    QAbstractItemView,
    QLabel,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from ..interface.measurements import harmonic_rows, to_knots


def _item(value, editable=False):
    it = QTableWidgetItem(str(value))
    if not editable:
        it.setFlags(it.flags() & ~Qt.ItemIsEditable)
    return it


class ReadoutTable(QWidget):
    """Two-column key/value table for cursor and measurement readouts."""
    def __init__(self, parent=None):
        super().__init__(parent)
        self.table = QTableWidget(0, 2, self)
        self.table.setHorizontalHeaderLabels(["Readout", "Value"])
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.verticalHeader().setVisible(False)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.table)

    def add_row(self, key, value):
        r = self.table.rowCount()
        self.table.insertRow(r)
        self.table.setItem(r, 0, _item(key))
        self.table.setItem(r, 1, _item(value))

    def set_from_dict(self, d):
        self.table.setRowCount(0)
        for k, v in d.items():
            self.add_row(k, v)

    def show_snapshot(self, snap):
        cur = snap.cursor_position
        rows = {
            "Mode": snap.mode.label,
            "Time (s)": f"{cur.time:.2f}" if cur else "--",
            "Freq (Hz)": f"{cur.freq:.1f}" if cur else "--",
            "Zoom": f"{snap.viewport.zoom_level:.2f}x",
            "Rate": f"{snap.rate:g}",
        }
        if snap.doppler.speed is not None:
            rows["Speed (knots)"] = f"{to_knots(snap.doppler.speed):.1f}"
        self.set_from_dict(rows)


class FeatureTable(QWidget):
    """Lists markers and harmonic sets; clicking a row selects the feature."""
    featureSelected = pyqtSignal(str, str)   # kind, id

    def __init__(self, parent=None):
        super().__init__(parent)
        self.title = QLabel("Features")
        self.table = QTableWidget(0, 4, self)
        self.table.setHorizontalHeaderLabels(["Type", "Time (s)", "Freq / Spacing (Hz)", "Id"])
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.verticalHeader().setVisible(False)
        self.table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SingleSelection)
        self.table.cellClicked.connect(self._on_clicked)
        self._rows = []

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.title)
        layout.addWidget(self.table)

    def _on_clicked(self, row, _col):
        if 0 <= row < len(self._rows):
            kind, fid = self._rows[row]
            self.featureSelected.emit(kind, fid)

    def show_snapshot(self, snap):
        self._rows = []
        self.table.setRowCount(0)
        for m in snap.markers:
            self._append("marker", m.id, "Marker", f"{m.time:.2f}", f"{m.freq:.1f}", m.color)
        for hs in snap.harmonic_sets:
            self._append("harmonic_set", hs.id, "Harmonics", f"{hs.anchor_time:.2f}",
                         f"{hs.spacing:.1f}", hs.color)
        sel = snap.selection
        for r, (kind, fid) in enumerate(self._rows):
            if kind == sel.kind and fid == sel.id:
                self.table.selectRow(r)

    def _append(self, kind, fid, label, time, freq, color):
        r = self.table.rowCount()
        self.table.insertRow(r)
        first = _item(label)
        first.setForeground(QBrush(QColor("#ffffff")))
        first.setBackground(QBrush(QColor(color)))
        self.table.setItem(r, 0, first)
        self.table.setItem(r, 1, _item(time))
        self.table.setItem(r, 2, _item(freq))
        self.table.setItem(r, 3, _item(fid))
        self._rows.append((kind, fid))


class HarmonicTable(QWidget):
    """Harmonic numbers and frequencies of the selected set."""
    def __init__(self, parent=None):
        super().__init__(parent)
        self.table = QTableWidget(0, 3, self)
        self.table.setHorizontalHeaderLabels(["#", "Freq (Hz)", "Rate"])
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.verticalHeader().setVisible(False)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(QLabel("Harmonics"))
        layout.addWidget(self.table)

    def show_snapshot(self, snap):
        self.table.setRowCount(0)
        if snap.selection.kind != "harmonic_set":
            return
        hs = next((h for h in snap.harmonic_sets if h.id == snap.selection.id), None)
        if hs is None:
            return
        cfg = snap.config
        cursor_freq = snap.cursor_position.freq if snap.cursor_position else None
        for row in harmonic_rows(hs, cfg.freq_min / snap.rate, cfg.freq_max / snap.rate,
                                 cursor_freq):
            r = self.table.rowCount()
            self.table.insertRow(r)
            self.table.setItem(r, 0, _item(row["number"]))
            self.table.setItem(r, 1, _item(f"{row['freq']:.1f}"))
            rate = "--" if row["rate"] is None else f"{row['rate']:.2f}"
            self.table.setItem(r, 2, _item(rate))
