"""
Matplotlib canvas that hosts a spectrogram and implements the render surface.

The axes fill the whole figure and are scaled in surface units (natural image
size plus margins), so ``event.xdata``/``event.ydata`` are already the
coordinates the engine expects.
"""
import logging

import numpy as np
from matplotlib.backends.backend_qt5agg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.figure import Figure
from matplotlib.lines import Line2D
from matplotlib.patches import Circle, Rectangle
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QCursor
from PyQt5.QtWidgets import QVBoxLayout, QWidget

logger = logging.getLogger(__name__)

_CURSORS = {
    "default": Qt.ArrowCursor,
    "crosshair": Qt.CrossCursor,
    "grab": Qt.OpenHandCursor,
    "grabbing": Qt.ClosedHandCursor,
    "zoom-in": Qt.CrossCursor,
}


class SpectrogramCanvas(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.image = None
        self._surface_size = (1.0, 1.0)
        self._plot_rect = (0.0, 0.0, 1.0, 1.0)
        self._image_artist = None
        self._artists = []

        # event wiring, assigned by ToolDispatcher
        self.on_press = None        # callable(x, y, button=, pixel_x=, pixel_y=)
        self.on_motion = None
        self.on_release = None
        self.on_leave = None        # callable()
        self.on_key = None          # callable(key, shift=) -> bool
        self.on_resize = None       # callable(width_px, height_px)

        # UI elements
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self.fig = Figure(figsize=(8, 4), facecolor="#1e1e1e")
        self.ax = self.fig.add_axes([0, 0, 1, 1])
        self.ax.set_axis_off()
        self.canvas = FigureCanvas(self.fig)
        self.canvas.setFocusPolicy(Qt.StrongFocus)
        layout.addWidget(self.canvas)

        self.canvas.mpl_connect("button_press_event", self._on_press)
        self.canvas.mpl_connect("motion_notify_event", self._on_motion)
        self.canvas.mpl_connect("button_release_event", self._on_release)
        self.canvas.mpl_connect("figure_leave_event", self._on_leave)
        self.canvas.mpl_connect("key_press_event", self._on_key)
        self.canvas.mpl_connect("resize_event", self._on_resize)

    # -------- image --------
    def set_image(self, image, viewport):
        """Show an RGB(A) array for the given viewport geometry."""
        self.image = np.asarray(image)
        vp = viewport
        self._surface_size = (vp.surface_width, vp.surface_height)
        m = vp.margins
        self._plot_rect = (m.left, m.top, m.left + vp.natural_width, m.top + vp.natural_height)
        self.ax.clear()
        self.ax.set_axis_off()
        self.ax.set_xlim(0, vp.surface_width)
        self.ax.set_ylim(vp.surface_height, 0)
        self.ax.set_aspect("auto")
        self._image_artist = self.ax.imshow(self.image, origin="upper", aspect="auto",
                                            extent=(m.left, m.left + vp.natural_width,
                                                    m.top + vp.natural_height, m.top))
        self._image_artist.set_clip_path(self._clip_patch())
        self._artists = []
        self.canvas.draw_idle()

    def _clip_patch(self):
        x0, y0, x1, y1 = self._plot_rect
        return Rectangle((x0, y0), x1 - x0, y1 - y0, transform=self.ax.transData)

    # -------- RenderSurface --------
    def draw(self, primitives):
        for artist in self._artists:
            artist.remove()
        self._artists = []
        for p in primitives:
            if p.kind == "image":
                if self._image_artist is not None:
                    self._image_artist.set_extent((p.x0, p.x1, p.y1, p.y0))
                continue
            artist = self._make_artist(p)
            if artist is not None:
                self._artists.append(artist)
        self.canvas.draw_idle()

    def _make_artist(self, p):
        style = "--" if p.dashed else "-"
        if p.kind == "line":
            artist = Line2D([p.x0, p.x1], [p.y0, p.y1], color=p.color,
                            linewidth=p.width, linestyle=style)
            self.ax.add_line(artist)
            return artist
        if p.kind == "circle":
            artist = Circle((p.x0, p.y0), p.radius, fill=False, edgecolor=p.color,
                            linewidth=p.width)
            self.ax.add_patch(artist)
            return artist
        if p.kind == "rect":
            artist = Rectangle((p.x0, p.y0), p.x1 - p.x0, p.y1 - p.y0, fill=False,
                               edgecolor=p.color, linestyle=style, linewidth=p.width)
            self.ax.add_patch(artist)
            return artist
        if p.kind == "label":
            if p.group == "axes":
                ha = "right" if p.key.startswith("axis:time") else "center"
            else:
                ha = "left"
            return self.ax.text(p.x0, p.y0, p.text, color=p.color, fontsize=8,
                                ha=ha, va="center")
        logger.warning(f"Unknown primitive kind '{p.kind}' for {p.key}")
        return None

    def clear(self):
        for artist in self._artists:
            artist.remove()
        self._artists = []
        self.canvas.draw_idle()

    def set_cursor(self, name):
        self.canvas.setCursor(QCursor(_CURSORS.get(name, Qt.ArrowCursor)))

    # -------- matplotlib events --------
    def _pointer_kwargs(self, event):
        # matplotlib pixel y grows upwards; the engine expects downwards
        return dict(button=getattr(event, "button", 1) or 1,
                    pixel_x=float(event.x), pixel_y=float(self.fig.bbox.height - event.y))

    def _on_press(self, event):
        if event.inaxes is not self.ax or event.xdata is None or event.ydata is None:
            return
        self.canvas.setFocus()
        if callable(self.on_press):
            self.on_press(event.xdata, event.ydata, **self._pointer_kwargs(event))

    def _on_motion(self, event):
        if event.inaxes is not self.ax or event.xdata is None or event.ydata is None:
            return
        if callable(self.on_motion):
            kw = self._pointer_kwargs(event)
            kw["button"] = 1
            self.on_motion(event.xdata, event.ydata, **kw)

    def _on_release(self, event):
        if event.xdata is None or event.ydata is None:
            if callable(self.on_leave):
                self.on_leave()
            return
        if callable(self.on_release):
            self.on_release(event.xdata, event.ydata, **self._pointer_kwargs(event))

    def _on_leave(self, event):
        if callable(self.on_leave):
            self.on_leave()

    def _on_key(self, event):
        if callable(self.on_key) and event.key:
            self.on_key(event.key)

    def _on_resize(self, event):
        if callable(self.on_resize):
            self.on_resize(event.width, event.height)
