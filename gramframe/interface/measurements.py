"""
Stateless measurement helpers.

Hit-test tolerances, harmonic drag arithmetic and the Doppler speed
estimate. Functions here take plain values (or a ``CoordinateTransform``)
and return plain values; nothing is mutated.
"""
from __future__ import annotations

import math
from typing import Iterable, Optional

import numpy as np

from .. import config
from ..models import DataPoint, HarmonicSet
from .transform import CoordinateTransform


# ---- tolerance ------------------------------------------------------------------

def data_tolerance(transform: CoordinateTransform, pixel_radius: Optional[float] = None) -> DataPoint:
    """
    Convert a pixel radius into a (time, freq) tolerance at the current zoom.

    The result is clamped between the configured minimum and maximum so that
    extreme zoom levels still produce usable hit areas.
    """
    cfg = config.get_all()
    radius = cfg["tolerance_pixel_radius"] if pixel_radius is None else pixel_radius
    vp = transform.viewport
    axis = transform.config
    time_tol = (radius / vp.natural_height) * axis.time_range / vp.zoom_level
    freq_tol = (radius / vp.natural_width) * (axis.freq_range / transform.rate) / vp.zoom_level
    time_tol = float(np.clip(time_tol, cfg["tolerance_min_time"], cfg["tolerance_max_time"]))
    freq_tol = float(np.clip(freq_tol, cfg["tolerance_min_freq"], cfg["tolerance_max_freq"]))
    return DataPoint(time=time_tol, freq=freq_tol)


def nearest_within(point: DataPoint, candidates: Iterable, tolerance: DataPoint):
    """
    Closest candidate (anything with ``time`` and ``freq``) inside the ellipse.

    Returns None when nothing is close enough.
    """
    best = None
    best_d = math.inf
    for c in candidates:
        dt = (point.time - c.time) / tolerance.time
        df = (point.freq - c.freq) / tolerance.freq
        d = dt * dt + df * df
        if d <= 1.0 and d < best_d:
            best, best_d = c, d
    return best


# ---- harmonics -------------------------------------------------------------------

def harmonic_frequency_tolerance(spacing: float) -> float:
    cfg = config.get_all()
    return max(spacing * cfg["harmonic_tolerance_fraction"], cfg["harmonic_min_tolerance_hz"])


def harmonic_line_extent(anchor_time: float, time_range: float) -> tuple[float, float]:
    """Time span (start, end) covered by the lines of a set anchored at ``anchor_time``."""
    half = time_range * config.get("harmonic_line_fraction") / 2
    return anchor_time - half, anchor_time + half


def find_harmonic_at(point: DataPoint, sets: Iterable[HarmonicSet],
                     freq_min: float, freq_max: float, time_range: float):
    """
    Locate the harmonic line under ``point``.

    Only the line nearest the pointer in each set is tested, so closely
    spaced ladders report the harmonic actually under the pointer. When
    several sets match, the closest line wins.

    Returns
    -------
    tuple[HarmonicSet, int] | None
        The matching set and the grabbed harmonic number, or None.
    """
    slack_fraction = config.get("harmonic_time_slack_fraction")
    best = None
    best_d = math.inf
    for hs in sets:
        start, end = harmonic_line_extent(hs.anchor_time, time_range)
        slack = (end - start) * slack_fraction
        if not (start - slack <= point.time <= end + slack):
            continue
        visible = hs.harmonic_range(freq_min, freq_max)
        if not visible:
            continue
        n = max(1, round(point.freq / hs.spacing))
        n = min(max(n, visible.start), visible.stop - 1)
        d = abs(point.freq - n * hs.spacing)
        if d <= harmonic_frequency_tolerance(hs.spacing) and d < best_d:
            best, best_d = (hs, n), d
    return best


def dragged_spacing(original_spacing: float, harmonic_number: int, delta_freq: float) -> float:
    """
    Spacing that keeps harmonic ``harmonic_number`` under the pointer.

    The grabbed line started at ``N * original_spacing``; moving it by
    ``delta_freq`` gives ``(N * original_spacing + delta_freq) / N``.
    """
    if harmonic_number < 1:
        raise ValueError("harmonic_number must be >= 1")
    return (harmonic_number * original_spacing + delta_freq) / harmonic_number


def harmonic_rows(harmonic_set: HarmonicSet, freq_min: float, freq_max: float,
                  cursor_freq: Optional[float] = None) -> list[dict]:
    """Table rows (number, frequency) for each visible harmonic plus the cursor ratio."""
    ratio = cursor_freq / harmonic_set.spacing if cursor_freq is not None else None
    return [{"number": n, "freq": n * harmonic_set.spacing, "rate": ratio}
            for n in harmonic_set.harmonic_range(freq_min, freq_max)]


# ---- doppler -----------------------------------------------------------------------

def midpoint(a: DataPoint, b: DataPoint) -> DataPoint:
    return DataPoint(time=(a.time + b.time) / 2, freq=(a.freq + b.freq) / 2)


def doppler_speed(f_plus: DataPoint, f_minus: DataPoint,
                  f_zero: Optional[DataPoint] = None,
                  speed_of_sound: Optional[float] = None) -> float:
    """
    Source speed in m/s from a Doppler pair.

    ``v = |(c / f0) * (f_plus - f_minus) / 2|`` where ``f0`` is the centre
    frequency (the midpoint when ``f_zero`` is not given).
    """
    c = config.get("speed_of_sound") if speed_of_sound is None else speed_of_sound
    f0 = (f_zero or midpoint(f_plus, f_minus)).freq
    if f0 == 0:
        raise ValueError("Centre frequency is zero; speed is undefined")
    delta_f = (f_plus.freq - f_minus.freq) / 2
    return abs((c / f0) * delta_f)


def to_knots(speed_ms: float) -> float:
    return speed_ms * config.get("ms_to_knots")


def screen_distance(ax: float, ay: float, bx: float, by: float) -> float:
    return math.hypot(ax - bx, ay - by)
