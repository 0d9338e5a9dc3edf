"""
Mode-independent storage for markers and harmonic sets.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Optional

from ..models import HarmonicSet, Marker

logger = logging.getLogger(__name__)


class PersistentFeatureStore:
    """
    Owns every Marker and HarmonicSet, keyed by id, in insertion order.

    Features outlive mode switches; only explicit removal deletes them.
    Each mutation calls ``on_change`` synchronously.
    """

    def __init__(self, on_change: Optional[Callable[[], None]] = None):
        self._markers: dict[str, Marker] = {}
        self._harmonics: dict[str, HarmonicSet] = {}
        self.on_change = on_change

    def _changed(self):
        if callable(self.on_change):
            self.on_change()

    # ---- markers ---------------------------------------------------------------
    def markers(self) -> tuple[Marker, ...]:
        return tuple(self._markers.values())

    def get_marker(self, marker_id: str) -> Marker:
        try:
            return self._markers[marker_id]
        except KeyError:
            raise KeyError(f"No marker with id '{marker_id}'") from None

    def add_marker(self, marker: Marker) -> Marker:
        if marker.id in self._markers:
            raise KeyError(f"Marker id '{marker.id}' already exists")
        self._markers[marker.id] = marker
        logger.info(f"Marker added {marker.id} at t={marker.time:.3f}s f={marker.freq:.2f}Hz")
        self._changed()
        return marker

    def update_marker(self, marker_id: str, **changes) -> Marker:
        marker = replace(self.get_marker(marker_id), **changes)
        self._markers[marker_id] = marker
        self._changed()
        return marker

    def remove_marker(self, marker_id: str) -> Marker:
        marker = self.get_marker(marker_id)
        del self._markers[marker_id]
        logger.info(f"Marker removed {marker_id}")
        self._changed()
        return marker

    # ---- harmonic sets ---------------------------------------------------------
    def harmonic_sets(self) -> tuple[HarmonicSet, ...]:
        return tuple(self._harmonics.values())

    def get_harmonic_set(self, set_id: str) -> HarmonicSet:
        try:
            return self._harmonics[set_id]
        except KeyError:
            raise KeyError(f"No harmonic set with id '{set_id}'") from None

    def add_harmonic_set(self, harmonic_set: HarmonicSet) -> HarmonicSet:
        if harmonic_set.id in self._harmonics:
            raise KeyError(f"Harmonic set id '{harmonic_set.id}' already exists")
        self._harmonics[harmonic_set.id] = harmonic_set
        logger.info(f"Harmonic set added {harmonic_set.id}: spacing={harmonic_set.spacing:.2f}Hz "
                    f"anchor={harmonic_set.anchor_time:.3f}s")
        self._changed()
        return harmonic_set

    def update_harmonic_set(self, set_id: str, **changes) -> HarmonicSet:
        # replace() re-runs validation, so a non-positive spacing raises here
        harmonic_set = replace(self.get_harmonic_set(set_id), **changes)
        self._harmonics[set_id] = harmonic_set
        self._changed()
        return harmonic_set

    def remove_harmonic_set(self, set_id: str) -> HarmonicSet:
        harmonic_set = self.get_harmonic_set(set_id)
        del self._harmonics[set_id]
        logger.info(f"Harmonic set removed {set_id}")
        self._changed()
        return harmonic_set

    # ---- bulk --------------------------------------------------------------------
    def clear(self):
        self._markers.clear()
        self._harmonics.clear()
        self._changed()

    def __len__(self):
        return len(self._markers) + len(self._harmonics)
