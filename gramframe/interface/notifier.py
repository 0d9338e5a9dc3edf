"""
State listener registries and snapshot fan-out.

``GLOBAL_LISTENERS`` is the process-wide registry. It is created at import,
handed to each engine as an explicit handle, and drained with ``clear()``
on teardown or hot reload. Each engine also has its own ``StateNotifier``
listener list.
"""
from __future__ import annotations

import copy
import logging
from typing import Callable, Optional

from ..models import StateSnapshot

logger = logging.getLogger(__name__)

Listener = Callable[[StateSnapshot], None]


class ListenerRegistry:
    """Ordered set of listeners applied to every engine created after registration."""

    def __init__(self):
        self._listeners: list[Listener] = []

    def add(self, listener: Listener) -> bool:
        if not callable(listener):
            raise TypeError("State listener must be callable")
        if listener in self._listeners:
            return False
        self._listeners.append(listener)
        return True

    def remove(self, listener: Listener) -> bool:
        try:
            self._listeners.remove(listener)
        except ValueError:
            return False
        return True

    def listeners(self) -> list[Listener]:
        return list(self._listeners)

    def clear(self):
        self._listeners.clear()

    def __len__(self):
        return len(self._listeners)


GLOBAL_LISTENERS = ListenerRegistry()


class StateNotifier:
    """
    Delivers deep copies of state snapshots to listeners in registration order.

    A listener that raises is logged and skipped; the remaining listeners
    still receive the snapshot.

    Parameters
    ----------
    registry : ListenerRegistry | None
        Process-wide registry whose listeners this notifier adopts at
        construction.
    snapshot_fn : callable | None
        Returns the current snapshot; used to prime newly added listeners.
    """

    def __init__(self, registry: Optional[ListenerRegistry] = None,
                 snapshot_fn: Optional[Callable[[], StateSnapshot]] = None):
        self.registry = registry
        self.snapshot_fn = snapshot_fn
        self._listeners: list[Listener] = []
        if registry is not None:
            for listener in registry.listeners():
                self._listeners.append(listener)

    @property
    def listeners(self) -> list[Listener]:
        return list(self._listeners)

    def add_listener(self, listener: Listener, immediate: bool = True) -> bool:
        if not callable(listener):
            raise TypeError("State listener must be callable")
        if listener in self._listeners:
            return False
        self._listeners.append(listener)
        if immediate and self.snapshot_fn is not None:
            self._deliver(listener, self.snapshot_fn())
        return True

    def remove_listener(self, listener: Listener) -> bool:
        try:
            self._listeners.remove(listener)
        except ValueError:
            return False
        return True

    def notify(self, snapshot: StateSnapshot):
        for listener in list(self._listeners):
            self._deliver(listener, snapshot)

    def _deliver(self, listener: Listener, snapshot: StateSnapshot):
        try:
            listener(copy.deepcopy(snapshot))
        except Exception as e:
            logger.error(f"State listener {getattr(listener, '__name__', listener)!r} "
                         f"failed: {e}", exc_info=True)

    def teardown(self):
        self._listeners.clear()
