"""Listener substrate — pointer/click/focus events and visibility notifications.

``TriggerSubstrate`` is what ``watch()`` subscribes through. ``LocalSubstrate``
is an in-process implementation: events are dispatched explicitly and
visibility ratios are set by the caller, which is how recordings are
replayed offline and how the watcher contract is tested.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from motionsight.trigger.element import Element

logger = logging.getLogger(__name__)

Remover = Callable[[], None]


@dataclass(frozen=True)
class VisibilityEntry:
    target: Element
    ratio: float
    is_intersecting: bool


class VisibilityHandle(Protocol):
    def unobserve(self, element: Element) -> None: ...

    def disconnect(self) -> None: ...


class TriggerSubstrate(Protocol):
    def add_listener(self, element: Element, event: str, callback: Callable[[], None]) -> Remover: ...

    def observe_visibility(
        self,
        element: Element,
        callback: Callable[[VisibilityEntry], None],
        thresholds: Sequence[float],
        root_margin: str,
    ) -> VisibilityHandle: ...


class _VisibilityObserver:
    def __init__(
        self,
        owner: LocalSubstrate,
        callback: Callable[[VisibilityEntry], None],
        thresholds: Sequence[float],
        root_margin: str,
    ) -> None:
        self._owner = owner
        self.callback = callback
        self.thresholds = sorted(thresholds)
        self.root_margin = root_margin
        self.targets: set[int] = set()

    def observe(self, element: Element) -> None:
        with self._owner._lock:
            self.targets.add(id(element))
            self._owner._observers.add(self)

    def unobserve(self, element: Element) -> None:
        with self._owner._lock:
            self.targets.discard(id(element))

    def disconnect(self) -> None:
        with self._owner._lock:
            self.targets.clear()
            self._owner._observers.discard(self)

    def bucket(self, ratio: float) -> int:
        """Index of the highest threshold reached; −1 below all of them."""
        reached = -1
        for i, t in enumerate(self.thresholds):
            if ratio >= t:
                reached = i
        return reached


class LocalSubstrate:
    """In-process event + visibility substrate. Thread-safe registration."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._listeners: dict[tuple[int, str], list[Callable[[], None]]] = {}
        self._observers: set[_VisibilityObserver] = set()
        self._ratios: dict[int, float] = {}

    # ── TriggerSubstrate ──

    def add_listener(self, element: Element, event: str, callback: Callable[[], None]) -> Remover:
        key = (id(element), event)
        with self._lock:
            self._listeners.setdefault(key, []).append(callback)

        def remove() -> None:
            with self._lock:
                callbacks = self._listeners.get(key, [])
                if callback in callbacks:
                    callbacks.remove(callback)
                if not callbacks:
                    self._listeners.pop(key, None)

        return remove

    def observe_visibility(
        self,
        element: Element,
        callback: Callable[[VisibilityEntry], None],
        thresholds: Sequence[float],
        root_margin: str,
    ) -> VisibilityHandle:
        observer = _VisibilityObserver(self, callback, thresholds, root_margin)
        observer.observe(element)
        return observer

    # ── Driving events ──

    def dispatch(self, element: Element, event: str) -> int:
        """Fire ``event`` on ``element``. Returns the number of listeners called."""
        with self._lock:
            callbacks = list(self._listeners.get((id(element), event), []))
        for cb in callbacks:
            cb()
        return len(callbacks)

    def set_visibility(self, element: Element, ratio: float) -> None:
        """Update the visible-area ratio; observers whose threshold bucket changes are notified."""
        key = id(element)
        with self._lock:
            previous = self._ratios.get(key, 0.0)
            self._ratios[key] = ratio
            observers = [o for o in self._observers if key in o.targets]
        for observer in observers:
            if observer.bucket(previous) == observer.bucket(ratio):
                continue
            if key not in observer.targets:
                continue
            entry = VisibilityEntry(target=element, ratio=ratio, is_intersecting=ratio > 0)
            observer.callback(entry)

    def listener_count(self, element: Element | None = None) -> int:
        with self._lock:
            if element is None:
                return sum(len(v) for v in self._listeners.values())
            return sum(len(v) for (eid, _), v in self._listeners.items() if eid == id(element))

    def observer_count(self) -> int:
        with self._lock:
            return len(self._observers)
