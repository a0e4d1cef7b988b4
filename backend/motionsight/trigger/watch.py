"""Active trigger observation — four watchers behind one disposable bundle.

``watch()`` subscribes pointer-enter (hover), visibility (scroll, fires once
then stops observing), click and focus. ``TriggerSubscription.cancel()``
detaches all four synchronously and is idempotent. Delivery and
cancellation serialise on one re-entrant lock, so once ``cancel()`` returns
no callback can run, including one racing in from another thread.

Load is never produced here: it precedes any subscription and only comes
from passive inference.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from motionsight.models.trigger import TriggerContext, TriggerKind, TriggerMetadata
from motionsight.trigger.element import Element
from motionsight.trigger.infer import has_hover_affordance
from motionsight.trigger.selector import synthesize_key
from motionsight.trigger.substrate import (
    Remover,
    TriggerSubstrate,
    VisibilityEntry,
    VisibilityHandle,
)

logger = logging.getLogger(__name__)

VISIBILITY_THRESHOLDS: tuple[float, ...] = (0.0, 0.1, 0.25, 0.5, 0.75, 1.0)
# Threshold reported in the scroll trigger metadata.
REPORTED_THRESHOLD = 0.1
ROOT_MARGIN = "0px"

TriggerCallback = Callable[[TriggerContext], None]


class TriggerSubscription:
    """Disposable bundle of the four watchers for one element."""

    def __init__(self, element: Element, on_trigger: TriggerCallback, substrate: TriggerSubstrate) -> None:
        self.element = element
        self.target_key = synthesize_key(element)
        self._on_trigger = on_trigger
        self._substrate = substrate
        self._lock = threading.RLock()
        self._active = False
        self._scroll_fired = False
        self._removers: list[Remover] = []
        self._visibility: VisibilityHandle | None = None

    # ── lifecycle ──

    def start(self) -> TriggerSubscription:
        with self._lock:
            if self._active:
                return self
            self._active = True
            is_style_driven = has_hover_affordance(self.element)

            self._removers.append(
                self._substrate.add_listener(
                    self.element,
                    "mouseenter",
                    lambda: self._deliver(
                        TriggerKind.HOVER,
                        TriggerMetadata(is_style_driven=is_style_driven, event_names=("mouseenter",)),
                    ),
                )
            )

            visibility = self._substrate.observe_visibility(
                self.element, self._on_visibility, VISIBILITY_THRESHOLDS, ROOT_MARGIN
            )
            self._removers.append(visibility.disconnect)
            self._visibility = visibility

            self._removers.append(
                self._substrate.add_listener(
                    self.element,
                    "click",
                    lambda: self._deliver(TriggerKind.CLICK, TriggerMetadata(event_names=("click",))),
                )
            )
            self._removers.append(
                self._substrate.add_listener(
                    self.element,
                    "focus",
                    lambda: self._deliver(TriggerKind.FOCUS, TriggerMetadata(event_names=("focus",))),
                )
            )
        logger.debug("Watching %s for triggers", self.target_key)
        return self

    def cancel(self) -> None:
        with self._lock:
            if not self._active:
                return
            self._active = False
            removers, self._removers = self._removers, []
            for remove in removers:
                remove()
        logger.debug("Stopped watching %s", self.target_key)

    @property
    def active(self) -> bool:
        return self._active

    def __enter__(self) -> TriggerSubscription:
        return self.start()

    def __exit__(self, *exc: object) -> None:
        self.cancel()

    # ── delivery ──

    def _on_visibility(self, entry: VisibilityEntry) -> None:
        if not entry.is_intersecting:
            return
        with self._lock:
            if not self._active or self._scroll_fired:
                return
            self._scroll_fired = True
            if self._visibility is not None:
                self._visibility.unobserve(self.element)
            self._emit(
                TriggerKind.SCROLL,
                TriggerMetadata(threshold=REPORTED_THRESHOLD, root_margin=ROOT_MARGIN),
            )

    def _deliver(self, kind: TriggerKind, metadata: TriggerMetadata) -> None:
        with self._lock:
            if not self._active:
                return
            self._emit(kind, metadata)

    def _emit(self, kind: TriggerKind, metadata: TriggerMetadata) -> None:
        self._on_trigger(TriggerContext(kind=kind, target_key=self.target_key, metadata=metadata))


def watch(element: Element, on_trigger: TriggerCallback, substrate: TriggerSubstrate) -> TriggerSubscription:
    """Subscribe all four watchers; the returned subscription cancels them together."""
    return TriggerSubscription(element, on_trigger, substrate).start()
