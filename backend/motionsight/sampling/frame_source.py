"""Frame Source — the seam between the sampler and whatever renders the element.

A source answers three questions per frame: what time is it (ms), what
does the element's resolved style look like right now, and move on to the
next frame. ``FrameSourceError`` is the only way a source signals that the
environment went away; the sampler ends the recording when it sees one.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol, Union, runtime_checkable

StyleValue = Union[str, float]
StyleBag = dict[str, StyleValue]


class FrameSourceError(RuntimeError):
    """The element or its rendering environment is no longer available."""


@runtime_checkable
class FrameSource(Protocol):
    def now(self) -> float: ...

    def snapshot(self) -> StyleBag: ...

    def advance(self) -> None: ...


class ScriptedFrameSource:
    """Replays a fixed list of ``(time_ms, style bag)`` frames.

    Once the script runs out the source either raises ``FrameSourceError``
    or, with ``hold_last``, keeps returning the final bag while time moves
    on by ``frame_interval_ms`` per frame.
    """

    def __init__(
        self,
        frames: Sequence[tuple[float, Mapping[str, StyleValue]]],
        hold_last: bool = False,
        frame_interval_ms: float = 1000 / 60,
    ) -> None:
        self._frames = [(float(t), dict(bag)) for t, bag in frames]
        self._index = 0
        self._hold_last = hold_last
        self._interval = frame_interval_ms

    @property
    def exhausted(self) -> bool:
        return self._index >= len(self._frames)

    def now(self) -> float:
        if not self._frames:
            return 0.0
        if not self.exhausted:
            return self._frames[self._index][0]
        overrun = self._index - len(self._frames) + 1
        return self._frames[-1][0] + overrun * self._interval

    def snapshot(self) -> StyleBag:
        if not self.exhausted:
            return dict(self._frames[self._index][1])
        if self._hold_last and self._frames:
            return dict(self._frames[-1][1])
        raise FrameSourceError(f"script exhausted after {len(self._frames)} frames")

    def advance(self) -> None:
        self._index += 1
