"""Recording session — caller-owned collection of finished recordings."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from datetime import datetime
from types import MappingProxyType

from motionsight.config import Settings, settings as default_settings
from motionsight.descriptor.manifest import generate_manifest
from motionsight.engine.config import EngineConfig
from motionsight.engine.pipeline import analyze_recording
from motionsight.models.descriptor import AnimationManifest
from motionsight.models.report import RecordingReport
from motionsight.models.samples import Recording
from motionsight.models.trigger import TriggerKind
from motionsight.sampling.frame_source import FrameSource
from motionsight.sampling.sampler import MotionSampler, SamplerOptions

logger = logging.getLogger(__name__)


class RecordingSession:
    """Element key → Recording. Re-recording a key replaces the old entry."""

    def __init__(self, config: EngineConfig | None = None, settings: Settings | None = None) -> None:
        self.config = config or EngineConfig()
        self.settings = settings or default_settings
        self._recordings: dict[str, Recording] = {}

    def __len__(self) -> int:
        return len(self._recordings)

    def __contains__(self, key: object) -> bool:
        return key in self._recordings

    @property
    def recordings(self) -> Mapping[str, Recording]:
        return MappingProxyType(self._recordings)

    def record(
        self,
        key: str,
        source: FrameSource,
        trigger: TriggerKind = TriggerKind.LOAD,
        options: SamplerOptions | None = None,
    ) -> Recording:
        options = replace(options or SamplerOptions.from_settings(self.settings), element_key=key, trigger=trigger)
        recording = MotionSampler(source, options, self.config).run()
        self.add(recording)
        return recording

    def add(self, recording: Recording) -> None:
        if recording.element_key in self._recordings:
            logger.info("Replacing recording for %s", recording.element_key)
        self._recordings[recording.element_key] = recording

    def discard(self, key: str) -> bool:
        return self._recordings.pop(key, None) is not None

    def clear(self) -> None:
        self._recordings.clear()

    def reports(self) -> dict[str, RecordingReport]:
        return {key: analyze_recording(rec, config=self.config) for key, rec in self._recordings.items()}

    def manifest(self, timestamp: datetime | None = None) -> AnimationManifest:
        return generate_manifest(self._recordings, timestamp=timestamp, settings=self.settings)
