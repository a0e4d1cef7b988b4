"""Batch manifest + attribute/cursor helpers for the export layer."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timezone

from motionsight.config import Settings, settings as default_settings
from motionsight.descriptor.generator import generate
from motionsight.models.analysis import MotionAnalysis
from motionsight.models.descriptor import AnimationManifest, ManifestEntry, StateBag
from motionsight.models.samples import Recording

logger = logging.getLogger(__name__)


def generate_manifest(
    recordings: Mapping[str, Recording],
    analyses: Mapping[str, MotionAnalysis] | None = None,
    timestamp: datetime | None = None,
    settings: Settings | None = None,
) -> AnimationManifest:
    """Aggregate key → recording into one versioned manifest document."""
    settings = settings or default_settings
    analyses = analyses or {}
    stamp = (timestamp or datetime.now(timezone.utc)).isoformat()

    animations: dict[str, ManifestEntry] = {}
    for key, recording in recordings.items():
        output = generate(recording, analyses.get(key))
        states: dict[str, StateBag] = {"initial": output.descriptor.initial}
        for phase, bag in output.descriptor.phases.items():
            if bag:
                states[phase.value] = bag
        animations[key] = ManifestEntry(
            trigger=recording.trigger.value,
            easing=recording.easing.value,
            duration_ms=recording.total_duration_ms,
            sample_count=len(recording.samples),
            states=states,
            code=output.code,
        )

    logger.info("Manifest built: %d animations", len(animations))
    return AnimationManifest(
        schema_version=settings.schema_version,
        generator_tag=settings.generator_tag,
        timestamp=stamp,
        animations=animations,
    )


def manifest_json(manifest: AnimationManifest) -> str:
    return manifest.model_dump_json(by_alias=True, indent=2)


def to_data_attribute(recording: Recording, analysis: MotionAnalysis | None = None) -> str:
    """Compact descriptor string for re-attachment onto exported markup."""
    return generate(recording, analysis).compact


def cursor_css(selector: str, url: str, hotspot: tuple[int, int] | None = None) -> str:
    x, y = hotspot if hotspot is not None else (0, 0)
    return f"{selector} {{\n  cursor: url('{url}') {x} {y}, auto;\n}}"
