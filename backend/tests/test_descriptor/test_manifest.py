"""Tests for the manifest and export helpers."""

import json
from datetime import datetime, timezone

from motionsight.config import Settings
from motionsight.descriptor.generator import generate
from motionsight.descriptor.manifest import cursor_css, generate_manifest, manifest_json, to_data_attribute
from motionsight.models.analysis import EasingFamily
from motionsight.models.samples import Recording, Sample
from motionsight.models.trigger import TriggerKind

STAMP = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _recording(key: str, trigger: TriggerKind = TriggerKind.LOAD) -> Recording:
    samples = (Sample(time=0, y=40, opacity=0), Sample(time=300, y=0, opacity=1))
    return Recording(
        element_key=key,
        trigger=trigger,
        easing=EasingFamily.EASE_OUT,
        total_duration_ms=300,
        samples=samples,
    )


def test_manifest_has_one_entry_per_key():
    recordings = {k: _recording(k) for k in ("#a", "#b", ".c")}
    manifest = generate_manifest(recordings, timestamp=STAMP)
    assert len(manifest.animations) == 3
    assert manifest.schema_version == "1.0"
    assert manifest.generator_tag == "MotionSight v1.0"
    assert manifest.timestamp == "2026-01-01T00:00:00+00:00"


def test_manifest_entry_states():
    manifest = generate_manifest({"#a": _recording("#a", TriggerKind.SCROLL)}, timestamp=STAMP)
    entry = manifest.animations["#a"]
    assert entry.trigger == "scroll"
    assert entry.easing == "ease-out"
    assert entry.duration_ms == 300
    assert entry.sample_count == 2
    assert entry.states == {"initial": {"y": 40, "opacity": 0}, "while-in-view": {"y": 0, "opacity": 1}}
    assert "whileInView" in entry.code


def test_manifest_json_round_trips_with_camel_case():
    settings = Settings(generator_tag="Test Tag", schema_version="9.9")
    manifest = generate_manifest({"#a": _recording("#a"), "#b": _recording("#b")}, timestamp=STAMP, settings=settings)
    text = manifest_json(manifest)
    data = json.loads(text)
    assert data["schemaVersion"] == "9.9"
    assert data["generatorTag"] == "Test Tag"
    assert len(data["animations"]) == 2
    assert data["animations"]["#a"]["durationMs"] == 300
    assert data["animations"]["#a"]["sampleCount"] == 2
    assert "\n  " in text


def test_empty_manifest():
    data = json.loads(manifest_json(generate_manifest({}, timestamp=STAMP)))
    assert data["animations"] == {}


def test_data_attribute_is_compact_form():
    rec = _recording("#a", TriggerKind.HOVER)
    assert to_data_attribute(rec) == generate(rec).compact
    assert json.loads(to_data_attribute(rec))["h"] == {"y": 0, "opacity": 1}


def test_cursor_css():
    assert cursor_css(".link", "/img/hand.png", (4, 12)) == ".link {\n  cursor: url('/img/hand.png') 4 12, auto;\n}"
    assert cursor_css("#btn", "c.svg") == "#btn {\n  cursor: url('c.svg') 0 0, auto;\n}"
