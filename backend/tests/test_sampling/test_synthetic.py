"""Tests for the synthetic frame source."""

import pytest

from motionsight.descriptor.generator import generate
from motionsight.models.analysis import EasingFamily, SpringParameters
from motionsight.sampling.sampler import MotionSampler, SamplerOptions
from motionsight.sampling.synthetic import SyntheticFrameSource, cubic_bezier, render_matrix, spring_progress
from motionsight.transform.decompose import decompose_string


def test_cubic_bezier_shapes():
    ease_in = (0.42, 0.0, 1.0, 1.0)
    ease_out = (0.0, 0.0, 0.58, 1.0)
    assert cubic_bezier(*ease_in, 0.0) == 0.0
    assert cubic_bezier(*ease_in, 1.0) == 1.0
    assert cubic_bezier(*ease_in, 0.5) < 0.5
    assert cubic_bezier(*ease_out, 0.5) > 0.5


def test_spring_progress_overshoots_and_settles():
    progress = spring_progress(SpringParameters(stiffness=100, damping=10, mass=1))
    assert progress[0] == 0.0
    assert progress[-1] == 1.0
    assert max(progress) > 1.0


def test_spring_progress_rejects_bad_fps():
    with pytest.raises(ValueError):
        spring_progress(SpringParameters(), fps=0)


def test_render_matrix_round_trips_through_decomposer():
    values = {"x": 12.0, "y": -4.0, "scale": 1.5, "rotation": 30.0}
    m = decompose_string(render_matrix(values))
    assert m.translate_x == pytest.approx(12)
    assert m.translate_y == pytest.approx(-4)
    assert m.average_scale == pytest.approx(1.5)
    assert m.rotate_z == pytest.approx(30)
    assert render_matrix({"x": 0.0, "y": 0.0, "scale": 1.0, "rotation": 0.0}) == "none"


def test_linear_source_reaches_end_and_holds():
    source = SyntheticFrameSource(start={"x": 0}, end={"x": 100}, duration_ms=100, fps=50)
    assert source.values(0)["x"] == 0
    assert source.values(5)["x"] == 100
    assert source.values(50)["x"] == 100
    assert source.now() == 0
    source.advance()
    assert source.now() == 20


def test_snapshot_carries_colours():
    source = SyntheticFrameSource(start={"opacity": 0}, end={}, colors={"color": "red"})
    bag = source.snapshot()
    assert bag["opacity"] == 0
    assert bag["transform"] == "none"
    assert bag["color"] == "red"


def test_fade_up_recording():
    source = SyntheticFrameSource(start={"y": 40, "opacity": 0}, end={}, curve=EasingFamily.EASE_OUT, duration_ms=300)
    recording = MotionSampler(source, SamplerOptions(element_key=".card")).run()
    first, last = recording.samples[0], recording.samples[-1]
    assert (first.y, first.opacity) == (pytest.approx(40), 0.0)
    assert (last.y, last.opacity) == (pytest.approx(0), 1.0)
    out = generate(recording)
    assert out.descriptor.initial == {"y": 40, "opacity": 0}


def test_spring_recording_classifies_as_spring():
    source = SyntheticFrameSource(start={"x": -100}, end={}, curve=EasingFamily.SPRING)
    recording = MotionSampler(source, SamplerOptions(element_key="#pop")).run()
    assert recording.easing == EasingFamily.SPRING
    assert recording.metadata.has_overshoot
