"""Shared test fixtures."""

from __future__ import annotations

import math

import pytest

from motionsight.models.samples import Sample
from motionsight.trigger.element import ElementNode

FRAME_MS = 16


def y_samples(points: list[tuple[float, float]]) -> list[Sample]:
    return [Sample(time=t, y=y) for t, y in points]


def curve_samples(fn, count: int = 21, distance: float = 100.0) -> list[Sample]:
    """``count`` samples of y = distance · fn(p), p ∈ [0, 1], one frame apart."""
    return [Sample(time=i * FRAME_MS, y=distance * fn(i / (count - 1))) for i in range(count)]


# Overshoot then settle (three samples)
OVERSHOOT_POINTS = [(0, 50), (50, -5), (150, 0)]

# Passes the target, comes back, passes again, settles
DOUBLE_CROSSING_POINTS = [(0, 0), (50, 60), (100, 110), (150, 95), (200, 102), (250, 100)]


def damped_spring(t: float) -> float:
    return 100 - 100 * math.exp(-t / 150) * math.cos(2 * math.pi * t / 300)


@pytest.fixture
def overshoot_samples() -> list[Sample]:
    return y_samples(OVERSHOOT_POINTS)


@pytest.fixture
def double_crossing_samples() -> list[Sample]:
    return y_samples(DOUBLE_CROSSING_POINTS)


@pytest.fixture
def linear_samples() -> list[Sample]:
    return [Sample(time=i * FRAME_MS, y=10.0 * i) for i in range(12)]


@pytest.fixture
def ease_out_samples() -> list[Sample]:
    return curve_samples(lambda p: 1 - (1 - p) ** 3)


@pytest.fixture
def ease_in_samples() -> list[Sample]:
    return curve_samples(lambda p: p**3)


@pytest.fixture
def spring_samples() -> list[Sample]:
    return [Sample(time=t, y=damped_spring(t)) for t in range(0, 1500, FRAME_MS)]


@pytest.fixture
def fade_samples() -> list[Sample]:
    return [Sample(time=i * FRAME_MS, opacity=i / 10) for i in range(11)]


@pytest.fixture
def page() -> ElementNode:
    """body > main#content > (section.hero, section.card x2 > button, a.link)."""
    button = ElementNode(tag="button", classes=["cta"])
    return ElementNode(
        tag="body",
        children=[
            ElementNode(
                tag="main",
                id="content",
                children=[
                    ElementNode(tag="section", classes=["hero", "fade-in-on-scroll"]),
                    ElementNode(tag="section", classes=["card"], children=[button]),
                    ElementNode(tag="section", classes=["card"]),
                    ElementNode(tag="a", classes=["link"], styles={"cursor": "pointer"}),
                ],
            )
        ],
    )
