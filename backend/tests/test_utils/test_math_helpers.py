"""Tests for the math helpers."""

import math

import numpy as np

from motionsight.utils.math_helpers import clamp, clamp_round, coefficient_of_variation, is_finite, round_to


def test_clamp():
    assert clamp(5, 0, 1) == 1
    assert clamp(-5, 0, 1) == 0
    assert clamp(0.5, 0, 1) == 0.5


def test_round_to_is_half_up():
    assert round_to(0.25, 1) == 0.3
    assert round_to(2.5, 0) == 3
    assert round_to(-0.25, 1) == -0.2
    assert round_to(1.23456, 3) == 1.235


def test_clamp_round():
    assert clamp_round(612.34, 50, 500) == 500
    assert clamp_round(73.26, 50, 500) == 73.3


def test_coefficient_of_variation():
    assert coefficient_of_variation(np.array([2.0, 2.0, 2.0])) == 0
    assert coefficient_of_variation(np.array([1.0, 3.0])) == 0.5
    assert math.isinf(coefficient_of_variation(np.array([])))
    assert math.isinf(coefficient_of_variation(np.array([-1.0, 1.0])))
    assert coefficient_of_variation(np.array([-1.0, 1.0]), offset=1.0) == 1.0


def test_is_finite():
    assert is_finite(1.0, -2.0, 0.0)
    assert not is_finite(1.0, float("nan"))
    assert not is_finite(float("inf"))
