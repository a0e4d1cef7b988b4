"""Tests for spring parameter estimation."""

import math

import numpy as np
import pytest

from motionsight.motion.kinematics import compute_velocities, project, times_of
from motionsight.motion.spring import (
    DAMPING_RANGE,
    DEFAULT_SPRING,
    STIFFNESS_RANGE,
    damping_ratio_from_decay,
    estimate_period,
    estimate_spring,
)


def test_short_input_returns_defaults():
    positions = np.array([0.0, 120.0, 90.0, 100.0])
    times = np.arange(4, dtype=float) * 16
    spring = estimate_spring(positions, compute_velocities(positions, times), times)
    assert spring == DEFAULT_SPRING
    assert (spring.stiffness, spring.damping, spring.mass, spring.bounce) == (100, 10, 1, 0.25)


def test_estimate_period_from_crossings(spring_samples):
    period = estimate_period(project(spring_samples, "y"), times_of(spring_samples))
    assert period == pytest.approx(300, rel=0.15)


def test_estimate_period_without_crossings():
    positions = np.linspace(0, 100, 12)
    assert estimate_period(positions, np.arange(12, dtype=float)) == 0.0
    assert estimate_period(positions[:5], np.arange(5, dtype=float)) == 0.0


def test_damping_ratio_from_decay():
    assert damping_ratio_from_decay(0.5) == pytest.approx(-math.log(0.5) / (2 * math.pi))
    assert damping_ratio_from_decay(0.0) == 0.3
    assert damping_ratio_from_decay(1.0) == 0.3


def test_estimates_stay_within_bounds(spring_samples):
    positions, times = project(spring_samples, "y"), times_of(spring_samples)
    spring = estimate_spring(positions, compute_velocities(positions, times), times)
    assert STIFFNESS_RANGE[0] <= spring.stiffness <= STIFFNESS_RANGE[1]
    assert DAMPING_RANGE[0] <= spring.damping <= DAMPING_RANGE[1]
    assert spring.mass == 1
    assert 0 <= spring.bounce <= 1
    assert spring.bounce == round(spring.bounce, 2)
