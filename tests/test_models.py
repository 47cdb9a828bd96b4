"""
Tests for the particle motion model and the measurement models.
"""

import math

import numpy as np
import pytest

from particle_localization import (ConfigurationError, GaussianNoise, Particle,
                                   PositionReading, RangeReading, Reading,
                                   calculate_norm_dist)
from particle_localization.common.angles import TWO_PI


# ============================================================================
# Particle
# ============================================================================


def test_zero_move_leaves_pose_unchanged():
    p = Particle(1.25, -3.5, 2.0, 0.3)
    p.move(0.0, 0.0)
    assert (p.x, p.y, p.heading) == (1.25, -3.5, 2.0)


def test_move_straight_along_heading():
    p = Particle(1.0, 1.0, math.pi / 2)
    p.move(0.5, 0.0)
    assert p.x == pytest.approx(1.0, abs=1e-12)
    assert p.y == pytest.approx(1.5)
    assert p.heading == math.pi / 2


def test_move_turns_before_driving():
    p = Particle(0.0, 0.0, 0.0)
    p.move(2.0, math.pi / 2)
    assert p.x == pytest.approx(0.0, abs=1e-12)
    assert p.y == pytest.approx(2.0)


@pytest.mark.parametrize("start, delta, expected", [
    (0.2, -0.5, TWO_PI - 0.3),
    (TWO_PI - 0.1, 0.3, 0.2),
    (3.0, 3.0, 6.0),
])
def test_move_wraps_heading_once(start, delta, expected):
    p = Particle(0.0, 0.0, start)
    p.move(1.0, delta)
    assert p.heading == pytest.approx(expected)
    assert 0.0 <= p.heading < TWO_PI


def test_update_weight_rejects_negative():
    p = Particle(0.0, 0.0)
    p.update_weight(0.7)
    assert p.weight == 0.7
    with pytest.raises(ValueError):
        p.update_weight(-0.1)


# ============================================================================
# Readings
# ============================================================================


def test_reading_is_abstract():
    with pytest.raises(TypeError):
        Reading()


def test_position_reading_peak_at_observed_point():
    reading = PositionReading(3.0, 4.0, sigma=0.1)
    assert reading.likelihood(Particle(3.0, 4.0)) == calculate_norm_dist(0.0, 0.0, 0.1)


def test_position_reading_uses_euclidean_distance():
    reading = PositionReading(0.0, 0.0, sigma=1.0)
    assert reading.likelihood(Particle(3.0, 4.0)) == pytest.approx(
        calculate_norm_dist(5.0, 0.0, 1.0)
    )


def test_position_reading_prefers_closer_particles():
    reading = PositionReading(5.0, 5.0, sigma=0.5)
    assert reading.likelihood(Particle(5.1, 5.0)) > reading.likelihood(Particle(5.6, 5.0))


def test_position_reading_rejects_bad_sigma():
    with pytest.raises(ConfigurationError):
        PositionReading(0.0, 0.0, sigma=0.0)


ANCHORS = np.array([[0.0, 0.0], [10.0, 0.0], [0.0, 10.0]])


def test_range_reading_exact_ranges_score_peak():
    reading = RangeReading.from_pose(3.0, 4.0, ANCHORS, sigma=0.2)
    expected = calculate_norm_dist(0.0, 0.0, 0.2) ** 3
    assert reading.likelihood(Particle(3.0, 4.0)) == pytest.approx(expected)


def test_range_reading_ranges_from_pose():
    reading = RangeReading.from_pose(3.0, 4.0, ANCHORS)
    np.testing.assert_allclose(reading.ranges, [5.0, math.hypot(7.0, 4.0), math.hypot(3.0, 6.0)])


def test_range_reading_with_noise_is_reproducible():
    a = RangeReading.from_pose(3.0, 4.0, ANCHORS, noise=GaussianNoise(1))
    b = RangeReading.from_pose(3.0, 4.0, ANCHORS, noise=GaussianNoise(1))
    np.testing.assert_array_equal(a.ranges, b.ranges)


def test_range_reading_discriminates_position():
    reading = RangeReading.from_pose(3.0, 4.0, ANCHORS, sigma=0.2)
    assert reading.likelihood(Particle(3.0, 4.0)) > reading.likelihood(Particle(4.0, 4.0))


@pytest.mark.parametrize("anchors, ranges", [
    ([[0.0, 0.0, 0.0]], [1.0]),
    ([[0.0, 0.0], [1.0, 1.0]], [1.0]),
    (np.zeros((0, 2)), []),
])
def test_range_reading_validates_shapes(anchors, ranges):
    with pytest.raises(ConfigurationError):
        RangeReading(anchors, ranges)
