"""
Shared fixtures and configuration for the particle localization test suite.
"""

import math

import matplotlib
import numpy as np
import pytest

from particle_localization import ParticleFilter, ParticleFilterConfig

# Plots are rendered off-screen during tests
matplotlib.use("Agg")


# ============================================================================
# Random Generator Fixtures
# ============================================================================


@pytest.fixture
def seed():
    """Base seed for reproducible tests."""
    return 42


@pytest.fixture
def rng(seed):
    """Seeded numpy generator."""
    return np.random.default_rng(seed)


# ============================================================================
# Tolerance Fixtures
# ============================================================================


@pytest.fixture
def strict_tolerance():
    """Tolerance for normalized weight sums."""
    return 1e-9


@pytest.fixture
def convergence_tolerance():
    """Maximum position error after the filter has converged."""
    return 0.5


# ============================================================================
# Filter Fixtures
# ============================================================================


@pytest.fixture
def demo_config():
    """Demo configuration: 500 particles on a 10 x 10 field."""
    return ParticleFilterConfig(
        num_samples=500,
        resample_fraction=1.0,
        bounds=(0.0, 10.0, 0.0, 10.0),
        location_noise_sigma=0.1,
        distance_noise_sigma=0.1,
        angle_noise_sigma=math.pi / 16,
    )


@pytest.fixture
def make_filter(seed):
    """Factory for small seeded filters with overridable parameters."""
    def _make_filter(**overrides):
        params = dict(
            num_samples=100,
            resample_fraction=1.0,
            bounds=(0.0, 10.0, 0.0, 10.0),
            location_noise_sigma=0.1,
            distance_noise_sigma=0.1,
            angle_noise_sigma=math.pi / 16,
            seed=seed,
        )
        params.update(overrides)
        return ParticleFilter(**params)
    return _make_filter


class ConstantReading:
    """Reading that gives every particle the same likelihood."""

    def __init__(self, value):
        self.value = value

    def likelihood(self, particle):
        return self.value


@pytest.fixture
def constant_reading():
    return ConstantReading
