"""
Particle Localization

Monte Carlo localization of a 2-D pose (x, y, heading) from noisy
position and range readings, with a resampling-wheel particle filter.

License: MIT
"""

__version__ = "1.0.0"

from .config import ParticleFilterConfig
from .exceptions import (ParticleFilterError, ConfigurationError,
                         EmptyResampleTargetError, DegenerateWeightsError,
                         StalledWheelError)
from .common.kernels import calculate_norm_dist
from .common.noise import GaussianNoise
from .models.particle import Particle
from .models.readings import Reading, PositionReading, RangeReading
from .filters.particle import ParticleFilter, create_pf

__all__ = [
    'ParticleFilter',
    'create_pf',
    'ParticleFilterConfig',
    'Particle',
    'Reading',
    'PositionReading',
    'RangeReading',
    'GaussianNoise',
    'calculate_norm_dist',
    'ParticleFilterError',
    'ConfigurationError',
    'EmptyResampleTargetError',
    'DegenerateWeightsError',
    'StalledWheelError',
]
