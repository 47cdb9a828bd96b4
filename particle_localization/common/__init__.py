"""
Common utilities for pose estimation.

Includes heading handling, likelihood kernels, and the noise provider.
"""

from .angles import normalize_heading, wrap_to_two_pi, angle_diff, circular_mean
from .kernels import calculate_norm_dist
from .noise import GaussianNoise

__all__ = [
    'normalize_heading',
    'wrap_to_two_pi',
    'angle_diff',
    'circular_mean',
    'calculate_norm_dist',
    'GaussianNoise',
]
