"""
Monte Carlo localization filters.

This module provides the pose particle filter and its functional factory.
"""

from .particle import ParticleFilter, create_pf

__all__ = [
    'ParticleFilter',
    'create_pf',
]
