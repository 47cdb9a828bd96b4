"""
Pose and measurement models for the particle filter.

This module provides the particle entity with its motion model and
measurement models that score particles against observations.
"""

from .particle import Particle
from .readings import Reading, PositionReading, RangeReading

__all__ = [
    'Particle',
    'Reading',
    'PositionReading',
    'RangeReading',
]
