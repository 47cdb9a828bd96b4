"""
Visualization utilities for particle localization.
"""

from .trajectories import plot_trajectory, plot_particles, plot_errors
from .covariances import particle_covariance, plot_covariance_ellipse

__all__ = [
    'plot_trajectory',
    'plot_particles',
    'plot_errors',
    'particle_covariance',
    'plot_covariance_ellipse',
]
