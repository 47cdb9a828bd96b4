"""
Measurement models.

A reading scores a particle: ``likelihood(particle)`` returns the
unnormalized likelihood (>= 0) of the observation given the particle's
pose. The filter only ever calls that method, so any object providing it
can be passed to ``ParticleFilter.calculate_weights``.

Both models here reduce the particle to a residual and score it with
``calculate_norm_dist``.
"""

import math
from abc import ABC, abstractmethod

import numpy as np

from ..common.kernels import calculate_norm_dist
from ..exceptions import ConfigurationError


class Reading(ABC):
    """Measurement capability consumed by the particle filter."""

    @abstractmethod
    def likelihood(self, particle):
        """
        Unnormalized likelihood of this reading given ``particle``.

        Parameters
        ----------
        particle : Particle
            Pose hypothesis to score

        Returns
        -------
        float
            Likelihood, >= 0
        """


class PositionReading(Reading):
    """
    Noisy observation of the robot's (x, y) position.

    Parameters
    ----------
    x, y : float
        Observed position
    sigma : float, optional
        Standard deviation of the weight kernel (default: 0.1)
    """

    def __init__(self, x, y, sigma=0.1):
        if not sigma > 0:
            raise ConfigurationError(f"sigma must be positive, got {sigma}")
        self.x = float(x)
        self.y = float(y)
        self.sigma = float(sigma)

    def likelihood(self, particle):
        distance = math.hypot(self.x - particle.x, self.y - particle.y)
        return calculate_norm_dist(distance, 0.0, self.sigma)

    def __repr__(self):
        return f"PositionReading(x={self.x}, y={self.y}, sigma={self.sigma})"


class RangeReading(Reading):
    """
    Ranges measured from the robot to fixed anchors (beacons).

    For each anchor the residual is the difference between the particle's
    distance to that anchor and the measured range. Anchors are treated as
    independent, so the likelihood is the product of per-anchor densities.

    Parameters
    ----------
    anchors : array_like
        Anchor positions, shape (M, 2)
    ranges : array_like
        Measured ranges to each anchor, shape (M,)
    sigma : float, optional
        Standard deviation of the range noise (default: 0.1)
    """

    def __init__(self, anchors, ranges, sigma=0.1):
        anchors = np.asarray(anchors, dtype=float)
        ranges = np.asarray(ranges, dtype=float)

        if anchors.ndim != 2 or anchors.shape[1] != 2:
            raise ConfigurationError(f"anchors must have shape (M, 2), got {anchors.shape}")
        if ranges.shape != (anchors.shape[0],):
            raise ConfigurationError(
                f"Expected {anchors.shape[0]} ranges, got shape {ranges.shape}"
            )
        if anchors.shape[0] == 0:
            raise ConfigurationError("RangeReading needs at least one anchor")
        if not sigma > 0:
            raise ConfigurationError(f"sigma must be positive, got {sigma}")

        self.anchors = anchors
        self.ranges = ranges
        self.sigma = float(sigma)

    @classmethod
    def from_pose(cls, x, y, anchors, sigma=0.1, noise=None):
        """
        Build the reading a robot at (x, y) would take.

        Parameters
        ----------
        x, y : float
            True robot position
        anchors : array_like
            Anchor positions (M, 2)
        sigma : float, optional
            Range noise standard deviation
        noise : object, optional
            Provider with ``sample(mean, sigma)``; if None the ranges are exact
        """
        anchors = np.asarray(anchors, dtype=float)
        ranges = np.hypot(anchors[:, 0] - x, anchors[:, 1] - y)
        if noise is not None:
            ranges = ranges + np.array([noise.sample(0.0, sigma) for _ in ranges])
        return cls(anchors, ranges, sigma=sigma)

    def likelihood(self, particle):
        predicted = np.hypot(self.anchors[:, 0] - particle.x,
                             self.anchors[:, 1] - particle.y)
        densities = calculate_norm_dist(predicted - self.ranges, 0.0, self.sigma)
        return float(np.prod(densities))

    def __repr__(self):
        return f"RangeReading(anchors={len(self.anchors)}, sigma={self.sigma})"
