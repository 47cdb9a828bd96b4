"""
Particle filter configuration.

Groups the construction parameters of ``ParticleFilter`` with the defaults
of the demo driver (500 particles over a 10 x 10 field).
"""

import math
import numbers

from .exceptions import ConfigurationError, EmptyResampleTargetError

HEADING_MEANS = ('arithmetic', 'circular')


class ParticleFilterConfig:
    """
    Validated parameter set for a particle filter.

    Parameters
    ----------
    num_samples : int, optional
        Number of particles (default: 500)
    resample_fraction : float, optional
        Fraction of particles drawn by the resampling wheel, in (0, 1].
        The rest are refilled uniformly at random (default: 1.0)
    bounds : tuple, optional
        Spatial domain (x_min, x_max, y_min, y_max) (default: (0, 10, 0, 10))
    location_noise_sigma : float, optional
        Position jitter applied to resampled particles (default: 0.1)
    distance_noise_sigma : float, optional
        Process noise on travelled distance (default: 0.1)
    angle_noise_sigma : float, optional
        Process noise on heading change and heading jitter (default: pi/16)
    workers : int, optional
        Threads used by the weighting and motion passes (default: 1)
    heading_mean : str, optional
        'arithmetic' or 'circular' aggregation of the heading estimate
    """

    def __init__(self, num_samples=500, resample_fraction=1.0,
                 bounds=(0.0, 10.0, 0.0, 10.0), location_noise_sigma=0.1,
                 distance_noise_sigma=0.1, angle_noise_sigma=math.pi / 16,
                 workers=1, heading_mean='arithmetic'):
        self.num_samples = num_samples
        self.resample_fraction = resample_fraction
        self.bounds = tuple(float(b) for b in bounds)
        self.location_noise_sigma = location_noise_sigma
        self.distance_noise_sigma = distance_noise_sigma
        self.angle_noise_sigma = angle_noise_sigma
        self.workers = workers
        self.heading_mean = heading_mean

        self.validate()

    @property
    def resample_count(self):
        return int(round(self.num_samples * self.resample_fraction))

    @property
    def refill_count(self):
        return self.num_samples - self.resample_count

    def validate(self):
        """Raise ConfigurationError if any parameter is out of range."""
        if isinstance(self.num_samples, bool) or not isinstance(self.num_samples, numbers.Integral):
            raise ConfigurationError(
                f"num_samples must be an integer, got {self.num_samples!r}"
            )
        if self.num_samples <= 0:
            raise ConfigurationError(f"num_samples must be positive, got {self.num_samples}")

        if not 0.0 < self.resample_fraction <= 1.0:
            raise ConfigurationError(
                f"resample_fraction must be in (0, 1], got {self.resample_fraction}"
            )
        if self.resample_count == 0:
            raise EmptyResampleTargetError(self.num_samples, self.resample_fraction)

        if len(self.bounds) != 4:
            raise ConfigurationError(
                f"bounds must be (x_min, x_max, y_min, y_max), got {self.bounds}"
            )
        x_min, x_max, y_min, y_max = self.bounds
        if not (math.isfinite(x_min) and math.isfinite(x_max) and x_min < x_max):
            raise ConfigurationError(f"Invalid x range [{x_min}, {x_max}]")
        if not (math.isfinite(y_min) and math.isfinite(y_max) and y_min < y_max):
            raise ConfigurationError(f"Invalid y range [{y_min}, {y_max}]")

        for name in ('location_noise_sigma', 'distance_noise_sigma', 'angle_noise_sigma'):
            value = getattr(self, name)
            if not value > 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")

        if isinstance(self.workers, bool) or not isinstance(self.workers, numbers.Integral) or self.workers < 1:
            raise ConfigurationError(f"workers must be an integer >= 1, got {self.workers!r}")

        if self.heading_mean not in HEADING_MEANS:
            raise ConfigurationError(
                f"Unknown heading_mean: {self.heading_mean}. Use one of {HEADING_MEANS}"
            )

    @classmethod
    def from_dict(cls, params):
        """Build a configuration from a mapping, rejecting unknown keys."""
        known = set(cls().to_dict())
        unknown = set(params) - known
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {sorted(unknown)}")
        return cls(**params)

    def to_dict(self):
        return {
            'num_samples': self.num_samples,
            'resample_fraction': self.resample_fraction,
            'bounds': self.bounds,
            'location_noise_sigma': self.location_noise_sigma,
            'distance_noise_sigma': self.distance_noise_sigma,
            'angle_noise_sigma': self.angle_noise_sigma,
            'workers': self.workers,
            'heading_mean': self.heading_mean,
        }

    def __eq__(self, other):
        if not isinstance(other, ParticleFilterConfig):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        params = ', '.join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"ParticleFilterConfig({params})"
