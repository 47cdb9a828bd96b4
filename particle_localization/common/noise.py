"""
Gaussian noise provider.

The filter draws process noise and resampling jitter through an object
exposing ``sample(mean, sigma)``. ``GaussianNoise`` is the default provider,
backed by a seedable ``numpy.random.Generator``.

Concurrency
-----------
A ``GaussianNoise`` instance owns mutable generator state and is not
thread-safe. Never share one instance between threads; call ``spawn`` to
get independent child providers, one per worker.
"""

import numpy as np


class GaussianNoise:
    """
    Normally distributed noise source.

    Parameters
    ----------
    rng : np.random.Generator or int or None, optional
        Generator to draw from, or a seed for a new one. None seeds
        from the operating system.
    """

    def __init__(self, rng=None):
        if isinstance(rng, np.random.Generator):
            self.rng = rng
        else:
            self.rng = np.random.default_rng(rng)

    def sample(self, mean=0.0, sigma=1.0):
        """Draw one sample from N(mean, sigma**2)."""
        return float(self.rng.normal(mean, sigma))

    def spawn(self, n):
        """
        Create ``n`` statistically independent child providers.

        Children are seeded from this provider's generator, so a seeded
        parent yields a reproducible set of children.
        """
        return [GaussianNoise(child) for child in self.rng.spawn(n)]

    def __repr__(self):
        return f"GaussianNoise(rng={self.rng!r})"
