"""
Likelihood kernels for measurement models.

Any measurement model reduces a particle to a residual and scores it with
one of these kernels.
"""

import math

import numpy as np

from ..exceptions import ConfigurationError

_SQRT_TWO_PI = math.sqrt(2.0 * math.pi)


def calculate_norm_dist(x, mu=0.0, sigma=1.0):
    """
    Gaussian probability density of x.

        f(x) = 1 / (sigma * sqrt(2*pi)) * exp(-0.5 * ((x - mu) / sigma)**2)

    Parameters
    ----------
    x : float or np.ndarray
        Value(s) at which to evaluate the density
    mu : float, optional
        Mean (default: 0)
    sigma : float, optional
        Standard deviation, must be positive (default: 1)

    Returns
    -------
    float or np.ndarray
        Density value(s); exactly 1 / (sigma * sqrt(2*pi)) at x == mu
    """
    if not sigma > 0:
        raise ConfigurationError(f"sigma must be positive, got {sigma}")

    z = (np.asarray(x, dtype=float) - mu) / sigma
    density = (1.0 / (sigma * _SQRT_TWO_PI)) * np.exp(-0.5 * z * z)

    if density.ndim == 0:
        return float(density)
    return density
