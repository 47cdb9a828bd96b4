"""
Uncertainty visualization for particle populations.

Functions for summarizing the spread of the particles as a covariance and
drawing its confidence ellipse.
"""

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Ellipse
from scipy.stats import chi2


def particle_covariance(particles):
    """
    Position mean and covariance of a particle population.

    Weighted by the particle weights when any is positive, unweighted
    otherwise.

    Parameters
    ----------
    particles : np.ndarray
        Array (N, 4) [x, y, heading, weight]

    Returns
    -------
    mean : np.ndarray
        Mean position (2,)
    cov : np.ndarray
        Position covariance (2, 2)
    """
    particles = np.asarray(particles, dtype=float)
    positions = particles[:, :2]
    weights = particles[:, 3]

    if np.any(weights > 0):
        mean = np.average(positions, weights=weights, axis=0)
        cov = np.cov(positions, rowvar=False, aweights=weights)
    else:
        mean = positions.mean(axis=0)
        cov = np.cov(positions, rowvar=False)

    return mean, np.atleast_2d(cov)


def plot_covariance_ellipse(mean, cov, confidence=0.95, ax=None, **kwargs):
    """
    Plot the confidence ellipse of a 2D Gaussian.

    Parameters
    ----------
    mean : array-like
        Mean of distribution [x, y]
    cov : np.ndarray
        2x2 covariance matrix
    confidence : float, optional
        Probability mass enclosed by the ellipse (default: 0.95)
    ax : matplotlib.axes.Axes, optional
        Axes to plot on. If None, uses the current axes.
    **kwargs : dict
        Additional arguments passed to Ellipse patch

    Returns
    -------
    matplotlib.patches.Ellipse
        The ellipse patch object
    """
    if ax is None:
        ax = plt.gca()

    mean = np.asarray(mean)
    cov = np.asarray(cov)

    eigenvalues, eigenvectors = np.linalg.eigh(cov)
    angle = np.degrees(np.arctan2(eigenvectors[1, 0], eigenvectors[0, 0]))

    # Chi-squared quantile with 2 degrees of freedom scales the axes
    scale = np.sqrt(chi2.ppf(confidence, df=2))
    width, height = 2 * scale * np.sqrt(np.maximum(eigenvalues, 0.0))

    kwargs.setdefault('facecolor', 'none')
    kwargs.setdefault('edgecolor', 'tab:blue')
    ellipse = Ellipse(xy=mean, width=width, height=height, angle=angle, **kwargs)
    ax.add_patch(ellipse)

    return ellipse
