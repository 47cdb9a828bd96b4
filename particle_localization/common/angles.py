"""
Angle utilities for pose estimation.

Headings are kept in [0, 2*pi). Helpers here wrap headings after a motion
step, average headings, and compute differences across the discontinuity.
"""

import numpy as np

TWO_PI = 2.0 * np.pi


def normalize_heading(heading):
    """
    Wrap a heading into [0, 2*pi) with a single correction.

    Motion and jitter steps change the heading by a bounded amount per call,
    so one add or subtract of 2*pi is enough.

    Parameters
    ----------
    heading : float
        Angle in radians, expected within (-2*pi, 4*pi)

    Returns
    -------
    float
        Heading in [0, 2*pi)
    """
    if heading < 0.0:
        heading += TWO_PI
    elif heading >= TWO_PI:
        heading -= TWO_PI
    # -tiny + 2*pi rounds to exactly 2*pi
    if heading >= TWO_PI:
        heading = 0.0
    return heading


def wrap_to_two_pi(angle):
    """
    Wrap arbitrary angle(s) to [0, 2*pi) using a modulo.

    Parameters
    ----------
    angle : float or np.ndarray
        Angle(s) in radians

    Returns
    -------
    float or np.ndarray
        Wrapped angle(s) in [0, 2*pi)
    """
    wrapped = np.mod(angle, TWO_PI)
    return np.where(wrapped >= TWO_PI, 0.0, wrapped)


def angle_diff(angle1, angle2):
    """
    Smallest signed difference between two angles, in [-pi, pi].

    Examples
    --------
    >>> float(angle_diff(0.1, 2 * np.pi - 0.1))
    0.2
    """
    diff = np.asarray(angle1) - np.asarray(angle2)
    return np.arctan2(np.sin(diff), np.cos(diff))


def circular_mean(angles, weights=None):
    """
    Compute the circular mean of angles.

    Uses atan2(sum(sin), sum(cos)) so that headings on both sides of
    zero average correctly, and maps the result into [0, 2*pi).

    Parameters
    ----------
    angles : np.ndarray
        Array of angles in radians
    weights : np.ndarray, optional
        Weights for each angle. If None, uniform weights are used.

    Returns
    -------
    float
        Circular mean angle in [0, 2*pi)
    """
    angles = np.asarray(angles, dtype=float)
    if weights is None:
        weights = np.ones(len(angles))
    else:
        weights = np.asarray(weights, dtype=float)

    sin_sum = np.dot(np.sin(angles), weights)
    cos_sum = np.dot(np.cos(angles), weights)

    return float(wrap_to_two_pi(np.arctan2(sin_sum, cos_sum)))
