"""
Trajectory and particle cloud visualization.

Provides functions for plotting pose trajectories, the particle population,
and the localization error of a run.
"""

import numpy as np
import matplotlib.pyplot as plt

from ..metrics.performance import position_error


def plot_trajectory(estimates, ground_truth=None, title="Robot Trajectory",
                    figsize=(10, 8), save_path=None, show=True):
    """
    Plot 2D trajectory of the pose estimate.

    Parameters
    ----------
    estimates : np.ndarray
        Estimated poses (N, >=2) where first two columns are x, y
    ground_truth : np.ndarray, optional
        True poses in the same format
    title : str, optional
        Plot title
    figsize : tuple, optional
        Figure size (width, height)
    save_path : str, optional
        Path to save figure. If None, figure is not saved.
    show : bool, optional
        Whether to display the plot

    Returns
    -------
    fig, ax
        Matplotlib figure and axes
    """
    estimates = np.asarray(estimates)
    fig, ax = plt.subplots(figsize=figsize)

    x_est, y_est = estimates[:, 0], estimates[:, 1]
    ax.plot(x_est, y_est, 'b-', linewidth=2, label='Estimate', alpha=0.8)
    ax.plot(x_est[0], y_est[0], 'go', markersize=10, label='Start')
    ax.plot(x_est[-1], y_est[-1], 'r^', markersize=10, label='End')

    if ground_truth is not None:
        ground_truth = np.asarray(ground_truth)
        ax.plot(ground_truth[:, 0], ground_truth[:, 1], 'k--', linewidth=1.5,
                label='Ground Truth', alpha=0.6)

    ax.set_xlabel('X Position (m)', fontsize=12)
    ax.set_ylabel('Y Position (m)', fontsize=12)
    ax.set_title(title, fontsize=14)
    ax.legend(fontsize=10)
    ax.grid(True, alpha=0.3)
    ax.axis('equal')

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')

    if show:
        plt.show()

    return fig, ax


def plot_particles(particles, estimate=None, truth=None, bounds=None,
                   show_headings=False, ax=None, title="Particle Population",
                   save_path=None, show=True):
    """
    Scatter plot of a particle population.

    Parameters
    ----------
    particles : np.ndarray
        Array (N, 4) [x, y, heading, weight], as returned by
        ParticleFilter.get_particles()
    estimate : tuple, optional
        Estimated pose (x, y[, heading])
    truth : tuple, optional
        True pose (x, y[, heading])
    bounds : tuple, optional
        Domain (x_min, x_max, y_min, y_max) used as axis limits
    show_headings : bool, optional
        Draw a short arrow per particle along its heading
    ax : matplotlib.axes.Axes, optional
        Axes to plot on. If None, creates new figure.

    Returns
    -------
    fig, ax
        Matplotlib figure and axes
    """
    particles = np.asarray(particles)
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 8))
    else:
        fig = ax.figure

    weights = particles[:, 3]
    # Unweighted populations are drawn with uniform marker size
    if np.any(weights > 0):
        sizes = 4 + 40 * weights / weights.max()
    else:
        sizes = np.full(len(particles), 4)

    ax.scatter(particles[:, 0], particles[:, 1], s=sizes, c='tab:red',
               alpha=0.4, label='Particles')

    if show_headings:
        ax.quiver(particles[:, 0], particles[:, 1],
                  np.cos(particles[:, 2]), np.sin(particles[:, 2]),
                  color='tab:red', alpha=0.3, width=0.002)

    if estimate is not None:
        ax.plot(estimate[0], estimate[1], 'bs', markersize=10, label='Estimate')
    if truth is not None:
        ax.plot(truth[0], truth[1], 'k*', markersize=14, label='Ground Truth')

    if bounds is not None:
        ax.set_xlim(bounds[0], bounds[1])
        ax.set_ylim(bounds[2], bounds[3])

    ax.set_xlabel('X Position (m)', fontsize=12)
    ax.set_ylabel('Y Position (m)', fontsize=12)
    ax.set_title(title, fontsize=14)
    ax.legend(fontsize=10, loc='best')
    ax.grid(True, alpha=0.3)
    ax.set_aspect('equal')

    if save_path:
        fig.savefig(save_path, dpi=300, bbox_inches='tight')

    if show:
        plt.show()

    return fig, ax


def plot_errors(estimates, ground_truth, title="Localization Error",
                figsize=(10, 4), save_path=None, show=True):
    """
    Plot position error per cycle.

    Returns
    -------
    fig, ax
        Matplotlib figure and axes
    """
    errors = position_error(estimates, ground_truth)

    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(np.arange(len(errors)), errors, 'b-', linewidth=2)
    ax.set_xlabel('Cycle', fontsize=12)
    ax.set_ylabel('Position Error (m)', fontsize=12)
    ax.set_title(title, fontsize=14)
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')

    if show:
        plt.show()

    return fig, ax
