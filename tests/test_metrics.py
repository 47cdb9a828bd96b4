"""
Tests for evaluation metrics and plotting helpers.
"""

import math

import matplotlib.pyplot as plt
import numpy as np
import pytest

from particle_localization.metrics import (compute_all_metrics, heading_error, mae,
                                           position_error, print_metrics, rmse)
from particle_localization.visualization import (particle_covariance, plot_covariance_ellipse,
                                                 plot_errors, plot_particles, plot_trajectory)

ESTIMATES = np.array([[0.0, 0.0, 0.1], [3.0, 4.0, 6.2], [1.0, 1.0, 3.0]])
TRUTH = np.array([[0.0, 0.0, 0.1], [0.0, 0.0, 0.0], [1.0, 2.0, 3.0]])


def test_position_error():
    np.testing.assert_allclose(position_error(ESTIMATES, TRUTH), [0.0, 5.0, 1.0])


def test_heading_error_wraps():
    errors = heading_error(ESTIMATES, TRUTH)
    assert errors[1] == pytest.approx(2 * math.pi - 6.2)
    assert errors[0] == pytest.approx(0.0)


def test_rmse_and_mae():
    np.testing.assert_allclose(rmse(ESTIMATES[:, :2], TRUTH[:, :2]),
                               [math.sqrt(3.0), math.sqrt(17.0 / 3.0)])
    np.testing.assert_allclose(mae(ESTIMATES[:, :2], TRUTH[:, :2]), [1.0, 5.0 / 3.0])


def test_compute_all_metrics(capsys):
    metrics = compute_all_metrics(ESTIMATES, TRUTH)
    assert metrics['final_position_error'] == pytest.approx(1.0)
    assert metrics['position_rmse'] == pytest.approx(math.sqrt(26.0 / 3.0))
    assert 'heading_mae' in metrics

    print_metrics(metrics, filter_name="PF")
    assert "PF Performance Metrics" in capsys.readouterr().out


def test_compute_all_metrics_without_heading():
    metrics = compute_all_metrics(ESTIMATES[:, :2], TRUTH[:, :2])
    assert 'heading_error' not in metrics


def test_particle_covariance_weighted():
    particles = np.array([[0.0, 0.0, 0.0, 1.0],
                          [2.0, 0.0, 0.0, 1.0],
                          [100.0, 100.0, 0.0, 0.0]])
    mean, cov = particle_covariance(particles)
    np.testing.assert_allclose(mean, [1.0, 0.0])
    assert cov.shape == (2, 2)


def test_plots_render_off_screen(tmp_path):
    rng = np.random.default_rng(0)
    particles = np.column_stack([rng.uniform(0, 10, (50, 2)),
                                 rng.uniform(0, 2 * np.pi, 50),
                                 rng.random(50)])

    fig, ax = plot_particles(particles, estimate=(5.0, 5.0), truth=(5.5, 5.0),
                             bounds=(0, 10, 0, 10), show_headings=True,
                             save_path=tmp_path / 'particles.png', show=False)
    mean, cov = particle_covariance(particles)
    plot_covariance_ellipse(mean, cov, ax=ax)
    plt.close(fig)

    fig, _ = plot_trajectory(ESTIMATES, ground_truth=TRUTH,
                             save_path=tmp_path / 'trajectory.png', show=False)
    plt.close(fig)

    fig, _ = plot_errors(ESTIMATES, TRUTH, show=False)
    plt.close(fig)

    assert (tmp_path / 'particles.png').exists()
    assert (tmp_path / 'trajectory.png').exists()
