"""
Performance metrics for evaluating localization quality.

Includes RMSE, MAE, and per-step position and heading errors for
trajectories of poses [x, y, heading].
"""

import numpy as np

from ..common.angles import angle_diff


def rmse(estimates, ground_truth, axis=0):
    """
    Root Mean Square Error.

    Parameters
    ----------
    estimates : np.ndarray
        Estimated states (N, dim) or (N,)
    ground_truth : np.ndarray
        True states (N, dim) or (N,)
    axis : int, optional
        Axis along which to compute RMSE

    Returns
    -------
    float or np.ndarray
        RMSE value(s)
    """
    estimates = np.asarray(estimates, dtype=float)
    ground_truth = np.asarray(ground_truth, dtype=float)

    squared_errors = (estimates - ground_truth) ** 2
    mean_squared_error = np.mean(squared_errors, axis=axis)

    return np.sqrt(mean_squared_error)


def mae(estimates, ground_truth, axis=0):
    """
    Mean Absolute Error.

    Parameters
    ----------
    estimates : np.ndarray
        Estimated states
    ground_truth : np.ndarray
        True states
    axis : int, optional
        Axis along which to compute MAE

    Returns
    -------
    float or np.ndarray
        MAE value(s)
    """
    estimates = np.asarray(estimates, dtype=float)
    ground_truth = np.asarray(ground_truth, dtype=float)

    return np.mean(np.abs(estimates - ground_truth), axis=axis)


def position_error(estimates, ground_truth):
    """
    Euclidean position error at each step.

    Parameters
    ----------
    estimates : np.ndarray
        Estimated poses (N, >=2); the first two columns are x, y
    ground_truth : np.ndarray
        True poses (N, >=2)

    Returns
    -------
    np.ndarray
        Distance between estimate and truth for each step (N,)
    """
    estimates = np.atleast_2d(np.asarray(estimates, dtype=float))
    ground_truth = np.atleast_2d(np.asarray(ground_truth, dtype=float))

    diff = estimates[:, :2] - ground_truth[:, :2]
    return np.hypot(diff[:, 0], diff[:, 1])


def heading_error(estimates, ground_truth):
    """
    Absolute heading error at each step, wrapped to [0, pi].

    Parameters
    ----------
    estimates : np.ndarray
        Estimated poses (N, 3); column 2 is the heading
    ground_truth : np.ndarray
        True poses (N, 3)

    Returns
    -------
    np.ndarray
        Heading error for each step (N,)
    """
    estimates = np.atleast_2d(np.asarray(estimates, dtype=float))
    ground_truth = np.atleast_2d(np.asarray(ground_truth, dtype=float))

    return np.abs(angle_diff(estimates[:, 2], ground_truth[:, 2]))


def compute_all_metrics(estimates, ground_truth):
    """
    Compute all available metrics for a pose trajectory.

    Parameters
    ----------
    estimates : np.ndarray
        Estimated poses (N, 2) or (N, 3)
    ground_truth : np.ndarray
        True poses, same shape as estimates

    Returns
    -------
    dict
        Dictionary with computed metrics
    """
    estimates = np.asarray(estimates, dtype=float)
    ground_truth = np.asarray(ground_truth, dtype=float)

    metrics = {}

    pos_err = position_error(estimates, ground_truth)
    metrics['rmse'] = rmse(estimates[:, :2], ground_truth[:, :2], axis=0)
    metrics['mae'] = mae(estimates[:, :2], ground_truth[:, :2], axis=0)
    metrics['position_error'] = pos_err
    metrics['position_rmse'] = float(np.sqrt(np.mean(pos_err ** 2)))
    metrics['final_position_error'] = float(pos_err[-1])

    # Heading metrics (require a heading column)
    if estimates.shape[1] > 2 and ground_truth.shape[1] > 2:
        head_err = heading_error(estimates, ground_truth)
        metrics['heading_error'] = head_err
        metrics['heading_mae'] = float(np.mean(head_err))

    return metrics


def print_metrics(metrics, filter_name="Filter"):
    """
    Print metrics in a formatted way.

    Parameters
    ----------
    metrics : dict
        Dictionary of metrics from compute_all_metrics
    filter_name : str, optional
        Name of the filter for display
    """
    print(f"\n{filter_name} Performance Metrics")
    print("=" * 50)

    if 'rmse' in metrics:
        print(f"RMSE [x, y]: {metrics['rmse']}")
    if 'mae' in metrics:
        print(f"MAE [x, y]: {metrics['mae']}")
    if 'position_rmse' in metrics:
        print(f"Position RMSE: {metrics['position_rmse']:.6f}")
    if 'final_position_error' in metrics:
        print(f"Final position error: {metrics['final_position_error']:.6f}")
    if 'heading_mae' in metrics:
        print(f"Heading MAE [rad]: {metrics['heading_mae']:.6f}")

    print("=" * 50)
