"""
Trajectory Generators for Localization Testing

This module generates ground-truth pose trajectories and the noisy readings
a robot would take along them, for exercising the particle filter.

All generators produce consistent output format:
    - controls: array of motion commands [distance, angle] (N, 2)
    - ground_truth: array of true poses [x, y, heading] (N + 1, 3)
    - readings: list of readings taken at poses 0..N-1 (before each move)
"""

import numpy as np
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from particle_localization import GaussianNoise, Particle, PositionReading, RangeReading


def simulate(start, controls, reading_fn, motion_noise_std=0.05, seed=None):
    """
    Drive a ground-truth robot through ``controls``.

    Parameters
    ----------
    start : tuple
        Initial pose (x, y, heading)
    controls : np.ndarray
        Motion commands [distance, angle] (N, 2)
    reading_fn : callable
        reading_fn(robot, noise) -> Reading, called before every move
    motion_noise_std : float, optional
        Std. dev. of the noise on the distance the robot actually drives
    seed : int, optional
        Seed for the noise generator

    Returns
    -------
    dict
        Dictionary with 'controls', 'ground_truth' and 'readings'
    """
    noise = GaussianNoise(seed)
    robot = Particle(*start, weight=1.0)
    controls = np.asarray(controls, dtype=float)

    ground_truth = [(robot.x, robot.y, robot.heading)]
    readings = []

    for distance, angle in controls:
        readings.append(reading_fn(robot, noise))
        robot.move(distance + noise.sample(0.0, motion_noise_std), angle)
        ground_truth.append((robot.x, robot.y, robot.heading))

    return {
        'controls': controls,
        'ground_truth': np.array(ground_truth),
        'readings': readings,
    }


def position_readings(sigma=0.05, kernel_sigma=0.1):
    """Reading factory for noisy (x, y) fixes."""
    def reading_fn(robot, noise):
        return PositionReading(robot.x + noise.sample(0.0, sigma),
                               robot.y + noise.sample(0.0, sigma),
                               sigma=kernel_sigma)
    return reading_fn


def range_readings(anchors, sigma=0.05, kernel_sigma=0.2):
    """Reading factory for noisy ranges to fixed anchors."""
    anchors = np.asarray(anchors, dtype=float)

    def reading_fn(robot, noise):
        reading = RangeReading.from_pose(robot.x, robot.y, anchors, sigma=sigma, noise=noise)
        return RangeReading(reading.anchors, reading.ranges, sigma=kernel_sigma)
    return reading_fn


def generate_straight_trajectory(N=20, step=0.5, start=(1.0, 1.0, np.pi / 2),
                                 reading_fn=None, seed=None):
    """
    Straight-line drive north from (1, 1).

    Parameters
    ----------
    N : int, optional
        Number of cycles (default: 20)
    step : float, optional
        Distance per cycle (default: 0.5)
    start : tuple, optional
        Initial pose (default: (1, 1, pi/2))
    """
    controls = np.column_stack([np.full(N, step), np.zeros(N)])
    return simulate(start, controls, reading_fn or position_readings(), seed=seed)


def generate_square_trajectory(side_steps=5, step=0.5, start=(2.0, 2.0, 0.0),
                               reading_fn=None, seed=None):
    """
    Square path: ``side_steps`` straight moves per side, then a left turn.
    """
    controls = []
    for side in range(4):
        for k in range(side_steps):
            # Turn on the first move of every side after the first
            angle = np.pi / 2 if (k == 0 and side > 0) else 0.0
            controls.append((step, angle))
    return simulate(start, np.array(controls), reading_fn or position_readings(), seed=seed)


def generate_circular_trajectory(N=40, radius=2.5, center=(5.0, 5.0),
                                 reading_fn=None, seed=None):
    """
    Circle of ``radius`` about ``center`` traversed counter-clockwise in N moves.
    """
    dtheta = 2 * np.pi / N
    chord = 2 * radius * np.sin(dtheta / 2)
    start = (center[0] + radius, center[1], np.pi / 2)
    # First move turns half a step so each chord is tangent-aligned
    controls = np.column_stack([np.full(N, chord), np.full(N, dtheta)])
    controls[0, 1] = dtheta / 2
    return simulate(start, controls, reading_fn or position_readings(), seed=seed)
