"""
Particle Filter Localization Example

Tracks a robot driving straight across a 10 x 10 field from noisy
position fixes, with 500 particles. Optionally switches to range readings
from four corner anchors.
"""

import numpy as np
import matplotlib.pyplot as plt
import logging
import sys
import os
from pathlib import Path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from particle_localization import ParticleFilterConfig, ParticleFilter, DegenerateWeightsError
from particle_localization.metrics import compute_all_metrics, print_metrics
from particle_localization.visualization import (plot_trajectory, plot_particles,
                                                 particle_covariance, plot_covariance_ellipse)

from trajectory_generators import (generate_straight_trajectory, generate_square_trajectory,
                                   generate_circular_trajectory,
                                   position_readings, range_readings)

# ============================================================================
# CONFIGURATION
# ============================================================================
USE_RANGE_READINGS = False  # True: ranges to anchors, False: position fixes
TRAJECTORY = 'straight'  # 'straight', 'square' or 'circle'
N_CYCLES = 20
STEP = 0.5
SEED = 7

ANCHORS = np.array([[0.0, 0.0], [10.0, 0.0], [10.0, 10.0], [0.0, 10.0]])

FILTER_CONFIG = ParticleFilterConfig(
    num_samples=500,
    resample_fraction=1.0,
    bounds=(0.0, 10.0, 0.0, 10.0),
    location_noise_sigma=0.1,
    distance_noise_sigma=0.1,
    angle_noise_sigma=np.pi / 16,
)

RESULTS_PATH = Path(__file__).parent.parent / 'results' / 'localization'
SHOW_PLOTS = False
# ============================================================================


def run_localization_example():
    """Run the particle filter localization example."""

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("\n" + "=" * 60)
    print("Particle Filter Example - 2D Pose Localization")
    print("=" * 60 + "\n")

    if USE_RANGE_READINGS:
        print(f"Using range readings from {len(ANCHORS)} anchors...")
        reading_fn = range_readings(ANCHORS)
    else:
        print("Using noisy position readings...")
        reading_fn = position_readings()

    if TRAJECTORY == 'circle':
        data = generate_circular_trajectory(N=N_CYCLES, reading_fn=reading_fn, seed=SEED)
    elif TRAJECTORY == 'square':
        data = generate_square_trajectory(reading_fn=reading_fn, seed=SEED)
    else:
        data = generate_straight_trajectory(N=N_CYCLES, step=STEP, reading_fn=reading_fn, seed=SEED)

    controls = data['controls']
    readings = data['readings']
    ground_truth = data['ground_truth']

    print(f"Initializing Particle Filter with {FILTER_CONFIG.num_samples} particles...")
    pf = ParticleFilter.from_config(FILTER_CONFIG, seed=SEED)

    estimates = np.zeros((len(controls), 3))

    print("Running Particle Filter...")
    for k, ((distance, angle), reading) in enumerate(zip(controls, readings)):
        try:
            pf.update(reading)
        except DegenerateWeightsError as e:
            # Keep the previous estimate and wait for the next reading
            print(f"  Step {k+1}: skipped resample ({e})")

        print(f"  Step {k+1}/{len(controls)} before move: truth=({ground_truth[k, 0]:.3f}, "
              f"{ground_truth[k, 1]:.3f}) estimate=({pf.estimated_x:.3f}, {pf.estimated_y:.3f})")

        pf.move_particles(distance, angle)
        estimates[k] = pf.estimate

    print("Particle Filter complete!\n")

    # Estimates after each move line up with ground truth poses 1..N
    metrics = compute_all_metrics(estimates, ground_truth[1:])
    print_metrics(metrics, filter_name="PF")

    print("\nGenerating plots...")
    RESULTS_PATH.mkdir(parents=True, exist_ok=True)

    fig1, _ = plot_trajectory(estimates, ground_truth=ground_truth[1:],
                              title="PF Localization",
                              save_path=RESULTS_PATH / 'pf_trajectory.png', show=SHOW_PLOTS)
    print(f"  Saved: {RESULTS_PATH / 'pf_trajectory.png'}")

    particles = pf.get_particles()
    fig2, ax2 = plt.subplots(figsize=(8, 8))
    mean, cov = particle_covariance(particles)
    plot_covariance_ellipse(mean, cov, confidence=0.95, ax=ax2, label="95% particle spread")
    plot_particles(particles, estimate=pf.get_position(),
                   truth=ground_truth[-1], bounds=FILTER_CONFIG.bounds,
                   show_headings=True, ax=ax2,
                   save_path=RESULTS_PATH / 'pf_particles.png', show=SHOW_PLOTS)
    print(f"  Saved: {RESULTS_PATH / 'pf_particles.png'}")

    plt.close(fig1)
    plt.close(fig2)

    print("\n" + "=" * 60)
    print("Particle Filter Example Complete!")
    print(f"Results saved to '{RESULTS_PATH}' directory")
    print("=" * 60)


if __name__ == "__main__":
    run_localization_example()
