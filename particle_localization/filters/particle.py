"""
Particle Filter (PF) implementation for 2-D pose localization.

A Monte Carlo localization filter over poses (x, y, heading). Each cycle
weights the particles with a measurement model, draws a new population
with a resampling wheel, jitters the drawn particles, and refills a share
of the population uniformly at random to recover from divergence. Motion
commands propagate every particle through a noisy unicycle model.
"""

import logging
import math
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from ..common.angles import TWO_PI, circular_mean, normalize_heading
from ..common.noise import GaussianNoise
from ..config import ParticleFilterConfig
from ..exceptions import ConfigurationError, DegenerateWeightsError, StalledWheelError
from ..models.particle import Particle

logger = logging.getLogger(__name__)

# A wheel walk covers at most two revolutions when weights are normalized
WHEEL_STEP_FACTOR = 3


class ParticleFilter:
    """
    Particle filter for 2-D pose estimation.

    The user must provide, per cycle:
    - a reading exposing ``likelihood(particle) -> float >= 0``
    - a motion command (distance, angle)

    Attributes
    ----------
    config : ParticleFilterConfig
        Validated parameters
    particles : list of Particle
        Current population, owned by the filter
    max_weight : float
        Largest weight of the last weighting pass
    sum_weight : float
        Sum of weights of the last weighting pass
    iteration : int
        Number of completed resampling cycles
    estimated_x, estimated_y, estimated_heading : float
        Last computed pose estimate

    Notes
    -----
    The filter draws all randomness from ``rng`` (initial placement, wheel
    draws, refill) and ``noise`` (jitter, process noise). Neither is
    thread-safe. With ``workers > 1`` the weighting pass shares nothing
    mutable between threads, and the motion pass gives each thread its own
    provider from ``noise.spawn``. Providers without ``spawn`` run the
    motion pass sequentially.

    Examples
    --------
    >>> from particle_localization import ParticleFilter, PositionReading
    >>> pf = ParticleFilter(500, 1.0, (0, 10, 0, 10), 0.1, 0.1, np.pi / 16, seed=1)
    >>> pf.update(PositionReading(1.0, 1.0))
    >>> pf.move_particles(0.5, 0.0)
    >>> x, y = pf.get_position()
    """

    def __init__(self, num_samples, resample_fraction, bounds,
                 location_noise_sigma, distance_noise_sigma, angle_noise_sigma,
                 noise=None, rng=None, seed=None, workers=1,
                 heading_mean='arithmetic'):
        """
        Initialize the filter and spread particles over the domain.

        Parameters
        ----------
        num_samples : int
            Number of particles
        resample_fraction : float
            Fraction in (0, 1] of particles drawn by the resampling wheel
        bounds : tuple
            Spatial domain (x_min, x_max, y_min, y_max)
        location_noise_sigma : float
            Std. dev. of position jitter after resampling
        distance_noise_sigma : float
            Std. dev. of process noise on travelled distance
        angle_noise_sigma : float
            Std. dev. of heading jitter and process noise on turns
        noise : object, optional
            Provider with ``sample(mean, sigma)``. Defaults to a
            GaussianNoise sharing ``rng``.
        rng : np.random.Generator, optional
            Generator for placement and wheel draws
        seed : int, optional
            Seed for a new generator. Mutually exclusive with ``rng``.
        workers : int, optional
            Threads for the weighting and motion passes (default: 1)
        heading_mean : str, optional
            'arithmetic' (default) or 'circular' heading aggregation

        Raises
        ------
        ConfigurationError
            If a parameter is out of range, or both ``rng`` and ``seed``
            are given
        """
        if rng is not None and seed is not None:
            raise ConfigurationError("Pass either rng or seed, not both")

        self.config = ParticleFilterConfig(
            num_samples=num_samples,
            resample_fraction=resample_fraction,
            bounds=bounds,
            location_noise_sigma=location_noise_sigma,
            distance_noise_sigma=distance_noise_sigma,
            angle_noise_sigma=angle_noise_sigma,
            workers=workers,
            heading_mean=heading_mean,
        )

        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.noise = noise if noise is not None else GaussianNoise(self.rng)

        self.max_weight = 0.0
        self.sum_weight = 0.0
        self.iteration = 0
        self._weighted = False

        self.estimated_x = 0.0
        self.estimated_y = 0.0
        self.estimated_heading = 0.0

        self.particles = [self._create_particle() for _ in range(self.num_samples)]

        logger.info(
            "Created particle filter: %d particles, resample fraction %.3f, bounds %s",
            self.num_samples, self.resample_fraction, self.config.bounds,
        )

    @classmethod
    def from_config(cls, config, noise=None, rng=None, seed=None):
        """Create a filter from a ParticleFilterConfig."""
        return cls(noise=noise, rng=rng, seed=seed, **config.to_dict())

    @property
    def num_samples(self):
        return self.config.num_samples

    @property
    def resample_fraction(self):
        return self.config.resample_fraction

    @property
    def workers(self):
        return self.config.workers

    @property
    def estimate(self):
        """Last pose estimate as (x, y, heading)."""
        return self.estimated_x, self.estimated_y, self.estimated_heading

    def _create_particle(self):
        """Uniformly random, unweighted particle inside the domain."""
        x_min, x_max, y_min, y_max = self.config.bounds
        x = x_min + (x_max - x_min) * self.rng.random()
        y = y_min + (y_max - y_min) * self.rng.random()
        heading = normalize_heading(self.rng.random() * TWO_PI)
        return Particle(x, y, heading, 0.0)

    def _chunks(self):
        """Contiguous index ranges, one per worker."""
        n_chunks = min(self.workers, len(self.particles))
        edges = np.linspace(0, len(self.particles), n_chunks + 1).astype(int)
        return [(edges[i], edges[i + 1]) for i in range(n_chunks)]

    #======================================================
    # Weighting
    #======================================================
    def calculate_weights(self, reading):
        """
        Weight every particle by the likelihood of ``reading``.

        Resets ``max_weight`` and ``sum_weight`` before the pass. Weights
        are stored unnormalized.

        Parameters
        ----------
        reading : object
            Measurement exposing ``likelihood(particle) -> float >= 0``

        Raises
        ------
        ValueError
            If a likelihood is negative or not finite. The population is
            then left unweighted and must be weighted again before the
            next resample.
        """
        self.sum_weight = 0.0
        self.max_weight = 0.0
        self._weighted = False

        if self.workers > 1 and len(self.particles) > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                futures = [
                    executor.submit(_weigh_chunk, reading, self.particles[start:stop])
                    for start, stop in self._chunks()
                ]
                # Reduce in chunk order so results do not depend on scheduling
                partials = [future.result() for future in futures]
        else:
            partials = [_weigh_chunk(reading, self.particles)]

        sum_weight = 0.0
        max_weight = 0.0
        for chunk_sum, chunk_max in partials:
            sum_weight += chunk_sum
            max_weight = max(max_weight, chunk_max)

        self.sum_weight = sum_weight
        self.max_weight = max_weight
        self._weighted = True

        logger.debug(
            "Weighting pass: sum_weight=%.6g max_weight=%.6g",
            self.sum_weight, self.max_weight,
        )

    def normalize_weights(self):
        """
        Divide every weight by ``sum_weight`` so that they sum to one.

        ``max_weight`` is scaled the same way. Repeated calls are no-ops.

        Raises
        ------
        DegenerateWeightsError
            If no weighted population exists or all weights are zero
        """
        if not self._weighted:
            logger.warning("Resample requested without a weighting pass")
            raise DegenerateWeightsError(
                0.0, "population is unweighted; call calculate_weights first"
            )
        if not self.sum_weight > 0:
            logger.warning("All particle weights are zero; cannot resample")
            raise DegenerateWeightsError(self.sum_weight)

        if self.sum_weight == 1.0:
            return

        for particle in self.particles:
            particle.weight /= self.sum_weight
        self.max_weight /= self.sum_weight
        self.sum_weight = 1.0

    def effective_sample_size(self):
        """
        Effective sample size of the current weights: 1 / sum(w_i**2).

        Returns
        -------
        float
            Value between 1 and num_samples; low values mean few particles
            carry the weight
        """
        if not self._weighted or not self.sum_weight > 0:
            raise DegenerateWeightsError(self.sum_weight)
        weights = np.array([p.weight for p in self.particles]) / self.sum_weight
        return float(1.0 / np.sum(weights ** 2))

    #======================================================
    # Resampling
    #======================================================
    def resample_and_fuzz(self):
        """
        Draw a new population with the resampling wheel.

        ``resample_count`` particles are drawn in proportion to weight and
        jittered; the remaining ``refill_count`` are uniformly random. The
        estimate is the mean pose of the drawn particles only.

        Raises
        ------
        DegenerateWeightsError
            If all weights are zero
        StalledWheelError
            If the wheel cannot select a particle

        On error the population and the estimate are left unchanged.
        """
        self.normalize_weights()

        weights = np.array([p.weight for p in self.particles])
        resample_count = self.config.resample_count
        refill_count = self.config.refill_count

        loc_sigma = self.config.location_noise_sigma
        ang_sigma = self.config.angle_noise_sigma

        # Resampling wheel, after Sebastian Thrun's formulation
        resampled = []
        for _ in range(resample_count):
            chosen = self.particles[self._spin_wheel(weights, resample_count)]
            resampled.append(Particle(
                chosen.x + self.noise.sample(0.0, loc_sigma),
                chosen.y + self.noise.sample(0.0, loc_sigma),
                normalize_heading(chosen.heading + self.noise.sample(0.0, ang_sigma)),
                0.0,
            ))

        self._set_estimate(resampled)

        # Random particles in case the filter lost track of the true pose
        refill = [self._create_particle() for _ in range(refill_count)]

        self.particles = resampled + refill
        self.iteration += 1
        self._weighted = False

        logger.debug(
            "Resample %d: %d drawn, %d refilled, estimate=(%.4f, %.4f, %.4f)",
            self.iteration, resample_count, refill_count,
            self.estimated_x, self.estimated_y, self.estimated_heading,
        )

    def _spin_wheel(self, weights, start_range):
        """
        Select one index with probability proportional to its weight.

        Parameters
        ----------
        weights : np.ndarray
            Normalized weights of the population
        start_range : int
            Starting index is drawn uniformly from [0, start_range)

        Returns
        -------
        int
            Selected index
        """
        if not self.max_weight > 0:
            logger.warning("Resampling wheel stalled: max_weight=%s", self.max_weight)
            raise StalledWheelError(self.max_weight)

        n = len(weights)
        max_steps = WHEEL_STEP_FACTOR * n
        index = int(self.rng.integers(start_range))
        beta = self.rng.random() * 2.0 * self.max_weight

        steps = 0
        while beta >= weights[index]:
            beta -= weights[index]
            index = (index + 1) % n
            steps += 1
            if steps > max_steps:
                logger.warning("Resampling wheel stalled after %d steps", steps)
                raise StalledWheelError(self.max_weight, steps)

        return index

    def update(self, reading):
        """Weight the population with ``reading`` and resample."""
        self.calculate_weights(reading)
        self.resample_and_fuzz()

    #======================================================
    # Motion
    #======================================================
    def move_particles(self, distance, angle):
        """
        Propagate every particle through the noisy motion model.

        Each particle turns by ``angle + N(0, angle_noise_sigma)`` and drives
        ``distance + N(0, distance_noise_sigma)``, with independent draws.
        The estimate becomes the mean pose of the whole population.

        Parameters
        ----------
        distance : float
            Commanded travel distance
        angle : float
            Commanded heading change in radians
        """
        dist_sigma = self.config.distance_noise_sigma
        ang_sigma = self.config.angle_noise_sigma

        spawn = getattr(self.noise, 'spawn', None)
        if self.workers > 1 and len(self.particles) > 1 and spawn is not None:
            chunks = self._chunks()
            providers = spawn(len(chunks))
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                futures = [
                    executor.submit(_move_chunk, self.particles[start:stop], provider,
                                    distance, angle, dist_sigma, ang_sigma)
                    for (start, stop), provider in zip(chunks, providers)
                ]
                for future in futures:
                    future.result()
        else:
            _move_chunk(self.particles, self.noise, distance, angle, dist_sigma, ang_sigma)

        self._set_estimate(self.particles)

    #======================================================
    # Estimate and accessors
    #======================================================
    def _set_estimate(self, particles):
        xs = np.array([p.x for p in particles])
        ys = np.array([p.y for p in particles])
        headings = np.array([p.heading for p in particles])

        self.estimated_x = float(np.mean(xs))
        self.estimated_y = float(np.mean(ys))
        if self.config.heading_mean == 'circular':
            self.estimated_heading = circular_mean(headings)
        else:
            self.estimated_heading = float(np.mean(headings))

    def get_position(self):
        """Estimated (x, y) position."""
        return self.estimated_x, self.estimated_y

    def get_heading(self):
        """Estimated heading in radians."""
        return self.estimated_heading

    def get_particles(self):
        """
        Get a copy of the current population.

        Returns
        -------
        np.ndarray
            Array (num_samples, 4) with columns [x, y, heading, weight]
        """
        return np.array([p.as_tuple() for p in self.particles], dtype=float).reshape(-1, 4)


def _weigh_chunk(reading, particles):
    """Weight ``particles`` in place and return (sum, max) of the weights."""
    total = 0.0
    largest = 0.0
    for particle in particles:
        weight = float(reading.likelihood(particle))
        if not math.isfinite(weight) or weight < 0:
            raise ValueError(
                f"Reading {reading!r} returned invalid likelihood {weight} for {particle!r}"
            )
        particle.update_weight(weight)
        total += weight
        if weight > largest:
            largest = weight
    return total, largest


def _move_chunk(particles, noise, distance, angle, dist_sigma, ang_sigma):
    for particle in particles:
        turn = angle + noise.sample(0.0, ang_sigma)
        # Reduce to [-pi, pi] so a single heading wrap is enough
        particle.move(distance + noise.sample(0.0, dist_sigma),
                      math.remainder(turn, TWO_PI))


def create_pf(num_samples, resample_fraction, x_min, x_max, y_min, y_max,
              location_noise_sigma, distance_noise_sigma, angle_noise_sigma,
              **kwargs):
    """
    Create a particle filter over the rectangle [x_min, x_max] x [y_min, y_max].

    Keyword arguments (noise, rng, seed, workers, heading_mean) are passed
    to ParticleFilter.
    """
    return ParticleFilter(
        num_samples,
        resample_fraction,
        (x_min, x_max, y_min, y_max),
        location_noise_sigma,
        distance_noise_sigma,
        angle_noise_sigma,
        **kwargs
    )
