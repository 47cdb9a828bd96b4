"""
Errors raised by the particle filter.

Every error here is recoverable by the caller: a failed resample leaves the
population and the last estimate untouched, so the caller can keep the
previous estimate or request a fresh reading.
"""


class ParticleFilterError(RuntimeError):
    """Base class for all particle filter errors."""


class ConfigurationError(ParticleFilterError, ValueError):
    """Invalid filter parameters, rejected at construction."""


class EmptyResampleTargetError(ConfigurationError):
    """num_samples * resample_fraction rounds to zero particles."""

    def __init__(self, num_samples, resample_fraction):
        self.num_samples = num_samples
        self.resample_fraction = resample_fraction
        super().__init__(
            f"resample_fraction={resample_fraction} of num_samples={num_samples} "
            f"resamples zero particles"
        )


class DegenerateWeightsError(ParticleFilterError):
    """All particle weights are zero, so they cannot be normalized."""

    def __init__(self, sum_weight, message=None):
        self.sum_weight = sum_weight
        super().__init__(
            message or f"sum of particle weights is {sum_weight}; "
            "the reading is implausible for every particle"
        )


class StalledWheelError(ParticleFilterError):
    """The resampling wheel could not select a particle."""

    def __init__(self, max_weight, steps=None):
        self.max_weight = max_weight
        self.steps = steps
        if steps is None:
            message = f"resampling wheel needs max_weight > 0, got {max_weight}"
        else:
            message = (
                f"resampling wheel did not stop after {steps} steps "
                f"(max_weight={max_weight})"
            )
        super().__init__(message)
