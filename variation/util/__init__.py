"""Shared utilities for the variation engine."""

from variation.util.rng import (
    MissingRNGError,
    gaussian_noise_factor,
    perturb_with_gaussian_noise,
    require_rng_param,
)

__all__ = [
    "require_rng_param",
    "gaussian_noise_factor",
    "perturb_with_gaussian_noise",
    "MissingRNGError",
]
