"""RNG utilities for deterministic variation.

Every operator takes its random source as an explicit parameter. These helpers
fail loudly if one is missing, rather than silently creating an unseeded
fallback, and provide the Box-Muller noise used by Gaussian mutation and ULTRA.
"""

import math
import random
from typing import Optional

from variation.exceptions import VariationError


class MissingRNGError(VariationError, RuntimeError):
    """Raised when an RNG is required but not available.

    This error indicates a bug in the caller - the evolutionary loop should
    hand each operator its (per-worker) random source.
    """
    pass


def require_rng_param(rng: Optional[random.Random], context: str) -> random.Random:
    """Validate that an RNG parameter was provided, failing loudly if not.

    Args:
        rng: The RNG that should have been provided
        context: Description of where this is called from (for error messages)

    Returns:
        The validated RNG

    Raises:
        MissingRNGError: If rng is None

    Example:
        def crossover(parent1, parent2, max_points, rng=None):
            rng = require_rng_param(rng, "crossover")
    """
    if rng is None:
        raise MissingRNGError(
            f"RNG required: {context}. Pass the evolutionary loop's RNG explicitly."
        )
    return rng


def gaussian_noise_factor(rng: random.Random) -> float:
    """Return gaussian noise of mean 0, std dev 1 (Box-Muller transform).

    Both uniform draws lie in (0, 1]; ``1.0 - rng.random()`` keeps the
    logarithm finite.
    """
    u1 = 1.0 - rng.random()
    u2 = rng.random()
    return math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)


def perturb_with_gaussian_noise(sd: float, n: float, rng: random.Random) -> float:
    """Return n perturbed with std dev sd."""
    return n + sd * gaussian_noise_factor(rng)
