"""
Rank selection for the genetic solver.

Picks an index into a generation sorted fittest first, biased towards the
front. The bias inverts a linear (triangular) probability density over the
ranks; see https://cs.stackexchange.com/questions/89886 for the derivation.
"""

import math
from typing import Optional
import numpy as np


DEFAULT_RANK_SELECTION_BIAS = 1.5


def select_rank(size: int, bias: Optional[float], rng: np.random.Generator) -> int:
    """
    Select a random index in [0, size), biased towards 0.

    Args:
        size: Number of ranked entities
        bias: Selection pressure. Values <= 1 select uniformly; larger values
              favour lower (fitter) ranks more strongly. None means
              DEFAULT_RANK_SELECTION_BIAS.
        rng: Random number generator

    Returns:
        Selected rank
    """
    if size <= 0:
        raise ValueError(f"Cannot select from an empty ranking (size={size})")

    if bias is None:
        bias = DEFAULT_RANK_SELECTION_BIAS

    if bias <= 1:
        return int(rng.integers(size))

    u = rng.random()
    rand = (bias - math.sqrt(bias * bias - 4 * (bias - 1) * u)) / (2 * (bias - 1))
    # rand can round up to exactly 1.0 for u close to 1
    return min(int(math.floor(size * rand)), size - 1)
