# chunkworld/noise.py

"""
================================================================================
DETERMINISTIC RANDOMNESS & TERRAIN NOISE
================================================================================
This module provides the two closed-form numeric primitives the generator is
built on. It is designed to be a pure, stateless utility.

Data Contract:
---------------
- seeded_random(seed):
    - Input: any real-number seed.
    - Output: a float in [0, 1). frac(sin(seed) * 10000).
- terrain_noise(cx, cz, ...):
    - Input: integer chunk coordinates and the four field coefficients.
    - Output: a smooth, non-tileable scalar. Adjacent chunks get correlated
      but not identical values.
- terrain_noise_grid(cx_values, cz_values, ...):
    - Input: 1D NumPy arrays of chunk coordinates.
    - Output: a (len(cz_values), len(cx_values)) array of terrain noise.
- Side Effects: None.
- Invariants: All functions are JIT-compiled through the same code path, so
  a value sampled on a grid is identical to the value sampled per chunk.
================================================================================
"""

import numpy as np
from numba import njit

from . import config as DEFAULTS

# Numba freezes plain module globals at compile time.
_PRNG_SCALE = DEFAULTS.PRNG_SCALE


@njit
def _fractional_sine(seed, scale):
    x = np.sin(seed) * scale
    return x - np.floor(x)


@njit
def seeded_random(seed):
    """
    Maps a seed to a reproducible value in [0, 1).

    This is not statistically strong. It is cheap, stateless and addressable
    by seed, so callers derive independent draws by adding small offsets.
    """
    return _fractional_sine(seed, _PRNG_SCALE)


@njit
def terrain_noise(cx, cz, primary_frequency, secondary_weight, diagonal_frequency, diagonal_weight):
    """Combines chunk coordinates into the continuous biome-driving field."""
    return (
        np.sin(cx * primary_frequency)
        + np.cos(cz * primary_frequency) * secondary_weight
        + np.sin((cx + cz) * diagonal_frequency) * diagonal_weight
    )


@njit
def terrain_noise_grid(cx_values, cz_values, primary_frequency, secondary_weight, diagonal_frequency, diagonal_weight):
    """
    Samples the terrain field over a rectangular block of chunks.
    Rows follow cz, columns follow cx, matching image layout.
    """
    rows = cz_values.shape[0]
    cols = cx_values.shape[0]
    field = np.zeros((rows, cols))

    for i in range(rows):
        for j in range(cols):
            field[i, j] = terrain_noise(
                cx_values[j], cz_values[i],
                primary_frequency, secondary_weight,
                diagonal_frequency, diagonal_weight
            )

    return field
