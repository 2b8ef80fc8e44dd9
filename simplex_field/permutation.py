# simplex_field/permutation.py

"""
================================================================================
SEEDED PERMUTATION & GRADIENT CACHE
================================================================================
This module builds the per-seed state of a noise generator: a permutation of
[0, PSIZE) produced by a seeded Fisher-Yates shuffle, and the gradient caches
that map every permutation slot straight to a ready-to-use gradient vector.

Data Contract:
---------------
- Inputs:
    - seed (int): Any Python integer. It is wrapped to a signed 64-bit value.
    - A repeated gradient table (see simplex_field.gradients).
- Outputs:
    - perm (np.ndarray): int64 array of length PSIZE, a bijection on [0, PSIZE).
    - Gradient caches: float64 arrays of shape (PSIZE, d).
- Side Effects: None. No global random state is read or written.
- Invariants: The same seed always yields bit-identical tables.
================================================================================
"""

import numpy as np

from . import config as DEFAULTS

_UINT64_MASK = (1 << DEFAULTS.SEED_BITS) - 1
_INT64_SIGN = 1 << (DEFAULTS.SEED_BITS - 1)


def wrap_seed(seed: int) -> int:
    """Reduces an integer to the signed 64-bit value it would hold after overflow."""
    seed = int(seed) & _UINT64_MASK
    if seed >= _INT64_SIGN:
        seed -= 1 << DEFAULTS.SEED_BITS
    return seed


def lcg_step(seed: int) -> int:
    """Advances the seed by one step of the 64-bit linear congruential generator."""
    return wrap_seed(seed * DEFAULTS.LCG_MULTIPLIER + DEFAULTS.LCG_INCREMENT)


def build_permutation(seed: int, size: int = DEFAULTS.PSIZE) -> np.ndarray:
    """
    Shuffles [0, size) with a seeded Fisher-Yates pass, filling from the end.

    Each step advances the seed, draws an index r into the still-unused part of
    the scratch array, emits scratch[r] into slot i and moves scratch[i] into
    the hole. Only the emitted permutation is kept.
    """
    seed = wrap_seed(seed)
    perm = np.empty(size, dtype=np.int64)
    source = list(range(size))

    for i in range(size - 1, -1, -1):
        seed = lcg_step(seed)
        # Python's modulo is already non-negative for a positive divisor.
        r = wrap_seed(seed + DEFAULTS.LCG_OUTPUT_OFFSET) % (i + 1)
        perm[i] = source[r]
        source[r] = source[i]

    return perm


def build_gradient_cache(perm: np.ndarray, repeated_table: np.ndarray) -> np.ndarray:
    """Maps every permutation slot to its gradient: cache[i] = repeated_table[perm[i]]."""
    return np.ascontiguousarray(repeated_table[perm])


def is_bijection(perm: np.ndarray, size: int = DEFAULTS.PSIZE) -> bool:
    """True when `perm` contains every value in [0, size) exactly once."""
    if len(perm) != size:
        return False
    return bool(np.array_equal(np.sort(perm), np.arange(size)))
