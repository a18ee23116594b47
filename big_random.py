"""Uniform random big integers.

Values are drawn by rejection sampling over whole bytes so every integer in
``[low, high)`` is equally likely, with no modulo bias whatever the width of
the range.
"""

import random

import numpy as np

_random = random.Random()


# ─────────────────────────────────────────────────────────────────────────────
# Rejection sampling over a byte mask
# ─────────────────────────────────────────────────────────────────────────────

def uniform_random(low: int, high: int, rng: random.Random | None = None) -> int:
    """Return a random integer ``X`` with ``low <= X < high``.

    ``rng`` is any object with a ``randbytes`` method; the module-wide
    ``random.Random`` instance is used when omitted.
    """
    if low > high:
        raise ValueError(f"low ({low}) must not exceed high ({high})")
    if low == high:
        return low

    rng = rng or _random
    bound = high - 1 - low  # inclusive, zero based
    bits = bound.bit_length()
    n_bytes = max(1, (bits + 7) // 8)
    top_mask = 0xFF >> (8 * n_bytes - bits)

    while True:
        raw = bytearray(rng.randbytes(n_bytes))
        raw[-1] &= top_mask
        value = int.from_bytes(raw, "little")
        if value <= bound:
            return value + low


# ─────────────────────────────────────────────────────────────────────────────
# Diagnostics
# ─────────────────────────────────────────────────────────────────────────────

def chi_square_uniformity(low: int, high: int, trials: int = 10000,
                          rng: random.Random | None = None) -> float:
    """Pearson chi-square statistic of ``trials`` draws from ``[low, high)``.

    Every value of the range is its own bucket, so keep the range small.
    Under uniformity the statistic follows chi-square with ``high - low - 1``
    degrees of freedom.
    """
    width = high - low
    if width < 2:
        raise ValueError("range must hold at least two values")
    if trials < 1:
        raise ValueError("trials must be positive")

    draws = np.fromiter(
        (uniform_random(low, high, rng) - low for _ in range(trials)),
        dtype=np.int64,
        count=trials,
    )
    observed = np.bincount(draws, minlength=width)
    expected = trials / width
    return float(((observed - expected) ** 2 / expected).sum())
