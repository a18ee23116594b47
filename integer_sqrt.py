"""Exact floor square root of arbitrarily large non-negative integers.

The work is split in tiers by magnitude. Small values go straight through the
hardware square root, mid-sized ones get one or two Newton steps on top of a
float seed, and anything bigger is refined with fixed-point Newton iterations
that double the number of correct bits each round ("Newton plus" past
``4e254``).
"""

import math

# Tier bounds, compared as exact integers
SMALL_LIMIT = 144838757784765629          # ~1 << 57
MEDIUM_LIMIT = 85 * 10**36                 # 8.5e37, ~(2**64 - 1)**2
LARGE_LIMIT = 43322 * 10**123              # 4.3322e127
SECOND_STEP_LIMIT = 2 * 10**63
NEWTON_PLUS_LIMIT = 4 * 10**254            # ~1 << 845


def _shift_right(n: int, k: int) -> int:
    """``n >> k`` that shifts left for negative ``k``."""
    return n >> k if k >= 0 else n << -k


def _div_trunc(a: int, b: int) -> int:
    """Integer division rounding toward zero (``b > 0``)."""
    q = abs(a) // b
    return -q if a < 0 else q


def integer_sqrt(n: int) -> int:
    """Return ``r`` such that ``r*r <= n < (r+1)*(r+1)``."""
    if n < 0:
        raise ValueError("integer_sqrt() argument must be non-negative")

    if n < SMALL_LIMIT:
        v = int(math.sqrt(n))
        if v * v > n:
            v -= 1
        return v

    if n < MEDIUM_LIMIT:
        v = int(math.sqrt(n))
        v = (v + n // v) >> 1
        return v if v * v <= n else v - 1

    if n < LARGE_LIMIT:
        v = int(math.sqrt(n))
        v = (v + n // v) >> 1
        if n > SECOND_STEP_LIMIT:
            v = (v + n // v) >> 1
        return v if v * v <= n else v - 1

    return _huge_sqrt(n)


def _huge_sqrt(n: int) -> int:
    x_len = n.bit_length()
    wanted_precision = (x_len + 1) // 2
    x_len_mod = x_len + (x_len & 1) + 1

    # First 53 bits from the hardware square root of the top 63 bits.
    # sqrt(top) can round up to exactly 2**31, giving a seed of 1 << 53
    top = n >> (x_len_mod - 63)
    seed = int(math.ldexp(math.sqrt(top), 22))

    # Classic Newton iterations, 53 -> 106 -> 212 -> 424 bits
    val = (seed << 52) + (n >> (x_len_mod - 3 * 53)) // seed
    size = 106
    while size < 256:
        val = (val << (size - 1)) + _shift_right(n, x_len_mod - 3 * size) // val
        size <<= 1

    if n > NEWTON_PLUS_LIMIT:
        steps = max((wanted_precision // size).bit_length() - 1, 0) + 2

        # Restart from a reduced size so the early rounds stay cheap
        wanted_size = (wanted_precision >> steps) + 2
        val >>= size - wanted_size
        size = wanted_size
        while True:
            shift_x = x_len_mod - 3 * size
            val_sqrd = (val * val) << (size - 1)
            val_su = _shift_right(n, shift_x) - val_sqrd
            val = (val << size) + _div_trunc(val_su, val)
            size *= 2
            if size >= wanted_precision:
                break

    # Keep some of the extra bits to detect a round-up
    oversized_by = size - wanted_precision
    dropped = val & ((1 << oversized_by) - 1)
    down_by = (oversized_by >> 2) + 1 if oversized_by < 64 else oversized_by - 32
    dropped >>= down_by

    val >>= oversized_by
    if dropped == 0 and val * val > n:
        val -= 1
    return val
