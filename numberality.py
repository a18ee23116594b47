"""Digit, exponent and divisor helpers for big integers."""

import math

from integer_sqrt import integer_sqrt

_LOG10_2 = math.log10(2)


def is_power_of(n: int, base: int) -> bool:
    """Return ``True`` if ``n == base**e`` for some ``e >= 0``."""
    if base < 2:
        raise ValueError(f"base must be at least 2, got {base}")
    if n == 0:
        return False
    while n % base == 0:
        n //= base
    return n == 1


def is_power_of_two(n: int) -> bool:
    return n > 0 and n & (n - 1) == 0


def greatest_exponent_of(n: int, power: int) -> int:
    """Largest ``e`` such that ``power**e`` divides ``n`` (0 for ``n <= 0``)."""
    if power < 2:
        raise ValueError(f"power must be at least 2, got {power}")
    if n <= 0:
        return 0
    exponent = 0
    while n % power == 0:
        n //= power
        exponent += 1
    return exponent


def greatest_multiple_of(n: int, multiple: int) -> int:
    """Largest ``multiple * 2**j`` that divides ``n`` (0 for ``n <= 0``)."""
    if multiple < 1:
        raise ValueError(f"multiple must be positive, got {multiple}")
    if n <= 0:
        return 0
    multiple_of = multiple
    while n % (multiple_of + multiple_of) == 0:
        multiple_of += multiple_of
    return multiple_of


def last_digit(n: int) -> int:
    return abs(n) % 10


def number_of_digits(n: int) -> int:
    """Number of decimal digits of ``|n|``, without building its string."""
    n = abs(n)
    if n == 0:
        return 1
    # bit_length * log10(2) is off by at most one
    digits = int((n.bit_length() - 1) * _LOG10_2) + 1
    if n >= 10 ** digits:
        digits += 1
    elif n < 10 ** (digits - 1):
        digits -= 1
    return digits


def divisors(candidate: int) -> list[int]:
    """Trial-divide ``candidate`` by every ``d`` in ``[2, r + r // 2)``, ``r = isqrt``."""
    if candidate <= 0:
        return []
    root = integer_sqrt(candidate)
    boundary = root + (root >> 1)
    return [d for d in range(2, boundary) if candidate % d == 0]
