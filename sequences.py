"""Lazy candidate generators feeding the primality tests."""

import logging
import random
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from miller_rabin import is_probably_prime

logger = logging.getLogger(__name__)


@dataclass
class PowerOf:
    base: int
    exponent: int
    value: int


def powers_of(base: int, target_exponent: int = 0) -> Iterator[PowerOf]:
    """Yield ``base**e`` for ``e = target_exponent, target_exponent + 1, ...``.

    A base of 1 is promoted to 2, otherwise the sequence would never move.
    """
    if base == 1:
        base = 2
    power = PowerOf(base, max(target_exponent, 0), base ** max(target_exponent, 0))
    while True:
        yield PowerOf(power.base, power.exponent, power.value)
        power.value *= base
        power.exponent += 1


def derived_prime_numbers(prime_exponent: int, multiplier: int,
                          probably_prime: bool = True, rounds: int = 1,
                          rng: random.Random | None = None) -> Iterator[int]:
    """Yield ``j*k + 1`` for ``j = 1, 2, ...`` with ``k = prime_exponent * multiplier``.

    Prime divisors of ``2**p - 1`` all have this shape (``k = 2p``). With
    ``probably_prime`` only values passing ``rounds`` Miller--Rabin rounds are
    yielded.
    """
    k = prime_exponent * multiplier
    if k <= 0:
        raise ValueError("prime_exponent * multiplier must be positive")
    multiple_k = k
    while True:
        derived = multiple_k + 1
        if not probably_prime or is_probably_prime(derived, rounds, rng):
            yield derived
        else:
            logger.debug("skipping composite %d", derived)
        multiple_k += k


def repunit(base: int, exponent: int) -> int:
    """``(base**exponent - 1) // (base - 1)``, ``2**exponent - 1`` for base 2."""
    if base < 2:
        raise ValueError(f"base must be at least 2, got {base}")
    return (base ** exponent - 1) // (base - 1)


def repunit_candidates(base: int, exponents: Iterable[int]) -> Iterator[tuple[int, int]]:
    """Yield ``(exponent, repunit(base, exponent))`` for each exponent."""
    for exponent in exponents:
        yield exponent, repunit(base, exponent)
