"""Primality certifiers for numbers of a known algebraic shape.

Each certifier trusts the caller that ``candidate`` really has the claimed
form (``2**p - 1``, ``(3**p - 1) // 2``, ``(k**p - 1) // (k - 1)``, ...).
Given a mismatched form the verdict means nothing.

Lucas--Lehmer, Alan Gee's test and the generalized k-base test all share one
shape: start from a seed, apply a modular step a fixed number of times and
compare the last residue with a sentinel. ``run_recurrence`` is that loop.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from numberality import is_power_of, is_power_of_two, last_digit


class Verdict(Enum):
    PRIME = "prime"
    COMPOSITE = "composite"
    INCONCLUSIVE = "inconclusive"  # method does not apply, not a proof


@dataclass(frozen=True)
class Recurrence:
    """Seed, step ``s -> step(s, n)``, number of steps and expected residue."""
    seed: int
    step: Callable[[int, int], int]
    iterations: int
    sentinel: int


def run_recurrence(candidate: int, recurrence: Recurrence) -> bool:
    """Return ``True`` when the recurrence ends on its sentinel."""
    s = recurrence.seed
    for _ in range(recurrence.iterations):
        s = recurrence.step(s, candidate)
    return s == recurrence.sentinel


# ─────────────────────────────────────────────────────────────────────────────
# Recurrence certifiers
# ─────────────────────────────────────────────────────────────────────────────

def lucas_lehmer_recurrence(exponent: int) -> Recurrence:
    return Recurrence(
        seed=4,
        step=lambda s, n: (pow(s, 2, n) - 2) % n,
        iterations=exponent - 2,
        sentinel=0,
    )


def alan_gee_recurrence(exponent: int) -> Recurrence:
    return Recurrence(
        seed=8,
        step=lambda s, n: pow(s, 3, n),
        iterations=exponent - 1,
        sentinel=8,
    )


def generalized_recurrence(base: int, exponent: int) -> Recurrence:
    a = 3 if base == 2 else 2
    v = a ** base
    return Recurrence(
        seed=v,
        step=lambda s, n: pow(s, base, n),
        iterations=exponent - 1,
        sentinel=v,
    )


def certify_lucas_lehmer(candidate: int, exponent: int) -> bool:
    """Lucas--Lehmer test for ``candidate == 2**exponent - 1``."""
    if candidate < 2:
        return False
    if exponent == 2:
        return candidate == 3
    return run_recurrence(candidate, lucas_lehmer_recurrence(exponent))


def certify_alan_gee(candidate: int, exponent: int) -> bool:
    """Alan Gee's test for ``candidate == (3**exponent - 1) // 2``.

    ref: https://math.stackexchange.com/a/2422592
    """
    if candidate < 2:
        return False
    return run_recurrence(candidate, alan_gee_recurrence(exponent))


def _check_base(base: int) -> None:
    if base < 2:
        raise ValueError(f"base must be at least 2, got {base}")
    if base != 2 and is_power_of_two(base):
        raise ValueError(f"base cannot be a power of 2 ({base})")


def certify_generalized_verdict(candidate: int, base: int, exponent: int) -> Verdict:
    """Generalization of Lucas--Lehmer and Alan Gee to any base ``k``.

    Works for ``k**n - (k - 1)`` and ``(k**p - 1) // (k - 1)``. The base
    must not be a power of 2 other than 2 itself. Returns
    ``Verdict.INCONCLUSIVE`` when the seed ``a**k`` already exceeds the
    candidate.
    """
    if candidate < 2:
        return Verdict.COMPOSITE
    _check_base(base)

    recurrence = generalized_recurrence(base, exponent)
    if recurrence.seed > candidate:
        return Verdict.INCONCLUSIVE
    if run_recurrence(candidate, recurrence):
        return Verdict.PRIME
    return Verdict.COMPOSITE


def certify_generalized(candidate: int, base: int, exponent: int) -> bool:
    """``True`` only for ``Verdict.PRIME``.

    ``False`` is not a proof of compositeness: small candidates the method
    cannot handle also give ``False``. Use ``certify_generalized_verdict``
    to tell them apart.
    """
    return certify_generalized_verdict(candidate, base, exponent) is Verdict.PRIME


# ─────────────────────────────────────────────────────────────────────────────
# Order detection
# ─────────────────────────────────────────────────────────────────────────────

def certify_order_detection(candidate: int, exponent: int, base: int = 2) -> bool:
    """Detect primes from the order of a fixed element modulo ``candidate``.

    For ``base == 2`` the candidate is ``2**exponent - 1``: the test raises 3
    (or 5 when the last digit is 1) to ``(n - 1) / p`` (or ``(n - 1) / 2p``)
    and accepts when the residue is a power of two. For other bases the
    candidate is ``(k**p - 1) // (k - 1)`` and ``2**((n - 1) / p)`` must be a
    power of ``k``; ``k`` cannot be a power of 2.
    """
    if candidate < 2:
        return False
    _check_base(base)
    if exponent < 2:
        return False

    if base != 2:
        x = pow(2, (candidate - 1) // exponent, candidate)
        return is_power_of(x, base)

    if last_digit(candidate) == 1:
        x = pow(5, (candidate - 1) // (2 * exponent), candidate)
    else:
        x = pow(3, (candidate - 1) // exponent, candidate)
    return is_power_of_two(x)
