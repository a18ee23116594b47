"""Miller--Rabin probable-prime test with unbiased big-integer witnesses."""

import random

from big_random import uniform_random

DEFAULT_ROUNDS = 8


def decompose(n: int) -> tuple[int, int]:
    """Return ``(d, s)`` with ``n == d * 2**s`` and ``d`` odd (``n > 0``)."""
    d, s = n, 0
    while not (d & 1):
        d >>= 1
        s += 1
    return d, s


def is_probably_prime(n: int, rounds: int = DEFAULT_ROUNDS,
                      rng: random.Random | None = None) -> bool:
    """Return ``True`` if ``n`` is probably prime, ``False`` if it is composite.

    A ``False`` answer is a proof of compositeness. A ``True`` answer is wrong
    with probability at most ``4**-rounds``. With ``rounds == 0`` only the
    deterministic checks (``n <= 1``, 2, 3, even numbers) are applied.
    """
    if rounds < 0:
        raise ValueError("rounds must be non-negative")
    if n <= 1:
        return False
    if n in (2, 3):
        return True
    if n % 2 == 0:
        return False

    n_minus_one = n - 1
    d, s = decompose(n_minus_one)
    for _ in range(rounds):
        a = uniform_random(2, n - 1, rng)  # witness in [2, n-2]
        x = pow(a, d, n)
        if x == 1 or x == n_minus_one:
            continue
        for _ in range(s - 1):
            x = pow(x, 2, n)
            if x == 1:
                return False
            if x == n_minus_one:
                break
        else:
            return False
    return True
