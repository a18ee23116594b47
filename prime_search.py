#!/usr/bin/env python3
"""Powers of Primes search driver.

Walks prime exponents ``p`` for a fixed base ``k``, builds the repunit
``(k**p - 1) // (k - 1)``, drops it early when Miller--Rabin finds it
composite and otherwise certifies it with the test matching its form.
"""

import argparse
import itertools
import logging
import random
import sys

from sympy import primerange
from tqdm import tqdm

from big_random import chi_square_uniformity
from form_certifiers import (
    Verdict,
    certify_alan_gee,
    certify_generalized_verdict,
    certify_lucas_lehmer,
    certify_order_detection,
)
from integer_sqrt import integer_sqrt
from miller_rabin import DEFAULT_ROUNDS, is_probably_prime
from numberality import divisors, number_of_digits
from sequences import derived_prime_numbers, repunit, repunit_candidates

logger = logging.getLogger(__name__)

# ─────────────────────────────────────────────────────────────────────────────
# Lift Python’s big‐int→str limit (3.11+)
# ─────────────────────────────────────────────────────────────────────────────
if hasattr(sys, "set_int_max_str_digits"):
    sys.set_int_max_str_digits(100000000)

METHODS = ("auto", "lucas-lehmer", "alan-gee", "generalized", "order")


# ─────────────────────────────────────────────────────────────────────────────
# Certification
# ─────────────────────────────────────────────────────────────────────────────

def resolve_method(base: int, method: str = "auto") -> str:
    """Name of the certifier ``auto`` picks for ``base``."""
    if method == "auto":
        return {2: "lucas-lehmer", 3: "alan-gee"}.get(base, "generalized")
    return method


def certify(candidate: int, base: int, exponent: int, method: str = "auto") -> Verdict:
    """Run the certifier selected by ``method`` on ``(base**exponent - 1) / (base - 1)``."""
    method = resolve_method(base, method)
    logger.debug("certifying p=%d with %s", exponent, method)

    if method == "generalized":
        return certify_generalized_verdict(candidate, base, exponent)
    if method == "lucas-lehmer":
        if base != 2:
            raise ValueError("Lucas-Lehmer only applies to base 2")
        ok = certify_lucas_lehmer(candidate, exponent)
    elif method == "alan-gee":
        if base != 3:
            raise ValueError("Alan Gee's test only applies to base 3")
        ok = certify_alan_gee(candidate, exponent)
    elif method == "order":
        ok = certify_order_detection(candidate, exponent, base)
    else:
        raise ValueError(f"unknown method {method!r}")
    return Verdict.PRIME if ok else Verdict.COMPOSITE


def search(base: int, start: int, stop: int, rounds: int = DEFAULT_ROUNDS,
           method: str = "auto", rng: random.Random | None = None,
           progress: bool = False) -> list[tuple[int, Verdict]]:
    """Return ``(exponent, verdict)`` for every prime exponent in ``[start, stop)``
    whose repunit survived the Miller--Rabin pre-filter."""
    exponents = list(primerange(start, stop))
    found = []
    candidates = repunit_candidates(base, exponents)
    if progress:
        candidates = tqdm(candidates, total=len(exponents), desc=f"Base {base}", unit="p", leave=False)
    for exponent, candidate in candidates:
        if not is_probably_prime(candidate, rounds, rng):
            continue
        found.append((exponent, certify(candidate, base, exponent, method)))
    return found


# ─────────────────────────────────────────────────────────────────────────────
# Command-line interface
# ─────────────────────────────────────────────────────────────────────────────

def _cmd_search(args: argparse.Namespace) -> None:
    results = search(args.base, args.start, args.stop, args.rounds, args.method,
                     progress=not args.quiet)
    method = resolve_method(args.base, args.method)
    primes = [p for p, verdict in results if verdict is Verdict.PRIME]
    for exponent, verdict in results:
        if verdict is Verdict.PRIME:
            digits = number_of_digits(repunit(args.base, exponent))
            print(f"p = {exponent}: ✔️ Prime ({digits} digits)")
        elif verdict is Verdict.INCONCLUSIVE:
            print(f"p = {exponent}: probable prime, too small for the {method} method")
        else:
            print(f"p = {exponent}: probable prime rejected by certifier")
    if not primes:
        print("No prime found in the given range.")


def _cmd_derived(args: argparse.Namespace) -> None:
    values = derived_prime_numbers(args.exponent, args.multiplier, rounds=args.rounds)
    for value in itertools.islice(values, args.count):
        print(value)


def _cmd_divisors(args: argparse.Namespace) -> None:
    found = divisors(args.n)
    print(" ".join(map(str, found)) if found else "No divisors found")


def _cmd_sqrt(args: argparse.Namespace) -> None:
    print(integer_sqrt(args.n))


def _cmd_uniformity(args: argparse.Namespace) -> None:
    rng = random.Random(args.seed) if args.seed is not None else None
    stat = chi_square_uniformity(args.low, args.high, args.trials, rng)
    print(f"chi-square = {stat:.4f} ({args.high - args.low - 1} degrees of freedom)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Search and certify primes of the form (k^p - 1)/(k - 1)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("search", help="Certify repunits over prime exponents")
    p.add_argument("base", type=int, help="Base k of (k^p - 1)/(k - 1)")
    p.add_argument("--start", type=int, default=2, help="First exponent")
    p.add_argument("--stop", type=int, default=128, help="Exponent bound (exclusive)")
    p.add_argument("--rounds", type=int, default=DEFAULT_ROUNDS, help="Miller-Rabin rounds")
    p.add_argument("--method", choices=METHODS, default="auto", help="Certifier")
    p.add_argument("--quiet", action="store_true", help="Hide the progress bar")
    p.set_defaults(func=_cmd_search)

    p = sub.add_parser("derived", help="Probable primes of the form j*p*m + 1")
    p.add_argument("exponent", type=int, help="Prime exponent p")
    p.add_argument("multiplier", type=int, help="Multiplier m")
    p.add_argument("--count", type=int, default=10, help="How many values to print")
    p.add_argument("--rounds", type=int, default=1, help="Miller-Rabin rounds")
    p.set_defaults(func=_cmd_derived)

    p = sub.add_parser("divisors", help="Trial-division divisor listing")
    p.add_argument("n", type=int)
    p.set_defaults(func=_cmd_divisors)

    p = sub.add_parser("sqrt", help="Exact integer square root")
    p.add_argument("n", type=int)
    p.set_defaults(func=_cmd_sqrt)

    p = sub.add_parser("uniformity", help="Chi-square check of the random generator")
    p.add_argument("low", type=int)
    p.add_argument("high", type=int)
    p.add_argument("--trials", type=int, default=10000)
    p.add_argument("--seed", type=int)
    p.set_defaults(func=_cmd_uniformity)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        args.func(args)
    except ValueError as e:
        print("Error:", e, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
