import pytest
from sympy import isprime, primerange

from form_certifiers import (
    Recurrence,
    Verdict,
    certify_alan_gee,
    certify_generalized,
    certify_generalized_verdict,
    certify_lucas_lehmer,
    certify_order_detection,
    run_recurrence,
)

MERSENNE_EXPONENTS = [3, 5, 7, 13, 17, 19, 31, 61, 89, 107, 127]
COMPOSITE_MERSENNE_EXPONENTS = [11, 23, 29, 37, 41, 43, 47, 53, 59]


def mersenne(p):
    return 2**p - 1


def repunit(k, p):
    return (k**p - 1) // (k - 1)


# ─────────────────────────────────────────────────────────────────────────────
# Lucas--Lehmer
# ─────────────────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("p", MERSENNE_EXPONENTS)
def test_lucas_lehmer_primes(p):
    assert certify_lucas_lehmer(mersenne(p), p) is True


@pytest.mark.parametrize("p", COMPOSITE_MERSENNE_EXPONENTS)
def test_lucas_lehmer_composites(p):
    assert certify_lucas_lehmer(mersenne(p), p) is False


def test_lucas_lehmer_exponent_two():
    assert certify_lucas_lehmer(3, 2) is True


def test_lucas_lehmer_matches_sympy():
    for p in primerange(3, 200):
        assert certify_lucas_lehmer(mersenne(p), p) is isprime(mersenne(p))


# ─────────────────────────────────────────────────────────────────────────────
# Alan Gee
# ─────────────────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("p", [3, 7, 13, 71, 103])
def test_alan_gee_primes(p):
    assert certify_alan_gee(repunit(3, p), p) is True


@pytest.mark.parametrize("p", [5, 11, 17, 19, 23])
def test_alan_gee_composites(p):
    assert certify_alan_gee(repunit(3, p), p) is False


# ─────────────────────────────────────────────────────────────────────────────
# Generalized certifier
# ─────────────────────────────────────────────────────────────────────────────

def test_generalized_agrees_with_lucas_lehmer():
    for p in primerange(5, 128):
        n = mersenne(p)
        assert certify_generalized(n, 2, p) is certify_lucas_lehmer(n, p)


def test_generalized_agrees_with_alan_gee():
    for p in primerange(3, 110):
        n = repunit(3, p)
        assert certify_generalized(n, 3, p) is certify_alan_gee(n, p)


@pytest.mark.parametrize("base, p", [(5, 7), (5, 11), (5, 13), (6, 7), (6, 29), (7, 5), (7, 13), (10, 19), (10, 23)])
def test_generalized_repunit_primes(base, p):
    assert certify_generalized_verdict(repunit(base, p), base, p) is Verdict.PRIME


@pytest.mark.parametrize("base, p", [(5, 5), (6, 5), (10, 5)])
def test_generalized_repunit_composites(base, p):
    assert certify_generalized_verdict(repunit(base, p), base, p) is Verdict.COMPOSITE


@pytest.mark.parametrize("base, p", [(2, 3), (5, 3), (6, 3), (10, 2)])
def test_generalized_too_small_is_inconclusive(base, p):
    n = repunit(base, p)
    assert isprime(n)
    assert certify_generalized_verdict(n, base, p) is Verdict.INCONCLUSIVE
    assert certify_generalized(n, base, p) is False


def test_generalized_matches_sympy_for_base_six():
    for p in primerange(2, 80):
        n = repunit(6, p)
        verdict = certify_generalized_verdict(n, 6, p)
        if verdict is not Verdict.INCONCLUSIVE:
            assert (verdict is Verdict.PRIME) is isprime(n)


@pytest.mark.parametrize("base", [4, 8, 16, 1024])
def test_generalized_rejects_power_of_two_bases(base):
    with pytest.raises(ValueError):
        certify_generalized(repunit(base, 3), base, 3)


@pytest.mark.parametrize("base", [1, 0, -3])
def test_generalized_rejects_small_bases(base):
    with pytest.raises(ValueError):
        certify_generalized(31, base, 5)


# ─────────────────────────────────────────────────────────────────────────────
# Order detection
# ─────────────────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("p", MERSENNE_EXPONENTS)
def test_order_detection_mersenne_primes(p):
    assert certify_order_detection(mersenne(p), p) is True


@pytest.mark.parametrize("p", [11, 23, 29])
def test_order_detection_mersenne_composites(p):
    assert certify_order_detection(mersenne(p), p) is False


def test_order_detection_other_base():
    assert certify_order_detection(repunit(3, 3), 3, base=3) is True
    assert certify_order_detection(repunit(3, 7), 7, base=3) is True
    assert certify_order_detection(repunit(3, 5), 5, base=3) is False


@pytest.mark.parametrize("base", [4, 8, 32])
def test_order_detection_rejects_power_of_two_bases(base):
    with pytest.raises(ValueError):
        certify_order_detection(repunit(base, 3), 3, base)


# ─────────────────────────────────────────────────────────────────────────────
# Degenerate candidates
# ─────────────────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("candidate", [-(2**89 - 1), -7, -1, 0, 1])
def test_degenerate_candidates(candidate):
    assert certify_lucas_lehmer(candidate, 7) is False
    assert certify_alan_gee(candidate, 7) is False
    assert certify_generalized(candidate, 2, 7) is False
    assert certify_generalized(candidate, 6, 7) is False
    assert certify_order_detection(candidate, 7) is False
    assert certify_order_detection(candidate, 7, base=3) is False


def test_run_recurrence():
    doubling = Recurrence(seed=1, step=lambda s, n: (2 * s) % n, iterations=10, sentinel=1024 % 1000)
    assert run_recurrence(1000, doubling) is True


@pytest.mark.parametrize("candidate", [-5, 0, 1])
@pytest.mark.parametrize("base", [4, 8, 1, 0])
def test_degenerate_candidates_with_invalid_base(candidate, base):
    assert certify_generalized(candidate, base, 3) is False
    assert certify_generalized_verdict(candidate, base, 3) is Verdict.COMPOSITE
    assert certify_order_detection(candidate, 3, base) is False
