import random
import pytest
from sympy import isprime

from primegen.modarith import U64_MAX, U64Domain
from primegen.primality import (
    BASES_2_64, SMALL_PRIMES, SMALL_PRIMES_U64,
    decompose, is_prime_big, is_prime_u64, random_base, trial_division,
)
from primegen.verify import reference_sieve

CARMICHAEL = [561, 1105, 1729, 2465, 2821, 6601, 8911, 10585, 15841, 29341, 41041, 62745]

# strong pseudoprimes to several small prime bases
STRONG_PSEUDOPRIMES = [
    2047,                    # base 2
    1373653,                 # bases 2, 3
    25326001,                # bases 2, 3, 5
    3215031751,              # bases 2, 3, 5, 7
    2152302898747,           # bases 2..11
    3474749660383,           # bases 2..13
    341550071728321,         # bases 2..17
    3825123056546413051,     # bases 2..23
]

def test_tables():
    assert len(SMALL_PRIMES) == 95
    assert SMALL_PRIMES[-1] == 499
    assert all(isprime(p) for p in SMALL_PRIMES)
    assert SMALL_PRIMES_U64 == SMALL_PRIMES[:12]
    assert len(BASES_2_64) == 7

@pytest.mark.parametrize("is_prime", [is_prime_big, is_prime_u64])
def test_small_primes_are_prime(is_prime):
    for p in SMALL_PRIMES:
        assert is_prime(p)

@pytest.mark.parametrize("is_prime", [is_prime_big, is_prime_u64])
def test_evens_and_small_values(is_prime):
    assert not is_prime(0)
    assert not is_prime(1)
    for n in range(4, 5000, 2):
        assert not is_prime(n)

def test_negative_values_big():
    assert not is_prime_big(-7)
    assert not is_prime_big(-2)

@pytest.mark.parametrize("n", CARMICHAEL)
def test_carmichael_numbers_rejected(n):
    assert not is_prime_u64(n)
    assert not is_prime_big(n, rng=random.Random(n))

@pytest.mark.parametrize("n", STRONG_PSEUDOPRIMES)
def test_strong_pseudoprimes_rejected(n):
    assert not isprime(n)
    assert not is_prime_u64(n)
    assert not is_prime_big(n, rng=random.Random(0))

def test_trial_division():
    assert trial_division(7, SMALL_PRIMES_U64) is True
    assert trial_division(49, SMALL_PRIMES_U64) is False
    assert trial_division(41 * 43, SMALL_PRIMES_U64) is None
    assert trial_division(41 * 43, SMALL_PRIMES) is False

def test_decompose():
    assert decompose(561) == (35, 4)
    assert decompose(3) == (1, 1)
    d, s = decompose(U64_MAX - 58)
    assert d * 2**s == U64_MAX - 59 and d % 2 == 1

def test_u64_matches_sieve_prefix():
    limit = 100_000
    sieve = reference_sieve(limit)
    for n in range(limit):
        assert is_prime_u64(n) == bool(sieve[n]), n

def test_u64_doubling_domain_matches_sieve():
    narrow = U64Domain(wide=False)
    limit = 20_000
    sieve = reference_sieve(limit)
    for n in range(limit):
        assert is_prime_u64(n, narrow) == bool(sieve[n]), n

def test_u64_near_top_of_range():
    # largest 64-bit prime is 2^64 - 59
    assert is_prime_u64(U64_MAX - 58)
    for n in range(U64_MAX - 57, U64_MAX + 1):
        assert not is_prime_u64(n)
    assert not is_prime_u64(U64_MAX)

def test_u64_rejects_out_of_range():
    with pytest.raises(ValueError):
        is_prime_u64(U64_MAX + 1)
    with pytest.raises(ValueError):
        is_prime_u64(-3)

def test_u64_random_against_sympy():
    rng = random.Random(2024)
    for _ in range(300):
        n = rng.randrange(1 << 32, 1 << 64) | 1
        assert is_prime_u64(n) == isprime(n)

def test_big_known_primes_and_composites():
    rng = random.Random(5)
    for e in (61, 89, 107, 127, 521, 607):
        assert is_prime_big(2**e - 1, rng=rng)
    for e in (67, 101, 257):
        assert not is_prime_big(2**e - 1, rng=rng)
    p, q = 2**89 - 1, 2**107 - 1
    assert not is_prime_big(p * q, rng=rng)
    assert not is_prime_big((2**61 - 1)**2, rng=rng)

def test_big_against_sympy_above_2_64():
    rng = random.Random(11)
    lo = 18446744073713598463 - 500
    for n in range(lo, lo + 1000):
        assert is_prime_big(n, rng=rng) == isprime(n), n

def test_big_agrees_with_u64_in_range():
    rng = random.Random(3)
    for _ in range(200):
        n = rng.randrange(2, 1 << 64)
        assert is_prime_big(n, rng=rng) == is_prime_u64(n)

def test_random_base_in_range():
    rng = random.Random(42)
    for n in (503, 10007, 2**64 + 13, 2**200 + 235, 2**521 - 1):
        for _ in range(200):
            a = random_base(n, rng)
            assert 2 <= a <= n - 2
    assert random_base(4, rng) == 2

def test_random_base_reproducible():
    n = 2**127 - 1
    a = [random_base(n, random.Random(8)) for _ in range(3)]
    assert a[0] == a[1] == a[2]
