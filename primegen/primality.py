# primegen/primality.py
# Primality tests for both domains
# - trial division against a small-prime table
# - one Miller-Rabin routine parameterized by domain and base source
# - big: 32 random bases; u64: 7 fixed bases, exact below 2^64

from __future__ import annotations
import random
from typing import Iterable, Iterator, Optional

from gmpy2 import mpz

from .modarith import BIG, U64, Domain

# Every prime up to 499 (95 entries)
SMALL_PRIMES = (
    2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47, 53, 59, 61, 67, 71,
    73, 79, 83, 89, 97, 101, 103, 107, 109, 113, 127, 131, 137, 139, 149, 151,
    157, 163, 167, 173, 179, 181, 191, 193, 197, 199, 211, 223, 227, 229, 233,
    239, 241, 251, 257, 263, 269, 271, 277, 281, 283, 293, 307, 311, 313, 317,
    331, 337, 347, 349, 353, 359, 367, 373, 379, 383, 389, 397, 401, 409, 419,
    421, 431, 433, 439, 443, 449, 457, 461, 463, 467, 479, 487, 491, 499,
)

SMALL_PRIMES_U64 = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)

# Deterministic Miller-Rabin bases for n < 2^64
BASES_2_64 = (2, 325, 9375, 28178, 450775, 9780504, 1795265022)

MR_ROUNDS = 32

def trial_division(n, primes: Iterable[int]) -> Optional[bool]:
    """True if n is in the table, False if a table prime divides it, else None."""
    for p in primes:
        if n == p:
            return True
        if n % p == 0:
            return False
    return None

def decompose(n):
    """n-1 = d * 2^s with d odd. Returns (d, s)."""
    d = n - 1
    s = (d & -d).bit_length() - 1  # trailing zeros
    d >>= s
    return d, s

def miller_rabin(n, bases: Iterable, domain: Domain) -> bool:
    """
    Strong probable-prime test of odd n > 2 against every base in `bases`.
    Returns False as soon as one base witnesses compositeness.
    """
    d, s = decompose(n)
    n1 = n - 1
    for a in bases:
        if a % n == 0:
            continue
        x = domain.powmod(a, d, n)
        if x == 1 or x == n1:
            continue
        for _ in range(s - 1):
            x = domain.mulmod(x, x, n)
            if x == n1:
                break
        else:
            return False
    return True

# ---------- unbounded domain ----------

def random_base(n, rng: random.Random) -> mpz:
    """
    A base in [2, n-2] built from whole 64-bit words, enough of them to cover
    the width of n-2, then folded into range. Slightly biased by the modulo.
    """
    limit = n - 2
    if limit <= 2:
        return mpz(2)
    limbs = (limit.bit_length() + 63) // 64
    a = mpz(0)
    for _ in range(limbs):
        a = (a << 64) + rng.randrange(2, 1 << 64)
    if a <= 1:
        a += 2
    a %= limit - 1
    a += 2
    return a

def random_bases(n, rng: random.Random, rounds: int = MR_ROUNDS) -> Iterator[mpz]:
    for _ in range(rounds):
        yield random_base(n, rng)

def is_prime_big(n, rng: Optional[random.Random] = None, rounds: int = MR_ROUNDS) -> bool:
    """
    Probabilistic test for integers of any size: trial division by the primes
    up to 499, then `rounds` Miller-Rabin rounds with random bases.
    False positive probability is at most 4**-rounds.
    """
    n = BIG.coerce(n)
    if n < 2:
        return False
    hit = trial_division(n, SMALL_PRIMES)
    if hit is not None:
        return hit
    if rng is None:
        rng = random.Random()
    return miller_rabin(n, random_bases(n, rng, rounds), BIG)

# ---------- 64-bit domain ----------

def is_prime_u64(n: int, domain: Domain = U64) -> bool:
    """Deterministic for every 64-bit n. Raises ValueError outside 0..2^64-1."""
    n = domain.coerce(n)
    if n < 2:
        return False
    hit = trial_division(n, SMALL_PRIMES_U64)
    if hit is not None:
        return hit
    return miller_rabin(n, BASES_2_64, domain)
