# primegen/candidates.py
# Candidate stepping and prime generation
# - next_candidate*: odd values with a tiny wheel (3,5 for big, 3 for u64)
# - generate_primes*: scan upward by 2 until `count` primes are collected

from __future__ import annotations
import random
from typing import List, Optional

from .modarith import BIG, U64, U64_MAX, Domain
from .primality import is_prime_big, is_prime_u64

WHEEL_BIG = (3, 5)
WHEEL_U64 = (3,)

def _on_wheel(n, wheel) -> bool:
    for p in wheel:
        if n % p == 0 and n != p:
            return False
    return True

def next_candidate(n: int) -> int:
    """Smallest odd value >= n coprime to 3 and 5 (or 2 when n <= 2)."""
    n = BIG.coerce(n)
    if n <= 2:
        return 2
    if n & 1 == 0:
        n += 1
    while not _on_wheel(n, WHEEL_BIG):
        n += 2
    return int(n)

def next_candidate_u64(n: int) -> Optional[int]:
    """64-bit variant, wheel of 3 only. None when nothing fits below 2^64."""
    n = U64.coerce(n)
    if n <= 2:
        return 2
    if n & 1 == 0:
        n += 1
    while not _on_wheel(n, WHEEL_U64):
        n += 2
    if n > U64_MAX:
        return None
    return n

def check_count(count: int) -> int:
    count = int(count)
    if count < 0:
        raise ValueError("count must be >= 0")
    return count

def generate_primes(start: int, count: int,
                    rng: Optional[random.Random] = None,
                    seed: Optional[int] = None) -> List[int]:
    """
    The first `count` probable primes >= start, increasing.
    One random engine serves the whole scan; pass `seed` (or an rng) for a
    reproducible run, otherwise it is seeded from OS entropy.
    """
    count = check_count(count)
    primes: List[int] = []
    if count == 0:
        return primes
    if rng is None:
        rng = random.Random(seed)
    n = BIG.coerce(next_candidate(start))
    if n == 2:
        primes.append(2)
        n = BIG.coerce(3)
    while len(primes) < count:
        if is_prime_big(n, rng=rng):
            primes.append(int(n))
        n += 2
    return primes

def generate_primes_u64(start: int, count: int, domain: Domain = U64) -> List[int]:
    """
    The first `count` primes >= start that fit in 64 bits. Stops early,
    without error, once the scan reaches the top of the range.
    """
    count = check_count(count)
    primes: List[int] = []
    if count == 0:
        return primes
    n = next_candidate_u64(start)
    if n is None:
        return primes
    if n == 2:
        primes.append(2)
        n = 3
    while len(primes) < count:
        if is_prime_u64(n, domain):
            primes.append(n)
        if n >= U64_MAX - 2:
            break
        n += 2
    return primes
