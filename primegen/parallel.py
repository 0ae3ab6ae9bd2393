from __future__ import annotations
import os
import random
import concurrent.futures
from collections import deque
from typing import List, Optional

from .modarith import U64_MAX
from .candidates import (
    check_count, generate_primes, generate_primes_u64,
    next_candidate, next_candidate_u64,
)
from .primality import is_prime_big, is_prime_u64

DOMAINS = ("big", "u64")

def _scan_window(domain: str, lo: int, hi: int, seed: Optional[int]) -> List[int]:
    """Primes among the odd values in [lo, hi). lo must be odd."""
    out = []
    if domain == "big":
        rng = random.Random(seed)
        for n in range(lo, hi, 2):
            if is_prime_big(n, rng=rng):
                out.append(n)
    else:
        for n in range(lo, hi, 2):
            if is_prime_u64(n):
                out.append(n)
    return out

def generate_primes_parallel(start: int, count: int, domain: str = "big",
                             workers: Optional[int] = None, window: int = 4096,
                             seed: Optional[int] = None) -> List[int]:
    """
    Same result as the serial generators, with candidate windows of `window`
    odd values tested in a process pool. Windows are collected in order, so
    the output stays increasing and is cut to exactly `count`.
    """
    if domain not in DOMAINS:
        raise ValueError(f"domain must be one of {DOMAINS}")
    count = check_count(count)
    if window < 1:
        raise ValueError("window must be >= 1")
    workers = workers or os.cpu_count() or 1
    if workers <= 1:
        if domain == "big":
            return generate_primes(start, count, seed=seed)
        return generate_primes_u64(start, count)

    primes: List[int] = []
    if count == 0:
        return primes
    if domain == "big":
        n = next_candidate(start)
        limit = None
    else:
        n = next_candidate_u64(start)
        if n is None:
            return primes
        limit = U64_MAX - 2  # last odd value the serial scan tests
    if n == 2:
        primes.append(2)
        n = 3

    rng = random.Random(seed)
    pending = deque()
    with concurrent.futures.ProcessPoolExecutor(max_workers=workers) as executor:
        while len(primes) < count:
            while len(pending) < workers and (limit is None or n <= limit):
                hi = n + 2 * window
                if limit is not None:
                    hi = min(hi, limit + 2)
                sub_seed = rng.getrandbits(64) if domain == "big" else None
                pending.append(executor.submit(_scan_window, domain, n, hi, sub_seed))
                n = hi
            if not pending:
                break
            primes.extend(pending.popleft().result())
        for fut in pending:
            fut.cancel()
    return primes[:count]
