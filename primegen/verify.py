#!/usr/bin/env python3
# primegen/verify.py
# Accuracy checks against trusted references
# - u64 test vs an Eratosthenes sieve, exhaustively over a range
# - big test vs sympy.isprime on sampled ranges above 2^64
# - generated lists: order, bound and primality

from __future__ import annotations
import csv, sys, time, random, argparse
from typing import Callable, List

from sympy import isprime

from .candidates import generate_primes
from .primality import is_prime_big, is_prime_u64

def reference_sieve(limit: int) -> bytearray:
    """sieve[n] == 1 iff n is prime, for 0 <= n < limit."""
    sieve = bytearray([1]) * max(limit, 2)
    sieve[0] = sieve[1] = 0
    for p in range(2, int(limit ** 0.5) + 1):
        if sieve[p]:
            sieve[p*p:limit:p] = bytes(len(range(p*p, limit, p)))
    return sieve[:limit]

def verify_range(lo: int, hi: int, is_prime: Callable[[int], bool] = is_prime_u64,
                 sieve: bytearray | None = None, progress_every: int = 0) -> List[dict]:
    """Every n in [lo, hi) where `is_prime` disagrees with the sieve."""
    if sieve is None or len(sieve) < hi:
        sieve = reference_sieve(hi)
    fails = []
    for n in range(lo, hi):
        got = is_prime(n)
        if got != bool(sieve[n]):
            fails.append({"n": n, "expect": bool(sieve[n]), "got": got})
        if progress_every and n and n % progress_every == 0:
            print(f"checked {n}", file=sys.stderr, flush=True)
    return fails

def verify_big_samples(samples: int, rng: random.Random, span: int = 2000) -> List[dict]:
    """Compare is_prime_big with sympy over `samples` random ranges above 2^64."""
    fails = []
    for _ in range(samples):
        bits = rng.randrange(65, 257)
        lo = rng.getrandbits(bits) | (1 << (bits - 1))
        for n in range(lo, lo + span):
            got = is_prime_big(n, rng=rng)
            expect = isprime(n)
            if got != expect:
                fails.append({"n": n, "expect": expect, "got": got})
    return fails

def verify_generated(primes: List[int], start: int) -> List[str]:
    """Problems found in a generated list (empty when it is sound)."""
    problems = []
    for i, p in enumerate(primes):
        if p < start:
            problems.append(f"{p} is below start {start}")
        if i and p <= primes[i-1]:
            problems.append(f"{p} does not increase after {primes[i-1]}")
        if not isprime(p):
            problems.append(f"{p} is not prime")
    return problems

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(prog="primegen-verify",
        description="Cross-check the primality tests against trusted references.")
    ap.add_argument("--limit", type=int, default=1_000_000,
                    help="u64 test is checked exhaustively below this (use 100000000 for the full run)")
    ap.add_argument("--start", type=int, default=0, help="first n of the exhaustive check")
    ap.add_argument("--big-samples", type=int, default=5, help="random ranges for the big test")
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--csv", default="verify_failures.csv", help="where to write failures")
    ap.add_argument("--progress-every", type=int, default=0)
    args = ap.parse_args(argv)

    rng = random.Random(args.seed)
    t0 = time.perf_counter()
    fails = verify_range(args.start, args.limit, progress_every=args.progress_every)
    u64_fails = len(fails)
    big_fails = verify_big_samples(args.big_samples, rng)
    fails += big_fails
    start = 18446744073713598463
    gen_problems = verify_generated(generate_primes(start, 10, rng=rng), start)
    for problem in gen_problems:
        fails.append({"n": start, "expect": "generated", "got": problem})
    elapsed = time.perf_counter() - t0

    print("\n=== VERIFY SUMMARY ===")
    print(f"u64 range: [{args.start}, {args.limit}) | fails: {u64_fails}")
    print(f"big samples: {args.big_samples} | fails: {len(big_fails)}")
    print(f"generated from {start}: 10 | problems: {len(gen_problems)}")
    print(f"elapsed_s: {elapsed:.1f}")
    if not fails:
        print("\nNo failures recorded.")
        return 0
    with open(args.csv, "w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=["n", "expect", "got"])
        w.writeheader()
        w.writerows(fails)
    print(f"\nWrote details for {len(fails)} failures to {args.csv}")
    return 2

if __name__ == "__main__":
    raise SystemExit(main())
