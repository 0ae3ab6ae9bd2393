from .modarith import U64_MAX, mulmod, powmod, mul_wide, mulmod_doubling
from .primality import is_prime_big, is_prime_u64, miller_rabin
from .candidates import (
    next_candidate,
    next_candidate_u64,
    generate_primes,
    generate_primes_u64,
)
from .parallel import generate_primes_parallel
__all__ = [
    "U64_MAX", "mulmod", "powmod", "mul_wide", "mulmod_doubling",
    "is_prime_big", "is_prime_u64", "miller_rabin",
    "next_candidate", "next_candidate_u64", "generate_primes", "generate_primes_u64",
    "generate_primes_parallel",
]
