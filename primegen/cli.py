import re, sys, argparse
from typing import Optional

from gmpy2 import mpz

from .modarith import U64_MAX
from .candidates import generate_primes, generate_primes_u64
from .parallel import generate_primes_parallel

DEFAULT_START_BIG = 18446744073713598463
DEFAULT_START_U64 = 18446744073709000000
DEFAULT_COUNT = 100

_DECIMAL = re.compile(r"[+-]?[0-9]+")

def parse_start(text: str, u64: bool = False) -> Optional[int]:
    """Decimal start value, or None if it is not an integer of the domain."""
    text = text.strip()
    if not _DECIMAL.fullmatch(text):
        return None
    n = int(mpz(text.lstrip("+"), 10))  # no str-digits cap
    if u64 and not 0 <= n <= U64_MAX:
        return None
    return n

def _count(text: str) -> int:
    try:
        n = int(text, 10)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid count: {text!r}")
    if n < 0:
        raise argparse.ArgumentTypeError("count must be >= 0")
    return n

def _parser(prog: str, default_start: int, seeded: bool) -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog=prog,
        description="Print the first COUNT primes >= START, one per line.")
    ap.add_argument("start", nargs="?", default=str(default_start),
                    help=f"starting bound, decimal (default {default_start})")
    ap.add_argument("count", nargs="?", type=_count, default=DEFAULT_COUNT,
                    help=f"how many primes (default {DEFAULT_COUNT})")
    if seeded:
        ap.add_argument("--seed", type=int, default=None,
                        help="rng seed for reproducible Miller-Rabin bases")
    ap.add_argument("--workers", type=int, default=1,
                    help="process pool size for the candidate scan (default 1)")
    return ap

def _emit(primes):
    for p in primes:
        print(mpz(p))

def main_big(argv=None) -> int:
    args = _parser("primegen-big", DEFAULT_START_BIG, seeded=True).parse_args(argv)
    start = parse_start(args.start)
    if start is None:
        print(f"invalid start value: {args.start!r}", file=sys.stderr)
        return 1
    if args.workers > 1:
        primes = generate_primes_parallel(start, args.count, domain="big",
                                          workers=args.workers, seed=args.seed)
    else:
        primes = generate_primes(start, args.count, seed=args.seed)
    _emit(primes)
    return 0

def main_u64(argv=None) -> int:
    args = _parser("primegen-u64", DEFAULT_START_U64, seeded=False).parse_args(argv)
    start = parse_start(args.start, u64=True)
    if start is None:
        print(f"invalid start value (expected 0..{U64_MAX}): {args.start!r}", file=sys.stderr)
        return 1
    if args.workers > 1:
        primes = generate_primes_parallel(start, args.count, domain="u64",
                                          workers=args.workers)
    else:
        primes = generate_primes_u64(start, args.count)
    _emit(primes)
    return 0

if __name__ == "__main__":
    raise SystemExit(main_big())
