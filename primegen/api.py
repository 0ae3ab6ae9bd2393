import time
from flask import Blueprint, request, jsonify
from werkzeug.exceptions import BadRequest
from gmpy2 import mpz

from .cli import parse_start
from .candidates import generate_primes, generate_primes_u64
from .primality import is_prime_big, is_prime_u64

primes_bp = Blueprint("primes_bp", __name__)

DOMAINS = ("big", "u64")
DEFAULT_COUNT = 10
MAX_COUNT = 10_000

# ------------------ helpers ------------------
def _int_arg(name: str, default: int | None = None, required: bool = True) -> int | None:
    raw = request.args.get(name, "").strip()
    if not raw:
        if default is None and required:
            raise BadRequest(f"missing {name}")
        return default
    try:
        return int(raw, 10)
    except ValueError:
        raise BadRequest(f"{name} must be integer")

def _domain_arg() -> str:
    domain = request.args.get("domain", "big").strip() or "big"
    if domain not in DOMAINS:
        raise BadRequest(f"domain must be one of {', '.join(DOMAINS)}")
    return domain

def _number_arg(name: str, domain: str) -> int:
    """Same decimal rules as the command line; u64 values must fit 0..2^64-1."""
    raw = request.args.get(name, "")
    if not raw.strip():
        raise BadRequest(f"missing {name}")
    n = parse_start(raw, u64=(domain == "u64"))
    if n is None:
        if domain == "u64":
            raise BadRequest(f"{name} must be a 64-bit unsigned integer (0..2^64-1)")
        raise BadRequest(f"{name} must be a decimal integer")
    return n

def _dec(n) -> str:
    return str(mpz(n))  # no str-digits cap

# ------------------ API ------------------
@primes_bp.get("/api/primes")
def api_primes():
    domain = _domain_arg()
    start = _number_arg("start", domain)
    count = _int_arg("count", DEFAULT_COUNT)
    if count < 0 or count > MAX_COUNT:
        raise BadRequest(f"count must be between 0 and {MAX_COUNT}")
    t0 = time.perf_counter()
    if domain == "u64":
        primes = generate_primes_u64(start, count)
    else:
        primes = generate_primes(start, count, seed=_int_arg("seed", required=False))
    dt_ms = int((time.perf_counter() - t0) * 1000)
    return jsonify(ok=True, domain=domain, start=_dec(start), count=len(primes),
                   primes=[_dec(p) for p in primes], duration_ms=dt_ms)

@primes_bp.get("/api/is_prime")
def api_is_prime():
    domain = _domain_arg()
    n = _number_arg("n", domain)
    if domain == "u64":
        prime = is_prime_u64(n)
    else:
        prime = is_prime_big(n)
    return jsonify(ok=True, n=_dec(n), domain=domain, prime=prime)

@primes_bp.get("/api/health")
def api_health():
    return jsonify(ok=True)
