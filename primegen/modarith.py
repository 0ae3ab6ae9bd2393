# primegen/modarith.py
# Modular arithmetic for both numeric domains
# - BigDomain: arbitrary precision, gmpy2.mpz values
# - U64Domain: unsigned 64-bit values, exact 128-bit products before reduction
# - mul_wide / mulmod_doubling: the two 64-bit multiply strategies

from __future__ import annotations
from gmpy2 import mpz

U64_MAX = 0xFFFFFFFFFFFFFFFF
_MASK64 = U64_MAX

# ---------- 64-bit primitives ----------

def mul_wide(a: int, b: int) -> tuple[int, int]:
    """
    Exact product of two 64-bit words as (hi, lo), each a 64-bit word,
    so that a*b == (hi << 64) | lo.
    """
    if not (0 <= a <= U64_MAX and 0 <= b <= U64_MAX):
        raise ValueError("operands must be 64-bit unsigned integers")
    p = a * b
    return p >> 64, p & _MASK64

def mulmod_doubling(a: int, b: int, m: int) -> int:
    """
    (a*b) mod m by double-and-add. No intermediate ever exceeds m-1, so the
    routine is safe on any machine word of 64 bits.
    """
    if m < 1:
        raise ValueError("modulus must be >= 1")
    result = 0
    a %= m
    while b:
        if b & 1:
            # result + a without leaving [0, m)
            result = result - (m - a) if result >= m - a else result + a
        b >>= 1
        if b:
            a = a - (m - a) if a >= m - a else a + a
    return result % m

# ---------- domains ----------

class Domain:
    """Integer capability set the Miller-Rabin test is written against."""
    name = "abstract"
    max_value: int | None = None

    def coerce(self, v):
        raise NotImplementedError

    def mulmod(self, a, b, m):
        raise NotImplementedError

    def powmod(self, base, exp, m):
        """base^exp mod m, square-and-multiply. m == 1 always gives 0."""
        if m < 1:
            raise ValueError("modulus must be >= 1")
        res = 1 % m
        base %= m
        while exp > 0:
            if exp & 1:
                res = self.mulmod(res, base, m)
            base = self.mulmod(base, base, m)
            exp >>= 1
        return res

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.name}>"

class BigDomain(Domain):
    name = "big"

    def coerce(self, v) -> mpz:
        return mpz(v)

    def mulmod(self, a, b, m):
        return (a * b) % m

class U64Domain(Domain):
    """
    Unsigned 64-bit arithmetic. With wide=True products go through mul_wide
    (full 128-bit intermediate); wide=False uses the double-and-add routine.
    Both are bit-exact.
    """
    name = "u64"
    max_value = U64_MAX

    def __init__(self, wide: bool = True):
        self.wide = wide

    def coerce(self, v) -> int:
        v = int(v)
        if v < 0 or v > U64_MAX:
            raise ValueError("value must be a 64-bit unsigned integer (0..2^64-1)")
        return v

    def mulmod(self, a, b, m):
        if not self.wide:
            return mulmod_doubling(a, b, m)
        hi, lo = mul_wide(a, b)
        return ((hi << 64) | lo) % m

BIG = BigDomain()
U64 = U64Domain()

# ---------- plain helpers (arbitrary precision) ----------

def mulmod(a: int, b: int, m: int) -> int:
    if m < 1:
        raise ValueError("modulus must be >= 1")
    return int(BIG.mulmod(mpz(a), mpz(b), mpz(m)))

def powmod(base: int, exp: int, m: int) -> int:
    if exp < 0:
        raise ValueError("exponent must be >= 0")
    return int(BIG.powmod(mpz(base), mpz(exp), mpz(m)))
