# -----------------------------------------------------------------------------
#  galois.py
#  Finite field arithmetic GF(q) for the deck orders we can build
# -----------------------------------------------------------------------------

"""
Three arithmetic strategies share one contract (add, multiply):

  PrimeArithmetic             GF(p)    plain modular arithmetic
  BinaryExtensionArithmetic   GF(2^k)  XOR addition, exp/log multiplication
  TernaryQuadraticArithmetic  GF(9)    a + bα with α² = 2, exp/log multiplication

GaloisField picks one at construction; callers never branch on p.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Protocol

from spotplane.errors import InvalidOrderError, UnsupportedFieldError
from spotplane.primes import get_prime_power


class FieldArithmetic(Protocol):
    def add(self, a: int, b: int) -> int: ...
    def multiply(self, a: int, b: int) -> int: ...


def _table_multiply(exp: tuple[int, ...], log: tuple[int, ...], a: int, b: int) -> int:
    if a == 0 or b == 0:
        return 0
    return exp[(log[a] + log[b]) % len(exp)]


# --- GF(p) -------------------------------------------------------------------

@dataclass(frozen=True)
class PrimeArithmetic:
    p: int

    def add(self, a: int, b: int) -> int:
        return (a + b) % self.p

    def multiply(self, a: int, b: int) -> int:
        return (a * b) % self.p


# --- GF(2^k) -----------------------------------------------------------------

def _gf2_mod(a: int, b: int) -> int:
    """Remainder of GF(2)[x] long division a / b (bits are coefficients)."""
    db = b.bit_length()
    while a.bit_length() >= db:
        a ^= b << (a.bit_length() - db)
    return a


def _gf2_is_irreducible(poly: int, degree: int) -> bool:
    # a reducible polynomial has a factor of degree <= degree // 2
    for d in range(1, degree // 2 + 1):
        for divisor in range(1 << d, 1 << (d + 1)):
            if _gf2_mod(poly, divisor) == 0:
                return False
    return True


def _gf2_irreducibles(degree: int) -> Iterator[int]:
    """Irreducible degree-k polynomials, smallest first (odd: constant term 1)."""
    for candidate in range((1 << degree) + 1, 1 << (degree + 1), 2):
        if _gf2_is_irreducible(candidate, degree):
            yield candidate


def _gf2_cyclic_tables(degree: int, modulus: int) -> tuple[tuple[int, ...], tuple[int, ...]] | None:
    """
    Powers of x modulo `modulus` as (exp, log) tables, or None when x does not
    generate the whole multiplicative group (modulus irreducible but not primitive).
    """
    q = 1 << degree
    exp = [0] * (q - 1)
    log = [0] * q
    x = 1
    for i in range(q - 1):
        if i and x == 1:
            return None
        exp[i] = x
        log[x] = i
        x <<= 1          # multiply by x
        if x & q:        # degree reached k: reduce
            x ^= modulus
    return tuple(exp), tuple(log)


@dataclass(frozen=True)
class BinaryExtensionArithmetic:
    degree: int
    modulus: int
    exp: tuple[int, ...] = field(repr=False)
    log: tuple[int, ...] = field(repr=False)

    @classmethod
    def build(cls, degree: int) -> BinaryExtensionArithmetic:
        for modulus in _gf2_irreducibles(degree):
            tables = _gf2_cyclic_tables(degree, modulus)
            if tables is not None:
                exp, log = tables
                return cls(degree=degree, modulus=modulus, exp=exp, log=log)
        # every degree has a primitive polynomial, so this is unreachable for k >= 1
        raise UnsupportedFieldError(f"no primitive polynomial of degree {degree} over GF(2)")

    def add(self, a: int, b: int) -> int:
        return a ^ b

    def multiply(self, a: int, b: int) -> int:
        return _table_multiply(self.exp, self.log, a, b)


# --- GF(9) -------------------------------------------------------------------

_GF9_ORDER = 9


def _gf9_split(u: int) -> tuple[int, int]:
    return u % 3, u // 3


def _gf9_poly_multiply(u: int, v: int) -> int:
    """(a1 + b1·α)(a2 + b2·α) with α² = 2, coefficients mod 3."""
    a1, b1 = _gf9_split(u)
    a2, b2 = _gf9_split(v)
    a = (a1 * a2 + 2 * b1 * b2) % 3
    b = (a1 * b2 + a2 * b1) % 3
    return a + 3 * b


def _gf9_cyclic_tables() -> tuple[int, tuple[int, ...], tuple[int, ...]]:
    """Find a generator of GF(9)* by brute force; return (g, exp, log)."""
    group = _GF9_ORDER - 1
    for g in range(2, _GF9_ORDER):
        powers = [1]
        x = g
        while x != 1:
            powers.append(x)
            x = _gf9_poly_multiply(x, g)
        if len(powers) == group:
            log = [0] * _GF9_ORDER
            for i, value in enumerate(powers):
                log[value] = i
            return g, tuple(powers), tuple(log)
    raise UnsupportedFieldError("GF(9) has no generator")  # pragma: no cover


@dataclass(frozen=True)
class TernaryQuadraticArithmetic:
    generator: int
    exp: tuple[int, ...] = field(repr=False)
    log: tuple[int, ...] = field(repr=False)

    @classmethod
    def build(cls) -> TernaryQuadraticArithmetic:
        g, exp, log = _gf9_cyclic_tables()
        return cls(generator=g, exp=exp, log=log)

    def add(self, a: int, b: int) -> int:
        a1, b1 = _gf9_split(a)
        a2, b2 = _gf9_split(b)
        return (a1 + a2) % 3 + 3 * ((b1 + b2) % 3)

    def multiply(self, a: int, b: int) -> int:
        return _table_multiply(self.exp, self.log, a, b)


# --- Public field ------------------------------------------------------------

def _select_arithmetic(q: int) -> tuple[int, int, FieldArithmetic]:
    if not isinstance(q, int) or isinstance(q, bool):
        raise InvalidOrderError(f"Field order must be an integer. Got: {q!r}")
    pk = get_prime_power(q)
    if pk is None:
        raise InvalidOrderError(f"Field order must be a prime power. Got: {q}")
    p, k = pk

    if k == 1:
        return p, k, PrimeArithmetic(p)
    if p == 2:
        return p, k, BinaryExtensionArithmetic.build(k)
    if p == 3 and k == 2:
        return p, k, TernaryQuadraticArithmetic.build()
    raise UnsupportedFieldError(
        f"GF({q}) = GF({p}^{k}) is not implemented; extension fields exist only "
        f"for characteristic 2 and for GF(9)."
    )


def format_gf2_polynomial(poly: int) -> str:
    """Render a GF(2)[x] bit pattern, e.g. 0b1011 -> 'x^3 + x + 1'."""
    terms = []
    for e in range(poly.bit_length() - 1, -1, -1):
        if poly >> e & 1:
            terms.append("1" if e == 0 else ("x" if e == 1 else f"x^{e}"))
    return " + ".join(terms) or "0"


@dataclass(frozen=True)
class GaloisField:
    """
    The finite field with `order` elements, represented as ints 0..order-1.

    Raises InvalidOrderError when `order` is not a prime power and
    UnsupportedFieldError for prime powers without an implemented extension.
    """
    order: int
    characteristic: int = field(init=False)
    degree: int = field(init=False)
    arithmetic: FieldArithmetic = field(init=False, repr=False)

    def __post_init__(self) -> None:
        p, k, arith = _select_arithmetic(self.order)
        object.__setattr__(self, "characteristic", p)
        object.__setattr__(self, "degree", k)
        object.__setattr__(self, "arithmetic", arith)

    @classmethod
    def supports(cls, q: int) -> bool:
        try:
            cls(q)
        except UnsupportedFieldError:
            return False
        return True

    def _check(self, *values: int) -> None:
        for v in values:
            if not 0 <= v < self.order:
                raise ValueError(f"{v} is not an element of GF({self.order})")

    def add(self, a: int, b: int) -> int:
        self._check(a, b)
        return self.arithmetic.add(a, b)

    def multiply(self, a: int, b: int) -> int:
        self._check(a, b)
        return self.arithmetic.multiply(a, b)

    def elements(self) -> range:
        return range(self.order)

    @property
    def tables(self) -> tuple[tuple[int, ...], tuple[int, ...]] | None:
        """(exp, log) for extension fields, None for prime fields."""
        arith = self.arithmetic
        if isinstance(arith, (BinaryExtensionArithmetic, TernaryQuadraticArithmetic)):
            return arith.exp, arith.log
        return None

    def describe(self) -> str:
        head = f"GF({self.order})"
        if self.degree == 1:
            return f"{head}: prime field, arithmetic mod {self.characteristic}"
        arith = self.arithmetic
        if isinstance(arith, BinaryExtensionArithmetic):
            return f"{head} = GF(2^{self.degree}): modulus {format_gf2_polynomial(arith.modulus)}"
        if isinstance(arith, TernaryQuadraticArithmetic):
            return f"{head} = GF(3^2): α² = 2, generator {arith.generator}"
        return head
