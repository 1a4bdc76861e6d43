# tests/test_galois.py
"""
Field axioms for every arithmetic strategy, plus the concrete tables of the
small extension fields.
"""

from __future__ import annotations

from itertools import product

import pytest

from spotplane.errors import InvalidOrderError, UnsupportedFieldError
from spotplane.galois import (
    BinaryExtensionArithmetic,
    GaloisField,
    PrimeArithmetic,
    TernaryQuadraticArithmetic,
    format_gf2_polynomial,
)

FIELD_ORDERS = [2, 3, 4, 5, 7, 8, 9, 11, 13, 16]


@pytest.fixture(params=FIELD_ORDERS, ids=lambda q: f"GF({q})")
def gf(request):
    return GaloisField(request.param)


# ---------- axioms ------------------------------------------------------------


def test_identities(gf):
    for a in gf.elements():
        assert gf.add(a, 0) == a
        assert gf.multiply(a, 1) == a
        assert gf.multiply(a, 0) == 0


def test_commutative(gf):
    for a, b in product(gf.elements(), repeat=2):
        assert gf.add(a, b) == gf.add(b, a)
        assert gf.multiply(a, b) == gf.multiply(b, a)


def test_associative_and_distributive(gf):
    for a, b, c in product(gf.elements(), repeat=3):
        assert gf.add(gf.add(a, b), c) == gf.add(a, gf.add(b, c))
        assert gf.multiply(gf.multiply(a, b), c) == gf.multiply(a, gf.multiply(b, c))
        assert gf.multiply(a, gf.add(b, c)) == gf.add(gf.multiply(a, b), gf.multiply(a, c))


def test_inverses(gf):
    for a in gf.elements():
        assert sum(1 for b in gf.elements() if gf.add(a, b) == 0) == 1
        if a:
            assert sum(1 for b in gf.elements() if gf.multiply(a, b) == 1) == 1


def test_no_zero_divisors(gf):
    for a, b in product(range(1, gf.order), repeat=2):
        assert gf.multiply(a, b) != 0


def test_results_stay_in_field(gf):
    for a, b in product(gf.elements(), repeat=2):
        assert 0 <= gf.add(a, b) < gf.order
        assert 0 <= gf.multiply(a, b) < gf.order


def test_characteristic(gf):
    p = gf.characteristic
    for a in gf.elements():
        total = 0
        for _ in range(p):
            total = gf.add(total, a)
        assert total == 0


# ---------- strategy selection --------------------------------------------------


@pytest.mark.parametrize("q,cls,p,k", [
    (2, PrimeArithmetic, 2, 1),
    (7, PrimeArithmetic, 7, 1),
    (11, PrimeArithmetic, 11, 1),
    (4, BinaryExtensionArithmetic, 2, 2),
    (8, BinaryExtensionArithmetic, 2, 3),
    (16, BinaryExtensionArithmetic, 2, 4),
    (9, TernaryQuadraticArithmetic, 3, 2),
])
def test_strategy_selected_once(q, cls, p, k):
    gf = GaloisField(q)
    assert isinstance(gf.arithmetic, cls)
    assert (gf.characteristic, gf.degree) == (p, k)


def test_prime_field_has_no_tables():
    assert GaloisField(5).tables is None


@pytest.mark.parametrize("q", [4, 9])
def test_tables_come_from_the_strategy(q):
    gf = GaloisField(q)
    assert gf.tables == (gf.arithmetic.exp, gf.arithmetic.log)


@pytest.mark.parametrize("q", [4, 8, 9, 16])
def test_exp_log_tables_are_inverse(q):
    exp, log = GaloisField(q).tables
    assert len(exp) == q - 1
    assert sorted(exp) == list(range(1, q))
    for i, value in enumerate(exp):
        assert log[value] == i


# ---------- concrete values --------------------------------------------------


def test_gf4():
    gf = GaloisField(4)
    assert gf.arithmetic.modulus == 0b111          # x^2 + x + 1
    assert gf.add(2, 3) == 1                      # XOR
    assert gf.multiply(2, 2) == 3                 # α² = α + 1
    assert gf.multiply(2, 3) == 1
    assert gf.multiply(3, 3) == 2


def test_gf8_modulus():
    gf = GaloisField(8)
    assert gf.arithmetic.modulus == 0b1011         # x^3 + x + 1
    assert format_gf2_polynomial(gf.arithmetic.modulus) == "x^3 + x + 1"
    assert gf.multiply(4, 2) == 3                 # x^3 = x + 1


def test_gf16_modulus():
    assert GaloisField(16).arithmetic.modulus == 0b10011   # x^4 + x + 1


def test_gf9():
    gf = GaloisField(9)
    assert gf.arithmetic.generator == 4           # 1 + α
    assert gf.multiply(3, 3) == 2                 # α² = 2
    assert gf.add(5, 7) == 0                      # (2 + α) + (1 + 2α)
    assert gf.add(4, 4) == 8                      # 2 + 2α
    assert gf.multiply(4, 4) == 6                 # (1 + α)² = 2α


def test_describe():
    assert "mod 7" in GaloisField(7).describe()
    assert "x^2 + x + 1" in GaloisField(4).describe()
    assert "α² = 2" in GaloisField(9).describe()


# ---------- errors -------------------------------------------------------------


@pytest.mark.parametrize("q", [0, 1, 6, 10, 12, -4])
def test_not_a_prime_power(q):
    with pytest.raises(InvalidOrderError):
        GaloisField(q)
    assert not GaloisField.supports(q)


@pytest.mark.parametrize("q", [25, 27, 49, 81, 121])
def test_unsupported_extension(q):
    with pytest.raises(UnsupportedFieldError) as exc:
        GaloisField(q)
    assert not isinstance(exc.value, InvalidOrderError)
    assert not GaloisField.supports(q)


def test_invalid_order_is_an_unsupported_field():
    # callers catching the broader error also see non prime powers
    with pytest.raises(UnsupportedFieldError):
        GaloisField(6)


def test_non_integer_order():
    with pytest.raises(InvalidOrderError):
        GaloisField(4.0)


def test_operands_checked():
    gf = GaloisField(4)
    with pytest.raises(ValueError):
        gf.add(4, 0)
    with pytest.raises(ValueError):
        gf.multiply(-1, 1)


def test_field_is_immutable():
    gf = GaloisField(8)
    with pytest.raises(AttributeError):
        gf.order = 9
