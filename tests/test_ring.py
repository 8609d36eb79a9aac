"""Tests for the coefficient rings."""

from fractions import Fraction

import pytest

from persistent_factor.ring import IntegerRing, ModularRing, RationalRing


@pytest.mark.parametrize(
    "modulus, is_field",
    [(2, True), (3, True), (4, False), (6, False), (7, True), (9, False), (101, True)],
)
def test_modular_ring_is_field(modulus: int, is_field: bool) -> None:
    assert ModularRing(modulus).is_field is is_field


@pytest.mark.parametrize("modulus", [2, 3, 5, 7, 11])
def test_every_nonzero_element_is_invertible_mod_prime(modulus: int) -> None:
    ring = ModularRing(modulus)
    for value in range(1, modulus):
        inverse = ring.inverse(value)
        assert inverse is not None
        assert ring.simplify(value * inverse) == 1


def test_modular_non_units() -> None:
    ring = ModularRing(6)
    assert ring.inverse(2) is None
    assert ring.inverse(3) is None
    assert ring.inverse(0) is None
    assert ring.inverse(5) == 5
    assert ring.inverse(-1) == 5


def test_modular_simplify_and_zero() -> None:
    ring = ModularRing(5)
    assert ring.simplify(-1) == 4
    assert ring.simplify(12) == 2
    assert ring.is_0(10)
    assert ring.is_0(-5)
    assert not ring.is_0(3)


@pytest.mark.parametrize("modulus", [0, 1, -3])
def test_invalid_modulus(modulus: int) -> None:
    with pytest.raises(ValueError):
        ModularRing(modulus)


def test_modular_equality() -> None:
    assert ModularRing(3) == ModularRing(3)
    assert ModularRing(3) != ModularRing(5)
    assert len({ModularRing(2), ModularRing(2)}) == 1


def test_rational_ring() -> None:
    ring = RationalRing()
    assert ring.is_field
    assert ring.inverse(Fraction(2, 3)) == Fraction(3, 2)
    assert ring.inverse(0) is None
    assert ring.simplify(3) == Fraction(3)
    assert ring.is_0(Fraction(0))


def test_integer_ring() -> None:
    ring = IntegerRing()
    assert not ring.is_field
    assert ring.inverse(1) == 1
    assert ring.inverse(-1) == -1
    assert ring.inverse(2) is None
    assert ring.is_0(0)
