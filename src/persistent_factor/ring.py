"""Coefficient rings used by the factorization.

A ring object does not wrap its values: coefficients are plain Python numbers combined
with ``+``, unary ``-`` and ``*``. The ring supplies what the operators cannot, namely
the identities, the zero test, a partial inverse and a canonical form.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from fractions import Fraction
from typing import Any, Optional


class Ring(ABC):
    """Exact coefficient arithmetic."""

    identity_additive: Any = 0
    identity_multiplicative: Any = 1

    @property
    @abstractmethod
    def is_field(self) -> bool:
        """``True`` when every nonzero element is invertible."""

    def is_0(self, value) -> bool:
        return self.simplify(value) == self.identity_additive

    @abstractmethod
    def inverse(self, value) -> Optional[Any]:
        """Return the multiplicative inverse of ``value`` or ``None`` if it has none."""

    def simplify(self, value):
        return value

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def _is_prime(n: int) -> bool:
    if n < 2:
        return False
    if n % 2 == 0:
        return n == 2
    k = 3
    while k * k <= n:
        if n % k == 0:
            return False
        k += 2
    return True


class ModularRing(Ring):
    """Integers modulo ``modulus``.

    Parameters
    ----------
    modulus : int
        Must be at least 2. The ring is a field exactly when the modulus is prime.
    """

    def __init__(self, modulus: int):
        modulus = int(modulus)
        if modulus < 2:
            raise ValueError(f"modulus must be at least 2, got {modulus}")
        self.modulus = modulus
        self._is_field = _is_prime(modulus)

    @property
    def is_field(self) -> bool:
        return self._is_field

    def is_0(self, value) -> bool:
        return value % self.modulus == 0

    def simplify(self, value) -> int:
        return int(value) % self.modulus

    def inverse(self, value) -> Optional[int]:
        try:
            return pow(int(value), -1, self.modulus)
        except ValueError:
            return None

    def __repr__(self) -> str:
        return f"ModularRing({self.modulus})"

    def __eq__(self, other) -> bool:
        return isinstance(other, ModularRing) and other.modulus == self.modulus

    def __hash__(self) -> int:
        return hash((ModularRing, self.modulus))


class RationalRing(Ring):
    """The rationals, with values held as :class:`fractions.Fraction`."""

    identity_additive = Fraction(0)
    identity_multiplicative = Fraction(1)

    @property
    def is_field(self) -> bool:
        return True

    def is_0(self, value) -> bool:
        return value == 0

    def simplify(self, value) -> Fraction:
        return Fraction(value)

    def inverse(self, value) -> Optional[Fraction]:
        if value == 0:
            return None
        return 1 / Fraction(value)


class IntegerRing(Ring):
    """The integers. Only ``1`` and ``-1`` are units."""

    @property
    def is_field(self) -> bool:
        return False

    def is_0(self, value) -> bool:
        return value == 0

    def simplify(self, value) -> int:
        return int(value)

    def inverse(self, value) -> Optional[int]:
        if value in (1, -1):
            return int(value)
        return None
