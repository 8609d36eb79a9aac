"""Exceptions raised by persistent_factor."""

from __future__ import annotations


class PersistentFactorError(Exception):
    """Base class for errors raised by this package."""


class NonInvertibleDominator(PersistentFactorError, ArithmeticError):
    """A pivot coefficient with no multiplicative inverse was met during elimination."""

    def __init__(self, minkey, dominator):
        self.minkey = minkey
        self.dominator = dominator
        super().__init__(
            f"Dominator {dominator!r} at minor key {minkey!r} is not invertible in the coefficient ring"
        )


class DuplicateKeyError(PersistentFactorError, ValueError):
    """A key was assigned a second dense index."""
