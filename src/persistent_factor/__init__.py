"""Exact row factorization of sparse matrix oracles restricted to persistence pairs."""

from __future__ import annotations

__version__ = "0.1.0"

from .algorithms import count_rowoper_entries, decomp_row_use_pairs, factor
from .csm import CSM, MajorDimension
from .errors import DuplicateKeyError, NonInvertibleDominator, PersistentFactorError
from .indexing import Indexing
from .oracle import CachedOracle, DictOracle, ScipyOracle, SparseRowOracle
from .ring import IntegerRing, ModularRing, RationalRing, Ring

__all__ = [
    "CSM",
    "CachedOracle",
    "DictOracle",
    "DuplicateKeyError",
    "Indexing",
    "IntegerRing",
    "MajorDimension",
    "ModularRing",
    "NonInvertibleDominator",
    "PersistentFactorError",
    "RationalRing",
    "Ring",
    "ScipyOracle",
    "SparseRowOracle",
    "count_rowoper_entries",
    "decomp_row_use_pairs",
    "factor",
]
