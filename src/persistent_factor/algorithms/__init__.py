"""Algorithms for persistent_factor: sparse accumulation and paired row factorization."""

from __future__ import annotations

from .accumulator import (
    add_assign_hash,
    combine_rows,
    load_row,
    merge_scaled,
    pop_leading,
    restrict_row,
)
from .decomp import count_rowoper_entries, decomp_row_use_pairs, factor


__all__ = [
    "add_assign_hash",
    "combine_rows",
    "count_rowoper_entries",
    "decomp_row_use_pairs",
    "factor",
    "load_row",
    "merge_scaled",
    "pop_leading",
    "restrict_row",
]
