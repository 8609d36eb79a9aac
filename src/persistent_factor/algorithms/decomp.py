"""Row factorization of a sparse matrix oracle restricted to paired rows and columns.

Rows are taken from the end of the worklist. Each one is restricted to the active
columns and reduced, smallest column first, against the pivots found so far. The
reduced rows themselves are never stored: only the row operations (which earlier
rows were added, with which coefficients) go into the output matrix, and a pivot row
is rebuilt from the oracle each time it is needed.
"""

from __future__ import annotations

from typing import Collection, Hashable, Iterable, Optional, Tuple

from ..config import CAPACITY_FACTOR, NONINVERTIBLE_POLICIES, PROGRESS_EVERY
from ..csm import CSM, MajorDimension
from ..errors import NonInvertibleDominator
from ..indexing import Indexing
from ..oracle import SparseRowOracle
from ..ring import Ring
from .accumulator import combine_rows, load_row, merge_scaled, pop_leading


def _resolve_policy(ring: Ring, on_noninvertible: Optional[str]) -> str:
    if on_noninvertible is None:
        return "skip" if ring.is_field else "raise"
    policy = on_noninvertible.lower()
    if policy not in NONINVERTIBLE_POLICIES:
        raise ValueError(
            f"Unknown on_noninvertible '{on_noninvertible}'. Valid choices: {', '.join(NONINVERTIBLE_POLICIES)}"
        )
    return policy


def factor(
    oracle: SparseRowOracle,
    ring: Ring,
    worklist: Iterable[Hashable],
    active_minors: Optional[Collection[Hashable]],
    on_noninvertible: Optional[str] = None,
    verbose: bool = False,
) -> Tuple[CSM, Indexing]:
    """
    Reduce the rows in ``worklist`` against the columns in ``active_minors``.

    Parameters
    ----------
    oracle : SparseRowOracle
        Row access to the matrix. Rows are fetched again whenever a pivot row is rebuilt.
    ring : Ring
        Coefficient ring.
    worklist : iterable of major keys
        Rows to reduce. Consumed from the end, so the last key is processed first.
        The caller's object is not modified.
    active_minors : set of minor keys, or None
        Columns taken into account; entries in other columns are ignored.
        ``None`` keeps every column.
    on_noninvertible : {"raise", "skip"}, optional
        What to do when a pivot coefficient has no inverse. ``"skip"`` drops the
        leading entry and carries on. Defaults to ``"skip"`` over a field and
        ``"raise"`` otherwise.
    verbose : bool, optional
        Print progress, by default False

    Returns
    -------
    tuple
        (rowoper, indexing). Row ``i`` of ``rowoper`` holds coefficient one at ``i``
        and the coefficients of the earlier rows added to produce pivot ``i``.

    Raises
    ------
    NonInvertibleDominator
        If a pivot coefficient is not a unit and the policy is ``"raise"``.
    """
    policy = _resolve_policy(ring, on_noninvertible)
    maj_to_reduce = list(worklist)
    min_to_reduce = active_minors
    if min_to_reduce is not None and not isinstance(min_to_reduce, (set, frozenset)):
        min_to_reduce = frozenset(min_to_reduce)

    capacity = int(len(maj_to_reduce) * CAPACITY_FACTOR)
    rowoper = CSM.with_capacity(capacity, MajorDimension.ROW, ring)
    indexing = Indexing.with_capacity(capacity)

    if verbose:
        print(f"Factoring {len(maj_to_reduce)} major keys over {ring!r}")
        if min_to_reduce is not None and not min_to_reduce and maj_to_reduce:
            print("Active minor set is empty: every row reduces to zero")

    heap_reduced = []
    heap_rowoper = []
    hash_reduced = {}
    hash_rowoper = {}
    one = ring.identity_multiplicative
    n_processed = 0
    n_zero = 0
    n_skipped = 0

    while maj_to_reduce:
        majkey = maj_to_reduce.pop()
        heap_rowoper.clear()
        hash_rowoper.clear()
        load_row(ring, heap_reduced, hash_reduced, oracle.maj_itr(majkey), min_to_reduce)

        while True:
            leading = pop_leading(ring, heap_reduced, hash_reduced)
            if leading is None:
                n_zero += 1
                break
            minkey, leading_entry = leading

            index = indexing.minkey_2_index.get(minkey)
            if index is None:
                index = indexing.insert(majkey, minkey)
                rowoper.push_snzval(index, one)
                rowoper.append_maj(hash_rowoper)
                break

            row_rowoper = rowoper.maj_hash(index)
            row_reduced = combine_rows(oracle, row_rowoper, indexing.index_2_majkey, min_to_reduce, ring)
            dominator = row_reduced.pop(minkey, None)
            inverse = None if dominator is None else ring.inverse(dominator)
            if inverse is None:
                if policy == "raise":
                    raise NonInvertibleDominator(
                        minkey, ring.identity_additive if dominator is None else dominator
                    )
                n_skipped += 1
                continue

            scale = ring.simplify(-leading_entry * inverse)
            merge_scaled(ring, heap_reduced, hash_reduced, row_reduced, scale)
            merge_scaled(ring, heap_rowoper, hash_rowoper, row_rowoper, scale)

        n_processed += 1
        if verbose and n_processed % PROGRESS_EVERY == 0:
            print(f"  {n_processed} rows reduced, {len(indexing)} pivots, {rowoper.nnz} row operation entries")

    indexing.order_minor_keys()
    rowoper.shrink_to_fit()
    indexing.shrink_to_fit()

    if verbose:
        print(
            f"Done: {n_processed} rows, {len(indexing)} pivots, {n_zero} zero rows, "
            f"{n_skipped} skipped dominators, {rowoper.nnz} row operation entries"
        )
    return rowoper, indexing


def decomp_row_use_pairs(
    matrix: SparseRowOracle,
    maj_to_reduce: Iterable[Hashable],
    min_to_reduce: Optional[Collection[Hashable]],
    on_noninvertible: Optional[str] = None,
    verbose: bool = False,
) -> Tuple[CSM, Indexing]:
    """Same as :func:`factor` using the ring of ``matrix``."""
    return factor(matrix, matrix.ring, maj_to_reduce, min_to_reduce, on_noninvertible=on_noninvertible, verbose=verbose)


def count_rowoper_entries(
    matrix: SparseRowOracle,
    maj_to_reduce: Iterable[Hashable],
    min_to_reduce: Optional[Collection[Hashable]] = None,
    on_noninvertible: Optional[str] = None,
) -> int:
    """Number of stored coefficients in the row operation matrix, self entries included."""
    rowoper, _ = decomp_row_use_pairs(matrix, maj_to_reduce, min_to_reduce, on_noninvertible=on_noninvertible)
    return rowoper.nnz
