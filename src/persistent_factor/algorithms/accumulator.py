"""Sparse vector accumulation over a hash map and a min-heap of keys.

The dictionary is the source of truth. The heap lists candidate keys in increasing
order and may hold keys whose entry has since been cancelled or popped; those are
skipped when they come out of the heap.
"""

from __future__ import annotations

import heapq
from typing import Any, Container, Dict, Hashable, Iterable, List, Optional, Sequence, Tuple

from ..ring import Ring


def merge_scaled(
    ring: Ring,
    heap: List[Hashable],
    hash_: Dict[Hashable, Any],
    row: Dict[Hashable, Any],
    scale,
) -> None:
    """Add ``scale * row`` to the accumulator ``(hash_, heap)``, draining ``row``."""
    while row:
        key, val = row.popitem()
        value = ring.simplify(scale * val)
        if key in hash_:
            total = ring.simplify(hash_[key] + value)
            if ring.is_0(total):
                del hash_[key]
            else:
                hash_[key] = total
        elif not ring.is_0(value):
            heapq.heappush(heap, key)
            hash_[key] = value


def add_assign_hash(ring: Ring, hash_: Dict[Hashable, Any], row: Dict[Hashable, Any], scale) -> None:
    """Add ``scale * row`` to ``hash_`` in place, draining ``row``."""
    while row:
        key, val = row.popitem()
        value = ring.simplify(scale * val)
        if key in hash_:
            total = ring.simplify(hash_[key] + value)
            if ring.is_0(total):
                del hash_[key]
            else:
                hash_[key] = total
        elif not ring.is_0(value):
            hash_[key] = value


def restrict_row(
    ring: Ring,
    entries: Iterable[Tuple[Hashable, Any]],
    active: Optional[Container] = None,
) -> Dict[Hashable, Any]:
    """Return the nonzero entries whose key is in ``active`` (all of them if ``None``)."""
    row = {}
    for key, val in entries:
        if active is not None and key not in active:
            continue
        val = ring.simplify(val)
        if not ring.is_0(val):
            row[key] = val
    return row


def load_row(
    ring: Ring,
    heap: List[Hashable],
    hash_: Dict[Hashable, Any],
    entries: Iterable[Tuple[Hashable, Any]],
    active: Optional[Container] = None,
) -> None:
    """Reset the accumulator to the restricted ``entries``."""
    heap.clear()
    hash_.clear()
    hash_.update(restrict_row(ring, entries, active))
    heap.extend(hash_)
    heapq.heapify(heap)


def pop_leading(
    ring: Ring, heap: List[Hashable], hash_: Dict[Hashable, Any]
) -> Optional[Tuple[Hashable, Any]]:
    """Remove and return the live entry with the smallest key, or ``None`` if there is none."""
    while heap:
        key = heapq.heappop(heap)
        value = hash_.pop(key, None)
        if value is None or ring.is_0(value):
            continue
        return key, value
    return None


def combine_rows(
    oracle,
    coefficients: Dict[int, Any],
    index_2_majkey: Sequence[Hashable],
    active: Optional[Container] = None,
    ring: Optional[Ring] = None,
) -> Dict[Hashable, Any]:
    """Return ``sum(c * row(index_2_majkey[i]) for i, c in coefficients)`` restricted to ``active``."""
    if ring is None:
        ring = oracle.ring
    combined: Dict[Hashable, Any] = {}
    for index, coefficient in coefficients.items():
        row = restrict_row(ring, oracle.maj_itr(index_2_majkey[index]), active)
        add_assign_hash(ring, combined, row, coefficient)
    return combined
