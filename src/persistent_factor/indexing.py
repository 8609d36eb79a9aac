"""Bijection between pivot keys and dense indices."""

from __future__ import annotations

from typing import Dict, Generic, Hashable, List, Tuple, TypeVar

from .errors import DuplicateKeyError

MajKey = TypeVar("MajKey", bound=Hashable)
MinKey = TypeVar("MinKey", bound=Hashable)


class Indexing(Generic[MinKey, MajKey]):
    """Pivot bookkeeping.

    Index ``i`` is the ``i``-th pivot found: ``index_2_majkey[i]`` is the row that
    produced it and ``index_2_minkey[i]`` the column it sits on. ``ordered_minind``
    lists the pivot indices by increasing minor key; it stays empty until
    :meth:`order_minor_keys` is called.
    """

    def __init__(self, capacity: int = 0):
        self.capacity = int(capacity)
        self.minkey_2_index: Dict[MinKey, int] = {}
        self.majkey_2_index: Dict[MajKey, int] = {}
        self.index_2_minkey: List[MinKey] = []
        self.index_2_majkey: List[MajKey] = []
        self.ordered_minind: List[int] = []

    @classmethod
    def with_capacity(cls, capacity: int) -> "Indexing":
        return cls(capacity)

    def __len__(self) -> int:
        return len(self.index_2_minkey)

    def insert(self, majkey: MajKey, minkey: MinKey) -> int:
        """Record a new pivot and return its index."""
        if minkey in self.minkey_2_index:
            raise DuplicateKeyError(f"Minor key {minkey!r} already has index {self.minkey_2_index[minkey]}")
        if majkey in self.majkey_2_index:
            raise DuplicateKeyError(f"Major key {majkey!r} already has index {self.majkey_2_index[majkey]}")
        index = len(self.index_2_minkey)
        self.minkey_2_index[minkey] = index
        self.majkey_2_index[majkey] = index
        self.index_2_majkey.append(majkey)
        self.index_2_minkey.append(minkey)
        return index

    def has_minkey(self, minkey) -> bool:
        return minkey in self.minkey_2_index

    def has_majkey(self, majkey) -> bool:
        return majkey in self.majkey_2_index

    def order_minor_keys(self) -> List[int]:
        self.ordered_minind = sorted(range(len(self.index_2_minkey)), key=self.index_2_minkey.__getitem__)
        return self.ordered_minind

    def ordered_minkeys(self) -> List[MinKey]:
        return [self.index_2_minkey[i] for i in self.ordered_minind]

    def pairs(self) -> List[Tuple[MajKey, MinKey]]:
        return list(zip(self.index_2_majkey, self.index_2_minkey))

    def shrink_to_fit(self) -> None:
        self.capacity = len(self)

    def __repr__(self) -> str:
        return f"Indexing(pivots={len(self)}, capacity={self.capacity})"
