"""Append-only compressed sparse matrix used to store row operations."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

import numpy as np
from scipy import sparse

from .ring import Ring


class MajorDimension(Enum):
    ROW = "row"
    COL = "col"


class CSM:
    """Compressed sparse matrix built one major slice at a time.

    Major slice ``i`` owns ``minind[majptr[i]:majptr[i + 1]]`` and the matching
    ``snzval``. Values pushed with :meth:`push_snzval` go into the slice that is
    currently open (slice ``nummaj``) and :meth:`append_maj` closes it. Closed
    slices are never modified.
    """

    def __init__(self, major_dimension: MajorDimension, ring: Ring, capacity: int = 0):
        self.major_dimension = major_dimension
        self.ring = ring
        self.nummaj = 0
        self.majptr = np.zeros(max(int(capacity), 0) + 1, dtype=np.int64)
        self.minind: List[int] = []
        self.snzval: List[Any] = []

    @classmethod
    def with_capacity(cls, capacity: int, major_dimension: MajorDimension, ring: Ring) -> "CSM":
        return cls(major_dimension, ring, capacity=capacity)

    @property
    def capacity(self) -> int:
        return self.majptr.size - 1

    @property
    def nnz(self) -> int:
        return len(self.snzval)

    def __len__(self) -> int:
        return self.nummaj

    def _reserve(self, nummaj: int) -> None:
        if nummaj <= self.capacity:
            return
        grown = np.zeros(max(nummaj, 2 * self.capacity) + 1, dtype=np.int64)
        grown[: self.nummaj + 1] = self.majptr[: self.nummaj + 1]
        self.majptr = grown

    def push_snzval(self, index: int, value) -> None:
        """Add the entry ``(index, value)`` to the open slice."""
        self.minind.append(int(index))
        self.snzval.append(value)

    push_scalar = push_snzval

    def append_maj(self, row: Dict[int, Any]) -> int:
        """Drain ``row`` into the open slice and close it; return the slice index."""
        while row:
            index, value = row.popitem()
            self.push_snzval(index, value)
        self._reserve(self.nummaj + 1)
        self.nummaj += 1
        self.majptr[self.nummaj] = len(self.snzval)
        return self.nummaj - 1

    append_row = append_maj

    def _bounds(self, index: int) -> Tuple[int, int]:
        if not 0 <= index < self.nummaj:
            raise IndexError(f"Major index {index} out of range for {self.nummaj} slices")
        return int(self.majptr[index]), int(self.majptr[index + 1])

    def maj_itr(self, index: int) -> Iterator[Tuple[int, Any]]:
        start, end = self._bounds(index)
        return zip(self.minind[start:end], self.snzval[start:end])

    def maj_hash(self, index: int) -> Dict[int, Any]:
        return dict(self.maj_itr(index))

    row_as_hash = maj_hash

    def shrink_to_fit(self) -> None:
        self.majptr = self.majptr[: self.nummaj + 1].copy()

    def to_scipy(self, dtype: Optional[type] = np.int64):
        """Return the matrix as ``scipy.sparse`` (CSR for row major, CSC otherwise).

        Raises ``TypeError`` if a stored value is not exactly representable in ``dtype``,
        e.g. a non-integral rational with the default integer dtype.
        """
        n = self.nummaj
        indptr = np.asarray(self.majptr[: n + 1], dtype=np.int64)
        indices = np.asarray(self.minind, dtype=np.int64)
        values = [self.ring.simplify(v) for v in self.snzval]
        data = np.asarray(values, dtype=dtype)
        for converted, value in zip(data.tolist(), values):
            if converted != value:
                raise TypeError(
                    f"Value {value!r} cannot be stored exactly as {data.dtype}; use maj_hash or another dtype"
                )
        if self.major_dimension is MajorDimension.ROW:
            return sparse.csr_matrix((data, indices, indptr), shape=(n, n))
        return sparse.csc_matrix((data, indices, indptr), shape=(n, n))

    def __repr__(self) -> str:
        return (
            f"CSM(major_dimension={self.major_dimension.value}, nummaj={self.nummaj}, "
            f"nnz={self.nnz}, ring={self.ring!r})"
        )
