"""Read-only row access to sparse matrices.

An oracle hands out the nonzero entries of one row at a time, keyed by arbitrary
hashable, totally ordered major and minor keys. Rows are produced on demand and must
be the same every time the same row is requested.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Hashable, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

import numpy as np
from scipy import sparse

from .ring import Ring

Entry = Tuple[Hashable, Any]


class SparseRowOracle(ABC):
    """Lazy row access to a sparse matrix over ``ring``."""

    ring: Ring

    @abstractmethod
    def maj_itr(self, majkey) -> Iterable[Entry]:
        """Yield the ``(minkey, value)`` nonzero entries of the row ``majkey``."""

    def rows_for(self, majkey) -> Iterable[Entry]:
        return self.maj_itr(majkey)

    def maj_hash(self, majkey) -> Dict[Hashable, Any]:
        return dict(self.maj_itr(majkey))


class DictOracle(SparseRowOracle):
    """Oracle over a mapping ``majkey -> {minkey: value}``.

    Values are simplified in ``ring`` and zero entries dropped. Unknown major keys
    have an empty row.
    """

    def __init__(self, rows: Mapping[Hashable, Mapping[Hashable, Any]], ring: Ring):
        self.ring = ring
        self.rows: Dict[Hashable, Dict[Hashable, Any]] = {}
        for majkey, row in rows.items():
            clean = {}
            for minkey, value in row.items():
                value = ring.simplify(value)
                if not ring.is_0(value):
                    clean[minkey] = value
            self.rows[majkey] = clean

    def maj_itr(self, majkey) -> Iterator[Entry]:
        return iter(self.rows.get(majkey, {}).items())

    def major_keys(self) -> List[Hashable]:
        return sorted(self.rows)

    def minor_keys(self) -> List[Hashable]:
        keys = set()
        for row in self.rows.values():
            keys.update(row)
        return sorted(keys)


class ScipyOracle(SparseRowOracle):
    """Oracle over a ``scipy.sparse`` matrix.

    Parameters
    ----------
    matrix : scipy.sparse matrix
        Integer valued; stored internally in CSR format.
    ring : Ring
        Coefficient ring the entries are simplified in.
    major_keys, minor_keys : sequence, optional
        Keys of the rows and columns. Default to the row and column numbers.
    """

    def __init__(
        self,
        matrix,
        ring: Ring,
        major_keys: Optional[Sequence[Hashable]] = None,
        minor_keys: Optional[Sequence[Hashable]] = None,
    ):
        if not sparse.issparse(matrix):
            raise TypeError("Expected a scipy.sparse matrix as input")
        self.ring = ring
        self.matrix = sparse.csr_matrix(matrix, copy=True)
        self.matrix.sum_duplicates()
        self.matrix.eliminate_zeros()
        n_rows, n_cols = self.matrix.shape
        self.major_keys = list(range(n_rows)) if major_keys is None else list(major_keys)
        self.minor_keys = list(range(n_cols)) if minor_keys is None else list(minor_keys)
        if len(self.major_keys) != n_rows or len(self.minor_keys) != n_cols:
            raise ValueError(
                f"Key counts ({len(self.major_keys)}, {len(self.minor_keys)}) do not match matrix shape {self.matrix.shape}"
            )
        self._row_of = {key: row for row, key in enumerate(self.major_keys)}
        if len(self._row_of) != n_rows:
            raise ValueError("major_keys contains duplicates")

    def maj_itr(self, majkey) -> Iterator[Entry]:
        row = self._row_of.get(majkey)
        if row is None:
            return
        start = self.matrix.indptr[row]
        end = self.matrix.indptr[row + 1]
        for col, value in zip(self.matrix.indices[start:end], self.matrix.data[start:end]):
            value = self.ring.simplify(value.item() if isinstance(value, np.generic) else value)
            if not self.ring.is_0(value):
                yield self.minor_keys[col], value


class CachedOracle(SparseRowOracle):
    """Memoize the rows of another oracle."""

    def __init__(self, oracle: SparseRowOracle):
        self.oracle = oracle
        self.ring = oracle.ring
        self._cache: Dict[Hashable, Tuple[Entry, ...]] = {}

    def maj_itr(self, majkey) -> Iterator[Entry]:
        row = self._cache.get(majkey)
        if row is None:
            row = tuple(self.oracle.maj_itr(majkey))
            self._cache[majkey] = row
        return iter(row)

    def __len__(self) -> int:
        return len(self._cache)
