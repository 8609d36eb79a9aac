"""Filtered clique (Vietoris-Rips) complex exposed as a boundary matrix oracle."""

from __future__ import annotations

from typing import Iterator, List, NamedTuple, Optional, Tuple

import gudhi as gd
import numpy as np
from scipy.spatial.distance import pdist, squareform

from ..oracle import SparseRowOracle
from ..ring import ModularRing, Ring


class Simplex(NamedTuple):
    """A simplex keyed by filtration value, then by its sorted vertices."""

    filvalue: float
    vertices: Tuple[int, ...]

    @property
    def dim(self) -> int:
        return len(self.vertices) - 1


def enclosing_radius(distance_matrix: np.ndarray) -> float:
    """Smallest row maximum of ``distance_matrix``; above it the complex is a cone."""
    return float(np.min(np.max(distance_matrix, axis=1)))


class CliqueComplex(SparseRowOracle):
    """
    Row major boundary matrix of a filtered clique complex.

    Rows and columns are keyed by :class:`Simplex`. The row of a simplex lists its
    cofaces of one dimension more, with coefficient ``(-1)**i`` where ``i`` is the
    position in the coface of the vertex the simplex misses.

    Args:
        points: point cloud data (optional if distance_matrix is provided)
        distance_matrix: square dissimilarity matrix (optional if points is provided)
        maxdim: largest simplex dimension to build
        threshold: maximum edge length, by default the enclosing radius
        ring: coefficient ring, by default integers modulo 2
    """

    def __init__(
        self,
        points=None,
        distance_matrix=None,
        maxdim: Optional[int] = None,
        threshold: Optional[float] = None,
        ring: Optional[Ring] = None,
        verbose: bool = False,
    ):
        if distance_matrix is None and points is not None:
            distance_matrix = squareform(pdist(points))
        elif distance_matrix is None:
            raise ValueError("Either points or distance_matrix must be provided.")
        if maxdim is None:
            raise ValueError("maxdim must be provided.")

        self.distance_matrix = np.asarray(distance_matrix, dtype=float)
        if self.distance_matrix.ndim != 2 or self.distance_matrix.shape[0] != self.distance_matrix.shape[1]:
            raise ValueError(f"Expected a square distance matrix, got shape {self.distance_matrix.shape}")
        self.maxdim = int(maxdim)
        self.threshold = enclosing_radius(self.distance_matrix) if threshold is None else float(threshold)
        self.ring = ModularRing(2) if ring is None else ring

        if verbose:
            print(f"Building clique complex: {len(self.distance_matrix)} vertices, "
                  f"threshold {self.threshold:.6g}, maxdim {self.maxdim}")
        rips_complex = gd.RipsComplex(distance_matrix=self.distance_matrix, max_edge_length=self.threshold)
        self.simplex_tree = rips_complex.create_simplex_tree(max_dimension=self.maxdim)
        if verbose:
            print(f"  {self.simplex_tree.num_simplices()} simplices")

    def simplex(self, vertices) -> Simplex:
        vertices = tuple(sorted(int(v) for v in vertices))
        return Simplex(float(self.simplex_tree.filtration(list(vertices))), vertices)

    def keys_ordered(self, dim: int) -> List[Simplex]:
        """All simplices of dimension ``dim`` in increasing key order."""
        keys = [
            Simplex(float(filtration), tuple(sorted(vertices)))
            for vertices, filtration in self.simplex_tree.get_skeleton(dim)
            if len(vertices) == dim + 1
        ]
        keys.sort()
        return keys

    def maj_itr(self, majkey: Simplex) -> Iterator[Tuple[Simplex, int]]:
        face = set(majkey.vertices)
        for vertices, filtration in self.simplex_tree.get_cofaces(list(majkey.vertices), 1):
            vertices = tuple(sorted(vertices))
            position = next(i for i, v in enumerate(vertices) if v not in face)
            coefficient = self.ring.simplify(-1 if position % 2 else 1)
            yield Simplex(float(filtration), vertices), coefficient

    def boundary(self, key: Simplex) -> Iterator[Tuple[Simplex, int]]:
        """Faces of ``key`` with their boundary coefficients (the column view)."""
        if key.dim == 0:
            return
        for position in range(len(key.vertices)):
            face = key.vertices[:position] + key.vertices[position + 1:]
            yield self.simplex(face), self.ring.simplify(-1 if position % 2 else 1)
