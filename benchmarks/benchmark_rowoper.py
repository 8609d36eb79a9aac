"""Count and time the row operation entries of full and paired factorizations."""

from __future__ import annotations

import statistics
import time
from pathlib import Path
from typing import Optional, Sequence

import numpy as np
from scipy.spatial.distance import pdist, squareform

import fire
from persistent_factor import ModularRing, decomp_row_use_pairs
from persistent_factor.config import (
    DEFAULT_DIM,
    DEFAULT_MODULUS,
    DEFAULT_SEED,
    DISMAT_FILENAME,
    PAIRS_FILENAME_TEMPLATE,
)
from persistent_factor.utils.complex import CliqueComplex
from persistent_factor.utils.utils import load_dissimilarity_matrix, pairs_to_worklist, read_pairs


def _timed(func, repeats: int):
    durations: list[float] = []
    result = None
    for _ in range(max(int(repeats), 1)):
        start = time.perf_counter()
        result = func()
        durations.append(time.perf_counter() - start)
    return statistics.median(durations), result


def _count(chx: CliqueComplex, dim: int, pairs: Optional[Sequence], repeats: int, verbose: bool) -> dict:
    keys_maj = chx.keys_ordered(dim - 1)
    keys_min = chx.keys_ordered(dim)
    print(f"Num of all rows: {len(keys_maj)}")
    print(f"Num of all cols: {len(keys_min)}")

    full_time, (rowoper_full, indexing_full) = _timed(
        lambda: decomp_row_use_pairs(chx, keys_maj, None, verbose=verbose), repeats)

    if pairs is None:
        pairs = indexing_full.pairs()
        print("No pairs file: pairing taken from the full factorization")
    maj_to_reduce, min_to_reduce = pairs_to_worklist(pairs)
    print(f"Num of paired rows: {len(maj_to_reduce)}")

    pair_time, (rowoper_pair, indexing_pair) = _timed(
        lambda: decomp_row_use_pairs(chx, maj_to_reduce, min_to_reduce, verbose=verbose), repeats)

    print(f"Num of snzval in full row operation matrix: {rowoper_full.nnz}  ({full_time:.6f} s)")
    print(f"Num of snzval in the pivot block of row operation matrix: {rowoper_pair.nnz}  ({pair_time:.6f} s)")
    return {
        "rows": len(keys_maj),
        "cols": len(keys_min),
        "paired_rows": len(maj_to_reduce),
        "pivots_full": len(indexing_full),
        "pivots_pair": len(indexing_pair),
        "snzval_full": rowoper_full.nnz,
        "snzval_pair": rowoper_pair.nnz,
        "time_full": full_time,
        "time_pair": pair_time,
    }


def count(
    data_dir: str,
    dim: int = DEFAULT_DIM,
    modulus: int = DEFAULT_MODULUS,
    repeats: int = 1,
    verbose: bool = False,
) -> dict:
    """Factor the boundary matrix stored in ``data_dir`` (dismat.npy, pairs_dim{dim}.csv)."""

    if dim < 1:
        raise ValueError(f"dim must be at least 1, got {dim}")
    data_path = Path(data_dir)
    dismat_file = data_path / DISMAT_FILENAME
    print(f"Dissimilarity matrix data is in file: {dismat_file}")
    D = load_dissimilarity_matrix(dismat_file)

    chx = CliqueComplex(distance_matrix=D, maxdim=dim, ring=ModularRing(modulus), verbose=verbose)

    pairs_file = data_path / PAIRS_FILENAME_TEMPLATE.format(dim=dim)
    pairs = None
    if pairs_file.exists():
        print(f"Reading pairs from file: {pairs_file}")
        pairs = read_pairs(pairs_file)
    return _count(chx, dim, pairs, repeats, verbose)


def random(
    points: int = 30,
    ambient_dim: int = 3,
    dim: int = DEFAULT_DIM,
    modulus: int = DEFAULT_MODULUS,
    threshold: Optional[float] = None,
    seed: int = DEFAULT_SEED,
    repeats: int = 3,
    verbose: bool = False,
) -> dict:
    """Same as ``count`` on a random point cloud in the unit cube."""

    rng = np.random.default_rng(seed)
    X = rng.random((points, ambient_dim))
    print(f"Random point cloud: {points} points in dimension {ambient_dim}, seed {seed}")
    chx = CliqueComplex(
        distance_matrix=squareform(pdist(X)),
        maxdim=dim,
        threshold=threshold,
        ring=ModularRing(modulus),
        verbose=verbose,
    )
    return _count(chx, dim, None, repeats, verbose)


if __name__ == "__main__":  # pragma: no cover - manual benchmarking utility.
    fire.Fire({"count": count, "random": random})
