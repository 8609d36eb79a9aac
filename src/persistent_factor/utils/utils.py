import json
from pathlib import Path

import numpy as np

from persistent_factor.algorithms.accumulator import combine_rows
from persistent_factor.utils.complex import Simplex


def materialize_reduced_row(oracle, rowoper, indexing, index, active_minors=None):
    """
    Rebuild the reduced row of pivot ``index``.

    This is the combination of oracle rows recorded in row ``index`` of ``rowoper``,
    restricted to ``active_minors``. Its smallest nonzero key is the pivot minor key.
    """
    return combine_rows(oracle, rowoper.maj_hash(index), indexing.index_2_majkey, active_minors)


def leading_key(row, ring):
    """Smallest key with a nonzero value in ``row``, or ``None``."""
    keys = [key for key, value in row.items() if not ring.is_0(value)]
    return min(keys) if keys else None


def pairs_to_worklist(pairs):
    """
    Split persistence pairs into a worklist and an active minor set.

    The worklist is sorted in increasing order, so the factorization processes the
    largest major key first.
    """
    majors = sorted(major for major, _ in pairs)
    minors = {minor for _, minor in pairs}
    return majors, minors


def load_dissimilarity_matrix(path):
    D = np.load(path)
    if D.ndim != 2 or D.shape[0] != D.shape[1]:
        raise ValueError(f"Expected a square dissimilarity matrix in {path}, got shape {D.shape}")
    return D


def _to_simplex(filvalue, vertices):
    return Simplex(float(filvalue), tuple(sorted(int(v) for v in vertices)))


def read_pairs(path):
    """
    Read persistence pairs, one JSON list per line:
    ``[major filtration, major vertices, minor filtration, minor vertices]``.

    Returns:
        list of (major Simplex, minor Simplex)
    """
    pairs = []
    with open(path) as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                fil_maj, vert_maj, fil_min, vert_min = json.loads(line)
            except ValueError as exc:
                raise ValueError(f"{path}:{lineno}: malformed pair record {line!r}") from exc
            pairs.append((_to_simplex(fil_maj, vert_maj), _to_simplex(fil_min, vert_min)))
    return pairs


def write_pairs(path, pairs):
    path = Path(path)
    with open(path, "w") as f:
        for major, minor in pairs:
            record = [major.filvalue, list(major.vertices), minor.filvalue, list(minor.vertices)]
            f.write(json.dumps(record) + "\n")
    return path
