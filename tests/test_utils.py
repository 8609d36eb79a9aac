import json

import numpy as np
import pytest

from persistent_factor.ring import ModularRing
from persistent_factor.utils.complex import Simplex
from persistent_factor.utils.utils import (
    leading_key,
    load_dissimilarity_matrix,
    pairs_to_worklist,
    read_pairs,
    write_pairs,
)


def test_read_pairs(tmp_path) -> None:
    path = tmp_path / "pairs_dim1.csv"
    path.write_text(
        json.dumps([0.0, [2], 1.5, [0, 2]]) + "\n"
        + "\n"
        + json.dumps([0.0, [1], 1.0, [1, 0]]) + "\n"
    )

    pairs = read_pairs(path)

    assert pairs == [
        (Simplex(0.0, (2,)), Simplex(1.5, (0, 2))),
        (Simplex(0.0, (1,)), Simplex(1.0, (0, 1))),
    ]


def test_write_then_read_pairs(tmp_path) -> None:
    pairs = [(Simplex(0.5, (0, 1)), Simplex(0.75, (0, 1, 2)))]
    path = write_pairs(tmp_path / "pairs.csv", pairs)
    assert read_pairs(path) == pairs


def test_read_pairs_malformed(tmp_path) -> None:
    path = tmp_path / "bad.csv"
    path.write_text("[0.0, [1]]\n")
    with pytest.raises(ValueError, match="bad.csv:1"):
        read_pairs(path)


def test_pairs_to_worklist() -> None:
    pairs = [("c", 3), ("a", 1), ("b", 2)]
    worklist, active = pairs_to_worklist(pairs)
    assert worklist == ["a", "b", "c"]
    assert active == {1, 2, 3}


def test_load_dissimilarity_matrix(tmp_path) -> None:
    D = np.array([[0.0, 1.0], [1.0, 0.0]])
    np.save(tmp_path / "dismat.npy", D)
    np.testing.assert_array_equal(load_dissimilarity_matrix(tmp_path / "dismat.npy"), D)

    np.save(tmp_path / "bad.npy", np.zeros((2, 3)))
    with pytest.raises(ValueError):
        load_dissimilarity_matrix(tmp_path / "bad.npy")


def test_leading_key() -> None:
    ring = ModularRing(3)
    assert leading_key({5: 1, 2: 3, 4: 2}, ring) == 4
    assert leading_key({1: 0}, ring) is None
    assert leading_key({}, ring) is None
