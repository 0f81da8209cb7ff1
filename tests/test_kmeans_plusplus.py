# tests/test_kmeans_plusplus.py
"""
K-means++ seeding and the seeded K-means.

Covers:
- D^2 roulette with a scripted random source (deterministic picks)
- Points coinciding with a chosen centroid are never picked again
- Seeded runs are reproducible
- KMeansPlusPlus.fit: refinement after seeding, argument errors
"""

from __future__ import annotations

import pytest
import torch

from kprofiles import KMeansPlusPlus, numeric
from kprofiles.initialization import KMeansPlusPlusInit
from utils import partition_signature


class ScriptedInit(KMeansPlusPlusInit):
    """K-means++ whose random draws are fixed in advance."""

    def __init__(self, first_index, uniforms):
        super().__init__()
        self.first = first_index
        self.uniforms = list(uniforms)

    def _first_index(self, n_points, generator):
        return self.first

    def _uniform(self, generator):
        return self.uniforms.pop(0)


SPECS_2D = [numeric(0, 10), numeric(0, 10)]
TWO_BLOCKS = [("0", "0")] * 3 + [("10", "10")] * 3


def test_scripted_roulette_picks_far_block():
    init = ScriptedInit(first_index=0, uniforms=[1.0, 1.0])
    indices = init.select_indices(TWO_BLOCKS, 2, SPECS_2D)
    assert indices == [0, 5]
    assert init.initialize(TWO_BLOCKS, 2, SPECS_2D) == [("0", "0"), ("10", "10")]


def test_zero_weight_points_are_skipped():
    """r lands inside the only point with positive weight."""
    data = [("1",), ("1",), ("7",)]
    init = ScriptedInit(first_index=0, uniforms=[0.5])
    assert init.select_indices(data, 2, [numeric(0, 10)]) == [0, 2]


def test_roulette_clamps_to_last_index():
    init = ScriptedInit(first_index=0, uniforms=[1.0])
    weights = torch.tensor([0.1, 0.2, 0.3], dtype=torch.float64)
    assert init._roulette(weights, None) == 2


def test_roulette_is_proportional():
    init = ScriptedInit(first_index=0, uniforms=[0.25, 0.75])
    weights = torch.tensor([1.0, 0.0, 3.0], dtype=torch.float64)
    # r = 1.0 falls in the first bucket, r = 3.0 in the last
    assert init._roulette(weights, None) == 0
    assert init._roulette(weights, None) == 2


def test_init_centroids_finds_every_distinct_block():
    data = [["1"]] * 4 + [["50"]] * 4 + [["99"]] * 4
    model = KMeansPlusPlus(random_state=11)
    centroids = model.init_centroids(data, 3, [numeric(0, 100)])

    assert sorted(centroids) == [("1",), ("50",), ("99",)]


def test_init_centroids_are_data_points():
    data = [[str(v)] for v in range(20)]
    centroids = KMeansPlusPlus(random_state=0).init_centroids(data, 4, [numeric(0, 20)])
    assert len(centroids) == 4
    assert all(list(c) in data for c in centroids)


def test_same_seed_same_centroids():
    data = [[str(v)] for v in [1, 4, 9, 16, 25, 36, 49, 64, 81]]
    specs = [numeric(0, 100)]
    c1 = KMeansPlusPlus(random_state=42).init_centroids(data, 3, specs)
    c2 = KMeansPlusPlus(random_state=42).init_centroids(data, 3, specs)
    assert c1 == c2


def test_fit_recovers_groups():
    data = [["1"], ["2"], ["3"], ["97"], ["98"], ["99"]]
    model = KMeansPlusPlus(random_state=5)
    clusters = model.fit(data, 2, 100, [numeric(0, 100)])

    assert partition_signature(clusters) == [
        (("1",), ("2",), ("3",)),
        (("97",), ("98",), ("99",)),
    ]
    assert model.converged_
    assert model.fitted_


@pytest.mark.parametrize("data,k,specs", [
    (None, 2, [numeric(0, 1)]),
    ([["0.5"]], 2, [numeric(0, 1)]),
    ([["0.5"]], 0, [numeric(0, 1)]),
    ([["0.5"]], 1, None),
])
def test_invalid_arguments_raise(data, k, specs):
    model = KMeansPlusPlus(random_state=0)
    with pytest.raises(ValueError):
        model.init_centroids(data, k, specs)
    with pytest.raises(ValueError):
        model.fit(data, k, 100, specs)
