# tests/test_kmedoids.py
"""
K-medoids (PAM-style) behavior.

Covers:
- Medoids move to the member with the lowest total distance
- A medoid only moves to a strictly cheaper member
- Output centroids are data points, members keep data order
- Random starts, duplicate starts, argument errors
"""

from __future__ import annotations

import pytest

from kprofiles import KMedoids, numeric, free_text

DATA = [["1"], ["2"], ["3"], ["10"], ["11"], ["12"]]
SPECS = [numeric(0, 20)]


def test_medoids_move_to_group_centers():
    km = KMedoids()
    clusters = km.fit_with_initial_medoids(DATA, [0, 3], 100, SPECS)

    assert km.medoid_indices_ == [1, 4]
    assert clusters[0].get_centroid() == ("2",)
    assert clusters[1].get_centroid() == ("11",)
    assert clusters[0].get_members() == [("1",), ("2",), ("3",)]
    assert clusters[1].get_members() == [("10",), ("11",), ("12",)]
    assert km.n_iter_ == 2
    assert km.converged_


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
def test_random_start_finds_same_medoids(seed):
    km = KMedoids(random_state=seed)
    clusters = km.fit(DATA, 2, 100, SPECS)

    assert sorted(c.get_centroid() for c in clusters) == [("11",), ("2",)]
    assert sorted(km.medoid_indices_) == [1, 4]


def test_medoid_kept_on_tie():
    """Both members of {1, 3} cost the same, so the starting medoid stays."""
    data = [["1"], ["3"], ["20"]]
    km = KMedoids()
    clusters = km.fit_with_initial_medoids(data, [0, 2], 100, SPECS)

    assert clusters[0].get_centroid() == ("1",)
    assert km.medoid_indices_ == [0, 2]


def test_centroids_are_data_points_and_cover_data():
    data = [["the cat"], ["the cats"], ["a dog"], ["dogs"], ["the hat"]]
    km = KMedoids(random_state=0)
    clusters = km.fit(data, 2, 100, [free_text()])

    for cluster, idx in zip(clusters, km.medoid_indices_):
        assert cluster.get_centroid() == tuple(data[idx])
    assert sum(len(c) for c in clusters) == len(data)


def test_members_keep_data_order():
    data = [["12"], ["1"], ["11"], ["2"], ["10"], ["3"]]
    clusters = KMedoids().fit_with_initial_medoids(data, [1, 0], 100, SPECS)
    assert clusters[0].get_members() == [("1",), ("2",), ("3",)]
    assert clusters[1].get_members() == [("12",), ("11",), ("10",)]


def test_duplicate_starting_medoids_still_partition():
    km = KMedoids(random_state=0)
    clusters = km.fit_with_initial_medoids(DATA, [0, 0], 100, SPECS)

    assert len(clusters) == 2
    assert sum(len(c) for c in clusters) == len(DATA)
    for cluster in clusters:
        assert list(cluster.get_centroid()) in DATA


def test_inertia_is_manhattan():
    km = KMedoids()
    km.fit_with_initial_medoids(DATA, [0, 3], 100, SPECS)
    # |1-2| + |3-2| + |10-11| + |12-11| over range 20
    assert km.inertia_ == pytest.approx(4 / 20)


def test_max_iter_one():
    km = KMedoids()
    km.fit_with_initial_medoids(DATA, [0, 3], 1, SPECS)
    assert km.n_iter_ == 1
    assert km.converged_ is False


@pytest.mark.parametrize("indices,exc", [
    ([], ValueError),
    (None, ValueError),
    ([0, 6], ValueError),
    ([-1, 2], ValueError),
    ([0, 1, 2, 3, 4, 5, 0], ValueError),
    ([0, "1"], TypeError),
])
def test_invalid_medoid_indices(indices, exc):
    km = KMedoids()
    with pytest.raises(exc):
        km.fit_with_initial_medoids(DATA, indices, 100, SPECS)
    assert km.fitted_ is False


def test_invalid_fit_arguments():
    km = KMedoids(random_state=0)
    with pytest.raises(ValueError):
        km.fit(DATA, 7, 100, SPECS)
    with pytest.raises(ValueError):
        km.fit(DATA, 2, 100, None)
    with pytest.raises(ValueError):
        km.fit([], 1, 100, SPECS)
