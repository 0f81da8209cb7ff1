"""
K-medoids (PAM-style) clustering of heterogeneous survey vectors.

Each cluster is represented by one of its own data points. Distances are the
Manhattan aggregate and are computed once into a pairwise matrix.
"""

from typing import Optional, List, Sequence
import time

import torch
from torch import Tensor

from ..base.clustering_base import BaseClusteringAlgorithm
from ..base.data_structures import FeatureVector, FeatureSpec
from ..representations.cluster import Cluster
from ..initialization.random import RandomInit
from ..utils.convergence import no_change_criterion
from ..utils.metrics import pairwise_distances
from ..utils.validation import check_max_iter, validate_medoid_indices


class KMedoids(BaseClusteringAlgorithm):
    """K-medoids clustering with Manhattan aggregate distance.

    Every iteration assigns points to their nearest medoid, then moves each
    medoid to the member minimizing the sum of distances to the other
    members. A medoid only moves when the candidate is strictly cheaper.

    Parameters
    ----------
    random_state : int or torch.Generator, optional
        Seed of the generator used for initial medoids and for reseeding
        empty clusters
    verbose : int, default=0
        Verbosity level
    multi_aggregation : str, default='label'
        Accepted for a uniform constructor; medoids are never aggregated

    Attributes
    ----------
    medoid_indices_ : list of int
        Data indices of the final medoids
    clusters_ : list of Cluster
        Final partition, each centroid being its medoid
    labels_ : list of int
        Cluster index of every training point
    inertia_ : float
        Sum of Manhattan aggregate distances of members to their medoid
    """

    metric = 'manhattan'

    def _reset_fit_state(self) -> None:
        super()._reset_fit_state()
        self.medoid_indices_: Optional[List[int]] = None

    def fit(self, data: Sequence[Sequence[Optional[str]]], k: int, max_iter: int,
            specs: Sequence[FeatureSpec]) -> List[Cluster]:
        """Cluster data starting from k distinct random medoids."""
        validated = self._validate_input(data, k, specs)
        max_iter = check_max_iter(max_iter)

        medoids = RandomInit().select_indices(validated['n_samples'], k, self.generator)
        return self._refine(validated['data'], medoids, max_iter, validated['specs'])

    def fit_with_initial_medoids(self, data: Sequence[Sequence[Optional[str]]],
                                 initial_medoid_indices: Sequence[int],
                                 max_iter: int,
                                 specs: Sequence[FeatureSpec]) -> List[Cluster]:
        """Cluster data starting from the medoids at the given data indices.

        Parameters
        ----------
        data : sequence of feature vectors
            n vectors of equal dimension
        initial_medoid_indices : sequence of int
            At most n indices into data; K is their count
        max_iter : int
            Iteration cap; non-positive values mean 100
        specs : sequence of FeatureSpec
            One spec per dimension

        Returns
        -------
        clusters : list of Cluster
            K clusters whose centroids are data points
        """
        validated = self._validate_data_and_specs(data, specs)
        medoids = validate_medoid_indices(initial_medoid_indices, validated['n_samples'])
        max_iter = check_max_iter(max_iter)

        return self._refine(validated['data'], medoids, max_iter, validated['specs'])

    def _cheapest_member(self, distances: Tensor, members: Tensor, current: int) -> int:
        """Member with the lowest total distance to the cluster, if strictly
        cheaper than the current medoid."""
        current_cost = distances[members, current].sum().item()

        costs = distances[members][:, members].sum(dim=0)
        best = torch.argmin(costs).item()

        if costs[best].item() < current_cost:
            return members[best].item()
        return current

    def _refine(self, points: List[FeatureVector], medoids: List[int],
                max_iter: int, specs: Sequence[FeatureSpec]) -> List[Cluster]:
        n_samples = len(points)
        n_clusters = len(medoids)
        self._start(n_clusters, n_samples)

        distances = pairwise_distances(points, specs, metric=self.metric,
                                       calculator=self.calculator)
        self._log(2, f"Computed {n_samples}x{n_samples} distance matrix")

        criterion = no_change_criterion()
        assignments_criterion = criterion.criteria[0]
        rows = torch.arange(n_samples)

        assignments = torch.zeros(n_samples, dtype=torch.long)
        converged = False

        for iteration in range(max_iter):
            iter_start = time.time()

            # Lowest medoid index wins ties
            assignments = torch.argmin(distances[:, medoids], dim=1)
            objective = distances[rows, torch.tensor(medoids)[assignments]].sum().item()

            medoids_changed = False
            for k in range(n_clusters):
                members = (assignments == k).nonzero(as_tuple=True)[0]

                if len(members) == 0:
                    replacement = self._random_index(n_samples)
                    self._log(2, f"  Cluster {k} is empty, reseeded")
                else:
                    replacement = self._cheapest_member(distances, members, medoids[k])

                if replacement != medoids[k]:
                    medoids[k] = replacement
                    medoids_changed = True

            converged = criterion.check({
                'iteration': iteration,
                'assignments': assignments,
                'centroids_changed': medoids_changed
            })

            self._record_iteration(iteration, assignments.tolist(),
                                   assignments_criterion.last_n_changed,
                                   medoids_changed, objective, converged, iter_start)

            if converged:
                break

        clusters = [Cluster(points[idx]) for idx in medoids]
        labels = assignments.tolist()
        for point, label in zip(points, labels):
            clusters[label].add_member(point)

        self.medoid_indices_ = list(medoids)
        return self._finish(clusters, labels, specs, converged, max_iter)
