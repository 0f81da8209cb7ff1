"""
K-means clustering of heterogeneous survey vectors.

Lloyd-style alternation between nearest-centroid assignment under the
Euclidean aggregate distance and per-dimension centroid recomputation
(mean, mode, majority option, most frequent token).
"""

from typing import Optional, List, Sequence
import time

from ..base.clustering_base import BaseClusteringAlgorithm
from ..base.data_structures import FeatureVector, FeatureSpec
from ..representations.cluster import Cluster
from ..assignments.hard import HardAssignment
from ..initialization.random import RandomInit
from ..initialization.from_previous import FromPreviousInit
from ..utils.convergence import no_change_criterion
from ..utils.validation import check_max_iter, check_n_clusters


class KMeans(BaseClusteringAlgorithm):
    """K-means clustering for mixed-type feature vectors.

    Partitions the data into K clusters by alternating assignment and
    centroid updates until an iteration moves no point and changes no
    centroid, or until ``max_iter`` iterations ran.

    Parameters
    ----------
    random_state : int or torch.Generator, optional
        Seed of the generator used for initial centroids and for reseeding
        empty clusters
    verbose : int, default=0
        Verbosity level
    multi_aggregation : str, default='label'
        How multi-choice centroid components are computed ('label' keeps
        the most frequent raw answer, 'set' keeps the majority options)

    Attributes
    ----------
    clusters_ : list of Cluster
        Final partition
    labels_ : list of int
        Cluster index of every training point
    inertia_ : float
        Sum of Euclidean aggregate distances of members to their centroid
    n_iter_ : int
        Number of iterations run
    converged_ : bool
        Whether the run stopped before the iteration cap
    """

    metric = 'euclidean'

    def fit(self, data: Sequence[Sequence[Optional[str]]], k: int, max_iter: int,
            specs: Sequence[FeatureSpec]) -> List[Cluster]:
        """Cluster data starting from k distinct random data points.

        Parameters
        ----------
        data : sequence of feature vectors
            n vectors of equal dimension
        k : int
            Number of clusters, 1 <= k <= n
        max_iter : int
            Iteration cap; non-positive values mean 100
        specs : sequence of FeatureSpec
            One spec per dimension

        Returns
        -------
        clusters : list of Cluster
            k clusters, every input point in exactly one of them
        """
        validated = self._validate_input(data, k, specs)
        points = validated['data']
        specs = validated['specs']
        max_iter = check_max_iter(max_iter)

        initial_centroids = RandomInit().initialize(points, k, specs, self.generator)
        return self._refine(points, initial_centroids, max_iter, specs)

    def fit_with_initial_centroids(self, data: Sequence[Sequence[Optional[str]]],
                                   initial_centroids: Sequence[Sequence[Optional[str]]],
                                   max_iter: int,
                                   specs: Sequence[FeatureSpec]) -> List[Cluster]:
        """Cluster data starting from the given centroids.

        K is the number of initial centroids. The centroids need not be data
        points but must match the data dimension.
        """
        validated = self._validate_data_and_specs(data, specs)
        points = validated['data']
        specs = validated['specs']

        centroids = FromPreviousInit(initial_centroids).initialize(points)
        check_n_clusters(len(centroids), validated['n_samples'])
        max_iter = check_max_iter(max_iter)

        return self._refine(points, centroids, max_iter, specs)

    def _refine(self, points: List[FeatureVector], initial_centroids: Sequence[FeatureVector],
                max_iter: int, specs: Sequence[FeatureSpec]) -> List[Cluster]:
        """Run the assign/update loop from the given centroids."""
        n_clusters = len(initial_centroids)
        self._start(n_clusters, len(points))

        clusters = [Cluster(centroid) for centroid in initial_centroids]
        assignment_strategy = HardAssignment(self.metric, self.calculator)
        criterion = no_change_criterion()
        assignments_criterion = criterion.criteria[0]

        labels: List[int] = []
        converged = False

        for iteration in range(max_iter):
            iter_start = time.time()

            centroids = [cluster.get_centroid() for cluster in clusters]
            assignments, info = assignment_strategy.compute_assignments_with_info(
                points, centroids, specs
            )
            labels = assignments.tolist()

            for cluster in clusters:
                cluster.clear_members()
            for point, label in zip(points, labels):
                clusters[label].add_member(point)

            centroids_changed = False

            # An empty cluster restarts from a random data point
            for k, cluster in enumerate(clusters):
                if cluster.is_empty():
                    seed = points[self._random_index(len(points))]
                    if seed != cluster.get_centroid():
                        cluster.set_centroid(seed)
                        centroids_changed = True
                    self._log(2, f"  Cluster {k} is empty, reseeded")

            for cluster in clusters:
                if cluster.recompute_centroid(specs, self.multi_aggregation):
                    centroids_changed = True

            objective = info['min_distances'].sum().item()
            converged = criterion.check({
                'iteration': iteration,
                'assignments': labels,
                'centroids_changed': centroids_changed
            })

            self._record_iteration(iteration, labels, assignments_criterion.last_n_changed,
                                   centroids_changed, objective, converged, iter_start)

            if converged:
                break

        return self._finish(clusters, labels, specs, converged, max_iter)
