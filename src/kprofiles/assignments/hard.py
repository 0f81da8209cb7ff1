"""
Hard assignment strategy for clustering algorithms.

Assigns each point to its nearest centroid under one of the aggregate
heterogeneous metrics.
"""

from typing import List, Optional, Sequence, Tuple, Dict, Any
import torch
from torch import Tensor

from ..base.interfaces import AssignmentStrategy
from ..base.data_structures import FeatureVector, FeatureSpec
from ..distances.heterogeneous import DistanceCalculator


class HardAssignment(AssignmentStrategy):
    """Hard (discrete) assignment to nearest centroid.

    Each point is assigned to exactly one cluster based on minimum distance.
    Ties go to the centroid with the lowest index.

    Args:
        metric: 'euclidean' (KMeans) or 'manhattan' (KMedoids)
        calculator: Distance calculator to use
    """

    def __init__(self, metric: str = 'euclidean',
                 calculator: Optional[DistanceCalculator] = None):
        if metric not in ('euclidean', 'manhattan'):
            raise ValueError(f"Unknown metric: {metric}")
        self.metric = metric
        self.calculator = calculator if calculator is not None else DistanceCalculator()

    def compute_distances(self, points: Sequence[FeatureVector],
                          centroids: Sequence[FeatureVector],
                          specs: Sequence[FeatureSpec]) -> Tensor:
        """(n, K) matrix of point-to-centroid distances."""
        n_points = len(points)
        n_clusters = len(centroids)

        distances = torch.zeros(n_points, n_clusters, dtype=torch.float64)

        for k, centroid in enumerate(centroids):
            for i, point in enumerate(points):
                distances[i, k] = self.calculator(point, centroid, specs, metric=self.metric)

        return distances

    def compute_assignments(self, points: Sequence[FeatureVector],
                            centroids: Sequence[FeatureVector],
                            specs: Sequence[FeatureSpec],
                            **kwargs) -> Tensor:
        """Assign each point to nearest centroid.

        Returns:
            (n,) tensor of cluster indices
        """
        distances = self.compute_distances(points, centroids, specs)
        return torch.argmin(distances, dim=1)

    def compute_assignments_with_info(self, points: Sequence[FeatureVector],
                                      centroids: Sequence[FeatureVector],
                                      specs: Sequence[FeatureSpec]) -> Tuple[Tensor, Dict[str, Any]]:
        """Assign points and return the distance matrix alongside.

        Returns:
            assignments: (n,) cluster indices
            info: 'distances' (n, K) and 'min_distances' (n,)
        """
        distances = self.compute_distances(points, centroids, specs)
        assignments = torch.argmin(distances, dim=1)

        info = {
            'distances': distances,
            'min_distances': torch.gather(distances, 1, assignments.unsqueeze(1)).squeeze(1)
        }

        return assignments, info
