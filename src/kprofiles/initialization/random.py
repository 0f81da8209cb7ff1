"""
Random initialization strategy for clustering algorithms.

Selects random points from the dataset as initial cluster centers.
"""

from typing import List, Optional, Sequence
import torch

from ..base.interfaces import InitializationStrategy
from ..base.data_structures import FeatureVector, FeatureSpec


class RandomInit(InitializationStrategy):
    """Random initialization by selecting points from the dataset.

    Selects n_clusters distinct points (without replacement) as initial
    centers, uniformly at random.
    """

    def select_indices(self, n_points: int, n_clusters: int,
                       generator: Optional[torch.Generator] = None) -> List[int]:
        """Pick n_clusters distinct indices in [0, n_points)."""
        if n_clusters > n_points:
            raise ValueError(f"Cannot create {n_clusters} clusters from {n_points} points")

        return torch.randperm(n_points, generator=generator)[:n_clusters].tolist()

    def initialize(self, points: Sequence[FeatureVector], n_clusters: int,
                   specs: Sequence[FeatureSpec] = None,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> List[FeatureVector]:
        """Initialize centroids with random data points.

        Args:
            points: n feature vectors
            n_clusters: Number of clusters
            specs: Unused, accepted for interface compatibility
            generator: Source of randomness

        Returns:
            List of n_clusters centroid vectors
        """
        indices = self.select_indices(len(points), n_clusters, generator)
        return [tuple(points[idx]) for idx in indices]
