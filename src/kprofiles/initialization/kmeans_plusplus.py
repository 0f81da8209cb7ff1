"""
K-means++ initialization strategy.

Selects initial cluster centers using the K-means++ algorithm, which chooses
centers that are far apart to improve convergence speed and quality.
"""

from typing import List, Optional, Sequence
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy
from ..base.data_structures import FeatureVector, FeatureSpec
from ..distances.heterogeneous import DistanceCalculator


class KMeansPlusPlusInit(InitializationStrategy):
    """K-means++ initialization for better starting positions.

    Algorithm:
    1. Choose first center uniformly at random
    2. For each remaining center:
       - Compute distance D(x) from each point to nearest existing center
       - Draw r uniformly in [0, sum D(x)^2] and walk the points subtracting
         D(x)^2 until r <= 0; that point is the next center

    Args:
        calculator: Distance calculator (Euclidean-style aggregate is used)
    """

    def __init__(self, calculator: Optional[DistanceCalculator] = None):
        self.calculator = calculator if calculator is not None else DistanceCalculator()

    def _first_index(self, n_points: int, generator: Optional[torch.Generator]) -> int:
        return torch.randint(n_points, (1,), generator=generator).item()

    def _uniform(self, generator: Optional[torch.Generator]) -> float:
        return torch.rand(1, generator=generator, dtype=torch.float64).item()

    def _distances_to(self, points: Sequence[FeatureVector], center: FeatureVector,
                      specs: Sequence[FeatureSpec]) -> Tensor:
        return torch.tensor(
            [self.calculator.distance(point, center, specs) for point in points],
            dtype=torch.float64
        )

    def _roulette(self, weights: Tensor, generator: Optional[torch.Generator]) -> int:
        """Index drawn with probability proportional to weights."""
        r = self._uniform(generator) * weights.sum().item()

        chosen = 0
        for chosen, weight in enumerate(weights.tolist()):
            r -= weight
            if r <= 0:
                break

        # Rounding can leave r slightly positive after the last point
        return min(chosen, len(weights) - 1)

    def select_indices(self, points: Sequence[FeatureVector], n_clusters: int,
                       specs: Sequence[FeatureSpec],
                       generator: Optional[torch.Generator] = None) -> List[int]:
        """Indices of the chosen centers, in selection order."""
        n_points = len(points)

        if n_clusters > n_points:
            raise ValueError(f"Cannot create {n_clusters} clusters from {n_points} points")

        center_indices = [self._first_index(n_points, generator)]

        # Distance from every point to its nearest chosen center
        distances = self._distances_to(points, points[center_indices[0]], specs)

        for _ in range(1, n_clusters):
            chosen = self._roulette(distances * distances, generator)
            center_indices.append(chosen)

            new_center_distances = self._distances_to(points, points[chosen], specs)
            distances = torch.minimum(distances, new_center_distances)

        return center_indices

    def initialize(self, points: Sequence[FeatureVector], n_clusters: int,
                   specs: Sequence[FeatureSpec] = None,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> List[FeatureVector]:
        """Initialize cluster centers using K-means++.

        Args:
            points: n feature vectors
            n_clusters: Number of clusters
            specs: Per-dimension feature specifications
            generator: Source of randomness

        Returns:
            List of n_clusters centroid vectors
        """
        indices = self.select_indices(points, n_clusters, specs, generator)
        return [tuple(points[idx]) for idx in indices]
