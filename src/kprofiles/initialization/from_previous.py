"""
Initialization from caller-supplied centroids.

Useful for warm starts, reproducible runs, or when centroids come from
another seeding procedure such as KMeans++.
"""

from typing import List, Optional, Sequence, Any
import torch

from ..base.interfaces import InitializationStrategy
from ..base.data_structures import FeatureVector, FeatureSpec
from ..utils.validation import validate_initial_centroids


class FromPreviousInit(InitializationStrategy):
    """Initialize from a fixed list of centroid vectors.

    Args:
        initial_centroids: Starting centroids, one per cluster
    """

    def __init__(self, initial_centroids: Sequence[Sequence[Any]]):
        if initial_centroids is None or len(initial_centroids) == 0:
            raise ValueError("initial centroids cannot be None or empty")
        self.initial_centroids = [tuple(c) for c in initial_centroids]

    def initialize(self, points: Sequence[FeatureVector], n_clusters: Optional[int] = None,
                   specs: Sequence[FeatureSpec] = None,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> List[FeatureVector]:
        """Return the stored centroids after checking them against the data.

        Args:
            points: n feature vectors (used for validation)
            n_clusters: Expected number of clusters, if known

        Returns:
            List of centroid vectors
        """
        if n_clusters is not None and len(self.initial_centroids) != n_clusters:
            raise ValueError(f"Provided {len(self.initial_centroids)} centroids, "
                             f"but n_clusters={n_clusters}")

        dimension = len(points[0])
        return validate_initial_centroids(self.initial_centroids, dimension)
