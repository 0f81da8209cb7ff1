"""
K-means with K-means++ seeding.

Initial centroids are drawn with probability proportional to the squared
distance to the nearest already chosen centroid; refinement is plain
K-means.
"""

from typing import Optional, List, Sequence

from .kmeans import KMeans
from ..base.data_structures import FeatureVector, FeatureSpec
from ..representations.cluster import Cluster
from ..initialization.kmeans_plusplus import KMeansPlusPlusInit
from ..utils.validation import check_max_iter, validate_clustering_input


class KMeansPlusPlus(KMeans):
    """K-means seeded with the K-means++ procedure.

    Seeding and refinement draw from the same generator, so a fixed
    ``random_state`` reproduces the whole run.

    Parameters
    ----------
    random_state : int or torch.Generator, optional
        Seed of the generator
    verbose : int, default=0
        Verbosity level
    multi_aggregation : str, default='label'
        How multi-choice centroid components are computed
    """

    def init_centroids(self, data: Sequence[Sequence[Optional[str]]], k: int,
                       specs: Sequence[FeatureSpec]) -> List[FeatureVector]:
        """Choose k initial centroids among the data points.

        The first centroid is uniform; each next one is drawn with weight
        D(x)^2, D being the Euclidean aggregate distance to the nearest
        centroid chosen so far. Points coinciding with a chosen centroid
        have weight 0.

        Returns
        -------
        centroids : list of feature vectors
            k data points in selection order
        """
        validated = validate_clustering_input(data, k, specs)
        seeder = KMeansPlusPlusInit(self.calculator)
        centroids = seeder.initialize(validated['data'], k, validated['specs'], self.generator)

        self._log(2, f"K-means++ selected {len(centroids)} initial centroids")
        return centroids

    def fit(self, data: Sequence[Sequence[Optional[str]]], k: int, max_iter: int,
            specs: Sequence[FeatureSpec]) -> List[Cluster]:
        """Seed with K-means++ and refine with K-means."""
        centroids = self.init_centroids(data, k, specs)
        return self.fit_with_initial_centroids(data, centroids, check_max_iter(max_iter), specs)
