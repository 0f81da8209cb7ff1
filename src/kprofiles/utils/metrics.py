"""
Clustering evaluation metrics.

Internal quality metrics (no ground truth needed) computed over finished
partitions of heterogeneous vectors, built on a dense pairwise distance
matrix.
"""

from typing import Optional, List, Sequence, Tuple, TYPE_CHECKING
import torch
from torch import Tensor

from ..base.data_structures import FeatureVector, FeatureSpec
from ..distances.heterogeneous import DistanceCalculator

if TYPE_CHECKING:
    from ..representations.cluster import Cluster


def pairwise_distances(X: Sequence[FeatureVector], specs: Sequence[FeatureSpec],
                       Y: Optional[Sequence[FeatureVector]] = None,
                       metric: str = 'euclidean',
                       calculator: Optional[DistanceCalculator] = None) -> Tensor:
    """Compute pairwise distances between feature vectors.

    Args:
        X: n feature vectors
        specs: Per-dimension feature specifications
        Y: m feature vectors (if None, uses X)
        metric: Aggregate metric ('euclidean', 'manhattan')

    Returns:
        (n, m) float64 distance matrix
    """
    if metric not in ('euclidean', 'manhattan'):
        raise ValueError(f"Unknown metric: {metric}")
    if calculator is None:
        calculator = DistanceCalculator()

    symmetric = Y is None
    if symmetric:
        Y = X

    distances = torch.zeros(len(X), len(Y), dtype=torch.float64)

    for i in range(len(X)):
        # Both metrics are symmetric, so fill the upper triangle and mirror it
        start = i + 1 if symmetric else 0
        for j in range(start, len(Y)):
            d = calculator(X[i], Y[j], specs, metric=metric)
            distances[i, j] = d
            if symmetric:
                distances[j, i] = d

    return distances


def _flatten(clusters: Sequence['Cluster']) -> Tuple[List[FeatureVector], Tensor]:
    points = []
    labels = []
    for k, cluster in enumerate(clusters):
        members = cluster.get_members()
        points.extend(members)
        labels.extend([k] * len(members))
    return points, torch.tensor(labels, dtype=torch.long)


def _check_inputs(clusters, specs) -> None:
    if clusters is None or len(clusters) == 0:
        raise ValueError("Clusters cannot be None or empty")
    if specs is None:
        raise ValueError("specs cannot be None")


def silhouette_samples(clusters: Sequence['Cluster'], specs: Sequence[FeatureSpec],
                       calculator: Optional[DistanceCalculator] = None) -> Tuple[Tensor, Tensor]:
    """Silhouette coefficient of every member.

    For a point i with mean intra-cluster distance a and smallest mean
    distance to another cluster b, s(i) = (b - a) / max(a, b). Members of a
    singleton cluster, points with max(a, b) = 0, and points with no other
    non-empty cluster score 0.

    Args:
        clusters: Finished partition
        specs: Per-dimension feature specifications

    Returns:
        scores: (n,) silhouette per point, clusters' members in order
        labels: (n,) cluster index of each point
    """
    _check_inputs(clusters, specs)

    points, labels = _flatten(clusters)
    n_samples = len(points)
    n_clusters = len(clusters)

    silhouette_values = torch.zeros(n_samples, dtype=torch.float64)
    if n_samples == 0:
        return silhouette_values, labels

    distances = pairwise_distances(points, specs, metric='euclidean', calculator=calculator)

    for i in range(n_samples):
        same_cluster = labels == labels[i]
        same_cluster[i] = False  # Exclude self

        if same_cluster.sum() == 0:
            continue

        # Mean intra-cluster distance
        a = distances[i, same_cluster].mean()

        # Mean distance to each other non-empty cluster
        b_values = []
        for k in range(n_clusters):
            if k == labels[i]:
                continue
            other_cluster = labels == k
            if other_cluster.sum() > 0:
                b_values.append(distances[i, other_cluster].mean())

        if len(b_values) == 0:
            continue

        b = torch.stack(b_values).min()

        denominator = torch.max(a, b)
        if denominator == 0:
            continue

        silhouette_values[i] = (b - a) / denominator

    return silhouette_values, labels


def silhouette_score(clusters: Sequence['Cluster'], specs: Sequence[FeatureSpec],
                     calculator: Optional[DistanceCalculator] = None) -> float:
    """Compute mean Silhouette Coefficient over all points.

    Returns 0.0 for a single cluster, where the metric is undefined.

    Returns:
        Mean silhouette coefficient in [-1, 1]
    """
    _check_inputs(clusters, specs)

    if len(clusters) == 1:
        return 0.0

    scores, _ = silhouette_samples(clusters, specs, calculator)
    if len(scores) == 0:
        return 0.0

    return scores.mean().item()


def silhouette_per_cluster(clusters: Sequence['Cluster'], specs: Sequence[FeatureSpec],
                           calculator: Optional[DistanceCalculator] = None) -> List[float]:
    """Mean silhouette of each cluster's members; empty clusters score 0.0."""
    _check_inputs(clusters, specs)

    scores, labels = silhouette_samples(clusters, specs, calculator)

    per_cluster = []
    for k in range(len(clusters)):
        mask = labels == k
        if mask.sum() == 0:
            per_cluster.append(0.0)
        else:
            per_cluster.append(scores[mask].mean().item())

    return per_cluster


def inertia(clusters: Sequence['Cluster'], specs: Sequence[FeatureSpec],
            metric: str = 'euclidean',
            calculator: Optional[DistanceCalculator] = None) -> float:
    """Sum of member distances to their cluster's centroid (lower is better)."""
    if calculator is None:
        calculator = DistanceCalculator()

    total = 0.0
    for cluster in clusters:
        centroid = cluster.get_centroid()
        for member in cluster.get_members():
            total += calculator(member, centroid, specs, metric=metric)

    return total


class ClusterEvaluator:
    """Scores finished partitions with the Silhouette coefficient.

    Args:
        calculator: Distance calculator to use
    """

    def __init__(self, calculator: Optional[DistanceCalculator] = None):
        self.calculator = calculator if calculator is not None else DistanceCalculator()

    def silhouette_score(self, clusters: Sequence['Cluster'],
                         specs: Sequence[FeatureSpec]) -> float:
        return silhouette_score(clusters, specs, self.calculator)

    def silhouette_per_cluster(self, clusters: Sequence['Cluster'],
                               specs: Sequence[FeatureSpec]) -> List[float]:
        return silhouette_per_cluster(clusters, specs, self.calculator)

    def silhouette_samples(self, clusters: Sequence['Cluster'],
                           specs: Sequence[FeatureSpec]) -> List[float]:
        scores, _ = silhouette_samples(clusters, specs, self.calculator)
        return scores.tolist()
