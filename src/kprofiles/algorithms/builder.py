"""
Construction of clustering algorithms by name.

Lets callers (configuration files, command lines, services) pick the
partitioning algorithm with a string.
"""

from typing import Optional, Union, Sequence, List, Dict, Type
import torch

from ..base.clustering_base import BaseClusteringAlgorithm
from ..base.data_structures import FeatureSpec
from ..representations.cluster import Cluster
from .kmeans import KMeans
from .kmeans_plusplus import KMeansPlusPlus
from .kmedoids import KMedoids


ALGORITHMS: Dict[str, Type[BaseClusteringAlgorithm]] = {
    'kmeans': KMeans,
    'k-means': KMeans,
    'kmeans++': KMeansPlusPlus,
    'k-means++': KMeansPlusPlus,
    'kmedoids': KMedoids,
    'k-medoids': KMedoids,
}


def create_algorithm(name: str, **params) -> BaseClusteringAlgorithm:
    """Create a clustering algorithm from its name.

    Parameters
    ----------
    name : str
        'kmeans', 'kmeans++' or 'kmedoids' (case-insensitive, hyphenated
        spellings accepted)
    **params : dict
        Constructor parameters (random_state, verbose, multi_aggregation)

    Returns
    -------
    algorithm : BaseClusteringAlgorithm
        Unfitted algorithm
    """
    if not isinstance(name, str):
        raise TypeError(f"Algorithm name must be str, got {type(name)}")

    key = name.strip().lower()
    if key not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm: {name}. "
                         f"Choose from {sorted(set(ALGORITHMS))}")

    return ALGORITHMS[key](**params)


def fit_partition(algorithm: str, data: Sequence[Sequence[Optional[str]]], k: int,
                  max_iter: int, specs: Sequence[FeatureSpec],
                  random_state: Optional[Union[int, torch.Generator]] = None,
                  **params) -> List[Cluster]:
    """Create the named algorithm and fit it in one call.

    Examples
    --------
    >>> from kprofiles import numeric, nominal_single
    >>> data = [["1", "red"], ["2", "red"], ["9", "blue"], ["10", "blue"]]
    >>> specs = [numeric(0, 10), nominal_single()]
    >>> clusters = fit_partition('kmeans++', data, 2, 100, specs, random_state=0)
    >>> sorted(len(c) for c in clusters)
    [2, 2]
    """
    model = create_algorithm(algorithm, random_state=random_state, **params)
    return model.fit(data, k, max_iter, specs)
