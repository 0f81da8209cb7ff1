"""
Base class for the kprofiles clustering algorithms.

Provides what KMeans, KMeans++ and KMedoids share: input validation, the
owned random generator, per-iteration bookkeeping, verbose progress output
and sklearn-style parameter access.
"""

from abc import abstractmethod
from typing import Optional, Dict, Any, List, Sequence, Union
import time
import warnings

import torch

from .data_structures import FeatureVector, FeatureSpec, AlgorithmState
from ..distances.heterogeneous import DistanceCalculator
from ..representations.cluster import Cluster
from ..updates.aggregate import check_multi_aggregation
from ..utils.validation import (
    check_random_state, validate_clustering_input, validate_data, validate_specs
)


class BaseClusteringAlgorithm:
    """Base class implementing the shared partitioning framework.

    Subclasses implement ``fit`` and set ``metric`` to the aggregate distance
    their assignment step uses.

    Args:
        random_state: Seed or ``torch.Generator``; None draws a fresh seed
        verbose: Verbosity level (0=silent, 1=progress, 2=detailed)
        multi_aggregation: How centroids summarize multi-choice answers
            ('label' or 'set')
    """

    metric = 'euclidean'

    def __init__(self,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 verbose: int = 0,
                 multi_aggregation: str = 'label'):
        self.random_state = random_state
        self.verbose = verbose
        self.multi_aggregation = check_multi_aggregation(multi_aggregation)

        # All randomness of a run is drawn from this generator
        self.generator = check_random_state(random_state)
        self.calculator = DistanceCalculator()

        self._reset_fit_state()

    def _reset_fit_state(self) -> None:
        self.fitted_ = False
        self.converged_ = False
        self.n_iter_ = 0
        self.history_: List[AlgorithmState] = []
        self.clusters_: Optional[List[Cluster]] = None
        self.labels_: Optional[List[int]] = None
        self.inertia_: Optional[float] = None
        self._start_time = None

    @abstractmethod
    def fit(self, data: Sequence[Sequence[Optional[str]]], k: int, max_iter: int,
            specs: Sequence[FeatureSpec]) -> List[Cluster]:
        """Partition data into k clusters.

        Args:
            data: n feature vectors of equal dimension
            k: Number of clusters
            max_iter: Iteration cap (non-positive means the default of 100)
            specs: One feature spec per dimension

        Returns:
            List of k clusters covering every input point exactly once
        """
        pass

    def fit_predict(self, data, k: int, max_iter: int, specs) -> List[int]:
        """Fit and return the cluster index of every input point."""
        self.fit(data, k, max_iter, specs)
        return list(self.labels_)

    def predict(self, data: Sequence[Sequence[Optional[str]]]) -> List[int]:
        """Index of the nearest fitted centroid for new vectors.

        Args:
            data: Feature vectors of the fitted dimension

        Returns:
            Cluster index per vector
        """
        if not self.fitted_:
            raise RuntimeError("Model must be fitted before calling predict")

        points = validate_data(data, n_features=len(self.specs_))
        centroids = [cluster.get_centroid() for cluster in self.clusters_]

        labels = []
        for point in points:
            distances = [self.calculator(point, c, self.specs_, metric=self.metric)
                         for c in centroids]
            labels.append(distances.index(min(distances)))
        return labels

    def _validate_input(self, data, k: int, specs) -> Dict[str, Any]:
        """Validate everything before any work starts."""
        self._reset_fit_state()
        return validate_clustering_input(data, k, specs)

    def _validate_data_and_specs(self, data, specs) -> Dict[str, Any]:
        self._reset_fit_state()
        if data is None or len(data) == 0:
            raise ValueError("data cannot be None or empty")
        if specs is None:
            raise ValueError("specs cannot be None")
        specs = validate_specs(specs)
        points = validate_data(data, n_features=len(specs))
        return {'data': points, 'specs': specs,
                'n_samples': len(points), 'n_features': len(specs)}

    def _random_index(self, n: int) -> int:
        return torch.randint(n, (1,), generator=self.generator).item()

    def _log(self, level: int, message: str) -> None:
        if self.verbose >= level:
            print(message)

    def _start(self, n_clusters: int, n_samples: int) -> None:
        self._start_time = time.time()
        self._log(1, f"{self.__class__.__name__}: fitting {n_clusters} clusters "
                     f"on {n_samples} points...")

    def _record_iteration(self, iteration: int, labels: Sequence[int], n_changed: int,
                          centroids_changed: bool, objective: float, converged: bool,
                          iter_start_time: float) -> None:
        self.history_.append(AlgorithmState(
            iteration=iteration,
            labels=list(labels),
            n_changed=n_changed,
            centroids_changed=centroids_changed,
            objective_value=objective,
            converged=converged
        ))
        self.n_iter_ = iteration + 1

        iter_time = time.time() - iter_start_time
        if self.verbose >= 2 or (self.verbose >= 1 and iteration % 10 == 0):
            print(f"Iteration {iteration:3d}: objective = {objective:.6f} "
                  f"moved = {n_changed} ({iter_time:.3f}s)")

    def _finish(self, clusters: List[Cluster], labels: Sequence[int],
                specs: Sequence[FeatureSpec], converged: bool, max_iter: int) -> List[Cluster]:
        from ..utils.metrics import inertia

        self.clusters_ = clusters
        self.labels_ = list(labels)
        self.specs_ = list(specs)
        self.converged_ = converged
        self.inertia_ = inertia(clusters, specs, metric=self.metric, calculator=self.calculator)
        self.fitted_ = True

        if self.verbose:
            if converged:
                print(f"Converged at iteration {self.n_iter_ - 1}")
            else:
                warnings.warn(f"Failed to converge after {max_iter} iterations")
            total_time = time.time() - self._start_time if self._start_time else 0.0
            print(f"Total fitting time: {total_time:.3f}s")

        return clusters

    @property
    def cluster_centers_(self) -> List[FeatureVector]:
        """Final centroids."""
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return [cluster.get_centroid() for cluster in self.clusters_]

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Get parameters (sklearn compatibility)."""
        return {
            'random_state': self.random_state,
            'verbose': self.verbose,
            'multi_aggregation': self.multi_aggregation
        }

    def set_params(self, **params) -> 'BaseClusteringAlgorithm':
        """Set parameters (sklearn compatibility)."""
        valid = self.get_params()
        for key, value in params.items():
            if key not in valid:
                raise ValueError(f"Invalid parameter '{key}' for {self.__class__.__name__}")
            if key == 'multi_aggregation':
                value = check_multi_aggregation(value)
            setattr(self, key, value)
            if key == 'random_state':
                self.generator = check_random_state(value)
        return self
