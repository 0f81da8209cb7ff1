"""
Core interfaces for the kprofiles clustering algorithms.

This module defines the abstract base classes that pluggable components must
implement, so KMeans, KMeans++ and KMedoids can share assignment,
initialization and convergence logic.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, List, Sequence
import torch
from torch import Tensor

from .data_structures import FeatureVector, FeatureSpec


class AssignmentStrategy(ABC):
    """Abstract base class for point-to-cluster assignment strategies."""

    @abstractmethod
    def compute_assignments(self, points: Sequence[FeatureVector],
                            centroids: Sequence[FeatureVector],
                            specs: Sequence[FeatureSpec],
                            **kwargs) -> Tensor:
        """Compute cluster assignments for points.

        Args:
            points: n feature vectors
            centroids: K centroid vectors
            specs: Per-dimension feature specifications

        Returns:
            (n,) long tensor of cluster indices
        """
        pass


class InitializationStrategy(ABC):
    """Abstract base class for cluster initialization strategies."""

    @abstractmethod
    def initialize(self, points: Sequence[FeatureVector], n_clusters: int,
                   specs: Sequence[FeatureSpec],
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> List[FeatureVector]:
        """Choose initial centroids.

        Args:
            points: n feature vectors
            n_clusters: Number of clusters to initialize
            specs: Per-dimension feature specifications
            generator: Source of randomness

        Returns:
            List of n_clusters centroid vectors
        """
        pass


class ConvergenceCriterion(ABC):
    """Abstract base class for convergence checking."""

    def __init__(self):
        self.history = []

    @abstractmethod
    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if algorithm has converged.

        Args:
            current_state: Dictionary containing current algorithm state

        Returns:
            True if converged, False otherwise
        """
        pass

    def reset(self):
        """Reset convergence history."""
        self.history = []
