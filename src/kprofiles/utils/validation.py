"""
Input validation utilities.

Every public entry point runs these checks before any clustering work, so
malformed input fails fast with a ValueError (or TypeError for values of the
wrong type) and no partial result is ever produced.
"""

from typing import Optional, Union, List, Sequence, Any
import torch

from ..base.data_structures import (
    FeatureVector, FeatureSpec, SPEC_TYPES, NumericSpec, OrdinalSpec
)


DEFAULT_MAX_ITER = 100


def validate_vector(vector: Optional[Sequence[Any]],
                    n_features: Optional[int] = None,
                    name: str = 'vector') -> FeatureVector:
    """Validate a single feature vector and return an owned copy.

    Non-string answers are converted with ``str``; ``None`` marks a missing
    answer and is kept as is.

    Args:
        vector: Sequence of answers
        n_features: Expected dimension, if known
        name: Name used in error messages

    Returns:
        Tuple copy of the vector

    Raises:
        ValueError: If the vector is None, empty, or has the wrong length
    """
    if vector is None:
        raise ValueError(f"{name} cannot be None")
    if isinstance(vector, str):
        raise TypeError(f"{name} must be a sequence of answers, got a single string")

    values = tuple(v if v is None or isinstance(v, str) else str(v) for v in vector)

    if len(values) == 0:
        raise ValueError(f"{name} must have at least one dimension")
    if n_features is not None and len(values) != n_features:
        raise ValueError(f"{name} has {len(values)} dimensions, expected {n_features}")

    return values


def validate_data(data: Optional[Sequence[Sequence[Any]]],
                  n_features: Optional[int] = None) -> List[FeatureVector]:
    """Validate a dataset of feature vectors.

    Args:
        data: Sequence of feature vectors
        n_features: Expected dimension (usually the spec array length)

    Returns:
        List of tuple copies

    Raises:
        ValueError: If data is None/empty or dimensions disagree
    """
    if data is None:
        raise ValueError("data cannot be None")
    if len(data) == 0:
        raise ValueError("data cannot be empty")

    points = []
    for i, vector in enumerate(data):
        point = validate_vector(vector, n_features, name=f"data[{i}]")
        if n_features is None:
            n_features = len(point)
        points.append(point)

    return points


def validate_spec(spec: Any, index: Optional[int] = None) -> FeatureSpec:
    """Check that a spec is a known kind with consistent metadata.

    Raises:
        TypeError: If spec is not a feature spec
        ValueError: If its metadata is missing or contradictory
    """
    where = f"specs[{index}]" if index is not None else "spec"

    if not isinstance(spec, SPEC_TYPES):
        raise TypeError(f"{where} must be a feature spec, got {type(spec)}")

    if isinstance(spec, NumericSpec):
        if spec.min is None or spec.max is None:
            raise ValueError(f"{where}: numeric features need both min and max")
        if spec.max <= spec.min:
            raise ValueError(f"{where}: max must be greater than min "
                             f"(min={spec.min}, max={spec.max})")

    elif isinstance(spec, OrdinalSpec):
        if spec.order is None or len(spec.order) == 0:
            raise ValueError(f"{where}: ordinal features need a non-empty modality order")

    return spec


def validate_specs(specs: Optional[Sequence[Any]],
                   n_features: Optional[int] = None) -> List[FeatureSpec]:
    """Validate a spec array.

    Args:
        specs: One feature spec per dimension
        n_features: Expected number of dimensions

    Returns:
        List copy of the specs

    Raises:
        ValueError: If specs is None, has the wrong length, or any spec is invalid
    """
    if specs is None:
        raise ValueError("specs cannot be None")

    specs = list(specs)

    if n_features is not None and len(specs) != n_features:
        raise ValueError(f"Got {len(specs)} specs for vectors of dimension {n_features}")

    for i, spec in enumerate(specs):
        validate_spec(spec, i)

    return specs


def check_n_clusters(n_clusters: int, n_samples: int) -> None:
    """Validate number of clusters.

    Args:
        n_clusters: Number of clusters
        n_samples: Number of samples

    Raises:
        ValueError: If invalid
    """
    if isinstance(n_clusters, bool) or not isinstance(n_clusters, int):
        raise TypeError(f"n_clusters must be int, got {type(n_clusters)}")

    if n_clusters <= 0:
        raise ValueError(f"n_clusters must be positive, got {n_clusters}")

    if n_clusters > n_samples:
        raise ValueError(f"n_clusters ({n_clusters}) cannot be larger than "
                         f"n_samples ({n_samples})")


def check_max_iter(max_iter: Optional[int]) -> int:
    """Resolve the iteration cap; non-positive values fall back to the default."""
    if max_iter is None or max_iter <= 0:
        return DEFAULT_MAX_ITER
    return int(max_iter)


def check_random_state(random_state: Optional[Union[int, torch.Generator]]) -> torch.Generator:
    """Create generator from random state.

    Args:
        random_state: Seed, generator, or None for a non-deterministic generator

    Returns:
        Generator owned by the caller
    """
    if random_state is None:
        generator = torch.Generator()
        generator.seed()
        return generator
    elif isinstance(random_state, torch.Generator):
        return random_state
    elif isinstance(random_state, int) and not isinstance(random_state, bool):
        generator = torch.Generator()
        generator.manual_seed(random_state)
        return generator
    else:
        raise TypeError(f"random_state must be int or Generator, got {type(random_state)}")


def validate_initial_centroids(centroids: Optional[Sequence[Sequence[Any]]],
                               n_features: int) -> List[FeatureVector]:
    """Validate caller-supplied starting centroids."""
    if centroids is None or len(centroids) == 0:
        raise ValueError("initial centroids cannot be None or empty")

    return [validate_vector(c, n_features, name=f"initial_centroids[{i}]")
            for i, c in enumerate(centroids)]


def validate_medoid_indices(indices: Optional[Sequence[int]], n_samples: int) -> List[int]:
    """Validate caller-supplied starting medoids (indices into the data)."""
    if indices is None or len(indices) == 0:
        raise ValueError("initial medoid indices cannot be None or empty")

    if len(indices) > n_samples:
        raise ValueError(f"Got {len(indices)} medoids for {n_samples} samples")

    checked = []
    for i, idx in enumerate(indices):
        if isinstance(idx, bool) or not isinstance(idx, int):
            raise TypeError(f"medoid index {i} must be int, got {type(idx)}")
        if idx < 0 or idx >= n_samples:
            raise ValueError(f"medoid index {idx} out of range for {n_samples} samples")
        checked.append(idx)

    return checked


def validate_clustering_input(data: Optional[Sequence[Sequence[Any]]],
                              n_clusters: int,
                              specs: Optional[Sequence[Any]]) -> dict:
    """Comprehensive validation for clustering input.

    Args:
        data: Input vectors
        n_clusters: Number of clusters
        specs: Per-dimension feature specifications

    Returns:
        Dictionary with validated inputs
    """
    if data is None or len(data) == 0:
        raise ValueError("data cannot be None or empty")

    check_n_clusters(n_clusters, len(data))

    if specs is None:
        raise ValueError("specs cannot be None")

    specs = validate_specs(specs)
    points = validate_data(data, n_features=len(specs))

    return {
        'data': points,
        'specs': specs,
        'n_clusters': n_clusters,
        'n_samples': len(points),
        'n_features': len(specs)
    }
