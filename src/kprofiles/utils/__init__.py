"""Utility functions for kprofiles algorithms."""

from .validation import (
    DEFAULT_MAX_ITER,
    validate_vector,
    validate_data,
    validate_spec,
    validate_specs,
    check_n_clusters,
    check_max_iter,
    check_random_state,
    validate_initial_centroids,
    validate_medoid_indices,
    validate_clustering_input
)

from .convergence import (
    ChangeInAssignments,
    ChangeInCentroids,
    CombinedCriterion,
    MaxIterations,
    no_change_criterion
)

from .metrics import (
    pairwise_distances,
    silhouette_samples,
    silhouette_score,
    silhouette_per_cluster,
    inertia,
    ClusterEvaluator
)

__all__ = [
    # Validation
    'DEFAULT_MAX_ITER',
    'validate_vector',
    'validate_data',
    'validate_spec',
    'validate_specs',
    'check_n_clusters',
    'check_max_iter',
    'check_random_state',
    'validate_initial_centroids',
    'validate_medoid_indices',
    'validate_clustering_input',

    # Convergence criteria
    'ChangeInAssignments',
    'ChangeInCentroids',
    'CombinedCriterion',
    'MaxIterations',
    'no_change_criterion',

    # Metrics
    'pairwise_distances',
    'silhouette_samples',
    'silhouette_score',
    'silhouette_per_cluster',
    'inertia',
    'ClusterEvaluator'
]
