"""Centroid update rules for mixed-type features."""

from .aggregate import (
    MULTI_AGGREGATIONS,
    numeric_mean,
    mode,
    most_frequent_token,
    option_majority,
    aggregate_dimension,
    aggregate_vectors
)

__all__ = [
    'MULTI_AGGREGATIONS',
    'numeric_mean',
    'mode',
    'most_frequent_token',
    'option_majority',
    'aggregate_dimension',
    'aggregate_vectors'
]
