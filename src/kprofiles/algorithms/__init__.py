"""Clustering algorithm implementations."""

from .kmeans import KMeans
from .kmeans_plusplus import KMeansPlusPlus
from .kmedoids import KMedoids
from .builder import create_algorithm, fit_partition

__all__ = [
    'KMeans',
    'KMeansPlusPlus',
    'KMedoids',
    'create_algorithm',
    'fit_partition'
]
