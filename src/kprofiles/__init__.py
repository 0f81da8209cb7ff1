"""
kprofiles: clustering of survey respondents with mixed-type answers.

Each respondent is a vector of textual answers; a feature spec per dimension
says how to read it (numeric range, ordered scale, single choice, multiple
choice, free text). The package provides:
- A heterogeneous distance (Euclidean and Manhattan aggregates)
- K-means, K-means++ seeded K-means and K-medoids
- Silhouette evaluation of the resulting partitions

Example usage:
    >>> from kprofiles import KMeansPlusPlus, ClusterEvaluator
    >>> from kprofiles import numeric, ordinal, nominal_multi
    >>>
    >>> specs = [numeric(0, 100), ordinal(["low", "mid", "high"]), nominal_multi()]
    >>> data = [["23", "low", "tea,coffee"],
    ...         ["25", "low", "tea"],
    ...         ["71", "high", "juice"],
    ...         ["68", "high", "juice,water"]]
    >>>
    >>> model = KMeansPlusPlus(random_state=0, verbose=1)
    >>> clusters = model.fit(data, k=2, max_iter=100, specs=specs)
    >>>
    >>> # Score the partition
    >>> score = ClusterEvaluator().silhouette_score(clusters, specs)
"""

__version__ = '0.1.0'

from .base import (
    FeatureVector,
    FeatureKind,
    NumericSpec,
    OrdinalSpec,
    NominalSingleSpec,
    NominalMultiSpec,
    FreeTextSpec,
    FeatureSpec,
    numeric,
    ordinal,
    nominal_single,
    nominal_multi,
    free_text,
    spec_from_mapping,
    specs_from_mappings,
    AlgorithmState
)
from .distances import DistanceCalculator
from .representations import Cluster

# Import main algorithms
from .algorithms.kmeans import KMeans
from .algorithms.kmeans_plusplus import KMeansPlusPlus
from .algorithms.kmedoids import KMedoids
from .algorithms.builder import create_algorithm, fit_partition

from .utils.metrics import ClusterEvaluator, silhouette_score

__all__ = [
    # Algorithms
    'KMeans',
    'KMeansPlusPlus',
    'KMedoids',

    # Builder
    'create_algorithm',
    'fit_partition',

    # Feature specs
    'FeatureVector',
    'FeatureKind',
    'NumericSpec',
    'OrdinalSpec',
    'NominalSingleSpec',
    'NominalMultiSpec',
    'FreeTextSpec',
    'FeatureSpec',
    'numeric',
    'ordinal',
    'nominal_single',
    'nominal_multi',
    'free_text',
    'spec_from_mapping',
    'specs_from_mappings',

    # Core structures
    'AlgorithmState',
    'Cluster',
    'DistanceCalculator',

    # Evaluation
    'ClusterEvaluator',
    'silhouette_score',

    # Version
    '__version__'
]
