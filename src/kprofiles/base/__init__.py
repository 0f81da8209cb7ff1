"""Base data structures and interfaces for kprofiles clustering algorithms."""

from .data_structures import (
    FeatureVector,
    FeatureKind,
    NumericSpec,
    OrdinalSpec,
    NominalSingleSpec,
    NominalMultiSpec,
    FreeTextSpec,
    FeatureSpec,
    SPEC_TYPES,
    numeric,
    ordinal,
    nominal_single,
    nominal_multi,
    free_text,
    spec_from_mapping,
    specs_from_mappings,
    AlgorithmState
)

from .interfaces import (
    AssignmentStrategy,
    InitializationStrategy,
    ConvergenceCriterion
)

# BaseClusteringAlgorithm lives in .clustering_base and is imported from
# there; it depends on the distance and representation subpackages.

__all__ = [
    # Feature vectors and specs
    'FeatureVector',
    'FeatureKind',
    'NumericSpec',
    'OrdinalSpec',
    'NominalSingleSpec',
    'NominalMultiSpec',
    'FreeTextSpec',
    'FeatureSpec',
    'SPEC_TYPES',
    'numeric',
    'ordinal',
    'nominal_single',
    'nominal_multi',
    'free_text',
    'spec_from_mapping',
    'specs_from_mappings',
    'AlgorithmState',

    # Interfaces
    'AssignmentStrategy',
    'InitializationStrategy',
    'ConvergenceCriterion'
]
