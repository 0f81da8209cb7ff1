"""
Core data structures for the kprofiles clustering algorithms.

This module defines the per-dimension feature specifications that tell the
distance and aggregation code how to read each answer, plus the containers
used to record algorithm progress.

A feature specification is a closed sum type: one frozen dataclass per
feature kind, each carrying only the metadata that kind needs.
"""

from typing import Optional, List, Tuple, Dict, Any, Union, Sequence, Mapping
from dataclasses import dataclass, field
from enum import Enum


# A respondent: one string-encoded answer per dimension, None for a missing answer
FeatureVector = Tuple[Optional[str], ...]


class FeatureKind(Enum):
    """Kinds of answers a survey dimension can hold."""

    NUMERIC = 'numeric'
    ORDINAL = 'ordinal'
    NOMINAL_SINGLE = 'nominal_single'
    NOMINAL_MULTI = 'nominal_multi'
    FREE_TEXT = 'free_text'


@dataclass(frozen=True)
class NumericSpec:
    """Continuous quantity bounded by [min, max]."""

    min: Optional[float]
    max: Optional[float]

    kind = FeatureKind.NUMERIC

    @property
    def range(self) -> float:
        return self.max - self.min


@dataclass(frozen=True)
class OrdinalSpec:
    """Ordered categories.

    Attributes:
        order: Modality labels from lowest to highest
        cardinality: Explicit number of modalities; defaults to len(order)
    """

    order: Tuple[str, ...]
    cardinality: Optional[int] = None

    kind = FeatureKind.ORDINAL

    def __post_init__(self):
        # Accept any sequence but store an immutable copy
        if self.order is not None and not isinstance(self.order, tuple):
            object.__setattr__(self, 'order', tuple(self.order))

    @property
    def n_modalities(self) -> int:
        return self.cardinality if self.cardinality is not None else len(self.order)


@dataclass(frozen=True)
class NominalSingleSpec:
    """Unordered single-choice category."""

    kind = FeatureKind.NOMINAL_SINGLE


@dataclass(frozen=True)
class NominalMultiSpec:
    """Unordered multi-choice category, encoded as a comma-separated list."""

    max_selections: Optional[int] = None

    kind = FeatureKind.NOMINAL_MULTI


@dataclass(frozen=True)
class FreeTextSpec:
    """Open text answer."""

    kind = FeatureKind.FREE_TEXT


FeatureSpec = Union[NumericSpec, OrdinalSpec, NominalSingleSpec, NominalMultiSpec, FreeTextSpec]

SPEC_TYPES = (NumericSpec, OrdinalSpec, NominalSingleSpec, NominalMultiSpec, FreeTextSpec)


def numeric(min: Optional[float], max: Optional[float]) -> NumericSpec:
    return NumericSpec(min=min, max=max)


def ordinal(order: Sequence[str], cardinality: Optional[int] = None) -> OrdinalSpec:
    return OrdinalSpec(order=tuple(order) if order is not None else None,
                       cardinality=cardinality)


def nominal_single() -> NominalSingleSpec:
    return NominalSingleSpec()


def nominal_multi(max_selections: Optional[int] = None) -> NominalMultiSpec:
    return NominalMultiSpec(max_selections=max_selections)


def free_text() -> FreeTextSpec:
    return FreeTextSpec()


def spec_from_mapping(mapping: Mapping[str, Any]) -> FeatureSpec:
    """Build a feature spec from a plain mapping.

    Examples:
        {'kind': 'numeric', 'min': 0, 'max': 10}
        {'kind': 'ordinal', 'order': ['low', 'mid', 'high']}
        {'kind': 'nominal_multi', 'max_selections': 3}

    Raises:
        ValueError: If the kind is missing or unknown
    """
    if 'kind' not in mapping:
        raise ValueError(f"Feature spec mapping needs a 'kind' entry, got {dict(mapping)}")

    try:
        kind = FeatureKind(str(mapping['kind']).lower())
    except ValueError:
        valid = [k.value for k in FeatureKind]
        raise ValueError(f"Unknown feature kind '{mapping['kind']}', expected one of {valid}")

    if kind is FeatureKind.NUMERIC:
        return numeric(mapping.get('min'), mapping.get('max'))
    elif kind is FeatureKind.ORDINAL:
        return ordinal(mapping.get('order'), mapping.get('cardinality'))
    elif kind is FeatureKind.NOMINAL_SINGLE:
        return nominal_single()
    elif kind is FeatureKind.NOMINAL_MULTI:
        return nominal_multi(mapping.get('max_selections'))
    else:
        return free_text()


def specs_from_mappings(mappings: Sequence[Mapping[str, Any]]) -> List[FeatureSpec]:
    """Build a spec array, one entry per dimension."""
    return [spec_from_mapping(m) for m in mappings]


@dataclass
class AlgorithmState:
    """State of a clustering run at the end of one iteration.

    Kept in ``history_`` for convergence diagnostics and debugging.
    """
    iteration: int
    labels: List[int]
    n_changed: int
    centroids_changed: bool
    objective_value: float

    converged: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)
