"""
Distance metrics for heterogeneous survey answers.

Each dimension contributes a local distance in [0, 1] chosen by its feature
kind; the aggregate metrics combine the local distances and divide by the
number of dimensions so values stay comparable across surveys of different
length.

- Euclidean-style: sqrt(sum d_i^2) / N, used by KMeans and KMeans++
- Manhattan-style: sum(d_i / N), used by KMedoids
"""

import math
import re
from typing import Optional, Sequence, Set, List

from ..base.data_structures import (
    FeatureSpec, NumericSpec, OrdinalSpec, NominalSingleSpec,
    NominalMultiSpec, FreeTextSpec
)
from .text import normalized_edit_distance


MAX_LOCAL_DISTANCE = 1.0

_NUMBER = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def numeric_distance(a: Optional[str], b: Optional[str], spec: NumericSpec) -> float:
    """|a - b| scaled by the spec range; missing or unparsable answers are maximal."""
    if spec.min is None or spec.max is None:
        raise ValueError("Numeric features need both min and max")
    if spec.max <= spec.min:
        raise ValueError(f"max must be greater than min (min={spec.min}, max={spec.max})")

    da = parse_number(a)
    db = parse_number(b)
    if da is None or db is None:
        return MAX_LOCAL_DISTANCE

    return abs(da - db) / (spec.max - spec.min)


def ordinal_distance(a: Optional[str], b: Optional[str], spec: OrdinalSpec) -> float:
    """Rank difference scaled by (m - 1), m being the number of modalities."""
    if spec.order is None or len(spec.order) == 0:
        raise ValueError("Ordinal features need a non-empty modality order")

    if a is None or b is None:
        return MAX_LOCAL_DISTANCE
    if a not in spec.order or b not in spec.order:
        return MAX_LOCAL_DISTANCE

    diff = abs(spec.order.index(a) - spec.order.index(b))
    m = spec.n_modalities
    if m >= 2:
        return diff / (m - 1.0)
    return float(diff)


def nominal_single_distance(a: Optional[str], b: Optional[str]) -> float:
    """0 for identical labels, 1 otherwise."""
    if a is None or b is None:
        return MAX_LOCAL_DISTANCE
    return 0.0 if a == b else 1.0


def parse_number(value: Optional[str]) -> Optional[float]:
    """Parse a plain decimal answer such as "3", "-2.5" or "1e3".

    Returns None for missing answers and for anything else, including
    digit separators ("1_000"), non-ASCII digits, "nan" and "inf".
    """
    if value is None:
        return None
    text = str(value).strip()
    if not _NUMBER.fullmatch(text):
        return None
    return float(text)


def split_options(value: Optional[str]) -> List[str]:
    """Options of a comma-separated multi-choice answer, in answer order, without repeats."""
    if value is None:
        return []
    return list(dict.fromkeys(part.strip() for part in value.split(',') if part.strip()))


def parse_multi(value: Optional[str]) -> Set[str]:
    """Split a comma-separated multi-choice answer into a set of options."""
    return set(split_options(value))


def nominal_multi_distance(a: Optional[str], b: Optional[str]) -> float:
    """Jaccard distance between the two option sets."""
    if a is None or b is None:
        return MAX_LOCAL_DISTANCE

    sa = parse_multi(a)
    sb = parse_multi(b)
    union = sa | sb
    if not union:
        return 0.0

    return 1.0 - len(sa & sb) / len(union)


def free_text_distance(a: Optional[str], b: Optional[str]) -> float:
    """Length-discounted normalized edit distance."""
    if a is None or b is None:
        return MAX_LOCAL_DISTANCE
    return normalized_edit_distance(a, b)


def local_distance(a: Optional[str], b: Optional[str], spec: FeatureSpec) -> float:
    """Distance in [0, 1] between two answers of one dimension.

    Raises:
        TypeError: If spec is not one of the known feature specs
    """
    if isinstance(spec, NumericSpec):
        return numeric_distance(a, b, spec)
    elif isinstance(spec, OrdinalSpec):
        return ordinal_distance(a, b, spec)
    elif isinstance(spec, NominalSingleSpec):
        return nominal_single_distance(a, b)
    elif isinstance(spec, NominalMultiSpec):
        return nominal_multi_distance(a, b)
    elif isinstance(spec, FreeTextSpec):
        return free_text_distance(a, b)
    else:
        raise TypeError(f"Unknown feature spec: {spec!r}")


def _check_operands(a, b, specs) -> None:
    if a is None or b is None or specs is None:
        raise ValueError("Vectors and specs cannot be None")
    if len(a) != len(b) or len(a) != len(specs):
        raise ValueError(f"Vectors and specs must have the same length "
                         f"(got {len(a)}, {len(b)} and {len(specs)})")
    if len(a) == 0:
        raise ValueError("Vectors must have at least one dimension")


class DistanceCalculator:
    """Aggregate distance between heterogeneous feature vectors.

    Stateless: one instance can be shared freely between algorithms.

    Example:
        >>> from kprofiles.base import numeric, nominal_multi
        >>> dc = DistanceCalculator()
        >>> dc.distance(("1",), ("4",), [numeric(0, 10)])
        0.3
    """

    def distance(self, a: Sequence[Optional[str]], b: Sequence[Optional[str]],
                 specs: Sequence[FeatureSpec]) -> float:
        """Euclidean-style aggregate: sqrt(sum d_i^2) / N.

        Raises:
            ValueError: On None arguments or mismatched lengths
        """
        _check_operands(a, b, specs)

        total = 0.0
        for ai, bi, spec in zip(a, b, specs):
            d = local_distance(ai, bi, spec)
            total += d * d

        return math.sqrt(total) / len(a)

    def distance_manhattan(self, a: Sequence[Optional[str]], b: Sequence[Optional[str]],
                           specs: Sequence[FeatureSpec]) -> float:
        """Manhattan-style aggregate: sum(d_i / N).

        Raises:
            ValueError: On None arguments or mismatched lengths
        """
        _check_operands(a, b, specs)

        n = float(len(a))
        total = 0.0
        for ai, bi, spec in zip(a, b, specs):
            total += local_distance(ai, bi, spec) / n

        return total

    def local_distances(self, a: Sequence[Optional[str]], b: Sequence[Optional[str]],
                        specs: Sequence[FeatureSpec]) -> list:
        """Per-dimension distances, useful for explaining an aggregate value."""
        _check_operands(a, b, specs)
        return [local_distance(ai, bi, spec) for ai, bi, spec in zip(a, b, specs)]

    def __call__(self, a, b, specs, metric: str = 'euclidean') -> float:
        if metric == 'euclidean':
            return self.distance(a, b, specs)
        elif metric == 'manhattan':
            return self.distance_manhattan(a, b, specs)
        else:
            raise ValueError(f"Unknown metric: {metric}")
