"""
Centroid update strategies for heterogeneous clusters.

A centroid is rebuilt one dimension at a time from the members' answers:
numeric answers are averaged, free text is summarized by its most frequent
word, and categorical answers by their mode. Every aggregator receives the
current centroid value and returns it unchanged when the members give no
better candidate, so an update never invents a value out of nothing.
"""

from collections import Counter
from typing import Optional, Sequence, List

import numpy as np

from ..base.data_structures import (
    FeatureSpec, NumericSpec, OrdinalSpec, NominalSingleSpec,
    NominalMultiSpec, FreeTextSpec
)
from ..distances.heterogeneous import parse_multi, parse_number, split_options
from ..distances.text import tokenize


MULTI_AGGREGATIONS = ('label', 'set')


def _most_frequent(counts: Counter, current: Optional[str]) -> Optional[str]:
    """Highest count wins; the current value survives a tie it takes part in.

    Counter preserves insertion order, so among other tied leaders the first
    one seen wins.
    """
    best = current
    best_count = counts.get(current, 0)
    for value, count in counts.items():
        if count > best_count:
            best, best_count = value, count
    return best


def numeric_mean(values: Sequence[Optional[str]], current: Optional[str]) -> Optional[str]:
    """Mean of the parseable answers, rendered back as a string."""
    parsed = [number for number in map(parse_number, values) if number is not None]

    if not parsed:
        return current

    return repr(float(np.mean(parsed)))


def mode(values: Sequence[Optional[str]], current: Optional[str]) -> Optional[str]:
    """Most frequent raw answer (exact string match)."""
    if not values:
        return current
    return _most_frequent(Counter(values), current)


def most_frequent_token(values: Sequence[Optional[str]], current: Optional[str]) -> Optional[str]:
    """Most frequent word across all members' texts."""
    counts = Counter()
    for text in values:
        counts.update(tokenize(text))

    if not counts:
        return current

    best = current
    best_count = counts.get(current.lower(), 0) if current is not None else 0
    for token, count in counts.items():
        if count > best_count:
            best, best_count = token, count
    return best


def option_majority(values: Sequence[Optional[str]], current: Optional[str]) -> Optional[str]:
    """Options chosen by at least half of the members, comma-joined.

    Options keep the order in which they were first seen. If no option
    reaches half of the members the current value is kept.
    """
    if not values:
        return current

    counts = Counter()
    for value in values:
        counts.update(split_options(value))

    threshold = len(values) / 2.0
    chosen = [option for option, count in counts.items() if count >= threshold]
    if not chosen:
        return current

    candidate = ','.join(chosen)
    if current is not None and parse_multi(current) == set(chosen):
        return current
    return candidate


def aggregate_dimension(values: Sequence[Optional[str]], current: Optional[str],
                        spec: FeatureSpec, multi_aggregation: str = 'label') -> Optional[str]:
    """New centroid value for one dimension.

    Args:
        values: Members' answers for this dimension
        current: Current centroid value
        spec: Feature spec of the dimension
        multi_aggregation: 'label' treats a multi-choice answer as one atomic
            label (mode of the whole string); 'set' votes per option

    Raises:
        TypeError: If spec is not one of the known feature specs
    """
    if isinstance(spec, NumericSpec):
        return numeric_mean(values, current)
    elif isinstance(spec, FreeTextSpec):
        return most_frequent_token(values, current)
    elif isinstance(spec, (OrdinalSpec, NominalSingleSpec)):
        return mode(values, current)
    elif isinstance(spec, NominalMultiSpec):
        if multi_aggregation == 'set':
            return option_majority(values, current)
        return mode(values, current)
    else:
        raise TypeError(f"Unknown feature spec: {spec!r}")


def check_multi_aggregation(multi_aggregation: str) -> str:
    if multi_aggregation not in MULTI_AGGREGATIONS:
        raise ValueError(f"multi_aggregation must be one of {MULTI_AGGREGATIONS}, "
                         f"got '{multi_aggregation}'")
    return multi_aggregation


def aggregate_vectors(members: Sequence[Sequence[Optional[str]]],
                      current: Sequence[Optional[str]],
                      specs: Sequence[FeatureSpec],
                      multi_aggregation: str = 'label') -> List[Optional[str]]:
    """Rebuild a whole centroid from member vectors."""
    return [
        aggregate_dimension([m[i] for m in members], current[i], spec, multi_aggregation)
        for i, spec in enumerate(specs)
    ]
