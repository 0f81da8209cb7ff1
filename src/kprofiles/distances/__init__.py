"""Distance measures for heterogeneous survey answers."""

from .heterogeneous import (
    MAX_LOCAL_DISTANCE,
    DistanceCalculator,
    numeric_distance,
    ordinal_distance,
    nominal_single_distance,
    nominal_multi_distance,
    free_text_distance,
    local_distance,
    parse_multi,
    parse_number,
    split_options
)
from .text import levenshtein, normalized_edit_distance, tokenize

__all__ = [
    'MAX_LOCAL_DISTANCE',
    'DistanceCalculator',

    # Per-dimension distances
    'numeric_distance',
    'ordinal_distance',
    'nominal_single_distance',
    'nominal_multi_distance',
    'free_text_distance',
    'local_distance',
    'parse_multi',
    'parse_number',
    'split_options',

    # Text helpers
    'levenshtein',
    'normalized_edit_distance',
    'tokenize'
]
