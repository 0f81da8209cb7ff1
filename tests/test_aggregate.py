# tests/test_aggregate.py
"""
Per-dimension centroid aggregation.

Covers:
- Numeric mean (unparsable answers skipped, previous value kept when nothing parses)
- Mode with the tie rule (current value survives a tie it takes part in)
- Most frequent token for free text
- Multi-choice aggregation as atomic label or per-option majority
"""

from __future__ import annotations

import pytest

from kprofiles import numeric, ordinal, nominal_single, nominal_multi, free_text
from kprofiles.updates import (
    numeric_mean,
    mode,
    most_frequent_token,
    option_majority,
    aggregate_dimension,
    aggregate_vectors,
)
from kprofiles.updates.aggregate import check_multi_aggregation


def test_numeric_mean_renders_float():
    assert numeric_mean(["1", "1", "2"], "0") == "1.3333333333333333"
    assert numeric_mean(["2", "4"], None) == "3.0"


def test_numeric_mean_skips_unparsable():
    assert numeric_mean(["1", "oops", None, "3"], "0") == "2.0"


def test_numeric_mean_ignores_non_decimal_forms():
    assert numeric_mean(["1_000", "\u0663", "nan", "4"], "0") == "4.0"
    assert numeric_mean([" 2 ", "1e1"], "0") == "6.0"


def test_numeric_mean_keeps_current_when_nothing_parses():
    assert numeric_mean(["x", None], "5") == "5"
    assert numeric_mean([], "5") == "5"


def test_mode_majority():
    assert mode(["a", "b", "b"], "a") == "b"


def test_mode_tie_keeps_current_leader():
    assert mode(["a", "b"], "b") == "b"
    assert mode(["b", "a", "a", "b"], "a") == "a"


def test_mode_tie_without_current_takes_first_seen():
    assert mode(["a", "b"], "c") == "a"
    assert mode(["b", "a"], None) == "b"


def test_mode_empty_keeps_current():
    assert mode([], "c") == "c"


def test_most_frequent_token():
    assert most_frequent_token(["Great service", "great staff!"], None) == "great"


def test_most_frequent_token_ties():
    assert most_frequent_token(["alpha beta"], "beta") == "beta"
    assert most_frequent_token(["alpha beta"], "gamma") == "alpha"


def test_most_frequent_token_without_tokens_keeps_current():
    assert most_frequent_token(["", "!!!", None], "prev") == "prev"


def test_option_majority():
    assert option_majority(["a,b", "b,c", "b"], None) == "b"
    assert option_majority(["a,b", "a,c", "b,c", "d"], None) == "a,b,c"


def test_option_majority_keeps_equivalent_current():
    assert option_majority(["a,b", "a,b", "c"], "b,a") == "b,a"


def test_option_majority_without_majority_keeps_current():
    assert option_majority(["a", "b", "c"], "x") == "x"


def test_option_majority_orders_prefix_options_by_answer():
    assert option_majority(["AB,A", "AB,A"], "X") == "AB,A"
    assert option_majority(["A,AB", "AB,A,A"], None) == "A,AB"


def test_multi_aggregation_modes_differ():
    values = ["a,b", "a,c", "b,c", "d"]
    spec = nominal_multi()
    assert aggregate_dimension(values, None, spec, multi_aggregation="label") == "a,b"
    assert aggregate_dimension(values, None, spec, multi_aggregation="set") == "a,b,c"


def test_aggregate_dimension_dispatch():
    assert aggregate_dimension(["low", "high", "high"], "low", ordinal(["low", "high"])) == "high"
    assert aggregate_dimension(["ES", "FR", "ES"], None, nominal_single()) == "ES"
    assert aggregate_dimension(["Nice day", "nice"], None, free_text()) == "nice"
    assert aggregate_dimension(["3", "5"], None, numeric(0, 10)) == "4.0"


def test_aggregate_dimension_unknown_spec():
    with pytest.raises(TypeError):
        aggregate_dimension(["a"], None, "numeric")


def test_aggregate_vectors():
    specs = [numeric(0, 10), nominal_single()]
    members = [("2", "x"), ("4", "y"), ("6", "y")]
    assert aggregate_vectors(members, ("0", "x"), specs) == ["4.0", "y"]


def test_check_multi_aggregation():
    assert check_multi_aggregation("set") == "set"
    with pytest.raises(ValueError):
        check_multi_aggregation("bogus")
