# tests/utils.py
"""
Small, reusable helpers used across the kprofiles test suite.

Functions:
- partition_signature(clusters): order-free summary of a partition (sorted member groups).
- labels_equal_up_to_perm(y1, y2): whether two labelings agree up to renaming clusters.
- perm_invariant_accuracy(y_pred, split_index): best accuracy over label swap for 2-way splits.
- time_block(label, meta=None): context manager that prints wall-clock time with optional metadata.
- print_timing(label, seconds, **meta): convenience printer for timings (used by time_block).
"""

from __future__ import annotations

import json
import time
from contextlib import contextmanager
from typing import Any, Dict, List, Sequence, Tuple

import numpy as np


def partition_signature(clusters: Sequence[Any]) -> List[Tuple[Tuple[str, ...], ...]]:
    """
    Sorted tuple of sorted members per cluster.

    Two partitions with the same groups compare equal regardless of cluster
    order. None answers are rendered as the empty string for sorting.
    """
    groups = []
    for cluster in clusters:
        members = [tuple("" if v is None else v for v in m) for m in cluster.get_members()]
        groups.append(tuple(sorted(members)))
    return sorted(groups)


def labels_equal_up_to_perm(y1: Sequence[int], y2: Sequence[int]) -> bool:
    """Return True if y2 maps one-to-one onto y1."""
    if len(y1) != len(y2):
        return False
    forward: Dict[int, int] = {}
    backward: Dict[int, int] = {}
    for a, b in zip(y1, y2):
        if forward.setdefault(b, a) != a or backward.setdefault(a, b) != b:
            return False
    return True


def perm_invariant_accuracy(y_pred: Sequence[int], split_index: int) -> float:
    """
    Best accuracy over label swaps for 2-way synthetic datasets where the
    first `split_index` points belong to class 0 and the rest to class 1.

    Returns
    -------
    float in [0, 1]
    """
    y_pred = np.asarray(y_pred)
    if y_pred.ndim != 1:
        raise ValueError(f"y_pred must be 1D, got shape {y_pred.shape}")
    n = y_pred.size
    if not (0 <= split_index <= n):
        raise ValueError(f"split_index must be in [0, {n}], got {split_index}")

    first = y_pred[:split_index]
    second = y_pred[split_index:]

    # Map A: first→0, second→1
    acc_a = (np.sum(first == 0) + np.sum(second == 1)) / max(1, n)
    # Map B: first→1, second→0
    acc_b = (np.sum(first == 1) + np.sum(second == 0)) / max(1, n)

    return float(max(acc_a, acc_b))


@contextmanager
def time_block(label: str, meta: Dict[str, Any] | None = None):
    """
    Context manager to time a block and print a single-line summary.

    Example
    -------
    >>> with time_block("fit", {"n": 60, "d": 5, "K": 2}):
    ...     model.fit(data, 2, 100, specs)

    Output
    ------
    [timing] fit {"n":60,"d":5,"K":2} 0.123s
    """
    t0 = time.perf_counter()
    try:
        yield
    finally:
        dt = time.perf_counter() - t0
        print_timing(label, dt, **(meta or {}))


def print_timing(label: str, seconds: float, **meta: Any) -> None:
    """Print timing in a compact, machine-readable single line."""
    meta_str = ""
    if meta:
        meta_str = " " + json.dumps(meta, separators=(",", ":"))
    print(f"[timing] {label}{meta_str} {seconds:.3f}s")
