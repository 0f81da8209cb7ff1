"""
String helpers for free-text answers.

Edit distance for comparing answers and a tokenizer for picking a
representative word when aggregating a cluster.
"""

import re
from typing import List


_NON_WORD = re.compile(r'[^\w\s]|_')


def levenshtein(s: str, t: str) -> int:
    """Classic edit distance with unit insert/delete/substitute costs.

    Uses two rolling rows, so memory is O(len(t)).
    """
    m, n = len(s), len(t)
    if m == 0:
        return n
    if n == 0:
        return m

    prev = list(range(n + 1))
    curr = [0] * (n + 1)

    for i in range(1, m + 1):
        curr[0] = i
        for j in range(1, n + 1):
            cost = 0 if s[i - 1] == t[j - 1] else 1
            curr[j] = min(prev[j] + 1,         # deletion
                          curr[j - 1] + 1,     # insertion
                          prev[j - 1] + cost)  # substitution
        prev, curr = curr, prev

    return prev[n]


def normalized_edit_distance(a: str, b: str) -> float:
    """Edit distance in [0, 1] that discounts the unavoidable length gap.

    The |len(a) - len(b)| insertions every alignment needs are removed from
    both the edit count and the normalizer, so only edits within the
    overlapping length count.
    """
    len_a, len_b = len(a), len(b)
    if len_a == 0 and len_b == 0:
        return 0.0

    diff = abs(len_a - len_b)
    denominator = max(len_a, len_b) - diff
    if denominator == 0:
        return 1.0

    return (levenshtein(a, b) - diff) / denominator


def tokenize(text: str) -> List[str]:
    """Lower-case words of a text, punctuation treated as separators."""
    if text is None:
        return []
    return _NON_WORD.sub(' ', text.lower()).split()
