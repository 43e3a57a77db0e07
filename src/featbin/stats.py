from __future__ import annotations

import math
from typing import Iterable, Sequence

import numpy as np


def shannon_entropy(probabilities: Iterable[float]) -> float:
    """-sum(p * log2(p)) over the strictly positive probabilities; 0.0 if none."""
    p = np.asarray(list(probabilities), dtype=float)
    p = p[p > 0]
    if p.size == 0:
        return 0.0
    return float(-(p * np.log2(p)).sum())


def _entropy_from_counts(counts: np.ndarray) -> float:
    total = counts.sum()
    if total <= 0:
        return 0.0
    return shannon_entropy(counts / total)


def class_entropy(labels: Iterable[str]) -> float:
    """Entropy of the target label distribution."""
    arr = np.asarray([str(v) for v in labels], dtype=str)
    if arr.size == 0:
        return 0.0
    _, counts = np.unique(arr, return_counts=True)
    return _entropy_from_counts(counts)


def value_entropy(values: Iterable[float]) -> float:
    """Entropy of the exact-value frequency distribution of numeric values."""
    arr = np.asarray(list(values), dtype=float)
    if arr.size == 0:
        return 0.0
    _, counts = np.unique(arr, return_counts=True)
    return _entropy_from_counts(counts)


def distinct_count(values: Sequence[float]) -> int:
    return len(set(values))


def optimal_bin_count(n: int, distinct_values: int) -> int:
    """Sturges' rule, ceil(1 + log2(n)), bounded to [1, distinct_values - 1]."""
    bins = int(math.ceil(1 + math.log2(n))) if n > 1 else 1
    if distinct_values > 1:
        bins = min(bins, distinct_values - 1)
    return max(bins, 1)


def information_density(entropy: float, distinct_values: int) -> float:
    """Entropy normalised by log2(distinct_values + 1); 0.0 for an empty partition."""
    if distinct_values <= 0:
        return 0.0
    return entropy / math.log2(distinct_values + 1)
