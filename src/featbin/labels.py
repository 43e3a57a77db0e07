from __future__ import annotations

import math
from bisect import bisect_right
from typing import List, Sequence, Tuple


def assign_bin(value: float, cut_points: Sequence[float]) -> int:
    """Index of the left-closed/right-open bin holding `value`.

    Bin i is [cut_points[i-1], cut_points[i]); bin 0 starts at -inf and the
    last bin runs to +inf.
    """
    return bisect_right(cut_points, value)


def bin_bounds(index: int, cut_points: Sequence[float]) -> Tuple[float, float]:
    lower = cut_points[index - 1] if index > 0 else -math.inf
    upper = cut_points[index] if index < len(cut_points) else math.inf
    return lower, upper


def _fmt(bound: float, precision: int) -> str:
    if bound == -math.inf:
        return "-inf"
    if bound == math.inf:
        return "+inf"
    return f"{bound:.{precision}f}"


def interval_label(lower: float, upper: float, precision: int = 2) -> str:
    left = "(" if lower == -math.inf else "["
    return f"{left}{_fmt(lower, precision)}, {_fmt(upper, precision)})"


def bin_label(value: float, cut_points: Sequence[float], precision: int = 2) -> str:
    lower, upper = bin_bounds(assign_bin(value, cut_points), cut_points)
    return interval_label(lower, upper, precision)


def interval_labels(cut_points: Sequence[float], precision: int = 2) -> List[str]:
    """Labels of every bin implied by `cut_points`, lowest first."""
    return [interval_label(*bin_bounds(i, cut_points), precision) for i in range(len(cut_points) + 1)]
