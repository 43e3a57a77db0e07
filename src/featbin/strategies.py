from __future__ import annotations

import logging
import math
import sys
from bisect import bisect_left
from typing import Any, List, Mapping, Optional, Sequence

from .coerce import coerce_numeric
from .context import DEFAULT_NUM_BINS, DiscretizationContext, RecursiveConfig, normalize_cut_points
from .dataset import DataRow
from .drivers import IterativeBinningStrategy, RecursiveSplitStrategy, SplitDecision
from .stats import class_entropy, information_density, value_entropy

logger = logging.getLogger(__name__)


class EqualWidthStrategy(IterativeBinningStrategy):
    """Split [min, max] into n_bins intervals of equal width."""

    name = "equal_width"

    def __init__(self, default_n_bins: int = DEFAULT_NUM_BINS) -> None:
        self.default_n_bins = int(default_n_bins)

    def compute(self, context: DiscretizationContext) -> List[float]:
        values = context.numeric_values
        if not values:
            return []
        n_bins = context.binning_config.resolved_n_bins(self.default_n_bins)
        mn = min(values)
        mx = max(values)
        if mx - mn <= sys.float_info.epsilon:
            return []
        distinct = len(set(values))
        if distinct <= 1:
            return []
        n_bins = max(min(n_bins, distinct), 2)
        logger.debug("Equal-width on '%s': %d bins over [%g, %g]", context.attribute_name, n_bins, mn, mx)
        width = (mx - mn) / n_bins
        cuts = []
        for i in range(1, n_bins):
            cut = mn + i * width
            # rounding can push the last edge onto max
            if cut < mx:
                cuts.append(cut)
        return normalize_cut_points(cuts)


class EqualFrequencyStrategy(IterativeBinningStrategy):
    """Quantile cut points placed midway between neighbouring sorted values."""

    name = "equal_frequency"

    def __init__(self, default_n_bins: int = DEFAULT_NUM_BINS) -> None:
        self.default_n_bins = int(default_n_bins)

    def compute(self, context: DiscretizationContext) -> List[float]:
        values = sorted(context.numeric_values)
        if not values:
            return []
        distinct = sorted(set(values))
        if len(distinct) < 2:
            return []
        n_bins = context.binning_config.resolved_n_bins(self.default_n_bins)
        count = len(values)
        if count < n_bins:
            return distinct[:-1]
        logger.debug("Equal-frequency on '%s': %d bins over %d values", context.attribute_name, n_bins, count)
        per_bin = count / n_bins
        cuts = []
        for i in range(1, n_bins):
            index = int(math.floor(i * per_bin))
            if 0 < index < count:
                cuts.append((values[index - 1] + values[index]) / 2.0)
        return normalize_cut_points(cuts)


class InformationDensityStrategy(RecursiveSplitStrategy):
    """Split criterion minimising range-weighted information density.

    For a partition with entropy H over d distinct values the density is
    H / log2(d + 1). Every midpoint between consecutive distinct values is
    scored by p_left * density(left) + p_right * density(right), where the
    weights are fractions of the partition's [lower, upper] range. The best
    candidate is accepted only if it beats the partition's own density.
    Subclasses choose the entropy measure.
    """

    def partition_entropy(self, values: Sequence[float], targets: Sequence[str]) -> float:  # pragma: no cover
        raise NotImplementedError

    def _density(self, values: Sequence[float], targets: Sequence[str], distinct: int) -> float:
        if not values:
            return 0.0
        return information_density(self.partition_entropy(values, targets), distinct)

    def conditional_density(
        self,
        values: Sequence[float],
        targets: Sequence[str],
        cut: float,
        lower: float,
        upper: float,
    ) -> float:
        """Range-weighted density of the split of sorted `values` at `cut`."""
        span = upper - lower
        if span <= 0:
            return 0.0
        k = bisect_left(values, cut)
        left_v, right_v = values[:k], values[k:]
        left = self._density(left_v, targets[:k], len(set(left_v)))
        right = self._density(right_v, targets[k:], len(set(right_v)))
        return (cut - lower) / span * left + (upper - cut) / span * right

    def evaluate(
        self,
        rows: Sequence[DataRow],
        attribute_name: str,
        lower: float,
        upper: float,
        parameters: Mapping[str, Any],
    ) -> SplitDecision:
        if not rows or upper <= lower:
            return None, False
        points = []
        for row in rows:
            v = coerce_numeric(row.attributes.get(attribute_name))
            if v is not None:
                points.append((v, row.target))
        if len(points) < 2:
            return None, False
        points.sort()
        values = [p[0] for p in points]
        targets = [p[1] for p in points]
        distinct = sorted(set(values))
        if len(distinct) < 2:
            return None, False

        initial = self._density(values, targets, len(distinct))
        best_cut: Optional[float] = None
        best = math.inf
        for a, b in zip(distinct, distinct[1:]):
            cut = (a + b) / 2.0
            score = self.conditional_density(values, targets, cut, lower, upper)
            if score < best:
                best = score
                best_cut = cut

        threshold = RecursiveConfig.from_parameters(parameters).min_gain_threshold
        should_split = best_cut is not None and best < initial
        if should_split and threshold is not None:
            should_split = initial - best >= threshold
        if should_split:
            logger.debug("%s: cut %.6g (density %.4f -> %.4f)", self.name, best_cut, initial, best)
            return best_cut, True
        return None, False


class SupervisedInformationDensity(InformationDensityStrategy):
    """Purity measured by the entropy of the target labels."""

    name = "supervised_information_density"

    def partition_entropy(self, values: Sequence[float], targets: Sequence[str]) -> float:
        return class_entropy(targets)


class UnsupervisedInformationDensity(InformationDensityStrategy):
    """Purity measured by the frequency entropy of the values themselves."""

    name = "unsupervised_information_density"

    def partition_entropy(self, values: Sequence[float], targets: Sequence[str]) -> float:
        return value_entropy(values)
