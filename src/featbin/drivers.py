from __future__ import annotations

import logging
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple, Union

from .coerce import coerce_numeric
from .context import DiscretizationContext, normalize_cut_points
from .dataset import DataRow
from .steps import Step

logger = logging.getLogger(__name__)

SplitDecision = Tuple[Optional[float], bool]


class IterativeBinningStrategy:
    """Computes the whole cut-point set from global statistics in one call."""

    name = "iterative"

    def compute(self, context: DiscretizationContext) -> List[float]:  # pragma: no cover
        raise NotImplementedError

    def __call__(self, context: DiscretizationContext) -> List[float]:
        return self.compute(context)


class RecursiveSplitStrategy:
    """Decides whether (and where) to split one partition of rows.

    `evaluate` receives the partition's rows, the attribute under
    discretization, the partition's [lower, upper] range and the call
    parameters, and returns (candidate cut point or None, should_split).
    """

    name = "recursive"

    def evaluate(
        self,
        rows: Sequence[DataRow],
        attribute_name: str,
        lower: float,
        upper: float,
        parameters: Mapping[str, Any],
    ) -> SplitDecision:  # pragma: no cover
        raise NotImplementedError

    def __call__(self, rows, attribute_name, lower, upper, parameters) -> SplitDecision:
        return self.evaluate(rows, attribute_name, lower, upper, parameters)


IterativeFn = Union[IterativeBinningStrategy, Callable[[DiscretizationContext], Sequence[float]]]
SplitFn = Union[RecursiveSplitStrategy, Callable[..., SplitDecision]]


def run_iterative(context: DiscretizationContext, strategy: IterativeFn) -> DiscretizationContext:
    """Run a one-shot strategy; strategy errors propagate to the caller."""
    if not context.numeric_values:
        return context
    points = strategy(context)
    context.cut_points = sorted(points or [])
    return context


def _partition(rows: Sequence[DataRow], attribute_name: str, cut: float) -> Tuple[List[DataRow], List[DataRow]]:
    left: List[DataRow] = []
    right: List[DataRow] = []
    for row in rows:
        v = coerce_numeric(row.attributes.get(attribute_name))
        if v is None:
            continue
        (left if v < cut else right).append(row)
    return left, right


def run_recursive(
    context: DiscretizationContext,
    strategy: SplitFn,
    max_depth: Optional[int] = None,
) -> DiscretizationContext:
    """Top-down partitioning driven by a split criterion.

    Partitions are processed from an explicit stack, so the depth cap rather
    than the interpreter's recursion limit bounds the work. The root sits at
    depth 0 and a partition at depth >= max_depth is never split.
    """
    attr = context.attribute_name
    limit = context.recursive_config.depth_limit(max_depth)
    rows = [r for r in context.dataset.rows if coerce_numeric(r.attributes.get(attr)) is not None]
    values = context.numeric_values or sorted(coerce_numeric(r.attributes.get(attr)) for r in rows)
    if not rows or not values:
        context.cut_points = []
        return context

    found: List[float] = []
    stack: List[Tuple[List[DataRow], float, float, int]] = [(rows, values[0], values[-1], 0)]
    while stack:
        part, lower, upper, depth = stack.pop()
        if not part or upper <= lower or depth >= limit:
            continue
        candidate, should_split = strategy(part, attr, lower, upper, context.parameters)
        if not should_split or candidate is None:
            continue
        found.append(candidate)
        logger.debug("Split '%s' at %.6g (depth %d, range [%.6g, %.6g])", attr, candidate, depth, lower, upper)
        left, right = _partition(part, attr, candidate)
        # left half is popped first
        stack.append((right, candidate, upper, depth + 1))
        stack.append((left, lower, candidate, depth + 1))

    context.cut_points = normalize_cut_points(found)
    return context


def iterative_step(strategy: IterativeFn) -> Step:
    def _step(context: DiscretizationContext) -> DiscretizationContext:
        return run_iterative(context, strategy)

    _step.__name__ = f"iterative[{getattr(strategy, 'name', getattr(strategy, '__name__', 'strategy'))}]"
    return _step


def recursive_step(strategy: SplitFn, max_depth: Optional[int] = None) -> Step:
    def _step(context: DiscretizationContext) -> DiscretizationContext:
        return run_recursive(context, strategy, max_depth=max_depth)

    _step.__name__ = f"recursive[{getattr(strategy, 'name', getattr(strategy, '__name__', 'strategy'))}]"
    return _step
