from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from .context import OPTIMAL_NUM_BINS, DiscretizationContext
from .stats import distinct_count, optimal_bin_count

logger = logging.getLogger(__name__)

Step = Callable[[DiscretizationContext], DiscretizationContext]


def step_name(step: Any) -> str:
    return getattr(step, "__name__", None) or type(step).__name__


def collect_numeric_values(context: DiscretizationContext) -> DiscretizationContext:
    """Fill `numeric_values` with every coercible value of the attribute, sorted.

    Rows whose value does not coerce are skipped here and left as they are in
    the dataset.
    """
    context.numeric_values = context.dataset.numeric_values(context.attribute_name)
    logger.debug(
        "Collected %d numeric values for '%s' (%d rows)",
        len(context.numeric_values), context.attribute_name, len(context.dataset),
    )
    return context


def compute_optimal_bin_count(context: DiscretizationContext) -> DiscretizationContext:
    """Store the Sturges bin count under `optimalNumBins`."""
    values = context.numeric_values
    bins = optimal_bin_count(len(values), distinct_count(values))
    context.parameters[OPTIMAL_NUM_BINS] = bins
    logger.debug("Optimal bin count for '%s': %d", context.attribute_name, bins)
    return context


def set_parameters(values: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> Step:
    """Return a step that writes the given options into `context.parameters`."""
    updates = dict(values or {})
    updates.update(kwargs)

    def _set(context: DiscretizationContext) -> DiscretizationContext:
        context.parameters.update(updates)
        return context

    _set.__name__ = "set_parameters(" + ", ".join(f"{k}={v!r}" for k, v in updates.items()) + ")"
    return _set
