from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from .coerce import coerce_numeric
from .context import DiscretizationContext, DiscretizationResult, normalize_cut_points
from .dataset import DataRow, Dataset
from .exceptions import (
    AttributeNotDiscretizableError,
    DiscretizationError,
    InvalidArgumentError,
    StepExecutionError,
)
from .labels import bin_label
from .steps import Step, step_name

logger = logging.getLogger(__name__)


class Pipeline:
    """Ordered discretization steps run against one fresh context per call.

    Each step takes and returns a DiscretizationContext. After the last step
    every coercible value of the attribute is replaced by its bin label.
    """

    def __init__(self, name: str, steps: Sequence[Step], label_precision: int = 2) -> None:
        if steps is None:
            raise InvalidArgumentError("steps cannot be None")
        for step in steps:
            if not callable(step):
                raise InvalidArgumentError(f"step {step!r} is not callable")
        self.name = name or "unnamed"
        self.steps = list(steps)
        self.label_precision = int(label_precision)

    def __repr__(self) -> str:
        names = ", ".join(step_name(s) for s in self.steps)
        return f"Pipeline({self.name!r}, [{names}])"

    def discretize(
        self,
        dataset: Dataset,
        attribute_name: str,
        initial_parameters: Optional[Mapping[str, Any]] = None,
    ) -> DiscretizationResult:
        if dataset is None:
            raise InvalidArgumentError("dataset cannot be None")
        if not attribute_name or not str(attribute_name).strip():
            raise InvalidArgumentError("attribute name cannot be empty")

        logger.info("Discretizing '%s' with '%s'", attribute_name, self.name)

        if attribute_name not in dataset.attribute_types:
            return self._passthrough(
                dataset, attribute_name, AttributeNotDiscretizableError(attribute_name, "not in the type registry")
            )
        if not dataset.is_numeric(attribute_name):
            kind = dataset.attribute_types[attribute_name].value
            return self._passthrough(
                dataset, attribute_name, AttributeNotDiscretizableError(attribute_name, f"type is {kind}")
            )

        context = DiscretizationContext(
            dataset=dataset,
            attribute_name=attribute_name,
            parameters=dict(initial_parameters or {}),
        )
        for step in self.steps:
            name = step_name(step)
            logger.debug("  -> step %s", name)
            try:
                result = step(context)
                if result is None:
                    return self._passthrough(dataset, attribute_name, StepExecutionError(name))
                if not isinstance(result, DiscretizationContext):
                    raise TypeError(f"expected a DiscretizationContext, got {type(result).__name__}")
                result.cut_points = normalize_cut_points(result.cut_points)
            except Exception as exc:
                return self._passthrough(dataset, attribute_name, StepExecutionError(name, exc))
            context = result

        if not context.numeric_values:
            return self._passthrough(
                dataset, attribute_name, AttributeNotDiscretizableError(attribute_name, "no numeric values")
            )

        rows = [self._discretize_row(row, attribute_name, context.cut_points) for row in dataset.rows]
        logger.info(
            "Discretized '%s' into %d bins: %s", attribute_name, len(context.cut_points) + 1, context.cut_points
        )
        return DiscretizationResult(
            discretized_rows=rows,
            final_cut_points=list(context.cut_points),
            original_numeric_values=list(context.numeric_values),
            discretized_attribute_name=attribute_name,
            attribute_names=list(dataset.attribute_names),
            target_name=dataset.target_name,
            label_precision=self.label_precision,
        )

    def _discretize_row(self, row: DataRow, attribute_name: str, cut_points: Sequence[float]) -> DataRow:
        out = row.copy()
        value = coerce_numeric(row.attributes.get(attribute_name))
        if value is not None:
            out.attributes[attribute_name] = bin_label(value, cut_points, self.label_precision)
        return out

    def _passthrough(self, dataset: Dataset, attribute_name: str, error: DiscretizationError) -> DiscretizationResult:
        if isinstance(error, StepExecutionError):
            logger.warning("Discretization of '%s' with '%s' aborted: %s", attribute_name, self.name, error)
        else:
            logger.info("Skipping '%s': %s", attribute_name, error)
        return DiscretizationResult(
            discretized_rows=[row.copy() for row in dataset.rows],
            final_cut_points=[],
            original_numeric_values=[],
            discretized_attribute_name=attribute_name,
            attribute_names=list(dataset.attribute_names),
            target_name=dataset.target_name,
            error=error,
            label_precision=self.label_precision,
        )
