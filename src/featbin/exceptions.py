from __future__ import annotations

from typing import Optional


class DiscretizationError(Exception):
    """Base class for every error raised or reported by featbin."""


class InvalidArgumentError(DiscretizationError, ValueError):
    """Structurally invalid call (missing dataset, blank attribute name)."""


class AttributeNotDiscretizableError(DiscretizationError):
    """Attribute is unknown, not numeric, or has no numeric values."""

    def __init__(self, attribute: str, reason: str) -> None:
        super().__init__(f"attribute '{attribute}' is not discretizable: {reason}")
        self.attribute = attribute
        self.reason = reason


class StepExecutionError(DiscretizationError):
    """A pipeline step raised (or returned no context)."""

    def __init__(self, step_name: str, cause: Optional[BaseException] = None) -> None:
        detail = f": {cause}" if cause is not None else ": step returned no context"
        super().__init__(f"step '{step_name}' failed{detail}")
        self.step_name = step_name
        self.cause = cause
