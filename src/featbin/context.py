from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import polars as pl

from .dataset import DataRow, Dataset, rows_to_polars
from .exceptions import DiscretizationError
from .labels import interval_labels

ParameterValue = Union[int, float, str]

# Recognised parameter keys
NUMBER_OF_BINS = "NumberOfBins"
NUM_BINS = "numBins"
OPTIMAL_NUM_BINS = "optimalNumBins"
MIN_GAIN_THRESHOLD = "MinGainThreshold"
MAX_DEPTH = "MaxDepth"

DEFAULT_NUM_BINS = 5
DEFAULT_MAX_DEPTH = 100


def _as_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _as_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        out = float(value)
    except (TypeError, ValueError):
        return None
    return out if math.isfinite(out) else None


def normalize_cut_points(points: Iterable[float]) -> List[float]:
    """Finite, deduplicated, ascending."""
    return sorted({float(p) for p in points if p is not None and math.isfinite(float(p))})


@dataclass(frozen=True)
class BinningConfig:
    """Bin-count options for the width and frequency strategies."""

    n_bins: Optional[int] = None
    optimal_n_bins: Optional[int] = None

    @classmethod
    def from_parameters(cls, parameters: Mapping[str, Any]) -> "BinningConfig":
        explicit = _as_int(parameters.get(NUM_BINS))
        if explicit is None or explicit <= 1:
            explicit = _as_int(parameters.get(NUMBER_OF_BINS))
        return cls(n_bins=explicit, optimal_n_bins=_as_int(parameters.get(OPTIMAL_NUM_BINS)))

    def resolved_n_bins(self, default: int = DEFAULT_NUM_BINS) -> int:
        # explicit > Sturges > default
        if self.n_bins is not None and self.n_bins > 1:
            return self.n_bins
        if self.optimal_n_bins is not None and self.optimal_n_bins > 1:
            return self.optimal_n_bins
        return default


@dataclass(frozen=True)
class RecursiveConfig:
    max_depth: Optional[int] = None
    min_gain_threshold: Optional[float] = None

    @classmethod
    def from_parameters(cls, parameters: Mapping[str, Any]) -> "RecursiveConfig":
        depth = _as_int(parameters.get(MAX_DEPTH))
        return cls(
            max_depth=depth if depth is not None and depth >= 0 else None,
            min_gain_threshold=_as_float(parameters.get(MIN_GAIN_THRESHOLD)),
        )

    def depth_limit(self, default: Optional[int] = None) -> int:
        # MaxDepth parameter > driver default > 100
        if self.max_depth is not None:
            return self.max_depth
        return DEFAULT_MAX_DEPTH if default is None else default


@dataclass
class DiscretizationContext:
    """Working state for one discretize call.

    Owned by exactly one call; steps mutate it and hand it back.
    """

    dataset: Dataset
    attribute_name: str
    numeric_values: List[float] = field(default_factory=list)
    cut_points: List[float] = field(default_factory=list)
    parameters: Dict[str, ParameterValue] = field(default_factory=dict)

    @property
    def binning_config(self) -> BinningConfig:
        return BinningConfig.from_parameters(self.parameters)

    @property
    def recursive_config(self) -> RecursiveConfig:
        return RecursiveConfig.from_parameters(self.parameters)


@dataclass(frozen=True)
class DiscretizationResult:
    discretized_rows: List[DataRow]
    final_cut_points: List[float]
    original_numeric_values: List[float]
    discretized_attribute_name: str
    attribute_names: List[str] = field(default_factory=list)
    target_name: Optional[str] = None
    error: Optional[DiscretizationError] = None
    label_precision: int = 2

    @property
    def is_passthrough(self) -> bool:
        return self.error is not None or not self.original_numeric_values

    @property
    def bin_labels(self) -> List[str]:
        return interval_labels(self.final_cut_points, self.label_precision)

    @property
    def n_bins(self) -> int:
        return len(self.final_cut_points) + 1

    def to_polars(self) -> pl.DataFrame:
        return rows_to_polars(self.discretized_rows, self.attribute_names, self.target_name)
