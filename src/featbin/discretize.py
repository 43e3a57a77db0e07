from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Sequence

import polars as pl

from .base import Transformer, _ensure_polars_df
from .coerce import AttributeType, coerce_numeric
from .context import MIN_GAIN_THRESHOLD, NUM_BINS
from .dataset import Dataset
from .drivers import iterative_step, recursive_step
from .labels import assign_bin, bin_label, interval_labels
from .pipeline import Pipeline
from .steps import Step, collect_numeric_values, compute_optimal_bin_count, set_parameters
from .strategies import (
    EqualFrequencyStrategy,
    EqualWidthStrategy,
    SupervisedInformationDensity,
    UnsupervisedInformationDensity,
)


def _options_step(**options: Any) -> List[Step]:
    given = {k: v for k, v in options.items() if v is not None}
    return [set_parameters(given)] if given else []


def equal_width_pipeline(n_bins: Optional[int] = None, label_precision: int = 2) -> Pipeline:
    steps = _options_step(**{NUM_BINS: n_bins}) + [
        collect_numeric_values,
        compute_optimal_bin_count,
        iterative_step(EqualWidthStrategy()),
    ]
    return Pipeline("Equal-Width Binning", steps, label_precision=label_precision)


def equal_frequency_pipeline(n_bins: Optional[int] = None, label_precision: int = 2) -> Pipeline:
    steps = _options_step(**{NUM_BINS: n_bins}) + [
        collect_numeric_values,
        compute_optimal_bin_count,
        iterative_step(EqualFrequencyStrategy()),
    ]
    return Pipeline("Equal-Frequency Binning", steps, label_precision=label_precision)


def supervised_density_pipeline(
    max_depth: Optional[int] = None,
    min_gain_threshold: Optional[float] = None,
    label_precision: int = 2,
) -> Pipeline:
    steps = _options_step(**{MIN_GAIN_THRESHOLD: min_gain_threshold}) + [
        collect_numeric_values,
        recursive_step(SupervisedInformationDensity(), max_depth=max_depth),
    ]
    return Pipeline("Supervised Information Density", steps, label_precision=label_precision)


def unsupervised_density_pipeline(
    max_depth: Optional[int] = None,
    min_gain_threshold: Optional[float] = None,
    label_precision: int = 2,
) -> Pipeline:
    steps = _options_step(**{MIN_GAIN_THRESHOLD: min_gain_threshold}) + [
        collect_numeric_values,
        recursive_step(UnsupervisedInformationDensity(), max_depth=max_depth),
    ]
    return Pipeline("Unsupervised Information Density", steps, label_precision=label_precision)


PIPELINES: Dict[str, Callable[..., Pipeline]] = {
    "equal_width": equal_width_pipeline,
    "equal_frequency": equal_frequency_pipeline,
    "supervised_density": supervised_density_pipeline,
    "unsupervised_density": unsupervised_density_pipeline,
}

SUPERVISED_METHODS = {"supervised_density"}


def make_pipeline(method: str, **options: Any) -> Pipeline:
    try:
        factory = PIPELINES[method]
    except KeyError:
        raise ValueError(f"Unknown discretization method '{method}'. Choose one of {sorted(PIPELINES)}") from None
    return factory(**options)


def _numeric_attributes(dataset: Dataset, columns: Optional[Sequence[str]]) -> List[str]:
    if columns is not None:
        return list(columns)
    return [c for c in dataset.attribute_names if dataset.attribute_types.get(c) == AttributeType.NUMERIC]


class PipelineDiscretizer(Transformer):
    """Frame-level wrapper: fit one discretization pipeline per numeric column.

    Learned cut points are kept in `bins_`; columns the pipeline could not
    discretize get an empty list and the reason in `skipped_`. transform adds
    `{column}{suffix}` holding the interval label (or the bin index with
    labels_as_int=True).
    """

    default_suffix = "__bin"

    def __init__(
        self,
        method: str = "equal_width",
        columns: Optional[Sequence[str]] = None,
        target: Optional[str] = None,
        n_bins: Optional[int] = None,
        max_depth: Optional[int] = None,
        min_gain_threshold: Optional[float] = None,
        drop_original: bool = True,
        labels_as_int: bool = False,
        label_precision: int = 2,
        suffix: Optional[str] = None,
    ) -> None:
        if method not in PIPELINES:
            raise ValueError(f"Unknown discretization method '{method}'. Choose one of {sorted(PIPELINES)}")
        if method in SUPERVISED_METHODS and target is None:
            raise ValueError(f"method '{method}' requires a target column")
        self.method = method
        self.columns = None if columns is None else list(columns)
        self.target = target
        self.n_bins = n_bins
        self.max_depth = max_depth
        self.min_gain_threshold = min_gain_threshold
        self.drop_original = drop_original
        self.labels_as_int = labels_as_int
        self.label_precision = int(label_precision)
        self.suffix = self.default_suffix if suffix is None else suffix
        self.bins_: Dict[str, List[float]] = {}
        self.skipped_: Dict[str, str] = {}

    def _pipeline(self) -> Pipeline:
        if self.method in ("equal_width", "equal_frequency"):
            return make_pipeline(self.method, n_bins=self.n_bins, label_precision=self.label_precision)
        return make_pipeline(
            self.method,
            max_depth=self.max_depth,
            min_gain_threshold=self.min_gain_threshold,
            label_precision=self.label_precision,
        )

    def fit(self, df: pl.DataFrame) -> "PipelineDiscretizer":
        df = _ensure_polars_df(df)
        if self.target is not None and self.target not in df.columns:
            raise ValueError(f"target column '{self.target}' not found")
        dataset = Dataset.from_polars(df, target=self.target)
        cols = _numeric_attributes(dataset, self.columns)
        self.feature_names_in_ = cols
        self.bins_.clear()
        self.skipped_.clear()
        pipeline = self._pipeline()
        for col in cols:
            result = pipeline.discretize(dataset, col)
            self.bins_[col] = list(result.final_cut_points)
            if result.error is not None:
                self.skipped_[col] = str(result.error)
        self.is_fitted_ = True
        return self

    def _encode(self, cut_points: List[float]) -> Callable[[Any], Any]:
        precision = self.label_precision
        as_int = self.labels_as_int

        def _apply(value: Any) -> Any:
            v = coerce_numeric(value)
            if v is None:
                return None
            return assign_bin(v, cut_points) if as_int else bin_label(v, cut_points, precision)

        return _apply

    def _bin_expr(self, col: str, dtype: pl.DataType, cut_points: List[float]) -> pl.Expr:
        out_dtype = pl.Int64 if self.labels_as_int else pl.Utf8
        if self.labels_as_int:
            labels = [str(i) for i in range(len(cut_points) + 1)]
        else:
            labels = interval_labels(cut_points, self.label_precision)
        if not dtype.is_numeric() or len(set(labels)) < len(labels):
            # text cells need coercion; cut() also rejects labels that collide at this precision
            return pl.col(col).map_elements(self._encode(cut_points), return_dtype=out_dtype)
        x = pl.col(col).cast(pl.Float64)
        if cut_points:
            binned = x.cut(cut_points, labels=labels, left_closed=True).cast(pl.Utf8)
        else:
            binned = pl.lit(labels[0])
        return pl.when(x.is_finite()).then(binned).otherwise(None).cast(out_dtype)

    def transform(self, df: pl.DataFrame) -> pl.DataFrame:
        self._check_fitted()
        df = _ensure_polars_df(df)
        out = df
        for col, cuts in self.bins_.items():
            if col in self.skipped_:
                continue
            new_col = f"{col}{self.suffix}"
            out = out.with_columns(self._bin_expr(col, df.schema[col], cuts).alias(new_col))
            if self.drop_original:
                out = out.drop(col)
        self.feature_names_out_ = list(out.columns)
        return out


class EqualWidthDiscretizer(PipelineDiscretizer):
    default_suffix = "__wbin"

    def __init__(self, columns: Optional[Sequence[str]] = None, n_bins: Optional[int] = None, **kwargs: Any) -> None:
        super().__init__(method="equal_width", columns=columns, n_bins=n_bins, **kwargs)


class EqualFrequencyDiscretizer(PipelineDiscretizer):
    default_suffix = "__qbin"

    def __init__(self, columns: Optional[Sequence[str]] = None, n_bins: Optional[int] = None, **kwargs: Any) -> None:
        super().__init__(method="equal_frequency", columns=columns, n_bins=n_bins, **kwargs)


class SupervisedDensityDiscretizer(PipelineDiscretizer):
    default_suffix = "__sidbin"

    def __init__(self, target: str, columns: Optional[Sequence[str]] = None, **kwargs: Any) -> None:
        super().__init__(method="supervised_density", columns=columns, target=target, **kwargs)


class UnsupervisedDensityDiscretizer(PipelineDiscretizer):
    default_suffix = "__uidbin"

    def __init__(self, columns: Optional[Sequence[str]] = None, **kwargs: Any) -> None:
        super().__init__(method="unsupervised_density", columns=columns, **kwargs)
