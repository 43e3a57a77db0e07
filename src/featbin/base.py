from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

import polars as pl


def _from_pandas(df: Any) -> pl.DataFrame:
    try:
        return pl.from_pandas(df)
    except ImportError:
        # no pyarrow: go through plain Python lists
        return pl.DataFrame({str(c): df[c].tolist() for c in df.columns}, strict=False)


def _ensure_polars_df(df: Any) -> pl.DataFrame:
    """Accept a polars frame, a LazyFrame, a column mapping or a pandas frame."""
    if isinstance(df, pl.DataFrame):
        return df
    if isinstance(df, pl.LazyFrame):
        return df.collect()
    if isinstance(df, Mapping):
        return pl.DataFrame(dict(df), strict=False)
    if type(df).__module__.split(".")[0] == "pandas":
        try:
            import pandas as pd  # noqa: F401
        except ImportError as exc:  # pragma: no cover
            raise TypeError("pandas input needs the optional extra: pip install featbin[pandas]") from exc
        return _from_pandas(df)
    raise TypeError(f"Expected a polars.DataFrame, got {type(df).__name__}")


class Transformer:
    """fit/transform base for column binners.

    Learned state is the cut-point map ``bins_`` (column -> sorted cut
    points) plus ``skipped_`` (column -> reason it was left untouched).
    Both round-trip through to_dict/from_dict as plain lists and strings.
    """

    feature_names_in_: Optional[List[str]] = None
    feature_names_out_: Optional[List[str]] = None
    is_fitted_: bool = False

    def fit(self, df: pl.DataFrame) -> "Transformer":  # pragma: no cover
        raise NotImplementedError

    def transform(self, df: pl.DataFrame) -> pl.DataFrame:  # pragma: no cover
        raise NotImplementedError

    def fit_transform(self, df: pl.DataFrame) -> pl.DataFrame:
        return self.fit(df).transform(df)

    def _check_fitted(self) -> None:
        if not self.is_fitted_:
            raise RuntimeError("Call fit before transform")

    def get_feature_names_out(self) -> List[str]:
        return list(self.feature_names_out_ or [])

    def to_dict(self) -> Dict[str, Any]:
        self._check_fitted()
        return {
            "__class__": type(self).__name__,
            "bins_": {col: [float(c) for c in cuts] for col, cuts in getattr(self, "bins_", {}).items()},
            "skipped_": dict(getattr(self, "skipped_", {})),
            "feature_names_in_": list(self.feature_names_in_ or []),
        }

    def from_dict(self, state: Mapping[str, Any]) -> "Transformer":
        exported = state.get("__class__")
        if exported is not None and exported != type(self).__name__:
            raise ValueError(f"state was exported from {exported}, not {type(self).__name__}")
        self.bins_ = {str(col): sorted(float(c) for c in cuts) for col, cuts in state.get("bins_", {}).items()}
        self.skipped_ = {str(col): str(why) for col, why in state.get("skipped_", {}).items()}
        self.feature_names_in_ = list(state.get("feature_names_in_", self.bins_))
        self.is_fitted_ = True
        return self
