from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

import polars as pl

from .base import _ensure_polars_df
from .coerce import AttributeType, coerce_numeric, infer_attribute_type

logger = logging.getLogger(__name__)


@dataclass
class DataRow:
    attributes: Dict[str, Any]
    target: str = ""

    def copy(self) -> "DataRow":
        return DataRow(dict(self.attributes), self.target)


@dataclass
class Dataset:
    """Rows with a target label and a per-attribute type registry.

    Treated as read-only by the discretization engine; every result carries
    copies of the rows.
    """

    rows: List[DataRow] = field(default_factory=list)
    attribute_names: List[str] = field(default_factory=list)
    attribute_types: Dict[str, AttributeType] = field(default_factory=dict)
    target_name: Optional[str] = None

    def __len__(self) -> int:
        return len(self.rows)

    def is_numeric(self, attribute: str) -> bool:
        return self.attribute_types.get(attribute) == AttributeType.NUMERIC

    def numeric_values(self, attribute: str) -> List[float]:
        """Coercible values of `attribute`, sorted ascending, duplicates kept."""
        values: List[float] = []
        for row in self.rows:
            v = coerce_numeric(row.attributes.get(attribute))
            if v is not None:
                values.append(v)
        values.sort()
        return values

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        target: Optional[str] = None,
        attribute_types: Optional[Mapping[str, AttributeType]] = None,
    ) -> "Dataset":
        """Build a dataset from dict-like records.

        Attribute order follows first appearance. Types not given explicitly
        are inferred from the values.
        """
        rows: List[DataRow] = []
        names: List[str] = []
        seen = set()
        for rec in records:
            attrs = {k: v for k, v in rec.items() if k != target}
            label = rec.get(target) if target is not None else None
            rows.append(DataRow(attrs, "" if label is None else str(label)))
            for k in attrs:
                if k not in seen:
                    seen.add(k)
                    names.append(k)
        types: Dict[str, AttributeType] = dict(attribute_types or {})
        for name in names:
            if name not in types:
                types[name] = infer_attribute_type(r.attributes.get(name) for r in rows)
        return cls(rows=rows, attribute_names=names, attribute_types=types, target_name=target)

    @classmethod
    def from_polars(cls, df: Any, target: Optional[str] = None) -> "Dataset":
        """Build a dataset from a polars (or pandas) frame.

        With `target=None` every column is an attribute. Numeric dtypes register as
        NUMERIC, Boolean as BOOLEAN; text columns are NUMERIC only when every
        non-empty cell coerces to a number.
        """
        df = _ensure_polars_df(df)
        if df.width == 0:
            return cls()
        if target is not None and target not in df.columns:
            raise ValueError(f"target column '{target}' not found")
        names = [c for c in df.columns if c != target]
        types: Dict[str, AttributeType] = {}
        for name in names:
            dtype = df.schema[name]
            if dtype == pl.Boolean:
                types[name] = AttributeType.BOOLEAN
            elif dtype.is_numeric():
                types[name] = AttributeType.NUMERIC
            else:
                types[name] = infer_attribute_type(df.get_column(name).to_list())
        rows: List[DataRow] = []
        for rec in df.iter_rows(named=True):
            label = rec.pop(target) if target is not None else None
            rows.append(DataRow(rec, "" if label is None else str(label)))
        return cls(rows=rows, attribute_names=names, attribute_types=types, target_name=target)

    def to_polars(self) -> pl.DataFrame:
        return rows_to_polars(self.rows, self.attribute_names, self.target_name)


def rows_to_polars(rows: Sequence[DataRow], attribute_names: Sequence[str], target_name: Optional[str]) -> pl.DataFrame:
    columns = [
        pl.Series(name, [r.attributes.get(name) for r in rows], strict=False)
        for name in attribute_names
    ]
    if target_name is not None:
        columns.append(pl.Series(target_name, [r.target for r in rows], dtype=pl.Utf8))
    return pl.DataFrame(columns)


def read_csv(
    path: Union[str, Path],
    target: Optional[str] = None,
    separator: str = ",",
    infer_schema_length: int = 100,
) -> Dataset:
    """Load a delimited text file into a Dataset (target defaults to the last column)."""
    df = pl.read_csv(path, separator=separator, infer_schema_length=infer_schema_length)
    if target is None and df.width > 0:
        target = df.columns[-1]
    dataset = Dataset.from_polars(df, target=target)
    logger.info(
        "Loaded %s: %d rows, %d attributes, target=%r",
        path, len(dataset), len(dataset.attribute_names), dataset.target_name,
    )
    return dataset
