import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

pl = pytest.importorskip("polars", reason="polars is required for featbin tests")

from featbin.coerce import AttributeType
from featbin.dataset import Dataset


@pytest.fixture()
def ten_rows() -> Dataset:
    records = [
        {"x": i, "name": f"row{i}", "label": "lo" if i <= 5 else "hi"}
        for i in range(1, 11)
    ]
    return Dataset.from_records(records, target="label")


@pytest.fixture()
def constant_rows() -> Dataset:
    return Dataset.from_records([{"x": 7.0, "label": "a"} for _ in range(10)], target="label")


@pytest.fixture()
def mixed_rows() -> Dataset:
    # registered numeric, but two cells do not parse
    values = [1, "2,5", "n/a", 4.0, None, "6"]
    return Dataset.from_records(
        [{"x": v, "label": "a" if i < 3 else "b"} for i, v in enumerate(values)],
        target="label",
        attribute_types={"x": AttributeType.NUMERIC},
    )


@pytest.fixture(scope="session")
def wine_df() -> pl.DataFrame:
    """The 178-row wine table (13 continuous columns) with a string class label."""
    sklearn_datasets = pytest.importorskip(
        "sklearn.datasets", reason="scikit-learn is required for the wine dataset"
    )
    wine = sklearn_datasets.load_wine()
    columns = {name: wine.data[:, i].tolist() for i, name in enumerate(wine.feature_names)}
    columns["target_str"] = [f"class_{label}" for label in wine.target.tolist()]
    return pl.DataFrame(columns)
