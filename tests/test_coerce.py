from decimal import Decimal

import pytest

np = pytest.importorskip("numpy")

from featbin.coerce import AttributeType, coerce_numeric, infer_attribute_type, is_numeric_value


@pytest.mark.parametrize(
    "value, expected",
    [
        (3, 3.0),
        (2.5, 2.5),
        ("4.25", 4.25),
        (" 7 ", 7.0),
        ("3,75", 3.75),
        ("-1,5", -1.5),
        (b"2.5", 2.5),
    ],
)
def test_coerce_numeric_accepts_numbers_and_text(value, expected) -> None:
    assert coerce_numeric(value) == pytest.approx(expected)


@pytest.mark.parametrize(
    "value",
    [None, "", "   ", "abc", "1,2,3", "1_000", "2_5,0", True, False, "nan", float("inf"), object()],
)
def test_coerce_numeric_rejects_without_raising(value) -> None:
    assert coerce_numeric(value) is None
    assert not is_numeric_value(value)


def test_coerce_numeric_accepts_numpy_scalars() -> None:
    assert coerce_numeric(np.int64(4)) == 4.0
    assert coerce_numeric(np.float32(0.5)) == pytest.approx(0.5)


def test_coerce_numeric_accepts_decimals() -> None:
    assert coerce_numeric(Decimal("1.5")) == 1.5
    assert coerce_numeric(Decimal("-20")) == -20.0
    assert coerce_numeric(Decimal("NaN")) is None
    assert coerce_numeric(Decimal("sNaN")) is None


def test_infer_attribute_type() -> None:
    assert infer_attribute_type([1, 2.5, "3,5", None, ""]) == AttributeType.NUMERIC
    assert infer_attribute_type([True, False, None]) == AttributeType.BOOLEAN
    assert infer_attribute_type(["a", 1]) == AttributeType.TEXT
    assert infer_attribute_type([None, ""]) == AttributeType.TEXT
    assert infer_attribute_type([]) == AttributeType.TEXT
