from __future__ import annotations

import locale
import math
import numbers
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Optional


class AttributeType(str, Enum):
    NUMERIC = "numeric"
    TEXT = "text"
    BOOLEAN = "boolean"


def _finite(value: float) -> Optional[float]:
    return value if math.isfinite(value) else None


def _parse_text(text: str) -> Optional[float]:
    text = text.strip()
    if not text or "_" in text:
        return None
    try:
        return _finite(float(text))
    except ValueError:
        pass
    try:
        return _finite(locale.atof(text))
    except ValueError:
        pass
    # European decimal notation, e.g. "3,75"
    if "," in text:
        try:
            return _finite(float(text.replace(",", ".")))
        except ValueError:
            return None
    return None


def coerce_numeric(value: Any) -> Optional[float]:
    """Convert an attribute value to a finite float, or return None.

    Native numbers, Decimal included, are accepted directly (booleans are not
    numbers here). Text is tried as a plain float literal, then with the host locale, then
    with a comma decimal separator; digit-group underscores ("1_000") are
    rejected. Never raises.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (numbers.Real, Decimal)):
        try:
            return _finite(float(value))
        except (TypeError, ValueError, OverflowError):
            return None
    if isinstance(value, bytes):
        try:
            value = value.decode()
        except UnicodeDecodeError:
            return None
    if isinstance(value, str):
        return _parse_text(value)
    return None


def is_numeric_value(value: Any) -> bool:
    return coerce_numeric(value) is not None


def infer_attribute_type(values: Iterable[Any]) -> AttributeType:
    """Classify a column from its raw values.

    Empty cells (None or blank text) are ignored. A column with no usable
    values is TEXT.
    """
    seen = False
    all_bool = True
    all_numeric = True
    for v in values:
        if v is None or (isinstance(v, str) and not v.strip()):
            continue
        seen = True
        if not isinstance(v, bool):
            all_bool = False
        if coerce_numeric(v) is None:
            all_numeric = False
        if not all_bool and not all_numeric:
            break
    if not seen:
        return AttributeType.TEXT
    if all_bool:
        return AttributeType.BOOLEAN
    if all_numeric:
        return AttributeType.NUMERIC
    return AttributeType.TEXT
