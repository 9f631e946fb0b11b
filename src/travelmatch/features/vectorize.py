"""
Attribute vectorizer.

Turns a preference record or a destination record into numbers over the fixed
dimension set (`DIMENSIONS`):
- `raw_ratings`: the 1..5 ratings as floats, with anything unusable read as 0
- `normalize`: rescale raw ratings with `(v - 1) / 4`

Records may be plain mappings, Pydantic models, or any object exposing the dimension
names as attributes. Caller data quality varies, so nothing here raises on bad values.
"""

from __future__ import annotations

import math
import numbers
from decimal import Decimal
from typing import Any, Mapping

from travelmatch.domain.models import DIMENSIONS

RAW_MIN = 1.0
RAW_SPAN = 4.0


def read_field(record: Any, *names: str) -> Any:
    """Return the first non-None value among `names` on a mapping or attribute object."""
    if record is None:
        return None
    for name in names:
        if isinstance(record, Mapping):
            value = record.get(name)
        else:
            value = getattr(record, name, None)
        if value is not None:
            return value
    return None


def numeric_or_zero(value: Any) -> float:
    """Return `value` as a finite float, or 0.0 for missing/non-numeric/NaN/infinite values.

    Any real number counts (`Decimal`, `Fraction`, numpy scalars); `bool` does not.
    """
    if isinstance(value, bool) or not isinstance(value, (numbers.Real, Decimal)):
        return 0.0
    if isinstance(value, Decimal) and not value.is_finite():
        return 0.0
    value = float(value)
    if not math.isfinite(value):
        return 0.0
    return value


def raw_ratings(record: Any) -> dict[str, float]:
    """Extract the six raw ratings from a record (missing dimensions read as 0)."""
    return {d: numeric_or_zero(read_field(record, d)) for d in DIMENSIONS}


def normalize(raw_attributes: Any) -> dict[str, float]:
    """Rescale raw 1..5 ratings into 0..1 with `(v - 1) / 4`.

    A missing or unusable dimension reads as raw 0 and therefore normalizes to -0.25.
    That value is kept as-is for parity with stored recommendations; it may warrant
    clamping to 0 in a future revision. Downstream scorers clamp their own outputs.
    """
    raw = raw_ratings(raw_attributes)
    return {d: (v - RAW_MIN) / RAW_SPAN for d, v in raw.items()}


def missing_dimensions(record: Any) -> list[str]:
    """List dimensions that will be defaulted to 0 for this record."""
    return [d for d in DIMENSIONS if numeric_or_zero(read_field(record, d)) == 0.0]
