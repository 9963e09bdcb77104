from __future__ import annotations

import math
from typing import Optional


def safe_div(numerator: Optional[float], denominator: Optional[float]) -> Optional[float]:
    """Quotient, or None when an operand is missing or the result is not a finite number."""
    if numerator is None or denominator is None or denominator == 0:
        return None
    value = numerator / denominator
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def safe_mul(a: Optional[float], b: Optional[float]) -> Optional[float]:
    if a is None or b is None:
        return None
    return a * b


__all__ = ["safe_div", "safe_mul"]
