"""
Numeric guards for untrusted annotation input
"""

import math
from typing import Any, Optional


def finite_or_default(value: Any, default: float = 0.0) -> float:
    """Coerce a value to a finite float, falling back to default"""
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def optional_number(value: Any) -> Optional[float]:
    """Return a finite float or None when the value is not numeric"""
    if isinstance(value, bool) or value is None:
        return None
    if not isinstance(value, (int, float)):
        return None
    return float(value) if math.isfinite(value) else None


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def clamp01(value: float) -> float:
    return clamp(value, 0.0, 1.0)
