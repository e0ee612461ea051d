"""Permissive numeric coercion for form fields.

Form values arrive as text that may be empty, partially typed or garbage. The
helpers here mirror a lenient ``parseFloat``: the longest numeric prefix wins
and anything unusable becomes the supplied default instead of raising.
"""

from __future__ import annotations

import math
import re
from typing import Any, Optional

_NUMERIC_PREFIX = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def _leading_number(text: str) -> Optional[float]:
    match = _NUMERIC_PREFIX.match(text)
    if not match:
        return None
    return float(match.group(0))


def to_float(v: Any, default: float = 0.0) -> float:
    if v is None or isinstance(v, bool):
        return default
    if isinstance(v, (int, float)):
        result = float(v)
    else:
        text = str(v).strip()
        if not text or text.lower() == "null":
            return default
        parsed = _leading_number(text)
        if parsed is None:
            return default
        result = parsed
    if math.isnan(result) or math.isinf(result):
        return default
    return result


def finite_or(value: float, default: float = 0.0) -> float:
    """Pass finite values through; overflowed or undefined results become ``default``."""

    return value if math.isfinite(value) else default


def to_int(v: Any, default: int = 0) -> int:
    value = to_float(v, default=float("nan"))
    if math.isnan(value):
        return default
    return int(value)


def to_float_or(v: Any, fallback: float) -> float:
    """Coerce like ``to_float`` but treat zero as missing, as ``parseFloat(x) || fallback`` does."""

    value = to_float(v)
    return value if value else fallback


def to_int_or(v: Any, fallback: int) -> int:
    value = to_int(v)
    return value if value else fallback


def to_str(v) -> str:
    return "" if v is None else str(v)
