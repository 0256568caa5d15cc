from __future__ import annotations

from typing import Any, Optional, List


def to_float(x: Any) -> Optional[float]:
    if x is None:
        return None

    try:
        return float(x)

    except (TypeError, ValueError):
        return None


def mul_all(nums: List[float]) -> float:
    out = 1.0
    for n in nums:
        out *= n

    return out


def is_blank(x: Any) -> bool:
    return x is None or (isinstance(x, str) and x == "")
