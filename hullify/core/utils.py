import math
import re
from datetime import date
from typing import Any

_MONEY_JUNK = re.compile(r"[^\d.\-]")
_MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

def num(x: Any, default: float | None = None) -> float | None:
    """Finite float from numbers or numeric-looking strings, else `default`."""
    if x is None or isinstance(x, bool):
        return default
    try:
        n = float(x.strip()) if isinstance(x, str) else float(x)
    except (TypeError, ValueError):
        return default
    return n if math.isfinite(n) else default

def clamp(n: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, n))

def money(n: float) -> str:
    """Whole-dollar display string, e.g. 18500 -> "$18,500"."""
    return f"${int(round(n)):,}"

def money_num(s: Any) -> float | None:
    """
    Tolerant parse of money-formatted values coming back from the estimator:
    "$68,500" -> 68500.0, "USD 12,000.50" -> 12000.5, 900 -> 900.0.
    Returns None for anything without a finite number in it.
    """
    if s is None or isinstance(s, bool):
        return None
    if isinstance(s, (int, float)):
        return float(s) if math.isfinite(s) else None
    if not isinstance(s, str):
        return None
    cleaned = _MONEY_JUNK.sub("", s)
    if not cleaned:
        return None
    try:
        n = float(cleaned)
    except ValueError:
        return None
    return n if math.isfinite(n) else None

def normalize_text(s: Any) -> str:
    """Trim, lowercase and collapse whitespace so lookups are stable."""
    return " ".join(str(s).strip().lower().split())

def trailing_months(today: date, months: int = 12) -> list[tuple[int, int]]:
    """(year, month) pairs for the trailing `months` months ending at `today`'s month."""
    out = []
    for back in range(months - 1, -1, -1):
        year = today.year + (today.month - back - 1) // 12
        month = (today.month - back - 1) % 12 + 1
        out.append((year, month))
    return out

def month_label(month: int) -> str:
    return _MONTHS[month - 1]
