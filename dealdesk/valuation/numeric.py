import math
from typing import Any


def to_optional_number(value: Any) -> float | None:
    """Coerce a loosely-typed input to a finite float, or None when missing/invalid.

    Zero is a real value and is kept; empty strings, booleans and anything that
    does not parse to a finite number come back as None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def to_number(value: Any, default: float = 0.0) -> float:
    """Like to_optional_number but falls back to `default` instead of None."""
    number = to_optional_number(value)
    return default if number is None else number


def clamp(n: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, n))


def round_half_up(x: float) -> int:
    """Round .5 toward positive infinity (money figures never use banker's rounding)."""
    return math.floor(x + 0.5)


def format_currency(n: Any) -> str:
    """USD with no decimals, e.g. 1234.6 -> '$1,235'. Display only."""
    amount = round_half_up(to_number(n))
    if amount < 0:
        return f"-${-amount:,}"
    return f"${amount:,}"


def percent_delta(value: Any, asking: Any) -> float:
    v = to_number(value)
    a = to_number(asking)
    if not a:
        return 0.0
    return (v - a) / a * 100


def round_down_to(n: Any, step: Any = 5000) -> float:
    x = to_number(n)
    s = to_number(step, 1.0)
    if s <= 0:
        return float(math.floor(x))
    return float(math.floor(x / s) * s)
