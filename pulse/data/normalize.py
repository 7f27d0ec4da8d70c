"""Normalization of on-chain numeric shapes.

Starknet returns the same logical quantity as u256 structs, ``(low, high)``
tuples, hex strings or plain integers depending on the call path. Everything
is funnelled through ``parse_u256`` here so the curve math only ever sees
plain numbers in human units.
"""

from decimal import Decimal
from typing import Any, Mapping

from pulse.core.constants import TOKEN_DECIMALS, U128


def _parse_scalar(value: Any) -> int:
    """Parse a single integer-like value."""
    if isinstance(value, bool):
        raise ValueError(f"Cannot parse boolean as integer: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, Decimal):
        if value != value.to_integral_value():
            raise ValueError(f"Expected an integer, got {value}")
        return int(value)
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"Expected an integer, got {value}")
        return int(value)
    if isinstance(value, str):
        s = value.strip()
        if not s:
            raise ValueError("Cannot parse empty string as integer")
        if s.lower().startswith("0x"):
            return int(s, 16)
        return int(s, 10)
    raise ValueError(f"Unsupported numeric value: {value!r}")


def _combine_limbs(low: Any, high: Any) -> int:
    """Join u128 limbs into one u256; limbs must not be negative."""
    low_n, high_n = _parse_scalar(low), _parse_scalar(high)
    if low_n < 0 or high_n < 0:
        raise ValueError(f"u256 limbs cannot be negative: low={low_n}, high={high_n}")
    return low_n + high_n * U128


def parse_u256(value: Any) -> int:
    """
    Coerce any u256-ish input into an int.

    Accepts ints, decimal or ``0x`` hex strings, Decimals, ``{low, high}``
    mappings, ``(low, high)`` sequences and ``{raw|value|dec: ...}`` wrappers.

    Raises:
        ValueError: If the value cannot be interpreted
    """
    if isinstance(value, Mapping):
        if "low" in value and "high" in value:
            return _combine_limbs(value["low"], value["high"])
        for key in ("raw", "value", "dec"):
            if value.get(key) is not None:
                return parse_u256(value[key])
        raise ValueError(f"Unsupported u256 mapping: {dict(value)!r}")

    if isinstance(value, (list, tuple)):
        if len(value) < 2:
            raise ValueError(f"u256 tuple needs (low, high), got {value!r}")
        return _combine_limbs(value[0], value[1])

    n = _parse_scalar(value)
    if n < 0:
        raise ValueError(f"u256 cannot be negative: {n}")
    return n


def descale(value: Any, decimals: int = TOKEN_DECIMALS) -> Decimal:
    """Convert a raw fixed-point amount to an exact Decimal in human units."""
    # String construction keeps every digit; arithmetic would round to context precision
    return Decimal(scale_integer_string(str(parse_u256(value)), decimals))


def to_human(value: Any, decimals: int = TOKEN_DECIMALS) -> float:
    """Convert a raw fixed-point amount to a float in human units."""
    return float(descale(value, decimals))


def scale_integer_string(int_str: str, decimals: int) -> str:
    """Insert a decimal point ``decimals`` digits from the right (no rounding)."""
    s = str(int_str or "").lstrip("0") or "0"
    if decimals <= 0:
        return s
    if len(s) <= decimals:
        return "0." + s.rjust(decimals, "0")
    i = len(s) - decimals
    return f"{s[:i]}.{s[i:]}"
