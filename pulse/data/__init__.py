"""Boundary layer: numeric normalization and epoch derivation."""

from .normalize import descale, parse_u256, scale_integer_string, to_human
from .snapshot import epoch_from_sales

__all__ = [
    "descale",
    "parse_u256",
    "scale_integer_string",
    "to_human",
    "epoch_from_sales",
]
