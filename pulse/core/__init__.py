"""Core module - models and constants."""

from .models import (
    AuctionConfig,
    CurvePoint,
    CurveRegime,
    CurveSnapshot,
    CurveStatus,
    EpochParameters,
    Sale,
)
from .constants import EPS, DEFAULT_CURVE_STEPS, DEFAULT_U_MAX, DEGENERATE_WINDOW_SEC, TOKEN_DECIMALS

__all__ = [
    "AuctionConfig",
    "CurvePoint",
    "CurveRegime",
    "CurveSnapshot",
    "CurveStatus",
    "EpochParameters",
    "Sale",
    "EPS",
    "DEFAULT_CURVE_STEPS",
    "DEFAULT_U_MAX",
    "DEGENERATE_WINDOW_SEC",
    "TOKEN_DECIMALS",
]
