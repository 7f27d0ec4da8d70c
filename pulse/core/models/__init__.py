"""Core data models for Pulse Curve."""

from .epoch import EpochParameters, CurveRegime
from .curve import CurvePoint, CurveSnapshot, CurveStatus
from .auction import AuctionConfig, Sale

__all__ = [
    "EpochParameters",
    "CurveRegime",
    "CurvePoint",
    "CurveSnapshot",
    "CurveStatus",
    "AuctionConfig",
    "Sale",
]
