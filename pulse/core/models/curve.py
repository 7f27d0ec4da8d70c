"""Curve result data models."""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from .epoch import EpochParameters


def _utcnow() -> datetime:
    """Get current UTC time (timezone-aware)."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CurvePoint:
    """A single sample of the ask curve."""

    epoch_index: int
    tau: float  # seconds since epoch start
    u: float  # tau / half-life, or tau in the degenerate regime
    price: float

    def to_dict(self) -> dict:
        return {
            "epoch_index": self.epoch_index,
            "tau": self.tau,
            "u": self.u,
            "price": self.price,
        }


class CurveStatus(Enum):
    """Status of a curve evaluation."""

    SUCCESS = "success"
    NO_CONFIG = "no_config"
    INVALID_CONFIG = "invalid_config"
    NO_SALES = "no_sales"
    NO_CURVE = "no_curve"


@dataclass
class CurveSnapshot:
    """Result of evaluating an epoch: current ask plus the sampled curve."""

    status: CurveStatus
    epoch: Optional[EpochParameters] = None
    ask: Optional[float] = None
    half_life: float = math.inf
    anchor_sec: Optional[float] = None
    u_max: Optional[float] = None
    points: List[CurvePoint] = field(default_factory=list)
    reason: Optional[str] = None
    calculated_at: datetime = field(default_factory=_utcnow)

    @property
    def is_valid(self) -> bool:
        """Check if a curve was produced."""
        return self.status == CurveStatus.SUCCESS and bool(self.points)

    @property
    def floor(self) -> Optional[float]:
        return self.epoch.floor if self.epoch else None

    @property
    def premium(self) -> Optional[float]:
        """Current ask above the floor."""
        if self.ask is None or self.epoch is None:
            return None
        return self.ask - self.epoch.floor

    @property
    def display_ask(self) -> str:
        """Format ask for display."""
        if self.ask is None or not math.isfinite(self.ask):
            return "N/A"
        return f"{self.ask:.2f} STRK"

    @property
    def label(self) -> str:
        """Short user-facing state label."""
        if self.status == CurveStatus.SUCCESS:
            return "live"
        if self.status == CurveStatus.NO_CONFIG:
            return "loading"
        if self.status == CurveStatus.NO_SALES:
            return "no sales yet"
        if self.status == CurveStatus.INVALID_CONFIG:
            return "invalid configuration"
        return "no curve yet"

    def lookup(self):
        """Build an interpolating lookup over the sampled points."""
        from pulse.engine.lookup import CurveLookup

        return CurveLookup(self.points)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "status": self.status.value,
            "epoch": self.epoch.to_dict() if self.epoch else None,
            "ask": self.ask,
            "half_life": None if math.isinf(self.half_life) else self.half_life,
            "anchor_sec": self.anchor_sec,
            "u_max": self.u_max,
            "points": [p.to_dict() for p in self.points],
            "reason": self.reason,
            "calculated_at": self.calculated_at.isoformat(),
        }
