"""Epoch parameter models for the Pulse auction curve."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pulse.core.constants import GENESIS_EPOCH_INDEX


class CurveRegime(Enum):
    """Which branch of the pricing curve an epoch is evaluated with."""

    GENESIS = "genesis"
    STEADY_STATE = "steady_state"
    DEGENERATE = "degenerate"


@dataclass(frozen=True)
class EpochParameters:
    """
    Immutable snapshot of one pricing epoch.

    An epoch starts at a sale (or at auction open for the genesis epoch) and
    ends at the next sale, which produces a new instance with the floor
    re-pinned to the sale price.

    The ask follows a hyperbola above the floor:

        price(tau) = floor + k / (tau + k / D)

    so ``price(0) = floor + D`` and the premium halves every ``k / D`` seconds
    of normalized time. With ``premium_rate=None`` the curve degenerates to
    ``floor + k / tau``.
    """

    epoch_index: int
    floor: float
    k: float
    premium_rate: Optional[float]  # D, premium at tau = 0
    start_time_sec: float
    now_time_sec: float
    is_genesis: bool = False

    @classmethod
    def genesis(
        cls,
        floor: float,
        genesis_price: float,
        k: float,
        start_time_sec: float,
        now_time_sec: float,
    ) -> "EpochParameters":
        """Create the first epoch, seeded from genesis price minus genesis floor."""
        return cls(
            epoch_index=GENESIS_EPOCH_INDEX,
            floor=floor,
            k=k,
            premium_rate=genesis_price - floor,
            start_time_sec=start_time_sec,
            now_time_sec=now_time_sec,
            is_genesis=True,
        )

    @classmethod
    def after_sale(
        cls,
        epoch_index: int,
        sale_price: float,
        sale_time_sec: float,
        k: float,
        pts: Optional[float],
        prior_interval_sec: Optional[float],
        now_time_sec: float,
    ) -> "EpochParameters":
        """
        Create the epoch that starts at a sale.

        Args:
            epoch_index: Ordinal of the new epoch
            sale_price: Price paid, becomes the new floor
            sale_time_sec: Unix seconds of the sale, becomes the anchor
            k: Decay constant
            pts: Premium accrual per second (None if unknown)
            prior_interval_sec: Seconds between this sale and the previous one
            now_time_sec: Evaluation time

        Returns:
            EpochParameters with ``premium_rate = pts * prior_interval_sec``,
            or a degenerate epoch when either factor is missing
        """
        premium_rate = None
        if pts is not None and prior_interval_sec is not None:
            premium_rate = pts * prior_interval_sec

        return cls(
            epoch_index=epoch_index,
            floor=sale_price,
            k=k,
            premium_rate=premium_rate,
            start_time_sec=sale_time_sec,
            now_time_sec=now_time_sec,
        )

    @property
    def regime(self) -> CurveRegime:
        if self.premium_rate is None:
            return CurveRegime.DEGENERATE
        if self.is_genesis:
            return CurveRegime.GENESIS
        return CurveRegime.STEADY_STATE

    @property
    def tau_now(self) -> float:
        """Seconds elapsed since epoch start, never negative."""
        if not (math.isfinite(self.now_time_sec) and math.isfinite(self.start_time_sec)):
            return 0.0
        return max(0.0, self.now_time_sec - self.start_time_sec)

    @property
    def half_life(self) -> float:
        """Seconds for the premium to halve (inf in the degenerate regime)."""
        from pulse.engine.curve import compute_half_life

        return compute_half_life(self.k, self.premium_rate)

    def with_now(self, now_time_sec: float) -> "EpochParameters":
        """Return a copy evaluated at a different wall-clock time."""
        return EpochParameters(
            epoch_index=self.epoch_index,
            floor=self.floor,
            k=self.k,
            premium_rate=self.premium_rate,
            start_time_sec=self.start_time_sec,
            now_time_sec=now_time_sec,
            is_genesis=self.is_genesis,
        )

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "epoch_index": self.epoch_index,
            "floor": self.floor,
            "k": self.k,
            "premium_rate": self.premium_rate,
            "start_time_sec": self.start_time_sec,
            "now_time_sec": self.now_time_sec,
            "is_genesis": self.is_genesis,
            "regime": self.regime.value,
        }
