"""Pulse curve engine orchestrator."""

import logging
import math
from typing import Any, Mapping, Optional, Sequence

from config.settings import Settings, get_settings
from pulse.core.models import AuctionConfig, CurveSnapshot, CurveStatus, EpochParameters, Sale
from pulse.data.snapshot import epoch_from_sales

from .curve import build_curve_points, compute_ask, compute_half_life, curve_anchor, resolve_u_max

logger = logging.getLogger(__name__)


class PulseCurveEngine:
    """
    Evaluates epochs into curve snapshots.

    Stateless between calls: every evaluation reads only its arguments and
    the sampling settings given at construction, so one instance can serve
    concurrent callers.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def parse_config(self, data: Mapping[str, Any]) -> AuctionConfig:
        """Build an AuctionConfig from raw on-chain values at the configured token precision."""
        return AuctionConfig.from_raw(data, decimals=self.settings.token_decimals)

    def parse_sale(
        self,
        timestamp: Any,
        price: Any,
        buyer: Optional[str] = None,
        token_id: Any = None,
    ) -> Sale:
        """Build a Sale from raw on-chain values at the configured token precision."""
        return Sale.from_raw(
            timestamp, price, decimals=self.settings.token_decimals, buyer=buyer, token_id=token_id
        )

    def _invalid_reason(self, epoch: EpochParameters) -> Optional[str]:
        """Describe why an epoch cannot define a curve, if it cannot."""
        if not math.isfinite(epoch.k):
            return "k not finite"
        if epoch.k <= 0:
            return "non-positive k"
        if not math.isfinite(epoch.floor):
            return "floor not finite"
        if epoch.premium_rate is not None:
            if not math.isfinite(epoch.premium_rate):
                return "premium rate not finite"
            if epoch.premium_rate <= 0:
                return "non-positive premium rate"
        return None

    def evaluate(
        self,
        epoch: EpochParameters,
        u_max: Optional[float] = None,
        steps: Optional[int] = None,
    ) -> CurveSnapshot:
        """
        Evaluate an epoch at its ``now_time_sec``.

        Args:
            epoch: Epoch parameters
            u_max: Window end override (half-lives, or seconds when degenerate)
            steps: Sampling density override

        Returns:
            CurveSnapshot with ask, half-life, anchor and sampled points
        """
        reason = self._invalid_reason(epoch)
        if reason:
            logger.warning(f"Epoch {epoch.epoch_index} has no curve: {reason}")
            return CurveSnapshot(status=CurveStatus.INVALID_CONFIG, epoch=epoch, reason=reason)

        steps = steps if steps is not None else self.settings.curve_steps
        points = build_curve_points(
            epoch,
            u_max=u_max,
            steps=steps,
            u_max_default=self.settings.curve_u_max_default,
            degenerate_window=self.settings.degenerate_window_sec,
        )

        ask = compute_ask(epoch.floor, epoch.k, epoch.premium_rate, epoch.tau_now)
        half_life = compute_half_life(epoch.k, epoch.premium_rate)

        if not points:
            return CurveSnapshot(
                status=CurveStatus.NO_CURVE,
                epoch=epoch,
                ask=ask,
                half_life=half_life,
                reason="no curve points",
            )

        logger.debug(
            f"Epoch {epoch.epoch_index} ({epoch.regime.value}): "
            f"ask={ask:.4f}, tau_now={epoch.tau_now:.1f}s, {len(points)} points"
        )

        return CurveSnapshot(
            status=CurveStatus.SUCCESS,
            epoch=epoch,
            ask=ask,
            half_life=half_life,
            anchor_sec=curve_anchor(epoch),
            u_max=resolve_u_max(
                epoch,
                u_max,
                self.settings.curve_u_max_default,
                self.settings.degenerate_window_sec,
            ),
            points=points,
        )

    def evaluate_auction(
        self,
        config: Optional[AuctionConfig],
        sales: Sequence[Sale],
        now_sec: float,
        u_max: Optional[float] = None,
        steps: Optional[int] = None,
    ) -> CurveSnapshot:
        """
        Evaluate the live epoch of an auction from its config and sale history.

        Args:
            config: Auction configuration (None while still loading)
            sales: Settled sales in any order
            now_sec: Evaluation time in unix seconds

        Returns:
            CurveSnapshot; NO_CONFIG or NO_SALES when no epoch can be derived
        """
        if config is None:
            return CurveSnapshot(status=CurveStatus.NO_CONFIG, reason="no config")

        epoch = epoch_from_sales(config, sales, now_sec)
        if epoch is None:
            return CurveSnapshot(
                status=CurveStatus.NO_SALES,
                ask=self._baseline_ask(config, now_sec),
                reason="no sales",
            )

        return self.evaluate(epoch, u_max=u_max, steps=steps)

    @staticmethod
    def _baseline_ask(config: AuctionConfig, now_sec: float) -> Optional[float]:
        """Synthetic ask before any sale: floor plus premium accrued since open."""
        if config.pts is None or config.pts <= 0:
            return None
        if config.genesis_floor is None or not math.isfinite(config.genesis_floor):
            return None
        if config.open_time_sec is None:
            return None
        return config.genesis_floor + config.pts * max(1.0, now_sec - config.open_time_sec)
