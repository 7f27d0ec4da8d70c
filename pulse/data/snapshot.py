"""Derive the live epoch from auction config and sale history."""

import logging
from typing import Optional, Sequence

from pulse.core.constants import GENESIS_EPOCH_INDEX
from pulse.core.models import AuctionConfig, EpochParameters, Sale

logger = logging.getLogger(__name__)


def epoch_from_sales(
    config: AuctionConfig,
    sales: Sequence[Sale],
    now_sec: float,
) -> Optional[EpochParameters]:
    """
    Build the epoch currently in force.

    Before any sale the genesis epoch runs from auction open, seeded with
    ``genesis_price - genesis_floor``. After a sale the floor is re-pinned to
    its price and the premium seed is ``pts`` times the gap to the previous
    sale (or to auction open for the first sale).

    Args:
        config: Auction configuration in human units
        sales: Settled sales in any order
        now_sec: Evaluation time in unix seconds

    Returns:
        EpochParameters, or None when there is no sale and no usable genesis
        configuration
    """
    if not sales:
        premium = config.genesis_premium
        if premium is None or config.open_time_sec is None:
            logger.debug("No sales and no genesis configuration")
            return None
        return EpochParameters.genesis(
            floor=config.genesis_floor,
            genesis_price=config.genesis_price,
            k=config.k,
            start_time_sec=config.open_time_sec,
            now_time_sec=now_sec,
        )

    ordered = sorted(sales)
    last = ordered[-1]

    if len(ordered) >= 2:
        prior_start: Optional[float] = ordered[-2].timestamp_sec
    else:
        prior_start = config.open_time_sec

    prior_interval = None
    if prior_start is not None:
        # Same-second fills still accrue one second of premium
        prior_interval = max(1.0, last.timestamp_sec - prior_start)

    return EpochParameters.after_sale(
        epoch_index=GENESIS_EPOCH_INDEX + len(ordered),
        sale_price=last.price,
        sale_time_sec=last.timestamp_sec,
        k=config.k,
        pts=config.pts,
        prior_interval_sec=prior_interval,
        now_time_sec=now_sec,
    )
