"""Sale history simulation over the Pulse curve."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

import numpy as np

from pulse.core.models import AuctionConfig, EpochParameters, Sale
from pulse.data.snapshot import epoch_from_sales
from pulse.engine.curve import compute_ask

logger = logging.getLogger(__name__)

IntOrRange = Union[int, Tuple[int, int]]

DEFAULT_BUYER = "0xBEEF000000000000000000000000000000000000000000000000000000000000"


@dataclass
class SimulationResult:
    """Sales produced by a simulation and the epoch each one settled in."""

    sales: List[Sale] = field(default_factory=list)
    epochs: List[EpochParameters] = field(default_factory=list)

    @property
    def floors(self) -> List[float]:
        return [e.floor for e in self.epochs]

    @property
    def final_epoch(self) -> Optional[EpochParameters]:
        return self.epochs[-1] if self.epochs else None

    def to_dict(self) -> dict:
        return {
            "sales": [s.to_dict() for s in self.sales],
            "epochs": [e.to_dict() for e in self.epochs],
        }


class SaleSimulator:
    """
    Generates a plausible sale history for an auction.

    Each buyer waits an interval and then pays the ask of the epoch in force,
    which re-pins the floor and seeds the next premium. Useful for fixtures
    and for eyeballing how ``k`` and ``pts`` shape the price path.
    """

    def __init__(self, config: AuctionConfig, seed: Optional[int] = None):
        """
        Initialize simulator.

        Args:
            config: Auction configuration; needs ``pts``, a positive genesis
                premium and an open time
            seed: Seed for interval and sale-count draws

        Raises:
            ValueError: If the config cannot drive a simulation
        """
        if config.pts is None or config.pts <= 0:
            raise ValueError("Simulation needs a positive pts")
        if config.genesis_premium is None:
            raise ValueError("Simulation needs genesis_price above genesis_floor")
        if config.open_time_sec is None:
            raise ValueError("Simulation needs an open time")
        if config.k <= 0:
            raise ValueError("Simulation needs a positive k")

        self.config = config
        self._rng = np.random.default_rng(seed)

    def _draw(self, spec: IntOrRange) -> int:
        """Resolve a fixed value or an inclusive (low, high) range."""
        if isinstance(spec, tuple):
            low, high = spec
            if high < low:
                raise ValueError(f"Invalid range: {spec}")
            return int(self._rng.integers(low, high + 1))
        return int(spec)

    def run(
        self,
        sales: IntOrRange,
        interval: IntOrRange,
        buyer: str = DEFAULT_BUYER,
    ) -> SimulationResult:
        """
        Simulate a sequence of sales starting at auction open.

        Args:
            sales: Number of sales, or an inclusive range to draw from
            interval: Seconds between sales, or an inclusive range per sale
            buyer: Buyer recorded on every sale

        Returns:
            SimulationResult with one epoch per sale
        """
        count = self._draw(sales)
        if count < 0:
            raise ValueError(f"Sale count cannot be negative: {count}")

        result = SimulationResult()
        t = self.config.open_time_sec

        for token_id in range(count):
            dt = self._draw(interval)
            if dt <= 0:
                raise ValueError(f"Interval must be positive, got {dt}")
            t += dt

            epoch = epoch_from_sales(self.config, result.sales, t)
            price = compute_ask(epoch.floor, epoch.k, epoch.premium_rate, epoch.tau_now)

            result.epochs.append(epoch)
            result.sales.append(Sale(timestamp_sec=t, price=price, buyer=buyer, token_id=token_id))

        logger.info(
            f"Simulation complete: {len(result.sales)} sales, "
            f"final floor={result.floors[-1] if result.floors else float('nan'):.4f}"
        )

        return result
