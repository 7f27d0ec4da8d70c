"""Auction configuration and sale models."""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from pulse.core.constants import TOKEN_DECIMALS


@dataclass(frozen=True)
class AuctionConfig:
    """
    Static auction parameters in human units.

    Amounts are already descaled from on-chain fixed point (see
    ``AuctionConfig.from_raw``).
    """

    k: float
    pts: Optional[float] = None  # premium accrued per second between sales
    genesis_price: Optional[float] = None
    genesis_floor: Optional[float] = None
    open_time_sec: Optional[float] = None

    @property
    def genesis_premium(self) -> Optional[float]:
        from pulse.engine.curve import genesis_premium

        if self.genesis_price is None or self.genesis_floor is None:
            return None
        return genesis_premium(self.genesis_price, self.genesis_floor)

    @classmethod
    def from_raw(cls, data: Mapping[str, Any], decimals: int = TOKEN_DECIMALS) -> "AuctionConfig":
        """
        Build a config from raw on-chain values.

        ``k``, ``pts``, ``genesis_price`` and ``genesis_floor`` may be any
        u256 shape accepted by ``parse_u256``. ``open_time`` is plain seconds.

        Raises:
            ValueError: If ``k`` is missing or any value cannot be parsed
        """
        from pulse.data.normalize import to_human, parse_u256

        if data.get("k") is None:
            raise ValueError("Auction config is missing 'k'")

        def _opt(key: str) -> Optional[float]:
            value = data.get(key)
            return None if value is None else to_human(value, decimals)

        open_time = data.get("open_time", data.get("open_time_sec"))

        return cls(
            k=to_human(data["k"], decimals),
            pts=_opt("pts"),
            genesis_price=_opt("genesis_price"),
            genesis_floor=_opt("genesis_floor"),
            open_time_sec=float(parse_u256(open_time)) if open_time is not None else None,
        )

    def to_dict(self) -> dict:
        return {
            "k": self.k,
            "pts": self.pts,
            "genesis_price": self.genesis_price,
            "genesis_floor": self.genesis_floor,
            "open_time_sec": self.open_time_sec,
        }


@dataclass(frozen=True)
class Sale:
    """A settled sale in human units."""

    timestamp_sec: float
    price: float
    buyer: Optional[str] = None
    token_id: Optional[int] = None

    def __lt__(self, other):
        """Enable sorting by timestamp."""
        if isinstance(other, Sale):
            return self.timestamp_sec < other.timestamp_sec
        return NotImplemented

    @classmethod
    def from_raw(
        cls,
        timestamp: Any,
        price: Any,
        decimals: int = TOKEN_DECIMALS,
        buyer: Optional[str] = None,
        token_id: Any = None,
    ) -> "Sale":
        """Build a sale from raw on-chain values (u256 price, integer timestamp)."""
        from pulse.data.normalize import to_human, parse_u256

        return cls(
            timestamp_sec=float(parse_u256(timestamp)),
            price=to_human(price, decimals),
            buyer=buyer,
            token_id=parse_u256(token_id) if token_id is not None else None,
        )

    def to_dict(self) -> dict:
        return {
            "timestamp_sec": self.timestamp_sec,
            "price": self.price,
            "buyer": self.buyer,
            "token_id": self.token_id,
        }
