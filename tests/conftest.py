"""Pytest configuration and fixtures."""

import pytest

from config.settings import Settings
from pulse.core.models import AuctionConfig, EpochParameters

T0 = 1_700_000_000.0


@pytest.fixture
def t0() -> float:
    return T0


@pytest.fixture
def normal_epoch() -> EpochParameters:
    """Steady-state epoch: floor=10, D=1, k=1000 (half-life 1000s), 500s elapsed."""
    return EpochParameters(
        epoch_index=5,
        floor=10.0,
        k=1000.0,
        premium_rate=1.0,
        start_time_sec=T0,
        now_time_sec=T0 + 500,
    )


@pytest.fixture
def genesis_epoch() -> EpochParameters:
    """Genesis epoch: floor=900, genesis price=1000, k=1000 (half-life 10s)."""
    return EpochParameters.genesis(
        floor=900.0,
        genesis_price=1000.0,
        k=1000.0,
        start_time_sec=T0,
        now_time_sec=T0 + 5,
    )


@pytest.fixture
def epoch2() -> EpochParameters:
    """Degenerate epoch with no premium rate, evaluated 600s after the sale."""
    return EpochParameters(
        epoch_index=2,
        floor=0.0,
        k=1_600_000.0,
        premium_rate=None,
        start_time_sec=T0,
        now_time_sec=T0 + 600,
    )


@pytest.fixture
def auction_config() -> AuctionConfig:
    """Auction with a 100 STRK genesis premium and 0.01 STRK/s accrual."""
    return AuctionConfig(
        k=1000.0,
        pts=0.01,
        genesis_price=1000.0,
        genesis_floor=900.0,
        open_time_sec=T0,
    )


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None)
