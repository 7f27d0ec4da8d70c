"""Unit tests for PulseCurveEngine."""

import logging
import math

import pytest

from config.settings import Settings, get_settings
from pulse.core.models import AuctionConfig, CurveRegime, CurveStatus, EpochParameters, Sale
from pulse.engine import PulseCurveEngine


class TestPulseCurveEngine:
    """Tests for PulseCurveEngine.evaluate."""

    @pytest.fixture
    def engine(self, settings):
        return PulseCurveEngine(settings)

    def test_steady_state_snapshot(self, engine, normal_epoch):
        snapshot = engine.evaluate(normal_epoch)

        assert snapshot.status == CurveStatus.SUCCESS
        assert snapshot.is_valid
        assert snapshot.label == "live"
        assert snapshot.ask == pytest.approx(10.0 + 1000.0 / 1500.0)
        assert snapshot.premium == pytest.approx(1000.0 / 1500.0)
        assert snapshot.half_life == pytest.approx(1000.0)
        assert snapshot.anchor_sec == pytest.approx(normal_epoch.start_time_sec - 1000.0)
        assert snapshot.u_max == 10.0
        assert len(snapshot.points) == 121
        assert snapshot.points[-1].u == snapshot.u_max

    def test_steps_override(self, engine, normal_epoch):
        snapshot = engine.evaluate(normal_epoch, u_max=4, steps=8)
        assert len(snapshot.points) == 9
        assert snapshot.u_max == 4

    def test_settings_drive_sampling(self, normal_epoch):
        engine = PulseCurveEngine(Settings(_env_file=None, curve_steps=20, curve_u_max_default=3.0))
        snapshot = engine.evaluate(normal_epoch)

        assert len(snapshot.points) == 21
        assert snapshot.points[-1].u == 3.0

    def test_degenerate_snapshot(self, engine, epoch2):
        snapshot = engine.evaluate(epoch2)

        assert snapshot.status == CurveStatus.SUCCESS
        assert snapshot.epoch.regime == CurveRegime.DEGENERATE
        assert math.isinf(snapshot.half_life)
        assert snapshot.anchor_sec == epoch2.start_time_sec
        assert snapshot.ask == pytest.approx(2666.67, abs=0.01)
        assert snapshot.to_dict()["half_life"] is None

    def test_genesis_snapshot(self, engine, genesis_epoch):
        snapshot = engine.evaluate(genesis_epoch)

        assert snapshot.epoch.regime == CurveRegime.GENESIS
        assert snapshot.half_life == pytest.approx(10.0)
        # 5s into a 10s half-life: premium 100 / 1.5
        assert snapshot.ask == pytest.approx(900.0 + 100.0 / 1.5)

    @pytest.mark.parametrize(
        "k,D,reason",
        [
            (0.0, 1.0, "non-positive k"),
            (float("nan"), 1.0, "k not finite"),
            (1000.0, -2.0, "non-positive premium rate"),
            (1000.0, float("inf"), "premium rate not finite"),
        ],
    )
    def test_invalid_config(self, engine, t0, k, D, reason):
        epoch = EpochParameters(
            epoch_index=3, floor=10.0, k=k, premium_rate=D, start_time_sec=t0, now_time_sec=t0
        )
        snapshot = engine.evaluate(epoch)

        assert snapshot.status == CurveStatus.INVALID_CONFIG
        assert snapshot.reason == reason
        assert snapshot.points == []
        assert not snapshot.is_valid
        assert snapshot.label == "invalid configuration"
        assert snapshot.display_ask == "N/A"

    def test_invalid_config_logs_warning(self, engine, t0, caplog):
        epoch = EpochParameters(
            epoch_index=3, floor=float("nan"), k=1000.0, premium_rate=1.0, start_time_sec=t0, now_time_sec=t0
        )
        with caplog.at_level(logging.WARNING, logger="pulse.engine.engine"):
            engine.evaluate(epoch)

        assert "floor not finite" in caplog.text

    def test_no_curve_for_bad_window(self, engine, normal_epoch):
        snapshot = engine.evaluate(normal_epoch, u_max=-1.0)

        assert snapshot.status == CurveStatus.NO_CURVE
        assert snapshot.ask is not None
        assert snapshot.label == "no curve yet"

    def test_lookup_from_snapshot(self, engine, normal_epoch):
        snapshot = engine.evaluate(normal_epoch, u_max=2, steps=4)
        assert snapshot.lookup().at_u(1.0).price == pytest.approx(10.5)

    def test_to_dict(self, engine, normal_epoch):
        data = engine.evaluate(normal_epoch, steps=2).to_dict()

        assert data["status"] == "success"
        assert data["epoch"]["regime"] == "steady_state"
        assert len(data["points"]) == 3
        assert data["half_life"] == pytest.approx(1000.0)


class TestEvaluateAuction:
    """Tests for PulseCurveEngine.evaluate_auction."""

    @pytest.fixture
    def engine(self, settings):
        return PulseCurveEngine(settings)

    def test_no_config(self, engine, t0):
        snapshot = engine.evaluate_auction(None, [], t0)

        assert snapshot.status == CurveStatus.NO_CONFIG
        assert snapshot.label == "loading"

    def test_genesis_before_first_sale(self, engine, auction_config, t0):
        snapshot = engine.evaluate_auction(auction_config, [], t0 + 10)

        assert snapshot.status == CurveStatus.SUCCESS
        assert snapshot.epoch.epoch_index == 1
        assert snapshot.epoch.is_genesis
        assert snapshot.ask == pytest.approx(950.0)

    def test_no_sales_without_genesis(self, engine, t0):
        config = AuctionConfig(k=1000.0, pts=0.5, genesis_floor=900.0, open_time_sec=t0)
        snapshot = engine.evaluate_auction(config, [], t0 + 100)

        assert snapshot.status == CurveStatus.NO_SALES
        assert snapshot.label == "no sales yet"
        assert snapshot.ask == pytest.approx(950.0)

    def test_no_sales_without_baseline(self, engine, t0):
        config = AuctionConfig(k=1000.0)
        snapshot = engine.evaluate_auction(config, [], t0)

        assert snapshot.status == CurveStatus.NO_SALES
        assert snapshot.ask is None

    def test_after_sales(self, engine, auction_config, t0):
        sales = [Sale(t0 + 100, 950.0), Sale(t0 + 400, 960.0)]
        snapshot = engine.evaluate_auction(auction_config, sales, t0 + 400)

        assert snapshot.status == CurveStatus.SUCCESS
        assert snapshot.epoch.epoch_index == 3
        assert snapshot.floor == 960.0
        # D = 0.01 * 300s
        assert snapshot.ask == pytest.approx(963.0)

    def test_same_second_sales_keep_a_curve(self, engine, auction_config, t0):
        sales = [Sale(t0 + 100, 950.0), Sale(t0 + 100, 960.0)]
        snapshot = engine.evaluate_auction(auction_config, sales, t0 + 200)

        assert snapshot.status == CurveStatus.SUCCESS
        assert snapshot.points
        assert snapshot.half_life == pytest.approx(1000.0 / 0.01)


class TestSettings:
    """Tests for Settings loading."""

    def test_defaults(self, settings):
        assert settings.token_decimals == 18
        assert settings.curve_steps == 120
        assert settings.curve_u_max_default == 10.0
        assert settings.degenerate_window_sec == 600.0

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("CURVE_STEPS", "40")
        monkeypatch.setenv("TOKEN_DECIMALS", "6")
        settings = Settings(_env_file=None)

        assert settings.curve_steps == 40
        assert settings.token_decimals == 6

    def test_rejects_invalid_steps(self):
        with pytest.raises(ValueError):
            Settings(_env_file=None, curve_steps=0)

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()
        get_settings.cache_clear()


class TestRawInputs:
    """Tests for raw on-chain inputs descaled at the configured token precision."""

    def test_parse_config_default_decimals(self, settings):
        config = PulseCurveEngine(settings).parse_config(
            {"k": 1000 * 10**18, "pts": 10**16, "genesis_price": 10**21, "genesis_floor": 9 * 10**20}
        )

        assert config.k == pytest.approx(1000.0)
        assert config.pts == pytest.approx(0.01)
        assert config.genesis_premium == pytest.approx(100.0)

    def test_parse_config_custom_decimals(self):
        engine = PulseCurveEngine(Settings(_env_file=None, token_decimals=6))
        config = engine.parse_config({"k": 1_000_000_000, "pts": "0x2710"})

        assert config.k == pytest.approx(1000.0)
        assert config.pts == pytest.approx(0.01)

    def test_parse_sale_custom_decimals(self, t0):
        engine = PulseCurveEngine(Settings(_env_file=None, token_decimals=6))
        sale = engine.parse_sale(int(t0), {"low": 950_000_000, "high": 0}, token_id="0x2")

        assert sale.timestamp_sec == t0
        assert sale.price == pytest.approx(950.0)
        assert sale.token_id == 2

    def test_raw_history_end_to_end(self, settings, t0):
        engine = PulseCurveEngine(settings)
        config = engine.parse_config(
            {"k": 1000 * 10**18, "pts": 10**16, "genesis_price": 10**21, "genesis_floor": 9 * 10**20, "open_time": int(t0)}
        )
        sales = [engine.parse_sale(int(t0) + 100, 950 * 10**18)]

        snapshot = engine.evaluate_auction(config, sales, t0 + 100)
        assert snapshot.status == CurveStatus.SUCCESS
        assert snapshot.ask == pytest.approx(951.0)
