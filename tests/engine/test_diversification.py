"""Tests for diversification analysis"""

import pytest

from src.engine.models.enums import RiskProfileType
from src.engine.models.position import CurrentPosition
from src.engine.models.profile import CapitalProfile
from src.engine.portfolio.diversification import (
    analyze_diversification,
    calc_exchange_exposure,
    calc_symbol_exposure,
)


def make_position(symbol: str, size: float, long_exchange: str = "bybit", short_exchange: str = "kucoin"):
    return CurrentPosition(
        execution_id=f"exec-{symbol}",
        symbol=symbol,
        pair=f"{long_exchange}-{short_exchange}",
        long_exchange=long_exchange,
        short_exchange=short_exchange,
        size=size,
    )


def make_profile(risk: RiskProfileType = RiskProfileType.MODERATE) -> CapitalProfile:
    return CapitalProfile(balances={"bybit": 1000.0, "kucoin": 1000.0}, risk_profile=risk)


class TestExposure:
    """Tests for exchange and symbol exposure"""

    def test_exchange_exposure_is_symmetric(self):
        positions = [make_position("BTCUSDT", 300), make_position("ETHUSDT", 100, "okx", "bybit")]
        exposure = calc_exchange_exposure(positions)
        assert exposure["bybit"] == pytest.approx(50)
        assert exposure["kucoin"] == pytest.approx(37.5)
        assert exposure["okx"] == pytest.approx(12.5)
        assert sum(exposure.values()) == pytest.approx(100)

    def test_symbol_exposure(self):
        positions = [make_position("BTCUSDT", 300), make_position("ETHUSDT", 100)]
        assert calc_symbol_exposure(positions) == pytest.approx({"BTCUSDT": 75, "ETHUSDT": 25})

    def test_zero_size_positions(self):
        exposure = calc_symbol_exposure([make_position("BTCUSDT", 0)])
        assert exposure == {"BTCUSDT": 0}


class TestAnalyzeDiversification:
    """Tests for analyze_diversification"""

    def test_no_positions(self):
        analysis = analyze_diversification([], make_profile())
        assert analysis.score == 0
        assert "No positions open" in analysis.warnings

    def test_single_position_moderate(self):
        analysis = analyze_diversification([make_position("BTCUSDT", 400)], make_profile())
        # position score 1/3*100 = 33.3, penalty (50 + 100) / 4 = 37.5
        assert analysis.score == 0
        assert "Concentrated in BTCUSDT: 100.0%" in analysis.warnings
        assert "High exposure to bybit: 50.0%" in analysis.warnings
        assert "Consider diversifying away from BTCUSDT" in analysis.suggestions
        assert "Add 2 more positions for better diversification" in analysis.suggestions

    def test_well_spread_portfolio(self):
        positions = [
            make_position("BTCUSDT", 100, "bybit", "kucoin"),
            make_position("ETHUSDT", 100, "kucoin", "okx"),
            make_position("SOLUSDT", 100, "okx", "gate"),
            make_position("XRPUSDT", 100, "gate", "bybit"),
        ]
        analysis = analyze_diversification(positions, make_profile())
        # 100 - (25 + 25) / 4
        assert analysis.score == pytest.approx(87.5)
        assert analysis.warnings == []

    def test_aggressive_tolerates_concentration(self):
        """diversification_min 1 -> max allowed concentration 100%"""
        analysis = analyze_diversification([make_position("BTCUSDT", 400)], make_profile(RiskProfileType.AGGRESSIVE))
        assert analysis.warnings == []
        assert analysis.score == pytest.approx(100 - 150 / 4)

    @pytest.mark.parametrize("risk", list(RiskProfileType))
    @pytest.mark.parametrize(
        "positions",
        [
            [],
            [make_position("BTCUSDT", 0)],
            [make_position("BTCUSDT", 10), make_position("BTCUSDT", 5000)],
            [make_position(f"S{i}", 100 * (i + 1), "bybit", f"ex{i}") for i in range(8)],
        ],
    )
    def test_score_bounds(self, risk, positions):
        score = analyze_diversification(positions, make_profile(risk)).score
        assert 0 <= score <= 100
