"""Tests for the opportunity risk model"""

import pytest

from src.data.models.opportunity import Opportunity
from src.engine.models.enums import RiskProfileType
from src.engine.models.profile import CapitalProfile
from src.engine.opportunity.risk import calc_risk_factors, calc_time_bonus, score_opportunity


def make_opportunity(**kwargs) -> Opportunity:
    defaults = dict(
        id="opp-1",
        symbol="BTCUSDT",
        long_exchange="bybit",
        short_exchange="kucoin",
        spread=0.05,
        liquidity_score=80,
        hours_to_funding=1,
    )
    defaults.update(kwargs)
    return Opportunity(**defaults)


def make_profile(risk: RiskProfileType) -> CapitalProfile:
    return CapitalProfile(balances={"bybit": 1000.0, "kucoin": 1000.0}, risk_profile=risk)


class TestRiskFactors:
    """Tests for calc_risk_factors"""

    def test_worked_example(self):
        """spread 0.05, liquidity 80, 1h to funding -> overall 22"""
        risk = calc_risk_factors(make_opportunity())
        assert risk.spread_risk == pytest.approx(50)
        assert risk.volume_risk == pytest.approx(20)
        assert risk.funding_time_risk == pytest.approx(5)
        assert risk.price_deviation == pytest.approx(0)
        assert risk.overall == pytest.approx(22)

    def test_missing_fields_use_defaults(self):
        """None liquidity -> 50, None hours -> 8, None price diff -> 0"""
        opp = make_opportunity(liquidity_score=None, hours_to_funding=None, price_diff_pct=None)
        risk = calc_risk_factors(opp)
        assert risk.volume_risk == pytest.approx(50)
        assert risk.funding_time_risk == pytest.approx(40)
        assert risk.price_deviation == 0

    def test_zero_values_use_defaults(self):
        """0 liquidity / 0 hours mean no data, same as missing"""
        risk = calc_risk_factors(make_opportunity(liquidity_score=0, hours_to_funding=0))
        assert risk.volume_risk == pytest.approx(50)
        assert risk.funding_time_risk == pytest.approx(40)
        assert risk.overall == pytest.approx(38)

    def test_zero_hours_gets_no_time_bonus(self):
        profile = make_profile(RiskProfileType.MODERATE)
        zero = score_opportunity(make_opportunity(hours_to_funding=0), profile)
        eight = score_opportunity(make_opportunity(hours_to_funding=8), profile)
        assert zero == pytest.approx(eight)

    def test_wide_spread_floors_spread_risk(self):
        assert calc_risk_factors(make_opportunity(spread=0.2)).spread_risk == 0

    def test_funding_time_risk_capped(self):
        assert calc_risk_factors(make_opportunity(hours_to_funding=48)).funding_time_risk == 100

    def test_price_deviation_uses_absolute_value(self):
        risk = calc_risk_factors(make_opportunity(price_diff_pct=-0.5))
        assert risk.price_deviation == pytest.approx(50)


class TestTimeBonus:
    """Tests for calc_time_bonus"""

    @pytest.mark.parametrize(
        "hours,expected",
        [(0, 5), (1.99, 5), (2, 2), (3.5, 2), (4, 0), (8, 0)],
    )
    def test_buckets(self, hours, expected):
        assert calc_time_bonus(hours) == expected


class TestScoreOpportunity:
    """Tests for score_opportunity"""

    def test_worked_example(self):
        """5 - 22 * 2.0 / 100 + 8 + 5 = 17.56 for conservative"""
        score = score_opportunity(make_opportunity(), make_profile(RiskProfileType.CONSERVATIVE))
        assert score == pytest.approx(17.56)

    def test_aggressive_scores_at_least_conservative(self):
        """A lower risk weight means a smaller penalty"""
        opps = [
            make_opportunity(),
            make_opportunity(spread=0.01, liquidity_score=10, hours_to_funding=8, price_diff_pct=0.3),
            make_opportunity(spread=0.08, liquidity_score=None, hours_to_funding=None),
        ]
        for opp in opps:
            assert calc_risk_factors(opp).overall > 0
            aggressive = score_opportunity(opp, make_profile(RiskProfileType.AGGRESSIVE))
            conservative = score_opportunity(opp, make_profile(RiskProfileType.CONSERVATIVE))
            assert aggressive >= conservative

    def test_score_floored_at_zero(self):
        opp = make_opportunity(spread=0.0, liquidity_score=1, hours_to_funding=20, price_diff_pct=5.0)
        assert score_opportunity(opp, make_profile(RiskProfileType.CONSERVATIVE)) == 0
