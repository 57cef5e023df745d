"""Opportunity risk model.

Risk factors and attractiveness score for a single funding-rate
arbitrage opportunity. All functions are pure.
"""

from src.data.models.opportunity import Opportunity
from src.engine.models.profile import CapitalProfile
from src.engine.models.result import RiskFactors

# Defaults applied when the platform omits a field or reports 0
DEFAULT_LIQUIDITY_SCORE = 50.0
DEFAULT_HOURS_TO_FUNDING = 8.0
DEFAULT_PRICE_DIFF_PCT = 0.0

# Factor weights for the overall risk blend
SPREAD_WEIGHT = 0.3
VOLUME_WEIGHT = 0.3
FUNDING_TIME_WEIGHT = 0.2
PRICE_DEVIATION_WEIGHT = 0.2


def _liquidity(opportunity: Opportunity) -> float:
    # 0 means the platform had no liquidity data
    return opportunity.liquidity_score or DEFAULT_LIQUIDITY_SCORE


def _hours_to_funding(opportunity: Opportunity) -> float:
    return opportunity.hours_to_funding or DEFAULT_HOURS_TO_FUNDING


def calc_risk_factors(opportunity: Opportunity) -> RiskFactors:
    """Calculate the risk factor vector of an opportunity.

    Factors (each 0-100, higher = riskier):
    - spread_risk = max(0, 100 - spread * 1000): thin spreads can vanish
      before funding is collected. Assumes spread in [0, 0.1].
    - volume_risk = 100 - liquidity_score (default 50 when missing or 0).
    - funding_time_risk = min(100, hours_to_funding * 5) (default 8h when missing or 0):
      a closer funding event is less exposure.
    - price_deviation = |price_diff_pct| * 100 (default 0).

    overall = 0.3 * spread + 0.3 * volume + 0.2 * funding_time + 0.2 * price_deviation

    Args:
        opportunity: Opportunity to evaluate.

    Returns:
        RiskFactors. overall may exceed 100 only for malformed inputs.

    Example:
        >>> opp = Opportunity(id="1", symbol="BTC", long_exchange="bybit",
        ...                   short_exchange="kucoin", spread=0.05,
        ...                   liquidity_score=80, hours_to_funding=1)
        >>> calc_risk_factors(opp).overall
        22.0
    """
    price_diff = opportunity.price_diff_pct
    if price_diff is None:
        price_diff = DEFAULT_PRICE_DIFF_PCT

    spread_risk = max(0.0, 100 - opportunity.spread * 1000)
    volume_risk = 100 - _liquidity(opportunity)
    funding_time_risk = min(100.0, _hours_to_funding(opportunity) * 5)
    price_deviation = abs(price_diff) * 100

    overall = (
        spread_risk * SPREAD_WEIGHT
        + volume_risk * VOLUME_WEIGHT
        + funding_time_risk * FUNDING_TIME_WEIGHT
        + price_deviation * PRICE_DEVIATION_WEIGHT
    )

    return RiskFactors(
        spread_risk=spread_risk,
        volume_risk=volume_risk,
        funding_time_risk=funding_time_risk,
        price_deviation=price_deviation,
        overall=overall,
    )


def calc_time_bonus(hours_to_funding: float) -> float:
    """Bonus for imminent funding: +5 under 2h, +2 under 4h, else 0."""
    if hours_to_funding < 2:
        return 5.0
    elif hours_to_funding < 4:
        return 2.0
    return 0.0


def score_opportunity(opportunity: Opportunity, profile: CapitalProfile) -> float:
    """Score an opportunity for ranking (higher = more attractive).

    Formula:
        score = spread * 100 - overall_risk * risk_weight / 100
                + liquidity_score / 10 + time_bonus

    The risk weight of the active preset (2.0 / 1.0 / 0.5) is the only
    place risk tolerance reshapes ranking: aggressive profiles pay half
    the risk penalty of moderate ones.

    Args:
        opportunity: Opportunity to score.
        profile: Capital profile providing the risk preset.

    Returns:
        Score, floored at 0.
    """
    risk = calc_risk_factors(opportunity)
    preset = profile.preset

    score = opportunity.spread * 100
    score -= risk.overall * preset.risk_weight / 100
    score += _liquidity(opportunity) / 10
    score += calc_time_bonus(_hours_to_funding(opportunity))

    return max(0.0, score)
