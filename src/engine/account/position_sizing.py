"""Position sizing for hedge opportunities.

Account-level module: turns capital, profile limits and opportunity risk
into a capital-constrained position size.
"""

import logging
import math

from src.data.models.opportunity import Opportunity
from src.engine.models.profile import CapitalProfile
from src.engine.models.result import PositionSizeResult
from src.engine.opportunity.risk import calc_risk_factors

logger = logging.getLogger(__name__)

# Smallest position worth opening ($)
MIN_VIABLE_POSITION_SIZE = 50.0

# Overall risk thresholds and their size multipliers
HIGH_RISK_THRESHOLD = 70
HIGH_RISK_MULTIPLIER = 0.5
MEDIUM_RISK_THRESHOLD = 50
MEDIUM_RISK_MULTIPLIER = 0.75


def calc_position_size(
    opportunity: Opportunity,
    profile: CapitalProfile,
    current_open_count: int,
    min_viable_size: float = MIN_VIABLE_POSITION_SIZE,
) -> PositionSizeResult:
    """Calculate the recommended size of a new hedge position.

    A narrowing funnel: every step can only shrink the running max size,
    and every shrink is recorded in the reasoning.

    1. total_capital * max_position_size_percent / 100
    2. Clamp to 2 * min(long balance, short balance) * preset max position %
       (the hedge needs matching capital on both legs)
    3. Open positions >= max_open_positions -> 0
    4. Clamp to total_capital / max_open_positions (reserve for other slots)
    5. x0.5 when overall risk > 70, x0.75 when > 50
    6. Below min_viable_size -> 0
    7. floor()

    Args:
        opportunity: Opportunity to size.
        profile: Capital profile.
        current_open_count: Number of currently open positions.
        min_viable_size: Smallest position worth opening ($).

    Returns:
        PositionSizeResult with recommended_size 0 when the opportunity
        should be skipped.

    Example:
        >>> # conservative, $1000 on bybit and kucoin, 5 max positions
        >>> calc_position_size(opp, profile, 0).recommended_size
        400
    """
    preset = profile.preset
    reasoning: list[str] = []
    warnings: list[str] = []
    trail: list[float] = []

    total_capital = profile.total_capital
    long_balance = profile.balances.get(opportunity.long_exchange, 0.0)
    short_balance = profile.balances.get(opportunity.short_exchange, 0.0)
    relevant_capital = min(long_balance, short_balance) * 2
    for exchange, balance in ((opportunity.long_exchange, long_balance), (opportunity.short_exchange, short_balance)):
        if balance <= 0:
            warnings.append(f"No balance on {exchange} - hedge needs capital on both legs")

    # 1. Profile cap
    max_allowed = total_capital * (profile.max_position_size_percent / 100)
    max_size = max_allowed
    trail.append(max_size)
    reasoning.append(
        f"Max position size: {profile.max_position_size_percent:g}% of capital = ${max_size:.2f}"
    )

    def _result(size: float) -> PositionSizeResult:
        return PositionSizeResult(
            recommended_size=size,
            max_allowed_size=max_allowed,
            min_viable_size=min_viable_size,
            reasoning=reasoning,
            warnings=warnings,
            size_trail=trail,
        )

    # 2. Risk preset cap on the two legs
    risk_max_size = relevant_capital * (preset.max_position_size_percent / 100)
    if risk_max_size < max_size:
        max_size = risk_max_size
        trail.append(max_size)
        reasoning.append(f"Risk profile ({profile.risk_profile.value}) limits to ${max_size:.2f}")

    # 3. Slots
    remaining_slots = profile.max_open_positions - current_open_count
    if remaining_slots <= 0:
        trail.append(0)
        reasoning.append("Max positions reached - no new positions recommended")
        warnings.append(f"All {profile.max_open_positions} position slots in use")
        return _result(0)

    # 4. Diversification reserve
    available_per_slot = total_capital / profile.max_open_positions
    if available_per_slot < max_size:
        max_size = available_per_slot
        trail.append(max_size)
        reasoning.append(f"Diversification: reserving capital for {remaining_slots} more positions")

    # 5. Opportunity risk
    risk = calc_risk_factors(opportunity)
    if risk.overall > HIGH_RISK_THRESHOLD:
        max_size *= HIGH_RISK_MULTIPLIER
        trail.append(max_size)
        reasoning.append(f"High risk opportunity ({risk.overall:.0f}) - reduced size by 50%")
    elif risk.overall > MEDIUM_RISK_THRESHOLD:
        max_size *= MEDIUM_RISK_MULTIPLIER
        trail.append(max_size)
        reasoning.append(f"Medium risk ({risk.overall:.0f}) - reduced size by 25%")

    # 6. Minimum viable size
    if max_size < min_viable_size:
        trail.append(0)
        reasoning.append(f"Position too small (< ${min_viable_size:g}) - skipping")
        logger.debug(f"{opportunity.symbol}: size {max_size:.2f} below minimum, skipped")
        return _result(0)

    size = math.floor(max_size)
    trail.append(size)
    return _result(size)
