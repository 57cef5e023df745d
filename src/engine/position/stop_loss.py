"""Stop-loss levels and stop-out decisions for hedge positions."""

from src.engine.models.position import CurrentPosition
from src.engine.models.profile import CapitalProfile
from src.engine.models.result import StopLossRecommendation, StopOutDecision

CONSERVATIVE_STOP_LOSS_PERCENT = 2.0
AGGRESSIVE_STOP_LOSS_PERCENT = 10.0

# Spread below this (fraction) means the hedge pays funding instead of earning it
SPREAD_INVERSION_THRESHOLD = -0.02


def calc_stop_price(entry_price: float, stop_loss_percent: float) -> float:
    """Price level stop_loss_percent below entry."""
    return entry_price * (1 - stop_loss_percent / 100)


def get_stop_loss_recommendation(
    entry_price: float,
    profile: CapitalProfile,
) -> StopLossRecommendation:
    """Stop-loss price levels for an entry price.

    Conservative is fixed at 2% below entry, aggressive at 10%; the
    recommended level uses the active preset's stop_loss_percent.

    Args:
        entry_price: Position entry price.
        profile: Capital profile providing the risk preset.

    Returns:
        StopLossRecommendation with price levels (not percentages).

    Example:
        >>> get_stop_loss_recommendation(100.0, moderate_profile).recommended_stop_loss
        95.0
    """
    preset = profile.preset
    return StopLossRecommendation(
        recommended_stop_loss=calc_stop_price(entry_price, preset.stop_loss_percent),
        conservative_stop_loss=calc_stop_price(entry_price, CONSERVATIVE_STOP_LOSS_PERCENT),
        aggressive_stop_loss=calc_stop_price(entry_price, AGGRESSIVE_STOP_LOSS_PERCENT),
        reasoning=(
            f"Based on {profile.risk_profile.value} risk profile, "
            f"{preset.stop_loss_percent:g}% stop loss recommended"
        ),
    )


def should_stop_out(
    position: CurrentPosition,
    profile: CapitalProfile,
    inversion_threshold: float = SPREAD_INVERSION_THRESHOLD,
) -> StopOutDecision:
    """Decide whether an open position should be closed.

    Loss beyond the preset stop-loss is checked before spread inversion;
    the first match wins.

    Args:
        position: Open position.
        profile: Capital profile providing the risk preset.
        inversion_threshold: Spread (fraction) below which the hedge is inverted.

    Returns:
        StopOutDecision with the triggering reason.
    """
    stop_loss_percent = profile.preset.stop_loss_percent

    if position.unrealized_pnl_percent < -stop_loss_percent:
        return StopOutDecision(
            True,
            f"Loss ({position.unrealized_pnl_percent:.2f}%) exceeds stop loss ({stop_loss_percent:g}%)",
        )

    if position.current_spread < 0 and position.current_spread < inversion_threshold:
        return StopOutDecision(
            True,
            f"Spread inverted to {position.current_spread * 100:.2f}%",
        )

    return StopOutDecision(False)
