"""Portfolio diversification analysis.

Exposure concentration across exchanges and symbols for a list of open
hedge positions, plus a 0-100 health score.
"""

from src.engine.models.position import CurrentPosition
from src.engine.models.profile import CapitalProfile
from src.engine.models.result import DiversificationAnalysis


def calc_exchange_exposure(positions: list[CurrentPosition]) -> dict[str, float]:
    """Exposure per exchange as % of deployed capital.

    Each position contributes half its size to both its long and short
    exchange, so exchange exposures sum to 100.
    """
    total_size = sum(p.size for p in positions)
    exposure: dict[str, float] = {}
    for pos in positions:
        share = (pos.size / 2) / total_size * 100 if total_size > 0 else 0.0
        exposure[pos.long_exchange] = exposure.get(pos.long_exchange, 0.0) + share
        exposure[pos.short_exchange] = exposure.get(pos.short_exchange, 0.0) + share
    return exposure


def calc_symbol_exposure(positions: list[CurrentPosition]) -> dict[str, float]:
    """Exposure per symbol as % of deployed capital."""
    total_size = sum(p.size for p in positions)
    exposure: dict[str, float] = {}
    for pos in positions:
        share = pos.size / total_size * 100 if total_size > 0 else 0.0
        exposure[pos.symbol] = exposure.get(pos.symbol, 0.0) + share
    return exposure


def analyze_diversification(
    positions: list[CurrentPosition],
    profile: CapitalProfile,
) -> DiversificationAnalysis:
    """Analyze concentration of open positions.

    Score:
        position_score = min(100, n_positions / diversification_min * 100)
        penalty = (max_exchange_exposure + max_symbol_exposure) / 4
        score = clamp(position_score - penalty, 0, 100)

    Any exchange or symbol above 100 / diversification_min percent is
    flagged. Symbol overages also produce a suggestion.

    Args:
        positions: Open positions.
        profile: Capital profile providing the risk preset.

    Returns:
        DiversificationAnalysis. Score is exactly 0 with no positions.
    """
    if not positions:
        return DiversificationAnalysis(
            score=0.0,
            warnings=["No positions open"],
            suggestions=["Open positions to start earning funding"],
        )

    preset = profile.preset
    by_exchange = calc_exchange_exposure(positions)
    by_symbol = calc_symbol_exposure(positions)
    max_allowed = 100 / preset.diversification_min

    warnings: list[str] = []
    suggestions: list[str] = []

    for exchange, exposure in by_exchange.items():
        if exposure > max_allowed:
            warnings.append(f"High exposure to {exchange}: {exposure:.1f}%")

    for symbol, exposure in by_symbol.items():
        if exposure > max_allowed:
            warnings.append(f"Concentrated in {symbol}: {exposure:.1f}%")
            suggestions.append(f"Consider diversifying away from {symbol}")

    position_score = min(100.0, len(positions) / preset.diversification_min * 100)
    penalty = (max(by_exchange.values()) + max(by_symbol.values())) / 4
    score = max(0.0, min(100.0, position_score - penalty))

    if len(positions) < preset.diversification_min:
        missing = preset.diversification_min - len(positions)
        suggestions.append(f"Add {missing} more positions for better diversification")

    return DiversificationAnalysis(
        score=score,
        exchange_exposure=by_exchange,
        symbol_exposure=by_symbol,
        warnings=warnings,
        suggestions=suggestions,
    )
