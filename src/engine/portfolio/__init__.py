"""Portfolio-level calculations (list[CurrentPosition])."""

from src.engine.portfolio.diversification import (
    analyze_diversification,
    calc_exchange_exposure,
    calc_symbol_exposure,
)

__all__ = [
    "analyze_diversification",
    "calc_exchange_exposure",
    "calc_symbol_exposure",
]
