"""Opportunity-level calculations (risk factors, ranking score)."""

from src.engine.opportunity.risk import (
    calc_risk_factors,
    calc_time_bonus,
    score_opportunity,
)

__all__ = [
    "calc_risk_factors",
    "calc_time_bonus",
    "score_opportunity",
]
