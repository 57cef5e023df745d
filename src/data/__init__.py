"""Data layer module for talking to the remote arbitrage platform."""

from src.data.models import (
    Opportunity,
    OpportunitiesPage,
    Portfolio,
    PortfolioExecution,
)

__all__ = [
    "Opportunity",
    "OpportunitiesPage",
    "Portfolio",
    "PortfolioExecution",
]
