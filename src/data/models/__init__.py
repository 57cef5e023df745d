"""Data models for platform responses."""

from src.data.models.enums import ExecutionMode, ExecutionStatus, SortField
from src.data.models.opportunity import OpportunitiesPage, Opportunity, Pagination
from src.data.models.portfolio import (
    CloseResult,
    ExecuteResult,
    Execution,
    FundingBreakdown,
    FundingFees,
    FundingFlow,
    PlatformMetrics,
    PnLBreakdown,
    Portfolio,
    PortfolioExecution,
    PortfolioSummary,
)

__all__ = [
    # Enums
    "ExecutionMode",
    "ExecutionStatus",
    "SortField",
    # Opportunity
    "Opportunity",
    "OpportunitiesPage",
    "Pagination",
    # Portfolio
    "Execution",
    "PnLBreakdown",
    "FundingBreakdown",
    "PortfolioExecution",
    "PortfolioSummary",
    "Portfolio",
    # Execution responses
    "ExecuteResult",
    "CloseResult",
    # Metrics
    "FundingFees",
    "FundingFlow",
    "PlatformMetrics",
]
