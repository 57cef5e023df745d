"""Calculation Engine Layer.

Pure, side-effect free calculations for funding-rate arbitrage. Consumes
data layer models (src.data.models) and a capital profile, and outputs
scores, sizes and analyses for use by the business layer.

Architecture:
- opportunity/: Opportunity-level calculations
    - risk: Risk factors and ranking score

- position/: Position-level calculations (single hedge)
    - stop_loss: Stop-loss levels and stop-out decisions

- portfolio/: Portfolio-level calculations (list[CurrentPosition])
    - diversification: Exchange/symbol concentration and health score

- account/: Account-level calculations (capital/balances)
    - position_sizing: Capital-constrained position size
    - balance: Balance ledger, rebalancing, capital checks

- models/: Profile, presets, positions and result containers
"""

# Base types (from models)
from src.engine.models import (
    RISK_PROFILES,
    BalanceSummary,
    CapitalProfile,
    CurrentPosition,
    DiversificationAnalysis,
    ExchangeConfig,
    PositionSizeResult,
    RiskFactors,
    RiskLevel,
    RiskProfilePreset,
    RiskProfileType,
    get_all_risk_profiles,
    get_risk_profile,
)

# ===== Opportunity Level =====
from src.engine.opportunity import calc_risk_factors, score_opportunity

# ===== Position Level =====
from src.engine.position import get_stop_loss_recommendation, should_stop_out

# ===== Portfolio Level =====
from src.engine.portfolio import analyze_diversification

# ===== Account Level =====
from src.engine.account import (
    calc_balance_summary,
    calc_position_size,
    generate_rebalance_suggestions,
    get_available_capital,
    get_deployed_capital,
    get_total_capital,
    get_utilization_rate,
    has_capital_for,
    update_balance,
)

__all__ = [
    # Models
    "CapitalProfile",
    "ExchangeConfig",
    "CurrentPosition",
    "RiskProfilePreset",
    "RiskProfileType",
    "RiskLevel",
    "RISK_PROFILES",
    "get_risk_profile",
    "get_all_risk_profiles",
    "RiskFactors",
    "PositionSizeResult",
    "BalanceSummary",
    "DiversificationAnalysis",
    # Opportunity
    "calc_risk_factors",
    "score_opportunity",
    # Position
    "get_stop_loss_recommendation",
    "should_stop_out",
    # Portfolio
    "analyze_diversification",
    # Account
    "calc_position_size",
    "calc_balance_summary",
    "generate_rebalance_suggestions",
    "has_capital_for",
    "get_total_capital",
    "get_deployed_capital",
    "get_available_capital",
    "get_utilization_rate",
    "update_balance",
]
