"""Engine layer data models.

Models:
    CapitalProfile: Capital and risk configuration
    ExchangeConfig: Per-exchange switch
    RiskProfilePreset: Fixed risk preset parameters
    CurrentPosition: Open hedge position snapshot
    RiskFactors: Per-opportunity risk factor vector
    PositionSizeResult: Position size with reasoning trail
    ExchangeBalance / BalanceSummary / RebalanceSuggestion: Balance ledger
    CapitalCheck: Capital sufficiency result
    DiversificationAnalysis: Concentration analysis
    StopLossRecommendation / StopOutDecision: Stop-loss outputs

Enums:
    RiskProfileType: conservative / moderate / aggressive
    RiskLevel: low / medium / high

Opportunity is defined in the data layer (src.data.models.opportunity).
"""

from src.data.models.opportunity import Opportunity  # 统一使用 data 层定义
from src.engine.models.enums import RiskLevel, RiskProfileType
from src.engine.models.position import CurrentPosition
from src.engine.models.profile import (
    RISK_PROFILES,
    CapitalProfile,
    ExchangeConfig,
    RiskProfilePreset,
    get_all_risk_profiles,
    get_risk_profile,
)
from src.engine.models.result import (
    BalanceSummary,
    CapitalCheck,
    DiversificationAnalysis,
    ExchangeBalance,
    PositionSizeResult,
    RebalanceSuggestion,
    RiskFactors,
    StopLossRecommendation,
    StopOutDecision,
)

__all__ = [
    # Enums
    "RiskLevel",
    "RiskProfileType",
    # Profile
    "CapitalProfile",
    "ExchangeConfig",
    "RiskProfilePreset",
    "RISK_PROFILES",
    "get_risk_profile",
    "get_all_risk_profiles",
    # Inputs
    "Opportunity",
    "CurrentPosition",
    # Results
    "RiskFactors",
    "PositionSizeResult",
    "ExchangeBalance",
    "BalanceSummary",
    "RebalanceSuggestion",
    "CapitalCheck",
    "DiversificationAnalysis",
    "StopLossRecommendation",
    "StopOutDecision",
]
