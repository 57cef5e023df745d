"""
Strategy - 策略推荐

- StrategyEngine: 推荐引擎 (档案 + 持仓快照 + 平台数据)
- extract_positions_from_portfolio: 平台持仓 -> CurrentPosition
"""

from src.business.strategy.data_bridge import extract_positions_from_portfolio
from src.business.strategy.engine import (
    PlatformGateway,
    StrategyEngine,
    create_strategy_engine,
    get_default_profile,
)
from src.business.strategy.models import (
    InvalidProfileError,
    ProfileNotConfiguredError,
    RecommendedOpportunity,
    RefreshStatus,
    StrategyError,
    StrategyRecommendation,
    TargetProgress,
)

__all__ = [
    "StrategyEngine",
    "PlatformGateway",
    "create_strategy_engine",
    "get_default_profile",
    "extract_positions_from_portfolio",
    "StrategyRecommendation",
    "RecommendedOpportunity",
    "TargetProgress",
    "RefreshStatus",
    "StrategyError",
    "ProfileNotConfiguredError",
    "InvalidProfileError",
]
