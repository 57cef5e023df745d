"""
Strategy Models - 策略推荐数据模型

推荐结果、目标进度、刷新状态以及策略层异常。
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Generic, TypeVar

from src.data.models.opportunity import Opportunity
from src.engine.models.enums import RiskLevel
from src.engine.models.position import CurrentPosition

T = TypeVar("T")


class StrategyError(Exception):
    """策略引擎异常基类"""

    pass


class ProfileNotConfiguredError(StrategyError):
    """未配置 CapitalProfile 时调用需要档案的操作"""

    def __init__(self, message: str = "No profile configured. Call set_profile first.") -> None:
        super().__init__(message)


class InvalidProfileError(StrategyError):
    """档案参数非法 (目标收益越界、未知风险类型等)"""

    pass


class RefreshStatus(str, Enum):
    """持仓刷新结果"""

    UPDATED = "updated"  # 成功替换快照
    KEPT_STALE = "kept_stale"  # 拉取失败，保留旧快照


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """外部调用结果: 成功带数据，失败带错误信息"""

    ok: bool
    data: T | None = None
    error: str | None = None

    @classmethod
    def success(cls, data: T) -> "FetchResult[T]":
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, error: str) -> "FetchResult[T]":
        return cls(ok=False, error=error)


@dataclass(frozen=True)
class ExchangeAssignment:
    """对冲两腿的交易所"""

    long: str
    short: str


@dataclass
class RecommendedOpportunity:
    """单个推荐机会

    Attributes:
        opportunity: 原始机会
        recommended_size: 推荐仓位 ($)
        exchange: 多/空腿交易所
        expected_return: 预期日收益 (占总资金 %)
        risk_score: 风险综合分 (RiskFactors.overall)
        score: 排序得分
        reasoning: 仓位计算依据 (审计用，不做解析)
    """

    opportunity: Opportunity
    recommended_size: float
    exchange: ExchangeAssignment
    expected_return: float
    risk_score: float
    score: float
    reasoning: list[str] = field(default_factory=list)


@dataclass
class StrategyRecommendation:
    """完整推荐结果 (机会按得分降序)"""

    opportunities: list[RecommendedOpportunity] = field(default_factory=list)
    expected_daily_return: float = 0.0
    risk_level: RiskLevel = RiskLevel.MEDIUM
    capital_utilization: float = 0.0
    progress_to_target: float = 0.0
    summary: str = ""
    warnings: list[str] = field(default_factory=list)

    @property
    def total_recommended_size(self) -> float:
        return sum(r.recommended_size for r in self.opportunities)


@dataclass
class TargetProgress:
    """日收益目标进度"""

    daily_target: float
    current_daily_return: float
    progress_percent: float
    positions_needed_for_target: int
    current_positions: list[CurrentPosition] = field(default_factory=list)
    total_deployed: float = 0.0
    total_available: float = 0.0
    suggestions: list[str] = field(default_factory=list)
    timestamp: datetime = field(default_factory=datetime.now)
