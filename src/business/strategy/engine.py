"""
Strategy Engine - 策略推荐引擎

持有 CapitalProfile 与持仓快照，从平台拉取机会和持仓，组合风险评分、
仓位计算、资金检查、分散度与止损逻辑，输出排序后的推荐结果。

状态: NoProfile -> Configured (set_profile)。
未配置档案时所有需要档案的操作抛出 ProfileNotConfiguredError。

平台调用失败不向外抛出：
- 持仓刷新失败 -> 保留旧快照 (RefreshStatus.KEPT_STALE)
- 单个交易所对拉取失败 -> 跳过该对
"""

import logging
import math
import threading
from dataclasses import replace
from typing import Protocol, runtime_checkable

from src.business.config.strategy_config import StrategyConfig
from src.business.strategy.data_bridge import extract_positions_from_portfolio
from src.business.strategy.models import (
    ExchangeAssignment,
    FetchResult,
    InvalidProfileError,
    ProfileNotConfiguredError,
    RecommendedOpportunity,
    RefreshStatus,
    StrategyRecommendation,
    TargetProgress,
)
from src.data.models.opportunity import OpportunitiesPage, Opportunity
from src.data.models.portfolio import Portfolio
from src.engine.account.balance import (
    calc_balance_summary,
    get_deployed_capital,
    has_capital_for,
    update_balance,
)
from src.engine.account.position_sizing import calc_position_size
from src.engine.models.enums import RiskLevel, RiskProfileType
from src.engine.models.position import CurrentPosition
from src.engine.models.profile import CapitalProfile, ExchangeConfig, get_risk_profile
from src.engine.models.result import BalanceSummary, DiversificationAnalysis
from src.engine.opportunity.risk import calc_risk_factors, score_opportunity
from src.engine.portfolio.diversification import analyze_diversification
from src.engine.position.stop_loss import should_stop_out

logger = logging.getLogger(__name__)

# 推荐结果风险等级阈值 (平均风险分)
LOW_RISK_THRESHOLD = 30
MEDIUM_RISK_THRESHOLD = 60
DEFAULT_RISK_SCORE = 50

LOW_UTILIZATION_PERCENT = 50
LOW_PROGRESS_PERCENT = 50


@runtime_checkable
class PlatformGateway(Protocol):
    """策略引擎依赖的平台能力 (PlatformClient 满足此协议)"""

    def get_opportunities(
        self,
        exchange_pair: str,
        page: int = 1,
        limit: int = 20,
        sort_by: str = "apr",
        query: str | None = None,
    ) -> OpportunitiesPage:
        ...

    def get_portfolio(self, execution_id: str | None = None) -> Portfolio:
        ...


def get_default_profile() -> CapitalProfile:
    """默认档案: moderate, 日目标 1%, 单仓 30%, 最多 5 仓, bybit/kucoin"""
    return CapitalProfile(
        balances={},
        risk_profile=RiskProfileType.MODERATE,
        daily_target_percent=1.0,
        max_position_size_percent=30.0,
        max_open_positions=5,
        min_spread=0.03,
        exchanges={
            "bybit": ExchangeConfig(enabled=True),
            "kucoin": ExchangeConfig(enabled=True),
        },
    )


def validate_daily_target(target: float) -> None:
    """日目标必须在 [0, 100]"""
    if target < 0 or target > 100:
        raise InvalidProfileError("Daily target must be between 0 and 100%")


def validate_profile(profile: CapitalProfile) -> None:
    """校验档案参数

    Raises:
        InvalidProfileError: 任一参数越界
    """
    validate_daily_target(profile.daily_target_percent)
    if profile.max_position_size_percent < 0 or profile.max_position_size_percent > 100:
        raise InvalidProfileError("Max position size must be between 0 and 100%")
    if profile.max_open_positions < 0:
        raise InvalidProfileError("Max open positions must be >= 0")
    negative = [ex for ex, amount in profile.balances.items() if amount < 0]
    if negative:
        raise InvalidProfileError(f"Balance must be non-negative: {', '.join(negative)}")


def parse_risk_profile(value: RiskProfileType | str) -> RiskProfileType:
    """字符串 -> RiskProfileType

    Raises:
        InvalidProfileError: 未知类型
    """
    try:
        return RiskProfileType(value)
    except ValueError:
        valid = ", ".join(t.value for t in RiskProfileType)
        raise InvalidProfileError(f"Unknown risk profile: {value}. Valid: {valid}")


def build_exchange_pairs(exchanges: list[str]) -> list[str]:
    """启用交易所的所有有序对 (n 个交易所 -> n*(n-1) 对)"""
    return [f"{a}-{b}" for a in exchanges for b in exchanges if a != b]


class StrategyEngine:
    """策略推荐引擎

    Usage:
        engine = StrategyEngine(client)
        engine.set_profile(profile)
        recommendation = engine.get_recommendations()
    """

    def __init__(
        self,
        platform: PlatformGateway,
        profile: CapitalProfile | None = None,
        config: StrategyConfig | None = None,
    ) -> None:
        self._platform = platform
        self._config = config or StrategyConfig()
        self._profile: CapitalProfile | None = None
        self._positions: list[CurrentPosition] = []
        self._lock = threading.RLock()

        if profile is not None:
            self.set_profile(profile)

    # ==================== Profile ====================

    @property
    def config(self) -> StrategyConfig:
        return self._config

    @property
    def profile(self) -> CapitalProfile | None:
        """当前档案 (未配置时为 None)"""
        return self._profile

    def has_profile(self) -> bool:
        return self._profile is not None

    def _require_profile(self) -> CapitalProfile:
        if self._profile is None:
            raise ProfileNotConfiguredError()
        return self._profile

    def set_profile(self, profile: CapitalProfile) -> CapitalProfile:
        """设置档案并更新 updated_at

        Raises:
            InvalidProfileError: 档案参数非法
        """
        validate_profile(profile)
        with self._lock:
            self._profile = profile.touch()
        logger.info(
            f"Profile set: risk={profile.risk_profile.value}, "
            f"capital=${profile.total_capital:.2f}, exchanges={profile.enabled_exchanges}"
        )
        return self._profile

    def set_risk_profile(self, profile_type: RiskProfileType | str) -> CapitalProfile:
        """切换风险类型，同时采用该预设的 min_spread"""
        risk_type = parse_risk_profile(profile_type)
        with self._lock:
            profile = self._require_profile()
            preset = get_risk_profile(risk_type)
            self._profile = replace(
                profile,
                risk_profile=risk_type,
                min_spread=preset.min_spread,
            ).touch()
        logger.info(f"Risk profile -> {risk_type.value} (min_spread={preset.min_spread})")
        return self._profile

    def set_daily_target(self, target: float) -> CapitalProfile:
        """设置日收益目标 (%)"""
        with self._lock:
            profile = self._require_profile()
            validate_daily_target(target)
            self._profile = replace(profile, daily_target_percent=target).touch()
        logger.info(f"Daily target -> {target}%")
        return self._profile

    def set_balance(self, exchange: str, amount: float) -> CapitalProfile:
        """设置单个交易所余额"""
        if amount < 0:
            raise InvalidProfileError("Balance must be non-negative")
        with self._lock:
            profile = self._require_profile()
            self._profile = update_balance(profile, exchange, amount)
        logger.info(f"Balance {exchange} -> ${amount:.2f}")
        return self._profile

    # ==================== Positions ====================

    @property
    def positions(self) -> list[CurrentPosition]:
        """当前持仓快照"""
        return list(self._positions)

    def _fetch_portfolio(self) -> FetchResult[Portfolio]:
        try:
            return FetchResult.success(self._platform.get_portfolio())
        except Exception as e:
            return FetchResult.failure(str(e))

    def refresh_positions(self) -> RefreshStatus:
        """从平台刷新持仓，失败时保留旧快照"""
        with self._lock:
            result = self._fetch_portfolio()
            if not result.ok or result.data is None:
                logger.warning(f"Portfolio refresh failed, keeping {len(self._positions)} cached positions: {result.error}")
                return RefreshStatus.KEPT_STALE
            self._positions = extract_positions_from_portfolio(result.data)
            return RefreshStatus.UPDATED

    def _fetch_pair(self, pair: str) -> FetchResult[list[Opportunity]]:
        try:
            page = self._platform.get_opportunities(
                pair,
                limit=self._config.opportunity_fetch_limit,
                sort_by=self._config.opportunity_sort_by,
            )
            return FetchResult.success(page.opportunities)
        except Exception as e:
            return FetchResult.failure(str(e))

    def fetch_all_opportunities(self) -> list[Opportunity]:
        """拉取所有启用交易所对的机会，按 id 去重 (保留首次出现)"""
        profile = self._require_profile()
        seen: set[str] = set()
        opportunities: list[Opportunity] = []

        for pair in build_exchange_pairs(profile.enabled_exchanges):
            result = self._fetch_pair(pair)
            if not result.ok:
                logger.warning(f"Skipping pair {pair}: {result.error}")
                continue
            for opp in result.data or []:
                if opp.id in seen:
                    continue
                seen.add(opp.id)
                opportunities.append(opp)

        return opportunities

    # ==================== Analysis ====================

    def analyze_opportunity(self, opportunity: Opportunity) -> RecommendedOpportunity | None:
        """评估单个机会，不可行时返回 None

        依次检查: 最小价差 -> 交易所启用 -> 仓位计算 -> 资金充足。
        """
        profile = self._require_profile()
        positions = self._positions

        if opportunity.spread < profile.min_spread:
            return None

        if not (profile.is_enabled(opportunity.long_exchange) and profile.is_enabled(opportunity.short_exchange)):
            logger.debug(f"{opportunity.symbol}: exchange not enabled, dropped")
            return None

        sizing = calc_position_size(
            opportunity,
            profile,
            len(positions),
            min_viable_size=self._config.min_viable_position_size,
        )
        if sizing.recommended_size == 0:
            logger.debug(f"{opportunity.symbol}: {sizing.reasoning[-1]} {sizing.warnings}")
            return None

        reasoning = sizing.reasoning
        size = sizing.recommended_size
        check = has_capital_for(
            profile,
            positions,
            opportunity.long_exchange,
            opportunity.short_exchange,
            size,
        )
        if not check.has_capital:
            reasoning.append(check.reason or "Insufficient capital")
            logger.debug(f"{opportunity.symbol}: {reasoning[-1]}")
            return None

        risk = calc_risk_factors(opportunity)
        expected_return = opportunity.spread * 100 / 365 * (size / profile.total_capital)

        return RecommendedOpportunity(
            opportunity=opportunity,
            recommended_size=size,
            exchange=ExchangeAssignment(
                long=opportunity.long_exchange,
                short=opportunity.short_exchange,
            ),
            expected_return=expected_return,
            risk_score=risk.overall,
            score=score_opportunity(opportunity, profile),
            reasoning=reasoning,
        )

    def get_recommendations(self) -> StrategyRecommendation:
        """生成推荐结果

        Raises:
            ProfileNotConfiguredError: 未配置档案
        """
        with self._lock:
            profile = self._require_profile()
            self.refresh_positions()
            positions = self._positions

            candidates = [
                opp for opp in self.fetch_all_opportunities() if opp.spread >= profile.min_spread
            ]
            scored = [rec for rec in map(self.analyze_opportunity, candidates) if rec is not None]
            scored.sort(key=lambda r: r.score, reverse=True)

            remaining_slots = profile.max_open_positions - len(positions)
            selected = scored[:remaining_slots] if remaining_slots > 0 else []

            current_return = sum(p.expected_daily_return for p in positions)
            expected_daily_return = current_return + sum(r.expected_return for r in selected)

            total_capital = profile.total_capital
            deployed = get_deployed_capital(positions)
            new_deployment = sum(r.recommended_size for r in selected)
            utilization = (deployed + new_deployment) / total_capital * 100 if total_capital > 0 else 0.0

            progress = (
                expected_daily_return / profile.daily_target_percent * 100
                if profile.daily_target_percent > 0
                else 0.0
            )

            avg_risk = sum(r.risk_score for r in scored) / len(scored) if scored else DEFAULT_RISK_SCORE
            risk_level = self._risk_level(avg_risk)

            warnings: list[str] = []
            if remaining_slots <= 0:
                warnings.append("Maximum positions reached. Close a position to open new ones.")
            if utilization < LOW_UTILIZATION_PERCENT and not selected:
                warnings.append("Low capital utilization with no recommendations. Consider lowering min spread.")
            if progress < LOW_PROGRESS_PERCENT:
                warnings.append(f"Only at {progress:.0f}% of daily target.")
            for pos in positions:
                decision = should_stop_out(
                    pos,
                    profile,
                    inversion_threshold=self._config.spread_inversion_threshold,
                )
                if decision.should_stop:
                    warnings.append(f"⚠️ {pos.symbol}: {decision.reason}")

            summary = self._summary(selected, len(positions), expected_daily_return, progress, utilization)

            logger.debug(
                f"Recommendations: {len(candidates)} candidates, {len(scored)} viable, "
                f"{len(selected)} selected"
            )
            return StrategyRecommendation(
                opportunities=selected,
                expected_daily_return=expected_daily_return,
                risk_level=risk_level,
                capital_utilization=utilization,
                progress_to_target=progress,
                summary=summary,
                warnings=warnings,
            )

    def check_target_progress(self) -> TargetProgress:
        """检查日收益目标进度

        Raises:
            ProfileNotConfiguredError: 未配置档案
        """
        with self._lock:
            profile = self._require_profile()
            self.refresh_positions()
            positions = self._positions

            current_return = sum(p.expected_daily_return for p in positions)
            target = profile.daily_target_percent
            progress = current_return / target * 100 if target > 0 else 0.0

            deployed = get_deployed_capital(positions)
            available = profile.total_capital - deployed

            if positions:
                avg_return = current_return / len(positions)
            else:
                avg_return = self._config.default_return_per_position

            remaining = max(0.0, target - current_return)
            needed = math.ceil(remaining / avg_return) if avg_return > 0 else 0

            return TargetProgress(
                daily_target=target,
                current_daily_return=current_return,
                progress_percent=progress,
                positions_needed_for_target=needed,
                current_positions=list(positions),
                total_deployed=deployed,
                total_available=available,
                suggestions=self._target_suggestions(progress, needed, available, len(positions)),
            )

    def get_diversification_analysis(self) -> DiversificationAnalysis:
        """当前持仓分散度分析"""
        return analyze_diversification(self._positions, self._require_profile())

    def get_balance_summary(self) -> BalanceSummary:
        """当前余额账本"""
        return calc_balance_summary(
            self._require_profile(),
            self._positions,
            margin_ratio=self._config.margin_ratio,
            **self._config.rebalance_options,
        )

    # ==================== Helpers ====================

    @staticmethod
    def _risk_level(avg_risk: float) -> RiskLevel:
        if avg_risk < LOW_RISK_THRESHOLD:
            return RiskLevel.LOW
        elif avg_risk < MEDIUM_RISK_THRESHOLD:
            return RiskLevel.MEDIUM
        return RiskLevel.HIGH

    @staticmethod
    def _summary(
        selected: list[RecommendedOpportunity],
        position_count: int,
        expected_return: float,
        progress: float,
        utilization: float,
    ) -> str:
        if not selected and position_count == 0:
            return "No positions and no recommendations. Configure exchanges and balances to get started."
        if not selected:
            return (
                f"{position_count} active position(s), {progress:.0f}% toward daily target. "
                "No new recommendations."
            )
        total_size = sum(r.recommended_size for r in selected)
        return (
            f"Found {len(selected)} opportunity(ies) for ${total_size:.0f}. "
            f"Expected daily return: {expected_return:.2f}% ({progress:.0f}% of target). "
            f"Capital utilization: {utilization:.0f}%."
        )

    @staticmethod
    def _target_suggestions(
        progress: float,
        positions_needed: int,
        available: float,
        position_count: int,
    ) -> list[str]:
        suggestions: list[str] = []
        if progress >= 100:
            suggestions.append("🎯 Daily target reached! Consider holding current positions.")
        elif progress >= 75:
            suggestions.append(f"Almost there! Add {positions_needed} more position(s) to hit target.")
        elif progress >= 50:
            suggestions.append(f"Making progress. {positions_needed} more positions needed.")
        else:
            suggestions.append(f"Need to ramp up. Consider adding {positions_needed} positions.")

        if available < 100:
            suggestions.append("Low available capital. Consider closing underperforming positions.")
        if position_count == 0:
            suggestions.append("No active positions. Open your first position to start earning.")
        return suggestions


def create_strategy_engine(
    platform: PlatformGateway,
    profile: CapitalProfile | None = None,
    config: StrategyConfig | None = None,
) -> StrategyEngine:
    """创建策略引擎 (config 缺省时从 YAML/环境变量加载)"""
    return StrategyEngine(platform, profile=profile, config=config or StrategyConfig.load())
