"""
Data Bridge - 平台数据到策略模型的转换

将平台 Portfolio 中运行中的 execution 转换为 CurrentPosition。
"""

import logging
from datetime import datetime, timezone

from src.data.models.portfolio import Portfolio, PortfolioExecution
from src.engine.models.position import CurrentPosition

logger = logging.getLogger(__name__)

# 8 小时一次资金费，一天 3 次
FUNDING_PERIODS_PER_DAY = 3


def calc_hours_open(created_at: datetime | None, now: datetime) -> float:
    """开仓至今的小时数，缺少创建时间时为 0"""
    if created_at is None:
        return 0.0
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return (now - created_at).total_seconds() / 3600


def to_current_position(item: PortfolioExecution, now: datetime) -> CurrentPosition:
    """单个 execution -> CurrentPosition

    - expected_daily_return = net_funding / input_amount * 100 * 3
    - unrealized_pnl_percent = total_pnl_pct * 100
    - entry_spread / current_spread 暂无数据源，固定为 0
    """
    execution = item.execution
    if execution.input_amount > 0:
        daily_return = item.funding.net_funding / execution.input_amount * 100 * FUNDING_PERIODS_PER_DAY
    else:
        daily_return = 0.0

    return CurrentPosition(
        execution_id=execution.id,
        symbol=execution.symbol,
        pair=execution.pair,
        long_exchange=execution.long_exchange,
        short_exchange=execution.short_exchange,
        size=execution.input_amount,
        entry_spread=0.0,
        current_spread=0.0,
        unrealized_pnl=item.pnl.unrealized_pnl,
        unrealized_pnl_percent=item.pnl.total_pnl_pct * 100,
        hours_open=calc_hours_open(execution.created_at, now),
        expected_daily_return=daily_return,
    )


def extract_positions_from_portfolio(
    portfolio: Portfolio,
    now: datetime | None = None,
) -> list[CurrentPosition]:
    """提取运行中的持仓

    Args:
        portfolio: 平台 Portfolio
        now: 计算持仓时长的当前时间 (默认 UTC now)

    Returns:
        CurrentPosition 列表 (顺序同 portfolio.executions)
    """
    now = now or datetime.now(timezone.utc)
    positions = [to_current_position(item, now) for item in portfolio.running]
    logger.debug(f"Extracted {len(positions)} running positions from {len(portfolio.executions)} executions")
    return positions
