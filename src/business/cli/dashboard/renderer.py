"""Dashboard renderer for CLI.

Renders the strategy dashboard with multiple panels:
- Target Progress (daily return vs target)
- Capital (per-exchange balances, utilization)
- Diversification (score, exchange exposure)
- Warnings (stop-outs, concentration, rebalancing)
- Recommendations Table
- Positions Table
"""

from dataclasses import dataclass, field
from datetime import datetime

from src.business.cli.dashboard.components import (
    box,
    format_pct,
    format_usd,
    progress_bar,
    progress_icon,
    risk_icon,
    risk_level_of,
    side_by_side,
    table_header,
    table_row,
    table_separator,
)
from src.business.strategy.engine import StrategyEngine
from src.business.strategy.models import StrategyRecommendation, TargetProgress
from src.engine.models.profile import CapitalProfile
from src.engine.models.result import BalanceSummary, DiversificationAnalysis

WIDTH = 96
PANEL_WIDTH = 46


@dataclass
class DashboardData:
    """Everything one dashboard frame shows."""

    profile: CapitalProfile
    recommendation: StrategyRecommendation
    progress: TargetProgress
    diversification: DiversificationAnalysis
    balances: BalanceSummary
    timestamp: datetime = field(default_factory=datetime.now)


def collect_dashboard_data(engine: StrategyEngine) -> DashboardData:
    """Run the engine once and gather a dashboard frame.

    get_recommendations refreshes positions; the other views reuse that
    snapshot.
    """
    recommendation = engine.get_recommendations()
    progress = engine.check_target_progress()
    return DashboardData(
        profile=engine.profile,
        recommendation=recommendation,
        progress=progress,
        diversification=engine.get_diversification_analysis(),
        balances=engine.get_balance_summary(),
    )


class DashboardRenderer:
    """Dashboard renderer for terminal output."""

    def __init__(self, width: int = WIDTH, panel_width: int = PANEL_WIDTH):
        self.width = width
        self.panel_width = panel_width

    def render(self, data: DashboardData) -> str:
        """Render complete dashboard.

        Args:
            data: DashboardData frame

        Returns:
            Formatted dashboard string
        """
        rec = data.recommendation
        lines = []

        timestamp = data.timestamp.strftime("%Y-%m-%d %H:%M:%S")
        lines.append("═" * self.width)
        lines.append(
            f"  资金费率套利策略仪表盘  |  {timestamp}  |  "
            f"风险: {risk_icon(rec.risk_level)} {rec.risk_level.value}  |  "
            f"档案: {data.profile.risk_profile.value}"
        )
        lines.append("═" * self.width)
        lines.append("")

        # Row 1: Target + Capital
        lines.extend(side_by_side(self._render_target(data), self._render_capital(data), gap=4))
        lines.append("")

        # Row 2: Diversification + Warnings
        lines.extend(side_by_side(self._render_diversification(data), self._render_warnings(data), gap=4))
        lines.append("")

        # Row 3: Recommendations
        lines.extend(self._render_recommendations(rec))
        lines.append("")

        # Row 4: Positions
        if data.progress.current_positions:
            lines.extend(self._render_positions(data.progress))
            lines.append("")

        lines.append("─" * self.width)
        lines.append(f"  {rec.summary}")
        lines.append("═" * self.width)
        return "\n".join(lines)

    def _render_target(self, data: DashboardData) -> list[str]:
        progress = data.progress
        rec = data.recommendation
        content = [
            f"{progress_icon(progress.progress_percent)} 当前: {progress.current_daily_return:.2f}% / 目标 {progress.daily_target:.2f}%",
            f"{progress_bar(progress.progress_percent, 0, 100, width=20)} {progress.progress_percent:.0f}%",
            f"执行推荐后: {rec.expected_daily_return:.2f}% ({rec.progress_to_target:.0f}%)",
            f"达标还需仓位: {progress.positions_needed_for_target}",
        ]
        content.extend(f"• {s}" for s in progress.suggestions)
        return box("日收益目标", content, self.panel_width)

    def _render_capital(self, data: DashboardData) -> list[str]:
        summary = data.balances
        progress = data.progress
        utilization = progress.total_deployed / summary.total_balance * 100 if summary.total_balance > 0 else 0.0
        content = [
            f"总资金: {format_usd(summary.total_balance)}",
            f"已部署: {format_usd(progress.total_deployed)}  可用: {format_usd(summary.total_available)}",
            f"利用率: {progress_bar(utilization, 0, 100, width=10)} {format_pct(utilization, 0)}",
        ]
        for balance in summary.balances:
            content.append(
                f"{balance.exchange:<12} {format_usd(balance.available, 0):>10} / {format_usd(balance.total, 0)}"
            )
        if not summary.balances:
            content.append("未配置余额 (strategy set-balance)")
        return box("资金", content, self.panel_width)

    def _render_diversification(self, data: DashboardData) -> list[str]:
        analysis = data.diversification
        content = [f"评分: {progress_bar(analysis.score, 0, 100, width=10)} {analysis.score:.0f}/100"]
        for exchange, exposure in sorted(analysis.exchange_exposure.items(), key=lambda kv: -kv[1]):
            content.append(f"{exchange:<12} {progress_bar(exposure, 0, 100, width=10)} {exposure:5.1f}%")
        for symbol, exposure in sorted(analysis.symbol_exposure.items(), key=lambda kv: -kv[1])[:3]:
            content.append(f"{symbol:<12} {exposure:5.1f}%")
        content.extend(f"• {s}" for s in analysis.suggestions[:2])
        return box("分散度", content, self.panel_width)

    def _render_warnings(self, data: DashboardData) -> list[str]:
        content = list(data.recommendation.warnings)
        content.extend(f"⚠️ {w}" for w in data.diversification.warnings if w != "No positions open")
        content.extend(
            f"↔ {s.from_exchange} → {s.to_exchange}: {format_usd(s.amount, 0)}"
            for s in data.balances.rebalance_suggestions
        )
        if not content:
            content = ["✅ 无预警"]
        return box("预警", content, self.panel_width)

    def _render_recommendations(self, rec: StrategyRecommendation) -> list[str]:
        columns = [
            ("#", 4),
            ("Symbol", 14),
            ("Long", 12),
            ("Short", 12),
            ("Spread", 10),
            ("Size", 12),
            ("Exp.Ret", 10),
            ("Risk", 8),
            ("Score", 9),
        ]
        lines = [f"📈 推荐机会 ({len(rec.opportunities)})", table_header(columns), table_separator(columns)]
        if not rec.opportunities:
            lines.append("  (无推荐)")
            return lines
        for i, item in enumerate(rec.opportunities, 1):
            opp = item.opportunity
            lines.append(
                table_row(
                    [
                        str(i),
                        opp.symbol,
                        item.exchange.long,
                        item.exchange.short,
                        f"{opp.spread * 100:.2f}%",
                        format_usd(item.recommended_size, 0),
                        f"{item.expected_return:.3f}%",
                        f"{risk_icon(risk_level_of(item.risk_score))}{item.risk_score:.0f}",
                        f"{item.score:.2f}",
                    ],
                    columns,
                )
            )
        return lines

    def _render_positions(self, progress: TargetProgress) -> list[str]:
        columns = [
            ("Symbol", 14),
            ("Pair", 18),
            ("Size", 12),
            ("PnL", 12),
            ("PnL%", 9),
            ("Daily", 9),
            ("Hours", 8),
        ]
        lines = [
            f"💼 当前持仓 ({len(progress.current_positions)})",
            table_header(columns),
            table_separator(columns),
        ]
        for pos in progress.current_positions:
            lines.append(
                table_row(
                    [
                        pos.symbol,
                        pos.pair or f"{pos.long_exchange}-{pos.short_exchange}",
                        format_usd(pos.size, 0),
                        format_usd(pos.unrealized_pnl, signed=True),
                        format_pct(pos.unrealized_pnl_percent, 2, signed=True),
                        format_pct(pos.expected_daily_return, 2),
                        f"{pos.hours_open:.1f}",
                    ],
                    columns,
                )
            )
        return lines
