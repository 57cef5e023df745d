"""
Portfolio Command - 持仓组合

显示平台上的 execution 及其盈亏、资金费。
"""

import logging
import sys
from typing import Optional

import click

from src.business.cli.dashboard.components import table_header, table_row, table_separator
from src.business.cli.utils import echo_json, get_client, setup_logging
from src.data.models.portfolio import Portfolio

logger = logging.getLogger(__name__)

STATUS_ICONS = {
    "queued": "⏳",
    "running": "🟢",
    "closing": "🟡",
    "closed": "⚪",
    "failed": "🔴",
}

COLUMNS = [
    ("Symbol", 14),
    ("Status", 12),
    ("Long", 10),
    ("Short", 10),
    ("Amount", 11),
    ("PnL", 11),
    ("Funding", 10),
    ("ID", 12),
]


@click.command()
@click.option("--execution", "-e", "execution_id", default=None, help="只查看指定 execution")
@click.option(
    "--output",
    "-o",
    type=click.Choice(["text", "json"]),
    default="text",
    help="输出格式",
)
@click.option("--verbose", "-v", is_flag=True, help="显示详细日志")
def portfolio(execution_id: Optional[str], output: str, verbose: bool) -> None:
    """查看持仓组合

    \b
    示例：
      fundarb portfolio
      fundarb portfolio -e exec_123 -o json
    """
    setup_logging(verbose)
    client = get_client(require_token=True, debug=verbose)
    try:
        data = client.get_portfolio(execution_id)
    except Exception as e:
        logger.exception("获取持仓失败")
        click.echo(f"❌ 错误: {e}", err=True)
        sys.exit(1)

    if output == "json":
        echo_json(data)
        return
    render_portfolio(data)


def render_portfolio(data: Portfolio) -> None:
    """文本输出持仓 (monitor 命令复用)"""
    s = data.summary
    click.echo("\n📊 持仓组合\n")
    click.echo(f"  Executions: {s.total_executions} (运行中 {s.running_executions})")
    click.echo(f"  投入:       ${s.total_invested:,.2f}")
    click.echo(f"  未实现盈亏: ${s.total_unrealized_pnl:+,.2f}")
    click.echo(f"  已实现盈亏: ${s.total_realized_pnl:+,.2f}")
    click.echo(f"  资金费:     +${s.total_funding_received:,.2f} / -${s.total_funding_paid:,.2f}")
    click.echo(f"  加权 ROI:   {s.weighted_roi * 100:+.2f}%  (日 {s.daily_roi * 100:+.3f}%)")

    if not data.executions:
        click.echo("\n📭 暂无持仓")
        return

    click.echo("")
    click.echo(table_header(COLUMNS))
    click.echo(table_separator(COLUMNS))
    for item in data.executions:
        ex = item.execution
        icon = STATUS_ICONS.get(ex.status.value, "")
        click.echo(
            table_row(
                [
                    ex.symbol,
                    f"{icon} {ex.status.value}",
                    ex.long_exchange,
                    ex.short_exchange,
                    f"${ex.input_amount:,.2f}",
                    f"${item.pnl.total_pnl:+,.2f}",
                    f"${item.funding.net_funding:+,.2f}",
                    ex.id[:12],
                ],
                COLUMNS,
            )
        )
