"""
Close Command - 平仓

关闭运行中的 execution (同时平掉两腿)。
"""

import logging
import sys

import click

from src.business.cli.utils import echo_json, get_client, setup_logging

logger = logging.getLogger(__name__)


@click.command()
@click.argument("execution_id")
@click.option("--force", "-f", is_flag=True, help="确认平仓")
@click.option(
    "--output",
    "-o",
    type=click.Choice(["text", "json"]),
    default="text",
    help="输出格式",
)
@click.option("--verbose", "-v", is_flag=True, help="显示详细日志")
def close(execution_id: str, force: bool, output: str, verbose: bool) -> None:
    """平仓 execution

    \b
    示例：
      fundarb close exec_123 --force
    """
    setup_logging(verbose)

    if not force:
        click.echo(f"⚠️ 即将平仓: {execution_id}")
        click.echo("将同时关闭两腿并实现盈亏。")
        raise click.ClickException("Use --force flag to confirm closing")

    client = get_client(require_token=True, debug=verbose)
    try:
        result = client.close_execution(execution_id)
    except Exception as e:
        logger.exception("平仓失败")
        click.echo(f"❌ 错误: {e}", err=True)
        sys.exit(1)

    if output == "json":
        echo_json(result)
        return

    click.echo("✅ 已平仓")
    click.echo(f"  Execution ID: {result.execution_id}")
    click.echo(f"  最终盈亏:     ${result.final_pnl:+,.2f}")
    click.echo(f"  ROI:          {result.final_roi_pct:+.2f}%")
    click.echo(f"  资金费合计:   ${result.total_funding:,.2f}")
    click.echo(f"  持仓时长:     {result.duration_hours:.1f} 小时")
