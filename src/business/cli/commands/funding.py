"""
Funding Command - 资金费统计
"""

import logging
import sys

import click

from src.business.cli.utils import echo_json, get_client, setup_logging

logger = logging.getLogger(__name__)


@click.command()
@click.option(
    "--output",
    "-o",
    type=click.Choice(["text", "json"]),
    default="text",
    help="输出格式",
)
@click.option("--verbose", "-v", is_flag=True, help="显示详细日志")
def funding(output: str, verbose: bool) -> None:
    """查看资金费收支

    \b
    示例：
      fundarb funding
    """
    setup_logging(verbose)
    client = get_client(require_token=True, debug=verbose)
    try:
        fees = client.get_funding_fees()
    except Exception as e:
        logger.exception("获取资金费失败")
        click.echo(f"❌ 错误: {e}", err=True)
        sys.exit(1)

    if output == "json":
        echo_json(fees)
        return

    click.echo("\n💰 资金费\n")
    click.echo(f"  净资金费: ${fees.total_funding_fee:+,.2f}")
    click.echo(f"  收到:     ${fees.total_received:,.2f}")
    click.echo(f"  支付:     ${fees.total_paid:,.2f}")
    click.echo("")
    click.echo(f"  {'':<8} {'收到':>12} {'支付':>12} {'净额':>12}")
    for label, flow in (("运行中", fees.running), ("已平仓", fees.closed)):
        click.echo(f"  {label:<6} {flow.received:>12,.2f} {flow.paid:>12,.2f} {flow.net:>+12,.2f}")
