"""
Execute Command - 执行套利机会

向平台提交开仓请求 (对冲双腿)。
"""

import logging
import sys
from typing import Optional

import click

from src.business.cli.utils import echo_json, get_client, setup_logging
from src.business.config.client_config import ClientConfig
from src.data.models.enums import ExecutionMode

logger = logging.getLogger(__name__)

MIN_AMOUNT = 10.0
LARGE_AMOUNT = 10000.0


@click.command()
@click.argument("opportunity_id")
@click.option("--amount", "-a", type=float, default=None, help="下单金额 (USD)，默认取配置 default_amount")
@click.option(
    "--mode",
    "-m",
    type=click.Choice([m.value for m in ExecutionMode]),
    default=ExecutionMode.AUTO.value,
    help="执行模式",
)
@click.option("--dry-run", is_flag=True, help="只显示将要执行的操作，不下单")
@click.option(
    "--output",
    "-o",
    type=click.Choice(["text", "json"]),
    default="text",
    help="输出格式",
)
@click.option("--verbose", "-v", is_flag=True, help="显示详细日志")
def execute(
    opportunity_id: str,
    amount: Optional[float],
    mode: str,
    dry_run: bool,
    output: str,
    verbose: bool,
) -> None:
    """执行套利机会

    \b
    示例：
      fundarb execute abc123 --amount 100
      fundarb execute abc123 -a 500 --mode manual
      fundarb execute abc123 -a 100 --dry-run
    """
    setup_logging(verbose)

    if amount is None:
        amount = ClientConfig.load().default_amount
    if amount is None or amount <= 0:
        raise click.ClickException("Invalid amount. Must be a positive number.")
    if amount < MIN_AMOUNT:
        raise click.ClickException(f"Minimum amount is ${MIN_AMOUNT:g}")
    if amount > LARGE_AMOUNT:
        click.echo(f"⚠️ 大额下单: ${amount:,.2f}，建议从小额开始")

    if dry_run:
        click.echo("🔍 Dry run - 不会实际下单")
        click.echo(f"  机会: {opportunity_id}")
        click.echo(f"  金额: ${amount:,.2f}")
        click.echo(f"  模式: {mode}")
        return

    client = get_client(require_token=True, debug=verbose)
    try:
        result = client.execute_opportunity(opportunity_id, amount, mode=mode)
    except Exception as e:
        logger.exception("执行失败")
        click.echo(f"❌ 错误: {e}", err=True)
        sys.exit(1)

    if output == "json":
        echo_json(result)
        return

    click.echo("✅ 已提交执行")
    click.echo(f"  Job ID:       {result.job_id}")
    click.echo(f"  Execution ID: {result.execution_id}")
    click.echo(f"  金额:         ${amount:,.2f}")
    if result.message:
        click.echo(f"  {result.message}")
    click.echo("查看进度: fundarb portfolio")
