"""
Monitor Command - 持仓监控命令

定时轮询平台持仓，刷新盈亏显示。
"""

import logging
import os
import sys
import time
from datetime import datetime
from typing import Optional

import click

from src.business.cli.commands.portfolio import render_portfolio
from src.business.cli.utils import get_client, setup_logging

logger = logging.getLogger(__name__)


@click.command()
@click.option(
    "--interval",
    "-i",
    type=int,
    default=30,
    help="刷新间隔 (秒)",
)
@click.option("--execution", "-e", "execution_id", default=None, help="只监控指定 execution")
@click.option("--verbose", "-v", is_flag=True, help="显示详细日志")
def monitor(interval: int, execution_id: Optional[str], verbose: bool) -> None:
    """持续监控持仓 (Ctrl+C 退出)

    \b
    示例：
      fundarb monitor
      fundarb monitor -i 60 -e exec_123
    """
    setup_logging(verbose)
    if interval <= 0:
        raise click.BadParameter("interval must be positive", param_hint="--interval")

    client = get_client(require_token=True, debug=verbose)
    try:
        while True:
            try:
                data = client.get_portfolio(execution_id)
            except Exception as e:
                # 单次失败不退出，下个周期重试
                logger.warning(f"获取持仓失败: {e}")
                click.echo(f"⚠️ 获取持仓失败: {e}", err=True)
            else:
                os.system("clear" if os.name == "posix" else "cls")
                click.echo(f"🔄 {datetime.now():%Y-%m-%d %H:%M:%S}  每 {interval}s 刷新，Ctrl+C 退出")
                render_portfolio(data)
            time.sleep(interval)
    except KeyboardInterrupt:
        click.echo("\n👋 已退出监控")
        sys.exit(0)
