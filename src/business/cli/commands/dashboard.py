"""
Dashboard Command - 策略仪表盘

显示完整的策略看板，包括：
- 日收益目标进度
- 资金与各交易所余额
- 分散度
- 预警（止损、集中度、再平衡）
- 推荐机会
- 当前持仓
"""

import logging
import os
import sys
import time

import click

from src.business.cli.dashboard import DashboardRenderer, collect_dashboard_data
from src.business.cli.utils import build_engine, require_profile, setup_logging
from src.business.strategy.engine import StrategyEngine

logger = logging.getLogger(__name__)


@click.command()
@click.option(
    "--refresh",
    "-r",
    type=int,
    default=0,
    help="自动刷新间隔（秒），0=不刷新",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="显示详细日志",
)
def dashboard(refresh: int, verbose: bool) -> None:
    """策略仪表盘

    显示日收益目标、资金、分散度、预警、推荐机会和持仓。

    \b
    示例：
      # 单次渲染
      fundarb dashboard

      # 自动刷新（每30秒）
      fundarb dashboard --refresh 30
    """
    setup_logging(verbose)
    profile = require_profile()

    try:
        engine = build_engine(profile)
        renderer = DashboardRenderer()

        if refresh > 0:
            _run_refresh_loop(renderer, engine, refresh)
        else:
            click.echo(renderer.render(collect_dashboard_data(engine)))

    except KeyboardInterrupt:
        click.echo("\n👋 已退出仪表盘")
        sys.exit(0)
    except Exception as e:
        logger.exception("仪表盘出错")
        click.echo(f"❌ 错误: {e}", err=True)
        sys.exit(1)


def _run_refresh_loop(renderer: DashboardRenderer, engine: StrategyEngine, interval: int) -> None:
    """运行自动刷新循环

    Args:
        renderer: Dashboard渲染器
        engine: 已配置档案的策略引擎
        interval: 刷新间隔（秒）
    """
    click.echo(f"🔄 自动刷新模式，间隔 {interval} 秒（按 Ctrl+C 退出）")
    click.echo()

    while True:
        os.system("clear" if os.name == "posix" else "cls")

        try:
            click.echo(renderer.render(collect_dashboard_data(engine)))
            click.echo(f"\n⏱️ 下次刷新: {interval}秒后")
        except Exception as e:
            click.echo(f"⚠️ 刷新出错: {e}")

        time.sleep(interval)
