"""
CLI Main Entry Point - 命令行主入口

使用 Click 库构建命令行工具。
"""

import click

from src.business.cli.commands.close import close
from src.business.cli.commands.config import config
from src.business.cli.commands.dashboard import dashboard
from src.business.cli.commands.execute import execute
from src.business.cli.commands.funding import funding
from src.business.cli.commands.monitor import monitor
from src.business.cli.commands.opportunities import opportunities
from src.business.cli.commands.portfolio import portfolio
from src.business.cli.commands.strategy import strategy


@click.group()
@click.version_option(version="0.1.0", prog_name="fundarb")
def cli() -> None:
    """资金费率套利工具 - 命令行

    提供机会查询、执行、持仓监控和策略推荐等功能。
    """
    pass


# 注册子命令
cli.add_command(opportunities)
cli.add_command(execute)
cli.add_command(portfolio)
cli.add_command(close)
cli.add_command(funding)
cli.add_command(monitor)
cli.add_command(config)
cli.add_command(strategy)
cli.add_command(dashboard)


if __name__ == "__main__":
    cli()
