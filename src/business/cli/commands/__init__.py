"""
CLI Commands - 命令行子命令
"""

from src.business.cli.commands.close import close
from src.business.cli.commands.config import config
from src.business.cli.commands.dashboard import dashboard
from src.business.cli.commands.execute import execute
from src.business.cli.commands.funding import funding
from src.business.cli.commands.monitor import monitor
from src.business.cli.commands.opportunities import opportunities
from src.business.cli.commands.portfolio import portfolio
from src.business.cli.commands.strategy import strategy

__all__ = [
    "opportunities",
    "execute",
    "portfolio",
    "close",
    "funding",
    "monitor",
    "config",
    "strategy",
    "dashboard",
]
