"""
Business Layer CLI - 业务层命令行工具

提供命令：
- opportunities: 查询套利机会
- execute / close: 开仓与平仓
- portfolio / funding / monitor: 持仓与资金费
- config: 客户端配置
- strategy: 策略档案与推荐
- dashboard: 策略仪表盘
"""

from src.business.cli.main import cli

__all__ = ["cli"]
