"""
Business Layer - 业务模块层

资金费率套利工具的业务逻辑层，包含：
- strategy: 策略推荐引擎
- config: 配置管理 (策略参数、客户端配置、档案存储)
- cli: 命令行与仪表盘
"""
