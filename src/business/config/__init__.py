"""
Configuration Management - 配置管理

加载和管理业务层配置：
- StrategyConfig: 策略引擎常量 (YAML + 环境变量)
- ClientConfig: CLI/API 客户端设置 (JSON + .env)
- ProfileStore: CapitalProfile 持久化
"""

from src.business.config.client_config import ClientConfig
from src.business.config.profile_store import ProfileStore
from src.business.config.strategy_config import StrategyConfig

__all__ = ["ClientConfig", "ProfileStore", "StrategyConfig"]
