"""
Strategy Configuration - 策略引擎配置

策略引擎的业务常量：最小仓位、保证金比例、再平衡阈值、止损倒挂阈值等。

优先级: 环境变量 (STRATEGY_<FIELD>) > config/strategy/strategy.yaml > 默认值
"""

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from src.business.config.config_utils import env_float, env_int, env_str, merge_overrides
from src.engine.account.balance import (
    DONOR_AVAILABLE_THRESHOLD,
    LOW_AVAILABLE_THRESHOLD,
    LOW_BALANCE_TRANSFER,
    MARGIN_RATIO,
    REBALANCE_IMBALANCE_RATIO,
    REBALANCE_MIN_DIFF,
)
from src.engine.account.position_sizing import MIN_VIABLE_POSITION_SIZE
from src.engine.position.stop_loss import SPREAD_INVERSION_THRESHOLD

ENV_PREFIX = "STRATEGY_"


@dataclass
class StrategyConfig:
    """策略引擎配置"""

    # 仓位
    min_viable_position_size: float = MIN_VIABLE_POSITION_SIZE

    # 余额 / 保证金
    margin_ratio: float = MARGIN_RATIO

    # 再平衡建议
    rebalance_imbalance_ratio: float = REBALANCE_IMBALANCE_RATIO
    rebalance_min_diff: float = REBALANCE_MIN_DIFF
    low_available_threshold: float = LOW_AVAILABLE_THRESHOLD
    donor_available_threshold: float = DONOR_AVAILABLE_THRESHOLD
    low_balance_transfer: float = LOW_BALANCE_TRANSFER

    # 止损
    spread_inversion_threshold: float = SPREAD_INVERSION_THRESHOLD

    # 目标进度: 无持仓时的单仓位预期日收益 (%)
    default_return_per_position: float = 0.2

    # 机会拉取
    opportunity_fetch_limit: int = 20
    opportunity_sort_by: str = "spread"

    def __post_init__(self) -> None:
        if self.opportunity_fetch_limit <= 0:
            raise ValueError("opportunity_fetch_limit must be positive")
        if self.min_viable_position_size < 0:
            raise ValueError("min_viable_position_size must be non-negative")

    @property
    def rebalance_options(self) -> dict[str, float]:
        """calc_balance_summary 的再平衡阈值参数"""
        return {
            "imbalance_ratio": self.rebalance_imbalance_ratio,
            "min_diff": self.rebalance_min_diff,
            "low_threshold": self.low_available_threshold,
            "donor_threshold": self.donor_available_threshold,
            "low_transfer": self.low_balance_transfer,
        }

    def to_dict(self) -> dict[str, Any]:
        """转换为字典"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StrategyConfig":
        """从字典创建配置 (忽略未知键)"""
        data = data or {}
        section = data.get("strategy") or data
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in section.items() if k in known})

    @classmethod
    def from_yaml(cls, path: str | Path) -> "StrategyConfig":
        """从 YAML 文件加载配置"""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)

    def with_env_overrides(self) -> "StrategyConfig":
        """应用环境变量覆盖"""
        values: dict[str, Any] = {}
        for f in fields(self):
            key = f"{ENV_PREFIX}{f.name.upper()}"
            current = getattr(self, f.name)
            if f.type is int:
                values[f.name] = env_int(key, current)
            elif f.type is float:
                values[f.name] = env_float(key, current)
            else:
                values[f.name] = env_str(key, current)
        return StrategyConfig(**values)

    @classmethod
    def load(cls, overrides: dict[str, Any] | None = None) -> "StrategyConfig":
        """加载默认配置

        Args:
            overrides: 额外覆盖 (优先级低于环境变量)

        Returns:
            StrategyConfig
        """
        config_file = (
            Path(__file__).parent.parent.parent.parent / "config" / "strategy" / "strategy.yaml"
        )
        base = cls.from_yaml(config_file).to_dict() if config_file.exists() else cls().to_dict()
        if overrides:
            base = merge_overrides(base, overrides)
        return cls.from_dict(base).with_env_overrides()
