"""
Config Utilities - 配置工具函数

所有配置模块共享的工具函数。
"""

import os
from typing import Any


def merge_overrides(
    base: dict[str, Any],
    overrides: dict[str, Any],
) -> dict[str, Any]:
    """递归深合并覆盖配置到基础配置

    - 嵌套 dict：递归合并
    - 其他类型：直接覆盖
    - None 值：跳过 (保留基础值)

    Args:
        base: 基础配置字典
        overrides: 覆盖字典

    Returns:
        合并后的配置字典（不修改原字典）
    """
    result = base.copy()
    for key, value in overrides.items():
        if value is None:
            continue
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_overrides(result[key], value)
        else:
            result[key] = value
    return result


def env_float(key: str, default: float) -> float:
    """从环境变量获取 float"""
    val = os.getenv(key)
    if val is not None:
        try:
            return float(val)
        except ValueError:
            pass
    return default


def env_int(key: str, default: int) -> int:
    """从环境变量获取 int"""
    val = os.getenv(key)
    if val is not None:
        try:
            return int(val)
        except ValueError:
            pass
    return default


def env_str(key: str, default: str | None) -> str | None:
    """从环境变量获取 str (空字符串视为未设置)"""
    val = os.getenv(key)
    if val:
        return val
    return default
