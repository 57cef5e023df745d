"""
Client Configuration - 客户端配置

CLI / API 客户端设置，保存在 ~/.fundarb/config.json：
- token: API Bearer token
- base_url: API 地址
- default_exchange_pair: 默认交易所对
- default_amount: 默认下单金额

优先级: 环境变量 (FUNDARB_TOKEN / FUNDARB_API_URL, 支持 .env) > 配置文件 > 默认值
配置目录可通过 FUNDARB_HOME 覆盖。
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from src.data.providers.platform_client import DEFAULT_BASE_URL, PlatformClientConfig

logger = logging.getLogger(__name__)

CONFIG_KEYS = ("token", "base_url", "default_exchange_pair", "default_amount")

# CLI 中使用的别名 (与原配置文件的驼峰键兼容)
KEY_ALIASES = {
    "baseUrl": "base_url",
    "defaultExchangePair": "default_exchange_pair",
    "defaultAmount": "default_amount",
}


def get_config_dir() -> Path:
    """配置目录 (~/.fundarb 或 $FUNDARB_HOME)"""
    home = os.getenv("FUNDARB_HOME")
    if home:
        return Path(home).expanduser()
    return Path.home() / ".fundarb"


def get_config_path() -> Path:
    """配置文件路径"""
    return get_config_dir() / "config.json"


def normalize_key(key: str) -> str:
    """规范化配置键名

    Raises:
        ValueError: 未知键
    """
    key = KEY_ALIASES.get(key, key)
    if key not in CONFIG_KEYS:
        raise ValueError(f"Unknown config key: {key}. Valid keys: {', '.join(CONFIG_KEYS)}")
    return key


@dataclass
class ClientConfig:
    """客户端配置 (文件中的原始值，不含环境变量覆盖)"""

    token: str | None = None
    base_url: str | None = None
    default_exchange_pair: str | None = None
    default_amount: float | None = None

    def to_dict(self) -> dict[str, Any]:
        """转换为字典 (省略未设置项)"""
        data = {
            "token": self.token,
            "base_url": self.base_url,
            "default_exchange_pair": self.default_exchange_pair,
            "default_amount": self.default_amount,
        }
        return {k: v for k, v in data.items() if v is not None}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClientConfig":
        """从字典创建配置"""
        normalized = {KEY_ALIASES.get(k, k): v for k, v in data.items()}
        amount = normalized.get("default_amount")
        return cls(
            token=normalized.get("token"),
            base_url=normalized.get("base_url"),
            default_exchange_pair=normalized.get("default_exchange_pair"),
            default_amount=float(amount) if amount is not None else None,
        )

    @classmethod
    def load(cls, path: Path | None = None) -> "ClientConfig":
        """加载配置文件，文件不存在或损坏时返回空配置"""
        path = path or get_config_path()
        if not path.exists():
            return cls()
        try:
            with open(path, "r", encoding="utf-8") as f:
                return cls.from_dict(json.load(f) or {})
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to read config {path}: {e}")
            return cls()

    def save(self, path: Path | None = None) -> Path:
        """保存配置文件"""
        path = path or get_config_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)
        return path

    def set_value(self, key: str, value: str) -> None:
        """设置配置项

        Raises:
            ValueError: 未知键或 default_amount 非正数
        """
        key = normalize_key(key)
        if key == "default_amount":
            try:
                amount = float(value)
            except ValueError:
                raise ValueError("default_amount must be a number")
            if amount <= 0:
                raise ValueError("default_amount must be a positive number")
            self.default_amount = amount
        else:
            setattr(self, key, value)

    def unset(self, key: str) -> None:
        """删除配置项"""
        setattr(self, normalize_key(key), None)

    def resolved_token(self) -> str | None:
        """生效的 token (环境变量优先)"""
        load_dotenv()
        return os.getenv("FUNDARB_TOKEN") or self.token

    def resolved_base_url(self) -> str:
        """生效的 API 地址 (环境变量优先)"""
        load_dotenv()
        return os.getenv("FUNDARB_API_URL") or self.base_url or DEFAULT_BASE_URL

    def to_client_config(self, timeout: float | None = None, debug: bool = False) -> PlatformClientConfig:
        """转换为 PlatformClientConfig"""
        config = PlatformClientConfig(
            base_url=self.resolved_base_url(),
            token=self.resolved_token(),
            debug=debug,
        )
        if timeout is not None:
            config.timeout = timeout
        return config


def mask_token(token: str | None) -> str:
    """隐藏 token 中间部分"""
    if not token:
        return "(not set)"
    if len(token) <= 12:
        return token[:2] + "..."
    return f"{token[:8]}...{token[-4:]}"
