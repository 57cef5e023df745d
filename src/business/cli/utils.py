"""
CLI Utilities - 命令行公共函数

日志配置、客户端/引擎构建、输出格式化。
"""

import json
import logging
from dataclasses import asdict, is_dataclass
from typing import Any

import click

from src.business.config.client_config import ClientConfig
from src.business.config.profile_store import ProfileStore
from src.business.config.strategy_config import StrategyConfig
from src.business.strategy.engine import StrategyEngine
from src.data.providers.platform_client import PlatformClient
from src.engine.models.enums import RiskLevel
from src.engine.models.profile import CapitalProfile

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

AUTH_HINT = "Authentication required. Set FUNDARB_TOKEN or run: fundarb config set token <token>"


def setup_logging(verbose: bool, default_level: int = logging.WARNING) -> None:
    """配置日志 (--verbose 时为 DEBUG)"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else default_level,
        format=LOG_FORMAT,
    )


def get_client(require_token: bool = False, debug: bool = False) -> PlatformClient:
    """根据配置创建平台客户端

    Raises:
        click.ClickException: require_token 且未配置 token
    """
    config = ClientConfig.load()
    client_config = config.to_client_config(debug=debug)
    if require_token and not client_config.token:
        raise click.ClickException(AUTH_HINT)
    return PlatformClient(client_config)


def require_profile(store: ProfileStore | None = None) -> CapitalProfile:
    """读取策略档案，不存在时退出

    Raises:
        click.ClickException: 未初始化档案
    """
    profile = (store or ProfileStore()).load()
    if profile is None:
        raise click.ClickException("No profile configured. Run: fundarb strategy init")
    return profile


def build_engine(profile: CapitalProfile, client: PlatformClient | None = None) -> StrategyEngine:
    """创建已配置档案的策略引擎"""
    return StrategyEngine(
        client or get_client(),
        profile=profile,
        config=StrategyConfig.load(),
    )


def risk_badge(level: RiskLevel) -> str:
    """风险等级徽标"""
    badges = {
        RiskLevel.LOW: "🟢 LOW",
        RiskLevel.MEDIUM: "🟡 MEDIUM",
        RiskLevel.HIGH: "🔴 HIGH",
    }
    return badges.get(level, level.value)


def to_jsonable(obj: Any) -> Any:
    """dataclass / 列表 -> 可 JSON 序列化对象"""
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    if isinstance(obj, list):
        return [to_jsonable(item) for item in obj]
    return obj


def echo_json(obj: Any) -> None:
    """以 JSON 输出"""
    click.echo(json.dumps(to_jsonable(obj), indent=2, ensure_ascii=False, default=str))
