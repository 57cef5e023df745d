"""
Config Command - 客户端配置管理

管理 ~/.fundarb/config.json 中的 token、API 地址和默认值。
"""

import click

from src.business.config.client_config import ClientConfig, get_config_path, mask_token


@click.group()
def config() -> None:
    """管理客户端配置"""


@config.command("show")
def show() -> None:
    """显示当前配置 (含环境变量覆盖)"""
    cfg = ClientConfig.load()
    click.echo("\n⚙️ 配置\n")
    click.echo(f"  token:                 {mask_token(cfg.resolved_token())}")
    click.echo(f"  base_url:              {cfg.resolved_base_url()}")
    click.echo(f"  default_exchange_pair: {cfg.default_exchange_pair or '(not set)'}")
    amount = f"${cfg.default_amount:,.2f}" if cfg.default_amount is not None else "(not set)"
    click.echo(f"  default_amount:        {amount}")
    click.echo(f"\n  文件: {get_config_path()}")


@config.command("set", context_settings={"ignore_unknown_options": True})
@click.argument("key")
@click.argument("value")
def set_(key: str, value: str) -> None:
    """设置配置项

    \b
    示例：
      fundarb config set token <token>
      fundarb config set default_amount 100
    """
    cfg = ClientConfig.load()
    try:
        cfg.set_value(key, value)
    except ValueError as e:
        raise click.ClickException(str(e))
    cfg.save()
    shown = mask_token(value) if key == "token" else value
    click.echo(f"✅ {key} = {shown}")


@config.command("unset")
@click.argument("key")
def unset(key: str) -> None:
    """删除配置项"""
    cfg = ClientConfig.load()
    try:
        cfg.unset(key)
    except ValueError as e:
        raise click.ClickException(str(e))
    cfg.save()
    click.echo(f"✅ 已删除 {key}")


@config.command("path")
def path() -> None:
    """显示配置文件路径"""
    click.echo(str(get_config_path()))
