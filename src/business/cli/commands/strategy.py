"""
Strategy Command - 策略引擎命令

管理资金档案 (~/.fundarb/profile.json)，生成推荐、目标进度、
分散度和余额分析。
"""

import logging
import sys
from dataclasses import replace
from typing import Optional

import click

from src.business.cli.dashboard.components import (
    format_pct,
    format_usd,
    progress_bar,
    risk_icon,
    risk_level_of,
    table_header,
    table_row,
    table_separator,
)
from src.business.cli.utils import build_engine, get_client, require_profile, risk_badge, setup_logging
from src.business.config.profile_store import ProfileStore
from src.business.strategy.engine import StrategyEngine, get_default_profile, parse_risk_profile
from src.business.strategy.models import StrategyError
from src.engine.models.profile import CapitalProfile, ExchangeConfig, get_all_risk_profiles, get_risk_profile

logger = logging.getLogger(__name__)


def _bullets(title: str, items: list[str]) -> None:
    if not items:
        return
    click.echo(title)
    for item in items:
        click.echo(f"  • {item}")
    click.echo("")


def _exposure_bar(percent: float) -> str:
    """10 格暴露条"""
    return progress_bar(percent, 0, 100, width=10)


def _print_settings(profile: CapitalProfile) -> None:
    click.echo("设置:")
    click.echo(f"  风险类型:   {profile.risk_profile.value}")
    click.echo(f"  日收益目标: {profile.daily_target_percent:g}%")
    click.echo(f"  单仓上限:   {profile.max_position_size_percent:g}% 总资金")
    click.echo(f"  最多持仓:   {profile.max_open_positions}")
    click.echo(f"  最小价差:   {profile.min_spread * 100:.1f}%")
    click.echo("")


def _open_engine(profile: CapitalProfile) -> StrategyEngine:
    """只做档案修改的引擎 (不访问网络)"""
    try:
        return StrategyEngine(get_client(), profile=profile)
    except StrategyError as e:
        raise click.ClickException(str(e))


@click.group()
def strategy() -> None:
    """策略引擎：档案、推荐、进度"""


@strategy.command("init")
@click.option("--risk", default="moderate", help="风险类型 (conservative, moderate, aggressive)")
@click.option("--target", type=float, default=1.0, help="日收益目标 %")
@click.option("--bybit", type=float, default=None, help="Bybit 余额 (USDT)")
@click.option("--kucoin", type=float, default=None, help="KuCoin 余额 (USDT)")
def init(risk: str, target: float, bybit: Optional[float], kucoin: Optional[float]) -> None:
    """初始化资金档案

    \b
    示例：
      fundarb strategy init --risk conservative --target 0.5 --bybit 1000 --kucoin 1000
    """
    click.echo("\n🤖 资金档案初始化\n")

    try:
        risk_type = parse_risk_profile(risk)
    except StrategyError as e:
        raise click.ClickException(str(e))
    preset = get_risk_profile(risk_type)

    balances = {}
    for exchange, amount in (("bybit", bybit), ("kucoin", kucoin)):
        if amount is None:
            continue
        if amount < 0:
            raise click.ClickException(f"{exchange} balance must be a positive number")
        balances[exchange] = amount

    profile = replace(
        get_default_profile(),
        risk_profile=risk_type,
        min_spread=preset.min_spread,
        max_position_size_percent=preset.max_position_size_percent,
        daily_target_percent=target,
        balances=balances,
    )
    engine = _open_engine(profile)
    path = ProfileStore().save(engine.profile)

    _print_settings(engine.profile)
    click.echo("余额:")
    for exchange, balance in engine.profile.balances.items():
        click.echo(f"  {exchange:<14}{format_usd(balance)}")
    click.echo("")

    if not balances:
        click.echo("⚠️ 未配置余额，使用: fundarb strategy set-balance bybit 1000")
    click.echo(f"✅ 档案已保存: {path}")


@strategy.command("show")
def show() -> None:
    """显示当前档案"""
    profile = require_profile()

    click.echo("\n🤖 资金档案\n")
    _print_settings(profile)

    click.echo("交易所:")
    for exchange, cfg in profile.exchanges.items():
        status = "enabled" if cfg.enabled else "disabled"
        balance = profile.balances.get(exchange)
        balance_str = format_usd(balance) if balance else "no balance"
        click.echo(f"  {exchange:<14}{status:<10}{balance_str}")
    click.echo("")
    click.echo(f"总资金: {format_usd(profile.total_capital)}\n")


@strategy.command("recommend")
@click.option("--limit", "-n", type=int, default=5, help="最多显示推荐数")
@click.option("--verbose", "-v", is_flag=True, help="显示详细日志")
def recommend(limit: int, verbose: bool) -> None:
    """按当前档案生成推荐"""
    setup_logging(verbose)
    profile = require_profile()

    try:
        engine = build_engine(profile)
        rec = engine.get_recommendations()
    except Exception as e:
        logger.exception("生成推荐出错")
        click.echo(f"❌ 错误: {e}", err=True)
        sys.exit(1)

    click.echo("\n📊 策略推荐\n")
    click.echo("摘要:")
    click.echo(f"  {rec.summary}\n")

    click.echo("目标进度:")
    click.echo(
        f"  {progress_bar(rec.progress_to_target, 0, 100)} "
        f"{rec.progress_to_target:.0f}% of {profile.daily_target_percent:g}% target"
    )
    click.echo(f"  预期日收益: {format_pct(rec.expected_daily_return, 2, signed=True)}")
    click.echo(f"  资金利用率: {rec.capital_utilization:.0f}%")
    click.echo(f"  风险等级:   {risk_badge(rec.risk_level)}\n")

    _bullets("⚠️ 预警:", rec.warnings)

    if not rec.opportunities:
        click.echo("ℹ️ 当前没有符合条件的机会")
        return

    shown = rec.opportunities[:limit]
    columns = [
        ("Symbol", 14),
        ("Pair", 16),
        ("Spread", 9),
        ("Size", 9),
        ("Expected", 10),
        ("Risk", 7),
        ("Score", 7),
    ]
    click.echo("推荐机会:")
    click.echo(table_header(columns))
    click.echo(table_separator(columns))
    for item in shown:
        opp = item.opportunity
        click.echo(
            table_row(
                [
                    opp.symbol,
                    f"{item.exchange.long}→{item.exchange.short}",
                    f"{opp.spread * 100:.2f}%",
                    f"${item.recommended_size:.0f}",
                    format_pct(item.expected_return, 2, signed=True),
                    f"{risk_icon(risk_level_of(item.risk_score))} {item.risk_score:.0f}",
                    f"{item.score:.1f}",
                ],
                columns,
            )
        )
    click.echo("")
    _bullets("首选分析:", shown[0].reasoning)


@strategy.command("status")
@click.option("--verbose", "-v", is_flag=True, help="显示详细日志")
def status(verbose: bool) -> None:
    """显示目标进度与持仓"""
    setup_logging(verbose)
    profile = require_profile()

    try:
        engine = build_engine(profile)
        progress = engine.check_target_progress()
    except Exception as e:
        logger.exception("获取状态出错")
        click.echo(f"❌ 错误: {e}", err=True)
        sys.exit(1)

    click.echo("\n📈 策略状态\n")
    click.echo("日收益目标:")
    click.echo(f"  目标: {progress.daily_target:g}% 日收益")
    click.echo(f"  当前: {format_pct(progress.current_daily_return, 2, signed=True)}")
    click.echo(f"  进度: {progress_bar(progress.progress_percent, 0, 100)} {progress.progress_percent:.0f}%\n")

    click.echo("资金分配:")
    click.echo(f"  已部署: {format_usd(progress.total_deployed)}")
    click.echo(f"  可用:   {format_usd(progress.total_available)}")
    click.echo(f"  合计:   {format_usd(progress.total_deployed + progress.total_available)}\n")

    if progress.current_positions:
        columns = [("Symbol", 14), ("Size", 10), ("PnL", 11), ("Hours", 8), ("Daily Est.", 11)]
        click.echo("持仓:")
        click.echo(table_header(columns))
        click.echo(table_separator(columns))
        for pos in progress.current_positions:
            click.echo(
                table_row(
                    [
                        pos.symbol,
                        f"${pos.size:.0f}",
                        format_usd(pos.unrealized_pnl, signed=True),
                        f"{pos.hours_open:.1f}h",
                        format_pct(pos.expected_daily_return, 2, signed=True),
                    ],
                    columns,
                )
            )
        click.echo("")
    else:
        click.echo("ℹ️ 暂无持仓\n")

    _bullets("建议:", progress.suggestions)
    if progress.positions_needed_for_target > 0:
        click.echo(f"ℹ️ 还需约 {progress.positions_needed_for_target} 个仓位达到目标")


@strategy.command("set-target")
@click.argument("percent", type=float)
def set_target(percent: float) -> None:
    """设置日收益目标 %"""
    engine = _open_engine(require_profile())
    try:
        profile = engine.set_daily_target(percent)
    except StrategyError as e:
        raise click.ClickException(str(e))
    ProfileStore().save(profile)
    click.echo(f"✅ 日收益目标: {percent:g}%")


@strategy.command("set-risk")
@click.argument("risk")
def set_risk(risk: str) -> None:
    """设置风险类型 (conservative, moderate, aggressive)"""
    engine = _open_engine(require_profile())
    try:
        profile = engine.set_risk_profile(risk)
    except StrategyError as e:
        click.echo(f"❌ 错误: {e}", err=True)
        click.echo("\n风险类型:")
        for preset in get_all_risk_profiles():
            click.echo(
                f"  {preset.type.value}: 单仓 {preset.max_position_size_percent:g}% | "
                f"最小价差 {preset.min_spread * 100:.0f}% | 止损 {preset.stop_loss_percent:g}%"
            )
        sys.exit(1)

    preset = profile.preset
    profile = replace(profile, max_position_size_percent=preset.max_position_size_percent)
    ProfileStore().save(profile)

    click.echo(f"✅ 风险类型: {preset.type.value}")
    click.echo(f"  最小价差: {preset.min_spread * 100:.0f}%")
    click.echo(f"  单仓上限: {preset.max_position_size_percent:g}%")
    click.echo(f"  止损:     {preset.stop_loss_percent:g}%")


@strategy.command("set-balance", context_settings={"ignore_unknown_options": True})
@click.argument("exchange")
@click.argument("amount", type=float)
def set_balance(exchange: str, amount: float) -> None:
    """设置交易所余额 (未配置的交易所会被启用)"""
    engine = _open_engine(require_profile())
    try:
        profile = engine.set_balance(exchange, amount)
    except StrategyError as e:
        raise click.ClickException(str(e))
    if exchange not in profile.exchanges:
        profile = replace(profile, exchanges={**profile.exchanges, exchange: ExchangeConfig(enabled=True)})
    ProfileStore().save(profile)

    click.echo(f"✅ {exchange} 余额: {format_usd(amount)}")
    click.echo(f"  总资金: {format_usd(profile.total_capital)}")


@strategy.command("diversification")
@click.option("--verbose", "-v", is_flag=True, help="显示详细日志")
def diversification(verbose: bool) -> None:
    """分析持仓分散度"""
    setup_logging(verbose)
    profile = require_profile()

    try:
        engine = build_engine(profile)
        engine.refresh_positions()
        analysis = engine.get_diversification_analysis()
    except Exception as e:
        logger.exception("分散度分析出错")
        click.echo(f"❌ 错误: {e}", err=True)
        sys.exit(1)

    click.echo("\n🎯 分散度分析\n")
    icon = "🟢" if analysis.score >= 70 else "🟡" if analysis.score >= 40 else "🔴"
    click.echo(f"分散度评分: {icon} {analysis.score:.0f}/100\n")

    for title, exposure in (("交易所暴露:", analysis.exchange_exposure), ("币种暴露:", analysis.symbol_exposure)):
        if not exposure:
            continue
        click.echo(title)
        for name, pct in exposure.items():
            click.echo(f"  {name:<12} {_exposure_bar(pct)} {pct:.1f}%")
        click.echo("")

    _bullets("⚠️ 预警:", analysis.warnings)
    _bullets("建议:", analysis.suggestions)


@strategy.command("balances")
@click.option("--verbose", "-v", is_flag=True, help="显示详细日志")
def balances(verbose: bool) -> None:
    """余额汇总与再平衡建议"""
    setup_logging(verbose)
    profile = require_profile()

    try:
        engine = build_engine(profile)
        engine.refresh_positions()
        summary = engine.get_balance_summary()
    except Exception as e:
        logger.exception("余额计算出错")
        click.echo(f"❌ 错误: {e}", err=True)
        sys.exit(1)

    click.echo("\n💰 余额汇总\n")
    columns = [("Exchange", 12), ("Total", 13), ("Available", 13), ("Allocated", 13), ("Margin", 11)]
    click.echo(table_header(columns))
    click.echo(table_separator(columns))
    for b in summary.balances:
        click.echo(
            table_row(
                [b.exchange, format_usd(b.total), format_usd(b.available), format_usd(b.allocated), format_usd(b.margin)],
                columns,
            )
        )
    click.echo("")

    click.echo("合计:")
    click.echo(f"  资金:   {format_usd(summary.total_balance)}")
    click.echo(f"  可用:   {format_usd(summary.total_available)}")
    click.echo(f"  已分配: {format_usd(summary.total_allocated)}\n")

    if summary.rebalance_suggestions:
        click.echo("再平衡建议:")
        for s in summary.rebalance_suggestions:
            click.echo(f"  • Transfer ${s.amount:.0f} from {s.from_exchange} to {s.to_exchange}")
            click.echo(f"    {s.reason}")
        click.echo("")
