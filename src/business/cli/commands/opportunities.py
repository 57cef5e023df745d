"""
Opportunities Command - 套利机会查询

按交易所对拉取资金费率套利机会。
"""

import logging
import sys
from typing import Optional

import click

from src.business.cli.dashboard.components import table_header, table_row, table_separator
from src.business.cli.utils import echo_json, get_client, setup_logging
from src.business.config.client_config import ClientConfig
from src.data.models.enums import SortField
from src.data.models.opportunity import OpportunitiesPage

logger = logging.getLogger(__name__)

DEFAULT_PAIR = "bybit-kucoin"


@click.command()
@click.option("--pair", "-p", default=None, help="交易所对，如 bybit-kucoin (默认取配置)")
@click.option("--limit", "-n", type=int, default=10, help="返回数量")
@click.option(
    "--sort",
    "-s",
    type=click.Choice([f.value for f in SortField]),
    default=SortField.SPREAD.value,
    help="排序字段",
)
@click.option("--query", "-q", default=None, help="按币种过滤")
@click.option(
    "--output",
    "-o",
    type=click.Choice(["text", "json"]),
    default="text",
    help="输出格式",
)
@click.option("--verbose", "-v", is_flag=True, help="显示详细日志")
def opportunities(
    pair: Optional[str],
    limit: int,
    sort: str,
    query: Optional[str],
    output: str,
    verbose: bool,
) -> None:
    """查询套利机会

    \b
    示例：
      fundarb opportunities
      fundarb opportunities -p bybit-kucoin -n 20
      fundarb opportunities -q BTC -o json
    """
    setup_logging(verbose)
    pair = pair or ClientConfig.load().default_exchange_pair or DEFAULT_PAIR

    try:
        client = get_client(debug=verbose)
        page = client.get_opportunities(pair, limit=limit, sort_by=sort, query=query)
    except Exception as e:
        logger.exception("获取机会失败")
        click.echo(f"❌ 错误: {e}", err=True)
        sys.exit(1)

    if output == "json":
        echo_json(page)
        return
    _output_text(pair, page)


def _output_text(pair: str, page: OpportunitiesPage) -> None:
    """文本输出"""
    if not page.opportunities:
        click.echo(f"📭 {pair} 暂无套利机会")
        return

    click.echo(f"\n💹 套利机会 ({pair})\n")
    columns = [
        ("Symbol", 14),
        ("Long", 12),
        ("Short", 12),
        ("Spread", 10),
        ("APR", 10),
        ("Epoch", 7),
        ("ID", 12),
    ]
    click.echo(table_header(columns))
    click.echo(table_separator(columns))
    for opp in page.opportunities:
        click.echo(
            table_row(
                [
                    opp.symbol,
                    opp.long_exchange,
                    opp.short_exchange,
                    f"{opp.spread:.4f}%",
                    f"{opp.apr:.1f}%" if opp.apr is not None else "-",
                    f"{opp.hours_to_funding:g}h" if opp.hours_to_funding is not None else "-",
                    opp.id[:12],
                ],
                columns,
            )
        )
    p = page.pagination
    click.echo(f"\n第 {p.page}/{p.total_pages} 页，共 {p.total} 条")
    click.echo("执行: fundarb execute <ID> --amount 100")
