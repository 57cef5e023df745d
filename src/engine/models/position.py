"""Open hedge position model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CurrentPosition:
    """A running hedge execution as seen by the strategy engine.

    Positions are snapshots: a refresh replaces the whole list, a single
    position is never mutated in place.

    Attributes:
        execution_id: Platform execution id.
        symbol: Traded symbol (e.g. BTCUSDT).
        pair: Exchange pair label (e.g. bybit-kucoin).
        long_exchange: Exchange holding the long leg.
        short_exchange: Exchange holding the short leg.
        size: Capital committed to the hedge ($), split equally over both legs.
        entry_spread: Spread (fraction) at entry.
        current_spread: Live spread (fraction). Negative means the hedge pays funding.
        unrealized_pnl: Unrealized P&L ($).
        unrealized_pnl_percent: Unrealized P&L as % of size.
        hours_open: Hours since the execution was created.
        expected_daily_return: Expected daily return (%).
    """

    execution_id: str
    symbol: str
    pair: str
    long_exchange: str
    short_exchange: str
    size: float
    entry_spread: float = 0.0
    current_spread: float = 0.0
    unrealized_pnl: float = 0.0
    unrealized_pnl_percent: float = 0.0
    hours_open: float = 0.0
    expected_daily_return: float = 0.0
