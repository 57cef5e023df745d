"""Tests for portfolio -> CurrentPosition mapping"""

from datetime import datetime, timezone

import pytest

from src.business.strategy.data_bridge import calc_hours_open, extract_positions_from_portfolio
from src.data.models.enums import ExecutionStatus
from src.data.models.portfolio import (
    Execution,
    FundingBreakdown,
    PnLBreakdown,
    Portfolio,
    PortfolioExecution,
)

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def make_item(exec_id: str, status: ExecutionStatus, amount: float = 400, net_funding: float = 1.2):
    return PortfolioExecution(
        execution=Execution(
            id=exec_id,
            symbol="BTCUSDT",
            long_exchange="bybit",
            short_exchange="kucoin",
            input_amount=amount,
            status=status,
            pair="bybit-kucoin",
            created_at=datetime(2024, 3, 1, 6, 0, tzinfo=timezone.utc),
        ),
        pnl=PnLBreakdown(unrealized_pnl=-4.0, total_pnl_pct=-0.01),
        funding=FundingBreakdown(net_funding=net_funding),
    )


class TestExtractPositions:
    """Tests for extract_positions_from_portfolio"""

    def test_only_running_executions(self):
        portfolio = Portfolio(
            executions=[
                make_item("a", ExecutionStatus.RUNNING),
                make_item("b", ExecutionStatus.CLOSED),
                make_item("c", ExecutionStatus.QUEUED),
            ]
        )
        positions = extract_positions_from_portfolio(portfolio, now=NOW)
        assert [p.execution_id for p in positions] == ["a"]

    def test_field_mapping(self):
        portfolio = Portfolio(executions=[make_item("a", ExecutionStatus.RUNNING)])
        pos = extract_positions_from_portfolio(portfolio, now=NOW)[0]

        assert pos.size == 400
        assert pos.pair == "bybit-kucoin"
        assert pos.unrealized_pnl == -4.0
        assert pos.unrealized_pnl_percent == pytest.approx(-1.0)
        # 1.2 / 400 * 100 * 3
        assert pos.expected_daily_return == pytest.approx(0.9)
        assert pos.hours_open == pytest.approx(6)
        assert pos.entry_spread == 0
        assert pos.current_spread == 0

    def test_zero_input_amount(self):
        portfolio = Portfolio(executions=[make_item("a", ExecutionStatus.RUNNING, amount=0)])
        assert extract_positions_from_portfolio(portfolio, now=NOW)[0].expected_daily_return == 0

    def test_empty_portfolio(self):
        assert extract_positions_from_portfolio(Portfolio()) == []


class TestHoursOpen:
    """Tests for calc_hours_open"""

    def test_missing_created_at(self):
        assert calc_hours_open(None, NOW) == 0

    def test_naive_timestamp_treated_as_utc(self):
        assert calc_hours_open(datetime(2024, 3, 1, 11, 30), NOW) == pytest.approx(0.5)
