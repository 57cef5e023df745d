"""Tests for the platform client."""

from unittest.mock import MagicMock

import pytest
import requests

from src.data.models.enums import ExecutionStatus
from src.data.providers.base import (
    AuthenticationError,
    ExecutionError,
    PlatformError,
    RateLimitError,
)
from src.data.providers.platform_client import PlatformClient, PlatformClientConfig


def make_response(body=None, status_code=200, headers=None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.reason = "OK" if status_code < 400 else "Error"
    response.headers = headers or {}
    response.json.return_value = body
    return response


def rpc_result(result):
    return make_response({"jsonrpc": "2.0", "id": 1, "result": result})


OPPORTUNITY_ITEM = {
    "pair_uid": "uid-1",
    "symbol": "BTCUSDT",
    "venues": "bybit-kucoin",
    "long_venue": "bybit",
    "short_venue": "kucoin",
    "long_rate": -0.0001,
    "short_rate": 0.0004,
    "funding_delta": 0.0005,
    "epoch_hours": 8,
    "next_funding_timestamp": 1700000000,
    "updated_at": 1699990000,
    "apr": 54.75,
    "direction": "Long Bybit / Short KuCoin",
    "anomaly_direction": None,
    "anomaly_reason": None,
}


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(session):
    return PlatformClient(PlatformClientConfig(base_url="https://api.test/", token="tok"), session=session)


class TestTransport:
    """Tests for JSON-RPC transport."""

    def test_rpc_payload(self, client, session):
        session.post.return_value = rpc_result("ok")

        assert client.test() == "ok"
        assert client.test() == "ok"

        url = session.post.call_args.args[0]
        kwargs = session.post.call_args.kwargs
        assert url == "https://api.test/jsonrpc/"
        assert kwargs["json"]["method"] == "test"
        assert kwargs["json"]["jsonrpc"] == "2.0"
        assert kwargs["json"]["id"] == 2
        assert kwargs["headers"]["Authorization"] == "Bearer tok"
        assert kwargs["timeout"] == 30

    def test_no_auth_header_without_token(self, session):
        client = PlatformClient(session=session)
        session.post.return_value = rpc_result([])
        client.get_exchange_pairs()
        assert "Authorization" not in session.post.call_args.kwargs["headers"]
        assert session.post.call_args.args[0] == "https://api.zirodelta.xyz/jsonrpc/"

    def test_auth_required_without_token(self, session):
        client = PlatformClient(session=session)
        with pytest.raises(AuthenticationError) as exc_info:
            client.get_portfolio()
        assert exc_info.value.code == "AUTH_REQUIRED"
        session.post.assert_not_called()

    def test_rpc_error(self, client, session):
        session.post.return_value = make_response(
            {"jsonrpc": "2.0", "id": 1, "error": {"code": -32601, "message": "Method not found"}}
        )
        with pytest.raises(PlatformError) as exc_info:
            client.test()
        assert exc_info.value.code == "RPC_-32601"
        assert str(exc_info.value) == "Method not found"

    def test_http_401(self, client, session):
        session.post.return_value = make_response(status_code=401)
        with pytest.raises(AuthenticationError):
            client.test()

    def test_http_429(self, client, session):
        session.post.return_value = make_response(status_code=429, headers={"Retry-After": "12"})
        with pytest.raises(RateLimitError) as exc_info:
            client.test()
        assert exc_info.value.retry_after == 12
        assert exc_info.value.code == "RATE_LIMIT"

    def test_http_500(self, client, session):
        session.post.return_value = make_response(status_code=500)
        with pytest.raises(PlatformError) as exc_info:
            client.test()
        assert exc_info.value.code == "HTTP_ERROR"
        assert exc_info.value.details["status"] == 500

    def test_timeout(self, client, session):
        session.post.side_effect = requests.Timeout()
        with pytest.raises(PlatformError) as exc_info:
            client.test()
        assert exc_info.value.code == "TIMEOUT"

    def test_network_error(self, client, session):
        session.post.side_effect = requests.ConnectionError("refused")
        with pytest.raises(PlatformError) as exc_info:
            client.test()
        assert exc_info.value.code == "NETWORK_ERROR"


class TestOpportunities:
    """Tests for opportunity queries."""

    def test_get_opportunities(self, client, session):
        session.post.return_value = rpc_result(
            {
                "data": [OPPORTUNITY_ITEM],
                "pagination": {"current_page": 1, "per_page": 10, "total_count": 1, "total_pages": 1},
            }
        )

        page = client.get_opportunities("bybit-kucoin", limit=10, sort_by="spread", query="BTC")

        params = session.post.call_args.kwargs["json"]["params"]
        assert params == {"exchangepair": "bybit-kucoin", "page": 1, "limit": 10, "q": "BTC", "sortby": "apr"}

        assert page.pagination.total == 1
        opp = page.opportunities[0]
        assert opp.id == "uid-1"
        assert opp.pair == "bybit-kucoin"
        assert opp.long_exchange == "bybit"
        assert opp.short_exchange == "kucoin"
        assert opp.spread == pytest.approx(0.05)
        assert opp.short_funding_rate == pytest.approx(0.04)
        assert opp.hours_to_funding == 8
        assert opp.liquidity_score == 5
        assert opp.risk_score == 3
        assert opp.price_diff_pct == 0
        assert opp.next_funding_time.timestamp() == 1700000000

    def test_anomaly_raises_risk_score(self, client, session):
        item = dict(OPPORTUNITY_ITEM, anomaly_direction="long", anomaly_reason="spike")
        session.post.return_value = rpc_result({"data": [item]})
        opp = client.get_opportunities("bybit-kucoin").opportunities[0]
        assert opp.risk_score == 5
        assert opp.anomaly_reason == "spike"

    def test_query_omitted_when_none(self, client, session):
        session.post.return_value = rpc_result({"data": []})
        page = client.get_opportunities("kucoin-bybit", sort_by="funding_delta")
        params = session.post.call_args.kwargs["json"]["params"]
        assert "q" not in params
        assert params["sortby"] == "funding_delta"
        assert page.opportunities == []


class TestExecution:
    """Tests for execute / close."""

    def test_execute(self, client, session):
        session.post.return_value = rpc_result({"success": True, "job_id": "job-1", "execution_id": "exec-1"})
        result = client.execute_opportunity("uid-1", 100, mode="manual")
        assert result.job_id == "job-1"
        params = session.post.call_args.kwargs["json"]["params"]
        assert params == {"opportunity_id": "uid-1", "amount": 100, "mode": "manual"}

    def test_execute_rejected(self, client, session):
        session.post.return_value = rpc_result({"success": False, "message": "Insufficient balance"})
        with pytest.raises(ExecutionError, match="Insufficient balance"):
            client.execute_opportunity("uid-1", 100)

    def test_close(self, client, session):
        session.post.return_value = rpc_result(
            {"success": True, "execution_id": "exec-1", "final_pnl": 12.5, "duration_hours": 24}
        )
        result = client.close_execution("exec-1")
        assert result.final_pnl == 12.5
        assert result.duration_hours == 24

    def test_close_rejected(self, client, session):
        session.post.return_value = rpc_result({"success": False})
        with pytest.raises(ExecutionError) as exc_info:
            client.close_execution("exec-1")
        assert exc_info.value.execution_id == "exec-1"


class TestPortfolioAndMetrics:
    """Tests for portfolio and REST metrics."""

    def test_get_portfolio(self, client, session):
        session.post.return_value = rpc_result(
            {
                "executions": [
                    {
                        "execution": {
                            "id": "exec-1",
                            "symbol": "BTCUSDT",
                            "long_exchange": "bybit",
                            "short_exchange": "kucoin",
                            "input_amount": 400,
                            "status": "running",
                            "created_at": "2024-01-01T00:00:00Z",
                        },
                        "pnl": {"unrealized_pnl": 3.2, "total_pnl_pct": 0.008},
                        "funding": {"net_funding": 1.2},
                    },
                    {"execution": {"id": "exec-2", "status": "closed"}},
                ],
                "summary": {"total_executions": 2, "running_executions": 1},
            }
        )

        portfolio = client.get_portfolio()

        assert session.post.call_args.kwargs["json"]["method"] == "portfolio_live"
        assert len(portfolio.executions) == 2
        assert [e.execution.id for e in portfolio.running] == ["exec-1"]
        assert portfolio.executions[1].execution.status == ExecutionStatus.CLOSED
        assert portfolio.summary.running_executions == 1

    def test_funding_fees(self, client, session):
        session.get.return_value = make_response(
            {
                "total_funding_fee": 5.5,
                "total_received": 7.0,
                "total_paid": 1.5,
                "breakdown": {"running": {"received": 2, "paid": 0.5, "net": 1.5}},
            }
        )
        fees = client.get_funding_fees()
        assert session.get.call_args.args[0] == "https://api.test/metrics/funding-fees"
        assert fees.total_funding_fee == 5.5
        assert fees.running.net == 1.5
        assert fees.closed.net == 0

    def test_metrics(self, client, session):
        session.get.side_effect = [
            make_response({"timestamp": "2024-01-01T00:00:00Z"}),
            make_response({"queued_count": 1, "running_count": 4, "active_count": 5}),
            make_response({"total_volume": 1e6, "trade_count": 42}),
            make_response({"averageROI": 0.12}),
            make_response({"tvl": 250000}),
        ]
        metrics = client.get_metrics()
        assert metrics.running_count == 4
        assert metrics.trade_count == 42
        assert metrics.average_roi == 0.12
        assert metrics.tvl == 250000
