"""Tests for the fundarb command line"""

import json

import pytest
from click.testing import CliRunner

from src.business.cli.main import cli
from src.business.config.profile_store import ProfileStore
from src.data.models.enums import ExecutionStatus
from src.data.models.opportunity import OpportunitiesPage, Opportunity, Pagination
from src.data.models.portfolio import (
    CloseResult,
    ExecuteResult,
    Execution,
    FundingBreakdown,
    FundingFees,
    PnLBreakdown,
    Portfolio,
    PortfolioExecution,
)
from src.engine.models.enums import RiskProfileType


class FakeClient:
    """Stands in for PlatformClient, records calls."""

    instances = []

    def __init__(self, config=None, session=None):
        self.config = config
        self.calls = []
        FakeClient.instances.append(self)

    def get_opportunities(self, exchange_pair, page=1, limit=20, sort_by="apr", query=None):
        self.calls.append(("get_opportunities", exchange_pair, limit, sort_by, query))
        if exchange_pair != "bybit-kucoin":
            return OpportunitiesPage()
        return OpportunitiesPage(
            opportunities=[
                Opportunity(
                    id="opp-btc-1",
                    symbol="BTCUSDT",
                    long_exchange="bybit",
                    short_exchange="kucoin",
                    spread=0.06,
                    liquidity_score=80,
                    hours_to_funding=1,
                    apr=21.9,
                )
            ],
            pagination=Pagination(page=1, limit=limit, total=1, total_pages=1),
        )

    def get_portfolio(self, execution_id=None):
        self.calls.append(("get_portfolio", execution_id))
        return Portfolio(
            executions=[
                PortfolioExecution(
                    execution=Execution(
                        id="exec-eth-1",
                        symbol="ETHUSDT",
                        long_exchange="bybit",
                        short_exchange="kucoin",
                        input_amount=200,
                        status=ExecutionStatus.RUNNING,
                    ),
                    pnl=PnLBreakdown(total_pnl=1.5),
                    funding=FundingBreakdown(net_funding=0.4),
                )
            ]
        )

    def execute_opportunity(self, opportunity_id, amount, mode="auto"):
        self.calls.append(("execute_opportunity", opportunity_id, amount, mode))
        return ExecuteResult(success=True, job_id="job-1", execution_id="exec-1")

    def close_execution(self, execution_id):
        self.calls.append(("close_execution", execution_id))
        return CloseResult(success=True, execution_id=execution_id, final_pnl=3.25)

    def get_funding_fees(self):
        return FundingFees(total_funding_fee=2.5, total_received=3.0, total_paid=0.5)


@pytest.fixture(autouse=True)
def env(tmp_path, monkeypatch):
    monkeypatch.setenv("FUNDARB_HOME", str(tmp_path))
    monkeypatch.delenv("FUNDARB_TOKEN", raising=False)
    monkeypatch.delenv("FUNDARB_API_URL", raising=False)
    monkeypatch.setattr("src.business.cli.utils.PlatformClient", FakeClient)
    FakeClient.instances = []
    return tmp_path


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def with_token(monkeypatch):
    monkeypatch.setenv("FUNDARB_TOKEN", "test-token-123456")


@pytest.fixture
def with_profile(runner):
    result = runner.invoke(
        cli, ["strategy", "init", "--risk", "conservative", "--target", "1", "--bybit", "1000", "--kucoin", "1000"]
    )
    assert result.exit_code == 0, result.output


class TestRoot:
    """Tests for the command group"""

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "fundarb" in result.output
        assert "0.1.0" in result.output

    def test_commands_registered(self, runner):
        result = runner.invoke(cli, ["--help"])
        for name in ["opportunities", "execute", "portfolio", "close", "funding", "monitor", "config", "strategy", "dashboard"]:
            assert name in result.output


class TestConfigCommand:
    """Tests for config show/set/unset/path"""

    def test_set_and_show(self, runner, env):
        result = runner.invoke(cli, ["config", "set", "token", "abcdefgh12345678wxyz"])
        assert result.exit_code == 0
        assert "abcdefgh...wxyz" in result.output

        result = runner.invoke(cli, ["config", "show"])
        assert "abcdefgh...wxyz" in result.output
        assert "https://api.zirodelta.xyz" in result.output

        saved = json.loads((env / "config.json").read_text())
        assert saved["token"] == "abcdefgh12345678wxyz"

    def test_unset(self, runner, env):
        runner.invoke(cli, ["config", "set", "default_exchange_pair", "kucoin-bybit"])
        result = runner.invoke(cli, ["config", "unset", "default_exchange_pair"])
        assert result.exit_code == 0
        assert json.loads((env / "config.json").read_text()) == {}

    @pytest.mark.parametrize("value", ["-3", "0"])
    def test_invalid_amount(self, runner, env, value):
        result = runner.invoke(cli, ["config", "set", "default_amount", value])
        assert result.exit_code == 1
        assert "positive" in result.output
        assert not (env / "config.json").exists()

    def test_path(self, runner, env):
        result = runner.invoke(cli, ["config", "path"])
        assert result.output.strip() == str(env / "config.json")


class TestOpportunitiesCommand:
    """Tests for opportunities"""

    def test_text_output(self, runner):
        result = runner.invoke(cli, ["opportunities", "-n", "5", "-q", "BTC"])
        assert result.exit_code == 0, result.output
        assert "BTCUSDT" in result.output
        assert FakeClient.instances[0].calls[0] == ("get_opportunities", "bybit-kucoin", 5, "spread", "BTC")

    def test_json_output(self, runner):
        result = runner.invoke(cli, ["opportunities", "-o", "json"])
        data = json.loads(result.output)
        assert data["opportunities"][0]["id"] == "opp-btc-1"
        assert data["pagination"]["total"] == 1

    def test_default_pair_from_config(self, runner):
        runner.invoke(cli, ["config", "set", "default_exchange_pair", "kucoin-bybit"])
        result = runner.invoke(cli, ["opportunities"])
        assert "kucoin-bybit" in result.output
        assert FakeClient.instances[-1].calls[0][1] == "kucoin-bybit"


class TestExecuteAndClose:
    """Tests for execute and close"""

    def test_requires_token(self, runner):
        result = runner.invoke(cli, ["execute", "opp-btc-1", "--amount", "100"])
        assert result.exit_code == 1
        assert "Authentication required" in result.output

    def test_minimum_amount(self, runner, with_token):
        result = runner.invoke(cli, ["execute", "opp-btc-1", "--amount", "5"])
        assert result.exit_code == 1
        assert "Minimum amount is $10" in result.output

    def test_dry_run(self, runner):
        result = runner.invoke(cli, ["execute", "opp-btc-1", "--amount", "100", "--dry-run"])
        assert result.exit_code == 0
        assert "Dry run" in result.output
        assert FakeClient.instances == []

    def test_execute(self, runner, with_token):
        result = runner.invoke(cli, ["execute", "opp-btc-1", "-a", "20000", "-m", "manual"])
        assert result.exit_code == 0, result.output
        assert "大额下单" in result.output
        assert "job-1" in result.output
        assert FakeClient.instances[0].calls == [("execute_opportunity", "opp-btc-1", 20000.0, "manual")]

    def test_close_requires_force(self, runner, with_token):
        result = runner.invoke(cli, ["close", "exec-1"])
        assert result.exit_code == 1
        assert "--force" in result.output
        assert FakeClient.instances == []

    def test_close(self, runner, with_token):
        result = runner.invoke(cli, ["close", "exec-1", "--force"])
        assert result.exit_code == 0
        assert "+3.25" in result.output


class TestPortfolioCommands:
    """Tests for portfolio and funding"""

    def test_portfolio(self, runner, with_token):
        result = runner.invoke(cli, ["portfolio"])
        assert result.exit_code == 0, result.output
        assert "ETHUSDT" in result.output

    def test_portfolio_json(self, runner, with_token):
        result = runner.invoke(cli, ["portfolio", "-e", "exec-eth-1", "-o", "json"])
        data = json.loads(result.output)
        assert data["executions"][0]["execution"]["status"] == "running"
        assert FakeClient.instances[0].calls == [("get_portfolio", "exec-eth-1")]

    def test_funding(self, runner, with_token):
        result = runner.invoke(cli, ["funding"])
        assert result.exit_code == 0
        assert "2.50" in result.output


class TestStrategyCommand:
    """Tests for the strategy group"""

    def test_requires_profile(self, runner):
        result = runner.invoke(cli, ["strategy", "show"])
        assert result.exit_code == 1
        assert "No profile configured. Run: fundarb strategy init" in result.output

    def test_init(self, runner, with_profile):
        profile = ProfileStore().load()
        assert profile.risk_profile == RiskProfileType.CONSERVATIVE
        assert profile.min_spread == 0.05
        assert profile.max_position_size_percent == 20
        assert profile.balances == {"bybit": 1000.0, "kucoin": 1000.0}

    def test_init_invalid_risk(self, runner):
        result = runner.invoke(cli, ["strategy", "init", "--risk", "yolo"])
        assert result.exit_code == 1
        assert not ProfileStore().exists()

    def test_init_without_balances_warns(self, runner):
        result = runner.invoke(cli, ["strategy", "init"])
        assert result.exit_code == 0
        assert "set-balance" in result.output

    def test_show(self, runner, with_profile):
        result = runner.invoke(cli, ["strategy", "show"])
        assert result.exit_code == 0
        assert "conservative" in result.output
        assert "$2,000.00" in result.output

    def test_set_target(self, runner, with_profile):
        assert runner.invoke(cli, ["strategy", "set-target", "2.5"]).exit_code == 0
        assert ProfileStore().load().daily_target_percent == 2.5

        result = runner.invoke(cli, ["strategy", "set-target", "150"])
        assert result.exit_code == 1
        assert "Daily target must be between 0 and 100%" in result.output

    def test_set_risk(self, runner, with_profile):
        result = runner.invoke(cli, ["strategy", "set-risk", "aggressive"])
        assert result.exit_code == 0
        profile = ProfileStore().load()
        assert profile.risk_profile == RiskProfileType.AGGRESSIVE
        assert profile.min_spread == 0.01
        assert profile.max_position_size_percent == 80

    def test_set_risk_invalid_lists_presets(self, runner, with_profile):
        result = runner.invoke(cli, ["strategy", "set-risk", "yolo"])
        assert result.exit_code == 1
        assert "moderate" in result.output

    def test_set_balance_enables_exchange(self, runner, with_profile):
        result = runner.invoke(cli, ["strategy", "set-balance", "okx", "500"])
        assert result.exit_code == 0
        profile = ProfileStore().load()
        assert profile.balances["okx"] == 500
        assert profile.is_enabled("okx")
        assert "$2,500.00" in result.output

    @pytest.mark.parametrize("args", [["bybit", "-5"], ["bybit", "--", "-5"]])
    def test_set_balance_rejects_negative(self, runner, with_profile, args):
        result = runner.invoke(cli, ["strategy", "set-balance", *args])
        assert result.exit_code == 1
        assert "Balance must be non-negative" in result.output
        assert ProfileStore().load().balances["bybit"] == 1000

    def test_recommend(self, runner, with_profile):
        result = runner.invoke(cli, ["strategy", "recommend"])
        assert result.exit_code == 0, result.output
        assert "BTCUSDT" in result.output
        assert "Max position size: 20% of capital" in result.output

    def test_status(self, runner, with_profile):
        result = runner.invoke(cli, ["strategy", "status"])
        assert result.exit_code == 0, result.output
        assert "ETHUSDT" in result.output

    def test_diversification(self, runner, with_profile):
        result = runner.invoke(cli, ["strategy", "diversification"])
        assert result.exit_code == 0, result.output
        assert "ETHUSDT" in result.output
        assert "Add 4 more positions for better diversification" in result.output

    def test_balances(self, runner, with_profile):
        result = runner.invoke(cli, ["strategy", "balances"])
        assert result.exit_code == 0, result.output
        assert "$900.00" in result.output


class TestDashboardCommand:
    """Tests for dashboard"""

    def test_requires_profile(self, runner):
        assert runner.invoke(cli, ["dashboard"]).exit_code == 1

    def test_single_render(self, runner, with_profile):
        result = runner.invoke(cli, ["dashboard"])
        assert result.exit_code == 0, result.output
        assert "资金费率套利策略仪表盘" in result.output
        assert "BTCUSDT" in result.output
