"""Portfolio, execution and platform metrics models.

All models are built from platform JSON with from_dict. Missing numeric
fields default to 0 so partially populated responses still render.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from src.data.models.enums import ExecutionMode, ExecutionStatus


def _float(data: dict[str, Any], key: str) -> float:
    value = data.get(key)
    return float(value) if value is not None else 0.0


def _parse_time(value: Any) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


@dataclass
class Execution:
    """Platform-side record of an opened hedge."""

    id: str
    symbol: str
    long_exchange: str
    short_exchange: str
    input_amount: float
    status: ExecutionStatus
    pair: str = ""
    opportunity_id: str = ""
    job_id: str = ""
    mode: ExecutionMode = ExecutionMode.AUTO
    long_size: float = 0.0
    short_size: float = 0.0
    long_entry_price: float = 0.0
    short_entry_price: float = 0.0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    closed_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Execution":
        return cls(
            id=str(data["id"]),
            symbol=data.get("symbol", ""),
            pair=data.get("pair", ""),
            long_exchange=data.get("long_exchange", ""),
            short_exchange=data.get("short_exchange", ""),
            input_amount=_float(data, "input_amount"),
            status=ExecutionStatus(data.get("status", "queued")),
            opportunity_id=str(data.get("opportunity_id", "")),
            job_id=str(data.get("job_id", "")),
            mode=ExecutionMode(data.get("mode", "auto")),
            long_size=_float(data, "long_size"),
            short_size=_float(data, "short_size"),
            long_entry_price=_float(data, "long_entry_price"),
            short_entry_price=_float(data, "short_entry_price"),
            created_at=_parse_time(data.get("created_at")),
            updated_at=_parse_time(data.get("updated_at")),
            closed_at=_parse_time(data.get("closed_at")),
        )


@dataclass
class PnLBreakdown:
    """P&L of one execution."""

    unrealized_pnl: float = 0.0
    realized_pnl: float = 0.0
    total_pnl: float = 0.0
    total_pnl_pct: float = 0.0  # Fraction, 0.01 = 1%
    funding_pnl: float = 0.0
    fee_cost: float = 0.0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PnLBreakdown":
        return cls(
            unrealized_pnl=_float(data, "unrealized_pnl"),
            realized_pnl=_float(data, "realized_pnl"),
            total_pnl=_float(data, "total_pnl"),
            total_pnl_pct=_float(data, "total_pnl_pct"),
            funding_pnl=_float(data, "funding_pnl"),
            fee_cost=_float(data, "fee_cost"),
        )


@dataclass
class FundingBreakdown:
    """Funding received/paid by one execution."""

    total_received: float = 0.0
    total_paid: float = 0.0
    net_funding: float = 0.0
    long_funding: float = 0.0
    short_funding: float = 0.0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FundingBreakdown":
        return cls(
            total_received=_float(data, "total_received"),
            total_paid=_float(data, "total_paid"),
            net_funding=_float(data, "net_funding"),
            long_funding=_float(data, "long_funding"),
            short_funding=_float(data, "short_funding"),
        )


@dataclass
class PortfolioExecution:
    """An execution with its live P&L and funding."""

    execution: Execution
    pnl: PnLBreakdown = field(default_factory=PnLBreakdown)
    funding: FundingBreakdown = field(default_factory=FundingBreakdown)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PortfolioExecution":
        return cls(
            execution=Execution.from_dict(data["execution"]),
            pnl=PnLBreakdown.from_dict(data.get("pnl") or {}),
            funding=FundingBreakdown.from_dict(data.get("funding") or {}),
        )


@dataclass
class PortfolioSummary:
    """Aggregate portfolio figures."""

    total_executions: int = 0
    running_executions: int = 0
    total_invested: float = 0.0
    total_unrealized_pnl: float = 0.0
    total_realized_pnl: float = 0.0
    total_funding_received: float = 0.0
    total_funding_paid: float = 0.0
    weighted_roi: float = 0.0
    daily_roi: float = 0.0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PortfolioSummary":
        return cls(
            total_executions=int(data.get("total_executions") or 0),
            running_executions=int(data.get("running_executions") or 0),
            total_invested=_float(data, "total_invested"),
            total_unrealized_pnl=_float(data, "total_unrealized_pnl"),
            total_realized_pnl=_float(data, "total_realized_pnl"),
            total_funding_received=_float(data, "total_funding_received"),
            total_funding_paid=_float(data, "total_funding_paid"),
            weighted_roi=_float(data, "weighted_roi"),
            daily_roi=_float(data, "daily_roi"),
        )


@dataclass
class Portfolio:
    """Live portfolio: executions plus summary."""

    executions: list[PortfolioExecution] = field(default_factory=list)
    summary: PortfolioSummary = field(default_factory=PortfolioSummary)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Portfolio":
        return cls(
            executions=[PortfolioExecution.from_dict(e) for e in data.get("executions") or []],
            summary=PortfolioSummary.from_dict(data.get("summary") or {}),
        )

    @property
    def running(self) -> list[PortfolioExecution]:
        """Executions currently in RUNNING state."""
        return [e for e in self.executions if e.execution.status == ExecutionStatus.RUNNING]


@dataclass
class ExecuteResult:
    """Response of execute_opportunity / resubmit."""

    success: bool
    job_id: str = ""
    execution_id: str = ""
    message: str = ""
    estimated_entry_time: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExecuteResult":
        return cls(
            success=bool(data.get("success")),
            job_id=str(data.get("job_id") or ""),
            execution_id=str(data.get("execution_id") or ""),
            message=data.get("message") or "",
            estimated_entry_time=data.get("estimated_entry_time"),
        )


@dataclass
class CloseResult:
    """Response of close_execution."""

    success: bool
    execution_id: str = ""
    message: str = ""
    final_pnl: float = 0.0
    final_roi_pct: float = 0.0
    total_funding: float = 0.0
    duration_hours: float = 0.0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CloseResult":
        return cls(
            success=bool(data.get("success")),
            execution_id=str(data.get("execution_id") or ""),
            message=data.get("message") or "",
            final_pnl=_float(data, "final_pnl"),
            final_roi_pct=_float(data, "final_roi_pct"),
            total_funding=_float(data, "total_funding"),
            duration_hours=_float(data, "duration_hours"),
        )


@dataclass
class FundingFlow:
    """Received/paid/net funding triple."""

    received: float = 0.0
    paid: float = 0.0
    net: float = 0.0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FundingFlow":
        return cls(
            received=_float(data, "received"),
            paid=_float(data, "paid"),
            net=_float(data, "net"),
        )


@dataclass
class FundingFees:
    """Account funding fee totals, split by closed/running executions."""

    total_funding_fee: float = 0.0
    total_received: float = 0.0
    total_paid: float = 0.0
    closed: FundingFlow = field(default_factory=FundingFlow)
    running: FundingFlow = field(default_factory=FundingFlow)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FundingFees":
        breakdown = data.get("breakdown") or {}
        return cls(
            total_funding_fee=_float(data, "total_funding_fee"),
            total_received=_float(data, "total_received"),
            total_paid=_float(data, "total_paid"),
            closed=FundingFlow.from_dict(breakdown.get("closed") or {}),
            running=FundingFlow.from_dict(breakdown.get("running") or {}),
        )


@dataclass
class PlatformMetrics:
    """Platform-wide activity metrics."""

    timestamp: str = ""
    queued_count: int = 0
    running_count: int = 0
    active_count: int = 0
    total_volume: float = 0.0
    trade_count: int = 0
    average_roi: float = 0.0
    tvl: float = 0.0
