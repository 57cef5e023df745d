"""Funding-rate arbitrage opportunity models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


def _from_epoch(value: Any) -> datetime | None:
    """Epoch seconds -> aware UTC datetime."""
    if value is None:
        return None
    return datetime.fromtimestamp(float(value), tz=timezone.utc)


def _from_iso(value: Any) -> datetime | None:
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


@dataclass(frozen=True)
class Opportunity:
    """A candidate hedge: long one exchange, short another, same symbol.

    Read-only input to the strategy engine. Optional market fields stay
    None when the platform does not supply them; the engine applies its
    own defaults.
    """

    id: str
    symbol: str
    long_exchange: str
    short_exchange: str
    spread: float  # Funding-rate differential
    pair: str = ""
    long_funding_rate: float = 0.0
    short_funding_rate: float = 0.0
    long_price: float = 0.0
    short_price: float = 0.0
    price_diff_pct: float | None = None
    risk_score: float | None = None
    liquidity_score: float | None = None  # 0-100, higher = more liquid
    hours_to_funding: float | None = None
    next_funding_time: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    # Extended API fields
    apr: float | None = None
    direction: str | None = None  # e.g. "Long Bybit / Short KuCoin"
    anomaly_reason: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Opportunity":
        """Map a raw get_opportunities item to an Opportunity.

        Rates and funding_delta arrive as fractions and are converted to
        percentages. The API carries no price or liquidity data, so prices
        are 0 and liquidity is a fixed placeholder.
        """
        updated = _from_epoch(data.get("updated_at"))
        return cls(
            id=str(data["pair_uid"]),
            symbol=data["symbol"],
            pair=data.get("venues", ""),
            long_exchange=data["long_venue"],
            short_exchange=data["short_venue"],
            long_funding_rate=float(data.get("long_rate", 0)) * 100,
            short_funding_rate=float(data.get("short_rate", 0)) * 100,
            spread=float(data.get("funding_delta", 0)) * 100,
            long_price=0.0,
            short_price=0.0,
            price_diff_pct=0.0,
            risk_score=5 if data.get("anomaly_direction") else 3,
            liquidity_score=5,
            next_funding_time=_from_epoch(data.get("next_funding_timestamp")),
            hours_to_funding=data.get("epoch_hours"),
            created_at=updated,
            updated_at=updated,
            apr=data.get("apr"),
            direction=data.get("direction"),
            anomaly_reason=data.get("anomaly_reason"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "id": self.id,
            "symbol": self.symbol,
            "pair": self.pair,
            "long_exchange": self.long_exchange,
            "short_exchange": self.short_exchange,
            "long_funding_rate": self.long_funding_rate,
            "short_funding_rate": self.short_funding_rate,
            "spread": self.spread,
            "long_price": self.long_price,
            "short_price": self.short_price,
            "price_diff_pct": self.price_diff_pct,
            "risk_score": self.risk_score,
            "liquidity_score": self.liquidity_score,
            "hours_to_funding": self.hours_to_funding,
            "next_funding_time": self.next_funding_time.isoformat() if self.next_funding_time else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "apr": self.apr,
            "direction": self.direction,
            "anomaly_reason": self.anomaly_reason,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Opportunity":
        """Create instance from dictionary (as written by to_dict)."""
        return cls(
            id=str(data["id"]),
            symbol=data["symbol"],
            pair=data.get("pair", ""),
            long_exchange=data["long_exchange"],
            short_exchange=data["short_exchange"],
            long_funding_rate=data.get("long_funding_rate", 0.0),
            short_funding_rate=data.get("short_funding_rate", 0.0),
            spread=data["spread"],
            long_price=data.get("long_price", 0.0),
            short_price=data.get("short_price", 0.0),
            price_diff_pct=data.get("price_diff_pct"),
            risk_score=data.get("risk_score"),
            liquidity_score=data.get("liquidity_score"),
            hours_to_funding=data.get("hours_to_funding"),
            next_funding_time=_from_iso(data.get("next_funding_time")),
            created_at=_from_iso(data.get("created_at")),
            updated_at=_from_iso(data.get("updated_at")),
            apr=data.get("apr"),
            direction=data.get("direction"),
            anomaly_reason=data.get("anomaly_reason"),
        )


@dataclass(frozen=True)
class Pagination:
    """Page metadata of an opportunities query."""

    page: int = 1
    limit: int = 20
    total: int = 0
    total_pages: int = 0

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Pagination":
        return cls(
            page=int(data.get("current_page", 1)),
            limit=int(data.get("per_page", 20)),
            total=int(data.get("total_count", 0)),
            total_pages=int(data.get("total_pages", 0)),
        )


@dataclass
class OpportunitiesPage:
    """One page of opportunities."""

    opportunities: list[Opportunity] = field(default_factory=list)
    pagination: Pagination = field(default_factory=Pagination)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "OpportunitiesPage":
        return cls(
            opportunities=[Opportunity.from_api(item) for item in data.get("data") or []],
            pagination=Pagination.from_api(data.get("pagination") or {}),
        )
