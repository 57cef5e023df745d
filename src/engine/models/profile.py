"""Capital profile and risk preset models.

The capital profile is the user's strategy configuration: how much capital
sits on each exchange, which exchanges are enabled, and how much risk to take.
Risk presets are fixed, immutable parameter sets looked up by profile type.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any

from src.engine.models.enums import RiskProfileType


@dataclass(frozen=True)
class RiskProfilePreset:
    """Static parameters for one risk tolerance level.

    Attributes:
        type: Preset type.
        max_position_size_percent: Max single position as % of the capital
            available on the two legs of a hedge.
        risk_weight: Multiplier applied to the risk penalty when scoring.
            Higher = risk-averse.
        min_spread: Minimum spread (fraction) worth considering.
        max_leverage: Maximum leverage the preset tolerates.
        stop_loss_percent: Loss (%) at which an open position should be closed.
        diversification_min: Minimum number of positions for healthy diversification.
    """

    type: RiskProfileType
    max_position_size_percent: float
    risk_weight: float
    min_spread: float
    max_leverage: float
    stop_loss_percent: float
    diversification_min: int


RISK_PROFILES: dict[RiskProfileType, RiskProfilePreset] = {
    RiskProfileType.CONSERVATIVE: RiskProfilePreset(
        type=RiskProfileType.CONSERVATIVE,
        max_position_size_percent=20,
        risk_weight=2.0,
        min_spread=0.05,
        max_leverage=3,
        stop_loss_percent=2,
        diversification_min=5,
    ),
    RiskProfileType.MODERATE: RiskProfilePreset(
        type=RiskProfileType.MODERATE,
        max_position_size_percent=40,
        risk_weight=1.0,
        min_spread=0.03,
        max_leverage=5,
        stop_loss_percent=5,
        diversification_min=3,
    ),
    RiskProfileType.AGGRESSIVE: RiskProfilePreset(
        type=RiskProfileType.AGGRESSIVE,
        max_position_size_percent=80,
        risk_weight=0.5,
        min_spread=0.01,
        max_leverage=10,
        stop_loss_percent=10,
        diversification_min=1,
    ),
}


def get_risk_profile(profile_type: RiskProfileType | str) -> RiskProfilePreset:
    """Look up a risk preset by type.

    Args:
        profile_type: Preset type or its string value (e.g. "moderate").

    Returns:
        The matching immutable preset.

    Raises:
        ValueError: If the type is not a known preset.
    """
    return RISK_PROFILES[RiskProfileType(profile_type)]


def get_all_risk_profiles() -> list[RiskProfilePreset]:
    """Return all presets, conservative first."""
    return list(RISK_PROFILES.values())


@dataclass
class ExchangeConfig:
    """Per-exchange switch."""

    enabled: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"enabled": self.enabled}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExchangeConfig":
        return cls(enabled=bool(data.get("enabled", True)))


@dataclass
class CapitalProfile:
    """Capital and risk configuration driving all recommendations.

    Exchange names are free-form keys: new venues appear on the platform
    without a code change here.

    Attributes:
        balances: Exchange name -> capital on that exchange ($).
        risk_profile: Active risk preset type.
        daily_target_percent: Target daily return as % of total capital (0-100).
        max_position_size_percent: Ceiling on a single position as % of total capital (0-100).
        max_open_positions: Maximum number of concurrently open positions.
        min_spread: Minimum spread (fraction, e.g. 0.03) to consider.
        exchanges: Exchange name -> enabled switch.
        created_at: Creation time.
        updated_at: Last mutation time.
    """

    balances: dict[str, float] = field(default_factory=dict)
    risk_profile: RiskProfileType = RiskProfileType.MODERATE
    daily_target_percent: float = 1.0
    max_position_size_percent: float = 30.0
    max_open_positions: int = 5
    min_spread: float = 0.03
    exchanges: dict[str, ExchangeConfig] = field(default_factory=dict)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    @property
    def total_capital(self) -> float:
        """Sum of all exchange balances."""
        return sum(self.balances.values())

    @property
    def preset(self) -> RiskProfilePreset:
        """Risk preset for the active profile type."""
        return get_risk_profile(self.risk_profile)

    def is_enabled(self, exchange: str) -> bool:
        """Whether an exchange is configured and enabled."""
        config = self.exchanges.get(exchange)
        return config is not None and config.enabled

    @property
    def enabled_exchanges(self) -> list[str]:
        """Enabled exchange names in configuration order."""
        return [name for name, config in self.exchanges.items() if config.enabled]

    def touch(self) -> "CapitalProfile":
        """Return a copy with updated_at stamped to now."""
        return replace(self, updated_at=datetime.now())

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "balances": dict(self.balances),
            "risk_profile": self.risk_profile.value,
            "daily_target_percent": self.daily_target_percent,
            "max_position_size_percent": self.max_position_size_percent,
            "max_open_positions": self.max_open_positions,
            "min_spread": self.min_spread,
            "exchanges": {name: cfg.to_dict() for name, cfg in self.exchanges.items()},
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CapitalProfile":
        """Create instance from dictionary (as written by to_dict)."""
        now = datetime.now()
        created_at = data.get("created_at")
        updated_at = data.get("updated_at")
        return cls(
            balances={k: float(v) for k, v in (data.get("balances") or {}).items()},
            risk_profile=RiskProfileType(data.get("risk_profile", "moderate")),
            daily_target_percent=float(data.get("daily_target_percent", 1.0)),
            max_position_size_percent=float(data.get("max_position_size_percent", 30.0)),
            max_open_positions=int(data.get("max_open_positions", 5)),
            min_spread=float(data.get("min_spread", 0.03)),
            exchanges={
                k: ExchangeConfig.from_dict(v)
                for k, v in (data.get("exchanges") or {}).items()
            },
            created_at=datetime.fromisoformat(created_at) if created_at else now,
            updated_at=datetime.fromisoformat(updated_at) if updated_at else now,
        )
