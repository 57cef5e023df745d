"""Engine calculation result models.

Pure data containers returned by engine functions. All values are
recomputed on every call; nothing here is shared or mutated.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RiskFactors:
    """Risk factor vector for a single opportunity.

    Each factor is in [0, 100], higher = riskier.

    Attributes:
        spread_risk: Risk of the spread collapsing before capture.
        volume_risk: Illiquidity risk (100 - liquidity score).
        funding_time_risk: Risk from waiting longer for the next funding event.
        price_deviation: Price dislocation between the two legs.
        overall: Weighted blend (0.3/0.3/0.2/0.2).
    """

    spread_risk: float
    volume_risk: float
    funding_time_risk: float
    price_deviation: float
    overall: float


@dataclass
class PositionSizeResult:
    """Position size recommendation with its narrowing trail.

    Attributes:
        recommended_size: Final size ($), 0 when the opportunity should be skipped.
        max_allowed_size: Initial cap from the profile (total capital x max position %).
        min_viable_size: Smallest size worth opening.
        reasoning: Human-readable justification, one line per sizing step.
        warnings: Non-fatal notes about the sizing.
        size_trail: Running max size after each pipeline step (non-increasing).
    """

    recommended_size: float
    max_allowed_size: float
    min_viable_size: float
    reasoning: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    size_trail: list[float] = field(default_factory=list)


@dataclass(frozen=True)
class ExchangeBalance:
    """Balance ledger entry for one exchange."""

    exchange: str
    total: float
    allocated: float  # Capital tied up in open positions
    available: float
    margin: float  # Approximate margin requirement of allocated capital


@dataclass
class RebalanceSuggestion:
    """Advisory transfer between exchanges. Never executed automatically."""

    from_exchange: str
    to_exchange: str
    amount: float
    reason: str


@dataclass
class BalanceSummary:
    """Per-exchange balances plus aggregates."""

    balances: list[ExchangeBalance] = field(default_factory=list)
    total_balance: float = 0.0
    total_allocated: float = 0.0
    total_available: float = 0.0
    rebalance_suggestions: list[RebalanceSuggestion] = field(default_factory=list)

    def get(self, exchange: str) -> ExchangeBalance | None:
        """Balance entry for an exchange, None if not configured."""
        for balance in self.balances:
            if balance.exchange == exchange:
                return balance
        return None


@dataclass(frozen=True)
class CapitalCheck:
    """Result of a capital sufficiency check."""

    has_capital: bool
    reason: str | None = None


@dataclass
class DiversificationAnalysis:
    """Concentration analysis of open positions.

    Attributes:
        score: Diversification health, 0-100.
        exchange_exposure: Exchange -> % of deployed capital.
        symbol_exposure: Symbol -> % of deployed capital.
        warnings: Concentration warnings.
        suggestions: Improvement suggestions.
    """

    score: float
    exchange_exposure: dict[str, float] = field(default_factory=dict)
    symbol_exposure: dict[str, float] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class StopLossRecommendation:
    """Stop-loss price levels for an entry price."""

    recommended_stop_loss: float
    conservative_stop_loss: float
    aggressive_stop_loss: float
    reasoning: str


@dataclass(frozen=True)
class StopOutDecision:
    """Whether an open position should be closed."""

    should_stop: bool
    reason: str | None = None
