"""Per-exchange balance ledger and capital checks.

Account-level module. A hedge position consumes capital on both of its
exchanges equally: half of its size is allocated to each leg.
"""

from __future__ import annotations

from dataclasses import replace

from src.engine.models.position import CurrentPosition
from src.engine.models.profile import CapitalProfile
from src.engine.models.result import (
    BalanceSummary,
    CapitalCheck,
    ExchangeBalance,
    RebalanceSuggestion,
)

# Margin on allocated capital, approximates 5x leverage
MARGIN_RATIO = 0.2

# Imbalance rule: diff > highest.total * ratio and diff > min diff
REBALANCE_IMBALANCE_RATIO = 0.3
REBALANCE_MIN_DIFF = 100.0

# Low-balance rule: top up an exchange below LOW from one above DONOR
LOW_AVAILABLE_THRESHOLD = 100.0
DONOR_AVAILABLE_THRESHOLD = 200.0
LOW_BALANCE_TRANSFER = 100.0


def calc_allocations(positions: list[CurrentPosition]) -> dict[str, float]:
    """Capital allocated per exchange (half of each position per leg)."""
    allocated: dict[str, float] = {}
    for pos in positions:
        per_leg = pos.size / 2
        allocated[pos.long_exchange] = allocated.get(pos.long_exchange, 0.0) + per_leg
        allocated[pos.short_exchange] = allocated.get(pos.short_exchange, 0.0) + per_leg
    return allocated


def calc_balance_summary(
    profile: CapitalProfile,
    positions: list[CurrentPosition] | None = None,
    margin_ratio: float = MARGIN_RATIO,
    **rebalance_options: float,
) -> BalanceSummary:
    """Build the per-exchange balance ledger.

    Only exchanges with a balance entry appear in the ledger; allocation to
    an exchange without a balance is ignored.

    Args:
        profile: Capital profile (balances in configuration order).
        positions: Currently open positions.
        margin_ratio: Margin requirement as a fraction of allocated capital.
        **rebalance_options: Threshold overrides for generate_rebalance_suggestions.

    Returns:
        BalanceSummary with rebalance suggestions attached.
    """
    allocated_by_exchange = calc_allocations(positions or [])

    balances: list[ExchangeBalance] = []
    for exchange, total in profile.balances.items():
        allocated = allocated_by_exchange.get(exchange, 0.0)
        balances.append(
            ExchangeBalance(
                exchange=exchange,
                total=total,
                allocated=allocated,
                available=max(0.0, total - allocated),
                margin=allocated * margin_ratio,
            )
        )

    return BalanceSummary(
        balances=balances,
        total_balance=sum(b.total for b in balances),
        total_allocated=sum(b.allocated for b in balances),
        total_available=sum(b.available for b in balances),
        rebalance_suggestions=generate_rebalance_suggestions(balances, **rebalance_options),
    )


def generate_rebalance_suggestions(
    balances: list[ExchangeBalance],
    imbalance_ratio: float = REBALANCE_IMBALANCE_RATIO,
    min_diff: float = REBALANCE_MIN_DIFF,
    low_threshold: float = LOW_AVAILABLE_THRESHOLD,
    donor_threshold: float = DONOR_AVAILABLE_THRESHOLD,
    low_transfer: float = LOW_BALANCE_TRANSFER,
) -> list[RebalanceSuggestion]:
    """Suggest transfers between unevenly funded exchanges.

    Two independent rules:
    - Imbalance: if highest.available - lowest.available exceeds both
      highest.total * imbalance_ratio and min_diff, move half the
      difference (floored) from highest to lowest.
    - Low balance: every exchange with available < low_threshold gets a
      fixed low_transfer from the first other exchange whose available
      exceeds donor_threshold.

    Suggestions are advisory text, never executed.

    Args:
        balances: Balance ledger entries.

    Returns:
        Suggestions, imbalance rule first. Empty with fewer than 2 exchanges.
    """
    suggestions: list[RebalanceSuggestion] = []
    if len(balances) < 2:
        return suggestions

    ranked = sorted(balances, key=lambda b: b.available, reverse=True)
    highest = ranked[0]
    lowest = ranked[-1]

    diff = highest.available - lowest.available
    if diff > highest.total * imbalance_ratio and diff > min_diff:
        suggestions.append(
            RebalanceSuggestion(
                from_exchange=highest.exchange,
                to_exchange=lowest.exchange,
                amount=float(diff // 2),
                reason=f"Balance {highest.exchange} and {lowest.exchange} for better opportunity coverage",
            )
        )

    for balance in balances:
        if balance.available >= low_threshold:
            continue
        donor = next(
            (
                b
                for b in balances
                if b.exchange != balance.exchange and b.available > donor_threshold
            ),
            None,
        )
        if donor is not None:
            suggestions.append(
                RebalanceSuggestion(
                    from_exchange=donor.exchange,
                    to_exchange=balance.exchange,
                    amount=low_transfer,
                    reason=f"{balance.exchange} running low on available capital",
                )
            )

    return suggestions


def has_capital_for(
    profile: CapitalProfile,
    positions: list[CurrentPosition],
    long_exchange: str,
    short_exchange: str,
    size: float,
) -> CapitalCheck:
    """Check that both legs can fund a new position of the given size.

    Each leg needs size / 2 available. Checks run in order: missing long
    balance, missing short balance, insufficient long, insufficient short;
    the first failure determines the reason.

    Args:
        profile: Capital profile.
        positions: Currently open positions.
        long_exchange: Exchange of the long leg.
        short_exchange: Exchange of the short leg.
        size: Total position size ($).

    Returns:
        CapitalCheck, with reason set when has_capital is False.
    """
    summary = calc_balance_summary(profile, positions)
    long_balance = summary.get(long_exchange)
    short_balance = summary.get(short_exchange)
    needed = size / 2

    if long_balance is None:
        return CapitalCheck(False, f"No balance configured for {long_exchange}")
    if short_balance is None:
        return CapitalCheck(False, f"No balance configured for {short_exchange}")
    if long_balance.available < needed:
        return CapitalCheck(
            False,
            f"Insufficient on {long_exchange}: need ${needed:.2f}, have ${long_balance.available:.2f}",
        )
    if short_balance.available < needed:
        return CapitalCheck(
            False,
            f"Insufficient on {short_exchange}: need ${needed:.2f}, have ${short_balance.available:.2f}",
        )
    return CapitalCheck(True)


def get_total_capital(profile: CapitalProfile) -> float:
    """Sum of all exchange balances."""
    return profile.total_capital


def get_deployed_capital(positions: list[CurrentPosition]) -> float:
    """Capital committed to open positions."""
    return sum(p.size for p in positions)


def get_available_capital(profile: CapitalProfile, positions: list[CurrentPosition]) -> float:
    """Capital not tied up in positions, summed over exchanges."""
    return calc_balance_summary(profile, positions).total_available


def get_utilization_rate(profile: CapitalProfile, positions: list[CurrentPosition]) -> float:
    """Deployed capital as % of total capital (0 when there is no capital)."""
    total = profile.total_capital
    if total == 0:
        return 0.0
    return get_deployed_capital(positions) / total * 100


def update_balance(profile: CapitalProfile, exchange: str, amount: float) -> CapitalProfile:
    """Return a copy of the profile with one balance set.

    The input profile is left unchanged.
    """
    balances = dict(profile.balances)
    balances[exchange] = amount
    return replace(profile, balances=balances).touch()
