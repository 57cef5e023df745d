"""Account-level calculations for capital management.

This module provides calculations at the account level:
- Position sizing (capital-constrained funnel)
- Balance ledger, rebalancing and capital checks
"""

from src.engine.account.balance import (
    calc_allocations,
    calc_balance_summary,
    generate_rebalance_suggestions,
    get_available_capital,
    get_deployed_capital,
    get_total_capital,
    get_utilization_rate,
    has_capital_for,
    update_balance,
)
from src.engine.account.position_sizing import calc_position_size

__all__ = [
    # Position sizing
    "calc_position_size",
    # Balances
    "calc_allocations",
    "calc_balance_summary",
    "generate_rebalance_suggestions",
    "has_capital_for",
    # Capital
    "get_total_capital",
    "get_deployed_capital",
    "get_available_capital",
    "get_utilization_rate",
    "update_balance",
]
