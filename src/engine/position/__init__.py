"""Position-level calculations for individual hedge positions.

This module provides calculations at the single position level:
- Stop-loss price levels
- Stop-out decisions (loss threshold, spread inversion)
"""

from src.engine.position.stop_loss import (
    calc_stop_price,
    get_stop_loss_recommendation,
    should_stop_out,
)

__all__ = [
    "calc_stop_price",
    "get_stop_loss_recommendation",
    "should_stop_out",
]
