"""Engine layer enumerations.

Centralized location for all enums used in the engine layer.
"""

from enum import Enum


class RiskProfileType(str, Enum):
    """Named risk tolerance preset."""

    CONSERVATIVE = "conservative"  # Small positions, wide spreads, many positions
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"  # Large positions, thin spreads, concentration allowed


class RiskLevel(str, Enum):
    """Aggregate risk level of a recommendation set."""

    LOW = "low"  # Mean risk score < 30
    MEDIUM = "medium"  # Mean risk score < 60
    HIGH = "high"
