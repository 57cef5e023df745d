"""Platform enumerations."""

from enum import Enum


class ExecutionStatus(str, Enum):
    """Lifecycle state of a platform execution."""

    QUEUED = "queued"
    RUNNING = "running"
    CLOSING = "closing"
    CLOSED = "closed"
    FAILED = "failed"


class ExecutionMode(str, Enum):
    """How the platform manages an execution."""

    AUTO = "auto"  # Platform rolls the position across funding epochs
    MANUAL = "manual"


class SortField(str, Enum):
    """Sort keys accepted by get_opportunities."""

    SPREAD = "spread"  # Sent to the API as "apr"
    APR = "apr"
    FUNDING_DELTA = "funding_delta"
    EPOCH_HOURS = "epoch_hours"
    RISK_SCORE = "risk_score"
    LIQUIDITY_SCORE = "liquidity_score"
    NEXT_FUNDING_TIME = "next_funding_time"
