"""Remote platform providers."""

from src.data.providers.base import (
    AuthenticationError,
    ExecutionError,
    PlatformError,
    RateLimitError,
)
from src.data.providers.platform_client import (
    DEFAULT_BASE_URL,
    PlatformClient,
    PlatformClientConfig,
)

__all__ = [
    "PlatformClient",
    "PlatformClientConfig",
    "DEFAULT_BASE_URL",
    "PlatformError",
    "AuthenticationError",
    "RateLimitError",
    "ExecutionError",
]
