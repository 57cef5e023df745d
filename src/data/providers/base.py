"""Platform error hierarchy."""

from typing import Any


class PlatformError(Exception):
    """Base exception for remote platform errors.

    Attributes:
        code: Machine-readable error code (e.g. HTTP_ERROR, RPC_-32601, TIMEOUT).
        details: Optional extra payload from the platform.
    """

    def __init__(self, message: str, code: str, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details


class AuthenticationError(PlatformError):
    """Raised when a call needs a token or the token is rejected."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message, "AUTH_REQUIRED")


class RateLimitError(PlatformError):
    """Raised when the platform rate limit is exceeded."""

    def __init__(self, retry_after: int | None = None) -> None:
        super().__init__("Rate limit exceeded", "RATE_LIMIT")
        self.retry_after = retry_after


class ExecutionError(PlatformError):
    """Raised when an execution cannot be opened or closed."""

    def __init__(self, message: str, execution_id: str | None = None) -> None:
        super().__init__(message, "EXECUTION_ERROR")
        self.execution_id = execution_id
