"""
Arbitrage Platform Client

JSON-RPC 2.0 + REST client for the funding-rate arbitrage platform.

Usage:
    client = PlatformClient(PlatformClientConfig(token="..."))

    # Opportunities for one exchange pair
    page = client.get_opportunities("bybit-kucoin", limit=10)

    # Live portfolio (requires token)
    portfolio = client.get_portfolio()

Errors:
    All failures are raised as PlatformError subclasses with a code:
    AUTH_REQUIRED, RATE_LIMIT, HTTP_ERROR, RPC_<code>, TIMEOUT, NETWORK_ERROR.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any

import requests

from src.data.models.opportunity import OpportunitiesPage, Opportunity
from src.data.models.portfolio import (
    CloseResult,
    ExecuteResult,
    FundingFees,
    PlatformMetrics,
    Portfolio,
)
from src.data.providers.base import (
    AuthenticationError,
    ExecutionError,
    PlatformError,
    RateLimitError,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.zirodelta.xyz"
DEFAULT_TIMEOUT = 30


@dataclass
class PlatformClientConfig:
    """Platform client configuration."""

    base_url: str = DEFAULT_BASE_URL
    token: str | None = None

    # Request timeout (seconds)
    timeout: float = DEFAULT_TIMEOUT

    # Log request/response payloads at DEBUG
    debug: bool = False

    def __post_init__(self) -> None:
        self.base_url = (self.base_url or DEFAULT_BASE_URL).rstrip("/")


class PlatformClient:
    """Synchronous platform client.

    One requests.Session per client. Not thread-safe: the JSON-RPC request
    id counter is per instance.
    """

    def __init__(
        self,
        config: PlatformClientConfig | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config or PlatformClientConfig()
        self._session = session or requests.Session()
        self._request_id = 0

    @property
    def name(self) -> str:
        return "platform"

    # ==================== Configuration ====================

    def set_token(self, token: str) -> None:
        """Set the bearer token."""
        self.config.token = token

    @property
    def is_authenticated(self) -> bool:
        return bool(self.config.token)

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    def __enter__(self) -> "PlatformClient":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    # ==================== Transport ====================

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.config.token:
            headers["Authorization"] = f"Bearer {self.config.token}"
        return headers

    def _rpc(self, method: str, params: dict[str, Any], requires_auth: bool = False) -> Any:
        """Call a JSON-RPC method and return its result."""
        if requires_auth and not self.config.token:
            raise AuthenticationError()

        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": {k: v for k, v in params.items() if v is not None},
            "id": self._request_id,
        }
        if self.config.debug:
            logger.debug(f"RPC request: {json.dumps(payload)}")

        try:
            response = self._session.post(
                f"{self.config.base_url}/jsonrpc/",
                json=payload,
                headers=self._headers(),
                timeout=self.config.timeout,
            )
        except requests.Timeout:
            raise PlatformError("Request timeout", "TIMEOUT")
        except requests.RequestException as e:
            raise PlatformError(str(e), "NETWORK_ERROR")

        self._check_status(response)

        try:
            body = response.json()
        except ValueError as e:
            raise PlatformError(f"Invalid JSON response: {e}", "NETWORK_ERROR")

        if self.config.debug:
            logger.debug(f"RPC response: {json.dumps(body)}")

        error = body.get("error")
        if error:
            raise PlatformError(
                error.get("message", "Unknown RPC error"),
                f"RPC_{error.get('code')}",
                error.get("data"),
            )
        return body.get("result")

    def _get(self, endpoint: str) -> Any:
        """GET a REST endpoint and return its JSON body."""
        try:
            response = self._session.get(
                f"{self.config.base_url}{endpoint}",
                headers=self._headers(),
                timeout=self.config.timeout,
            )
        except requests.Timeout:
            raise PlatformError("Request timeout", "TIMEOUT")
        except requests.RequestException as e:
            raise PlatformError(str(e), "NETWORK_ERROR")

        self._check_status(response)
        try:
            return response.json()
        except ValueError as e:
            raise PlatformError(f"Invalid JSON response: {e}", "NETWORK_ERROR")

    @staticmethod
    def _check_status(response: requests.Response) -> None:
        if response.status_code == 401:
            raise AuthenticationError("Invalid or expired token")
        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(int(retry_after) if retry_after and retry_after.isdigit() else None)
        if not response.ok:
            raise PlatformError(
                f"HTTP error {response.status_code}",
                "HTTP_ERROR",
                {"status": response.status_code, "reason": response.reason},
            )

    # ==================== Exchange Pairs ====================

    def get_exchange_pairs(self) -> list[str]:
        """Available exchange pairs (e.g. "bybit-kucoin")."""
        return self._rpc("exchange_pair", {})

    def get_account_exchange_pairs(self) -> list[dict[str, Any]]:
        """User's connected exchange accounts."""
        return self._rpc("account_exchange_pair", {}, requires_auth=True)

    # ==================== Opportunities ====================

    def get_opportunities(
        self,
        exchange_pair: str,
        page: int = 1,
        limit: int = 20,
        sort_by: str = "apr",
        query: str | None = None,
    ) -> OpportunitiesPage:
        """Fetch one page of opportunities for an exchange pair.

        Args:
            exchange_pair: Directed pair, e.g. "bybit-kucoin".
            page: Page number (1-based).
            limit: Page size.
            sort_by: Sort key. "spread" is sent as "apr".
            query: Symbol filter.

        Returns:
            OpportunitiesPage.
        """
        result = self._rpc(
            "get_opportunities",
            {
                "exchangepair": exchange_pair,
                "page": page or 1,
                "limit": limit or 20,
                "q": query,
                "sortby": "apr" if sort_by == "spread" else (sort_by or "apr"),
            },
        )
        return OpportunitiesPage.from_api(result or {})

    def get_opportunity_detail(self, opportunity_id: str) -> dict[str, Any]:
        """Extended opportunity details (volumes, funding history)."""
        return self._rpc("opportunity_detail", {"opportunity_id": opportunity_id})

    def get_top_opportunities(self, exchange_pair: str, limit: int = 10) -> list[Opportunity]:
        """Top opportunities of a pair by spread."""
        return self.get_opportunities(exchange_pair, limit=limit, sort_by="spread").opportunities

    # ==================== Execution ====================

    def execute_opportunity(self, opportunity_id: str, amount: float, mode: str = "auto") -> ExecuteResult:
        """Open a hedge on the platform.

        Args:
            opportunity_id: Opportunity to execute.
            amount: USD amount.
            mode: "auto" or "manual".

        Returns:
            ExecuteResult.

        Raises:
            ExecutionError: The platform rejected the execution.
        """
        result = ExecuteResult.from_dict(
            self._rpc(
                "execute_opportunity",
                {"opportunity_id": opportunity_id, "amount": amount, "mode": mode or "auto"},
                requires_auth=True,
            )
            or {}
        )
        if not result.success:
            raise ExecutionError(result.message or "Execution failed", result.execution_id or None)
        return result

    def resubmit_execution(self, job_id: str) -> ExecuteResult:
        """Resubmit a failed execution job."""
        return ExecuteResult.from_dict(
            self._rpc("resubmit_execute_opportunity", {"job_id": job_id}, requires_auth=True) or {}
        )

    def close_execution(self, execution_id: str) -> CloseResult:
        """Close a running execution.

        Raises:
            ExecutionError: The platform refused to close the execution.
        """
        result = CloseResult.from_dict(
            self._rpc("close_execution", {"execution_id": execution_id}, requires_auth=True) or {}
        )
        if not result.success:
            raise ExecutionError(result.message or "Close failed", execution_id)
        return result

    def continue_epoch(self, execution_id: str) -> dict[str, Any]:
        """Roll an execution into the next funding epoch."""
        return self._rpc("continue_epoch", {"execution_id": execution_id}, requires_auth=True)

    def check_pair_status(self, pair: str, exchange: str) -> dict[str, Any]:
        """Whether a pair is running/queued for the user."""
        return self._rpc("check_pair_status", {"pair": pair, "exchange": exchange}, requires_auth=True)

    # ==================== Portfolio ====================

    def get_portfolio(self, execution_id: str | None = None) -> Portfolio:
        """Live portfolio, optionally filtered to one execution."""
        result = self._rpc("portfolio_live", {"execution_id": execution_id}, requires_auth=True)
        return Portfolio.from_dict(result or {})

    def get_portfolio_v2(self, execution_id: str | None = None) -> Portfolio:
        """Live portfolio through the optimized endpoint."""
        result = self._rpc("portfolio_live_v2", {"execution_id": execution_id}, requires_auth=True)
        return Portfolio.from_dict(result or {})

    def get_executed_opportunities(self, pair: str, exchange: str) -> list[dict[str, Any]]:
        """Executed opportunities for a pair/exchange."""
        return self._rpc("get_executed_opportunity", {"pair": pair, "exchange": exchange}, requires_auth=True)

    # ==================== Metrics ====================

    def get_funding_fees(self) -> FundingFees:
        """Funding fee totals."""
        return FundingFees.from_dict(self._get("/metrics/funding-fees") or {})

    def get_metrics(self) -> PlatformMetrics:
        """Platform-wide metrics, assembled from several endpoints."""
        timestamp = self._get("/metrics/timestamp") or {}
        executions = self._get("/metrics/executions/active") or {}
        volume = self._get("/metrics/volume") or {}
        roi = self._get("/metrics/arbitrage-roi") or {}
        tvl = self._get("/metrics/tvl") or {}

        return PlatformMetrics(
            timestamp=str(timestamp.get("timestamp", "")),
            queued_count=int(executions.get("queued_count") or 0),
            running_count=int(executions.get("running_count") or 0),
            active_count=int(executions.get("active_count") or 0),
            total_volume=float(volume.get("total_volume") or 0),
            trade_count=int(volume.get("trade_count") or 0),
            average_roi=float(roi.get("averageROI") or 0),
            tvl=float(tvl.get("tvl") or 0),
        )

    # ==================== Health ====================

    def health(self) -> dict[str, Any]:
        """REST health check."""
        return self._get("/health")

    def test(self) -> str:
        """JSON-RPC connectivity test."""
        return self._rpc("test", {})
