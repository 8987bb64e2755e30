"""
Balance Query Client Module

Async JSON-RPC client that reads an account's candidate balance from a Massa
node. Failures are converted into a BalanceQueryResult carrying the
"unavailable" sentinel; nothing is raised to the caller.
"""

import httpx
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .errors import VaultErrorKind

logger = logging.getLogger("autovault.rpc")

DEFAULT_RPC_URL = "https://test.massa.net/api/v2"
NANO_PER_UNIT = 1e9
UNAVAILABLE = "--"


@dataclass(frozen=True)
class BalanceQueryResult:
    """Outcome of a balance lookup"""
    address: str
    balance: Optional[float] = None
    display: str = UNAVAILABLE
    error_kind: Optional[VaultErrorKind] = None
    error_message: Optional[str] = None

    @property
    def available(self) -> bool:
        return self.balance is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "address": self.address,
            "balance": self.balance,
            "display": self.display,
            "error": self.error_kind.value if self.error_kind else None,
            "message": self.error_message,
        }


class RemoteQueryError(Exception):
    """Node returned an error or an unreadable response"""


def build_payload(address: str) -> Dict[str, Any]:
    """JSON-RPC envelope for get_addresses"""
    return {
        "jsonrpc": "2.0",
        "method": "get_addresses",
        "params": [[address]],
        "id": 1,
    }


def format_balance(balance: float) -> str:
    return f"{balance:.4f}"


class BalanceQueryClient:
    """JSON-RPC client for on-chain account balances"""

    def __init__(
        self,
        rpc_url: str = DEFAULT_RPC_URL,
        timeout: Optional[float] = None,  # None = httpx default
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.rpc_url = rpc_url
        self.timeout = timeout
        client_kwargs: Dict[str, Any] = {
            "headers": {"Content-Type": "application/json"},
        }
        if timeout is not None:
            client_kwargs["timeout"] = timeout
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.AsyncClient(**client_kwargs)
        self._busy = False

    @property
    def busy(self) -> bool:
        """True while a request is in flight"""
        return self._busy

    async def fetch_balance(self, address: str) -> BalanceQueryResult:
        """
        Look up the candidate balance for address.

        Args:
            address: account address; surrounding whitespace is ignored

        Returns:
            BalanceQueryResult with the balance in whole units, or the
            sentinel display and an error kind when unavailable
        """
        address = (address or "").strip()
        if not address:
            return BalanceQueryResult(
                address="",
                error_kind=VaultErrorKind.INVALID_ADDRESS,
                error_message="Please enter a valid address",
            )

        self._busy = True
        try:
            response = await self._client.post(self.rpc_url, json=build_payload(address))
            response.raise_for_status()
            balance = self._parse_response(response.json())
        except (httpx.HTTPError, RemoteQueryError, ValueError, KeyError, TypeError) as e:
            logger.error(f"Error fetching balance: {e}")
            return BalanceQueryResult(
                address=address,
                error_kind=VaultErrorKind.REMOTE_QUERY_FAILURE,
                error_message=f"Failed to fetch balance: {e}",
            )
        finally:
            self._busy = False

        if balance is None:
            return BalanceQueryResult(address=address)
        return BalanceQueryResult(
            address=address,
            balance=balance,
            display=format_balance(balance),
        )

    def _parse_response(self, data: Any) -> Optional[float]:
        """Extract the first entry's candidate balance in whole units"""
        if not isinstance(data, dict):
            raise RemoteQueryError("Malformed RPC response")

        error = data.get("error")
        if error:
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise RemoteQueryError(message or "Unknown error")

        result = data.get("result")
        if not result:
            return None

        return float(result[0]["candidate_balance"]) / NANO_PER_UNIT

    async def close(self) -> None:
        """Close the HTTP client"""
        await self._client.aclose()
