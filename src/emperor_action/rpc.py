"""Query-only Solana JSON-RPC client.

This client can read accounts and blockhashes and nothing else. It holds no
identity and cannot sign, so transactions built from its reads carry only
the identities the caller supplies.
"""

import base64
import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx
from solders.hash import Hash
from solders.pubkey import Pubkey

from emperor_action.config import get_settings
from emperor_action.errors import RpcError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccountInfo:
    """Raw account as returned by getAccountInfo."""

    data: bytes
    owner: Pubkey


class SolanaRpcClient:
    """Read-only JSON-RPC client, one per request."""

    def __init__(
        self,
        url: str,
        commitment: str = "confirmed",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            url: JSON-RPC endpoint
            commitment: Commitment level for reads
            timeout: Per-call timeout in seconds
            transport: Optional httpx transport (tests plug a mock here)
        """
        self.url = url
        self.commitment = commitment
        self.timeout = timeout
        self._transport = transport

    async def _call(self, method: str, params: list) -> Any:
        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.url, json=payload)
        except httpx.HTTPError as e:
            raise RpcError(method, f"transport error: {e!r}") from e

        if response.status_code != 200:
            raise RpcError(method, f"HTTP {response.status_code} - {response.text[:200]}")

        try:
            data = response.json()
        except ValueError as e:
            raise RpcError(method, "invalid JSON response") from e

        if data.get("error"):
            raise RpcError(method, f"RPC error: {data['error']}")
        if "result" not in data:
            raise RpcError(method, "response has no result")

        return data["result"]

    async def get_account_info(self, address: Pubkey) -> Optional[AccountInfo]:
        """Fetch an account, or None if it does not exist."""
        result = await self._call(
            "getAccountInfo",
            [str(address), {"encoding": "base64", "commitment": self.commitment}],
        )

        value = result.get("value") if isinstance(result, dict) else None
        if value is None:
            return None

        try:
            encoded, encoding = value["data"]
            if encoding != "base64":
                raise ValueError(f"unexpected encoding {encoding}")
            return AccountInfo(
                data=base64.b64decode(encoded),
                owner=Pubkey.from_string(value["owner"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise RpcError("getAccountInfo", f"malformed account value: {e}") from e

    async def get_latest_blockhash(self) -> Hash:
        """Fetch the latest blockhash."""
        result = await self._call("getLatestBlockhash", [{"commitment": self.commitment}])

        try:
            return Hash.from_string(result["value"]["blockhash"])
        except (KeyError, TypeError, ValueError) as e:
            raise RpcError("getLatestBlockhash", f"malformed blockhash: {e}") from e


def create_rpc_client(transport: Optional[httpx.AsyncBaseTransport] = None) -> SolanaRpcClient:
    """Create a client for the configured endpoint."""
    settings = get_settings()
    return SolanaRpcClient(
        url=settings.rpc_url,
        commitment=settings.rpc_commitment,
        timeout=settings.rpc_timeout,
        transport=transport,
    )
