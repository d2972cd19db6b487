"""Pytest configuration and fixtures."""

import base64
import json
import os
from typing import Optional

import httpx
import pytest
import pytest_asyncio
from solders.hash import Hash
from solders.pubkey import Pubkey

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["RPC_URL"] = "http://rpc.test"
os.environ["DEBUG"] = "false"

from emperor_action.api.app import create_app
from emperor_action.program import load_program
from emperor_action.rpc import SolanaRpcClient
from emperor_action.web.controllers.actions import get_rpc_client


def encode_account(layout, values: dict) -> bytes:
    """Raw account data (discriminator included) for an IDL account layout."""
    prepared = {}
    for f in layout.fields:
        value = values[f["name"]]
        if f["type"] in ("pubkey", "publicKey"):
            value = list(bytes(value))
        prepared[f["name"]] = value
    return layout.discriminator + layout.layout.build(prepared)


class FakeRpcNode:
    """In-memory Solana JSON-RPC node serving the game account."""

    def __init__(self, program):
        self.program = program
        self.owner: Pubkey = program.program_id
        self.game: Optional[dict] = None
        self.raw_data: Optional[bytes] = None
        self.blockhash = Hash.new_unique()
        self.fail_methods: set[str] = set()
        self.rpc_errors: set[str] = set()
        self.calls: list[str] = []

    def set_game(self, current_bid: int, current_emperor: Pubkey, fee_recipient: Pubkey):
        self.game = {
            "current_bid": current_bid,
            "current_emperor": current_emperor,
            "fee_recipient": fee_recipient,
        }

    def _account_value(self) -> Optional[dict]:
        if self.raw_data is not None:
            data = self.raw_data
        elif self.game is not None:
            data = encode_account(self.program.account("Game"), self.game)
        else:
            return None
        return {
            "data": [base64.b64encode(data).decode(), "base64"],
            "executable": False,
            "lamports": 1_461_600,
            "owner": str(self.owner),
            "rentEpoch": 0,
        }

    def handle(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        method = body["method"]
        self.calls.append(method)

        if method in self.fail_methods:
            return httpx.Response(503, text="node unavailable")
        if method in self.rpc_errors:
            return httpx.Response(
                200,
                json={"jsonrpc": "2.0", "id": body["id"], "error": {"code": -32005, "message": "Node is behind"}},
            )

        if method == "getAccountInfo":
            value = self._account_value()
        elif method == "getLatestBlockhash":
            value = {"blockhash": str(self.blockhash), "lastValidBlockHeight": 150}
        else:
            return httpx.Response(
                200,
                json={"jsonrpc": "2.0", "id": body["id"], "error": {"code": -32601, "message": "Method not found"}},
            )

        return httpx.Response(
            200,
            json={"jsonrpc": "2.0", "id": body["id"], "result": {"context": {"slot": 42}, "value": value}},
        )

    def client(self) -> SolanaRpcClient:
        return SolanaRpcClient("http://rpc.test", transport=httpx.MockTransport(self.handle))


@pytest.fixture
def program():
    """Program interface from the bundled IDL."""
    return load_program()


@pytest.fixture
def game_data(program):
    """Encode Game account fields into raw account data."""
    return lambda values: encode_account(program.account("Game"), values)


@pytest.fixture
def rpc_node(program) -> FakeRpcNode:
    return FakeRpcNode(program)


@pytest.fixture
def emperor() -> Pubkey:
    return Pubkey.new_unique()


@pytest.fixture
def fee_recipient() -> Pubkey:
    return Pubkey.new_unique()


@pytest.fixture
def test_app(rpc_node):
    """Application with the RPC node replaced by the fake."""
    app = create_app()
    app.dependency_overrides[get_rpc_client] = rpc_node.client
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(test_app):
    """Create async test client."""
    transport = httpx.ASGITransport(app=test_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
