"""Reader for the singleton game account.

Absent account, foreign owner, bad layout and RPC failure all surface as
GameUninitializedError. The distinct cause is kept for the log.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from solders.pubkey import Pubkey

from emperor_action.errors import AccountDecodeError, GameUninitializedError, RpcError
from emperor_action.program import ProgramInterface
from emperor_action.rpc import SolanaRpcClient

logger = logging.getLogger(__name__)

GAME_SEED = b"game"
GAME_ACCOUNT = "Game"


@dataclass(frozen=True)
class GameState:
    """Snapshot of the on-chain game account."""

    current_bid: int  # lamports
    current_emperor: Pubkey
    fee_recipient: Pubkey


def game_address(program: ProgramInterface) -> Pubkey:
    """Derive the game PDA."""
    return program.find_address(GAME_SEED)


class GameStateReader:
    """Fetches and decodes the game account."""

    def __init__(self, rpc: SolanaRpcClient, program: ProgramInterface):
        self.rpc = rpc
        self.program = program
        self.address = game_address(program)

    async def fetch(self) -> GameState:
        """Fetch the current game state.

        Raises:
            GameUninitializedError: If the account cannot be fetched or decoded
        """
        try:
            info = await self.rpc.get_account_info(self.address)
        except RpcError as e:
            logger.warning(f"Game account {self.address} fetch failed: {e}")
            raise GameUninitializedError("rpc", str(e)) from e

        if info is None:
            logger.info(f"Game account {self.address} does not exist")
            raise GameUninitializedError("missing")

        if info.owner != self.program.program_id:
            logger.warning(
                f"Game account {self.address} owned by {info.owner}, "
                f"expected {self.program.program_id}"
            )
            raise GameUninitializedError("owner")

        try:
            fields = self.program.decode_account(GAME_ACCOUNT, info.data)
        except AccountDecodeError as e:
            logger.warning(f"Game account {self.address} decode failed: {e}")
            raise GameUninitializedError("decode", str(e)) from e

        return GameState(
            current_bid=int(fields["current_bid"]),
            current_emperor=fields["current_emperor"],
            fee_recipient=fields["fee_recipient"],
        )

    async def fetch_optional(self) -> Optional[GameState]:
        """Fetch the game state, or None when it is unavailable."""
        try:
            return await self.fetch()
        except GameUninitializedError as e:
            logger.info(f"Game not initialized ({e.cause})")
            return None
