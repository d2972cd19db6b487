"""Transaction builder for preparing unsigned claim_throne transactions.

This service builds unsigned transactions for client-side signing.
NO signing or broadcasting happens here - this is non-custodial.
"""

import base64
import logging

from solders.hash import Hash
from solders.message import Message
from solders.pubkey import Pubkey
from solders.transaction import Transaction

from emperor_action.errors import InvalidAccountError, MissingAccountError
from emperor_action.program import ProgramInterface
from emperor_action.rpc import SolanaRpcClient
from emperor_action.web.contracts.actions import ActionPostResponse
from emperor_action.web.services.state_reader import GameState, GameStateReader

logger = logging.getLogger(__name__)

CLAIM_THRONE = "claim_throne"
CLAIM_MESSAGE = "Proclaiming new Emperor!"


def parse_account(account: str) -> Pubkey:
    """Parse a base58 account string.

    Raises:
        MissingAccountError: If the account is empty
        InvalidAccountError: If it is not a valid public key
    """
    if not account:
        raise MissingAccountError()
    try:
        return Pubkey.from_string(account.strip())
    except ValueError as e:
        raise InvalidAccountError(f"{account!r}: {e}") from e


class TransactionBuilder:
    """Builds unsigned claim_throne transactions for client-side signing.

    This service NEVER:
    - Accesses private keys
    - Signs transactions
    - Broadcasts transactions

    It ONLY reads the game account and a blockhash, then prepares a
    transaction for the caller's wallet to sign.
    """

    def __init__(self, rpc: SolanaRpcClient, program: ProgramInterface):
        self.rpc = rpc
        self.program = program
        self.reader = GameStateReader(rpc, program)

    def build_claim_throne(
        self,
        user: Pubkey,
        state: GameState,
        blockhash: Hash,
    ) -> Transaction:
        """Build the unsigned claim_throne transaction.

        Args:
            user: Caller, fee payer and signer-to-be
            state: Game state fetched for this request
            blockhash: Recent blockhash fetched for this request

        Returns:
            Transaction with one instruction and empty signature slots
        """
        ix = self.program.build_instruction(
            CLAIM_THRONE,
            accounts={
                "game": self.reader.address,
                "user": user,
                "current_emperor_account": state.current_emperor,
                "fee_recipient_account": state.fee_recipient,
            },
        )

        message = Message.new_with_blockhash([ix], user, blockhash)
        return Transaction.new_unsigned(message)

    async def build_from_account(self, account: str) -> ActionPostResponse:
        """Build the POST response for a caller's account string.

        Raises:
            MissingAccountError: If no account was given
            InvalidAccountError: If the account is malformed
            GameUninitializedError: If the game account is unavailable
            RpcError: If the blockhash cannot be fetched
        """
        user = parse_account(account)

        state = await self.reader.fetch()
        blockhash = await self.rpc.get_latest_blockhash()

        tx = self.build_claim_throne(user, state, blockhash)
        encoded = base64.b64encode(bytes(tx)).decode("ascii")

        logger.info(
            f"Built claim_throne for {user}: emperor={state.current_emperor} "
            f"bid={state.current_bid} blockhash={blockhash}"
        )

        return ActionPostResponse(transaction=encoded, message=CLAIM_MESSAGE)
