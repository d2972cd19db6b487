"""Web services for read-only ledger access and transaction preparation.

SECURITY: These services MUST NOT:
- Access private keys
- Sign or broadcast transactions

These services CAN:
- Read the game account and recent blockhashes
- Prepare unsigned transactions for client signing
"""

from emperor_action.web.services.descriptor import build_action_descriptor
from emperor_action.web.services.pricing import PricingView, translate
from emperor_action.web.services.state_reader import GameState, GameStateReader
from emperor_action.web.services.transaction_builder import TransactionBuilder

__all__ = [
    "build_action_descriptor",
    "GameState",
    "GameStateReader",
    "PricingView",
    "translate",
    "TransactionBuilder",
]
