"""Translate game state into display text and the next bid.

Float arithmetic here is for display only. The program does the exact
lamport math when the throne is claimed.
"""

from dataclasses import dataclass
from typing import Optional

from emperor_action.web.services.state_reader import GameState

LAMPORTS_PER_SOL = 1_000_000_000
BID_MARKUP = 1.1  # next bid is 10% above the current one

TITLE = "Become the On-Chain Emperor"
DEFAULT_LABEL = "Defeat Emperor"
DEFAULT_DESCRIPTION = "Bid 10% more to capture the throne! Earn 5% profit when outbid."
INACTIVE_NOTICE = " (Game not currently active on this network)"
EMPEROR_PREFIX_LEN = 6


@dataclass(frozen=True)
class PricingView:
    """Text shown to the player plus the numbers behind it."""

    title: str
    label: str
    description: str
    current_bid_sol: Optional[float] = None
    next_bid_sol: Optional[float] = None

    @property
    def is_active(self) -> bool:
        return self.next_bid_sol is not None


def lamports_to_sol(lamports: int) -> float:
    return lamports / LAMPORTS_PER_SOL


def next_bid(current_bid_sol: float) -> float:
    return current_bid_sol * BID_MARKUP


def translate(state: Optional[GameState]) -> PricingView:
    """Build the pricing view for a game state (None when uninitialized)."""
    if state is None:
        return PricingView(
            title=TITLE,
            label=DEFAULT_LABEL,
            description=DEFAULT_DESCRIPTION + INACTIVE_NOTICE,
        )

    current = lamports_to_sol(state.current_bid)
    upcoming = next_bid(current)
    emperor = str(state.current_emperor)[:EMPEROR_PREFIX_LEN]

    description = (
        f"Current Emperor: {emperor}... \n"
        f"Current Bid: {current:.2f} SOL \n"
        f"Price to pay: ~{upcoming:.3f} SOL (Returns 5% profit when you are outbid!)"
    )

    return PricingView(
        title=TITLE,
        label=f"Claim Throne ({upcoming:.3f} SOL)",
        description=description,
        current_bid_sol=current,
        next_bid_sol=upcoming,
    )
