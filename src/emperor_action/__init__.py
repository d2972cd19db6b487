"""Emperor Action - Solana Actions endpoint for the emperor bidding game."""

__version__ = "0.1.0"
