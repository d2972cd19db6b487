"""Web boundary layer for the emperor action endpoint.

All operations in this layer are read-only or prepare data for client-side
signing (non-custodial). Nothing here holds a key.
"""

__all__ = [
    "contracts",
    "services",
    "controllers",
]
