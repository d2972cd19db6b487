"""HTTP controllers for the action endpoint.

SECURITY: These controllers MUST NOT access private keys or sign and
broadcast transactions. All operations are read-only or prepare data for
client-side signing.
"""

from emperor_action.web.controllers.actions import router as actions_router

__all__ = [
    "actions_router",
]
