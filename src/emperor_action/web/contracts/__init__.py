"""Request and response contracts for the action endpoint."""

from emperor_action.web.contracts.actions import (
    ActionGetResponse,
    ActionLinks,
    ActionPostRequest,
    ActionPostResponse,
    ErrorResponse,
    LinkedAction,
)

__all__ = [
    "ActionGetResponse",
    "ActionLinks",
    "ActionPostRequest",
    "ActionPostResponse",
    "ErrorResponse",
    "LinkedAction",
]
