"""Exceptions raised while serving action requests.

Each ActionError carries the fixed message and HTTP status shown to callers.
Internal detail goes to the log, never into the response.
"""

from typing import Optional


class ActionError(Exception):
    """Base error for the action endpoint."""

    status_code: int = 500
    public_message: str = "Internal server error"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.public_message)
        self.detail = detail


class MissingAccountError(ActionError):
    """POST body did not name an account."""

    status_code = 400
    public_message = "Missing account"


class InvalidAccountError(ActionError):
    """Account string is not a valid base58 public key."""

    status_code = 400
    public_message = "Invalid account"


class InvalidRequestError(ActionError):
    """POST body is not a JSON object."""

    status_code = 400
    public_message = "Invalid request body"


class GameUninitializedError(ActionError):
    """The game account could not be read from the ledger.

    ``cause`` is one of ``missing``, ``owner``, ``decode`` or ``rpc``.
    """

    status_code = 400
    public_message = "Game not initialized"

    def __init__(self, cause: str, detail: Optional[str] = None):
        super().__init__(detail)
        self.cause = cause


class UpstreamError(ActionError):
    """Failure in a collaborator we do not classify further."""


class RpcError(UpstreamError):
    """JSON-RPC call failed (transport, HTTP status or RPC error object)."""

    def __init__(self, method: str, detail: str):
        super().__init__(f"{method}: {detail}")
        self.method = method


class AccountDecodeError(ValueError):
    """Account data does not match the IDL layout."""
