"""Solana Actions endpoint for the emperor game.

GET describes the game, POST prepares an unsigned claim_throne transaction.
NO signing or broadcasting happens server-side.
"""

import json
import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from emperor_action.config import Settings, get_settings
from emperor_action.errors import ActionError, InvalidRequestError
from emperor_action.program import ProgramInterface, get_program
from emperor_action.rpc import SolanaRpcClient, create_rpc_client
from emperor_action.web.contracts.actions import ActionPostRequest, ErrorResponse
from emperor_action.web.services.descriptor import build_action_descriptor
from emperor_action.web.services.pricing import translate
from emperor_action.web.services.state_reader import GameStateReader
from emperor_action.web.services.transaction_builder import TransactionBuilder

logger = logging.getLogger(__name__)

ACTION_PATH = "/api/actions/click"
INTERNAL_ERROR = "Internal server error"

router = APIRouter(tags=["actions"])


def get_rpc_client() -> SolanaRpcClient:
    """Fresh query-only client per request."""
    return create_rpc_client()


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(ErrorResponse(error=message).model_dump(), status_code=status_code)


@router.options(ACTION_PATH)
async def action_preflight() -> Response:
    """CORS preflight; headers are added by the action headers middleware."""
    return Response(status_code=200)


@router.get(ACTION_PATH)
async def get_action(
    rpc: SolanaRpcClient = Depends(get_rpc_client),
    program: ProgramInterface = Depends(get_program),
    settings: Settings = Depends(get_settings),
):
    """Describe the current throne and the next bid."""
    try:
        state = await GameStateReader(rpc, program).fetch_optional()
        view = translate(state)
        payload = build_action_descriptor(view, icon=settings.icon_url, href=ACTION_PATH)
        return JSONResponse(payload.model_dump())
    except Exception:
        logger.exception("Failed to build action descriptor")
        return _error(INTERNAL_ERROR, 500)


@router.post(ACTION_PATH)
async def post_action(
    request: Request,
    rpc: SolanaRpcClient = Depends(get_rpc_client),
    program: ProgramInterface = Depends(get_program),
):
    """Build an unsigned claim_throne transaction for the posted account."""
    try:
        body = await _read_body(request)
        builder = TransactionBuilder(rpc, program)
        payload = await builder.build_from_account(body.account)
        return JSONResponse(payload.model_dump())
    except ActionError as e:
        if e.status_code >= 500:
            logger.error(f"Action POST failed: {e}")
            return _error(INTERNAL_ERROR, 500)
        logger.info(f"Action POST rejected: {e.public_message} ({e})")
        return _error(e.public_message, e.status_code)
    except Exception:
        logger.exception("Action POST failed")
        return _error(INTERNAL_ERROR, 500)


async def _read_body(request: Request) -> ActionPostRequest:
    raw = await request.body()
    if not raw:
        return ActionPostRequest()
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise InvalidRequestError(str(e)) from e
    if not isinstance(data, dict):
        raise InvalidRequestError(f"expected an object, got {type(data).__name__}")

    account = data.get("account")
    if account is not None and not isinstance(account, str):
        account = str(account)
    return ActionPostRequest(account=account)
