"""FastAPI application factory."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from emperor_action import __version__
from emperor_action.config import Settings, get_settings
from emperor_action.program import get_program


def action_headers(settings: Settings) -> dict[str, str]:
    """Fixed headers every Solana Actions response carries."""
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": "GET,POST,PUT,OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type, Authorization, Content-Encoding, Accept-Encoding",
        "X-Blockchain-Ids": settings.blockchain_id,
        "X-Action-Version": settings.action_version,
    }


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup: fail fast on a broken IDL
    get_program()
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    headers = action_headers(settings)

    app = FastAPI(
        title="Emperor Action API",
        description="Solana Actions endpoint for the emperor bidding game",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    # Solana Actions headers
    @app.middleware("http")
    async def add_action_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in headers.items():
            response.headers[name] = value
        return response

    # Register routes
    from emperor_action.api.routes import health
    from emperor_action.web.controllers import actions_router

    app.include_router(health.router, tags=["Health"])
    app.include_router(actions_router, tags=["Actions"])

    return app
