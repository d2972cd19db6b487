"""Main entry point - runs the action API."""

import logging

import uvicorn

from emperor_action.api.app import create_app
from emperor_action.config import get_settings
from emperor_action.program import get_program

logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    """Configure root logging."""
    log_level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def main():
    """Main entry point."""
    settings = get_settings()
    configure_logging(settings.debug)

    logger.info("Starting Emperor Action API...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"RPC endpoint: {settings.get_safe_dict()['rpc']['url']}")
    logger.info(f"Program: {get_program().program_id}")

    app = create_app()
    logger.info(f"Starting API server on {settings.api_host}:{settings.api_port}")
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
