"""Health check endpoints."""

from fastapi import APIRouter

from emperor_action import __version__
from emperor_action.config import get_settings
from emperor_action.program import get_program

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy", "service": "emperor-action"}


@router.get("/health/detailed")
async def detailed_health():
    """Detailed health check with configuration info."""
    settings = get_settings()
    program = get_program()
    return {
        "status": "healthy",
        "service": "emperor-action",
        "version": __version__,
        "program_id": str(program.program_id),
        "config": settings.get_safe_dict(),
    }
