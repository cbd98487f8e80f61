"""
Status and health check endpoints.

WHAT: Health monitoring for the assistant service
WHY: Quick diagnostics for the web client and ops
HOW: Report app metadata and in-memory store sizes
"""

from datetime import datetime

from fastapi import APIRouter

from ....core.config import settings
from ....core.session_manager import conversation_manager
from ....core.watchlist import watchlist
from ....models.api_schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Overall application health check.

    Returns:
        App name, version, and how many conversations and saved listings
        are held in memory
    """
    return HealthResponse(
        status="healthy",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        conversations=len(conversation_manager.list_conversations()),
        watchlist=len(watchlist.items()),
        timestamp=datetime.now(),
    )
