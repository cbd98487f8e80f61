"""
API v1 router aggregation.

WHAT: Combine all v1 endpoint routers
WHY: Single place to register all API routes
HOW: Include routers from endpoints with prefixes
"""

from fastapi import APIRouter

from .endpoints import status, swipe, negotiation, conversations, watchlist

# Create main v1 router
api_router = APIRouter()

api_router.include_router(status.router, prefix="/api/v1", tags=["status"])
api_router.include_router(swipe.router, prefix="/api/v1", tags=["swipe"])
api_router.include_router(negotiation.router, prefix="/api/v1", tags=["negotiation"])
api_router.include_router(conversations.router, prefix="/api/v1", tags=["conversations"])
api_router.include_router(watchlist.router, prefix="/api/v1", tags=["watchlist"])
