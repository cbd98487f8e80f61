"""
Watchlist endpoints.

WHAT: Save, list, and remove listings the shopper wants to revisit
WHY: Right swipes that are not ready for a chat yet
HOW: FastAPI router over the watchlist singleton
"""

from fastapi import APIRouter, status

from ....core.watchlist import watchlist
from ....models.api_schemas import WatchlistAddRequest, WatchlistResponse

router = APIRouter()


def _current() -> WatchlistResponse:
    items = watchlist.items()
    return WatchlistResponse(items=items, count=len(items))


@router.get("/watchlist", response_model=WatchlistResponse)
async def get_watchlist():
    return _current()


@router.post("/watchlist", response_model=WatchlistResponse, status_code=status.HTTP_201_CREATED)
async def add_to_watchlist(request: WatchlistAddRequest):
    """Save a listing. Saving the same listing again is a no-op."""
    watchlist.add(request.listing)
    return _current()


@router.delete("/watchlist/{listing_id}", response_model=WatchlistResponse)
async def remove_from_watchlist(listing_id: str):
    watchlist.remove(listing_id)
    return _current()
