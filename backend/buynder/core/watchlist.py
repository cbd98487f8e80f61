"""
Saved listings.

WHAT: The shopper's watchlist of right-swiped listings
WHY: Listings worth another look are kept separate from open chats
HOW: Insertion-ordered dict keyed by listing id, guarded by a lock
"""

import threading
from typing import Dict, List

from ..models.listing import Listing
from ..utils.exceptions import ListingNotFoundException
from ..utils.logger import get_logger

logger = get_logger(__name__)


class Watchlist:
    """In-memory watchlist. Adding a listing twice keeps the first copy."""

    def __init__(self):
        self._items: Dict[str, Listing] = {}
        self._lock = threading.Lock()

    def add(self, listing: Listing) -> bool:
        """
        Save a listing.

        Returns:
            True if the listing was newly added, False if already present
        """
        with self._lock:
            if listing.id in self._items:
                return False
            self._items[listing.id] = listing
        logger.info(f"Added listing {listing.id} to watchlist")
        return True

    def remove(self, listing_id: str) -> Listing:
        with self._lock:
            listing = self._items.pop(listing_id, None)
        if listing is None:
            raise ListingNotFoundException(listing_id)
        logger.info(f"Removed listing {listing_id} from watchlist")
        return listing

    def items(self) -> List[Listing]:
        with self._lock:
            return list(self._items.values())

    def contains(self, listing_id: str) -> bool:
        with self._lock:
            return listing_id in self._items

    def clear(self) -> None:
        with self._lock:
            self._items.clear()


# Global instance
watchlist = Watchlist()
