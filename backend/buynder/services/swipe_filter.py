"""
Swipe filter for the discovery feed.

WHAT: Decide whether a listing is worth swiping right on
WHY: Shoppers set a budget, quality floor, and areas once; the feed should respect them
HOW: Ordered reject rules (first match wins), plus independent risk notes and
     follow-up questions for accepted listings
"""

from datetime import datetime
from typing import Iterable, List

from ..models.listing import Constraints, Listing, Quality, UserPrefs
from ..models.negotiation import SwipeDecision
from ..utils.logger import get_logger
from ..utils.prices import format_price_for_display, parse_price

logger = get_logger(__name__)

MAX_FOLLOW_UP_QUESTIONS = 3
EXTRA_FIELDS = ["description", "seller_name", "posted_at"]


def _format_posted(posted_at: str) -> str:
    """Date portion of an ISO timestamp; anything else is shown as-is."""
    try:
        return datetime.fromisoformat(posted_at.replace("Z", "+00:00")).date().isoformat()
    except (ValueError, AttributeError):
        return posted_at


def _reject_reason(listing: Listing, prefs: UserPrefs, constraints: Constraints, parsed_price) -> str | None:
    """Reason for the first reject rule that fires, or None to accept."""
    # An unreadable display price only earns a note, never a price rejection
    if parsed_price is not None and prefs.max_price is not None and parsed_price.value > prefs.max_price:
        limit = format_price_for_display(parsed_price.currency, prefs.max_price)
        return f"Exceeds maximum price preference of {limit}."

    if prefs.min_quality and listing.quality.rank < prefs.min_quality.rank:
        return f"Below minimum quality preference of {prefs.min_quality.value}."

    if prefs.preferred_locations and not any(loc in listing.location for loc in prefs.preferred_locations):
        return "Location outside preferred areas."

    if constraints.must_have_images and not listing.has_image:
        return "Missing required image."

    return None


def evaluate(
    listing: Listing,
    prefs: UserPrefs | None = None,
    constraints: Constraints | None = None,
) -> SwipeDecision:
    """
    Evaluate one listing against the shopper's preferences.

    WHAT: Accept/reject with reason, quick facts, risks, notes, follow-ups
    WHY: Drives the swipe card and the questions offered after a right swipe
    HOW: Rule order is price, quality, location, images; an unparseable price
         only adds a note and skips the price rule

    Args:
        listing: Listing to evaluate
        prefs: Shopper preferences (defaults to none set)
        constraints: Hard constraints (defaults to none set)

    Returns:
        SwipeDecision
    """
    prefs = prefs or UserPrefs()
    constraints = constraints or Constraints()
    notes: List[str] = []
    risks: List[str] = []

    parsed_price = parse_price(listing.price)
    if parsed_price is None:
        notes.append("Could not parse listing price.")

    reason = _reject_reason(listing, prefs, constraints, parsed_price)
    decision = "reject" if reason else "accept"
    reason = reason or "Item fits preferences."

    quick_facts = [
        f"Title: {listing.title}",
        f"Price: {listing.price}",
        f"Location: {listing.location}",
        f"Quality: {listing.quality.value}",
        f"Posted: {_format_posted(listing.posted_at)}",
    ]

    if not listing.description:
        risks.append("Missing detailed description.")
    if not listing.has_image:
        risks.append("No image available.")

    follow_up_questions: List[str] = []
    if decision == "accept":
        follow_up_questions.append("Is the price negotiable?")
        if listing.quality in (Quality.USED, Quality.POOR):
            follow_up_questions.append("What are the specific conditions or any defects?")
        else:
            follow_up_questions.append("When is a good time for pickup?")
        follow_up_questions.append("What accessories are included?")

    logger.debug(f"Swipe evaluation for listing {listing.id}: {decision} ({reason})")

    return SwipeDecision(
        decision=decision,
        reason=reason,
        quick_facts=quick_facts,
        risks=risks,
        notes=notes,
        follow_up_questions=follow_up_questions[:MAX_FOLLOW_UP_QUESTIONS],
        extra_fields=list(EXTRA_FIELDS),
    )


def evaluate_many(
    listings: Iterable[Listing],
    prefs: UserPrefs | None = None,
    constraints: Constraints | None = None,
) -> List[SwipeDecision]:
    """Evaluate a feed of listings, preserving order."""
    decisions = [evaluate(listing, prefs, constraints) for listing in listings]
    accepted = sum(1 for d in decisions if d.decision == "accept")
    logger.info(f"Evaluated {len(decisions)} listings: {accepted} accepted")
    return decisions
