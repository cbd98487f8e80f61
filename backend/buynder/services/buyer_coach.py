"""
Buyer coaching generator.

WHAT: Suggested buyer replies, a target price, and deal advice for the next turn
WHY: The coach's job is telling the buyer what to say and what number to aim for
HOW: Classify the transcript, then apply the phase's target-price formula
"""

from typing import Sequence

from ..models.listing import Listing
from ..models.message import Message
from ..models.negotiation import BuyerHelperResponse, NegotiationPhase
from ..utils.logger import get_logger
from ..utils.prices import format_dollars, round_half_up, round_to_five
from . import phrases
from .negotiation_classifier import classify

logger = get_logger(__name__)

# Target price ratios per phase, applied before rounding to $5
STALLED_RATIO = 0.98
COUNTERED_RATIO = 0.97
REJECTED_RATIO = 0.95
OPENING_RATIO = 0.88


def opening_target(asking_price: float) -> int:
    """Suggested first offer for a listing."""
    return round_to_five(asking_price * OPENING_RATIO)


def generate_buyer_suggestions(listing: Listing, transcript: Sequence[Message]) -> BuyerHelperResponse:
    """
    Coach the buyer's next message.

    WHAT: Build BuyerHelperResponse for the current negotiation phase
    WHY: Fresh advice every turn, never merged with earlier coaching
    HOW: One branch per phase; every target except accepted/firm is
         ratio * price rounded half-up to a multiple of 5

    Args:
        listing: Listing under negotiation
        transcript: Messages so far

    Returns:
        BuyerHelperResponse with up to four suggestions
    """
    state = classify(transcript, listing.asking_price)
    phase = state.phase

    if phase == NegotiationPhase.ACCEPTED:
        target = round_half_up(state.anchor_price)
        advice = phrases.BUYER_ACCEPTED_ADVICE
        suggestions = list(phrases.BUYER_ACCEPTED_SUGGESTIONS)

    elif phase == NegotiationPhase.STALLED:
        target = round_to_five(state.last_seller_price * STALLED_RATIO)
        advice = phrases.BUYER_STALLED_ADVICE
        suggestions = [s.format(target=format_dollars(target)) for s in phrases.BUYER_STALLED_SUGGESTIONS]

    elif phase == NegotiationPhase.SELLER_FIRM:
        target = round_half_up(state.anchor_price)
        firm = format_dollars(target)
        advice = phrases.BUYER_FIRM_ADVICE.format(firm=firm)
        suggestions = [s.format(firm=firm) for s in phrases.BUYER_FIRM_SUGGESTIONS]

    elif phase == NegotiationPhase.SELLER_COUNTERED:
        counter = state.anchor_price
        target = round_to_five(counter * COUNTERED_RATIO)
        fields = {"target": format_dollars(target), "counter": format_dollars(counter)}
        advice = phrases.BUYER_COUNTERED_ADVICE.format(**fields)
        suggestions = [s.format(**fields) for s in phrases.BUYER_COUNTERED_SUGGESTIONS]

    elif phase == NegotiationPhase.SELLER_REJECTED:
        target = round_to_five(state.last_seller_price * REJECTED_RATIO)
        advice = phrases.BUYER_REJECTED_ADVICE.format(target=format_dollars(target))
        suggestions = [s.format(target=format_dollars(target)) for s in phrases.BUYER_REJECTED_SUGGESTIONS]

    else:
        target = opening_target(listing.asking_price)
        advice = phrases.BUYER_OPENING_ADVICE.format(
            target=format_dollars(target), condition=listing.condition.value
        )
        suggestions = [s.format(target=format_dollars(target)) for s in phrases.BUYER_OPENING_SUGGESTIONS]

    logger.debug(f"Buyer coaching for phase {phase.value}: target={target}")

    return BuyerHelperResponse(
        suggested_messages=suggestions[:4],
        target_price=target,
        deal_advice=advice,
    )
