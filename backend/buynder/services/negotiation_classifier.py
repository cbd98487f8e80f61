"""
Negotiation state classifier.

WHAT: Derive the current negotiation phase from a transcript
WHY: Seller replies and buyer coaching both branch on where the haggling stands
HOW: Priority-ordered keyword rules over the last seller message, plus the
     per-sender offer ladders

Rules, first match wins:
1. accepted        - seller used deal language, or the buyer's latest offer is
                     still unanswered and already meets the seller's latest price
2. stalled         - buyer has made 2+ offers and the seller's last message is a
                     plain rejection (not a counter)
3. seller_firm     - seller used firmness language
4. seller_countered- seller named a dollar figure with counter-offer phrasing
5. seller_rejected - plain rejection after at least one buyer offer
6. opening         - anything else, including an empty transcript

The phase is recomputed from scratch on every call; nothing is cached.
"""

from typing import Sequence

from ..models.message import Message
from ..models.negotiation import NegotiationPhase, NegotiationSnapshot
from ..utils.logger import get_logger
from ..utils.prices import extract_offers, extract_first_dollar_amount, extract_first_number
from . import phrases

logger = get_logger(__name__)


def last_text_from(transcript: Sequence[Message], sender: str) -> str:
    """Lowercased text of the most recent message from ``sender`` ('' if none)."""
    for message in reversed(transcript):
        if message.sender == sender:
            return message.text.lower()
    return ""


def is_counter_offer(seller_text: str) -> bool:
    """Seller message names a dollar figure and uses counter-offer phrasing."""
    return (
        extract_first_dollar_amount(seller_text) is not None
        and phrases.contains_any(seller_text, phrases.COUNTER_KEYWORDS)
    )


def is_rejection(seller_text: str) -> bool:
    """Seller turned the offer down without proposing a number of their own."""
    return (
        phrases.contains_any(seller_text, phrases.REJECT_KEYWORDS)
        and not is_counter_offer(seller_text)
    )


def is_firm(seller_text: str) -> bool:
    return phrases.contains_any(seller_text, phrases.FIRM_KEYWORDS)


def is_deal_confirmation(seller_text: str) -> bool:
    return phrases.contains_any(seller_text, phrases.ACCEPT_KEYWORDS)


def buyer_offer_unanswered(transcript: Sequence[Message]) -> bool:
    """True when the buyer's most recent dollar offer comes after the seller's last message."""
    last_offer_index = last_seller_index = -1
    for index, message in enumerate(transcript):
        if message.sender == "seller":
            last_seller_index = index
        elif extract_first_dollar_amount(message.text) is not None:
            last_offer_index = index
    return last_offer_index > last_seller_index


def classify(transcript: Sequence[Message], asking_price: float) -> NegotiationSnapshot:
    """
    Classify a transcript into a negotiation phase.

    WHAT: Compute phase plus the numeric anchors downstream generators need
    WHY: A single pure function keeps seller and buyer views consistent
    HOW: Build offer ladders, then walk the priority rules

    Args:
        transcript: Messages in arrival order (not modified)
        asking_price: Listing's asking price, the default seller anchor

    Returns:
        NegotiationSnapshot for this transcript
    """
    buyer_offers = extract_offers(transcript, "buyer")
    seller_offers = extract_offers(transcript, "seller")

    last_seller_price = seller_offers[-1] if seller_offers else asking_price
    last_buyer_offer = buyer_offers[-1] if buyer_offers else None
    seller_text = last_text_from(transcript, "seller")

    def snapshot(phase: NegotiationPhase, anchor: float | None = None) -> NegotiationSnapshot:
        result = NegotiationSnapshot(
            phase=phase,
            last_seller_price=last_seller_price,
            last_buyer_offer=last_buyer_offer,
            anchor_price=last_seller_price if anchor is None else anchor,
            buyer_offers=tuple(buyer_offers),
            seller_offers=tuple(seller_offers),
        )
        logger.debug(
            f"Classified transcript ({len(transcript)} messages) as {phase.value}: "
            f"buyer_offers={buyer_offers}, seller_price={last_seller_price}, anchor={result.anchor_price}"
        )
        return result

    if is_deal_confirmation(seller_text):
        agreed = extract_first_dollar_amount(seller_text)
        if agreed is None:
            agreed = extract_first_number(seller_text)
        if agreed is None:
            agreed = last_buyer_offer
        return snapshot(NegotiationPhase.ACCEPTED, anchor=agreed)

    # A seller reply that quotes the buyer's figure back is not an acceptance
    if (
        last_buyer_offer is not None
        and last_buyer_offer >= last_seller_price
        and buyer_offer_unanswered(transcript)
    ):
        return snapshot(NegotiationPhase.ACCEPTED, anchor=last_buyer_offer)

    rejected = is_rejection(seller_text)

    if rejected and len(buyer_offers) >= 2:
        return snapshot(NegotiationPhase.STALLED)

    if is_firm(seller_text):
        firm_price = extract_first_dollar_amount(seller_text)
        if firm_price is None:
            firm_price = extract_first_number(seller_text)
        return snapshot(
            NegotiationPhase.SELLER_FIRM,
            anchor=firm_price if firm_price is not None else last_seller_price,
        )

    if is_counter_offer(seller_text):
        return snapshot(
            NegotiationPhase.SELLER_COUNTERED,
            anchor=extract_first_dollar_amount(seller_text),
        )

    if rejected and buyer_offers:
        return snapshot(NegotiationPhase.SELLER_REJECTED)

    return snapshot(NegotiationPhase.OPENING)
