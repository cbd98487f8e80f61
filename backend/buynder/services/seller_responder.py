"""
Seller response generator.

WHAT: Produce the simulated seller's next chat message
WHY: The coach needs a believable counterpart that reacts to the buyer's numbers
HOW: Price-dependent branches over the offer ladders, reply text picked from
     phrase tables through an injectable PhraseSelector
"""

from typing import Sequence

from ..models.listing import Listing
from ..models.message import Message
from ..utils.logger import get_logger
from ..utils.prices import extract_offers, format_dollars, round_to_five
from . import phrases
from .negotiation_classifier import last_text_from
from .phrase_selector import PhraseSelector, get_phrase_selector

logger = get_logger(__name__)

# Offer bands relative to the seller's current anchor
LOWBALL_RATIO = 0.70
CLOSE_RATIO = 0.95

# Counter-offer formula: max(offer * 1.08, anchor * 0.92), rounded to $5
COUNTER_OFFER_MARKUP = 1.08
COUNTER_ANCHOR_DISCOUNT = 0.92

# "Is it available?" is only answered as such near the start of a chat
AVAILABILITY_WINDOW = 2


def compute_counter_offer(offer: float, anchor: float) -> int:
    """Counter-offer for an offer inside the negotiating band."""
    return round_to_five(max(offer * COUNTER_OFFER_MARKUP, anchor * COUNTER_ANCHOR_DISCOUNT))


class SellerResponder:
    """
    Rule-based seller.

    Holds no per-conversation state; every call reads the transcript it is
    given. The selector is the only collaborator and only affects wording.
    """

    def __init__(self, selector: PhraseSelector | None = None):
        self.selector = selector

    def _pick(self, templates: Sequence[str], used: Sequence[str], **fields) -> str:
        options = [template.format(**fields).strip() for template in templates]
        selector = self.selector or get_phrase_selector()
        return selector.choose(options, used)

    def generate_reply(self, listing: Listing, transcript: Sequence[Message]) -> str:
        """
        Generate the seller's next message.

        WHAT: Pick the reply branch for the buyer's latest move and render it
        WHY: Seller behavior must follow fixed price rules for the coach to be useful
        HOW: Branches in priority order, first match wins:
             1. buyer offer >= anchor        -> accept and arrange a meetup
             2. availability question        -> confirm, quote asking price
             3. offer < 70% of anchor        -> turn it down
             4. offer < 95% of anchor        -> counter (or hold firm)
             5. offer < anchor               -> push for the full anchor
             6. condition question           -> describe condition
             7. anything else                -> open to offers

        Args:
            listing: Listing under negotiation
            transcript: Messages so far, ending with the buyer's latest

        Returns:
            Seller reply text
        """
        last_buyer_text = last_text_from(transcript, "buyer")
        used = [message.text for message in transcript if message.sender == "seller"]

        buyer_offers = extract_offers(transcript, "buyer")
        seller_prices = extract_offers(transcript, "seller")
        offer = buyer_offers[-1] if buyer_offers else None
        anchor = seller_prices[-1] if seller_prices else listing.asking_price

        asking = format_dollars(listing.asking_price)
        anchor_text = format_dollars(anchor)

        if offer is not None and offer >= anchor:
            logger.debug(f"Seller accepts {offer} (anchor {anchor})")
            return self._pick(
                phrases.SELLER_ACCEPT, used,
                offer=format_dollars(offer), offer_number=offer,
            )

        asked_availability = phrases.contains_any(last_buyer_text, phrases.AVAILABILITY_KEYWORDS)
        if (asked_availability or not last_buyer_text) and len(transcript) <= AVAILABILITY_WINDOW:
            return self._pick(phrases.SELLER_AVAILABLE, used, asking=asking)

        if offer is not None:
            if offer < anchor * LOWBALL_RATIO:
                logger.debug(f"Seller rejects lowball {offer} (anchor {anchor})")
                return self._pick(phrases.SELLER_TOO_LOW, used, anchor=anchor_text)

            if offer < anchor * CLOSE_RATIO:
                counter = compute_counter_offer(offer, anchor)
                if counter >= anchor:
                    logger.debug(f"Counter {counter} would not undercut anchor {anchor}; holding firm")
                    return self._pick(phrases.SELLER_FIRM, used, anchor=anchor_text)
                logger.debug(f"Seller counters {offer} with {counter} (anchor {anchor})")
                return self._pick(
                    phrases.SELLER_COUNTER, used,
                    offer=format_dollars(offer), counter=format_dollars(counter),
                )

            return self._pick(phrases.SELLER_PUSH_FOR_ANCHOR, used, anchor=anchor_text)

        if phrases.contains_any(last_buyer_text, phrases.CONDITION_KEYWORDS):
            notes = listing.notes_from_seller
            return self._pick(
                phrases.SELLER_CONDITION, used,
                condition=listing.condition.value,
                notes_or_default=notes or phrases.SELLER_CONDITION_NOTES_DEFAULT,
                notes_or_shrug=notes or phrases.SELLER_CONDITION_NOTES_SHRUG,
                description=listing.description,
            )

        return self._pick(phrases.SELLER_OPEN_TO_OFFERS, used, asking=asking)


def generate_seller_reply(
    listing: Listing,
    transcript: Sequence[Message],
    selector: PhraseSelector | None = None,
) -> str:
    """Convenience wrapper around SellerResponder.generate_reply."""
    return SellerResponder(selector).generate_reply(listing, transcript)
