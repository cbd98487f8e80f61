"""
Unit tests for the negotiation state classifier.

WHAT: Test phase detection and anchor prices for each rule
WHY: Seller replies and buyer coaching both branch on the phase
HOW: Hand-built transcripts with known expected phases
"""

import pytest

from buynder.models.message import Message
from buynder.models.negotiation import NegotiationPhase
from buynder.services import phrases
from buynder.services.negotiation_classifier import (
    classify,
    is_counter_offer,
    is_rejection,
    last_text_from,
)

ASKING = 120


def buyer(text):
    return Message(sender="buyer", text=text)


def seller(text):
    return Message(sender="seller", text=text)


@pytest.mark.unit
def test_empty_transcript_is_opening():
    state = classify([], ASKING)
    assert state.phase == NegotiationPhase.OPENING
    assert state.last_seller_price == ASKING
    assert state.anchor_price == ASKING
    assert state.last_buyer_offer is None
    assert state.buyer_offer_count == 0


@pytest.mark.unit
def test_offer_without_seller_reaction_is_opening():
    transcript = [buyer("Is it available?"), seller("Yes! Asking $120."), buyer("Would you take $90?")]
    state = classify(transcript, ASKING)
    assert state.phase == NegotiationPhase.OPENING
    assert state.last_buyer_offer == 90
    assert state.seller_offers == (120,)


@pytest.mark.unit
@pytest.mark.parametrize("keyword", phrases.ACCEPT_KEYWORDS)
def test_deal_language_is_accepted(keyword):
    transcript = [buyer("$100?"), seller(f"Okay, {keyword}.")]
    assert classify(transcript, ASKING).phase == NegotiationPhase.ACCEPTED


@pytest.mark.unit
def test_buyer_meeting_seller_price_is_accepted():
    """Buyer's latest offer at or above the seller's latest price closes the deal."""
    state = classify([buyer("I'll pay $120")], ASKING)
    assert state.phase == NegotiationPhase.ACCEPTED
    assert state.anchor_price == 120


@pytest.mark.unit
def test_buyer_meeting_counter_is_accepted():
    transcript = [buyer("$90?"), seller("How about $110?"), buyer("Fine, $110 it is")]
    state = classify(transcript, ASKING)
    assert state.phase == NegotiationPhase.ACCEPTED
    assert state.last_seller_price == 110


@pytest.mark.unit
def test_two_rejected_offers_stall():
    transcript = [
        buyer("$70?"), seller("Sorry, that's too low for me."),
        buyer("$75?"), seller("Sorry, that's too low for me."),
    ]
    state = classify(transcript, ASKING)
    assert state.phase == NegotiationPhase.STALLED
    assert state.buyer_offers == (70, 75)
    assert state.last_seller_price == ASKING


@pytest.mark.unit
def test_single_rejected_offer_is_rejected():
    transcript = [buyer("$60?"), seller("I can't go that low.")]
    assert classify(transcript, ASKING).phase == NegotiationPhase.SELLER_REJECTED


@pytest.mark.unit
def test_rejection_without_any_offer_is_opening():
    transcript = [buyer("Any flexibility?"), seller("I can't accept that.")]
    assert classify(transcript, ASKING).phase == NegotiationPhase.OPENING


@pytest.mark.unit
def test_rejection_with_counter_is_countered_not_stalled():
    transcript = [
        buyer("$70?"), seller("Too low for me."),
        buyer("$80?"), seller("That's too low for me, how about $110?"),
    ]
    state = classify(transcript, ASKING)
    assert state.phase == NegotiationPhase.SELLER_COUNTERED
    assert state.anchor_price == 110


@pytest.mark.unit
@pytest.mark.parametrize("text,anchor", [
    ("Sorry, my lowest is $110.", 110),
    ("I'm firm at 100.", 100),
    ("The price is firm.", ASKING),
    ("Best price is $115, can't go lower.", 115),
])
def test_firm_anchor(text, anchor):
    """Firm price comes from a dollar figure, then a bare number, then the last seller price."""
    state = classify([buyer("$90?"), seller(text)], ASKING)
    assert state.phase == NegotiationPhase.SELLER_FIRM
    assert state.anchor_price == anchor


@pytest.mark.unit
@pytest.mark.parametrize("text", [
    "How about $110?",
    "Could you do $110?",
    "Could you meet me at $110?",
])
def test_counter_offer_phrasing(text):
    state = classify([buyer("$90?"), seller(text)], ASKING)
    assert state.phase == NegotiationPhase.SELLER_COUNTERED
    assert state.anchor_price == 110


@pytest.mark.unit
def test_counter_phrasing_without_figure_is_not_a_counter():
    assert not is_counter_offer("how about we talk tomorrow")
    assert is_counter_offer("how about $105")


@pytest.mark.unit
def test_is_rejection_excludes_counters():
    assert is_rejection("too low for me")
    assert not is_rejection("too low for me, how about $110")


@pytest.mark.unit
def test_last_text_from_is_lowercased():
    transcript = [seller("First"), buyer("Hello"), seller("SECOND")]
    assert last_text_from(transcript, "seller") == "second"
    assert last_text_from([], "buyer") == ""


@pytest.mark.unit
def test_classify_is_deterministic_and_does_not_modify_input():
    transcript = [buyer("$95?"), seller("Could you meet me at $110?")]
    before = list(transcript)
    assert classify(transcript, ASKING) == classify(transcript, ASKING)
    assert transcript == before


@pytest.mark.unit
def test_seller_quoting_buyer_figure_is_not_acceptance():
    """A counter that repeats the buyer's number first must not read as a deal at that number."""
    transcript = [
        buyer("Would you take $95?"),
        seller("I can't do $95, but I could do $110 for a quick pickup."),
    ]
    state = classify(transcript, ASKING)
    assert state.phase != NegotiationPhase.ACCEPTED
    assert state.phase == NegotiationPhase.OPENING


@pytest.mark.unit
@pytest.mark.parametrize("text,anchor", [
    ("Perfect, 125 works for me. Let's meet at the mall entrance around 6 PM.", 125),
    ("You got it. $125 is a deal.", 125),
    ("Deal! Let's arrange a meetup.", 125),
])
def test_deal_anchor_is_agreed_price(text, anchor):
    """Agreed price comes from the deal message, else the buyer's latest offer."""
    state = classify([buyer("I can pay $125"), seller(text)], ASKING)
    assert state.phase == NegotiationPhase.ACCEPTED
    assert state.anchor_price == anchor
