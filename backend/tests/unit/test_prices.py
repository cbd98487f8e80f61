"""
Unit tests for price parsing and offer extraction.

WHAT: Test display-price parsing, chat offer extraction, and rounding
WHY: Every negotiation rule depends on reading numbers out of text correctly
HOW: Direct calls with known strings and expected values
"""

import pytest

from buynder.models.message import Message
from buynder.models.negotiation import ParsedPrice
from buynder.utils.prices import (
    extract_first_dollar_amount,
    extract_first_number,
    extract_offers,
    format_dollars,
    format_price,
    format_price_for_display,
    parse_price,
    round_half_up,
    round_to_five,
)


@pytest.mark.unit
@pytest.mark.parametrize("text,currency,value", [
    ("$120", "$", 120.0),
    ("€99.5", "€", 99.5),
    ("£250.50", "£", 250.5),
    ("$0", "$", 0.0),
])
def test_parse_price_valid(text, currency, value):
    """Currency symbol plus digits with up to two decimals parses."""
    parsed = parse_price(text)
    assert parsed == ParsedPrice(currency=currency, value=value)


@pytest.mark.unit
@pytest.mark.parametrize("text", [
    "120", "$12.345", " $120", "$120 ", "USD 120", "$1,200", "Free", "", None, 120,
])
def test_parse_price_rejects_other_shapes(text):
    """Anything that is not exactly symbol+number is unparseable."""
    assert parse_price(text) is None


@pytest.mark.unit
def test_format_price_drops_decimals():
    assert format_price(ParsedPrice(currency="$", value=84.15)) == "$84"
    assert format_price(ParsedPrice(currency="€", value=102.0)) == "€102"


@pytest.mark.unit
def test_format_price_for_display_shows_cents_only_when_needed():
    assert format_price_for_display("$", 120) == "$120"
    assert format_price_for_display("$", 119.5) == "$119.50"
    assert format_dollars(110) == "$110"


@pytest.mark.unit
@pytest.mark.parametrize("currency,value", [("$", 120.0), ("€", 99.5), ("£", 0.25)])
def test_display_format_parses_back(currency, value):
    """Formatting for display and parsing again gives back the value."""
    assert parse_price(format_price_for_display(currency, value)).value == value


@pytest.mark.unit
def test_extract_first_dollar_amount():
    assert extract_first_dollar_amount("Would you take $95?") == 95
    assert extract_first_dollar_amount("$99.99 is my offer") == 99
    assert extract_first_dollar_amount("no numbers here") is None
    assert extract_first_dollar_amount("") is None


@pytest.mark.unit
def test_extract_first_dollar_amount_uses_first_figure():
    """Known limitation: the first figure wins even when a later one is the real offer."""
    text = "I was going to offer $80 but now I think $90 is fair"
    assert extract_first_dollar_amount(text) == 80


@pytest.mark.unit
def test_extract_first_number_ignores_dollar_sign():
    assert extract_first_number("my lowest is 100, sorry") == 100
    assert extract_first_number("firm at $110") == 110
    assert extract_first_number("firm") is None


@pytest.mark.unit
def test_extract_offers_per_sender():
    transcript = [
        Message(sender="buyer", text="Is it available?"),
        Message(sender="seller", text="Yes, asking $120."),
        Message(sender="buyer", text="Would you take $90?"),
        Message(sender="seller", text="How about $110?"),
        Message(sender="buyer", text="$100 then"),
    ]
    assert extract_offers(transcript, "buyer") == [90, 100]
    assert extract_offers(transcript, "seller") == [120, 110]


@pytest.mark.unit
def test_extract_offers_unaffected_by_messages_without_amounts():
    """Inserting a message with no dollar figure leaves both ladders unchanged."""
    transcript = [
        Message(sender="buyer", text="$90?"),
        Message(sender="seller", text="How about $110?"),
    ]
    noisy = transcript[:1] + [
        Message(sender="buyer", text="sorry, typo earlier"),
        Message(sender="seller", text="no worries"),
    ] + transcript[1:]

    for sender in ("buyer", "seller"):
        assert extract_offers(noisy, sender) == extract_offers(transcript, sender)


@pytest.mark.unit
def test_round_half_up_is_not_bankers_rounding():
    assert round_half_up(22.5) == 23
    assert round_half_up(21.5) == 22
    assert round_half_up(21.49) == 21


@pytest.mark.unit
@pytest.mark.parametrize("value,expected", [
    (105.6, 105),
    (112.5, 115),
    (110.4, 110),
    (117.6, 120),
    (0, 0),
])
def test_round_to_five(value, expected):
    assert round_to_five(value) == expected
    assert expected % 5 == 0
