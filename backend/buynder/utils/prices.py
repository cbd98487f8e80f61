"""
Price parsing and formatting utilities.

WHAT: Parse display prices and pull dollar offers out of chat text
WHY: Every negotiation rule compares numbers that arrive as free text
HOW: Anchored regex for listing prices, unanchored regex for chat offers
"""

import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from ..models.message import Message, Sender
from ..models.negotiation import ParsedPrice
from ..utils.logger import get_logger

logger = get_logger(__name__)

# Whole-string display price: "$120", "£250.50"
DISPLAY_PRICE_PATTERN = re.compile(r'^([$€£])(\d+(\.\d{1,2})?)$')

# Dollar amount anywhere in a chat message: "how about $110?"
DOLLAR_AMOUNT_PATTERN = re.compile(r'\$(\d+(\.\d{1,2})?)')

BARE_NUMBER_PATTERN = re.compile(r'(\d+)')


def parse_price(text: str | None) -> ParsedPrice | None:
    """
    Parse a display price such as "$120" or "€99.50".

    The whole string must be a currency symbol followed by digits and an
    optional one- or two-digit fraction. Anything else is unparseable.

    Args:
        text: Display price string

    Returns:
        ParsedPrice, or None when the text does not have that shape
    """
    if not isinstance(text, str):
        return None

    match = DISPLAY_PRICE_PATTERN.match(text)
    if not match:
        logger.debug(f"Unparseable price string: {text!r}")
        return None

    return ParsedPrice(currency=match.group(1), value=float(match.group(2)))


def format_price(parsed: ParsedPrice) -> str:
    """Format a price with no decimals, e.g. ParsedPrice('$', 84.15) -> '$84'."""
    return f"{parsed.currency}{parsed.value:.0f}"


def format_price_for_display(currency: str, value: float) -> str:
    """Format a price, showing cents only when the value has a fraction."""
    if float(value).is_integer():
        return f"{currency}{value:.0f}"
    return f"{currency}{value:.2f}"


def format_dollars(value: float) -> str:
    """Dollar display used in chat text: '$120', '$119.50'."""
    return format_price_for_display("$", value)


def extract_first_dollar_amount(text: str) -> int | None:
    """
    Return the first "$N" amount in the text as an integer.

    Cents are dropped, so "$99.99" reads as 99. A message naming several
    amounts anchors on the first one.
    """
    if not text:
        return None

    match = DOLLAR_AMOUNT_PATTERN.search(text)
    if not match:
        return None

    return int(match.group(1).split(".")[0])


def extract_first_number(text: str) -> int | None:
    """Return the first run of digits in the text, with or without a '$'."""
    match = BARE_NUMBER_PATTERN.search(text or "")
    return int(match.group(1)) if match else None


def extract_offers(transcript: Iterable[Message], sender: Sender) -> list[int]:
    """
    Build the offer ladder for one side of the conversation.

    WHAT: Every dollar amount the given sender has stated, in transcript order
    WHY: The classifier compares the latest buyer offer against the latest seller price
    HOW: First dollar amount per message; messages without one are skipped

    Args:
        transcript: Messages in arrival order
        sender: "buyer" or "seller"

    Returns:
        List of integer offers (possibly empty)
    """
    offers = []
    for message in transcript:
        if message.sender != sender:
            continue
        amount = extract_first_dollar_amount(message.text)
        if amount is not None:
            offers.append(amount)
    return offers


def round_half_up(value: float | Decimal) -> int:
    """
    Round to the nearest integer, halves away from zero.

    Python's round() uses banker's rounding (round(22.5) == 22), which
    would shift suggested prices.
    """
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def round_to_five(value: float) -> int:
    """Round to the nearest multiple of 5: 112.5 -> 115, 110.4 -> 110."""
    return round_half_up(Decimal(str(value)) / 5) * 5
