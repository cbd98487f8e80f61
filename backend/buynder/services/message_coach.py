"""
Message coach mode.

WHAT: Draft buyer messages in three tones for whatever the buyer is trying to do
WHY: Shoppers who are not haggling yet still want a good first message
HOW: Detect a goal from chat keywords, then fill goal-specific drafts; price
     goals get a counter-offer discounted by item quality and deal style
"""

from typing import Sequence

from ..models.listing import Listing, Quality, UserPrefs
from ..models.message import Message
from ..models.negotiation import CounterOffer, DraftMessages, MessageCoachResponse, MessageGoal
from ..utils.logger import get_logger
from ..utils.prices import format_price, parse_price
from . import phrases

logger = get_logger(__name__)

NEGOTIATE_KEYWORDS = ("negotiate", "offer", "price")
CLARIFY_KEYWORDS = ("condition", "defect", "rust", "working")
MEETUP_KEYWORDS = ("pickup", "meet", "time", "where")

# Discount off asking price by (quality, deal style)
DISCOUNT_TABLE = {
    "like_new": {"polite": 0.05, "balanced": 0.07, "aggressive": 0.10},
    "good_or_used": {"polite": 0.10, "balanced": 0.15, "aggressive": 0.20},
    "poor": {"polite": 0.20, "balanced": 0.25, "aggressive": 0.30},
}

MAX_TIPS = 3


def discount_for(quality: Quality, deal_style: str) -> float:
    """Fraction to knock off the asking price for this quality and style."""
    if quality == Quality.LIKE_NEW:
        row = DISCOUNT_TABLE["like_new"]
    elif quality in (Quality.GOOD, Quality.USED):
        row = DISCOUNT_TABLE["good_or_used"]
    else:
        row = DISCOUNT_TABLE["poor"]
    return row.get(deal_style, row["balanced"])


def detect_goal(chat_context: Sequence[Message]) -> MessageGoal:
    """
    Work out what the buyer is trying to do.

    An empty chat, or one where the seller spoke last and the buyer never
    asked about availability, is treated as starting the conversation.
    """
    if not chat_context:
        return "start_conversation"

    buyer_texts = [m.text.lower() for m in chat_context if m.sender == "buyer"]
    seller_texts = [m.text.lower() for m in chat_context if m.sender == "seller"]

    def buyer_said(keywords) -> bool:
        return any(phrases.contains_any(text, keywords) for text in buyer_texts)

    if chat_context[-1].sender == "seller" and not buyer_said(phrases.AVAILABILITY_KEYWORDS):
        return "start_conversation"
    if buyer_said(NEGOTIATE_KEYWORDS) or any("offer" in text for text in seller_texts):
        return "negotiate_price"
    if buyer_said(CLARIFY_KEYWORDS):
        return "clarify_details"
    if buyer_said(MEETUP_KEYWORDS):
        return "schedule_meetup"
    return "start_conversation"


def coach_message(
    listing: Listing,
    prefs: UserPrefs | None = None,
    chat_context: Sequence[Message] = (),
) -> MessageCoachResponse:
    """
    Draft the buyer's next message.

    Args:
        listing: Listing being discussed
        prefs: Shopper preferences; only deal_style is used here
        chat_context: Messages so far (may be empty)

    Returns:
        MessageCoachResponse for the detected goal
    """
    prefs = prefs or UserPrefs()
    goal = detect_goal(chat_context)
    drafts = DraftMessages()
    counter_offer = None
    tips: list[str] = []
    risks: list[str] = []
    title = listing.title

    if goal == "start_conversation":
        drafts = DraftMessages(
            polite=f"Hello, is this {title} still available? I can pick up at your convenience.",
            balanced=f"Hi, is this {title} still available? I'm flexible for pickup.",
            direct="Available? Flexible pickup.",
        )
        tips.append("Offer quick pickup to sweeten the deal.")
        next_action = "Send a message to confirm availability."
        if not listing.description:
            risks.append("Lacking detailed item description.")

    elif goal == "negotiate_price":
        listed = parse_price(listing.price)
        if listed is not None:
            deal_style = prefs.deal_style or "balanced"
            discount = discount_for(listing.quality, deal_style)
            suggested = format_price(listed.model_copy(update={"value": listed.value * (1 - discount)}))
            counter_offer = CounterOffer(
                suggested_price=suggested,
                rationale=(
                    f"Suggesting {round(discount * 100)}% below asking based on item quality "
                    f"and your deal style."
                ),
            )
            drafts = DraftMessages(
                polite=f"Would you consider {suggested} for the {title}? I can arrange a quick pickup.",
                balanced=f"I'm interested in the {title}. My offer is {suggested} for a fast deal.",
                direct=f"Offer {suggested}. Can pick up today.",
            )
            logger.debug(f"Message coach counter-offer {suggested} ({deal_style}, {listing.quality.value})")
        else:
            drafts = DraftMessages(
                polite=f"I'm very interested in the {title}. Is there any flexibility on the price?",
                balanced=f"What's the lowest you'd go for the {title}?",
                direct=f"Best price for {title}?",
            )
            risks.append("Could not determine original price for counter-offer.")
        tips.append("Mention quick payment for a better price.")
        tips.append("Always confirm the final agreed price in writing.")
        next_action = "Send a counter-offer or ask about price flexibility."

    elif goal == "clarify_details":
        drafts = DraftMessages(
            polite="Could you please provide more details about the item's condition? "
                   "For example, about [specific aspect]?",
            balanced="Can you clarify the condition, especially regarding [specific aspect]?",
            direct="More condition details? Specifically [specific aspect]?",
        )
        tips.append("Ensure all questions are answered before proceeding.")
        next_action = "Ask specific questions about the item condition."
        if not listing.description:
            risks.append("Lacking detailed item description.")

    else:
        drafts = DraftMessages(
            polite="Great! Would picking up between 10 AM-12 PM tomorrow or 4 PM-6 PM on Thursday "
                   "work for you? I'm available near a public place like the City Park.",
            balanced="Let's meet tomorrow between 10 AM-12 PM or Thursday 4 PM-6 PM. "
                     "Perhaps at the City Park?",
            direct="Pickup times: Tomorrow 10-12 PM or Thursday 4-6 PM. Meet at City Park.",
        )
        tips.append("Meet in a well-lit, public place.")
        tips.append("Share your meetup location and time with a friend or family member.")
        next_action = "Propose concrete time windows and a safe public location."

    return MessageCoachResponse(
        goal=goal,
        draft_messages=drafts,
        counter_offer=counter_offer,
        tactics_safety_tips=tips[:MAX_TIPS],
        next_best_action=next_action,
        risks=risks,
    )
