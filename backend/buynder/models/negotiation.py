"""
Negotiation domain models.

WHAT: Derived negotiation state and the engine's output structures
WHY: Consistent typing between the rule engine, session manager, and API
HOW: Enum for the phase, dataclass for per-call snapshots, Pydantic v2 for outputs
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


class ParsedPrice(BaseModel):
    """Currency symbol and numeric value pulled from a display price."""

    currency: str
    value: float


class NegotiationPhase(str, Enum):
    """Where the conversation stands, derived fresh from the transcript."""

    OPENING = "opening"
    SELLER_COUNTERED = "seller_countered"
    SELLER_FIRM = "seller_firm"
    SELLER_REJECTED = "seller_rejected"
    STALLED = "stalled"
    ACCEPTED = "accepted"


@dataclass(frozen=True)
class NegotiationSnapshot:
    """
    Result of classifying one transcript.

    anchor_price is the price that matters for the detected phase: the agreed
    price, the firm price, or the seller's counter. For the other phases it
    equals last_seller_price.
    """
    phase: NegotiationPhase
    last_seller_price: float
    last_buyer_offer: int | None
    anchor_price: float
    buyer_offers: tuple[int, ...] = field(default_factory=tuple)
    seller_offers: tuple[int, ...] = field(default_factory=tuple)

    @property
    def buyer_offer_count(self) -> int:
        return len(self.buyer_offers)


class SwipeDecision(BaseModel):
    """Accept/reject verdict for one listing in the discovery feed."""

    decision: Literal["accept", "reject"]
    reason: str
    quick_facts: list[str] = Field(default_factory=list)
    risks: list[str] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list)
    follow_up_questions: list[str] = Field(default_factory=list, max_length=3)
    extra_fields: list[str] = Field(default_factory=list)


class BuyerHelperResponse(BaseModel):
    """Coaching for the buyer's next message."""

    suggested_messages: list[str] = Field(default_factory=list, max_length=4)
    target_price: int
    deal_advice: str


MessageGoal = Literal["start_conversation", "negotiate_price", "clarify_details", "schedule_meetup"]


class DraftMessages(BaseModel):
    """Same intent written in three tones."""

    polite: str = ""
    balanced: str = ""
    direct: str = ""


class CounterOffer(BaseModel):
    suggested_price: str
    rationale: str


class MessageCoachResponse(BaseModel):
    """Drafted buyer messages for a chosen conversational goal."""

    goal: MessageGoal
    draft_messages: DraftMessages
    counter_offer: CounterOffer | None = None
    tactics_safety_tips: list[str] = Field(default_factory=list, max_length=3)
    next_best_action: str = ""
    risks: list[str] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list)
