"""
Pydantic API schemas for the v1 endpoints.

WHAT: Request and response models for FastAPI
WHY: Type-safe validation and serialization for the web client
HOW: Pydantic v2 models wrapping the domain models
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from ..core.config import settings
from .listing import Constraints, Listing, UserPrefs
from .message import Conversation, Message
from .negotiation import BuyerHelperResponse, NegotiationPhase


# ========== Swipe & Coach ==========

class SwipeEvaluateRequest(BaseModel):
    """Listing plus the shopper's filter settings."""
    listing: Listing
    prefs: Optional[UserPrefs] = None
    constraints: Optional[Constraints] = None


class CoachMessageRequest(BaseModel):
    """Listing and chat so far for message-coach drafts."""
    listing: Listing
    prefs: Optional[UserPrefs] = None
    chat_context: List[Message] = Field(default_factory=list)


# ========== Stateless negotiation ==========

class TranscriptRequest(BaseModel):
    """Listing and transcript for the stateless engine endpoints."""
    listing: Listing
    transcript: List[Message] = Field(default_factory=list)


class SellerReplyResponse(BaseModel):
    reply: str


class ClassifyResponse(BaseModel):
    """Negotiation phase and the prices behind it."""
    phase: NegotiationPhase
    last_seller_price: float
    last_buyer_offer: Optional[int] = None
    anchor_price: float
    buyer_offers: List[int] = Field(default_factory=list)
    seller_offers: List[int] = Field(default_factory=list)


# ========== Conversations ==========

class StartConversationRequest(BaseModel):
    listing: Listing


class SendMessageRequest(BaseModel):
    """Buyer message posted into a conversation."""
    message: str = Field(..., min_length=1, max_length=settings.MAX_MESSAGE_LENGTH)

    @field_validator("message")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("message must not be blank")
        return v


class ConversationSummary(BaseModel):
    """Conversation list entry."""
    id: str
    listing_id: str
    listing_title: str
    message_count: int
    last_message: Optional[str] = None
    last_message_at: datetime
    is_active: bool

    @classmethod
    def from_conversation(cls, conversation: Conversation) -> "ConversationSummary":
        return cls(
            id=conversation.id,
            listing_id=conversation.listing.id,
            listing_title=conversation.listing.title,
            message_count=len(conversation.messages),
            last_message=conversation.messages[-1].text if conversation.messages else None,
            last_message_at=conversation.last_message_at,
            is_active=conversation.is_active,
        )


class TurnResponse(BaseModel):
    """Result of a buyer turn."""
    conversation: Conversation
    seller_message: Message
    buyer_helper: Optional[BuyerHelperResponse] = None
    fallback: bool = False


# ========== Watchlist ==========

class WatchlistAddRequest(BaseModel):
    listing: Listing


class WatchlistResponse(BaseModel):
    items: List[Listing]
    count: int


# ========== Status ==========

class HealthResponse(BaseModel):
    status: str
    app: str
    version: str
    conversations: int
    watchlist: int
    timestamp: datetime
