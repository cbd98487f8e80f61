"""
Message and conversation models.

WHAT: Chat messages and the conversation that owns them
WHY: The transcript is the only input the negotiation engine reads
HOW: Frozen Pydantic message model, mutable conversation container
"""

from datetime import datetime, timezone
from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, Field

from .listing import Listing

Sender = Literal["buyer", "seller"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Message(BaseModel):
    """A single chat message. Transcripts are ordered lists of these."""

    id: str = Field(default_factory=lambda: f"msg-{uuid4().hex[:12]}")
    sender: Sender
    text: str = Field(max_length=5000)
    timestamp: datetime = Field(default_factory=_utcnow)

    model_config = {"frozen": True}


class Conversation(BaseModel):
    """
    One buyer/seller chat about one listing.

    Only the session manager appends to ``messages``; engine functions
    receive a copy.
    """

    id: str = Field(default_factory=lambda: f"conv-{uuid4().hex[:12]}")
    listing: Listing
    messages: list[Message] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_utcnow)
    last_message_at: datetime = Field(default_factory=_utcnow)
    is_active: bool = True

    def transcript(self) -> list[Message]:
        """Snapshot of the messages for engine calls."""
        return list(self.messages)
