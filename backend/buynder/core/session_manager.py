"""
Conversation session manager.

WHAT: Owns every open conversation and runs one negotiation turn at a time
WHY: The rule engine is pure; something has to append messages, pace replies,
     and keep two turns from interleaving on one transcript
HOW: In-memory conversation cache behind a lock, async turn methods that
     hand the engine a snapshot and append its result
"""

import asyncio
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional

from .config import settings
from ..models.listing import Listing
from ..models.message import Conversation, Message
from ..models.negotiation import BuyerHelperResponse
from ..services import phrases
from ..services.buyer_coach import generate_buyer_suggestions
from ..services.seller_responder import SellerResponder
from ..utils.exceptions import (
    ConversationNotFoundException,
    TurnInProgressException,
    ValidationException,
)
from ..utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class TurnResult:
    """Outcome of one buyer message (or the opening greeting)."""
    conversation: Conversation
    seller_message: Message
    buyer_helper: Optional[BuyerHelperResponse]
    fallback: bool = False


class ConversationManager:
    """
    Manage conversation lifecycle and negotiation turns.

    WHAT: Create/read/delete conversations, run buyer turns
    WHY: Single owner of each transcript; the engine only ever reads snapshots
    HOW: Dict cache guarded by a lock, per-conversation in-flight marker
    """

    def __init__(
        self,
        responder: Optional[SellerResponder] = None,
        seller_delay: Optional[float] = None,
        helper_delay: Optional[float] = None,
    ):
        self.conversations: Dict[str, Conversation] = {}
        self.responder = responder or SellerResponder()
        self.seller_delay = settings.SELLER_REPLY_DELAY_SECONDS if seller_delay is None else seller_delay
        self.helper_delay = settings.BUYER_HELPER_DELAY_SECONDS if helper_delay is None else helper_delay
        self._cache_lock = threading.Lock()
        self._in_flight: set[str] = set()

    # ---------- CRUD ----------

    def start_conversation(self, listing: Listing) -> Conversation:
        """
        Open a conversation about a listing.

        Returns the existing conversation when one is already open for the
        same listing id, so swiping right twice does not fork the chat.
        """
        with self._cache_lock:
            for conversation in self.conversations.values():
                if conversation.listing.id == listing.id:
                    logger.info(f"Reusing conversation {conversation.id} for listing {listing.id}")
                    return conversation

            conversation = Conversation(listing=listing)
            self.conversations[conversation.id] = conversation
            logger.info(f"Created conversation {conversation.id} for listing {listing.id}")
            return conversation

    def get_conversation(self, conversation_id: str) -> Conversation:
        with self._cache_lock:
            conversation = self.conversations.get(conversation_id)
        if conversation is None:
            raise ConversationNotFoundException(conversation_id)
        return conversation

    def list_conversations(self) -> List[Conversation]:
        """All conversations, most recently active first."""
        with self._cache_lock:
            conversations = list(self.conversations.values())
        return sorted(conversations, key=lambda c: c.last_message_at, reverse=True)

    def delete_conversation(self, conversation_id: str) -> None:
        with self._cache_lock:
            if self.conversations.pop(conversation_id, None) is None:
                raise ConversationNotFoundException(conversation_id)
            self._in_flight.discard(conversation_id)
        logger.info(f"Deleted conversation {conversation_id}")

    def clear(self) -> None:
        """Drop every conversation (tests and app shutdown)."""
        with self._cache_lock:
            self.conversations.clear()
            self._in_flight.clear()

    # ---------- Turns ----------

    def _claim_turn(self, conversation_id: str) -> Conversation:
        conversation = self.get_conversation(conversation_id)
        with self._cache_lock:
            if conversation_id in self._in_flight:
                raise TurnInProgressException(conversation_id)
            self._in_flight.add(conversation_id)
        return conversation

    def _release_turn(self, conversation_id: str) -> None:
        with self._cache_lock:
            self._in_flight.discard(conversation_id)

    @staticmethod
    def _append(conversation: Conversation, message: Message) -> None:
        conversation.messages.append(message)
        conversation.last_message_at = message.timestamp

    def _validate_text(self, text: str) -> str:
        cleaned = (text or "").strip()
        if not cleaned:
            raise ValidationException("Message text must not be empty")
        if len(cleaned) > settings.MAX_MESSAGE_LENGTH:
            raise ValidationException(
                f"Message exceeds {settings.MAX_MESSAGE_LENGTH} characters",
                field_errors=[{"field": "message", "error": "too_long"}],
            )
        return cleaned

    async def _run_turn(self, conversation: Conversation) -> TurnResult:
        """Seller reply then buyer coaching for the transcript as it stands."""
        seller_message = None
        try:
            await asyncio.sleep(self.seller_delay)
            reply_text = self.responder.generate_reply(conversation.listing, conversation.transcript())
            seller_message = Message(sender="seller", text=reply_text)
            self._append(conversation, seller_message)

            await asyncio.sleep(self.helper_delay)
            helper = generate_buyer_suggestions(conversation.listing, conversation.transcript())
        except Exception as e:
            logger.error(f"Turn failed for conversation {conversation.id}: {e}", exc_info=True)
            if seller_message is not None:
                # Seller already answered; only the coaching is missing
                return TurnResult(conversation, seller_message, None)
            seller_message = Message(sender="seller", text=phrases.SELLER_FALLBACK_REPLY)
            self._append(conversation, seller_message)
            return TurnResult(conversation, seller_message, None, fallback=True)

        logger.info(
            f"Conversation {conversation.id}: seller replied, "
            f"{len(conversation.messages)} messages, target ${helper.target_price}"
        )
        return TurnResult(conversation, seller_message, helper)

    async def send_buyer_message(self, conversation_id: str, text: str) -> TurnResult:
        """
        Append a buyer message and produce the seller's reply plus coaching.

        Args:
            conversation_id: Conversation to post into
            text: Buyer message text

        Returns:
            TurnResult with the new seller message and buyer coaching

        Raises:
            ConversationNotFoundException: Unknown conversation
            TurnInProgressException: Previous turn still running
            ValidationException: Empty or oversized text
        """
        cleaned = self._validate_text(text)
        conversation = self._claim_turn(conversation_id)
        try:
            self._append(conversation, Message(sender="buyer", text=cleaned))
            return await self._run_turn(conversation)
        finally:
            self._release_turn(conversation_id)

    async def open_with_greeting(self, conversation_id: str) -> TurnResult:
        """
        Start an empty conversation with the standard availability question.

        Raises:
            ValidationException: Conversation already has messages
        """
        conversation = self._claim_turn(conversation_id)
        try:
            if conversation.messages:
                raise ValidationException(f"Conversation {conversation_id} has already started")
            opener = phrases.BUYER_OPENER.format(title=conversation.listing.title)
            self._append(conversation, Message(sender="buyer", text=opener))
            return await self._run_turn(conversation)
        finally:
            self._release_turn(conversation_id)

    async def get_suggestions(self, conversation_id: str) -> BuyerHelperResponse:
        """Fresh buyer coaching for an existing conversation."""
        conversation = self.get_conversation(conversation_id)
        await asyncio.sleep(self.helper_delay)
        return generate_buyer_suggestions(conversation.listing, conversation.transcript())


# Global instance
conversation_manager = ConversationManager()
