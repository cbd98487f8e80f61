"""
Conversation endpoints.

WHAT: Start, read, and delete conversations and post buyer messages
WHY: The chat screen drives the simulated seller through these routes
HOW: FastAPI router over the conversation manager singleton
"""

from typing import List

from fastapi import APIRouter, status

from ....core.session_manager import TurnResult, conversation_manager
from ....models.api_schemas import (
    ConversationSummary,
    SendMessageRequest,
    StartConversationRequest,
    TurnResponse,
)
from ....models.message import Conversation
from ....models.negotiation import BuyerHelperResponse
from ....utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


def _turn_response(result: TurnResult) -> TurnResponse:
    return TurnResponse(
        conversation=result.conversation,
        seller_message=result.seller_message,
        buyer_helper=result.buyer_helper,
        fallback=result.fallback,
    )


@router.post("/conversations", response_model=Conversation, status_code=status.HTTP_201_CREATED)
async def start_conversation(request: StartConversationRequest):
    """Open (or reopen) the conversation for a listing."""
    return conversation_manager.start_conversation(request.listing)


@router.get("/conversations", response_model=List[ConversationSummary])
async def list_conversations():
    """Conversations, most recently active first."""
    return [ConversationSummary.from_conversation(c) for c in conversation_manager.list_conversations()]


@router.get("/conversations/{conversation_id}", response_model=Conversation)
async def get_conversation(conversation_id: str):
    return conversation_manager.get_conversation(conversation_id)


@router.delete("/conversations/{conversation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_conversation(conversation_id: str):
    conversation_manager.delete_conversation(conversation_id)


@router.post("/conversations/{conversation_id}/messages", response_model=TurnResponse)
async def send_message(conversation_id: str, request: SendMessageRequest):
    """
    Post a buyer message.

    WHAT: Append the message, get the seller's reply and fresh coaching
    WHY: Main chat loop
    HOW: Delegates to the manager; 409 if the previous reply is still pending
    """
    result = await conversation_manager.send_buyer_message(conversation_id, request.message)
    return _turn_response(result)


@router.post("/conversations/{conversation_id}/greeting", response_model=TurnResponse)
async def send_greeting(conversation_id: str):
    """Open an empty conversation with the standard availability question."""
    result = await conversation_manager.open_with_greeting(conversation_id)
    return _turn_response(result)


@router.get("/conversations/{conversation_id}/suggestions", response_model=BuyerHelperResponse)
async def get_suggestions(conversation_id: str):
    return await conversation_manager.get_suggestions(conversation_id)
