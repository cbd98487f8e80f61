"""
Swipe feed and message coach endpoints.

WHAT: Evaluate listings for the discovery feed and draft buyer messages
WHY: Stateless helpers the client calls before a conversation exists
HOW: Thin wrappers around the swipe filter and message coach services
"""

from fastapi import APIRouter

from ....models.api_schemas import CoachMessageRequest, SwipeEvaluateRequest
from ....models.negotiation import MessageCoachResponse, SwipeDecision
from ....services.message_coach import coach_message
from ....services.swipe_filter import evaluate

router = APIRouter()


@router.post("/swipe/evaluate", response_model=SwipeDecision)
async def evaluate_listing(request: SwipeEvaluateRequest):
    """Accept or reject one listing against the shopper's preferences."""
    return evaluate(request.listing, request.prefs, request.constraints)


@router.post("/coach/message", response_model=MessageCoachResponse)
async def coach(request: CoachMessageRequest):
    """Draft the buyer's next message in three tones."""
    return coach_message(request.listing, request.prefs, request.chat_context)
