"""
Stateless negotiation endpoints.

WHAT: Run the negotiation engine on a client-supplied transcript
WHY: Lets a client that keeps its own chat state use the rule engine directly
HOW: Each call reads the posted transcript; nothing is stored
"""

from fastapi import APIRouter

from ....models.api_schemas import ClassifyResponse, SellerReplyResponse, TranscriptRequest
from ....models.negotiation import BuyerHelperResponse
from ....services.buyer_coach import generate_buyer_suggestions
from ....services.negotiation_classifier import classify
from ....services.seller_responder import generate_seller_reply
from ....utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.post("/negotiation/seller-reply", response_model=SellerReplyResponse)
async def seller_reply(request: TranscriptRequest):
    """Simulated seller's next message."""
    reply = generate_seller_reply(request.listing, request.transcript)
    logger.debug(f"Seller reply for listing {request.listing.id}: {reply}")
    return SellerReplyResponse(reply=reply)


@router.post("/negotiation/buyer-suggestions", response_model=BuyerHelperResponse)
async def buyer_suggestions(request: TranscriptRequest):
    """Suggested buyer messages, target price, and advice."""
    return generate_buyer_suggestions(request.listing, request.transcript)


@router.post("/negotiation/classify", response_model=ClassifyResponse)
async def classify_transcript(request: TranscriptRequest):
    """
    Negotiation phase for a transcript.

    WHAT: Phase plus the prices the classifier read
    WHY: Lets clients show where a negotiation stands without a full turn
    HOW: Run the classifier and flatten its snapshot
    """
    snapshot = classify(request.transcript, request.listing.asking_price)
    return ClassifyResponse(
        phase=snapshot.phase,
        last_seller_price=snapshot.last_seller_price,
        last_buyer_offer=snapshot.last_buyer_offer,
        anchor_price=snapshot.anchor_price,
        buyer_offers=list(snapshot.buyer_offers),
        seller_offers=list(snapshot.seller_offers),
    )
