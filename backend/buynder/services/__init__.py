"""Negotiation engine and listing services."""

from .negotiation_classifier import classify
from .seller_responder import SellerResponder, generate_seller_reply, compute_counter_offer
from .buyer_coach import generate_buyer_suggestions
from .swipe_filter import evaluate, evaluate_many
from .message_coach import coach_message
from .phrase_selector import (
    PhraseSelector,
    RandomPhraseSelector,
    RoundRobinPhraseSelector,
    FixedPhraseSelector,
    get_phrase_selector,
    reset_phrase_selector,
)

__all__ = [
    "classify",
    "SellerResponder",
    "generate_seller_reply",
    "compute_counter_offer",
    "generate_buyer_suggestions",
    "evaluate",
    "evaluate_many",
    "coach_message",
    "PhraseSelector",
    "RandomPhraseSelector",
    "RoundRobinPhraseSelector",
    "FixedPhraseSelector",
    "get_phrase_selector",
    "reset_phrase_selector",
]
