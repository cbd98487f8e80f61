"""
Custom business exceptions for the API layer.

WHAT: Domain-specific exceptions that map to HTTP status codes
WHY: Consistent error handling across all API endpoints
HOW: Custom exception classes with error codes and messages

The negotiation engine itself never raises these; they belong to the
conversation session and HTTP boundary.
"""

from typing import Optional, List, Dict, Any


class BusinessException(Exception):
    """Base class for business logic exceptions."""

    def __init__(self, message: str, code: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details


class ConversationNotFoundException(BusinessException):
    """Raised when a conversation is not found."""

    def __init__(self, conversation_id: str):
        super().__init__(
            message=f"Conversation not found: {conversation_id}",
            code="CONVERSATION_NOT_FOUND",
            details={"conversation_id": conversation_id}
        )


class ListingNotFoundException(BusinessException):
    """Raised when a listing is not on the watchlist."""

    def __init__(self, listing_id: str):
        super().__init__(
            message=f"Listing not found: {listing_id}",
            code="LISTING_NOT_FOUND",
            details={"listing_id": listing_id}
        )


class TurnInProgressException(BusinessException):
    """Raised when a message arrives while the previous turn is still being answered."""

    def __init__(self, conversation_id: str):
        super().__init__(
            message=f"A reply is already being generated for conversation: {conversation_id}",
            code="TURN_IN_PROGRESS",
            details={"conversation_id": conversation_id}
        )


class ValidationException(BusinessException):
    """Raised for validation errors."""

    def __init__(self, message: str, field_errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            details={"field_errors": field_errors} if field_errors else None
        )
