"""
Global error handling middleware.

WHAT: Translate exceptions to appropriate HTTP responses
WHY: Consistent error responses with proper status codes
HOW: FastAPI exception handlers for business and validation errors
"""

from datetime import datetime

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..utils.exceptions import (
    BusinessException,
    ConversationNotFoundException,
    ListingNotFoundException,
    TurnInProgressException,
)
from ..utils.logger import get_logger

logger = get_logger(__name__)


def _error_body(code: str, message: str, details=None) -> dict:
    return {
        "error": code,
        "message": message,
        "details": details,
        "timestamp": datetime.now().isoformat(),
    }


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """
    Handle FastAPI RequestValidationError.

    WHAT: Request validation failed
    WHY: Invalid request payload
    HOW: Return 400 with JSON-safe field errors
    """
    logger.warning(f"Validation error on {request.url.path}: {len(exc.errors())} field error(s)")

    cleaned_errors = []
    for error in exc.errors():
        cleaned = {
            "type": error.get("type"),
            "loc": error.get("loc"),
            "msg": error.get("msg"),
        }
        if "ctx" in error:
            cleaned["ctx"] = {k: str(v) if isinstance(v, Exception) else v for k, v in error["ctx"].items()}
        cleaned_errors.append(cleaned)

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("VALIDATION_ERROR", "Request validation failed", cleaned_errors),
    )


async def business_exception_handler(request: Request, exc: BusinessException):
    """
    Handle BusinessException and subclasses.

    Not-found errors map to 404, a turn already in flight to 409, and
    everything else to 400.
    """
    status_code = status.HTTP_400_BAD_REQUEST

    if isinstance(exc, (ConversationNotFoundException, ListingNotFoundException)):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, TurnInProgressException):
        status_code = status.HTTP_409_CONFLICT

    logger.warning(f"Business exception: {exc.code} - {exc.message}")
    return JSONResponse(
        status_code=status_code,
        content=_error_body(exc.code, exc.message, exc.details),
    )


def register_exception_handlers(app):
    """
    Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(BusinessException, business_exception_handler)

    logger.info("Exception handlers registered")
