"""
Error envelopes for the AI features.

AI routes answer failures with a small JSON body (``{"error": ...}``,
or ``{"message": ...}`` for chat) rather than FastAPI's ``detail``
shape, because that is what the web client reads.
"""

import logging

from fastapi import status
from fastapi.responses import JSONResponse

from saarthi.ai.llm import GenerationError

logger = logging.getLogger(__name__)

HIGH_TRAFFIC_MESSAGE = (
    "The AI service is currently experiencing high traffic. "
    "Please try again in a few minutes."
)


def apology(what: str) -> str:
    return (
        f"I apologize, but I'm having trouble {what} right now. "
        "Please try again in a moment."
    )


def error_response(status_code: int, message: str, key: str = "error") -> JSONResponse:
    return JSONResponse(status_code=status_code, content={key: message})


def generation_failure(
    exc: GenerationError,
    fallback_message: str,
    key: str = "error",
) -> JSONResponse:
    """503 when Gemini stayed overloaded, 500 with ``fallback_message`` otherwise."""
    if exc.overloaded:
        return error_response(status.HTTP_503_SERVICE_UNAVAILABLE, HIGH_TRAFFIC_MESSAGE, key)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, fallback_message, key)
