"""
Google Gemini LLM Client

Every AI feature (syllabus, essays, quiz generation, image problems, chat...)
sends its prompt through ``ResilientGenerationClient.generate``.

Gemini regularly answers with "503 UNAVAILABLE / The model is overloaded"
under load. Those failures are retried here, and only here:

    attempt 1 --overloaded--> wait 2s --> attempt 2 --overloaded--> wait 4s --> attempt 3

Anything that is not an overload fails on the spot. Whatever ends the
loop is raised as ``GenerationError``; its ``overloaded`` flag tells the
route whether to answer 503 ("try again later") or 500.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from google import genai
from google.genai import types

from saarthi.core.config import settings

logger = logging.getLogger(__name__)

OVERLOAD_STATUS_CODE = 503
OVERLOAD_MARKER = "overloaded"


# ============================================================
# ERRORS
# ============================================================

class GenerationError(Exception):
    """
    A generation call that could not be completed.

    Attributes:
        overloaded: True when the last failure was an overload (503 or
            "overloaded" in the message), i.e. the service may recover.
        attempts: How many calls were made before giving up.
        status_code: HTTP status reported by the failure, if any.
        original: The last exception raised by the backend.
    """

    def __init__(
        self,
        message: str,
        *,
        overloaded: bool,
        attempts: int,
        status_code: Optional[int] = None,
        original: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.overloaded = overloaded
        self.attempts = attempts
        self.status_code = status_code
        self.original = original


def error_status_code(exc: BaseException) -> Optional[int]:
    """HTTP status carried by an SDK/transport error, if there is one."""
    # google.genai.errors.APIError exposes the status as ``code``
    for attr in ("code", "status_code", "status"):
        value = getattr(exc, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    response = getattr(exc, "response", None)
    value = getattr(response, "status_code", None)
    if isinstance(value, int):
        return value
    return None


def is_overload_error(exc: BaseException) -> bool:
    """
    True if ``exc`` says the service is overloaded.

    Plain substring check, case-sensitive, on both ``str(exc)`` and the
    SDK's ``message`` attribute.
    """
    if error_status_code(exc) == OVERLOAD_STATUS_CODE:
        return True
    message = getattr(exc, "message", None) or ""
    return OVERLOAD_MARKER in str(exc) or OVERLOAD_MARKER in str(message)


# ============================================================
# BACKENDS (one call, no retries)
# ============================================================

@dataclass(frozen=True)
class InlineImage:
    """Image sent inline with a prompt."""
    data: bytes
    mime_type: str


class GenerationBackend(ABC):
    """Makes exactly one generation call."""

    @abstractmethod
    async def generate(self, prompt: str, image: Optional[InlineImage] = None) -> str:
        pass


class GeminiBackend(GenerationBackend):
    """Single-call backend on the google-genai async client."""

    def __init__(
        self,
        api_key: str,
        model: str,
        temperature: float,
        max_output_tokens: int,
    ):
        self.model = model
        self._client = genai.Client(api_key=api_key)
        self._config = types.GenerateContentConfig(
            temperature=temperature,
            max_output_tokens=max_output_tokens,
        )
        logger.info(f"Gemini client initialized (model: {model})")

    async def generate(self, prompt: str, image: Optional[InlineImage] = None) -> str:
        contents: list = [prompt]
        if image is not None:
            contents.append(
                types.Part.from_bytes(data=image.data, mime_type=image.mime_type)
            )

        response = await self._client.aio.models.generate_content(
            model=self.model,
            contents=contents,
            config=self._config,
        )

        text = response.text
        if not text:
            raise ValueError("Gemini returned an empty response")
        return text


# ============================================================
# RESILIENT CLIENT
# ============================================================

class ResilientGenerationClient:
    """
    Wraps a backend with bounded retry on overload.

    Args:
        backend: Makes the actual call
        max_attempts: Total calls allowed (first call included)
        backoff_seconds: Retry after attempt n waits ``n * backoff_seconds``
        sleep: Awaitable sleep; ``asyncio.sleep`` so only the current
            request waits
    """

    def __init__(
        self,
        backend: GenerationBackend,
        max_attempts: int = 3,
        backoff_seconds: float = 2.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.backend = backend
        self.max_attempts = max_attempts
        self.backoff_seconds = backoff_seconds
        self._sleep = sleep

    def backoff_for(self, attempt: int) -> float:
        """Delay before the retry that follows ``attempt``."""
        return attempt * self.backoff_seconds

    async def generate(
        self,
        prompt: str,
        image: Optional[InlineImage] = None,
    ) -> str:
        """
        Generate text for ``prompt`` (and optional image).

        Raises:
            GenerationError: overload persisted through every attempt,
                or any non-overload failure (raised immediately)
        """
        attempt = 1
        while True:
            try:
                return await self.backend.generate(prompt, image)
            except Exception as exc:
                overloaded = is_overload_error(exc)

                if overloaded and attempt < self.max_attempts:
                    delay = self.backoff_for(attempt)
                    logger.warning(
                        f"Gemini overloaded (attempt {attempt}/{self.max_attempts}), "
                        f"retrying in {delay:g} seconds..."
                    )
                    await self._sleep(delay)
                    attempt += 1
                    continue

                logger.error(
                    f"Generation failed after {attempt} attempt(s) "
                    f"(overloaded={overloaded}): {exc}"
                )
                raise GenerationError(
                    str(exc),
                    overloaded=overloaded,
                    attempts=attempt,
                    status_code=error_status_code(exc),
                    original=exc,
                ) from exc


# ============================================================
# CLIENT INITIALIZATION
# ============================================================

_client: Optional[ResilientGenerationClient] = None


def get_generation_client() -> ResilientGenerationClient:
    """Get or create the process-wide generation client."""
    global _client

    if _client is None:
        if not settings.GEMINI_API_KEY:
            raise ValueError(
                "GEMINI_API_KEY not set. "
                "Get your free key at https://aistudio.google.com/apikey"
            )

        backend = GeminiBackend(
            api_key=settings.GEMINI_API_KEY,
            model=settings.GEMINI_MODEL,
            temperature=settings.LLM_TEMPERATURE,
            max_output_tokens=settings.LLM_MAX_TOKENS,
        )
        _client = ResilientGenerationClient(
            backend,
            max_attempts=settings.GENERATION_MAX_ATTEMPTS,
            backoff_seconds=settings.GENERATION_BACKOFF_SECONDS,
        )

    return _client


def reset_generation_client() -> None:
    """Drop the singleton; the next call rebuilds it from settings."""
    global _client
    _client = None
