"""
LLM Module

Language Model integrations for Saarthi.

Currently using Google Gemini.
"""

from saarthi.ai.llm.gemini_client import (
    GenerationBackend,
    GenerationError,
    GeminiBackend,
    InlineImage,
    ResilientGenerationClient,
    get_generation_client,
    is_overload_error,
    reset_generation_client,
)

__all__ = [
    "GenerationBackend",
    "GenerationError",
    "GeminiBackend",
    "InlineImage",
    "ResilientGenerationClient",
    "get_generation_client",
    "is_overload_error",
    "reset_generation_client",
]
