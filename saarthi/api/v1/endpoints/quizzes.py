"""
Quiz Endpoints

HTTP API for quiz generation, grading and history.

Endpoints:
----------
- POST /quiz-generator  - Generate a quiz on a topic
- POST /submit-quiz     - Grade answers and store the result
- GET  /quiz-history    - Most recent results for the current user
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from saarthi.db.database import get_db
from saarthi.api.deps import get_current_user, get_generator
from saarthi.api.errors import error_response, generation_failure
from saarthi.ai.llm import GenerationError, ResilientGenerationClient
from saarthi.ai.parsers import QuizParseError
from saarthi.core.config import settings
from saarthi.models.user import User
from saarthi.schemas.quiz import (
    QuizGenerateRequest,
    QuizGenerateResponse,
    QuizSubmitRequest,
    QuizSubmitResponse,
    QuizHistoryResponse,
)
from saarthi.schemas.study import ErrorEnvelope
from saarthi.services.quiz_service import (
    QuizService,
    QuizPersistenceError,
    EmptySubmissionError,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Quizzes"])


def get_quiz_service(
    db: AsyncSession = Depends(get_db),
    generator: ResilientGenerationClient = Depends(get_generator),
) -> QuizService:
    return QuizService(db, generator)


def get_quiz_store(db: AsyncSession = Depends(get_db)) -> QuizService:
    """Grading and history never call Gemini, so they don't need a key."""
    return QuizService(db, generator=None)


# ============================================================
# GENERATE QUIZ
# ============================================================

@router.post(
    "/quiz-generator",
    response_model=QuizGenerateResponse,
    response_model_by_alias=True,
    summary="Generate a quiz on a topic",
    responses={
        503: {"model": ErrorEnvelope, "description": "AI service overloaded"},
        500: {"model": ErrorEnvelope, "description": "Generation or parsing failed"},
    },
)
async def generate_quiz(
    request: QuizGenerateRequest,
    current_user: User = Depends(get_current_user),
    service: QuizService = Depends(get_quiz_service),
):
    try:
        return await service.generate_quiz(request)
    except QuizParseError as e:
        logger.error(f"Quiz JSON could not be recovered for {request.topic!r}: {e}")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to generate structured quiz. Please try again with a different topic.",
        )
    except GenerationError as e:
        logger.error(f"Quiz generation failed for user {current_user.id}: {e}")
        return generation_failure(e, "Failed to generate quiz. Please try again.")


# ============================================================
# SUBMIT QUIZ
# ============================================================

@router.post(
    "/submit-quiz",
    response_model=QuizSubmitResponse,
    response_model_by_alias=True,
    summary="Grade a quiz and store the result",
    responses={
        400: {"model": ErrorEnvelope, "description": "No answers submitted"},
        500: {"model": ErrorEnvelope, "description": "Result could not be stored"},
    },
)
async def submit_quiz(
    submission: QuizSubmitRequest,
    current_user: User = Depends(get_current_user),
    service: QuizService = Depends(get_quiz_store),
):
    if not submission.answers:
        return error_response(status.HTTP_400_BAD_REQUEST, "At least one answer is required")

    try:
        return await service.submit_quiz(current_user.id, submission)
    except EmptySubmissionError as e:
        return error_response(status.HTTP_400_BAD_REQUEST, str(e))
    except QuizPersistenceError:
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to submit quiz. Please try again.",
        )


# ============================================================
# HISTORY
# ============================================================

@router.get(
    "/quiz-history",
    response_model=QuizHistoryResponse,
    response_model_by_alias=True,
    summary="Recent quiz results, newest first",
)
async def quiz_history(
    limit: Optional[int] = Query(None, ge=1, le=50),
    current_user: User = Depends(get_current_user),
    service: QuizService = Depends(get_quiz_store),
):
    try:
        results = await service.get_history(
            current_user.id,
            limit=limit or settings.QUIZ_HISTORY_LIMIT,
        )
    except QuizPersistenceError:
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to fetch quiz history.",
        )

    return QuizHistoryResponse(quiz_results=results)
