"""
Quiz Service

Business logic for quiz operations:
- AI-powered quiz generation (prompt -> Gemini -> salvaged JSON)
- Scoring a submission and storing the result
- Quiz history
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from saarthi.ai.llm import ResilientGenerationClient
from saarthi.ai.parsers import parse_quiz_json
from saarthi.ai.prompts import build_quiz_generation_prompt
from saarthi.models.quiz_result import QuizResult
from saarthi.repositories.quiz_repo import QuizResultRepository
from saarthi.schemas.quiz import (
    QuizGenerateRequest,
    QuizGenerateResponse,
    QuizSubmitRequest,
    QuizSubmitResponse,
    QuizResultResponse,
    UserAnswerResponse,
)

logger = logging.getLogger(__name__)


class QuizServiceError(Exception):
    pass


class EmptySubmissionError(QuizServiceError, ValueError):
    """A submission with no answers cannot be scored."""


class QuizPersistenceError(QuizServiceError):
    pass


# ============================================================
# SCORING
# ============================================================

@dataclass(frozen=True)
class AnsweredQuestion:
    question_number: int
    user_answer: Optional[str]
    correct_answer: str
    is_correct: bool

    def as_dict(self) -> dict:
        return {
            "question_number": self.question_number,
            "user_answer": self.user_answer,
            "correct_answer": self.correct_answer,
            "is_correct": self.is_correct,
        }


@dataclass(frozen=True)
class ScoreResult:
    correct_answers: int
    score: int
    user_answers: List[AnsweredQuestion]

    @property
    def total_questions(self) -> int:
        return len(self.user_answers)


def percentage(correct: int, total: int) -> int:
    """100 * correct / total, rounded half up."""
    quotient = Decimal(100 * correct) / Decimal(total)
    return int(quotient.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def score_answers(pairs: Sequence[Tuple[Optional[str], str]]) -> ScoreResult:
    """
    Score ``(submitted, correct)`` pairs.

    A pair is correct only on exact string equality; no trimming or
    case folding. A skipped question (``None``) is never correct.

    Raises:
        EmptySubmissionError: if ``pairs`` is empty
    """
    if not pairs:
        raise EmptySubmissionError("At least one answer is required")

    answered = [
        AnsweredQuestion(
            question_number=i,
            user_answer=submitted,
            correct_answer=correct,
            is_correct=submitted == correct,
        )
        for i, (submitted, correct) in enumerate(pairs, start=1)
    ]
    correct_count = sum(1 for a in answered if a.is_correct)

    return ScoreResult(
        correct_answers=correct_count,
        score=percentage(correct_count, len(answered)),
        user_answers=answered,
    )


# ============================================================
# SERVICE
# ============================================================

class QuizService:
    """Service for quiz generation, grading and history."""

    def __init__(
        self,
        db: AsyncSession,
        generator: Optional[ResilientGenerationClient] = None,
    ):
        self.db = db
        self.generator = generator
        self.result_repo = QuizResultRepository(db)

    # ============================================================
    # GENERATE QUIZ
    # ============================================================

    async def generate_quiz(self, request: QuizGenerateRequest) -> QuizGenerateResponse:
        """
        Raises:
            GenerationError: Gemini call failed (see ``overloaded``)
            QuizParseError: output held no parseable JSON object
        """
        prompt = build_quiz_generation_prompt(
            topic=request.topic,
            difficulty=request.difficulty.value,
            question_type=request.question_type.value,
            count=request.count,
        )

        text = await self.generator.generate(prompt)
        quiz_data = parse_quiz_json(text)

        return QuizGenerateResponse(
            quiz=quiz_data,
            topic=request.topic,
            difficulty=request.difficulty,
            question_type=request.question_type,
            count=request.count,
        )

    # ============================================================
    # SUBMIT QUIZ
    # ============================================================

    async def submit_quiz(
        self,
        user_id: UUID,
        submission: QuizSubmitRequest,
    ) -> QuizSubmitResponse:
        """
        Score a submission and store it as a new result.

        Every call inserts a new row, even for identical submissions.

        Raises:
            EmptySubmissionError: no answers
            QuizPersistenceError: the result could not be stored
        """
        scored = score_answers(
            [(a.user_answer, a.correct_answer) for a in submission.answers]
        )

        if submission.count is not None and submission.count != scored.total_questions:
            logger.warning(
                f"Quiz submission declared {submission.count} questions "
                f"but answered {scored.total_questions}; storing the answered count"
            )

        try:
            await self.result_repo.create(
                user_id=user_id,
                topic=submission.topic,
                difficulty=submission.difficulty.value,
                question_type=submission.question_type.value,
                total_questions=scored.total_questions,
                correct_answers=scored.correct_answers,
                score=scored.score,
                user_answers=[a.as_dict() for a in scored.user_answers],
                time_taken=submission.time_taken,
            )
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to store quiz result for user {user_id}: {e}")
            raise QuizPersistenceError("Failed to store quiz result") from e

        return QuizSubmitResponse(
            success=True,
            score=scored.score,
            correct_answers=scored.correct_answers,
            total_questions=scored.total_questions,
            user_answers=[
                UserAnswerResponse(**a.as_dict()) for a in scored.user_answers
            ],
        )

    # ============================================================
    # HISTORY
    # ============================================================

    async def get_history(self, user_id: UUID, limit: int = 10) -> List[QuizResultResponse]:
        """Most recent results for ``user_id``, newest first."""
        try:
            results = await self.result_repo.get_recent_for_user(user_id, limit)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load quiz history for user {user_id}: {e}")
            raise QuizPersistenceError("Failed to fetch quiz history") from e

        return [self._to_response(r) for r in results]

    # ============================================================
    # PRIVATE HELPERS
    # ============================================================

    def _to_response(self, result: QuizResult) -> QuizResultResponse:
        return QuizResultResponse(
            id=result.id,
            topic=result.topic,
            difficulty=result.difficulty,
            question_type=result.question_type,
            total_questions=result.total_questions,
            correct_answers=result.correct_answers,
            score=result.score,
            user_answers=[UserAnswerResponse(**a) for a in result.user_answers or []],
            time_taken=result.time_taken,
            completed_at=result.completed_at,
        )
