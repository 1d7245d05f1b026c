"""
Quiz Schemas

Pydantic models for quiz generation, submission and history.
Wire names are camelCase (``timeTaken``, ``userAnswer``...); Python
attributes are snake_case through aliases.
"""

from datetime import datetime
from typing import Optional, List, Any
from uuid import UUID
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ============================================================
# Enums
# ============================================================

class QuizDifficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class QuestionType(str, Enum):
    MCQ = "mcq"
    SUBJECTIVE = "subjective"


class _QuizParams(BaseModel):
    """Fields shared by generation and submission."""
    model_config = ConfigDict(populate_by_name=True)

    topic: str = Field(..., min_length=1, max_length=200)
    difficulty: QuizDifficulty = QuizDifficulty.MEDIUM
    question_type: QuestionType = Field(QuestionType.MCQ, alias="type")

    @field_validator("difficulty", "question_type", mode="before")
    @classmethod
    def normalize_case(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v


# ============================================================
# Request Schemas
# ============================================================

class QuizGenerateRequest(_QuizParams):
    count: int = Field(5, ge=1, le=20, description="Number of questions to generate")


class AnswerPair(BaseModel):
    """One answered question: what the user picked and what was right."""
    model_config = ConfigDict(populate_by_name=True)

    user_answer: Optional[str] = Field(None, alias="userAnswer", description="null when the question was skipped")
    correct_answer: str = Field(..., alias="correctAnswer")


class QuizSubmitRequest(_QuizParams):
    count: Optional[int] = Field(None, ge=1, description="Number of questions the quiz had")
    answers: List[AnswerPair] = Field(default_factory=list)
    time_taken: int = Field(0, ge=0, alias="timeTaken", description="Seconds spent")


# ============================================================
# Response Schemas
# ============================================================

class QuizGenerateResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    quiz: Any
    topic: str
    difficulty: QuizDifficulty
    question_type: QuestionType = Field(alias="type")
    count: int


class UserAnswerResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    question_number: int = Field(alias="questionNumber")
    user_answer: Optional[str] = Field(None, alias="userAnswer")
    correct_answer: str = Field(alias="correctAnswer")
    is_correct: bool = Field(alias="isCorrect")


class QuizSubmitResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    score: int
    correct_answers: int = Field(alias="correctAnswers")
    total_questions: int = Field(alias="totalQuestions")
    user_answers: List[UserAnswerResponse] = Field(alias="userAnswers")


class QuizResultResponse(BaseModel):
    """A stored quiz result as returned by history."""
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    topic: str
    difficulty: str
    question_type: str = Field(alias="questionType")
    total_questions: int = Field(alias="totalQuestions")
    correct_answers: int = Field(alias="correctAnswers")
    score: int
    user_answers: List[UserAnswerResponse] = Field(alias="userAnswers")
    time_taken: int = Field(alias="timeTaken")
    completed_at: datetime = Field(alias="completedAt")


class QuizHistoryResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    quiz_results: List[QuizResultResponse] = Field(alias="quizResults")
