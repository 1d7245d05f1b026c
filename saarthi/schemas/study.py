"""
Study Tool Schemas

Request bodies for the text-generation features and the JSON envelopes
they answer with. Field names match what the web client posts.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _as_text(v: Any) -> Any:
    # clients post grades and hours as numbers too
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v)
    return v


# ============================================================
# Request Schemas
# ============================================================

class SyllabusRequest(BaseModel):
    std: str = Field(..., min_length=1, max_length=50, description="Grade / standard, e.g. '8th'")
    subject: str = Field(..., min_length=1, max_length=100)

    @field_validator("std", mode="before")
    @classmethod
    def std_as_text(cls, v: Any) -> Any:
        return _as_text(v)


class EssayRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    topic: str = Field(..., min_length=1, max_length=300)
    essay_type: str = Field(
        "argumentative",
        alias="type",
        max_length=50,
        description="Essay style, e.g. argumentative, narrative, expository"
    )
    length: int = Field(500, ge=50, le=5000, description="Approximate word count")


class CodeExplainRequest(BaseModel):
    code: str = Field(..., min_length=1, max_length=20000)
    language: str = Field("python", min_length=1, max_length=50)


class StudyPlanRequest(BaseModel):
    subjects: str = Field(..., min_length=1, max_length=500)
    hours: str = Field(..., min_length=1, max_length=20, description="Study hours per day")
    days: str = Field(..., min_length=1, max_length=20, description="Study days per week")
    goals: str = Field("", max_length=1000)

    @field_validator("hours", "days", mode="before")
    @classmethod
    def numbers_as_text(cls, v: Any) -> Any:
        return _as_text(v)


class FlashcardRequest(BaseModel):
    topic: str = Field(..., min_length=1, max_length=300)
    subject: str = Field(..., min_length=1, max_length=100)
    count: int = Field(10, ge=1, le=50)


class AskRequest(BaseModel):
    question: str = Field(..., min_length=1, max_length=5000)


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=5000)


# ============================================================
# Response Schemas
# ============================================================

class TextResult(BaseModel):
    """Generated markdown under ``result``."""
    result: str


class ChatResult(BaseModel):
    """Chat answers use ``message`` instead of ``result``."""
    message: str


class ErrorEnvelope(BaseModel):
    error: str
