"""
Study Tool Endpoints

One-shot text generation features.

Endpoints:
----------
- POST /syllabus             - Syllabus for a grade and subject
- POST /essay-writer         - Essay on a topic
- POST /code-explainer       - Explain a code snippet
- POST /study-planner        - Weekly study plan
- POST /flashcard-generator  - Flashcards for a topic
- POST /ask                  - Answer a free-form question
- POST /chat                 - Tutor chat reply (``message`` envelope)
"""

import logging

from fastapi import APIRouter, Depends

from saarthi.api.deps import get_current_user, get_generator
from saarthi.api.errors import apology, generation_failure
from saarthi.ai.llm import GenerationError, ResilientGenerationClient
from saarthi.models.user import User
from saarthi.schemas.study import (
    SyllabusRequest,
    EssayRequest,
    CodeExplainRequest,
    StudyPlanRequest,
    FlashcardRequest,
    AskRequest,
    ChatRequest,
    TextResult,
    ChatResult,
    ErrorEnvelope,
)
from saarthi.services.study_service import StudyService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Study Tools"])

_FAILURES = {
    503: {"model": ErrorEnvelope, "description": "AI service overloaded"},
    500: {"model": ErrorEnvelope, "description": "Generation failed"},
}


def get_study_service(
    generator: ResilientGenerationClient = Depends(get_generator),
) -> StudyService:
    return StudyService(generator)


@router.post("/syllabus", response_model=TextResult, responses=_FAILURES)
async def generate_syllabus(
    request: SyllabusRequest,
    current_user: User = Depends(get_current_user),
    service: StudyService = Depends(get_study_service),
):
    try:
        return TextResult(result=await service.syllabus(request))
    except GenerationError as e:
        logger.error(f"Syllabus generation failed for user {current_user.id}: {e}")
        return generation_failure(e, apology("generating the syllabus"))


@router.post("/essay-writer", response_model=TextResult, responses=_FAILURES)
async def write_essay(
    request: EssayRequest,
    current_user: User = Depends(get_current_user),
    service: StudyService = Depends(get_study_service),
):
    try:
        return TextResult(result=await service.essay(request))
    except GenerationError as e:
        logger.error(f"Essay generation failed for user {current_user.id}: {e}")
        return generation_failure(e, apology("generating the essay"))


@router.post("/code-explainer", response_model=TextResult, responses=_FAILURES)
async def explain_code(
    request: CodeExplainRequest,
    current_user: User = Depends(get_current_user),
    service: StudyService = Depends(get_study_service),
):
    try:
        return TextResult(result=await service.explain_code(request))
    except GenerationError as e:
        logger.error(f"Code explanation failed for user {current_user.id}: {e}")
        return generation_failure(e, apology("explaining the code"))


@router.post("/study-planner", response_model=TextResult, responses=_FAILURES)
async def plan_study(
    request: StudyPlanRequest,
    current_user: User = Depends(get_current_user),
    service: StudyService = Depends(get_study_service),
):
    try:
        return TextResult(result=await service.study_plan(request))
    except GenerationError as e:
        logger.error(f"Study plan generation failed for user {current_user.id}: {e}")
        return generation_failure(e, apology("creating the study plan"))


@router.post("/flashcard-generator", response_model=TextResult, responses=_FAILURES)
async def generate_flashcards(
    request: FlashcardRequest,
    current_user: User = Depends(get_current_user),
    service: StudyService = Depends(get_study_service),
):
    try:
        return TextResult(result=await service.flashcards(request))
    except GenerationError as e:
        logger.error(f"Flashcard generation failed for user {current_user.id}: {e}")
        return generation_failure(e, apology("generating flashcards"))


@router.post("/ask", response_model=TextResult, responses=_FAILURES)
async def ask_question(
    request: AskRequest,
    current_user: User = Depends(get_current_user),
    service: StudyService = Depends(get_study_service),
):
    try:
        return TextResult(result=await service.ask(request.question))
    except GenerationError as e:
        logger.error(f"Error in /ask: {e}")
        return generation_failure(e, apology("processing your request"))


@router.post(
    "/chat",
    response_model=ChatResult,
    responses={
        503: {"model": ChatResult, "description": "AI service overloaded"},
        500: {"model": ChatResult, "description": "Generation failed"},
    },
)
async def chat(
    request: ChatRequest,
    current_user: User = Depends(get_current_user),
    service: StudyService = Depends(get_study_service),
):
    """Failures come back under ``message`` too, so the chat UI can show them inline."""
    try:
        return ChatResult(message=await service.chat(request.message))
    except GenerationError as e:
        logger.error(f"Error in /chat: {e}")
        return generation_failure(e, apology("processing your request"), key="message")
