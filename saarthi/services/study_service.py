"""
Study Service

The one-shot text features: syllabus, essay, code explanation, study
plan, flashcards, open questions and chat. Each builds its prompt,
sends it through the resilient generation client and returns the
model's text unchanged.
"""

import logging

from saarthi.ai.llm import ResilientGenerationClient
from saarthi.ai.prompts import (
    build_chat_prompt,
    build_question_prompt,
    build_syllabus_prompt,
    build_essay_prompt,
    build_code_explanation_prompt,
    build_study_plan_prompt,
    build_flashcards_prompt,
)
from saarthi.schemas.study import (
    SyllabusRequest,
    EssayRequest,
    CodeExplainRequest,
    StudyPlanRequest,
    FlashcardRequest,
)

logger = logging.getLogger(__name__)


class StudyService:
    """
    Raises ``GenerationError`` from every method when Gemini fails;
    check ``.overloaded`` to tell "busy" apart from "broken".
    """

    def __init__(self, generator: ResilientGenerationClient):
        self.generator = generator

    async def syllabus(self, request: SyllabusRequest) -> str:
        logger.info(f"Generating syllabus: std={request.std}, subject={request.subject}")
        return await self.generator.generate(
            build_syllabus_prompt(request.std, request.subject)
        )

    async def essay(self, request: EssayRequest) -> str:
        logger.info(f"Generating {request.essay_type} essay (~{request.length} words)")
        return await self.generator.generate(
            build_essay_prompt(request.topic, request.essay_type, request.length)
        )

    async def explain_code(self, request: CodeExplainRequest) -> str:
        return await self.generator.generate(
            build_code_explanation_prompt(request.code, request.language)
        )

    async def study_plan(self, request: StudyPlanRequest) -> str:
        return await self.generator.generate(
            build_study_plan_prompt(
                request.subjects, request.hours, request.days, request.goals
            )
        )

    async def flashcards(self, request: FlashcardRequest) -> str:
        logger.info(f"Generating {request.count} flashcards on {request.topic!r}")
        return await self.generator.generate(
            build_flashcards_prompt(request.topic, request.subject, request.count)
        )

    async def ask(self, question: str) -> str:
        return await self.generator.generate(build_question_prompt(question))

    async def chat(self, message: str) -> str:
        return await self.generator.generate(build_chat_prompt(message))
