"""AI Prompts Module"""

from saarthi.ai.prompts.chat_prompts import (
    build_chat_prompt,
    build_question_prompt,
    build_image_problem_prompt,
)
from saarthi.ai.prompts.study_prompts import (
    build_syllabus_prompt,
    build_essay_prompt,
    build_code_explanation_prompt,
    build_study_plan_prompt,
    build_flashcards_prompt,
)
from saarthi.ai.prompts.quiz_prompts import build_quiz_generation_prompt

__all__ = [
    "build_chat_prompt",
    "build_question_prompt",
    "build_image_problem_prompt",
    "build_syllabus_prompt",
    "build_essay_prompt",
    "build_code_explanation_prompt",
    "build_study_plan_prompt",
    "build_flashcards_prompt",
    "build_quiz_generation_prompt",
]
