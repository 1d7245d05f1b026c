from fastapi import APIRouter
from saarthi.api.v1.endpoints import auth, study, problems, quizzes

# ============================================================
# Main API v1 Router
# ============================================================

api_router = APIRouter()

# Include auth routes at /auth
api_router.include_router(
    auth.router,
    prefix="/auth"
)

# Text tools: /syllabus, /essay-writer, /code-explainer, /study-planner,
# /flashcard-generator, /ask, /chat
api_router.include_router(
    study.router,
    prefix=""
)

# Image problems: /form
api_router.include_router(
    problems.router,
    prefix=""
)

# Quizzes: /quiz-generator, /submit-quiz, /quiz-history
api_router.include_router(
    quizzes.router,
    prefix=""
)
