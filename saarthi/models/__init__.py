from saarthi.models.base import Base
from saarthi.models.user import User
from saarthi.models.profile import Profile
from saarthi.models.quiz_result import QuizResult

__all__ = [
    "Base",
    "User",
    "Profile",
    "QuizResult",
]
