from saarthi.repositories.base import BaseRepository
from saarthi.repositories.user_repo import UserRepository
from saarthi.repositories.quiz_repo import QuizResultRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "QuizResultRepository",
]
