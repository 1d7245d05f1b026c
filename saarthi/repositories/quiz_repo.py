"""
Quiz Result Repository

Data access layer for QuizResult. Results are append-only:
this repository can insert and read, nothing else.
"""

from typing import List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from saarthi.repositories.base import BaseRepository
from saarthi.models.quiz_result import QuizResult


class QuizResultRepository(BaseRepository[QuizResult]):
    """Repository for QuizResult model."""

    def __init__(self, db: AsyncSession):
        super().__init__(QuizResult, db)

    async def get_recent_for_user(
        self,
        user_id: UUID,
        limit: int = 10
    ) -> List[QuizResult]:
        """Most recent results for a user, newest first; id breaks timestamp ties."""
        stmt = (
            select(self.model)
            .where(self.model.user_id == user_id)
            .order_by(self.model.completed_at.desc(), self.model.id.desc())
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
