from datetime import datetime, timezone
import uuid

from sqlalchemy import Column, String, Integer, ForeignKey, DateTime, JSON, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from saarthi.db.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class QuizResult(Base):
    """
    One completed quiz submission.

    Written once when the submission is accepted and never modified:
    score and correct_answers are derived from user_answers at write time.
    """
    __tablename__ = "quiz_results"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # What was asked
    topic = Column(String(200), nullable=False)
    difficulty = Column(String(20), nullable=False)
    question_type = Column(String(20), nullable=False)

    # Results
    total_questions = Column(Integer, nullable=False)
    correct_answers = Column(Integer, nullable=False)
    score = Column(Integer, nullable=False)  # 0-100
    # [{"question_number": 1, "user_answer": "B", "correct_answer": "B", "is_correct": true}, ...]
    user_answers = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False)

    # Timing
    time_taken = Column(Integer, default=0, nullable=False)  # seconds
    completed_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False, index=True)

    user = relationship("User", back_populates="quiz_results")
