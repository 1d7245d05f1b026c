from sqlalchemy import Column, String, Text, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from .base import BaseModel


class Profile(BaseModel):
    __tablename__ = "profiles"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False, index=True)
    gender = Column(String(20), default="", nullable=False)
    bio = Column(Text, default="", nullable=False)

    user = relationship("User", back_populates="profile")
