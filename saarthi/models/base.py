"""
Base Model Module

This module provides a base class for all SQLAlchemy models with common fields:
- id: Primary key (UUID)
- created_at: Timestamp when record was created
- updated_at: Timestamp when record was last update

Column types are the dialect-neutral ones (``Uuid``) so the same models
run on PostgreSQL in deployment and on SQLite in tests.
"""

import uuid
from sqlalchemy import Column, DateTime, Uuid, func

from saarthi.db.database import Base


class BaseModel(Base):
    """
    Abstract base model class that provides common fields for all models.

    Attributes:
        id (UUID): Primary key, auto-generated UUID
        created_at (DateTime): Timestamp set automatically when record is created
        updated_at (DateTime): Timestamp updated automatically when record is modified
    """

    __abstract__ = True

    id = Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        nullable=False,
        index=True
    )

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    def __repr__(self):
        return f"<{self.__class__.__name__}(id={self.id})>"
