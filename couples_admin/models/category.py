"""
Category model for grouping questions
"""
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Uuid

from couples_admin.core.db import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Category(Base):
    """
    Category of questions shown to players and filtered on in the admin list.
    ``key`` is a stable machine name; ``label`` and ``icon`` are display only.
    """
    __tablename__ = "categories"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    key = Column(String(50), unique=True, nullable=False, index=True)
    label = Column(String(255), nullable=False)
    icon = Column(String(50), nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Category id={self.id} key={self.key}>"
