"""
Question model: one row per language of a logical question
"""
import uuid

from sqlalchemy import Column, String, Text, DateTime, Uuid, UniqueConstraint, Index

from couples_admin.core.db import Base
from couples_admin.models.category import _utcnow


class Question(Base):
    """
    A question in one language.

    All rows sharing ``base_question_id`` form a logical question. The English
    row is the base: its ``base_question_id`` equals its own ``id``.
    Translations point at the English row and never at themselves.
    ``category_id`` is validated by the services rather than by a foreign key,
    so category deletion policy stays a service decision.
    """
    __tablename__ = "questions"
    __table_args__ = (
        UniqueConstraint("base_question_id", "language_code", name="uq_questions_base_language"),
        Index("ix_questions_category_language", "category_id", "language_code"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    category_id = Column(Uuid, nullable=False, index=True)
    language_code = Column(String(10), nullable=False, default="en", index=True)
    text = Column(Text, nullable=False)
    base_question_id = Column(Uuid, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    @property
    def is_base(self) -> bool:
        return self.id == self.base_question_id

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Question id={self.id} lang={self.language_code} base={self.base_question_id}>"
