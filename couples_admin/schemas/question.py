"""
Question schemas for API requests/responses
"""
import uuid
from pydantic import BaseModel, Field, field_serializer
from datetime import datetime
from typing import Optional


class QuestionCreate(BaseModel):
    """Schema for creating a logical question with optional translations"""
    category_id: str
    question_text_en: str = ""
    question_text_fr: Optional[str] = None
    question_text_ja: Optional[str] = None


class QuestionUpdate(BaseModel):
    """
    Schema for updating one language of a logical question.

    ``question_text`` feeds the English row, ``question_text_translation``
    feeds the French/Japanese row selected by ``lang_code``.
    """
    category_id: str
    lang_code: str = "en"
    question_text: str = ""
    question_text_translation: Optional[str] = None


class QuestionRead(BaseModel):
    """Schema for a single question row"""
    id: uuid.UUID
    category_id: uuid.UUID
    language_code: str
    text: str
    base_question_id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    @field_serializer("id", "category_id", "base_question_id")
    def serialize_ids(self, value: uuid.UUID) -> str:
        return str(value)

    class Config:
        from_attributes = True


class TranslationSetRead(BaseModel):
    """All language versions of a logical question"""
    base_question_id: str
    english: Optional[QuestionRead] = None
    french: Optional[QuestionRead] = None
    japanese: Optional[QuestionRead] = None
    completeness: int = Field(..., description="Number of languages present")


class WriteOutcomeRead(BaseModel):
    language: str
    question_id: Optional[str] = None
    succeeded: bool
    error: Optional[str] = None


class QuestionCreateResult(BaseModel):
    """Outcome of creating a logical question and its translations"""
    base_question_id: str
    primary: WriteOutcomeRead
    translations: dict[str, WriteOutcomeRead] = {}
    fully_synced: bool


class QuestionUpdateResult(BaseModel):
    question: QuestionRead
    created: bool = Field(..., description="True when a missing translation row was created")


class QuestionStats(BaseModel):
    total_questions: int
    total_categories: int
    missing_translations_count: int
    rows_per_language: dict[str, int] = {}
