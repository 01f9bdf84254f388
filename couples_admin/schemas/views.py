"""
View models handed to the presentation layer.

Plain scalars and lists only: identifiers are strings and no ORM objects
cross this boundary.
"""
from pydantic import BaseModel
from typing import Optional

from couples_admin.schemas.question import QuestionCreateResult


class AdminQuestionInfo(BaseModel):
    id: str
    text: str
    category_label: str
    language_code: str
    translation_count: int


class AdminCategoryOption(BaseModel):
    id: str
    label: str
    selected: bool = False
    question_count: int = 0


class PaginationInfo(BaseModel):
    total_count: int
    current_page: int
    total_pages: int
    items_per_page: int


class QuestionsListView(BaseModel):
    questions: list[AdminQuestionInfo]
    categories: list[AdminCategoryOption]
    selected_category_id: str = ""
    pagination: PaginationInfo
    missing_translations_count: int
    total_languages: int


class AdminCategoryInfo(BaseModel):
    id: str
    key: str
    label: str
    icon: Optional[str] = None
    question_count: int = 0


class CategoriesListView(BaseModel):
    categories: list[AdminCategoryInfo]
    pagination: PaginationInfo


class QuestionEditFormView(BaseModel):
    question_id: str
    base_question_id: str
    question_text: str
    translation_fr: str = ""
    translation_ja: str = ""
    categories: list[AdminCategoryOption]
    lang_en: bool = False
    lang_fr: bool = False
    lang_ja: bool = False
    selected_lang: str


class QuestionCreatedView(BaseModel):
    """Creation outcome together with the refreshed listing"""
    result: QuestionCreateResult
    listing: QuestionsListView
