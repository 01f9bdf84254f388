"""
Translation Resolver - groups the rows of a logical question by language
"""
import logging
import uuid
from dataclasses import dataclass
from typing import Optional, List

from couples_admin.core.constants import LANGUAGE_SLOTS
from couples_admin.core.validation import parse_uuid
from couples_admin.models.question import Question
from couples_admin.services.question_service import QuestionService

logger = logging.getLogger(__name__)


@dataclass
class TranslationSet:
    """
    The English, French and Japanese rows of one logical question.

    Computed on demand from the store and never cached. Any slot may be
    empty; an empty English slot means the stored data is inconsistent.
    """
    base_question_id: uuid.UUID
    english: Optional[Question] = None
    french: Optional[Question] = None
    japanese: Optional[Question] = None

    def get(self, language_code: str) -> Optional[Question]:
        slot = LANGUAGE_SLOTS.get(language_code)
        return getattr(self, slot) if slot else None

    def present_languages(self) -> List[str]:
        return [code for code, slot in LANGUAGE_SLOTS.items() if getattr(self, slot) is not None]

    def missing_languages(self) -> List[str]:
        return [code for code, slot in LANGUAGE_SLOTS.items() if getattr(self, slot) is None]

    @property
    def completeness(self) -> int:
        return len(self.present_languages())

    @property
    def is_complete(self) -> bool:
        return not self.missing_languages()


class TranslationResolver:
    """Resolves the full translation set for a base question id"""

    def __init__(self, question_service: QuestionService):
        self.question_service = question_service

    def get_translations(self, base_question_id) -> TranslationSet:
        """
        Fetch every row sharing ``base_question_id`` and bucket it by language

        Args:
            base_question_id: Base question id (UUID or text form)

        Returns:
            TranslationSet; languages without a row are left as None
        """
        base_id = parse_uuid(base_question_id, "base_question_id")
        translations = TranslationSet(base_question_id=base_id)

        for question in self.question_service.get_questions_by_base_id(base_id):
            slot = LANGUAGE_SLOTS.get(question.language_code)
            if slot is None:
                logger.warning(
                    f"Ignoring question {question.id} with unsupported language '{question.language_code}'",
                    extra={"question_id": str(question.id), "base_question_id": str(base_id)}
                )
                continue
            setattr(translations, slot, question)

        return translations

    def get_translations_for_question(self, question_id) -> TranslationSet:
        """Resolve the translation set of the logical question a row belongs to."""
        question = self.question_service.get_question(question_id)
        return self.get_translations(question.base_question_id)

