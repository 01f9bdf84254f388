"""
Question Mutation Coordinator

Creates and updates a logical question together with its translations.
The English row is mandatory and written first; French and Japanese rows
are optional. Under the best-effort policy a failed translation write is
logged and reported in the result instead of failing the operation.
"""
import logging
import uuid
from dataclasses import dataclass, field
from typing import Optional, Dict, List, Tuple

from couples_admin.config import QuestionSettings, TranslationWritePolicy
from couples_admin.core.exceptions import (
    AdminPanelException,
    ConsistencyError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from couples_admin.core.validation import parse_uuid, require_text, optional_text
from couples_admin.models.question import Question
from couples_admin.services.category_service import CategoryService
from couples_admin.services.question_service import QuestionService
from couples_admin.services.translation_resolver import TranslationResolver

logger = logging.getLogger(__name__)


@dataclass
class WriteOutcome:
    """Result of writing one language row"""
    language: str
    question_id: Optional[uuid.UUID] = None
    succeeded: bool = True
    error: Optional[str] = None


@dataclass
class LogicalQuestionResult:
    """
    Result of creating a logical question.

    ``primary`` is the English write, which always succeeded if a result
    exists at all. ``translations`` holds one outcome per requested
    translation language.
    """
    base_question_id: uuid.UUID
    primary: WriteOutcome
    translations: Dict[str, WriteOutcome] = field(default_factory=dict)

    @property
    def fully_synced(self) -> bool:
        return all(outcome.succeeded for outcome in self.translations.values())

    @property
    def failed_languages(self) -> List[str]:
        return [lang for lang, outcome in self.translations.items() if not outcome.succeeded]


@dataclass
class UpdateResult:
    question: Question
    created: bool = False


class QuestionMutationService:
    """Orchestrates multi-row writes for logical questions"""

    def __init__(
        self,
        question_service: QuestionService,
        category_service: CategoryService,
        resolver: TranslationResolver,
        settings: QuestionSettings,
    ):
        self.question_service = question_service
        self.category_service = category_service
        self.resolver = resolver
        self.settings = settings

    def create_logical_question(
        self,
        category_id,
        text_en: str,
        text_fr: Optional[str] = None,
        text_ja: Optional[str] = None,
    ) -> LogicalQuestionResult:
        """
        Create the English base row and any supplied translations

        Args:
            category_id: Category of every row
            text_en: English text (required)
            text_fr: Optional French text, skipped when empty
            text_ja: Optional Japanese text, skipped when empty

        Returns:
            LogicalQuestionResult with per-language outcomes

        Raises:
            ValidationError: Empty English text or unknown category
            StoreError: English write failed, or any write failed under the atomic policy
        """
        text_en = require_text(text_en, "English question text")
        category_uuid = self._require_category(category_id)
        atomic = self.settings.translation_write_policy == TranslationWritePolicy.ATOMIC

        # One id serves as the English row id and the base of the whole logical question
        base_id = uuid.uuid4()
        base_language = self.settings.base_language
        self.question_service.create_question(
            Question(
                id=base_id,
                category_id=category_uuid,
                language_code=base_language,
                text=text_en,
                base_question_id=base_id,
            ),
            commit=not atomic,
        )
        result = LogicalQuestionResult(
            base_question_id=base_id,
            primary=WriteOutcome(language=base_language, question_id=base_id),
        )

        for language, text in self._requested_translations(text_fr, text_ja):
            result.translations[language] = self._create_translation(
                base_id, category_uuid, language, text, atomic
            )

        if atomic:
            self.question_service.commit()

        logger.info(
            f"Created logical question {base_id}",
            extra={
                "base_question_id": str(base_id),
                "translations": sorted(result.translations),
                "failed_languages": result.failed_languages,
            }
        )
        return result

    def update_logical_question(
        self,
        question_id,
        category_id,
        lang_code: str,
        text: Optional[str],
        translation_text: Optional[str] = None,
    ) -> UpdateResult:
        """
        Update (or create) the row of one language of a logical question

        ``fr`` and ``ja`` target the matching translation and read
        ``translation_text``. Any other code targets the English row and
        reads ``text``.

        Raises:
            NotFoundError: ``question_id`` does not exist
            ValidationError: Empty text or unknown category
            ConsistencyError: The English row of the logical question is missing
        """
        current = self.question_service.get_question(question_id)
        base_id = current.base_question_id
        translations = self.resolver.get_translations(base_id)
        category_uuid = self._require_category(category_id)

        language = (lang_code or "").strip().lower()
        if language in self.settings.translation_languages:
            target = translations.get(language)
            new_text = require_text(translation_text, "Translation text")
        else:
            language = self.settings.base_language
            target = translations.get(language)
            new_text = require_text(text, "Question text")

        if target is not None:
            updated = self.question_service.update_question(target.id, category_uuid, language, new_text)
            return UpdateResult(question=updated, created=False)

        if language not in self.settings.translation_languages:
            raise ConsistencyError(
                "English question not found",
                details={"base_question_id": str(base_id), "question_id": str(current.id)}
            )

        created = self.question_service.create_question(
            Question(
                id=uuid.uuid4(),
                category_id=category_uuid,
                language_code=language,
                text=new_text,
                base_question_id=base_id,
            )
        )
        logger.info(
            f"Added '{language}' translation to logical question {base_id}",
            extra={"base_question_id": str(base_id), "question_id": str(created.id)}
        )
        return UpdateResult(question=created, created=True)

    def delete_question(self, question_id) -> None:
        """Delete one row; translations of a deleted base row stay in place."""
        question = self.question_service.get_question(question_id)
        if question.is_base:
            orphans = len(self.question_service.get_questions_by_base_id(question.base_question_id)) - 1
            if orphans:
                logger.warning(
                    f"Deleting base question {question.id} leaves {orphans} orphaned translation(s)",
                    extra={"question_id": str(question.id), "orphaned_translations": orphans}
                )
        self.question_service.delete_question(question.id)

    def _requested_translations(self, text_fr: Optional[str], text_ja: Optional[str]) -> List[Tuple[str, str]]:
        requested = []
        for language, text in (("fr", text_fr), ("ja", text_ja)):
            value = optional_text(text)
            if value is not None:
                requested.append((language, value))
        return requested

    def _create_translation(
        self,
        base_id: uuid.UUID,
        category_id: uuid.UUID,
        language: str,
        text: str,
        atomic: bool,
    ) -> WriteOutcome:
        translation_id = uuid.uuid4()
        try:
            self.question_service.create_question(
                Question(
                    id=translation_id,
                    category_id=category_id,
                    language_code=language,
                    text=text,
                    base_question_id=base_id,
                ),
                commit=not atomic,
            )
        except AdminPanelException as e:
            if atomic:
                self.question_service.rollback()
                if isinstance(e, StoreError):
                    raise
                raise StoreError("create_logical_question", {
                    "base_question_id": str(base_id),
                    "language": language,
                    "reason": e.message,
                }) from e
            logger.warning(
                f"Failed to create '{language}' translation for question {base_id}: {e.message}",
                extra={"base_question_id": str(base_id), "language": language, "error_code": e.error_code.value}
            )
            return WriteOutcome(language=language, succeeded=False, error=e.message)
        return WriteOutcome(language=language, question_id=translation_id)

    def _require_category(self, category_id) -> uuid.UUID:
        category_uuid = parse_uuid(category_id, "category_id")
        try:
            self.category_service.get_category(category_uuid)
        except NotFoundError:
            raise ValidationError("Invalid category ID", details={"category_id": str(category_uuid)})
        return category_uuid
