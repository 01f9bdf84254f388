"""
Translation Completeness Aggregator

Reports how many of the supported languages each logical question is
realized in, and folds that into the corpus-wide missing translations
count shown at the top of the question management view.
"""
import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, Mapping, Sequence

from couples_admin.config import QuestionSettings, MissingCountStrategy
from couples_admin.core.validation import parse_uuid
from couples_admin.services.question_service import QuestionService

logger = logging.getLogger(__name__)


def missing_translations_count(counts: Iterable[int], total_languages: int) -> int:
    """Sum of max(0, total_languages - count) over every logical question."""
    return sum(max(0, total_languages - count) for count in counts)


def completeness_for(status: Mapping[str, int], question_id, default: int) -> int:
    """Completeness of one question, ``default`` when the status map has no entry."""
    return status.get(str(question_id), default)


class TranslationStatusService:
    """Computes per-question completeness counts"""

    def __init__(self, question_service: QuestionService, settings: QuestionSettings):
        self.question_service = question_service
        self.settings = settings

    def get_translation_status(self, question_ids: Sequence) -> Dict[str, int]:
        """
        Count the languages realized for the logical question of each id

        Args:
            question_ids: Question ids (UUID or text form), any language

        Returns:
            Mapping of question id (text form) to completeness. Ids that do
            not resolve to a row are left out; callers default them.
        """
        ids = [parse_uuid(qid, "question_id") for qid in question_ids]
        if not ids:
            return {}

        id_to_base = self.question_service.get_base_ids(ids)
        languages_by_base = self.question_service.get_languages_by_base(
            set(id_to_base.values()), self.settings.supported_languages
        )

        status: Dict[str, int] = {}
        for question_id, base_id in id_to_base.items():
            languages = languages_by_base.get(base_id)
            # The row itself exists, so it counts even if its base lookup came back empty
            status[str(question_id)] = len(languages) if languages else self.settings.default_completeness
        return status


class MissingTranslationsCounter(ABC):
    """Strategy computing the corpus-wide missing translations count"""

    def __init__(self, question_service: QuestionService, settings: QuestionSettings):
        self.question_service = question_service
        self.settings = settings

    @abstractmethod
    def count(self) -> int:
        pass


class ScanMissingTranslationsCounter(MissingTranslationsCounter):
    """Enumerates every base-language question and resolves its status."""

    def __init__(
        self,
        question_service: QuestionService,
        settings: QuestionSettings,
        status_service: TranslationStatusService,
    ):
        super().__init__(question_service, settings)
        self.status_service = status_service

    def count(self) -> int:
        base_questions = self.question_service.list_questions(language_code=self.settings.base_language)
        status = self.status_service.get_translation_status([q.id for q in base_questions])
        counts = [
            completeness_for(status, q.id, self.settings.default_completeness)
            for q in base_questions
        ]
        return missing_translations_count(counts, self.settings.total_languages)


class GroupedMissingTranslationsCounter(MissingTranslationsCounter):
    """Same value as the scan, computed with a single grouped query."""

    def count(self) -> int:
        counts = self.question_service.get_language_counts_for(
            self.settings.base_language, self.settings.supported_languages
        )
        counts = [count or self.settings.default_completeness for count in counts]
        return missing_translations_count(counts, self.settings.total_languages)


def create_missing_translations_counter(
    question_service: QuestionService,
    settings: QuestionSettings,
    status_service: TranslationStatusService = None,
) -> MissingTranslationsCounter:
    """Build the counter selected by ``settings.missing_count_strategy``."""
    if settings.missing_count_strategy == MissingCountStrategy.GROUPED:
        return GroupedMissingTranslationsCounter(question_service, settings)
    return ScanMissingTranslationsCounter(
        question_service,
        settings,
        status_service or TranslationStatusService(question_service, settings),
    )
