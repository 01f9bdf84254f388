"""
Question Listing Service - builds the view models of the question and
category management screens
"""
import logging
from typing import Optional, Dict, List

from couples_admin.config import QuestionSettings
from couples_admin.core.constants import UNKNOWN_CATEGORY_LABEL
from couples_admin.core.exceptions import InvalidIdentifierError
from couples_admin.core.pagination import PageRequest, parse_pagination, total_pages
from couples_admin.core.validation import parse_optional_uuid
from couples_admin.models.category import Category
from couples_admin.schemas.question import QuestionRead, QuestionStats
from couples_admin.schemas.views import (
    AdminQuestionInfo,
    AdminCategoryOption,
    AdminCategoryInfo,
    PaginationInfo,
    QuestionsListView,
    CategoriesListView,
    QuestionEditFormView,
)
from couples_admin.services.category_service import CategoryService
from couples_admin.services.question_service import QuestionService
from couples_admin.services.translation_resolver import TranslationResolver
from couples_admin.services.translation_status import (
    TranslationStatusService,
    MissingTranslationsCounter,
    completeness_for,
)

logger = logging.getLogger(__name__)


class QuestionListingService:
    """
    Read side of the admin panel.

    Composes the question store, the category store and the translation
    aggregator into the plain view models consumed by the presentation layer.
    The question list always shows the base-language row of each logical
    question, never a mix of languages.
    """

    def __init__(
        self,
        question_service: QuestionService,
        category_service: CategoryService,
        resolver: TranslationResolver,
        status_service: TranslationStatusService,
        missing_counter: MissingTranslationsCounter,
        settings: QuestionSettings,
    ):
        self.question_service = question_service
        self.category_service = category_service
        self.resolver = resolver
        self.status_service = status_service
        self.missing_counter = missing_counter
        self.settings = settings

    def page_request(self, page=None, per_page=None) -> PageRequest:
        return parse_pagination(page, per_page, self.settings.allowed_page_sizes, self.settings.default_page_size)

    def list_questions_view(self, page=None, per_page=None, category_id: Optional[str] = None) -> QuestionsListView:
        """
        Build the paginated question list

        Args:
            page: Requested page (defaults to 1)
            per_page: Requested page size (outside the allow-list falls back to default)
            category_id: Optional category filter; malformed ids are ignored

        Returns:
            QuestionsListView
        """
        request = self.page_request(page, per_page)
        category_filter = self._parse_category_filter(category_id)
        base_language = self.settings.base_language

        questions = self.question_service.list_questions(
            limit=request.per_page,
            offset=request.offset,
            category_id=category_filter,
            language_code=base_language,
        )

        counts = self.question_service.get_question_counts_by_category(base_language)
        if category_filter is None:
            total = sum(counts.values())
        else:
            total = counts.get(str(category_filter), 0)

        categories = self.category_service.list_categories()
        labels = {str(c.id): c.label for c in categories}

        status = self.status_service.get_translation_status([q.id for q in questions])
        question_infos = [
            AdminQuestionInfo(
                id=str(q.id),
                text=q.text,
                category_label=labels.get(str(q.category_id), UNKNOWN_CATEGORY_LABEL),
                language_code=q.language_code,
                translation_count=completeness_for(status, q.id, self.settings.default_completeness),
            )
            for q in questions
        ]

        selected = str(category_filter) if category_filter else ""
        return QuestionsListView(
            questions=question_infos,
            categories=self._category_options(categories, counts, selected),
            selected_category_id=selected,
            pagination=PaginationInfo(
                total_count=total,
                current_page=request.page,
                total_pages=total_pages(total, request.per_page),
                items_per_page=request.per_page,
            ),
            missing_translations_count=self.missing_counter.count(),
            total_languages=self.settings.total_languages,
        )

    def list_categories_view(self, page=None, per_page=None) -> CategoriesListView:
        """Paginated categories, each with its base-language question count."""
        request = self.page_request(page, per_page)
        categories = self.category_service.list_categories(limit=request.per_page, offset=request.offset)
        total = self.category_service.get_category_count()
        counts = self.question_service.get_question_counts_by_category(self.settings.base_language)

        return CategoriesListView(
            categories=[
                AdminCategoryInfo(
                    id=str(c.id),
                    key=c.key,
                    label=c.label,
                    icon=c.icon,
                    question_count=counts.get(str(c.id), 0),
                )
                for c in categories
            ],
            pagination=PaginationInfo(
                total_count=total,
                current_page=request.page,
                total_pages=total_pages(total, request.per_page),
                items_per_page=request.per_page,
            ),
        )

    def question_form_view(self, question_id) -> QuestionEditFormView:
        """
        Build the edit form of one question row

        The main text field shows the English text whenever the English row
        exists, so translators always see the reference wording.

        Raises:
            NotFoundError: If the question does not exist
        """
        question = self.question_service.get_question(question_id)
        translations = self.resolver.get_translations(question.base_question_id)

        question_text = question.text
        if translations.english is not None and question.language_code != self.settings.base_language:
            question_text = translations.english.text

        categories = self.category_service.list_categories()
        return QuestionEditFormView(
            question_id=str(question.id),
            base_question_id=str(question.base_question_id),
            question_text=question_text,
            translation_fr=translations.french.text if translations.french else "",
            translation_ja=translations.japanese.text if translations.japanese else "",
            categories=self._category_options(categories, {}, str(question.category_id)),
            lang_en=question.language_code == "en",
            lang_fr=question.language_code == "fr",
            lang_ja=question.language_code == "ja",
            selected_lang=question.language_code,
        )

    def question_stats(self) -> QuestionStats:
        rows_per_language = self.question_service.count_rows_by_language()
        return QuestionStats(
            total_questions=rows_per_language.get(self.settings.base_language, 0),
            total_categories=self.category_service.get_category_count(),
            missing_translations_count=self.missing_counter.count(),
            rows_per_language=rows_per_language,
        )

    def orphaned_translations(self) -> List[QuestionRead]:
        orphans = self.question_service.list_orphaned_translations(self.settings.base_language)
        return [QuestionRead.model_validate(q) for q in orphans]

    def _category_options(
        self,
        categories: List[Category],
        counts: Dict[str, int],
        selected_id: str,
    ) -> List[AdminCategoryOption]:
        return [
            AdminCategoryOption(
                id=str(c.id),
                label=c.label,
                selected=bool(selected_id) and str(c.id) == selected_id,
                question_count=counts.get(str(c.id), 0),
            )
            for c in categories
        ]

    def _parse_category_filter(self, category_id: Optional[str]):
        try:
            return parse_optional_uuid(category_id, "category_id")
        except InvalidIdentifierError:
            logger.warning(f"Ignoring malformed category filter '{category_id}'")
            return None

