"""
Question API endpoints - listing, translation status and logical question mutations
"""
from typing import Optional, List
from fastapi import APIRouter, Depends, Query, status

from couples_admin.core.dependencies import (
    get_listing_service,
    get_mutation_service,
    get_question_service,
    get_translation_resolver,
    get_translation_status_service,
)
from couples_admin.schemas.base import Envelope
from couples_admin.schemas.question import (
    QuestionCreate,
    QuestionUpdate,
    QuestionRead,
    QuestionCreateResult,
    QuestionUpdateResult,
    QuestionStats,
    TranslationSetRead,
    WriteOutcomeRead,
)
from couples_admin.schemas.views import QuestionsListView, QuestionEditFormView, QuestionCreatedView
from couples_admin.services.question_listing_service import QuestionListingService
from couples_admin.services.question_mutation_service import (
    QuestionMutationService,
    LogicalQuestionResult,
    WriteOutcome,
)
from couples_admin.services.question_service import QuestionService
from couples_admin.services.translation_resolver import TranslationResolver, TranslationSet
from couples_admin.services.translation_status import TranslationStatusService

router = APIRouter(prefix="/admin/api/questions", tags=["questions"])


def _outcome_read(outcome: WriteOutcome) -> WriteOutcomeRead:
    return WriteOutcomeRead(
        language=outcome.language,
        question_id=str(outcome.question_id) if outcome.question_id else None,
        succeeded=outcome.succeeded,
        error=outcome.error,
    )


def _create_result_read(result: LogicalQuestionResult) -> QuestionCreateResult:
    return QuestionCreateResult(
        base_question_id=str(result.base_question_id),
        primary=_outcome_read(result.primary),
        translations={lang: _outcome_read(o) for lang, o in result.translations.items()},
        fully_synced=result.fully_synced,
    )


def _translation_set_read(translations: TranslationSet) -> TranslationSetRead:
    def _read(question):
        return QuestionRead.model_validate(question) if question is not None else None

    return TranslationSetRead(
        base_question_id=str(translations.base_question_id),
        english=_read(translations.english),
        french=_read(translations.french),
        japanese=_read(translations.japanese),
        completeness=translations.completeness,
    )


@router.get("/list", response_model=Envelope[QuestionsListView])
def list_questions(
    page: Optional[str] = Query(None),
    per_page: Optional[str] = Query(None),
    category_id: Optional[str] = Query(None),
    listing: QuestionListingService = Depends(get_listing_service),
):
    """
    List base-language questions with translation status

    - **page**: Page number (default 1)
    - **per_page**: 25, 50 or 100 (anything else uses the default)
    - **category_id**: Optional category filter
    """
    view = listing.list_questions_view(page, per_page, category_id)
    return Envelope(status="ok", data=view)


@router.get("/status", response_model=Envelope[dict[str, int]])
def get_translation_status(
    ids: List[str] = Query(default=[]),
    status_service: TranslationStatusService = Depends(get_translation_status_service),
):
    """
    Number of languages realized for the logical question of each id
    """
    return Envelope(status="ok", data=status_service.get_translation_status(ids))


@router.get("/stats", response_model=Envelope[QuestionStats])
def get_question_stats(listing: QuestionListingService = Depends(get_listing_service)):
    """Question totals and the missing translations count"""
    return Envelope(status="ok", data=listing.question_stats())


@router.get("/orphans", response_model=Envelope[list[QuestionRead]])
def list_orphaned_translations(listing: QuestionListingService = Depends(get_listing_service)):
    """Translations whose English base row no longer exists"""
    return Envelope(status="ok", data=listing.orphaned_translations())


@router.post("", response_model=Envelope[QuestionCreatedView], status_code=status.HTTP_201_CREATED)
def create_question(
    payload: QuestionCreate,
    page: Optional[str] = Query(None),
    per_page: Optional[str] = Query(None),
    mutations: QuestionMutationService = Depends(get_mutation_service),
    listing: QuestionListingService = Depends(get_listing_service),
):
    """
    Create a logical question

    - **question_text_en**: English text (required)
    - **question_text_fr** / **question_text_ja**: Optional translations;
      a failed translation write is reported in the result, not as an error
    """
    result = mutations.create_logical_question(
        payload.category_id,
        payload.question_text_en,
        payload.question_text_fr,
        payload.question_text_ja,
    )
    return Envelope(
        status="ok",
        data=QuestionCreatedView(
            result=_create_result_read(result),
            listing=listing.list_questions_view(page, per_page),
        )
    )


@router.get("/{question_id}", response_model=Envelope[QuestionRead])
def get_question(
    question_id: str,
    question_service: QuestionService = Depends(get_question_service),
):
    """Get a single question row"""
    question = question_service.get_question(question_id)
    return Envelope(status="ok", data=QuestionRead.model_validate(question))


@router.get("/{question_id}/translations", response_model=Envelope[TranslationSetRead])
def get_question_translations(
    question_id: str,
    resolver: TranslationResolver = Depends(get_translation_resolver),
):
    """All language versions of the logical question this row belongs to"""
    translations = resolver.get_translations_for_question(question_id)
    return Envelope(status="ok", data=_translation_set_read(translations))


@router.get("/{question_id}/form", response_model=Envelope[QuestionEditFormView])
def get_question_form(
    question_id: str,
    listing: QuestionListingService = Depends(get_listing_service),
):
    """Data for the question edit form"""
    return Envelope(status="ok", data=listing.question_form_view(question_id))


@router.put("/{question_id}", response_model=Envelope[QuestionUpdateResult])
def update_question(
    question_id: str,
    payload: QuestionUpdate,
    mutations: QuestionMutationService = Depends(get_mutation_service),
):
    """
    Update one language of a logical question

    - **lang_code** `fr`/`ja`: writes **question_text_translation** to that
      translation, creating it when missing
    - any other **lang_code**: writes **question_text** to the English row
    """
    result = mutations.update_logical_question(
        question_id,
        payload.category_id,
        payload.lang_code,
        payload.question_text,
        payload.question_text_translation,
    )
    return Envelope(
        status="ok",
        data=QuestionUpdateResult(
            question=QuestionRead.model_validate(result.question),
            created=result.created,
        )
    )


@router.delete("/{question_id}", response_model=Envelope[QuestionsListView])
def delete_question(
    question_id: str,
    page: Optional[str] = Query(None),
    per_page: Optional[str] = Query(None),
    category_id: Optional[str] = Query(None),
    mutations: QuestionMutationService = Depends(get_mutation_service),
    listing: QuestionListingService = Depends(get_listing_service),
):
    """Delete one question row and return the refreshed list"""
    mutations.delete_question(question_id)
    return Envelope(status="ok", data=listing.list_questions_view(page, per_page, category_id))
