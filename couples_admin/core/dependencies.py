"""
Dependency injection setup for FastAPI.

Every service is built per request around the request's database session;
the only state shared between requests is the database itself.
"""

from fastapi import Depends
from sqlalchemy.orm import Session
import logging

from couples_admin.config import QuestionSettings, get_settings
from couples_admin.core.db import get_db
from couples_admin.services.category_service import CategoryService
from couples_admin.services.question_service import QuestionService
from couples_admin.services.translation_resolver import TranslationResolver
from couples_admin.services.translation_status import (
    TranslationStatusService,
    MissingTranslationsCounter,
    create_missing_translations_counter,
)
from couples_admin.services.question_mutation_service import QuestionMutationService
from couples_admin.services.question_listing_service import QuestionListingService


logger = logging.getLogger(__name__)


def get_question_settings() -> QuestionSettings:
    """Dependency provider for question settings."""
    return get_settings().questions


def get_question_service(db: Session = Depends(get_db)) -> QuestionService:
    return QuestionService(db)


def get_category_service(
    db: Session = Depends(get_db),
    settings: QuestionSettings = Depends(get_question_settings),
) -> CategoryService:
    return CategoryService(db, settings.category_delete_policy)


def get_translation_resolver(
    question_service: QuestionService = Depends(get_question_service),
) -> TranslationResolver:
    return TranslationResolver(question_service)


def get_translation_status_service(
    question_service: QuestionService = Depends(get_question_service),
    settings: QuestionSettings = Depends(get_question_settings),
) -> TranslationStatusService:
    return TranslationStatusService(question_service, settings)


def get_missing_translations_counter(
    question_service: QuestionService = Depends(get_question_service),
    status_service: TranslationStatusService = Depends(get_translation_status_service),
    settings: QuestionSettings = Depends(get_question_settings),
) -> MissingTranslationsCounter:
    """
    Dependency provider for the missing translations counter.
    The strategy is chosen by ``QUESTIONS_MISSING_COUNT_STRATEGY``.
    """
    return create_missing_translations_counter(question_service, settings, status_service)


def get_mutation_service(
    question_service: QuestionService = Depends(get_question_service),
    category_service: CategoryService = Depends(get_category_service),
    resolver: TranslationResolver = Depends(get_translation_resolver),
    settings: QuestionSettings = Depends(get_question_settings),
) -> QuestionMutationService:
    return QuestionMutationService(question_service, category_service, resolver, settings)


def get_listing_service(
    question_service: QuestionService = Depends(get_question_service),
    category_service: CategoryService = Depends(get_category_service),
    resolver: TranslationResolver = Depends(get_translation_resolver),
    status_service: TranslationStatusService = Depends(get_translation_status_service),
    missing_counter: MissingTranslationsCounter = Depends(get_missing_translations_counter),
    settings: QuestionSettings = Depends(get_question_settings),
) -> QuestionListingService:
    return QuestionListingService(
        question_service=question_service,
        category_service=category_service,
        resolver=resolver,
        status_service=status_service,
        missing_counter=missing_counter,
        settings=settings,
    )
