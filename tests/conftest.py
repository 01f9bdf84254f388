"""
Shared fixtures: in-memory SQLite database and service wiring.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from couples_admin.config import QuestionSettings
from couples_admin.core.db import Base
from couples_admin.models import Category, Question  # noqa: F401
from couples_admin.services.category_service import CategoryService
from couples_admin.services.question_service import QuestionService
from couples_admin.services.translation_resolver import TranslationResolver
from couples_admin.services.translation_status import (
    TranslationStatusService,
    create_missing_translations_counter,
)
from couples_admin.services.question_mutation_service import QuestionMutationService
from couples_admin.services.question_listing_service import QuestionListingService


@pytest.fixture(scope="function")
def session_factory():
    # In-memory SQLite shared across sessions of one test
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    engine.dispose()


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def question_settings():
    return QuestionSettings()


@pytest.fixture
def question_service(db_session):
    return QuestionService(db_session)


@pytest.fixture
def category_service(db_session, question_settings):
    return CategoryService(db_session, question_settings.category_delete_policy)


@pytest.fixture
def resolver(question_service):
    return TranslationResolver(question_service)


@pytest.fixture
def status_service(question_service, question_settings):
    return TranslationStatusService(question_service, question_settings)


@pytest.fixture
def mutations(question_service, category_service, resolver, question_settings):
    return QuestionMutationService(question_service, category_service, resolver, question_settings)


@pytest.fixture
def listing(question_service, category_service, resolver, status_service, question_settings):
    return QuestionListingService(
        question_service=question_service,
        category_service=category_service,
        resolver=resolver,
        status_service=status_service,
        missing_counter=create_missing_translations_counter(question_service, question_settings, status_service),
        settings=question_settings,
    )


@pytest.fixture
def category(category_service):
    return category_service.create_category("romance", "Romance", "heart")


@pytest.fixture
def other_category(category_service):
    return category_service.create_category("travel", "Travel", "plane")


@pytest.fixture
def client(session_factory):
    from fastapi.testclient import TestClient
    from couples_admin.core.db import get_db
    from couples_admin.main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
