"""
Unit tests for translation completeness counts and the missing translations count
"""
import uuid
import pytest

from couples_admin.config import QuestionSettings, MissingCountStrategy
from couples_admin.models.question import Question
from couples_admin.services.translation_status import (
    GroupedMissingTranslationsCounter,
    ScanMissingTranslationsCounter,
    completeness_for,
    create_missing_translations_counter,
    missing_translations_count,
)


def _seed_corpus(mutations, category):
    """Three logical questions with 3, 2 and 1 languages."""
    full = mutations.create_logical_question(str(category.id), "Full", "Complet", "完全")
    partial = mutations.create_logical_question(str(category.id), "Partial", "Partiel")
    alone = mutations.create_logical_question(str(category.id), "Alone")
    return full, partial, alone


def test_missing_count_formula():
    assert missing_translations_count([3, 2, 1], 3) == 3
    assert missing_translations_count([], 3) == 0
    assert missing_translations_count([3, 3], 3) == 0


def test_missing_count_never_negative():
    assert missing_translations_count([4, 1], 3) == 2


def test_default_completeness_for_absent_entry():
    question_id = uuid.uuid4()
    assert completeness_for({}, question_id, 1) == 1
    assert completeness_for({str(question_id): 3}, question_id, 1) == 3


def test_status_per_question(mutations, status_service, category):
    full, partial, alone = _seed_corpus(mutations, category)

    status = status_service.get_translation_status(
        [full.base_question_id, partial.base_question_id, alone.base_question_id]
    )

    assert status == {
        str(full.base_question_id): 3,
        str(partial.base_question_id): 2,
        str(alone.base_question_id): 1,
    }


def test_status_of_translation_row_reports_its_logical_question(mutations, status_service, category):
    partial = mutations.create_logical_question(str(category.id), "Partial", "Partiel")
    french_id = partial.translations["fr"].question_id

    status = status_service.get_translation_status([str(french_id)])

    assert status == {str(french_id): 2}


def test_status_empty_and_unknown_ids(status_service):
    assert status_service.get_translation_status([]) == {}
    assert status_service.get_translation_status([str(uuid.uuid4())]) == {}


def test_scan_counter_sums_missing_languages(mutations, question_service, status_service, question_settings, category):
    _seed_corpus(mutations, category)

    counter = ScanMissingTranslationsCounter(question_service, question_settings, status_service)

    assert counter.count() == 3


def test_grouped_counter_matches_scan(mutations, question_service, status_service, question_settings, category):
    _seed_corpus(mutations, category)
    # English row whose base has nothing else realized still counts as one language
    stray_base = uuid.uuid4()
    question_service.create_question(
        Question(
            id=uuid.uuid4(),
            category_id=category.id,
            language_code="en",
            text="Stray",
            base_question_id=stray_base,
        )
    )
    question_service.create_question(
        Question(
            id=uuid.uuid4(),
            category_id=category.id,
            language_code="fr",
            text="Orpheline",
            base_question_id=uuid.uuid4(),
        )
    )

    scan = ScanMissingTranslationsCounter(question_service, question_settings, status_service)
    grouped = GroupedMissingTranslationsCounter(question_service, question_settings)

    assert scan.count() == grouped.count() == 5


def test_counter_on_empty_corpus(question_service, status_service, question_settings):
    assert ScanMissingTranslationsCounter(question_service, question_settings, status_service).count() == 0
    assert GroupedMissingTranslationsCounter(question_service, question_settings).count() == 0


@pytest.mark.parametrize("strategy, expected", [
    (MissingCountStrategy.SCAN, ScanMissingTranslationsCounter),
    (MissingCountStrategy.GROUPED, GroupedMissingTranslationsCounter),
])
def test_counter_factory_follows_settings(question_service, strategy, expected):
    settings = QuestionSettings(missing_count_strategy=strategy)

    counter = create_missing_translations_counter(question_service, settings)

    assert isinstance(counter, expected)
