"""
Unit tests for creating and updating logical questions
"""
import uuid
import pytest

from couples_admin.config import QuestionSettings, TranslationWritePolicy
from couples_admin.core.exceptions import (
    ConsistencyError,
    InvalidIdentifierError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from couples_admin.models.question import Question
from couples_admin.services.question_mutation_service import QuestionMutationService
from couples_admin.services.question_service import QuestionService
from couples_admin.services.translation_resolver import TranslationResolver
from couples_admin.services.translation_status import ScanMissingTranslationsCounter


class FlakyQuestionService(QuestionService):
    """Question store whose inserts fail for selected languages"""

    def __init__(self, db, failing_languages):
        super().__init__(db)
        self.failing_languages = set(failing_languages)

    def create_question(self, question, commit=True):
        if question.language_code in self.failing_languages:
            raise StoreError("create_question", {"language_code": question.language_code})
        return super().create_question(question, commit=commit)


def _flaky_mutations(db_session, category_service, failing, policy=TranslationWritePolicy.BEST_EFFORT):
    store = FlakyQuestionService(db_session, failing)
    settings = QuestionSettings(translation_write_policy=policy)
    return QuestionMutationService(store, category_service, TranslationResolver(store), settings), store


def test_base_row_references_itself(mutations, question_service, category):
    result = mutations.create_logical_question(str(category.id), "Where did we first meet?")

    english = question_service.get_question(result.base_question_id)
    assert english.language_code == "en"
    assert english.base_question_id == english.id
    assert result.primary.question_id == english.id
    assert result.translations == {}
    assert result.fully_synced


def test_translations_point_at_base(mutations, resolver, category):
    result = mutations.create_logical_question(str(category.id), "Q1", "Q1-fr", "Q1-ja")

    translations = resolver.get_translations(result.base_question_id)
    assert translations.french.base_question_id == result.base_question_id
    assert translations.japanese.base_question_id == result.base_question_id
    assert translations.french.id != result.base_question_id
    assert translations.japanese.id != result.base_question_id
    assert translations.is_complete


def test_empty_translation_is_skipped(mutations, resolver, status_service, category):
    result = mutations.create_logical_question(str(category.id), "Q1", "", "Q1-ja")

    assert set(result.translations) == {"ja"}
    translations = resolver.get_translations(result.base_question_id)
    assert translations.english is not None
    assert translations.french is None
    assert translations.japanese is not None

    status = status_service.get_translation_status([str(result.base_question_id)])
    assert status[str(result.base_question_id)] == 2


def test_empty_english_text_rejected(mutations, question_service, category):
    with pytest.raises(ValidationError):
        mutations.create_logical_question(str(category.id), "   ", "fr", "ja")

    assert question_service.list_questions() == []


def test_unknown_category_rejected(mutations, question_service):
    with pytest.raises(ValidationError):
        mutations.create_logical_question(str(uuid.uuid4()), "Q1")

    with pytest.raises(InvalidIdentifierError):
        mutations.create_logical_question("not-a-uuid", "Q1")

    assert question_service.list_questions() == []


def test_failed_translation_does_not_fail_creation(db_session, category_service, category):
    mutations, store = _flaky_mutations(db_session, category_service, {"fr"})

    result = mutations.create_logical_question(str(category.id), "Q1", "Q1-fr", "Q1-ja")

    assert not result.fully_synced
    assert result.failed_languages == ["fr"]
    assert result.translations["fr"].succeeded is False
    assert result.translations["fr"].error
    assert result.translations["ja"].succeeded is True

    languages = {q.language_code for q in store.get_questions_by_base_id(result.base_question_id)}
    assert languages == {"en", "ja"}


def test_failed_english_write_aborts(db_session, category_service, category):
    mutations, store = _flaky_mutations(db_session, category_service, {"en"})

    with pytest.raises(StoreError):
        mutations.create_logical_question(str(category.id), "Q1", "Q1-fr", "Q1-ja")

    assert store.list_questions() == []


def test_atomic_policy_rolls_back_everything(db_session, category_service, category):
    mutations, store = _flaky_mutations(
        db_session, category_service, {"ja"}, policy=TranslationWritePolicy.ATOMIC
    )

    with pytest.raises(StoreError):
        mutations.create_logical_question(str(category.id), "Q1", "Q1-fr", "Q1-ja")

    assert store.list_questions() == []


def test_atomic_policy_commits_all_rows(db_session, category_service, category):
    mutations, store = _flaky_mutations(db_session, category_service, set(), policy=TranslationWritePolicy.ATOMIC)

    result = mutations.create_logical_question(str(category.id), "Q1", "Q1-fr", "Q1-ja")

    assert result.fully_synced
    assert len(store.get_questions_by_base_id(result.base_question_id)) == 3


def test_update_fr_creates_missing_translation(mutations, resolver, category):
    created = mutations.create_logical_question(str(category.id), "Q1")

    result = mutations.update_logical_question(
        str(created.base_question_id), str(category.id), "fr", "ignored", "Q1-fr"
    )

    assert result.created is True
    assert result.question.language_code == "fr"
    assert result.question.text == "Q1-fr"
    assert result.question.base_question_id == created.base_question_id
    assert result.question.id != created.base_question_id

    translations = resolver.get_translations(created.base_question_id)
    assert translations.french.id == result.question.id
    assert translations.english.text == "Q1"


def test_update_fr_updates_existing_translation_in_place(mutations, resolver, category, other_category):
    created = mutations.create_logical_question(str(category.id), "Q1", "Q1-fr")
    french_id = created.translations["fr"].question_id

    result = mutations.update_logical_question(
        str(created.base_question_id), str(other_category.id), "fr", "Q1", "Q1-fr v2"
    )

    assert result.created is False
    assert result.question.id == french_id
    assert result.question.text == "Q1-fr v2"
    assert result.question.category_id == other_category.id
    assert result.question.base_question_id == created.base_question_id


def test_update_from_translation_row_targets_selected_language(mutations, resolver, category):
    created = mutations.create_logical_question(str(category.id), "Q1", "Q1-fr")
    french_id = created.translations["fr"].question_id

    mutations.update_logical_question(str(french_id), str(category.id), "ja", "Q1", "Q1-ja")

    translations = resolver.get_translations(created.base_question_id)
    assert translations.japanese.text == "Q1-ja"
    assert translations.french.text == "Q1-fr"


def test_update_en_rewrites_english_row(mutations, resolver, category):
    created = mutations.create_logical_question(str(category.id), "Q1", "Q1-fr")

    result = mutations.update_logical_question(
        str(created.base_question_id), str(category.id), "en", "Q1 edited", "should not be used"
    )

    assert result.created is False
    assert result.question.id == created.base_question_id
    assert result.question.text == "Q1 edited"
    assert resolver.get_translations(created.base_question_id).french.text == "Q1-fr"


def test_update_unknown_language_targets_english(mutations, category):
    created = mutations.create_logical_question(str(category.id), "Q1")

    result = mutations.update_logical_question(
        str(created.base_question_id), str(category.id), "es", "Q1 edited", "traducción"
    )

    assert result.question.id == created.base_question_id
    assert result.question.language_code == "en"
    assert result.question.text == "Q1 edited"


def test_unsupported_language_never_adds_a_row(mutations, question_service, status_service, question_settings, category):
    created = mutations.create_logical_question(str(category.id), "Q1", "Q1-fr", "Q1-ja")

    mutations.update_logical_question(
        str(created.base_question_id), str(category.id), "es", "Q1 edited", "traducción"
    )

    rows = question_service.get_questions_by_base_id(created.base_question_id)
    assert sorted(row.language_code for row in rows) == ["en", "fr", "ja"]
    counter = ScanMissingTranslationsCounter(question_service, question_settings, status_service)
    assert counter.count() == 0


def test_update_en_without_english_row_is_inconsistent(mutations, question_service, category):
    orphan_base = uuid.uuid4()
    translation = question_service.create_question(
        Question(
            id=uuid.uuid4(),
            category_id=category.id,
            language_code="fr",
            text="Orpheline",
            base_question_id=orphan_base,
        )
    )

    with pytest.raises(ConsistencyError):
        mutations.update_logical_question(str(translation.id), str(category.id), "en", "Orphan")

    assert len(question_service.get_questions_by_base_id(orphan_base)) == 1


def test_update_missing_question_not_found(mutations, category):
    with pytest.raises(NotFoundError):
        mutations.update_logical_question(str(uuid.uuid4()), str(category.id), "en", "Q1")


def test_update_requires_text_for_target(mutations, category):
    created = mutations.create_logical_question(str(category.id), "Q1")

    with pytest.raises(ValidationError):
        mutations.update_logical_question(str(created.base_question_id), str(category.id), "fr", "Q1", "")


def test_delete_base_row_leaves_translations(mutations, question_service, category):
    created = mutations.create_logical_question(str(category.id), "Q1", "Q1-fr", "Q1-ja")

    mutations.delete_question(str(created.base_question_id))

    remaining = question_service.get_questions_by_base_id(created.base_question_id)
    assert {q.language_code for q in remaining} == {"fr", "ja"}
    orphans = question_service.list_orphaned_translations("en")
    assert {q.id for q in orphans} == {q.id for q in remaining}


def test_delete_translation_keeps_siblings(mutations, resolver, category):
    created = mutations.create_logical_question(str(category.id), "Q1", "Q1-fr", "Q1-ja")

    mutations.delete_question(str(created.translations["fr"].question_id))

    translations = resolver.get_translations(created.base_question_id)
    assert translations.present_languages() == ["en", "ja"]
