"""
Question Service - question row storage and per-language aggregates
"""
import logging
import uuid
from typing import Optional, List, Dict, Iterable, Set

from sqlalchemy import select, func, and_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, aliased

from couples_admin.core.exceptions import NotFoundError, StoreError, DuplicateTranslationError
from couples_admin.core.validation import parse_uuid
from couples_admin.models.question import Question

logger = logging.getLogger(__name__)


class QuestionService:
    """
    Question row store.

    Knows nothing about logical questions beyond the ``base_question_id``
    column; the translation rules live in the resolver and the mutation
    coordinator. Write methods take ``commit=False`` so a caller can group
    several rows in one transaction and commit through :meth:`commit`.
    """

    def __init__(self, db: Session):
        self.db = db

    # Reads

    def list_questions(
        self,
        limit: Optional[int] = None,
        offset: int = 0,
        category_id=None,
        language_code: Optional[str] = None,
    ) -> List[Question]:
        """
        List questions newest first, with optional equality filters

        Args:
            limit: Max results (None for all)
            offset: Rows to skip
            category_id: Optional category filter
            language_code: Optional language filter

        Returns:
            List of questions
        """
        stmt = select(Question)
        if category_id is not None:
            stmt = stmt.where(Question.category_id == parse_uuid(category_id, "category_id"))
        if language_code is not None:
            stmt = stmt.where(Question.language_code == language_code)

        # id breaks ties so pages never overlap
        stmt = stmt.order_by(Question.created_at.desc(), Question.id).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self._read("list_questions", stmt).scalars().all())

    def get_question(self, question_id) -> Question:
        """
        Get a question by ID

        Raises:
            NotFoundError: If no question has this id
        """
        qid = parse_uuid(question_id, "question_id")
        question = self._get(qid)
        if question is None:
            raise NotFoundError("question", qid)
        return question

    def get_questions_by_base_id(self, base_question_id) -> List[Question]:
        """All rows of one logical question, in any language."""
        base_id = parse_uuid(base_question_id, "base_question_id")
        stmt = select(Question).where(Question.base_question_id == base_id).order_by(Question.created_at)
        return list(self._read("get_questions_by_base_id", stmt).scalars().all())

    def get_base_ids(self, question_ids: Iterable[uuid.UUID]) -> Dict[uuid.UUID, uuid.UUID]:
        """Map each existing question id to its base_question_id. Unknown ids are left out."""
        ids = list(question_ids)
        if not ids:
            return {}
        stmt = select(Question.id, Question.base_question_id).where(Question.id.in_(ids))
        return {row.id: row.base_question_id for row in self._read("get_base_ids", stmt)}

    def get_languages_by_base(
        self,
        base_ids: Iterable[uuid.UUID],
        languages: Optional[Iterable[str]] = None,
    ) -> Dict[uuid.UUID, Set[str]]:
        """Distinct language codes realized per base_question_id."""
        ids = list(base_ids)
        if not ids:
            return {}
        stmt = select(Question.base_question_id, Question.language_code).where(
            Question.base_question_id.in_(ids)
        )
        if languages is not None:
            stmt = stmt.where(Question.language_code.in_(list(languages)))

        result: Dict[uuid.UUID, Set[str]] = {}
        for row in self._read("get_languages_by_base", stmt):
            result.setdefault(row.base_question_id, set()).add(row.language_code)
        return result

    def get_language_counts_for(self, language_code: str, languages: Iterable[str]) -> List[int]:
        """
        Completeness of every row in ``language_code``, from one grouped query.

        Each row is matched against the distinct languages sharing its
        base_question_id; rows with no match count as zero here and are
        defaulted by the caller.
        """
        siblings = aliased(Question)
        per_base = (
            select(
                siblings.base_question_id.label("base_id"),
                func.count(func.distinct(siblings.language_code)).label("languages"),
            )
            .where(siblings.language_code.in_(list(languages)))
            .group_by(siblings.base_question_id)
            .subquery()
        )
        stmt = (
            select(func.coalesce(per_base.c.languages, 0))
            .select_from(Question)
            .outerjoin(per_base, per_base.c.base_id == Question.base_question_id)
            .where(Question.language_code == language_code)
        )
        return [count for (count,) in self._read("get_language_counts_for", stmt)]

    def get_question_counts_by_category(self, language_code: str) -> Dict[str, int]:
        """
        Count questions of one language per category

        Returns:
            Mapping of category id (text form) to question count
        """
        stmt = (
            select(Question.category_id, func.count(Question.id))
            .where(Question.language_code == language_code)
            .group_by(Question.category_id)
        )
        return {str(category_id): count for category_id, count in self._read("get_question_counts_by_category", stmt)}

    def count_rows_by_language(self) -> Dict[str, int]:
        stmt = select(Question.language_code, func.count(Question.id)).group_by(Question.language_code)
        return {language: count for language, count in self._read("count_rows_by_language", stmt)}

    def list_orphaned_translations(self, base_language: str) -> List[Question]:
        """Translation rows whose base_question_id has no row in the base language."""
        base = aliased(Question)
        stmt = (
            select(Question)
            .outerjoin(
                base,
                and_(base.id == Question.base_question_id, base.language_code == base_language),
            )
            .where(Question.language_code != base_language, base.id.is_(None))
            .order_by(Question.created_at)
        )
        return list(self._read("list_orphaned_translations", stmt).scalars().all())

    # Writes

    def create_question(self, question: Question, commit: bool = True) -> Question:
        """
        Insert a question row. The caller supplies ``id`` and ``base_question_id``.

        Raises:
            DuplicateTranslationError: If the logical question already has this language
            StoreError: If the insert fails
        """
        duplicate_check = select(Question.id).where(
            Question.base_question_id == question.base_question_id,
            Question.language_code == question.language_code,
        )
        existing = self._read("create_question", duplicate_check).first()
        if existing:
            raise DuplicateTranslationError(question.base_question_id, question.language_code)

        self.db.add(question)
        self._write("create_question", {
            "question_id": str(question.id),
            "base_question_id": str(question.base_question_id),
            "language_code": question.language_code,
        }, commit)
        return question

    def update_question(
        self,
        question_id,
        category_id,
        language_code: str,
        text: str,
        commit: bool = True,
    ) -> Question:
        """
        Replace category, language and text of a row, keeping id and base_question_id

        Raises:
            NotFoundError: If the row does not exist
            StoreError: If the update fails
        """
        question = self.get_question(question_id)
        question.category_id = parse_uuid(category_id, "category_id")
        question.language_code = language_code
        question.text = text
        self._write("update_question", {"question_id": str(question.id)}, commit)
        return question

    def delete_question(self, question_id) -> None:
        """
        Delete a single row. Sibling translations are left untouched.

        Raises:
            NotFoundError: If the row does not exist
        """
        question = self.get_question(question_id)
        self.db.delete(question)
        self._write("delete_question", {"question_id": str(question.id)}, True)

    def commit(self) -> None:
        self._write("commit", {}, True)

    def rollback(self) -> None:
        self.db.rollback()

    def _read(self, operation: str, stmt):
        try:
            return self.db.execute(stmt)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Question store operation {operation} failed: {e}")
            raise StoreError(operation, {"reason": str(e)}) from e

    def _get(self, question_id: uuid.UUID) -> Optional[Question]:
        try:
            return self.db.get(Question, question_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Question store operation get_question failed: {e}", extra={"question_id": str(question_id)})
            raise StoreError("get_question", {"question_id": str(question_id), "reason": str(e)}) from e

    def _write(self, operation: str, context: dict, commit: bool) -> None:
        try:
            if commit:
                self.db.commit()
            else:
                self.db.flush()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Question store operation {operation} failed: {e}", extra=context)
            raise StoreError(operation, {**context, "reason": str(e)}) from e
