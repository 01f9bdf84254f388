"""
Category Service - category CRUD and count aggregation
"""
import logging
from typing import Optional, List

from sqlalchemy import select, func, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from couples_admin.config import CategoryDeletePolicy
from couples_admin.core.exceptions import (
    NotFoundError,
    StoreError,
    DuplicateCategoryKeyError,
    CategoryInUseError,
)
from couples_admin.core.validation import parse_uuid, require_text, optional_text
from couples_admin.models.category import Category
from couples_admin.models.question import Question

logger = logging.getLogger(__name__)


class CategoryService:
    """Manages category records"""

    def __init__(self, db: Session, delete_policy: CategoryDeletePolicy = CategoryDeletePolicy.ALLOW):
        self.db = db
        self.delete_policy = delete_policy

    def list_categories(self, limit: Optional[int] = None, offset: int = 0) -> List[Category]:
        """
        List categories in creation order

        Args:
            limit: Max results (None for all)
            offset: Rows to skip

        Returns:
            List of categories
        """
        stmt = select(Category).order_by(Category.created_at, Category.key).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def get_category_count(self) -> int:
        return self.db.execute(select(func.count(Category.id))).scalar() or 0

    def get_category(self, category_id) -> Category:
        """
        Get a category by ID

        Raises:
            NotFoundError: If no category has this id
        """
        cid = parse_uuid(category_id, "category_id")
        category = self.db.get(Category, cid)
        if category is None:
            raise NotFoundError("category", cid)
        return category

    def create_category(self, key: str, label: str, icon: Optional[str] = None) -> Category:
        """
        Create a category

        Raises:
            ValidationError: If key or label is empty
            DuplicateCategoryKeyError: If the key is taken
        """
        key = require_text(key, "key")
        label = require_text(label, "label")
        self._ensure_key_available(key)

        category = Category(key=key, label=label, icon=optional_text(icon))
        self.db.add(category)
        self._commit("create_category", {"key": key})
        self.db.refresh(category)
        logger.info(f"Created category {category.id}", extra={"category_id": str(category.id), "key": key})
        return category

    def update_category(self, category_id, key: str, label: str, icon: Optional[str] = None) -> Category:
        """
        Replace key, label and icon of a category

        Raises:
            NotFoundError: If the category does not exist
        """
        category = self.get_category(category_id)
        key = require_text(key, "key")
        label = require_text(label, "label")
        if key != category.key:
            self._ensure_key_available(key)

        category.key = key
        category.label = label
        category.icon = optional_text(icon)
        self._commit("update_category", {"category_id": str(category.id)})
        self.db.refresh(category)
        return category

    def delete_category(self, category_id) -> int:
        """
        Delete a category according to the configured delete policy

        Returns:
            Number of questions deleted along with it (cascade policy only)

        Raises:
            NotFoundError: If the category does not exist
            CategoryInUseError: If questions reference it and the policy is restrict
        """
        category = self.get_category(category_id)
        question_count = self.db.execute(
            select(func.count(Question.id)).where(Question.category_id == category.id)
        ).scalar() or 0

        deleted_questions = 0
        if question_count:
            if self.delete_policy == CategoryDeletePolicy.RESTRICT:
                raise CategoryInUseError(category.id, question_count)
            if self.delete_policy == CategoryDeletePolicy.CASCADE:
                self.db.execute(delete(Question).where(Question.category_id == category.id))
                deleted_questions = question_count
            else:
                logger.warning(
                    f"Deleting category {category.id} leaves {question_count} question(s) without a category",
                    extra={"category_id": str(category.id), "question_count": question_count}
                )

        self.db.delete(category)
        self._commit("delete_category", {"category_id": str(category.id)})
        return deleted_questions

    def _ensure_key_available(self, key: str) -> None:
        existing = self.db.execute(select(Category.id).where(Category.key == key)).first()
        if existing:
            raise DuplicateCategoryKeyError(key)

    def _commit(self, operation: str, context: dict) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Category store operation {operation} failed: {e}", extra=context)
            raise StoreError(operation, {**context, "reason": str(e)}) from e
