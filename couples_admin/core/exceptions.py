"""
Custom exceptions for the admin panel backend.

Every failure the question/translation engine can report is an
``AdminPanelException`` carrying an error code and an HTTP status, so the
error handlers can turn it into an envelope without inspecting its type.
"""

from typing import Optional, Dict, Any
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for the application."""

    # Input errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_IDENTIFIER = "INVALID_IDENTIFIER"

    # Lookup errors
    NOT_FOUND = "NOT_FOUND"

    # Invariant errors
    CONSISTENCY_ERROR = "CONSISTENCY_ERROR"
    DUPLICATE_TRANSLATION = "DUPLICATE_TRANSLATION"
    DUPLICATE_CATEGORY_KEY = "DUPLICATE_CATEGORY_KEY"
    CATEGORY_IN_USE = "CATEGORY_IN_USE"

    # Persistence errors
    STORE_ERROR = "STORE_ERROR"

    # Generic errors
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class AdminPanelException(Exception):
    """Base exception for the admin panel backend."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code


class ValidationError(AdminPanelException):
    """Raised when caller-supplied input fails a precondition."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            status_code=400
        )


class InvalidIdentifierError(ValidationError):
    """Raised when an identifier is not a canonical UUID string."""

    def __init__(self, field: str, value: Any):
        super().__init__(
            message=f"Invalid {field}",
            details={"field": field, "value": str(value)},
            error_code=ErrorCode.INVALID_IDENTIFIER
        )


class NotFoundError(AdminPanelException):
    """Raised when a referenced entity does not exist."""

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(
            message=f"{entity.capitalize()} not found",
            error_code=ErrorCode.NOT_FOUND,
            details={"entity": entity, "id": str(entity_id)},
            status_code=404
        )
        self.entity = entity


class ConsistencyError(AdminPanelException):
    """Raised when stored data violates an invariant the engine relies on."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: ErrorCode = ErrorCode.CONSISTENCY_ERROR
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            status_code=409
        )


class DuplicateTranslationError(ConsistencyError):
    """Raised when a logical question already has a row in the given language."""

    def __init__(self, base_question_id: Any, language: str):
        super().__init__(
            message=f"Question already has a '{language}' version",
            details={"base_question_id": str(base_question_id), "language": language},
            error_code=ErrorCode.DUPLICATE_TRANSLATION
        )


class DuplicateCategoryKeyError(AdminPanelException):
    """Raised when a category key is already taken."""

    def __init__(self, key: str):
        super().__init__(
            message=f"Category key '{key}' already exists",
            error_code=ErrorCode.DUPLICATE_CATEGORY_KEY,
            details={"key": key},
            status_code=409
        )


class CategoryInUseError(AdminPanelException):
    """Raised when deleting a category that still has questions under a restrict policy."""

    def __init__(self, category_id: Any, question_count: int):
        super().__init__(
            message=f"Category still has {question_count} question(s)",
            error_code=ErrorCode.CATEGORY_IN_USE,
            details={"category_id": str(category_id), "question_count": question_count},
            status_code=409
        )


class StoreError(AdminPanelException):
    """Raised when the persistence layer fails."""

    def __init__(self, operation: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"Store operation '{operation}' failed",
            error_code=ErrorCode.STORE_ERROR,
            details=details or {"operation": operation},
            status_code=500
        )
        self.operation = operation
