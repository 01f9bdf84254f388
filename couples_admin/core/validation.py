"""
Input validation utilities for identifiers and texts
"""
import uuid
from typing import Optional

from couples_admin.core.exceptions import (
    ValidationError,
    InvalidIdentifierError,
)


def parse_uuid(value, field: str = "id") -> uuid.UUID:
    """
    Parse an identifier from its canonical text form

    Args:
        value: UUID string (or an already parsed UUID)
        field: Field name reported on failure

    Returns:
        Parsed UUID

    Raises:
        InvalidIdentifierError: If value is not a valid UUID
    """
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value).strip())
    except (ValueError, AttributeError, TypeError):
        raise InvalidIdentifierError(field, value)


def parse_optional_uuid(value, field: str = "id") -> Optional[uuid.UUID]:
    """Parse an identifier, treating empty input as absent."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_uuid(value, field)


def require_text(text: Optional[str], field: str) -> str:
    """Return stripped text, raising ValidationError when it is empty."""
    value = (text or "").strip()
    if not value:
        raise ValidationError(f"{field} is required", details={"field": field})
    return value


def optional_text(text: Optional[str]) -> Optional[str]:
    """Return stripped text, or None when nothing was supplied."""
    value = (text or "").strip()
    return value or None
