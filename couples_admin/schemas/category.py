"""
Category schemas for API requests/responses
"""
import uuid
from pydantic import BaseModel, Field, field_serializer
from datetime import datetime
from typing import Optional


class CategoryCreate(BaseModel):
    """Schema for creating a category"""
    key: str = Field(..., min_length=1, max_length=50)
    label: str = Field(..., min_length=1, max_length=255)
    icon: Optional[str] = Field(None, max_length=50)


class CategoryUpdate(CategoryCreate):
    """Schema for updating a category (full replacement of key, label, icon)"""


class CategoryRead(BaseModel):
    """Schema for category read response"""
    id: uuid.UUID
    key: str
    label: str
    icon: Optional[str]
    created_at: datetime
    updated_at: datetime

    @field_serializer("id")
    def serialize_id(self, value: uuid.UUID) -> str:
        return str(value)

    class Config:
        from_attributes = True
