from pydantic import BaseModel
from typing import Any, Optional, Generic, TypeVar

T = TypeVar('T')


class ErrorInfo(BaseModel):
    code: str
    message: str
    details: dict[str, Any] = {}
    request_id: Optional[str] = None


class Envelope(BaseModel, Generic[T]):
    status: str
    data: Optional[T] = None
    error: Optional[ErrorInfo] = None


class Message(BaseModel):
    message: str
