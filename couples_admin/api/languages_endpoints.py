"""
Language API endpoints
"""
from fastapi import APIRouter, Depends

from couples_admin.config import QuestionSettings
from couples_admin.core.dependencies import get_question_settings
from couples_admin.schemas.base import Envelope

router = APIRouter(prefix="/admin/api/languages", tags=["languages"])


@router.get("", response_model=Envelope[dict[str, list[str]]])
def list_languages(settings: QuestionSettings = Depends(get_question_settings)):
    """Languages a question can be written in; the first one is the base language"""
    languages = [settings.base_language] + [
        code for code in settings.supported_languages if code != settings.base_language
    ]
    return Envelope(status="ok", data={"languages": languages})
