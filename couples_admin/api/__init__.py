# API endpoints and routers

from .questions_endpoints import router as questions_router
from .categories_endpoints import router as categories_router
from .languages_endpoints import router as languages_router
from .health_endpoints import router as health_router

__all__ = [
    "questions_router",
    "categories_router",
    "languages_router",
    "health_router",
]
