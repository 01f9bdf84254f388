"""
Category API endpoints
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status

from couples_admin.core.dependencies import get_category_service, get_listing_service
from couples_admin.schemas.base import Envelope, Message
from couples_admin.schemas.category import CategoryCreate, CategoryUpdate, CategoryRead
from couples_admin.schemas.views import CategoriesListView
from couples_admin.services.category_service import CategoryService
from couples_admin.services.question_listing_service import QuestionListingService

router = APIRouter(prefix="/admin/api/categories", tags=["categories"])


@router.get("/list", response_model=Envelope[CategoriesListView])
def list_categories(
    page: Optional[str] = Query(None),
    per_page: Optional[str] = Query(None),
    listing: QuestionListingService = Depends(get_listing_service),
):
    """
    List categories with their question counts

    - **page**: Page number (default 1)
    - **per_page**: 25, 50 or 100
    """
    return Envelope(status="ok", data=listing.list_categories_view(page, per_page))


@router.get("/{category_id}", response_model=Envelope[CategoryRead])
def get_category(
    category_id: str,
    categories: CategoryService = Depends(get_category_service),
):
    return Envelope(status="ok", data=CategoryRead.model_validate(categories.get_category(category_id)))


@router.post("", response_model=Envelope[CategoryRead], status_code=status.HTTP_201_CREATED)
def create_category(
    payload: CategoryCreate,
    categories: CategoryService = Depends(get_category_service),
):
    """
    Create a category

    - **key**: Unique machine name
    - **label**: Display label
    - **icon**: Optional icon
    """
    category = categories.create_category(payload.key, payload.label, payload.icon)
    return Envelope(status="ok", data=CategoryRead.model_validate(category))


@router.put("/{category_id}", response_model=Envelope[CategoryRead])
def update_category(
    category_id: str,
    payload: CategoryUpdate,
    categories: CategoryService = Depends(get_category_service),
):
    category = categories.update_category(category_id, payload.key, payload.label, payload.icon)
    return Envelope(status="ok", data=CategoryRead.model_validate(category))


@router.delete("/{category_id}", response_model=Envelope[Message])
def delete_category(
    category_id: str,
    categories: CategoryService = Depends(get_category_service),
):
    """Delete a category; questions are kept, refused or removed per the delete policy"""
    removed = categories.delete_category(category_id)
    message = "Category deleted"
    if removed:
        message += f" along with {removed} question(s)"
    return Envelope(status="ok", data=Message(message=message))
