"""User profile API endpoints."""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from marketplace.database import get_db
from marketplace.dependencies import CurrentUser, get_current_user
from marketplace.schemas.user import CategoriesRequest, CreateRequest
from marketplace.services.user_profile import get_user_profile_service

router = APIRouter(prefix="/api/v1/users", tags=["Users"])


@router.post("/create", response_class=PlainTextResponse)
def create(
    body: CreateRequest,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> str:
    """Register the current user as a buyer and/or seller."""
    service = get_user_profile_service()
    service.set_roles(db, user.user_id, body.is_buyer, body.is_seller)
    return "User roles updated successfully"


@router.post("/categories", response_class=PlainTextResponse)
def categories(
    body: CategoriesRequest,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> str:
    """Replace the categories the current user follows."""
    service = get_user_profile_service()
    return service.set_categories(db, user.user_id, [c.category_id for c in body.categories])
