from fastapi import APIRouter, Depends

from restaurant.api.deps import get_current_user, get_uow
from restaurant.api.responses import Envelope, ok
from restaurant.application.schemas import ReviewCreate, ReviewRead, ReviewUpdate
from restaurant.application.services.auth import CurrentUser
from restaurant.application.services.reviews import ReviewService
from restaurant.infrastructure.unit_of_work import UnitOfWork

router = APIRouter(prefix="/review", tags=["reviews"])


@router.get("/menu/{menu_id}", response_model=Envelope[list[ReviewRead]])
def list_menu_reviews(menu_id: str, uow: UnitOfWork = Depends(get_uow)):
    return ok([ReviewRead.model_validate(r) for r in ReviewService(uow).list_for_menu(menu_id)])


@router.get("/{review_id}", response_model=Envelope[ReviewRead])
def get_review(review_id: str, uow: UnitOfWork = Depends(get_uow)):
    return ok(ReviewRead.model_validate(ReviewService(uow).get(review_id)))


@router.post("", response_model=Envelope[ReviewRead], status_code=201)
def create_review(
    payload: ReviewCreate,
    uow: UnitOfWork = Depends(get_uow),
    current_user: CurrentUser = Depends(get_current_user),
):
    """One review per user, menu item and paid order; updates the menu's average rating."""
    review = ReviewService(uow).create(payload, current_user.id)
    return ok(ReviewRead.model_validate(review), 201)


@router.patch("/{review_id}", response_model=Envelope[ReviewRead])
def update_review(
    review_id: str,
    payload: ReviewUpdate,
    uow: UnitOfWork = Depends(get_uow),
    current_user: CurrentUser = Depends(get_current_user),
):
    return ok(ReviewRead.model_validate(ReviewService(uow).update(review_id, payload, current_user.id)))
