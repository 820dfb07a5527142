from typing import Sequence

from restaurant.application.errors import BadRequestError, ForbiddenError, NotFoundError
from restaurant.application.schemas import ReviewCreate, ReviewUpdate
from restaurant.domain.models import Review
from restaurant.infrastructure.unit_of_work import UnitOfWork
from shared.core import get_logger

logger = get_logger(__name__)


class ReviewService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    def get(self, review_id: str) -> Review:
        review = self.uow.reviews.get(review_id)
        if not review:
            raise NotFoundError("Review not found")
        return review

    def list_for_menu(self, menu_id: str) -> Sequence[Review]:
        if not self.uow.menus.get(menu_id):
            raise NotFoundError("Menu not found")
        return self.uow.reviews.list_for_menu(menu_id)

    def _refresh_menu_rating(self, menu_id: str) -> None:
        menu = self.uow.menus.get(menu_id)
        if menu is not None:
            menu.rating = self.uow.reviews.average_rating(menu_id)

    def create(self, data: ReviewCreate, user_id: str) -> Review:
        with self.uow:
            if self.uow.reviews.exists_for(user_id, data.menu_id, data.order_id):
                raise BadRequestError("You cannot leave a review twice for the same order")
            order = self.uow.orders.get(data.order_id)
            if not order:
                raise NotFoundError("Order not found")
            if order.user_id != user_id:
                raise ForbiddenError("You can only review your own orders")
            if order.payment_status != "paid" or order.status != "success":
                raise ForbiddenError("Order must be paid before it can be reviewed")
            if not any(item.menu_id == data.menu_id for item in order.items):
                raise BadRequestError("Menu is not part of this order")
            if not self.uow.menus.get(data.menu_id):
                raise NotFoundError("Menu not found")

            review = self.uow.reviews.add(Review(
                rating=data.rating,
                comment=data.comment,
                user_id=user_id,
                menu_id=data.menu_id,
                order_id=data.order_id,
            ))
            self._refresh_menu_rating(data.menu_id)
        logger.info("Review created", extra={"extra_fields": {"review_id": review.id, "menu_id": review.menu_id}})
        return review

    def update(self, review_id: str, data: ReviewUpdate, user_id: str) -> Review:
        with self.uow:
            review = self.get(review_id)
            if review.user_id != user_id:
                raise ForbiddenError("You can only update your own review")
            if data.rating is not None:
                review.rating = data.rating
            if data.comment is not None:
                review.comment = data.comment
            review = self.uow.reviews.save(review)
            self._refresh_menu_rating(review.menu_id)
        return review
