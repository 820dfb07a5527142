from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from restaurant.application.errors import InternalError
from restaurant.infrastructure.repositories import (
    IngredientRepository, InventoryRepository, MenuRepository, OrderRepository, RecipeRepository,
    ReservationRepository, ReviewRepository, TableRepository, UserRepository,
)
from shared.core import get_logger

logger = get_logger(__name__)


class UnitOfWork:
    """
    Every repository bound to one session.

    Used as ``with uow: ...``; the block commits when it exits cleanly and
    rolls back on any exception, which is then re-raised unchanged.
    """

    def __init__(self, session: Session):
        self.session = session
        self.users = UserRepository(session)
        self.tables = TableRepository(session)
        self.menus = MenuRepository(session)
        self.ingredients = IngredientRepository(session)
        self.inventory = InventoryRepository(session)
        self.recipes = RecipeRepository(session)
        self.reservations = ReservationRepository(session)
        self.orders = OrderRepository(session)
        self.reviews = ReviewRepository(session)

    def __enter__(self) -> "UnitOfWork":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.rollback()
            return
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.rollback()
            logger.error("Commit failed", exc_info=True)
            raise InternalError() from e

    def rollback(self) -> None:
        self.session.rollback()
