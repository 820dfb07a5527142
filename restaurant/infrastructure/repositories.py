"""
Data access for every aggregate.

Soft-deletable rows are hidden from ``get``/``list`` once ``deleted`` is
set; ``get_deleted`` is the only way back to them and is what restore
uses. Writes only flush: committing belongs to the unit of work.
"""

from datetime import date
from typing import Generic, Iterable, Optional, Sequence, TypeVar

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from restaurant.domain.models import (
    Ingredient, Inventory, Menu, Order, Recipe, RecipeIngredient, Reservation, Review, Table, User,
)
from restaurant.domain.reservation_rules import ReservationStatus

ModelT = TypeVar("ModelT")


class BaseRepository(Generic[ModelT]):
    model: type

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(self.model)

    def get(self, entity_id: str) -> Optional[ModelT]:
        return self._query().filter(self.model.id == entity_id).first()

    def list(self) -> Sequence[ModelT]:
        return self._query().order_by(self.model.created_at).all()

    def add(self, entity: ModelT) -> ModelT:
        self.db.add(entity)
        self.db.flush()
        self.db.refresh(entity)
        return entity

    def save(self, entity: ModelT) -> ModelT:
        self.db.flush()
        self.db.refresh(entity)
        return entity


class SoftDeleteRepository(BaseRepository[ModelT]):
    def _query(self):
        return self.db.query(self.model).filter(self.model.deleted.is_(False))

    def get_deleted(self, entity_id: str) -> Optional[ModelT]:
        return (
            self.db.query(self.model)
            .filter(self.model.id == entity_id, self.model.deleted.is_(True))
            .first()
        )

    def soft_delete(self, entity: ModelT) -> ModelT:
        entity.mark_deleted()
        self.db.flush()
        return entity

    def restore(self, entity: ModelT) -> ModelT:
        entity.mark_restored()
        return self.save(entity)


class UserRepository(SoftDeleteRepository[User]):
    model = User

    def get_by_email(self, email: str) -> Optional[User]:
        return self._query().filter(User.email == email).first()

    def email_taken(self, email: str) -> bool:
        # Unique across live and deleted rows, matching the column constraint
        return self.db.query(User.id).filter(User.email == email).first() is not None


class TableRepository(SoftDeleteRepository[Table]):
    model = Table


class MenuRepository(SoftDeleteRepository[Menu]):
    model = Menu


class IngredientRepository(SoftDeleteRepository[Ingredient]):
    model = Ingredient

    def get_by_name(self, name: str) -> Optional[Ingredient]:
        return self.db.query(Ingredient).filter(Ingredient.name == name).first()


class InventoryRepository(SoftDeleteRepository[Inventory]):
    model = Inventory

    def get_by_ingredient_id(self, ingredient_id: str) -> Optional[Inventory]:
        return self._query().filter(Inventory.ingredient_id == ingredient_id).first()

    def stock_for(self, ingredient_ids: Iterable[str]) -> dict[str, float]:
        """Quantity on hand per ingredient; ingredients without a live row are absent."""
        ids = list(ingredient_ids)
        if not ids:
            return {}
        rows = (
            self.db.query(Inventory.ingredient_id, Inventory.quantity)
            .filter(Inventory.deleted.is_(False), Inventory.ingredient_id.in_(ids))
            .all()
        )
        return {ingredient_id: quantity for ingredient_id, quantity in rows}


class RecipeRepository(SoftDeleteRepository[Recipe]):
    model = Recipe

    def _query(self):
        return super()._query().options(
            selectinload(Recipe.ingredients).selectinload(RecipeIngredient.ingredient)
        )

    def get_by_menu_id(self, menu_id: str) -> Optional[Recipe]:
        return self._query().filter(Recipe.menu_id == menu_id).first()


class ReservationRepository(SoftDeleteRepository[Reservation]):
    model = Reservation

    def list_confirmed_for_table(self, table_id: str, day: date) -> Sequence[Reservation]:
        return (
            self._query()
            .filter(
                Reservation.table_id == table_id,
                Reservation.reservation_date == day,
                Reservation.status == ReservationStatus.CONFIRMED.value,
            )
            .order_by(Reservation.reservation_time)
            .all()
        )


class OrderRepository(BaseRepository[Order]):
    model = Order

    def _query(self):
        return self.db.query(Order).options(selectinload(Order.items))


class ReviewRepository(BaseRepository[Review]):
    model = Review

    def list_for_menu(self, menu_id: str) -> Sequence[Review]:
        return self._query().filter(Review.menu_id == menu_id).order_by(Review.created_at).all()

    def exists_for(self, user_id: str, menu_id: str, order_id: str) -> bool:
        return (
            self._query()
            .filter(Review.user_id == user_id, Review.menu_id == menu_id, Review.order_id == order_id)
            .first()
            is not None
        )

    def average_rating(self, menu_id: str) -> float:
        value = self.db.query(func.avg(Review.rating)).filter(Review.menu_id == menu_id).scalar()
        return float(value or 0)
