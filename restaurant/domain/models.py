import uuid
from datetime import date, datetime, time
from typing import Optional

from sqlalchemy import (
    Boolean, Date, DateTime, Float, ForeignKey, Integer, Numeric, String, Text, Time, UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _new_id() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    pass


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class SoftDeleteMixin:
    deleted: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    deleted_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    def mark_deleted(self) -> None:
        self.deleted = True
        self.deleted_at = datetime.utcnow()

    def mark_restored(self) -> None:
        self.deleted = False
        self.deleted_at = None


class User(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "users"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(100))
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password: Mapped[str] = mapped_column(String(255))
    phone: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    role: Mapped[str] = mapped_column(String(20), default="customer")


class Table(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "tables"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    number: Mapped[str] = mapped_column(String(20))
    capacity: Mapped[int] = mapped_column(Integer)
    location: Mapped[str] = mapped_column(String(20))
    status: Mapped[str] = mapped_column(String(20), default="available")


class Menu(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "menu"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(100))
    description: Mapped[str] = mapped_column(Text)
    price: Mapped[float] = mapped_column(Numeric(12, 2))
    category: Mapped[str] = mapped_column(String(30))
    image_url: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    # Average of review ratings, recomputed on every review write
    rating: Mapped[float] = mapped_column(Float, default=0)


class Ingredient(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "ingredients"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    description: Mapped[str] = mapped_column(Text, default="")


class Inventory(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "inventory"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    ingredient_id: Mapped[str] = mapped_column(ForeignKey("ingredients.id"), index=True)
    quantity: Mapped[float] = mapped_column(Float, default=0)
    ingredient: Mapped[Ingredient] = relationship("Ingredient")


class Recipe(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "recipes"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    menu_id: Mapped[str] = mapped_column(ForeignKey("menu.id"), index=True)
    name: Mapped[str] = mapped_column(String(100))
    description: Mapped[str] = mapped_column(Text, default="")
    ingredients: Mapped[list["RecipeIngredient"]] = relationship(
        "RecipeIngredient",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeIngredient.position",
    )


class RecipeIngredient(Base):
    __tablename__ = "recipe_ingredients"
    __table_args__ = (UniqueConstraint("recipe_id", "ingredient_id", name="uq_recipe_ingredient"),)
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    recipe_id: Mapped[str] = mapped_column(ForeignKey("recipes.id"), index=True)
    ingredient_id: Mapped[str] = mapped_column(ForeignKey("ingredients.id"))
    quantity: Mapped[float] = mapped_column(Float)
    position: Mapped[int] = mapped_column(Integer, default=0)
    recipe: Mapped[Recipe] = relationship("Recipe", back_populates="ingredients")
    ingredient: Mapped[Ingredient] = relationship("Ingredient")

    @property
    def name(self) -> str:
        return self.ingredient.name


class Reservation(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "reservations"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    table_id: Mapped[str] = mapped_column(ForeignKey("tables.id"), index=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), index=True)
    reservation_date: Mapped[date] = mapped_column(Date, index=True)
    reservation_time: Mapped[time] = mapped_column(Time)
    number_of_guests: Mapped[int] = mapped_column(Integer)
    status: Mapped[str] = mapped_column(String(20), default="pending")


class Order(TimestampMixin, Base):
    __tablename__ = "orders"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), index=True)
    status: Mapped[str] = mapped_column(String(20), default="pending")
    payment_method: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    payment_status: Mapped[str] = mapped_column(String(20), default="unpaid")
    amount: Mapped[float] = mapped_column(Numeric(12, 2))
    items: Mapped[list["OrderMenu"]] = relationship(
        "OrderMenu", back_populates="order", cascade="all, delete-orphan"
    )


class OrderMenu(Base):
    __tablename__ = "order_menu"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    order_id: Mapped[str] = mapped_column(ForeignKey("orders.id"), index=True)
    menu_id: Mapped[str] = mapped_column(ForeignKey("menu.id"))
    quantity: Mapped[int] = mapped_column(Integer)
    order: Mapped[Order] = relationship("Order", back_populates="items")


class Review(TimestampMixin, Base):
    __tablename__ = "reviews"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    rating: Mapped[int] = mapped_column(Integer)
    comment: Mapped[str] = mapped_column(String(100))
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), index=True)
    menu_id: Mapped[str] = mapped_column(ForeignKey("menu.id"), index=True)
    order_id: Mapped[str] = mapped_column(ForeignKey("orders.id"))
