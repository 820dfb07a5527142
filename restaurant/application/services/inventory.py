from restaurant.application.errors import ConflictError, InternalError, NotFoundError
from restaurant.application.schemas import (
    InventoryCreate, InventoryMenuLine, InventoryMenuRead, InventoryUpdate, MenuRead, RecipeRead,
)
from restaurant.domain.models import Inventory
from restaurant.domain.portions import RecipeDataError, RecipeLine, calculate_portions, portions_for
from restaurant.infrastructure.unit_of_work import UnitOfWork
from shared.core import get_logger

logger = get_logger(__name__)

INVALID_RECIPE_QUANTITY = "Invalid ingredient quantity in recipe"


class InventoryService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    def get(self, inventory_id: str) -> Inventory:
        inventory = self.uow.inventory.get(inventory_id)
        if not inventory:
            raise NotFoundError("Inventory not found")
        return inventory

    def get_by_ingredient(self, ingredient_id: str) -> Inventory:
        inventory = self.uow.inventory.get_by_ingredient_id(ingredient_id)
        if not inventory:
            raise NotFoundError("Inventory not found")
        return inventory

    def create(self, data: InventoryCreate) -> Inventory:
        with self.uow:
            if not self.uow.ingredients.get(data.ingredient_id):
                raise NotFoundError("Ingredient not found")
            if self.uow.inventory.get_by_ingredient_id(data.ingredient_id):
                raise ConflictError("Inventory already exists for this ingredient")
            inventory = self.uow.inventory.add(
                Inventory(ingredient_id=data.ingredient_id, quantity=data.quantity)
            )
        return inventory

    def update(self, inventory_id: str, data: InventoryUpdate) -> Inventory:
        with self.uow:
            inventory = self.get(inventory_id)
            inventory.quantity = data.quantity
            inventory = self.uow.inventory.save(inventory)
        return inventory

    def delete(self, inventory_id: str) -> None:
        with self.uow:
            self.uow.inventory.soft_delete(self.get(inventory_id))

    def restore(self, inventory_id: str) -> Inventory:
        with self.uow:
            inventory = self.uow.inventory.get_deleted(inventory_id)
            if not inventory:
                raise NotFoundError("Deleted inventory not found")
            if self.uow.inventory.get_by_ingredient_id(inventory.ingredient_id):
                raise ConflictError("Inventory already exists for this ingredient")
            inventory = self.uow.inventory.restore(inventory)
        return inventory

    def calculate_menu_portions(self, menu_id: str) -> InventoryMenuRead:
        """
        Whole portions of ``menu_id`` that current stock allows.

        Ingredients with no live inventory row count as out of stock and
        bring the total to 0. A non-positive or non-finite recipe quantity,
        or a non-finite stock amount, is corrupt data and fails the whole
        request.
        """
        menu = self.uow.menus.get(menu_id)
        if not menu:
            raise NotFoundError("Menu not found")
        recipe = self.uow.recipes.get_by_menu_id(menu_id)
        if not recipe:
            raise NotFoundError("Recipe not found")

        lines = [RecipeLine(ri.ingredient_id, ri.quantity) for ri in recipe.ingredients]
        stock = self.uow.inventory.stock_for(line.ingredient_id for line in lines)

        try:
            total = calculate_portions(lines, stock)
            breakdown = [
                InventoryMenuLine(
                    ingredient_id=ri.ingredient_id,
                    name=ri.name,
                    quantity_per_portion=ri.quantity,
                    available=stock.get(ri.ingredient_id, 0),
                    portions=float(portions_for(stock.get(ri.ingredient_id, 0), ri.quantity)),
                )
                for ri in recipe.ingredients
            ]
        except RecipeDataError as e:
            logger.error(
                "Corrupt recipe data",
                exc_info=True,
                extra={"extra_fields": {"menu_id": menu_id, "recipe_id": recipe.id}},
            )
            raise InternalError(INVALID_RECIPE_QUANTITY) from e

        missing = [line.ingredient_id for line in lines if line.ingredient_id not in stock]
        if missing:
            logger.warning(
                "Ingredients without inventory",
                extra={"extra_fields": {"menu_id": menu_id, "ingredient_ids": missing}},
            )

        return InventoryMenuRead(
            total_portions=total,
            menu=MenuRead.model_validate(menu),
            recipe=RecipeRead.model_validate(recipe),
            ingredients=breakdown,
        )
