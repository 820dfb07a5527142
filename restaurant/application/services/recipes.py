from typing import Iterable, Sequence

from restaurant.application.errors import BadRequestError, ConflictError, NotFoundError
from restaurant.application.schemas import RecipeCreate, RecipeIngredientIn, RecipeUpdate
from restaurant.domain.models import Ingredient, Recipe, RecipeIngredient
from restaurant.infrastructure.unit_of_work import UnitOfWork
from shared.core import get_logger

logger = get_logger(__name__)


class RecipeService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    def list(self) -> Sequence[Recipe]:
        return self.uow.recipes.list()

    def get(self, recipe_id: str) -> Recipe:
        recipe = self.uow.recipes.get(recipe_id)
        if not recipe:
            raise NotFoundError("Recipe not found")
        return recipe

    def _ingredient_named(self, item: RecipeIngredientIn) -> Ingredient:
        """Existing ingredient with this name, created (or restored) on demand."""
        name = item.name.strip()
        ingredient = self.uow.ingredients.get_by_name(name)
        if ingredient is None:
            ingredient = self.uow.ingredients.add(
                Ingredient(name=name, description=item.description or "")
            )
            logger.info("Ingredient created from recipe", extra={"extra_fields": {"ingredient_id": ingredient.id}})
        elif ingredient.deleted:
            ingredient = self.uow.ingredients.restore(ingredient)
        return ingredient

    @staticmethod
    def _check_unique_names(items: Iterable[RecipeIngredientIn]) -> None:
        seen = set()
        for item in items:
            key = item.name.strip()
            if key in seen:
                raise BadRequestError(f"Duplicate ingredient '{key}' in recipe")
            seen.add(key)

    def create(self, data: RecipeCreate) -> Recipe:
        self._check_unique_names(data.ingredients)
        with self.uow:
            if not self.uow.menus.get(data.menu_id):
                raise NotFoundError("Menu not found")
            if self.uow.recipes.get_by_menu_id(data.menu_id):
                raise ConflictError("Menu already has a recipe")

            recipe = Recipe(menu_id=data.menu_id, name=data.name, description=data.description)
            for position, item in enumerate(data.ingredients):
                ingredient = self._ingredient_named(item)
                recipe.ingredients.append(
                    RecipeIngredient(ingredient=ingredient, quantity=item.quantity, position=position)
                )
            recipe = self.uow.recipes.add(recipe)
        logger.info("Recipe created", extra={"extra_fields": {"recipe_id": recipe.id, "menu_id": recipe.menu_id}})
        return recipe

    def update(self, recipe_id: str, data: RecipeUpdate) -> Recipe:
        if data.ingredients:
            self._check_unique_names(data.ingredients)
        with self.uow:
            recipe = self.get(recipe_id)
            if data.name is not None:
                recipe.name = data.name
            if data.description is not None:
                recipe.description = data.description

            # Lines are upserted by ingredient name; lines not mentioned stay
            by_ingredient = {line.ingredient_id: line for line in recipe.ingredients}
            next_position = max((line.position for line in recipe.ingredients), default=-1) + 1
            for item in data.ingredients or []:
                ingredient = self._ingredient_named(item)
                line = by_ingredient.get(ingredient.id)
                if line is not None:
                    line.quantity = item.quantity
                else:
                    recipe.ingredients.append(
                        RecipeIngredient(ingredient=ingredient, quantity=item.quantity, position=next_position)
                    )
                    next_position += 1
            recipe = self.uow.recipes.save(recipe)
        return recipe

    def delete(self, recipe_id: str) -> None:
        with self.uow:
            self.uow.recipes.soft_delete(self.get(recipe_id))

    def restore(self, recipe_id: str) -> Recipe:
        with self.uow:
            recipe = self.uow.recipes.get_deleted(recipe_id)
            if not recipe:
                raise NotFoundError("Deleted recipe not found")
            if self.uow.recipes.get_by_menu_id(recipe.menu_id):
                raise ConflictError("Menu already has a recipe")
            recipe = self.uow.recipes.restore(recipe)
        return recipe
