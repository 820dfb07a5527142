from typing import Sequence

from restaurant.application.errors import ConflictError, NotFoundError
from restaurant.application.schemas import IngredientCreate, IngredientUpdate
from restaurant.domain.models import Ingredient
from restaurant.infrastructure.unit_of_work import UnitOfWork


class IngredientService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    def list(self) -> Sequence[Ingredient]:
        return self.uow.ingredients.list()

    def get(self, ingredient_id: str) -> Ingredient:
        ingredient = self.uow.ingredients.get(ingredient_id)
        if not ingredient:
            raise NotFoundError("Ingredient not found")
        return ingredient

    def create(self, data: IngredientCreate) -> Ingredient:
        with self.uow:
            if self.uow.ingredients.get_by_name(data.name):
                raise ConflictError("Ingredient already exists")
            ingredient = self.uow.ingredients.add(
                Ingredient(name=data.name, description=data.description)
            )
        return ingredient

    def update(self, ingredient_id: str, data: IngredientUpdate) -> Ingredient:
        with self.uow:
            ingredient = self.get(ingredient_id)
            if data.name is not None and data.name != ingredient.name:
                if self.uow.ingredients.get_by_name(data.name):
                    raise ConflictError("Ingredient already exists")
                ingredient.name = data.name
            if data.description is not None:
                ingredient.description = data.description
            ingredient = self.uow.ingredients.save(ingredient)
        return ingredient

    def delete(self, ingredient_id: str) -> None:
        with self.uow:
            self.uow.ingredients.soft_delete(self.get(ingredient_id))

    def restore(self, ingredient_id: str) -> Ingredient:
        with self.uow:
            ingredient = self.uow.ingredients.get_deleted(ingredient_id)
            if not ingredient:
                raise NotFoundError("Deleted ingredient not found")
            ingredient = self.uow.ingredients.restore(ingredient)
        return ingredient
