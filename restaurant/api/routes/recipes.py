from fastapi import APIRouter, Depends

from restaurant.api.deps import get_uow, require_staff
from restaurant.api.responses import Envelope, ok
from restaurant.application.schemas import RecipeCreate, RecipeRead, RecipeUpdate
from restaurant.application.services.recipes import RecipeService
from restaurant.infrastructure.unit_of_work import UnitOfWork

router = APIRouter(prefix="/recipes", tags=["recipes"], dependencies=[Depends(require_staff)])


@router.post("", response_model=Envelope[RecipeRead], status_code=201)
def create_recipe(payload: RecipeCreate, uow: UnitOfWork = Depends(get_uow)):
    """Ingredients are referenced by name and created when they do not exist yet."""
    return ok(RecipeRead.model_validate(RecipeService(uow).create(payload)), 201)


@router.get("", response_model=Envelope[list[RecipeRead]])
def list_recipes(uow: UnitOfWork = Depends(get_uow)):
    return ok([RecipeRead.model_validate(r) for r in RecipeService(uow).list()])


@router.get("/{recipe_id}", response_model=Envelope[RecipeRead])
def get_recipe(recipe_id: str, uow: UnitOfWork = Depends(get_uow)):
    return ok(RecipeRead.model_validate(RecipeService(uow).get(recipe_id)))


@router.patch("/{recipe_id}", response_model=Envelope[RecipeRead])
def update_recipe(recipe_id: str, payload: RecipeUpdate, uow: UnitOfWork = Depends(get_uow)):
    return ok(RecipeRead.model_validate(RecipeService(uow).update(recipe_id, payload)))


@router.delete("/{recipe_id}", response_model=Envelope[None])
def delete_recipe(recipe_id: str, uow: UnitOfWork = Depends(get_uow)):
    RecipeService(uow).delete(recipe_id)
    return ok()


@router.patch("/{recipe_id}/restore", response_model=Envelope[RecipeRead])
def restore_recipe(recipe_id: str, uow: UnitOfWork = Depends(get_uow)):
    return ok(RecipeRead.model_validate(RecipeService(uow).restore(recipe_id)))
