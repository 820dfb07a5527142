from fastapi import APIRouter, Depends

from restaurant.api.deps import get_uow, require_staff
from restaurant.api.responses import Envelope, ok
from restaurant.application.schemas import IngredientCreate, IngredientRead, IngredientUpdate
from restaurant.application.services.auth import CurrentUser
from restaurant.application.services.ingredients import IngredientService
from restaurant.infrastructure.unit_of_work import UnitOfWork

router = APIRouter(prefix="/ingredients", tags=["ingredients"], dependencies=[Depends(require_staff)])


@router.get("", response_model=Envelope[list[IngredientRead]])
def list_ingredients(uow: UnitOfWork = Depends(get_uow)):
    return ok([IngredientRead.model_validate(i) for i in IngredientService(uow).list()])


@router.post("", response_model=Envelope[IngredientRead], status_code=201)
def create_ingredient(payload: IngredientCreate, uow: UnitOfWork = Depends(get_uow)):
    return ok(IngredientRead.model_validate(IngredientService(uow).create(payload)), 201)


@router.get("/{ingredient_id}", response_model=Envelope[IngredientRead])
def get_ingredient(ingredient_id: str, uow: UnitOfWork = Depends(get_uow)):
    return ok(IngredientRead.model_validate(IngredientService(uow).get(ingredient_id)))


@router.patch("/{ingredient_id}", response_model=Envelope[IngredientRead])
def update_ingredient(ingredient_id: str, payload: IngredientUpdate, uow: UnitOfWork = Depends(get_uow)):
    return ok(IngredientRead.model_validate(IngredientService(uow).update(ingredient_id, payload)))


@router.delete("/{ingredient_id}", response_model=Envelope[None])
def delete_ingredient(ingredient_id: str, uow: UnitOfWork = Depends(get_uow)):
    IngredientService(uow).delete(ingredient_id)
    return ok()


@router.patch("/{ingredient_id}/restore", response_model=Envelope[IngredientRead])
def restore_ingredient(ingredient_id: str, uow: UnitOfWork = Depends(get_uow)):
    return ok(IngredientRead.model_validate(IngredientService(uow).restore(ingredient_id)))
