from fastapi import APIRouter, Depends

from restaurant.api.deps import get_uow, require_staff
from restaurant.api.responses import Envelope, ok
from restaurant.application.schemas import InventoryCreate, InventoryMenuRead, InventoryRead, InventoryUpdate
from restaurant.application.services.inventory import InventoryService
from restaurant.infrastructure.unit_of_work import UnitOfWork

router = APIRouter(prefix="/inventory", tags=["inventory"], dependencies=[Depends(require_staff)])


@router.post("", response_model=Envelope[InventoryRead], status_code=201)
def create_inventory(payload: InventoryCreate, uow: UnitOfWork = Depends(get_uow)):
    return ok(InventoryRead.model_validate(InventoryService(uow).create(payload)), 201)


@router.get("/menu/{menu_id}", response_model=Envelope[InventoryMenuRead])
def menu_portions(menu_id: str, uow: UnitOfWork = Depends(get_uow)):
    """How many whole portions of the menu item current stock can produce."""
    return ok(InventoryService(uow).calculate_menu_portions(menu_id))


@router.get("/{ingredient_id}/ingredient", response_model=Envelope[InventoryRead])
def get_inventory_by_ingredient(ingredient_id: str, uow: UnitOfWork = Depends(get_uow)):
    return ok(InventoryRead.model_validate(InventoryService(uow).get_by_ingredient(ingredient_id)))


@router.get("/{inventory_id}", response_model=Envelope[InventoryRead])
def get_inventory(inventory_id: str, uow: UnitOfWork = Depends(get_uow)):
    return ok(InventoryRead.model_validate(InventoryService(uow).get(inventory_id)))


@router.patch("/{inventory_id}", response_model=Envelope[InventoryRead])
def update_inventory(inventory_id: str, payload: InventoryUpdate, uow: UnitOfWork = Depends(get_uow)):
    return ok(InventoryRead.model_validate(InventoryService(uow).update(inventory_id, payload)))


@router.delete("/{inventory_id}", response_model=Envelope[None])
def delete_inventory(inventory_id: str, uow: UnitOfWork = Depends(get_uow)):
    InventoryService(uow).delete(inventory_id)
    return ok()


@router.patch("/{inventory_id}/restore", response_model=Envelope[InventoryRead])
def restore_inventory(inventory_id: str, uow: UnitOfWork = Depends(get_uow)):
    return ok(InventoryRead.model_validate(InventoryService(uow).restore(inventory_id)))
