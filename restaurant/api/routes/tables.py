from fastapi import APIRouter, Depends

from restaurant.api.deps import get_uow, require_staff
from restaurant.api.responses import Envelope, ok
from restaurant.application.schemas import TableCreate, TableRead, TableUpdate
from restaurant.application.services.auth import CurrentUser
from restaurant.application.services.tables import TableService
from restaurant.infrastructure.unit_of_work import UnitOfWork

router = APIRouter(prefix="/tables", tags=["tables"])


@router.get("", response_model=Envelope[list[TableRead]])
def list_tables(uow: UnitOfWork = Depends(get_uow)):
    return ok([TableRead.model_validate(t) for t in TableService(uow).list()])


@router.get("/{table_id}", response_model=Envelope[TableRead])
def get_table(table_id: str, uow: UnitOfWork = Depends(get_uow)):
    return ok(TableRead.model_validate(TableService(uow).get(table_id)))


@router.post("", response_model=Envelope[TableRead], status_code=201)
def create_table(payload: TableCreate, uow: UnitOfWork = Depends(get_uow), _: CurrentUser = Depends(require_staff)):
    return ok(TableRead.model_validate(TableService(uow).create(payload)), 201)


@router.patch("/{table_id}", response_model=Envelope[TableRead])
def update_table(
    table_id: str,
    payload: TableUpdate,
    uow: UnitOfWork = Depends(get_uow),
    _: CurrentUser = Depends(require_staff),
):
    return ok(TableRead.model_validate(TableService(uow).update(table_id, payload)))


@router.delete("/{table_id}", response_model=Envelope[None])
def delete_table(table_id: str, uow: UnitOfWork = Depends(get_uow), _: CurrentUser = Depends(require_staff)):
    TableService(uow).delete(table_id)
    return ok()


@router.patch("/{table_id}/restore", response_model=Envelope[TableRead])
def restore_table(table_id: str, uow: UnitOfWork = Depends(get_uow), _: CurrentUser = Depends(require_staff)):
    return ok(TableRead.model_validate(TableService(uow).restore(table_id)))
