from fastapi import APIRouter, Depends

from restaurant.api.deps import get_current_user, get_uow, require_staff
from restaurant.api.responses import Envelope, ok
from restaurant.application.schemas import UserCreate, UserRead, UserUpdate
from restaurant.application.services.auth import CurrentUser
from restaurant.application.services.users import UserService
from restaurant.infrastructure.unit_of_work import UnitOfWork

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=Envelope[UserRead], status_code=201)
def register(payload: UserCreate, uow: UnitOfWork = Depends(get_uow)):
    user = UserService(uow).register(payload)
    return ok(UserRead.model_validate(user), 201)


@router.get("", response_model=Envelope[list[UserRead]])
def list_users(uow: UnitOfWork = Depends(get_uow), _: CurrentUser = Depends(require_staff)):
    return ok([UserRead.model_validate(u) for u in UserService(uow).list()])


@router.get("/{user_id}", response_model=Envelope[UserRead])
def get_user(user_id: str, uow: UnitOfWork = Depends(get_uow), _: CurrentUser = Depends(get_current_user)):
    return ok(UserRead.model_validate(UserService(uow).get(user_id)))


@router.patch("/{user_id}", response_model=Envelope[UserRead])
def update_user(
    user_id: str,
    payload: UserUpdate,
    uow: UnitOfWork = Depends(get_uow),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Users may edit themselves; admins may edit anyone and change roles."""
    user = UserService(uow).update(user_id, payload, current_user)
    return ok(UserRead.model_validate(user))


@router.delete("/{user_id}", response_model=Envelope[None])
def delete_user(user_id: str, uow: UnitOfWork = Depends(get_uow), _: CurrentUser = Depends(require_staff)):
    UserService(uow).delete(user_id)
    return ok()


@router.patch("/{user_id}/restore", response_model=Envelope[UserRead])
def restore_user(user_id: str, uow: UnitOfWork = Depends(get_uow), _: CurrentUser = Depends(require_staff)):
    return ok(UserRead.model_validate(UserService(uow).restore(user_id)))
