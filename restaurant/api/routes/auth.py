from fastapi import APIRouter, Depends

from restaurant.api.deps import get_uow
from restaurant.api.responses import Envelope, ok
from restaurant.application.schemas import LoginRequest, LoginResponse, UserRead
from restaurant.application.services.auth import AuthService
from restaurant.infrastructure.unit_of_work import UnitOfWork

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=Envelope[LoginResponse])
def login(payload: LoginRequest, uow: UnitOfWork = Depends(get_uow)):
    """Exchange email and password for a bearer token."""
    user, token = AuthService(uow).login(payload)
    return ok(LoginResponse(user=UserRead.model_validate(user), token=token))
