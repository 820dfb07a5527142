from dataclasses import dataclass

from restaurant.application.errors import NotFoundError, UnauthorizedError
from restaurant.application.schemas import LoginRequest
from restaurant.domain.models import User
from restaurant.infrastructure.security import create_access_token, verify_password
from restaurant.infrastructure.unit_of_work import UnitOfWork
from shared.core import get_logger

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


@dataclass(frozen=True)
class CurrentUser:
    """Identity carried by a verified access token."""

    id: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @property
    def is_staff(self) -> bool:
        return self.role in ("admin", "staff")


class AuthService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    def login(self, data: LoginRequest) -> tuple[User, str]:
        user = self.uow.users.get_by_email(data.email)
        if not user:
            logger.warning("Login for unknown email")
            raise NotFoundError(INVALID_CREDENTIALS)
        if not verify_password(data.password, user.password):
            logger.warning("Login with wrong password", extra={"extra_fields": {"user_id": user.id}})
            raise UnauthorizedError(INVALID_CREDENTIALS)
        token = create_access_token(user.id, user.role)
        logger.info("User logged in", extra={"extra_fields": {"user_id": user.id, "role": user.role}})
        return user, token
