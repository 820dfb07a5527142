from typing import Sequence

from restaurant.application.errors import ConflictError, ForbiddenError, NotFoundError
from restaurant.application.schemas import UserCreate, UserUpdate
from restaurant.application.services.auth import CurrentUser
from restaurant.domain.models import User
from restaurant.infrastructure.security import hash_password
from restaurant.infrastructure.unit_of_work import UnitOfWork
from shared.core import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    def list(self) -> Sequence[User]:
        return self.uow.users.list()

    def get(self, user_id: str) -> User:
        user = self.uow.users.get(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def register(self, data: UserCreate) -> User:
        with self.uow:
            if self.uow.users.email_taken(data.email):
                raise ConflictError("Email already registered")
            user = self.uow.users.add(User(
                name=data.name,
                email=data.email,
                password=hash_password(data.password),
                phone=data.phone,
                role="customer",
            ))
        logger.info("User registered", extra={"extra_fields": {"user_id": user.id}})
        return user

    def update(self, user_id: str, data: UserUpdate, actor: CurrentUser) -> User:
        if actor.id != user_id and not actor.is_admin:
            raise ForbiddenError("You can only update your own account")
        if data.role is not None and not actor.is_admin:
            raise ForbiddenError("Only an admin can change roles")

        with self.uow:
            user = self.get(user_id)
            if data.email is not None and data.email != user.email:
                if self.uow.users.email_taken(data.email):
                    raise ConflictError("Email already registered")
                user.email = data.email
            if data.name is not None:
                user.name = data.name
            if data.phone is not None:
                user.phone = data.phone
            if data.password is not None:
                user.password = hash_password(data.password)
            if data.role is not None:
                user.role = data.role
            user = self.uow.users.save(user)
        return user

    def delete(self, user_id: str) -> None:
        with self.uow:
            self.uow.users.soft_delete(self.get(user_id))
        logger.info("User deleted", extra={"extra_fields": {"user_id": user_id}})

    def restore(self, user_id: str) -> User:
        with self.uow:
            user = self.uow.users.get_deleted(user_id)
            if not user:
                raise NotFoundError("Deleted user not found")
            user = self.uow.users.restore(user)
        return user
