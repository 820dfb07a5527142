from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from restaurant.application.errors import ForbiddenError, UnauthorizedError
from restaurant.application.services.auth import CurrentUser
from restaurant.infrastructure.db import get_db
from restaurant.infrastructure.security import decode_access_token
from restaurant.infrastructure.unit_of_work import UnitOfWork
from shared.core import get_logger, set_request_context

security = HTTPBearer(auto_error=False)
logger = get_logger(__name__)


def get_uow(db: Session = Depends(get_db)) -> UnitOfWork:
    return UnitOfWork(db)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CurrentUser:
    # Must stay async: the user id context var has to be set in the request task
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise UnauthorizedError("Missing or malformed Authorization header")
    payload = decode_access_token(credentials.credentials)
    if not payload:
        logger.warning("Rejected invalid or expired token")
        raise UnauthorizedError("Invalid or expired token")
    user = CurrentUser(id=str(payload["sub"]), role=str(payload.get("role", "")))
    set_request_context(user_id=user.id)
    return user


def require_roles(*roles: str):
    async def _check(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if current_user.role not in roles:
            logger.warning(
                "Role not allowed",
                extra={"extra_fields": {"role": current_user.role, "allowed": list(roles)}},
            )
            raise ForbiddenError("You do not have permission to perform this action")
        return current_user
    return _check


require_staff = require_roles("admin", "staff")
require_admin = require_roles("admin")
