from fastapi import APIRouter, Depends

from restaurant.api.deps import get_current_user, get_uow, require_staff
from restaurant.api.responses import Envelope, ok
from restaurant.application.schemas import ReservationCreate, ReservationRead, ReservationUpdate
from restaurant.application.services.auth import CurrentUser
from restaurant.application.services.reservations import ReservationService
from restaurant.infrastructure.unit_of_work import UnitOfWork

router = APIRouter(prefix="/reservations", tags=["reservations"])


@router.get("", response_model=Envelope[list[ReservationRead]])
def list_reservations(uow: UnitOfWork = Depends(get_uow)):
    return ok([ReservationRead.model_validate(r) for r in ReservationService(uow).list()])


@router.get("/{reservation_id}", response_model=Envelope[ReservationRead])
def get_reservation(reservation_id: str, uow: UnitOfWork = Depends(get_uow)):
    return ok(ReservationRead.model_validate(ReservationService(uow).get(reservation_id)))


@router.post("", response_model=Envelope[ReservationRead], status_code=201)
def create_reservation(
    payload: ReservationCreate,
    uow: UnitOfWork = Depends(get_uow),
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    Book a table for the authenticated user.

    Rejected with 409 when the table already has a confirmed reservation
    less than two hours away on the same date.
    """
    reservation = ReservationService(uow).create(payload, current_user.id)
    return ok(ReservationRead.model_validate(reservation), 201)


@router.patch("/{reservation_id}", response_model=Envelope[ReservationRead])
def update_reservation(
    reservation_id: str,
    payload: ReservationUpdate,
    uow: UnitOfWork = Depends(get_uow),
    _: CurrentUser = Depends(get_current_user),
):
    return ok(ReservationRead.model_validate(ReservationService(uow).update(reservation_id, payload)))


@router.delete("/{reservation_id}", response_model=Envelope[None])
def delete_reservation(reservation_id: str, uow: UnitOfWork = Depends(get_uow), _: CurrentUser = Depends(require_staff)):
    ReservationService(uow).delete(reservation_id)
    return ok()


@router.patch("/{reservation_id}/restore", response_model=Envelope[ReservationRead])
def restore_reservation(
    reservation_id: str,
    uow: UnitOfWork = Depends(get_uow),
    _: CurrentUser = Depends(require_staff),
):
    return ok(ReservationRead.model_validate(ReservationService(uow).restore(reservation_id)))
