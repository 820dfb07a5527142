from typing import Sequence

from restaurant.application.errors import ConflictError, NotFoundError
from restaurant.application.schemas import ReservationCreate, ReservationUpdate
from restaurant.domain.models import Reservation
from restaurant.domain.reservation_rules import (
    CONFLICT_MESSAGE, ConflictingWith, ReservationStatus, find_conflict,
)
from restaurant.infrastructure.unit_of_work import UnitOfWork
from shared.core import get_logger

logger = get_logger(__name__)


class ReservationService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    def list(self) -> Sequence[Reservation]:
        return self.uow.reservations.list()

    def get(self, reservation_id: str) -> Reservation:
        reservation = self.uow.reservations.get(reservation_id)
        if not reservation:
            raise NotFoundError("Reservation not found")
        return reservation

    def create(self, data: ReservationCreate, user_id: str) -> Reservation:
        with self.uow:
            table = self.uow.tables.get(data.table_id)
            if not table:
                raise NotFoundError("Table not found")

            booked = self.uow.reservations.list_confirmed_for_table(table.id, data.reservation_date)
            result = find_conflict(data.reservation_date, data.reservation_time, booked)
            if isinstance(result, ConflictingWith):
                logger.warning(
                    "Reservation rejected, table already booked",
                    extra={"extra_fields": {
                        "table_id": table.id,
                        "date": data.reservation_date.isoformat(),
                        "time": data.reservation_time.isoformat(),
                        "conflicting_reservation_id": result.reservation_id,
                    }},
                )
                raise ConflictError(CONFLICT_MESSAGE)

            reservation = self.uow.reservations.add(Reservation(
                table_id=table.id,
                user_id=user_id,
                reservation_date=data.reservation_date,
                reservation_time=data.reservation_time,
                number_of_guests=data.number_of_guests,
                status=ReservationStatus.PENDING.value,
            ))
        logger.info("Reservation created", extra={"extra_fields": {"reservation_id": reservation.id}})
        return reservation

    def update(self, reservation_id: str, data: ReservationUpdate) -> Reservation:
        # Confirming or moving a booking is not re-checked for conflicts
        with self.uow:
            reservation = self.get(reservation_id)
            for field, value in data.model_dump(exclude_none=True).items():
                setattr(reservation, field, value)
            reservation = self.uow.reservations.save(reservation)
        return reservation

    def delete(self, reservation_id: str) -> None:
        with self.uow:
            self.uow.reservations.soft_delete(self.get(reservation_id))

    def restore(self, reservation_id: str) -> Reservation:
        with self.uow:
            reservation = self.uow.reservations.get_deleted(reservation_id)
            if not reservation:
                raise NotFoundError("Deleted reservation not found")
            reservation = self.uow.reservations.restore(reservation)
        return reservation
