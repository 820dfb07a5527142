"""
Table booking separation rule.

A table may hold at most one confirmed reservation within any
``MIN_SEPARATION_HOURS`` window on the same calendar date. The distance
between two bookings is measured on the time of day only; bookings on
different dates never collide, so a 23:30 booking and a 00:15 booking on
the next day are not compared with each other.
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import Iterable, Optional, Protocol, Union

MIN_SEPARATION_HOURS = 2

CONFLICT_MESSAGE = (
    f"Cannot make a reservation within {MIN_SEPARATION_HOURS} hours "
    "of an existing confirmed reservation"
)


class ReservationStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELED = "canceled"


class BookedSlot(Protocol):
    id: str
    status: str
    reservation_date: date
    reservation_time: time


@dataclass(frozen=True)
class NoConflict:
    pass


@dataclass(frozen=True)
class ConflictingWith:
    reservation_id: str


ConflictResult = Union[NoConflict, ConflictingWith]


def hours_between(first: time, second: time) -> float:
    """Absolute distance in hours between two times of day, without wraparound."""
    anchor = date.min
    delta = datetime.combine(anchor, first) - datetime.combine(anchor, second)
    return abs(delta.total_seconds()) / 3600


def check_conflict(
    candidate_date: date,
    candidate_time: time,
    existing: Optional[BookedSlot],
) -> ConflictResult:
    if existing is None:
        return NoConflict()
    if existing.status != ReservationStatus.CONFIRMED.value:
        return NoConflict()
    if existing.reservation_date != candidate_date:
        return NoConflict()
    if hours_between(existing.reservation_time, candidate_time) < MIN_SEPARATION_HOURS:
        return ConflictingWith(reservation_id=existing.id)
    return NoConflict()


def find_conflict(
    candidate_date: date,
    candidate_time: time,
    existing_reservations: Iterable[BookedSlot],
) -> ConflictResult:
    """First reservation that blocks the candidate slot, or ``NoConflict``."""
    for existing in existing_reservations:
        result = check_conflict(candidate_date, candidate_time, existing)
        if isinstance(result, ConflictingWith):
            return result
    return NoConflict()
