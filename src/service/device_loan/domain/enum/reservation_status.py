from enum import StrEnum


class ReservationStatus(StrEnum):
    PENDING = 'pending'
    COLLECTED = 'collected'
    CANCELLED = 'cancelled'
    COMPLETED = 'completed'
    RETURNED = 'returned'


# Statuses that still hold an inventory unit
ACTIVE_RESERVATION_STATUSES = frozenset({ReservationStatus.PENDING, ReservationStatus.COLLECTED})
