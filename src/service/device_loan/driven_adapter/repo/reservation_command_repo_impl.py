import asyncpg
from uuid_utils import UUID

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.device_loan.app.dto.reservation_patch import ReservationPatch
from src.service.device_loan.app.interface.i_reservation_command_repo import (
    IReservationCommandRepo,
)
from src.service.device_loan.domain.entity.reservation_entity import Reservation
from src.service.device_loan.driven_adapter.repo.row_mapping import (
    RESERVATION_COLUMNS,
    row_to_reservation,
)


class ReservationCommandRepoImpl(IReservationCommandRepo):
    """Reservation writes on the unit of work's connection"""

    def __init__(self, *, conn: asyncpg.Connection) -> None:
        self.conn = conn

    @Logger.io
    async def create(self, *, reservation: Reservation) -> Reservation:
        row = await self.conn.fetchrow(
            f"""
            INSERT INTO reservations (
                reservation_id, user_id, device_id, inventory_id,
                reserved_at, due_date, status, updated_at
            )
            VALUES ($1, $2, $3, $4, $5, $6, $7, $5)
            RETURNING {RESERVATION_COLUMNS}
            """,
            reservation.id,
            reservation.user_id,
            reservation.device_id,
            reservation.inventory_id,
            reservation.reserved_at,
            reservation.due_date,
            reservation.status.value,
        )
        return row_to_reservation(row)

    @Logger.io
    async def get_for_update(self, *, reservation_id: UUID) -> Reservation | None:
        row = await self.conn.fetchrow(
            f"""
            SELECT {RESERVATION_COLUMNS}
            FROM reservations
            WHERE reservation_id = $1
            FOR UPDATE
            """,
            reservation_id,
        )
        if not row:
            return None
        return row_to_reservation(row)

    @Logger.io
    async def update(self, *, reservation_id: UUID, patch: ReservationPatch) -> Reservation:
        assignments = patch.to_assignments()
        if not assignments:
            raise ValueError('ReservationPatch has no fields to update')

        # Column names come from ReservationPatch.to_assignments, values are bound
        set_clause = ', '.join(
            f'{column} = ${index}' for index, (column, _) in enumerate(assignments, start=2)
        )
        row = await self.conn.fetchrow(
            f"""
            UPDATE reservations
            SET {set_clause}, updated_at = now()
            WHERE reservation_id = $1
            RETURNING {RESERVATION_COLUMNS}
            """,
            reservation_id,
            *(value for _, value in assignments),
        )
        if not row:
            raise NotFoundError('Reservation not found')
        return row_to_reservation(row)
