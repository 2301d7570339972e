import asyncpg
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.service.device_loan.app.interface.i_loan_command_repo import ILoanCommandRepo
from src.service.device_loan.domain.entity.loan_entity import Loan
from src.service.device_loan.driven_adapter.repo.row_mapping import LOAN_COLUMNS, row_to_loan


class LoanCommandRepoImpl(ILoanCommandRepo):
    def __init__(self, *, conn: asyncpg.Connection) -> None:
        self.conn = conn

    @Logger.io
    async def create(self, *, loan: Loan) -> Loan:
        row = await self.conn.fetchrow(
            f"""
            INSERT INTO loans (loan_id, reservation_id, collected_at, returned_at)
            VALUES ($1, $2, $3, $4)
            RETURNING {LOAN_COLUMNS}
            """,
            loan.id,
            loan.reservation_id,
            loan.collected_at,
            loan.returned_at,
        )
        return row_to_loan(row)

    @Logger.io
    async def mark_returned(self, *, reservation_id: UUID) -> Loan | None:
        row = await self.conn.fetchrow(
            f"""
            UPDATE loans
            SET returned_at = now()
            WHERE reservation_id = $1 AND returned_at IS NULL
            RETURNING {LOAN_COLUMNS}
            """,
            reservation_id,
        )
        return row_to_loan(row) if row else None
