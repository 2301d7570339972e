from abc import ABC, abstractmethod

from uuid_utils import UUID

from src.service.device_loan.domain.entity.loan_entity import Loan


class ILoanCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, loan: Loan) -> Loan:
        pass

    @abstractmethod
    async def mark_returned(self, *, reservation_id: UUID) -> Loan | None:
        """
        Close the open loan of a reservation (sets returned_at to now)

        Returns:
            The closed loan, or None when the reservation has no open loan
        """
        pass
