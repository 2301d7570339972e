"""Application layer DTOs"""

from src.service.device_loan.app.dto.reservation_patch import ReservationPatch
from src.service.device_loan.app.dto.waitlist_join_result import WaitlistJoinResult

__all__ = ['ReservationPatch', 'WaitlistJoinResult']
