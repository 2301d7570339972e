"""Device Loan Domain Enums"""

from src.service.device_loan.domain.enum.notification_status import NotificationStatus
from src.service.device_loan.domain.enum.reservation_status import ReservationStatus
from src.service.device_loan.domain.enum.user_role import UserRole

__all__ = ['NotificationStatus', 'ReservationStatus', 'UserRole']
