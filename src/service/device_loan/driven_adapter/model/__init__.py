"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.device_loan.driven_adapter.model.device_inventory_model import (
    DeviceInventoryModel,
)
from src.service.device_loan.driven_adapter.model.device_model import DeviceModel
from src.service.device_loan.driven_adapter.model.email_notification_model import (
    EmailNotificationModel,
)
from src.service.device_loan.driven_adapter.model.loan_model import LoanModel
from src.service.device_loan.driven_adapter.model.reservation_model import ReservationModel
from src.service.device_loan.driven_adapter.model.user_model import UserModel
from src.service.device_loan.driven_adapter.model.waitlist_model import WaitlistModel

__all__ = [
    'DeviceInventoryModel',
    'DeviceModel',
    'EmailNotificationModel',
    'LoanModel',
    'ReservationModel',
    'UserModel',
    'WaitlistModel',
]
