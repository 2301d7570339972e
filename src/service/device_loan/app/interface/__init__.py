"""Application layer interfaces (Ports)"""

from src.service.device_loan.app.interface.i_device_query_repo import IDeviceQueryRepo
from src.service.device_loan.app.interface.i_email_notification_command_repo import (
    IEmailNotificationCommandRepo,
)
from src.service.device_loan.app.interface.i_inventory_allocator import IInventoryAllocator
from src.service.device_loan.app.interface.i_inventory_command_repo import IInventoryCommandRepo
from src.service.device_loan.app.interface.i_loan_command_repo import ILoanCommandRepo
from src.service.device_loan.app.interface.i_mail_transport import IMailTransport
from src.service.device_loan.app.interface.i_reservation_command_repo import (
    IReservationCommandRepo,
)
from src.service.device_loan.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.device_loan.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.device_loan.app.interface.i_waitlist_command_repo import IWaitlistCommandRepo
from src.service.device_loan.app.interface.i_waitlist_query_repo import IWaitlistQueryRepo

__all__ = [
    'IDeviceQueryRepo',
    'IEmailNotificationCommandRepo',
    'IInventoryAllocator',
    'IInventoryCommandRepo',
    'ILoanCommandRepo',
    'IMailTransport',
    'IReservationCommandRepo',
    'IReservationQueryRepo',
    'IUserQueryRepo',
    'IWaitlistCommandRepo',
    'IWaitlistQueryRepo',
]
