"""
asyncpg Record -> domain entity conversions

Every column is mapped by name so a schema change fails loudly here instead of
silently dropping a field.
"""

from collections.abc import Mapping
from typing import Any

from src.service.device_loan.domain.entity.device_entity import Device
from src.service.device_loan.domain.entity.email_notification_entity import (
    EmailNotification,
)
from src.service.device_loan.domain.entity.inventory_unit_entity import InventoryUnit
from src.service.device_loan.domain.entity.loan_entity import Loan
from src.service.device_loan.domain.entity.reservation_entity import Reservation
from src.service.device_loan.domain.entity.user_entity import User
from src.service.device_loan.domain.entity.waitlist_entry_entity import WaitlistEntry
from src.service.device_loan.domain.enum.notification_status import NotificationStatus
from src.service.device_loan.domain.enum.reservation_status import ReservationStatus
from src.service.device_loan.domain.enum.user_role import UserRole


Row = Mapping[str, Any]

RESERVATION_COLUMNS = (
    'reservation_id, user_id, device_id, inventory_id, reserved_at, due_date, status, updated_at'
)
WAITLIST_COLUMNS = 'waitlist_id, user_id, device_id, added_at, is_notified, notified_at'
LOAN_COLUMNS = 'loan_id, reservation_id, collected_at, returned_at'
DEVICE_COLUMNS = (
    'device_id, brand, model, category, description, default_loan_duration_days, is_deleted'
)
USER_COLUMNS = 'user_id, email, first_name, last_name, role'
EMAIL_NOTIFICATION_COLUMNS = (
    'email_id, user_id, email_address, subject, body, status, attempts, '
    'error_message, sent_at, created_at'
)


def row_to_reservation(row: Row) -> Reservation:
    return Reservation(
        id=row['reservation_id'],
        user_id=row['user_id'],
        device_id=row['device_id'],
        inventory_id=row['inventory_id'],
        reserved_at=row['reserved_at'],
        due_date=row['due_date'],
        status=ReservationStatus(row['status']),
        updated_at=row['updated_at'],
    )


def row_to_waitlist_entry(row: Row) -> WaitlistEntry:
    return WaitlistEntry(
        id=row['waitlist_id'],
        user_id=row['user_id'],
        device_id=row['device_id'],
        added_at=row['added_at'],
        is_notified=row['is_notified'],
        notified_at=row['notified_at'],
    )


def row_to_loan(row: Row) -> Loan:
    return Loan(
        id=row['loan_id'],
        reservation_id=row['reservation_id'],
        collected_at=row['collected_at'],
        returned_at=row['returned_at'],
    )


def row_to_device(row: Row) -> Device:
    return Device(
        id=row['device_id'],
        brand=row['brand'],
        model=row['model'],
        category=row['category'],
        description=row['description'],
        default_loan_duration_days=row['default_loan_duration_days'],
        is_deleted=row['is_deleted'],
    )


def row_to_inventory_unit(row: Row) -> InventoryUnit:
    return InventoryUnit(
        id=row['inventory_id'],
        device_id=row['device_id'],
        serial_number=row['serial_number'],
        is_available=row['is_available'],
        created_at=row['created_at'],
    )


def row_to_user(row: Row) -> User:
    return User(
        id=row['user_id'],
        email=row['email'],
        first_name=row['first_name'],
        last_name=row['last_name'],
        role=UserRole(row['role']),
    )


def row_to_email_notification(row: Row) -> EmailNotification:
    return EmailNotification(
        id=row['email_id'],
        user_id=row['user_id'],
        email_address=row['email_address'],
        subject=row['subject'],
        body=row['body'],
        status=NotificationStatus(row['status']),
        attempts=row['attempts'],
        error_message=row['error_message'],
        sent_at=row['sent_at'],
        created_at=row['created_at'],
    )
