"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.device_loan.app.command import (
    cancel_reservation_use_case,
    join_waitlist_use_case,
    remove_from_waitlist_use_case,
    reserve_device_use_case,
    update_reservation_status_to_collected_use_case,
    update_reservation_status_to_returned_use_case,
)
from src.service.device_loan.app.query import (
    get_waitlist_position_use_case,
    list_user_reservations_use_case,
    list_user_waitlist_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    reserve_device_use_case,
    cancel_reservation_use_case,
    update_reservation_status_to_collected_use_case,
    update_reservation_status_to_returned_use_case,
    join_waitlist_use_case,
    remove_from_waitlist_use_case,
    get_waitlist_position_use_case,
    list_user_reservations_use_case,
    list_user_waitlist_use_case,
]
