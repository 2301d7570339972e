"""
Unit tests for the Reservation state machine

    pending -> collected | cancelled
    collected -> returned | completed
    cancelled, returned, completed are terminal
"""

from datetime import datetime, timedelta, timezone

import pytest
from uuid_utils import uuid7

from src.service.device_loan.domain.device_loan_errors import InvalidStateError
from src.service.device_loan.domain.entity.reservation_entity import Reservation
from src.service.device_loan.domain.enum.reservation_status import ReservationStatus
from test.service.device_loan.unit.helpers import make_reservation


pytestmark = pytest.mark.unit


class TestReservationCreate:
    def test_new_reservation_is_pending_with_due_date_from_loan_duration(self):
        reserved_at = datetime(2025, 1, 10, 10, 30, tzinfo=timezone.utc)

        reservation = Reservation.create(
            id=uuid7(),
            user_id=uuid7(),
            device_id=uuid7(),
            inventory_id=uuid7(),
            loan_duration_days=7,
            reserved_at=reserved_at,
        )

        assert reservation.status == ReservationStatus.PENDING
        assert reservation.due_date == reserved_at + timedelta(days=7)
        assert reservation.holds_inventory is True


class TestReservationTransitions:
    def test_pending_can_be_collected(self):
        collected = make_reservation().collect()

        assert collected.status == ReservationStatus.COLLECTED
        assert collected.holds_inventory is True

    def test_pending_can_be_cancelled(self):
        reservation = make_reservation()

        cancelled = reservation.cancel()

        assert cancelled.status == ReservationStatus.CANCELLED
        assert cancelled.holds_inventory is False
        # The original is untouched
        assert reservation.status == ReservationStatus.PENDING

    def test_collected_can_be_returned_or_completed(self):
        collected = make_reservation(status=ReservationStatus.COLLECTED)

        assert collected.return_device().status == ReservationStatus.RETURNED
        assert collected.complete().status == ReservationStatus.COMPLETED

    def test_collected_reservation_cannot_be_cancelled(self):
        """
        Given: a reservation already collected
        When: the owner tries to cancel
        Then: InvalidStateError, nothing changes
        """
        collected = make_reservation(status=ReservationStatus.COLLECTED)

        with pytest.raises(InvalidStateError, match='Only pending reservations can be cancelled'):
            collected.cancel()

    def test_pending_cannot_be_returned(self):
        with pytest.raises(InvalidStateError, match='from pending to returned'):
            make_reservation().return_device()

    @pytest.mark.parametrize(
        'terminal',
        [ReservationStatus.CANCELLED, ReservationStatus.RETURNED, ReservationStatus.COMPLETED],
    )
    def test_terminal_states_accept_no_transition(self, terminal):
        reservation = make_reservation(status=terminal)

        assert reservation.holds_inventory is False
        for target in ReservationStatus:
            assert reservation.can_transition_to(target) is False

    def test_invalid_state_error_is_a_conflict(self):
        with pytest.raises(InvalidStateError) as exc_info:
            make_reservation(status=ReservationStatus.CANCELLED).collect()

        assert exc_info.value.status_code == 409
        assert exc_info.value.code == 'INVALID_STATE'
