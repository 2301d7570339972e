"""Sparse reservation update."""

from datetime import datetime
from typing import Any, Optional

import attrs

from src.service.device_loan.domain.enum.reservation_status import ReservationStatus


@attrs.define(frozen=True)
class ReservationPatch:
    """
    Fields left as None are not touched by the UPDATE.

    `to_assignments` lists the updatable columns by name; adding a field here
    means adding it there too.
    """

    status: Optional[ReservationStatus] = None
    due_date: Optional[datetime] = None

    def to_assignments(self) -> list[tuple[str, Any]]:
        assignments: list[tuple[str, Any]] = []
        if self.status is not None:
            assignments.append(('status', self.status.value))
        if self.due_date is not None:
            assignments.append(('due_date', self.due_date))
        return assignments
