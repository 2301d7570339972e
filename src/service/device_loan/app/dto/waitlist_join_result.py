import attrs

from src.service.device_loan.domain.entity.waitlist_entry_entity import WaitlistEntry


@attrs.define(frozen=True)
class WaitlistJoinResult:
    entry: WaitlistEntry
    position: int
