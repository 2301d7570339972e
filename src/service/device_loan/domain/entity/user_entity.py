import attrs
from uuid_utils import UUID

from src.service.device_loan.domain.enum.user_role import UserRole


@attrs.define
class User:
    id: UUID
    email: str
    first_name: str = ''
    last_name: str = ''
    role: UserRole = UserRole.STUDENT

    @property
    def full_name(self) -> str:
        return f'{self.first_name} {self.last_name}'.strip()
