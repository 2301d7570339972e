from src.platform.exception.exceptions import ConflictError


class NoInventoryError(ConflictError):
    def __init__(self, message: str = 'No inventory available for this device') -> None:
        super().__init__(message, 'NO_INVENTORY')


class AlreadyJoinedError(ConflictError):
    def __init__(self, message: str = 'User is already on the waitlist for this device') -> None:
        super().__init__(message, 'ALREADY_JOINED')


class InvalidStateError(ConflictError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 'INVALID_STATE')
