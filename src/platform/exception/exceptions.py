class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int, code: str | None = None) -> None:
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400, code: str | None = None) -> None:
        super().__init__(message, status_code, code)


class ValidationError(DomainError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 400, 'VALIDATION_ERROR')


class ForbiddenError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 403, 'FORBIDDEN')


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404, 'NOT_FOUND')


class ConflictError(CustomBaseError):
    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message, 409, code)


class TransientInfrastructureError(CustomBaseError):
    """Retryable I/O fault of a downstream dependency (network blip, 5xx, overload)"""

    def __init__(self, message: str) -> None:
        super().__init__(message, 503, 'TRANSIENT_FAILURE')


class CircuitOpenError(CustomBaseError):
    """Fail-fast signal raised while a circuit breaker is OPEN"""

    def __init__(self, breaker_name: str) -> None:
        self.breaker_name = breaker_name
        super().__init__(f'Circuit breaker {breaker_name} is OPEN', 503, 'CIRCUIT_OPEN')


class RateLimitExceededError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 429, 'RATE_LIMITED')
