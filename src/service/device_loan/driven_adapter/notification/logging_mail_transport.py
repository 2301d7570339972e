import anyio

from src.platform.exception.exceptions import TransientInfrastructureError
from src.platform.logging.loguru_io import Logger
from src.service.device_loan.app.interface.i_mail_transport import IMailTransport


class LoggingMailTransport(IMailTransport):
    """
    Mail transport that records outgoing messages in the log instead of
    talking to an SMTP relay.

    With `simulate_failure=True` every send raises TransientInfrastructureError,
    which exercises the retry and circuit breaker path end to end.
    """

    def __init__(
        self,
        *,
        from_address: str,
        simulate_failure: bool = False,
        latency_seconds: float = 0.1,
    ) -> None:
        self.from_address = from_address
        self.simulate_failure = simulate_failure
        self.latency_seconds = latency_seconds

    async def send(self, *, address: str, subject: str, body: str) -> None:
        if self.simulate_failure:
            raise TransientInfrastructureError('Email service temporarily unavailable')

        # Stand-in for the network round trip
        if self.latency_seconds:
            await anyio.sleep(self.latency_seconds)

        Logger.base.info(f'📧 [MAIL] {self.from_address} -> {address}: {subject}')
