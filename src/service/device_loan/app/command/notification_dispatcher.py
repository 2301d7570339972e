"""
Waitlist notification pipeline

    notify_next_user(device_id)
      -> waitlist head (earliest un-notified entry)
      -> circuit breaker -> retry -> per-attempt timeout -> mail transport
      -> on confirmed delivery only: mark entry notified

A failed delivery leaves the entry un-notified so the next trigger for the
same device picks the same requester again.
"""

import time

from uuid_utils import UUID, uuid7

from src.platform.exception.exceptions import CircuitOpenError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.device_loan_metrics import metrics
from src.platform.resilience.circuit_breaker import CircuitBreaker
from src.platform.resilience.retry_handler import RetryHandler
from src.platform.resilience.timeout import with_timeout
from src.service.device_loan.app.interface.i_device_query_repo import IDeviceQueryRepo
from src.service.device_loan.app.interface.i_email_notification_command_repo import (
    IEmailNotificationCommandRepo,
)
from src.service.device_loan.app.interface.i_mail_transport import IMailTransport
from src.service.device_loan.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.device_loan.app.interface.i_waitlist_command_repo import IWaitlistCommandRepo
from src.service.device_loan.domain.entity.email_notification_entity import (
    EmailNotification,
)
from src.service.device_loan.domain.entity.user_entity import User
from src.service.device_loan.domain.waitlist_email import (
    EmailContent,
    build_device_available_email,
)


class NotificationDispatcher:
    def __init__(
        self,
        *,
        waitlist_command_repo: IWaitlistCommandRepo,
        device_query_repo: IDeviceQueryRepo,
        user_query_repo: IUserQueryRepo,
        email_notification_command_repo: IEmailNotificationCommandRepo,
        mail_transport: IMailTransport,
        circuit_breaker: CircuitBreaker,
        retry_handler: RetryHandler,
        send_timeout_seconds: float = 5.0,
    ) -> None:
        self.waitlist_command_repo = waitlist_command_repo
        self.device_query_repo = device_query_repo
        self.user_query_repo = user_query_repo
        self.email_notification_command_repo = email_notification_command_repo
        self.mail_transport = mail_transport
        self.circuit_breaker = circuit_breaker
        self.retry_handler = retry_handler
        self.send_timeout_seconds = send_timeout_seconds

    @Logger.io
    async def notify_next_user(self, *, device_id: UUID) -> bool:
        """
        Notify the head of the device's waitlist that a unit is free.

        Never raises; a failure leaves the entry un-notified for the next trigger.

        Returns:
            True when a notification was delivered and the entry marked notified.
            False when nobody is waiting, lookups fail or delivery fails.
        """
        try:
            entry = await self.waitlist_command_repo.get_next_user(device_id=device_id)
        except Exception as e:
            Logger.base.error(
                f'❌ [NOTIFY] Waitlist lookup for device {device_id} failed: '
                f'{type(e).__name__}: {e}'
            )
            metrics.record_waitlist_notification(result='failed')
            return False

        if entry is None:
            Logger.base.info(f'📭 [NOTIFY] Nobody waiting for device {device_id}')
            return False

        try:
            device = await self.device_query_repo.get_by_id(device_id=device_id)
            user = await self.user_query_repo.get_by_id(user_id=entry.user_id)
        except Exception as e:
            Logger.base.error(
                f'❌ [NOTIFY] Lookup for waitlist entry {entry.id} failed: '
                f'{type(e).__name__}: {e}'
            )
            metrics.record_waitlist_notification(result='failed')
            return False

        if device is None or user is None:
            Logger.base.warning(
                f'⚠️  [NOTIFY] Cannot notify waitlist entry {entry.id}: '
                f'device_found={device is not None}, user_found={user is not None}'
            )
            metrics.record_waitlist_notification(result='skipped')
            return False

        content = build_device_available_email(device=device)
        attempts = 0

        async def _attempt() -> None:
            nonlocal attempts
            attempts += 1
            await with_timeout(
                lambda: self.mail_transport.send(
                    address=user.email, subject=content.subject, body=content.body
                ),
                self.send_timeout_seconds,
                operation='email send',
            )

        started = time.perf_counter()
        try:
            await self.circuit_breaker.execute(lambda: self.retry_handler.execute(_attempt))
        except CircuitOpenError as e:
            Logger.base.warning(f'⚡ [NOTIFY] {e}, entry {entry.id} stays queued')
            await self._record_delivery(
                user=user, content=content, attempts=attempts, error_message=str(e)
            )
            metrics.record_waitlist_notification(result='failed')
            return False
        except Exception as e:
            Logger.base.error(
                f'❌ [NOTIFY] Delivery to {user.email} failed after {attempts} attempt(s): '
                f'{type(e).__name__}: {e}'
            )
            await self._record_delivery(
                user=user, content=content, attempts=attempts, error_message=str(e)
            )
            metrics.record_waitlist_notification(result='failed')
            return False

        # The email went out, so the audit row says sent whatever happens next
        await self._record_delivery(user=user, content=content, attempts=attempts)

        try:
            await self.waitlist_command_repo.mark_as_notified(entry_id=entry.id)
        except Exception as e:
            Logger.base.error(
                f'❌ [NOTIFY] Email sent but entry {entry.id} could not be marked notified: '
                f'{type(e).__name__}: {e}'
            )
            metrics.record_waitlist_notification(result='failed')
            return False

        metrics.record_waitlist_notification(result='sent')

        Logger.base.info(
            f'📧 [NOTIFY] Notified user {user.id} about device {device_id} '
            f'({attempts} attempt(s), {time.perf_counter() - started:.3f}s)'
        )
        return True

    async def _record_delivery(
        self,
        *,
        user: User,
        content: EmailContent,
        attempts: int,
        error_message: str | None = None,
    ) -> None:
        if error_message is None:
            notification = EmailNotification.sent(
                id=uuid7(),
                user_id=user.id,
                email_address=user.email,
                subject=content.subject,
                body=content.body,
                attempts=attempts,
            )
        else:
            notification = EmailNotification.failed(
                id=uuid7(),
                user_id=user.id,
                email_address=user.email,
                subject=content.subject,
                body=content.body,
                attempts=attempts,
                error_message=error_message,
            )

        try:
            await self.email_notification_command_repo.create(notification=notification)
        except Exception as e:
            # The audit row is best effort; the waitlist outcome is already decided
            Logger.base.error(f'❌ [NOTIFY] Failed to write delivery record: {e}')
