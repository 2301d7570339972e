from src.platform.database.db_setting import get_asyncpg_pool
from src.platform.logging.loguru_io import Logger
from src.service.device_loan.app.interface.i_email_notification_command_repo import (
    IEmailNotificationCommandRepo,
)
from src.service.device_loan.domain.entity.email_notification_entity import (
    EmailNotification,
)
from src.service.device_loan.driven_adapter.repo.row_mapping import (
    EMAIL_NOTIFICATION_COLUMNS,
    row_to_email_notification,
)


class EmailNotificationCommandRepoImpl(IEmailNotificationCommandRepo):
    @Logger.io
    async def create(self, *, notification: EmailNotification) -> EmailNotification:
        async with (await get_asyncpg_pool()).acquire() as conn:
            row = await conn.fetchrow(
                f"""
                INSERT INTO email_notifications (
                    email_id, user_id, email_address, subject, body,
                    status, attempts, error_message, sent_at, created_at
                )
                VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, COALESCE($10::timestamptz, now()))
                RETURNING {EMAIL_NOTIFICATION_COLUMNS}
                """,
                notification.id,
                notification.user_id,
                notification.email_address,
                notification.subject,
                notification.body,
                notification.status.value,
                notification.attempts,
                notification.error_message,
                notification.sent_at,
                notification.created_at,
            )
            return row_to_email_notification(row)
