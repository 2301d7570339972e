"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.unit_of_work import AsyncpgUnitOfWork
from src.platform.metrics.device_loan_metrics import metrics
from src.platform.resilience.circuit_breaker import CircuitBreaker
from src.platform.resilience.retry_handler import RetryHandler, RetryPolicy, is_retryable_error
from src.platform.task.background_task_runner import AnyioBackgroundTaskRunner
from src.service.device_loan.app.command.notification_dispatcher import NotificationDispatcher
from src.service.device_loan.driven_adapter.notification.logging_mail_transport import (
    LoggingMailTransport,
)
from src.service.device_loan.driven_adapter.repo.device_query_repo_impl import DeviceQueryRepoImpl
from src.service.device_loan.driven_adapter.repo.email_notification_command_repo_impl import (
    EmailNotificationCommandRepoImpl,
)
from src.service.device_loan.driven_adapter.repo.reservation_query_repo_impl import (
    ReservationQueryRepoImpl,
)
from src.service.device_loan.driven_adapter.repo.user_query_repo_impl import UserQueryRepoImpl
from src.service.device_loan.driven_adapter.repo.waitlist_command_repo_impl import (
    WaitlistCommandRepoImpl,
)
from src.service.device_loan.driven_adapter.repo.waitlist_query_repo_impl import (
    WaitlistQueryRepoImpl,
)


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Background task group (set by main.py lifespan)
    # Used for post-commit fire-and-forget work like waitlist notification
    task_group = providers.Object(None)
    background_task_runner = providers.Factory(AnyioBackgroundTaskRunner, task_group=task_group)

    # Unit of Work (one connection + transaction per command)
    unit_of_work = providers.Factory(AsyncpgUnitOfWork)

    # Repositories (stateless - acquire pool connections per call)
    reservation_query_repo = providers.Singleton(ReservationQueryRepoImpl)
    waitlist_command_repo = providers.Singleton(WaitlistCommandRepoImpl)
    waitlist_query_repo = providers.Singleton(WaitlistQueryRepoImpl)
    device_query_repo = providers.Singleton(DeviceQueryRepoImpl)
    user_query_repo = providers.Singleton(UserQueryRepoImpl)
    email_notification_command_repo = providers.Singleton(EmailNotificationCommandRepoImpl)

    # Outbound mail
    mail_transport = providers.Singleton(
        LoggingMailTransport,
        from_address=config_service.provided.EMAIL_FROM_ADDRESS,
        simulate_failure=config_service.provided.SIMULATE_EMAIL_FAILURE,
    )

    # Resilience for the mail channel (one breaker per protected resource)
    email_circuit_breaker = providers.Singleton(
        CircuitBreaker,
        name='email-service',
        failure_threshold=config_service.provided.EMAIL_CIRCUIT_FAILURE_THRESHOLD,
        reset_timeout=config_service.provided.EMAIL_CIRCUIT_RESET_TIMEOUT_SECONDS,
        monitoring_period=config_service.provided.EMAIL_CIRCUIT_MONITORING_PERIOD_SECONDS,
        on_state_change=providers.Object(metrics.update_circuit_breaker_state),
    )
    email_retry_policy = providers.Singleton(
        RetryPolicy,
        max_attempts=config_service.provided.EMAIL_RETRY_MAX_ATTEMPTS,
        initial_delay=config_service.provided.EMAIL_RETRY_INITIAL_DELAY_SECONDS,
        max_delay=config_service.provided.EMAIL_RETRY_MAX_DELAY_SECONDS,
        backoff_multiplier=config_service.provided.EMAIL_RETRY_BACKOFF_MULTIPLIER,
        retryable_errors=providers.Object(is_retryable_error),
    )
    email_retry_handler = providers.Singleton(RetryHandler, policy=email_retry_policy)

    # Waitlist notification pipeline
    notification_dispatcher = providers.Singleton(
        NotificationDispatcher,
        waitlist_command_repo=waitlist_command_repo,
        device_query_repo=device_query_repo,
        user_query_repo=user_query_repo,
        email_notification_command_repo=email_notification_command_repo,
        mail_transport=mail_transport,
        circuit_breaker=email_circuit_breaker,
        retry_handler=email_retry_handler,
        send_timeout_seconds=config_service.provided.EMAIL_SEND_TIMEOUT_SECONDS,
    )


container = Container()