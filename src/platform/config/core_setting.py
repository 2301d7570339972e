from pathlib import Path
from typing import List

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Device Reservation System'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = []  # add your frontend URL here

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',')]
        elif isinstance(v, list):
            return v
        return []

    # PostgreSQL
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'device_reservation_db'
    POSTGRES_PORT: int = 5432

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        password = self.POSTGRES_PASSWORD.get_secret_value()
        return f'postgresql+asyncpg://{self.POSTGRES_USER}:{password}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'

    @property
    def DATABASE_URL_SYNC(self) -> str:
        password = self.POSTGRES_PASSWORD.get_secret_value()
        return f'postgresql://{self.POSTGRES_USER}:{password}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'

    # SQLAlchemy pool (schema management and ORM models only)
    DB_POOL_SIZE: int = 5
    DB_POOL_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 30  # seconds
    DB_POOL_RECYCLE: int = 3600  # seconds
    DB_POOL_PRE_PING: bool = True

    # asyncpg pool (all repositories)
    ASYNCPG_POOL_MIN_SIZE: int = 5
    ASYNCPG_POOL_MAX_SIZE: int = 20
    ASYNCPG_POOL_COMMAND_TIMEOUT: float = 60.0
    ASYNCPG_POOL_MAX_INACTIVE_LIFETIME: float = 300.0
    ASYNCPG_POOL_TIMEOUT: float = 10.0
    ASYNCPG_POOL_MAX_QUERIES: int = 50000

    # Reservations
    DEFAULT_LOAN_DURATION_DAYS: int = 2  # used when a device has no configured duration

    # Email delivery
    EMAIL_FROM_ADDRESS: str = 'no-reply@device-reservation.local'
    SIMULATE_EMAIL_FAILURE: bool = False
    EMAIL_SEND_TIMEOUT_SECONDS: float = 5.0

    # Email retry policy (exponential backoff)
    EMAIL_RETRY_MAX_ATTEMPTS: int = 3
    EMAIL_RETRY_INITIAL_DELAY_SECONDS: float = 1.0
    EMAIL_RETRY_MAX_DELAY_SECONDS: float = 5.0
    EMAIL_RETRY_BACKOFF_MULTIPLIER: float = 2.0

    # Email circuit breaker
    EMAIL_CIRCUIT_FAILURE_THRESHOLD: int = 5
    EMAIL_CIRCUIT_RESET_TIMEOUT_SECONDS: float = 60.0
    EMAIL_CIRCUIT_MONITORING_PERIOD_SECONDS: float = 60.0

    # HTTP throttling per client and endpoint
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_MAX_REQUESTS: int = 100
    RATE_LIMIT_WINDOW_SECONDS: float = 60.0


settings = Settings()  # type: ignore
