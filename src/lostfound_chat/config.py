from __future__ import annotations

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    POSTGRES_USER: str
    POSTGRES_PASSWORD: str
    POSTGRES_DB: str
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432

    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_RECYCLE: int = 300
    DB_CREATE_TABLES: bool = False
    DB_ECHO: bool = False

    CORS_ORIGINS: list[str] = ["*"]
    LOG_LEVEL: str = "INFO"
    SLOW_REQUEST_MS: float = 1000.0

    STORE_BASE_URL: str = "http://localhost:8000/api"
    STORE_REQUEST_TIMEOUT: float | None = None

    CHAT_POLL_INTERVAL: float = 3.0
    CHAT_SEND_REFRESH_DELAY: float = 0.5
    NOTIFICATION_POLL_INTERVAL: float = 5.0

    POPUP_TIMEOUT: float = 8.0
    POPUP_STACK_OFFSET: int = 10
    POPUP_PREVIEW_LENGTH: int = 120
    MAX_VISIBLE_POPUPS: int = 5

    @property
    def database_url(self) -> str:
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.POSTGRES_DB}"
        )

    model_config = ConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()  # type: ignore[call-arg]
