from fastapi import Request
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    DEBUG: bool = False
    DATABASE_URL: str = "sqlite+aiosqlite:///./portal.db"
    # Development/test convenience; production schema is managed by Alembic
    CREATE_TABLES: bool = False

    SECRET_KEY: str = "change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    ALLOWED_HOSTS: str = "*"
    CORS_ORIGINS: str = "*"

    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024
    PUBLIC_BASE_URL: str = ""

    HOLIDAYS_API_URL: str = "https://brasilapi.com.br/api/feriados/v1"
    HOLIDAYS_TIMEOUT: float = 10.0

    LOG_PATH: str = "logs/portal.log"
    LOG_LEVEL: str = "INFO"

    @property
    def allowed_hosts(self) -> List[str]:
        return [h.strip() for h in self.ALLOWED_HOSTS.split(",") if h.strip()]

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()


def get_settings(request: Request) -> Settings:
    """Settings of the running application (see main.create_app)."""
    return request.app.state.settings
