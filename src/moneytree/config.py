from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    """Runtime configuration from environment variables or ``.env``.

    ``DATABASE_URL`` and ``JWT_SECRET`` have no defaults and must be set.
    """

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        case_sensitive=False,
        extra="ignore",
    )

    app_env: str = "development"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = ["*"]

    database_url: str
    db_echo: bool = False

    jwt_secret: str
    jwt_refresh_secret: str | None = None
    jwt_algorithm: str = "HS256"
    jwt_access_expire_minutes: int = Field(15, gt=0)
    jwt_refresh_expire_days: int = Field(7, gt=0)

    # Amounts are stored as integers in the currency's minor unit.
    currency: str = "USD"
    currency_minor_unit: int = Field(2, ge=0)

    @property
    def refresh_secret(self) -> str:
        """Key for refresh tokens; the access secret when none is configured."""
        return self.jwt_refresh_secret or self.jwt_secret


settings = Settings()
