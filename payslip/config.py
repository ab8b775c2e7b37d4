import os
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .holidays import DEFAULT_REGION, DEFAULT_TABLES_PATH

BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    env: str = Field(default="dev", description="Deployment environment")
    app_name: str = "Payslip API"
    log_level: str = "INFO"
    log_format: str = Field(default="json", description="Log renderer: json or console")
    sentry_dsn: str | None = Field(default=None, description="Sentry DSN for error monitoring")
    cors_origins: Annotated[list[str], NoDecode] = []
    holiday_region: str = DEFAULT_REGION
    holiday_tables_path: Path = Field(
        default=DEFAULT_TABLES_PATH,
        description="Directory holding <region>/<year>.json public holiday tables",
    )

    model_config = SettingsConfigDict(env_prefix="PAYSLIP_", extra="ignore")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value


@lru_cache
def get_settings() -> Settings:
    return Settings(_env_file=get_settings_env_file())


def get_settings_env_file() -> str | None:
    """Resolve environment-specific env file if it exists."""
    env = os.getenv("PAYSLIP_ENV", "dev")
    env_file = BASE_DIR / f".env.{env}"
    default_file = BASE_DIR / ".env"
    if env_file.exists():
        return str(env_file)
    if default_file.exists():
        return str(default_file)
    return None
