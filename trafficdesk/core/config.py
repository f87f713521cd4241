from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Environment-driven application configuration."""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Traffic Ticket Desk"
    APP_ENV: str = "dev"

    BASE_DIR: Path = Field(default_factory=lambda: Path(__file__).resolve().parent.parent)
    DATA_DIR: Path = Field(default_factory=lambda: Path.cwd() / "data")
    TEMPLATES_DIR: Path | None = None
    TZ: str = "UTC"

    DB_URL: str = Field(default="", validation_alias=AliasChoices("DB_URL", "DATABASE_URL"))
    DB_ECHO: bool = False

    LOG_LEVEL: str = "INFO"
    REQUEST_ID_HEADER: str = "X-Request-ID"
    # Health checks and metric scrapes stay out of the request log.
    REQUEST_LOG_SKIP_PATHS: tuple[str, ...] = ("/health", "/metrics")

    HOST: str = "0.0.0.0"
    PORT: int = 8000

    @model_validator(mode="after")
    def _fill_derived_paths(self) -> "AppSettings":
        if self.TEMPLATES_DIR is None:
            self.TEMPLATES_DIR = self.BASE_DIR / "templates"
        if not self.DB_URL:
            self.DB_URL = f"sqlite:///{self.DATA_DIR / 'trafficdesk.db'}"
        return self

    @property
    def is_sqlite(self) -> bool:
        return self.DB_URL.startswith("sqlite")


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    settings = AppSettings()
    if settings.DB_URL.startswith(f"sqlite:///{settings.DATA_DIR}"):
        settings.DATA_DIR.mkdir(parents=True, exist_ok=True)
    return settings


settings = get_settings()
