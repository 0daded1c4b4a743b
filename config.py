"""
Application configuration via pydantic-settings.

All settings are loaded from environment variables (and .env file).
Sub-configs are composed by AppSettings so a single ``AppSettings()`` call
yields the whole tree.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"
    log_format: str = "console"  # "json" in production

    # Sampling rates (0.0–1.0)
    sample_rate_redirect: float = 0.05
    sample_rate_analytics: float = 0.20


class SentrySettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    sentry_dsn: str = ""
    sentry_send_pii: bool = False
    sentry_traces_sample_rate: float = 0.1


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Core
    env: str = "development"
    app_name: str = "shortlink"
    api_prefix: str = "/api"

    # CORS: the dashboard is served from a different origin
    cors_origins: list[str] = ["*"]

    # OpenAPI docs URL (None disables the docs UI in production)
    docs_url: Optional[str] = "/docs"

    # Length of generated slugs when the client does not request one
    slug_length: int = Field(default=8, ge=4, le=50)

    # Drop a link's click events together with the link
    cascade_click_events: bool = True

    # Sub-configs (composed via model_validator below)
    logging: Optional[LoggingSettings] = None
    sentry: Optional[SentrySettings] = None

    @model_validator(mode="after")
    def _populate_sub_configs(self) -> "AppSettings":
        if self.logging is None:
            self.logging = LoggingSettings()
        if self.sentry is None:
            self.sentry = SentrySettings()
        return self

    @property
    def is_production(self) -> bool:
        return self.env == "production"
