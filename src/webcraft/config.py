"""Centralised application configuration using pydantic-settings.

All environment variables are read through the Settings class.
Consumers call ``get_settings()`` to obtain a cached, validated instance.
Tests construct ``Settings(_env_file=None, ...)`` directly for isolation.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# src/webcraft/config.py  ->  parent x3  ->  project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


# ---------------------------------------------------------------------------
# Sub-models (one per configuration domain)
# ---------------------------------------------------------------------------
class StytchConfig(BaseModel):
    """Stytch identity provider credentials."""

    project_id: str = ""
    secret: SecretStr = SecretStr("")
    public_token: str = ""
    environment: Literal["test", "live"] = "test"

    @model_validator(mode="after")
    def live_requires_credentials(self) -> StytchConfig:
        if self.environment == "live" and self.project_id:
            missing = []
            if not self.secret.get_secret_value():
                missing.append("STYTCH__SECRET")
            if not self.public_token:
                missing.append("STYTCH__PUBLIC_TOKEN")
            if missing:
                msg = f"Live Stytch environment requires {', '.join(missing)}"
                raise ValueError(msg)
        return self


class AppConfig(BaseModel):
    """Application runtime configuration."""

    base_url: str = "http://localhost:8080"
    port: int = 8080
    storage_secret: SecretStr = SecretStr("dev-secret-change-me")
    log_dir: Path = Path("logs")

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class SiteConfig(BaseModel):
    """Page names used for navigation between the site's pages."""

    home_page: str = "index.html"
    login_page: str = "login.html"
    register_page: str = "register.html"
    dashboard_page: str = "dashboard.html"

    @field_validator("home_page", "login_page", "register_page", "dashboard_page")
    @classmethod
    def bare_page_name(cls, value: str) -> str:
        if not value or "/" in value or "?" in value:
            msg = f"Page name must be a bare file name, got {value!r}"
            raise ValueError(msg)
        return value


class DevConfig(BaseModel):
    """Development and testing toggles."""

    auth_mock: bool = False


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------
class Settings(BaseSettings):
    """Application settings with automatic .env loading and type validation.

    Environment variables use double-underscore delimiter for nesting:
    ``STYTCH__PROJECT_ID``, ``APP__BASE_URL``, ``SITE__LOGIN_PAGE``, etc.
    """

    model_config = SettingsConfigDict(
        env_file=_PROJECT_ROOT / ".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    stytch: StytchConfig = StytchConfig()
    app: AppConfig = AppConfig()
    site: SiteConfig = SiteConfig()
    dev: DevConfig = DevConfig()


# ---------------------------------------------------------------------------
# Singleton access
# ---------------------------------------------------------------------------
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Call ``get_settings.cache_clear()`` in tests to reset.
    """
    settings = Settings()

    env_file = settings.model_config.get("env_file")
    if env_file is not None and Path(str(env_file)).is_file():
        logger.info("Settings loaded .env from: %s", env_file)
    else:
        logger.info("Settings: no .env file found, using env vars and defaults")

    return settings
