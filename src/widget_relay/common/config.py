"""Widget-Relay configuration via pydantic-settings."""

import warnings
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

_INSECURE_DEFAULTS = {
    "secret_key": "insecure-dev-key-change-me",
    "super_admin_key": "insecure-super-admin-key-change-me",
}


class RelaySettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="RELAY_")

    environment: str = "development"
    secret_key: str = "insecure-dev-key-change-me"
    super_admin_key: str = "insecure-super-admin-key-change-me"

    # Database
    db_url: str = "sqlite+aiosqlite:///./data/widget_relay.db"

    # API
    api_title: str = "Widget-Relay"
    api_version: str = "0.1.0"
    host: str = "0.0.0.0"
    port: int = 8080
    api_prefix: str = ""
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:8000"]

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Outbound relay
    relay_timeout: float = 30.0  # seconds
    default_test_message: str = "Hello, this is a test message"

    # Public slugs
    slug_length: int = 10
    slug_max_attempts: int = 10

    # Organization bearer tokens
    org_token_max_age: int = 30 * 86400  # 30 days

    def validate_for_production(self) -> None:
        """Raise if insecure defaults are used in non-development environments."""
        insecure_fields = [
            field
            for field, default in _INSECURE_DEFAULTS.items()
            if getattr(self, field) == default
        ]

        if self.environment != "development" and insecure_fields:
            env_vars = ", ".join(f"RELAY_{f.upper()}" for f in insecure_fields)
            raise RuntimeError(
                f"Insecure default values detected in '{self.environment}' environment. "
                f"Set these environment variables to secure values: {env_vars}. "
                "Generate secrets with: python -c \"import secrets; print(secrets.token_urlsafe(48))\""
            )

        if insecure_fields:
            warnings.warn(
                "Using insecure default keys; set RELAY_SECRET_KEY and "
                "RELAY_SUPER_ADMIN_KEY for production",
                UserWarning,
                stacklevel=2,
            )


@lru_cache
def get_settings() -> RelaySettings:
    settings = RelaySettings()
    settings.validate_for_production()
    return settings
