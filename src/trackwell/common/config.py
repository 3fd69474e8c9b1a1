"""Trackwell configuration via pydantic-settings."""

import warnings
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

_INSECURE_DEFAULTS = {
    "api_key": "insecure-host-key-change-me",
    "signing_key": "insecure-signing-key-change-me",
}


class TrackwellSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TRACKWELL_")

    environment: str = "development"

    # Shared secret the execution host presents on every request.
    api_key: str = "insecure-host-key-change-me"
    # HMAC key for the product event log signatures.
    signing_key: str = "insecure-signing-key-change-me"

    # Database
    db_url: str = "sqlite+aiosqlite:///./data/trackwell.db"

    # API
    api_title: str = "Trackwell"
    api_version: str = "0.1.0"
    host: str = "0.0.0.0"
    port: int = 8080
    api_prefix: str = ""
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:8000"]

    # Logical clock: "system" (unix seconds) or "manual" (starts at 0)
    clock: str = "system"

    log_level: str = "INFO"

    def validate_for_production(self) -> None:
        """Raise if insecure defaults are used in non-development environments."""
        insecure_fields = [
            field
            for field, default in _INSECURE_DEFAULTS.items()
            if getattr(self, field) == default
        ]

        if self.clock not in ("system", "manual"):
            raise ValueError(
                f"TRACKWELL_CLOCK must be 'system' or 'manual', got: {self.clock!r}"
            )

        if self.environment != "development" and insecure_fields:
            env_vars = ", ".join(f"TRACKWELL_{f.upper()}" for f in insecure_fields)
            raise RuntimeError(
                f"Insecure default values detected in '{self.environment}' environment. "
                f"Set these environment variables to secure values: {env_vars}."
            )

        if insecure_fields:
            warnings.warn(
                "Using insecure default keys, set TRACKWELL_API_KEY and "
                "TRACKWELL_SIGNING_KEY for production",
                UserWarning,
                stacklevel=2,
            )


@lru_cache
def get_settings() -> TrackwellSettings:
    settings = TrackwellSettings()
    settings.validate_for_production()
    return settings
