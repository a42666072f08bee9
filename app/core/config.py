"""Weblate sync configuration settings."""

from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import structlog

logger = structlog.stdlib.get_logger().bind(component="config")


class WeblateSettings(BaseSettings):
    """Weblate server connection settings.

    Environment Variables:
        WEBLATE_DSN: Connection string, e.g.
            weblate://<project>:<api-token>@weblate.example.com
        WEBLATE_DEFAULT_LOCALE: Source locale of every component (default: en)
        WEBLATE_TIMEOUT: HTTP timeout in seconds for each API call
    """

    WEBLATE_DSN: Optional[str] = Field(default=None, alias="WEBLATE_DSN")
    DEFAULT_LOCALE: str = Field(default="en", alias="WEBLATE_DEFAULT_LOCALE")
    TIMEOUT: int = Field(default=30, alias="WEBLATE_TIMEOUT")

    @field_validator("DEFAULT_LOCALE", mode="before")
    @classmethod
    def _normalize_locale(cls, v: Optional[str]) -> str:
        """Strip whitespace and fall back to "en" for an empty value."""
        if v is None:
            return "en"
        v = str(v).strip()
        if not v:
            logger.warning("empty_default_locale", fallback="en")
            return "en"
        return v

    @field_validator("TIMEOUT", mode="after")
    @classmethod
    def _validate_timeout(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"WEBLATE_TIMEOUT must be positive, got {v}")
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


class Settings(BaseSettings):
    """Weblate sync configuration settings."""

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"

    # Integration settings
    weblate: WeblateSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production."""
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        settings_map = {
            "weblate": WeblateSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


# Create the settings instance
settings = Settings()
