"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from datetime import tzinfo
from pathlib import Path
from typing import Any, Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Storage configuration."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "organext.db"

    # SQLite settings
    pool_size: int = 5
    busy_timeout: int = 30000  # ms

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class ReminderSettings(BaseSettings):
    """Reminder policy configuration."""

    model_config = SettingsConfigDict(env_prefix="REMINDER_")

    event_lead_minutes: int = 15
    appointment_lead_minutes: int = 30
    all_day_task_hour: int = Field(default=9, ge=0, le=23)

    # Rescan window
    look_ahead_hours: int = 24
    include_events: bool = True


class NotificationSettings(BaseSettings):
    """Local notification backend configuration."""

    model_config = SettingsConfigDict(env_prefix="NOTIFY_")

    # Disabled behaves like a revoked OS permission
    enabled: bool = True
    channel_id: str = "organext-reminders"
    channel_name: str = "Reminders"
    importance: Literal["low", "default", "high"] = "high"
    allow_while_idle: bool = True

    # Job store lives outside the records database
    jobstore_name: str = "notifications.db"
    misfire_grace_seconds: int = 300


class BackgroundSettings(BaseSettings):
    """Background rescan task configuration."""

    model_config = SettingsConfigDict(env_prefix="BACKGROUND_")

    task_id: str = "com.organext.reminders.task"
    minimum_interval_minutes: int = 60
    timeout_seconds: float = 30.0

    stop_on_terminate: bool = False
    enable_headless: bool = True
    start_on_boot: bool = True
    required_network: Literal["none", "any", "unmetered"] = "none"
    requires_charging: bool = False
    requires_device_idle: bool = False

    @field_validator("minimum_interval_minutes")
    @classmethod
    def enforce_platform_floor(cls, v: int) -> int:
        # Platform schedulers never run more often than every 15 minutes
        return max(v, 15)


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Organext Reminders"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    locale: str = "en"
    timezone: str | None = None  # None = system local time

    # Sub-settings
    storage: StorageSettings = Field(default_factory=StorageSettings)
    reminders: ReminderSettings = Field(default_factory=ReminderSettings)
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)
    background: BackgroundSettings = Field(default_factory=BackgroundSettings)
    api: APISettings = Field(default_factory=APISettings)

    @field_validator("storage", mode="before")
    @classmethod
    def ensure_data_dir(cls, v: Any) -> StorageSettings:
        if isinstance(v, dict):
            settings = StorageSettings(**v)
        else:
            settings = v or StorageSettings()
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        return settings

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str | None) -> str | None:
        if v:
            try:
                ZoneInfo(v)
            except ZoneInfoNotFoundError as e:
                raise ValueError(f"Unknown timezone: {v}") from e
        return v

    @property
    def jobstore_path(self) -> Path:
        return self.storage.data_dir / self.notifications.jobstore_name

    @property
    def local_tz(self) -> tzinfo | None:
        """
        The configured timezone, or None for system local time.

        None is resolved per timestamp, so DST changes are honoured.
        """
        if self.timezone:
            return ZoneInfo(self.timezone)
        return None


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
