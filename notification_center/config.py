"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from notification_center.domain.entities import NotificationConfiguration, NotificationLevel
from notification_center.domain.exceptions import ConfigurationUnavailable

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        extra="ignore",
    )

    database_url: str = Field(
        default="sqlite:///./notification_center.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        default="change-me",
        description="Secret key for signing JWT tokens",
        min_length=1,
    )
    access_token_expire_minutes: int = Field(
        default=1440,
        description="Number of minutes before issued access tokens expire",
        gt=0,
    )
    retention_days: int = Field(
        default=7,
        description="Days a notification stays visible; zero or less uses the default of 7",
    )
    movie_notification_level: NotificationLevel = NotificationLevel.ALL
    series_notification_level: NotificationLevel = NotificationLevel.ALL
    music_notification_level: NotificationLevel = NotificationLevel.DISABLED
    book_notification_level: NotificationLevel = NotificationLevel.DISABLED
    processing_delay_seconds: float = Field(
        default=2.0,
        description="Seconds to wait after an item-added signal before classifying the item",
        ge=0,
    )
    deduplication_window_minutes: int = Field(
        default=5,
        description="Window in which repeated additions for one series collapse into one",
        gt=0,
    )
    deduplication_retention_minutes: int = Field(
        default=60,
        description="Age after which series suppression entries are dropped",
        gt=0,
    )
    favorite_genre_min_watch_count: int = Field(
        default=3,
        description="Played items a genre needs before it counts as a favorite",
        gt=0,
    )
    purge_interval_minutes: int = Field(
        default=60,
        description="Minutes between expired notification sweeps (0 disables the sweeper)",
        ge=0,
    )
    item_added_template: str = Field(
        default="{name} has been added to your library",
        description="Format string used to render notification messages",
        min_length=1,
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    cors_allow_origins: list[str] = Field(
        default_factory=list,
        description="Origins allowed to poll the API from a browser (JSON list)",
    )

    @field_validator("item_added_template")
    @classmethod
    def _validate_template(cls, value: str) -> str:
        if "{name}" not in value:
            raise ValueError("ITEM_ADDED_TEMPLATE must contain the {name} placeholder")
        return value

    def notification_configuration(self) -> NotificationConfiguration:
        """Return the verbosity snapshot consumed by the notification engine."""

        return NotificationConfiguration(
            movie_level=self.movie_notification_level,
            series_level=self.series_notification_level,
            music_level=self.music_notification_level,
            book_level=self.book_notification_level,
            retention_days=self.retention_days,
        )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


def get_notification_configuration() -> NotificationConfiguration:
    """Return the current configuration snapshot or fail when it cannot be loaded."""

    try:
        settings = get_settings()
    except ValidationError as exc:
        raise ConfigurationUnavailable("Notification settings could not be loaded") from exc
    return settings.notification_configuration()


__all__ = [
    "Settings",
    "get_notification_configuration",
    "get_settings",
    "reset_settings_cache",
]
