"""Application-wide settings."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings model."""

    APP_ENV: str = "development"
    DOCS_MODE: str = "public"
    EXPOSE_INTERNAL_ERRORS: bool = False
    CORS_ALLOW_ORIGINS: str = ""
    CORS_ALLOW_METHODS: str = "GET,POST,OPTIONS"
    CORS_ALLOW_HEADERS: str = "Content-Type"
    CORS_ALLOW_CREDENTIALS: bool = False
    SECURITY_HEADERS_ENABLED: bool = True

    VENUE_DATA_PATH: str | None = None
    DEFAULT_CENTER_LATITUDE: float = 35.0527
    DEFAULT_CENTER_LONGITUDE: float = -78.8784
    WALKING_SPEED_KMH: float = 5.0
    SELECTION_TOP_N: int = 5
    SELECTION_JITTER: float = 10.0
    OPTIONAL_SLOT_GRACE_MINUTES: int = 60
    EXTENDED_TEMPLATE_MIN_HOURS: float = 4.0
    VENUE_EVENTS_ENRICHMENT_ENABLED: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("WALKING_SPEED_KMH", mode="before")
    @classmethod
    def _clamp_walking_speed(cls, value: object) -> float:
        try:
            numeric = float(value) if value is not None else 5.0
        except (TypeError, ValueError):
            numeric = 5.0
        return min(10.0, max(1.0, numeric))

    @field_validator("SELECTION_TOP_N", mode="before")
    @classmethod
    def _clamp_selection_top_n(cls, value: object) -> int:
        try:
            numeric = int(value) if value is not None else 5
        except (TypeError, ValueError):
            numeric = 5
        return min(20, max(1, numeric))

    @field_validator("SELECTION_JITTER", mode="before")
    @classmethod
    def _clamp_selection_jitter(cls, value: object) -> float:
        try:
            numeric = float(value) if value is not None else 10.0
        except (TypeError, ValueError):
            numeric = 10.0
        return max(0.0, numeric)


@lru_cache
def get_settings() -> Settings:
    """Return the Settings instance. Built on first call and cached afterwards."""
    return Settings()
