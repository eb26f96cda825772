"""Application configuration via pydantic settings."""

from functools import lru_cache
from pathlib import Path

from typing import Annotated, Any

from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Typed application configuration."""

    app_env: str = Field("local", alias="APP_ENV")
    app_name: str = Field("RentDesk API", alias="APP_NAME")
    api_v1_prefix: str = Field("/api/v1", alias="API_V1_PREFIX")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    database_url: str = Field(..., alias="DATABASE_URL")
    sync_database_url: str | None = Field(default=None, alias="SYNC_DATABASE_URL")

    currency_symbol: str = Field("R$", alias="CURRENCY_SYMBOL")
    currency_thousands_separator: str = Field(
        ".", alias="CURRENCY_THOUSANDS_SEPARATOR"
    )
    currency_decimal_separator: str = Field(",", alias="CURRENCY_DECIMAL_SEPARATOR")

    delivery_window_start: str = Field("09:00", alias="DELIVERY_WINDOW_START")
    delivery_window_end: str = Field("12:00", alias="DELIVERY_WINDOW_END")
    pickup_window_start: str = Field("14:00", alias="PICKUP_WINDOW_START")
    pickup_window_end: str = Field("18:00", alias="PICKUP_WINDOW_END")

    nearby_storage_radius_km: float = Field(10.0, alias="NEARBY_STORAGE_RADIUS_KM")

    cors_allow_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        alias="CORS_ALLOW_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=False, alias="CORS_ALLOW_CREDENTIALS")

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[3] / ".env",
        case_sensitive=False,
    )

    @field_validator("cors_allow_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()  # type: ignore[call-arg]
