"""Environment-driven settings for forecasting and logging."""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ForecastSettings(BaseSettings):
    """Tunable policy constants for the capacity forecaster."""

    min_horizon_hours: int = Field(default=1, ge=1)
    max_horizon_hours: int = Field(default=72, ge=1)
    min_snapshots_for_training: int = Field(
        default=24,
        ge=1,
        description="History size at which the regression tier takes over",
    )
    seed: int = Field(default=7321, description="Seed passed to the regressor")
    ridge_alpha: float = Field(default=1e-3, ge=0.0)
    read_timeout_seconds: Optional[float] = Field(
        default=None,
        gt=0,
        description="Per-call timeout for snapshot store reads",
    )

    model_config = SettingsConfigDict(
        env_prefix="YARD_FORECAST_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("LOG_LEVEL", "LOGGING_LEVEL"),
    )
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("ENVIRONMENT", "APP_ENV"),
    )

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")
