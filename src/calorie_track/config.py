"""Application configuration."""

import os

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    environment: str = _ENVIRONMENT
    timezone: str = "UTC"
    log_level: str = "INFO"
    estimator_delay_seconds: float = Field(default=2.2, ge=0)
    estimator_min_calories: int = Field(default=350, ge=0)
    estimator_max_calories: int = Field(default=750, ge=0)

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @model_validator(mode="after")
    def check_calorie_range(self) -> "Settings":
        if self.estimator_min_calories > self.estimator_max_calories:
            raise ValueError(
                "estimator_min_calories must not exceed estimator_max_calories"
            )
        return self
