"""Application configuration with validation."""
from typing import Literal
from functools import lru_cache
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from skin_wellness.models.enumerations import AggregationStrategy


class Settings(BaseSettings):
    """Application settings, read from the environment and .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Skin Wellness Visualization API"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # Scoring
    AGGREGATION_STRATEGY: AggregationStrategy = AggregationStrategy.MEAN

    # Chart geometry (SVG view box units)
    CHART_VIEWBOX: int = Field(default=900, ge=100, le=4000)
    CHART_OUTER_RADIUS: float = Field(default=430.0, gt=0)
    CHART_PETAL_MAX_RADIUS: float = Field(default=420.0, gt=0)
    CHART_LABEL_RADIUS: float = Field(default=280.0, gt=0)
    CHART_CENTER_RADIUS: float = Field(default=35.0, gt=0)
    CHART_SEGMENT_GAP: float = Field(default=5.0, ge=0, le=50)
    CHART_CORNER_RADIUS: float = Field(default=14.0, ge=0, le=50)
    CHART_CURVE_SAMPLES: int = Field(default=24, ge=2, le=256)

    @model_validator(mode="after")
    def validate_chart_radii(self):
        """center < petal max <= outer <= half the view box."""
        if not self.CHART_CENTER_RADIUS < self.CHART_PETAL_MAX_RADIUS:
            raise ValueError("CHART_CENTER_RADIUS must be below CHART_PETAL_MAX_RADIUS")
        if self.CHART_PETAL_MAX_RADIUS > self.CHART_OUTER_RADIUS:
            raise ValueError("CHART_PETAL_MAX_RADIUS must not exceed CHART_OUTER_RADIUS")
        if self.CHART_OUTER_RADIUS > self.CHART_VIEWBOX / 2:
            raise ValueError("CHART_OUTER_RADIUS must fit inside half of CHART_VIEWBOX")
        if not self.CHART_CENTER_RADIUS < self.CHART_LABEL_RADIUS < self.CHART_OUTER_RADIUS:
            raise ValueError("CHART_LABEL_RADIUS must lie between center and outer radius")
        return self

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Production must not run with DEBUG."""
        if self.APP_ENV == "production" and self.DEBUG:
            raise ValueError("DEBUG must be False in production")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
