"""Application settings and configuration management."""

from pathlib import Path

import yaml
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import GravityConstants
from .models import (
    CalibrationConfig,
    ConfidenceConfig,
    GravityFilterConfig,
    IntegrationConfig,
    StationaryDetectionConfig,
    Vector3,
)


class Settings(BaseSettings):
    """
    Application settings for IMU Height.

    Settings are loaded in the following order of precedence (highest to lowest):
    1. Explicit keyword arguments / YAML file values
    2. Environment variables (e.g., IMU_HEIGHT_RECORD_TRACE,
       IMU_HEIGHT_GRAVITY_FILTER__ALPHA)
    3. .env file (if found)
    4. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="IMU_HEIGHT_",
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # --- Engine Tuning ---
    calibration: CalibrationConfig = CalibrationConfig()
    gravity_filter: GravityFilterConfig = GravityFilterConfig()
    stationary: StationaryDetectionConfig = StationaryDetectionConfig()
    integration: IntegrationConfig = IntegrationConfig()
    confidence: ConfidenceConfig = ConfidenceConfig()

    # Gravity assumed before calibration and restored on reset (device frame)
    default_gravity: tuple[float, float, float] = GravityConstants.DEFAULT_VECTOR

    # --- Diagnostics ---
    record_trace: bool = False  # Keep a per-sample TraceRecord list

    @field_validator("default_gravity")
    @classmethod
    def check_default_gravity(
        cls, v: tuple[float, float, float]
    ) -> tuple[float, float, float]:
        """Validate the default gravity has a plausible magnitude."""
        magnitude = Vector3.from_sequence(v).norm()
        if not 5.0 <= magnitude <= 15.0:
            raise ValueError(
                f"default_gravity magnitude {magnitude:.2f} m/s² is implausible"
            )
        return v

    @property
    def default_gravity_vector(self) -> Vector3:
        """Default gravity as a Vector3."""
        return Vector3.from_sequence(self.default_gravity)


def load_settings(config_file: Path | None = None) -> Settings:
    """Load settings from a YAML file, environment variables, and defaults."""
    if config_file:
        with open(config_file, encoding="utf-8") as f:
            yaml_settings = yaml.safe_load(f) or {}

        # Create a Settings object from YAML, then merge with env vars/defaults
        return Settings(**yaml_settings)

    return Settings()
