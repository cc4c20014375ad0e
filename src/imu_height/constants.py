"""
Constants used throughout the IMU Height package.

This module centralizes all tuning values and unit factors. The configuration
models in ``models`` use these as their defaults, so every threshold can still
be overridden per session through ``Settings``.
"""

from typing import Final


# === Gravity ===
class GravityConstants:
    """Gravity-related constants in m/s²."""

    STANDARD_GRAVITY: Final[float] = 9.81
    DEFAULT_VECTOR: Final[tuple[float, float, float]] = (0.0, 0.0, 9.81)


# === Calibration ===
class CalibrationConstants:
    """Calibration window parameters."""

    WINDOW_SECONDS: Final[float] = 1.5  # Device lies flat and still


# === Gravity Low-Pass Filter ===
class GravityFilterDefaults:
    """Low-pass filter and freeze thresholds for the gravity tracker."""

    ALPHA: Final[float] = 0.01  # Smaller = slower, more stable estimate
    FREEZE_LINEAR_ACCEL: Final[float] = 0.2  # m/s²
    FREEZE_ROTATION_DEG_S: Final[float] = 3.0  # deg/s


# === Stationary Detection ===
class StationaryThresholds:
    """Thresholds used to classify a sample as stationary."""

    VERTICAL_ACCEL: Final[float] = 0.03  # m/s²
    ROTATION_DEG_S: Final[float] = 0.7  # deg/s
    LINEAR_ACCEL: Final[float] = 0.06  # m/s²
    ZUPT_SECONDS: Final[float] = 0.5  # Stillness needed before velocity reset


# === Integration ===
class IntegrationLimits:
    """Limits for velocity and displacement integration."""

    MOVING_DAMPING: Final[float] = 0.9995
    MIN_DT_SECONDS: Final[float] = 0.005
    MAX_DT_SECONDS: Final[float] = 0.05
    MAX_GAP_SECONDS: Final[float] = 0.5  # Larger deltas drop the sample
    NOMINAL_INTERVAL_MS: Final[float] = 20.0  # Fallback for the first sample
    MAX_DISPLACEMENT_CM: Final[float] = 300.0
    ACCUMULATION_TOLERANCE: Final[float] = 1e-9


# === Confidence Heuristic ===
class ConfidenceConstants:
    """Parameters of the empirical confidence heuristic (percent)."""

    BASE: Final[float] = 60.0
    DISTANCE_SPAN: Final[float] = 35.0
    REFERENCE_DISTANCE_CM: Final[float] = 200.0
    MOVING_CAP: Final[float] = 95.0
    STATIONARY_BONUS: Final[float] = 3.0
    MAXIMUM: Final[float] = 99.5


# === Unit Conversion ===
class UnitConversion:
    """Length conversion factors."""

    CM_PER_M: Final[float] = 100.0
    CM_PER_INCH: Final[float] = 2.54
    INCHES_PER_FOOT: Final[int] = 12
    MS_PER_SECOND: Final[float] = 1000.0


# === CSV Parsing ===
class CSVConstants:
    """Constants for recording file parsing."""

    DEFAULT_SEPARATOR: Final[str] = ";"
    DEFAULT_ENCODING: Final[str] = "utf-8"


# === Recording Columns ===
class RecordingColumns:
    """Column names used in motion recordings."""

    TIMESTAMP: Final[str] = "timestamp_ms"
    ACCELERATION: Final[tuple[str, str, str]] = ("ax", "ay", "az")
    ROTATION: Final[tuple[str, str, str]] = ("rx", "ry", "rz")
    INTERVAL: Final[str] = "interval_ms"

    @classmethod
    def essential(cls) -> list[str]:
        """Get the columns every recording must contain."""
        return [cls.TIMESTAMP, *cls.ACCELERATION]
