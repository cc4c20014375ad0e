"""
Data models for the IMU Height package.

This module defines the core data structures used by the estimation engine:
vector math primitives, motion samples, integrator state, snapshots and the
validated configuration models that expose every tuning threshold.
"""

import math
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from .constants import (
    CalibrationConstants,
    ConfidenceConstants,
    GravityConstants,
    GravityFilterDefaults,
    IntegrationLimits,
    RecordingColumns,
    StationaryThresholds,
)
from .exceptions import InvalidSampleError


class Vector3(BaseModel):
    """Immutable three-component vector in m/s², deg/s or dimensionless."""

    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def zero(cls) -> "Vector3":
        """Return the zero vector."""
        return cls()

    @classmethod
    def from_sequence(cls, values: Iterable[float]) -> "Vector3":
        """Build a vector from any three-element sequence (tuple, ndarray, ...)."""
        x, y, z = (float(v) for v in values)
        return cls(x=x, y=y, z=z)

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(x=self.x + other.x, y=self.y + other.y, z=self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(x=self.x - other.x, y=self.y - other.y, z=self.z - other.z)

    def __neg__(self) -> "Vector3":
        return Vector3(x=-self.x, y=-self.y, z=-self.z)

    def scale(self, factor: float) -> "Vector3":
        """Multiply every component by a scalar."""
        return Vector3(x=self.x * factor, y=self.y * factor, z=self.z * factor)

    def dot(self, other: "Vector3") -> float:
        """Dot product with another vector."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def norm(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.dot(self))

    def normalized(self) -> "Vector3":
        """
        Return the unit vector in the same direction.

        The zero vector normalizes to itself instead of dividing by zero.
        """
        length = self.norm()
        if length == 0:
            return Vector3()
        return self.scale(1.0 / length)

    def as_tuple(self) -> tuple[float, float, float]:
        """Return the components as a plain tuple."""
        return (self.x, self.y, self.z)

    def is_finite(self) -> bool:
        """Check that no component is NaN or infinite."""
        return all(math.isfinite(v) for v in self.as_tuple())


# GravityEstimate is the gravity vector expressed in the device frame. It is a
# plain Vector3; the alias documents intent at the engine boundaries.
GravityEstimate = Vector3


def _optional_float(value: Any) -> float | None:
    """Convert a raw field to float, mapping missing and NaN to None."""
    if value is None:
        return None
    result = float(value)
    return None if math.isnan(result) else result


class MotionSample(BaseModel):
    """One inertial reading delivered by the host."""

    model_config = ConfigDict(frozen=True)

    acceleration_including_gravity: Vector3 = Field(
        ..., description="Device-frame acceleration including gravity in m/s²"
    )
    rotation_rate: Vector3 | None = Field(
        None, description="Angular rate in deg/s, if the platform reports it"
    )
    timestamp_ms: float = Field(..., description="Monotonic timestamp in ms")
    reported_interval_ms: float | None = Field(
        None, description="Platform-supplied nominal sample period in ms"
    )

    @field_validator("acceleration_including_gravity")
    @classmethod
    def check_finite_acceleration(cls, v: Vector3) -> Vector3:
        """Reject NaN or infinite acceleration components."""
        if not v.is_finite():
            raise ValueError("Acceleration components must be finite")
        return v

    @field_validator("timestamp_ms")
    @classmethod
    def check_finite_timestamp(cls, v: float) -> float:
        """Reject NaN or infinite timestamps."""
        if not math.isfinite(v):
            raise ValueError("Timestamp must be finite")
        return v

    @property
    def rotation_magnitude(self) -> float:
        """Euclidean norm of the rotation rate, 0 when absent."""
        if self.rotation_rate is None:
            return 0.0
        return self.rotation_rate.norm()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "MotionSample":
        """
        Build a sample from a flat record (CSV row, host event dict).

        Args:
            data: Mapping with keys timestamp_ms, ax, ay, az and optionally
                rx, ry, rz and interval_ms

        Returns:
            Validated motion sample

        Raises:
            InvalidSampleError: If required fields are missing or not finite
        """
        try:
            acceleration = Vector3.from_sequence(
                data[key] for key in RecordingColumns.ACCELERATION
            )
            rotation_values = [
                _optional_float(data.get(key)) for key in RecordingColumns.ROTATION
            ]
            rotation = None
            if any(v is not None for v in rotation_values):
                rotation = Vector3.from_sequence(v or 0.0 for v in rotation_values)

            timestamp = _optional_float(data[RecordingColumns.TIMESTAMP])
            if timestamp is None:
                raise ValueError("Timestamp is missing")

            return cls(
                acceleration_including_gravity=acceleration,
                rotation_rate=rotation,
                timestamp_ms=timestamp,
                reported_interval_ms=_optional_float(
                    data.get(RecordingColumns.INTERVAL)
                ),
            )
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            raise InvalidSampleError(f"Malformed motion sample: {e}") from e


class SessionPhase(str, Enum):
    """Lifecycle phases of a measurement session."""

    IDLE = "idle"
    CALIBRATING = "calibrating"
    CALIBRATED = "calibrated"
    MEASURING = "measuring"
    COMPLETE = "complete"


class MotionLabel(str, Enum):
    """Classifier verdict shown to the user."""

    STATIONARY = "stationary"
    MOVING = "moving"
    NO_DATA = "no_data"


class MotionClassification(BaseModel):
    """Result of classifying one sample against the gravity estimate."""

    model_config = ConfigDict(frozen=True)

    vertical_acceleration: float = Field(
        ..., description="Linear acceleration along 'up' in m/s², positive upward"
    )
    linear_acceleration_magnitude: float = Field(
        ..., description="Norm of the gravity-free acceleration in m/s²"
    )
    rotation_magnitude: float = Field(..., description="Angular rate norm in deg/s")
    is_stationary: bool = Field(..., description="Whether the device is still")

    @property
    def label(self) -> MotionLabel:
        """Return the classifier label for this verdict."""
        return MotionLabel.STATIONARY if self.is_stationary else MotionLabel.MOVING


class GravityUpdate(BaseModel):
    """Outcome of feeding one sample to the gravity tracker."""

    model_config = ConfigDict(frozen=True)

    estimate: Vector3 = Field(..., description="Gravity estimate after the sample")
    accepted: bool = Field(..., description="False if the estimate was frozen")


class IntegratorState(BaseModel):
    """Vertical integration state; replaced as a whole on every update."""

    model_config = ConfigDict(frozen=True)

    velocity_cm_per_s: float = Field(0.0, description="Vertical velocity, up positive")
    displacement_cm: float = Field(0.0, description="Integrated upward displacement")
    peak_displacement_cm: float = Field(
        0.0, description="Running maximum of displacement (reported height)"
    )
    stationary_accum_seconds: float = Field(
        0.0, description="Duration of the current stationary run"
    )


class MeasurementSnapshot(BaseModel):
    """Externally visible measurement result."""

    model_config = ConfigDict(frozen=True)

    height_cm: float = Field(0.0, description="Height in centimeters")
    height_feet: int = Field(0, description="Whole feet of the height")
    height_inches: float = Field(0.0, description="Remaining inches of the height")
    confidence_percent: float = Field(0.0, description="Heuristic confidence (%)")
    classifier_label: MotionLabel = Field(
        MotionLabel.NO_DATA, description="Classification of the latest sample"
    )

    @classmethod
    def empty(cls) -> "MeasurementSnapshot":
        """Snapshot reported before any sample has been accepted."""
        return cls()


class TraceRecord(BaseModel):
    """Per-sample debug record of the integration."""

    model_config = ConfigDict(frozen=True)

    timestamp_ms: float
    dt_seconds: float
    vertical_acceleration: float
    velocity_cm_per_s: float
    displacement_cm: float
    peak_displacement_cm: float
    is_stationary: bool
    gravity_accepted: bool


class EngineState(BaseModel):
    """Complete observable state of a measurement session."""

    model_config = ConfigDict(frozen=True)

    phase: SessionPhase = Field(SessionPhase.IDLE, description="Current phase")
    gravity: Vector3 = Field(
        default_factory=lambda: Vector3.from_sequence(GravityConstants.DEFAULT_VECTOR),
        description="Current gravity estimate",
    )
    integrator: IntegratorState = Field(
        default_factory=IntegratorState, description="Current integrator state"
    )


# --- Configuration models ---


class CalibrationConfig(BaseModel):
    """Configuration for the calibration window."""

    window_seconds: float = Field(
        CalibrationConstants.WINDOW_SECONDS,
        description="Duration of sample collection while the device lies flat",
    )

    @field_validator("window_seconds")
    @classmethod
    def check_window(cls, v: float) -> float:
        """Validate the window is positive and reasonably short."""
        if v <= 0 or v > 30:
            raise ValueError("Calibration window must be between 0 and 30 seconds")
        return v


class GravityFilterConfig(BaseModel):
    """Configuration for the gravity low-pass filter and its freeze gate."""

    alpha: float = Field(
        GravityFilterDefaults.ALPHA, description="Low-pass filter coefficient"
    )
    freeze_linear_accel: float = Field(
        GravityFilterDefaults.FREEZE_LINEAR_ACCEL,
        description="Linear acceleration (m/s²) at or above which gravity freezes",
    )
    freeze_rotation_deg_s: float = Field(
        GravityFilterDefaults.FREEZE_ROTATION_DEG_S,
        description="Rotation rate (deg/s) at or above which gravity freezes",
    )

    @field_validator("*")
    @classmethod
    def check_values(cls, v: float, info) -> float:
        """Validate filter parameters are reasonable."""
        if info.field_name == "alpha" and (v <= 0 or v > 1):
            raise ValueError("alpha must be in (0, 1]")
        if v <= 0:
            raise ValueError(f"{info.field_name} must be positive")
        return v


class StationaryDetectionConfig(BaseModel):
    """Thresholds used by the motion classifier and the ZUPT gate."""

    vertical_accel: float = Field(
        StationaryThresholds.VERTICAL_ACCEL,
        description="Maximum |vertical acceleration| (m/s²) while stationary",
    )
    rotation_deg_s: float = Field(
        StationaryThresholds.ROTATION_DEG_S,
        description="Maximum rotation rate (deg/s) while stationary",
    )
    linear_accel: float = Field(
        StationaryThresholds.LINEAR_ACCEL,
        description="Maximum |linear acceleration| (m/s²) while stationary",
    )
    zupt_seconds: float = Field(
        StationaryThresholds.ZUPT_SECONDS,
        description="Continuous stillness required before velocity is zeroed",
    )

    @field_validator("*")
    @classmethod
    def check_positive(cls, v: float, info) -> float:
        """Validate thresholds are positive."""
        if v <= 0:
            raise ValueError(f"{info.field_name} must be positive")
        return v


class IntegrationConfig(BaseModel):
    """Configuration for time-step handling and integration limits."""

    moving_damping: float = Field(
        IntegrationLimits.MOVING_DAMPING,
        description="Multiplicative velocity decay applied to moving samples",
    )
    min_dt_seconds: float = Field(
        IntegrationLimits.MIN_DT_SECONDS, description="Lower clamp for dt"
    )
    max_dt_seconds: float = Field(
        IntegrationLimits.MAX_DT_SECONDS, description="Upper clamp for dt"
    )
    max_gap_seconds: float = Field(
        IntegrationLimits.MAX_GAP_SECONDS,
        description="Deltas above this are implausible and the sample is dropped",
    )
    nominal_interval_ms: float = Field(
        IntegrationLimits.NOMINAL_INTERVAL_MS,
        description="Fallback interval when neither interval nor history exist",
    )
    max_displacement_cm: float = Field(
        IntegrationLimits.MAX_DISPLACEMENT_CM,
        description="Upper clamp for displacement and peak",
    )

    @field_validator("*")
    @classmethod
    def check_values(cls, v: float, info) -> float:
        """Validate integration parameters are reasonable."""
        if info.field_name == "moving_damping" and (v <= 0 or v > 1):
            raise ValueError("moving_damping must be in (0, 1]")
        if v <= 0:
            raise ValueError(f"{info.field_name} must be positive")
        return v

    @model_validator(mode="after")
    def check_dt_ordering(self) -> "IntegrationConfig":
        """Validate that min_dt <= max_dt <= max_gap."""
        if not self.min_dt_seconds <= self.max_dt_seconds <= self.max_gap_seconds:
            raise ValueError(
                "Expected min_dt_seconds <= max_dt_seconds <= max_gap_seconds"
            )
        return self


class ConfidenceConfig(BaseModel):
    """Parameters of the empirical confidence heuristic."""

    base: float = Field(ConfidenceConstants.BASE, description="Confidence at 0 cm")
    distance_span: float = Field(
        ConfidenceConstants.DISTANCE_SPAN,
        description="Confidence gained over the reference distance",
    )
    reference_distance_cm: float = Field(
        ConfidenceConstants.REFERENCE_DISTANCE_CM,
        description="Distance at which the full span is reached",
    )
    moving_cap: float = Field(
        ConfidenceConstants.MOVING_CAP, description="Cap on the distance-based score"
    )
    stationary_bonus: float = Field(
        ConfidenceConstants.STATIONARY_BONUS,
        description="Bonus when the latest sample was stationary",
    )
    maximum: float = Field(
        ConfidenceConstants.MAXIMUM, description="Absolute confidence ceiling"
    )

    @field_validator("*")
    @classmethod
    def check_range(cls, v: float, info) -> float:
        """Validate values are percentages (distance must be positive)."""
        if info.field_name == "reference_distance_cm":
            if v <= 0:
                raise ValueError("reference_distance_cm must be positive")
            return v
        if v < 0 or v > 100:
            raise ValueError(f"{info.field_name} must be between 0 and 100")
        return v
