"""Unit tests for data models and vector math."""

import math

import pytest
from pydantic import ValidationError

from imu_height.exceptions import InvalidSampleError
from imu_height.models import (
    ConfidenceConfig,
    EngineState,
    GravityFilterConfig,
    IntegrationConfig,
    MeasurementSnapshot,
    MotionClassification,
    MotionLabel,
    MotionSample,
    SessionPhase,
    Vector3,
)


class TestVector3:
    """Test vector math primitives."""

    def test_add_and_subtract(self):
        """Test component-wise addition and subtraction."""
        a = Vector3(x=1.0, y=2.0, z=3.0)
        b = Vector3(x=0.5, y=-1.0, z=2.0)

        assert (a + b).as_tuple() == (1.5, 1.0, 5.0)
        assert (a - b).as_tuple() == (0.5, 3.0, 1.0)

    def test_scale_and_negate(self):
        """Test scalar multiplication and negation."""
        v = Vector3(x=1.0, y=-2.0, z=0.5)

        assert v.scale(2.0).as_tuple() == (2.0, -4.0, 1.0)
        assert (-v).as_tuple() == (-1.0, 2.0, -0.5)

    def test_dot_and_norm(self):
        """Test dot product and Euclidean norm."""
        v = Vector3(x=3.0, y=4.0, z=0.0)

        assert v.dot(Vector3(x=1.0, y=1.0, z=1.0)) == 7.0
        assert v.norm() == 5.0

    def test_normalized(self):
        """Test normalization to a unit vector."""
        unit = Vector3(x=3.0, y=4.0, z=0.0).normalized()

        assert unit.x == pytest.approx(0.6)
        assert unit.y == pytest.approx(0.8)
        assert unit.norm() == pytest.approx(1.0)

    def test_normalizing_zero_vector_returns_zero(self):
        """Test that the zero vector normalizes to itself."""
        assert Vector3.zero().normalized() == Vector3.zero()

    def test_vectors_are_immutable(self):
        """Test that vector components cannot be reassigned."""
        v = Vector3(x=1.0)
        with pytest.raises(ValidationError):
            v.x = 2.0

    def test_from_sequence(self):
        """Test building a vector from a sequence."""
        assert Vector3.from_sequence([1, 2, 3]) == Vector3(x=1.0, y=2.0, z=3.0)

    def test_is_finite(self):
        """Test finite checks."""
        assert Vector3(x=1.0).is_finite()
        assert not Vector3(x=math.nan).is_finite()


class TestMotionSample:
    """Test motion sample validation and construction."""

    def test_rotation_magnitude_absent_is_zero(self, make_sample):
        """Test that a missing rotation rate has zero magnitude."""
        assert make_sample().rotation_magnitude == 0.0

    def test_rotation_magnitude(self, make_sample):
        """Test rotation magnitude is the Euclidean norm."""
        assert make_sample(rotation=(3.0, 4.0, 0.0)).rotation_magnitude == 5.0

    def test_non_finite_acceleration_rejected(self):
        """Test that NaN acceleration fails validation."""
        with pytest.raises(ValidationError):
            MotionSample(
                acceleration_including_gravity=Vector3(x=math.nan),
                timestamp_ms=0.0,
            )

    def test_non_finite_timestamp_rejected(self):
        """Test that a NaN timestamp fails validation."""
        with pytest.raises(ValidationError):
            MotionSample(
                acceleration_including_gravity=Vector3(z=9.81),
                timestamp_ms=math.nan,
            )

    def test_from_mapping_full_record(self):
        """Test building a sample from a complete record."""
        sample = MotionSample.from_mapping(
            {
                "timestamp_ms": 100.0,
                "ax": 0.1,
                "ay": 0.2,
                "az": 9.8,
                "rx": 1.0,
                "ry": 0.0,
                "rz": 0.0,
                "interval_ms": 16.0,
            }
        )

        assert sample.timestamp_ms == 100.0
        assert sample.acceleration_including_gravity == Vector3(x=0.1, y=0.2, z=9.8)
        assert sample.rotation_rate == Vector3(x=1.0)
        assert sample.reported_interval_ms == 16.0

    def test_from_mapping_missing_optional_fields(self):
        """Test that NaN rotation and interval become None."""
        sample = MotionSample.from_mapping(
            {
                "timestamp_ms": 0.0,
                "ax": 0.0,
                "ay": 0.0,
                "az": 9.81,
                "rx": math.nan,
                "ry": math.nan,
                "rz": math.nan,
                "interval_ms": math.nan,
            }
        )

        assert sample.rotation_rate is None
        assert sample.reported_interval_ms is None

    def test_from_mapping_partial_rotation_fills_zero(self):
        """Test that missing rotation components default to zero."""
        sample = MotionSample.from_mapping(
            {"timestamp_ms": 0.0, "ax": 0.0, "ay": 0.0, "az": 9.81, "rz": 2.0}
        )

        assert sample.rotation_rate == Vector3(z=2.0)

    def test_from_mapping_missing_axis_raises(self):
        """Test that a missing acceleration axis is an invalid sample."""
        with pytest.raises(InvalidSampleError):
            MotionSample.from_mapping({"timestamp_ms": 0.0, "ax": 0.0, "ay": 0.0})

    def test_from_mapping_nan_timestamp_raises(self):
        """Test that a missing timestamp is an invalid sample."""
        with pytest.raises(InvalidSampleError):
            MotionSample.from_mapping(
                {"timestamp_ms": math.nan, "ax": 0.0, "ay": 0.0, "az": 9.81}
            )

    def test_from_mapping_nan_acceleration_raises(self):
        """Test that non-finite acceleration is an invalid sample."""
        with pytest.raises(InvalidSampleError):
            MotionSample.from_mapping(
                {"timestamp_ms": 0.0, "ax": math.nan, "ay": 0.0, "az": 9.81}
            )


class TestResultModels:
    """Test snapshot, classification and state models."""

    def test_empty_snapshot(self):
        """Test the snapshot reported before any sample."""
        snapshot = MeasurementSnapshot.empty()

        assert snapshot.height_cm == 0.0
        assert snapshot.confidence_percent == 0.0
        assert snapshot.classifier_label == MotionLabel.NO_DATA

    def test_classification_label(self):
        """Test that the label follows the stationary flag."""
        still = MotionClassification(
            vertical_acceleration=0.0,
            linear_acceleration_magnitude=0.0,
            rotation_magnitude=0.0,
            is_stationary=True,
        )
        moving = still.model_copy(update={"is_stationary": False})

        assert still.label == MotionLabel.STATIONARY
        assert moving.label == MotionLabel.MOVING

    def test_engine_state_defaults(self):
        """Test default engine state is idle at nominal gravity."""
        state = EngineState()

        assert state.phase == SessionPhase.IDLE
        assert state.gravity == Vector3(z=9.81)
        assert state.integrator.peak_displacement_cm == 0.0


class TestConfigModels:
    """Test validation of the tuning configuration models."""

    def test_alpha_must_be_in_unit_interval(self):
        """Test that alpha outside (0, 1] is rejected."""
        with pytest.raises(ValidationError):
            GravityFilterConfig(alpha=0.0)
        with pytest.raises(ValidationError):
            GravityFilterConfig(alpha=1.5)

    def test_dt_limits_must_be_ordered(self):
        """Test that min_dt <= max_dt <= max_gap is enforced."""
        with pytest.raises(ValidationError):
            IntegrationConfig(min_dt_seconds=0.1, max_dt_seconds=0.05)

    def test_damping_must_be_in_unit_interval(self):
        """Test that damping above 1 is rejected."""
        with pytest.raises(ValidationError):
            IntegrationConfig(moving_damping=1.01)

    def test_confidence_values_are_percentages(self):
        """Test that confidence parameters must lie in [0, 100]."""
        with pytest.raises(ValidationError):
            ConfidenceConfig(base=120.0)

    def test_custom_values_accepted(self):
        """Test that valid overrides are kept."""
        config = GravityFilterConfig(alpha=0.05, freeze_linear_accel=0.3)

        assert config.alpha == 0.05
        assert config.freeze_linear_accel == 0.3
        assert config.freeze_rotation_deg_s == 3.0
