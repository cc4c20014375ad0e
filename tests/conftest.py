"""
Shared pytest fixtures for IMU Height tests.

This module provides reusable fixtures for:
- Settings configurations
- Motion sample factories and synthetic streams
- Calibrated sessions
- Temporary recordings and config files
"""

from pathlib import Path

import pytest
import yaml

from imu_height.data import MotionRecordingLoader, Scenario, SyntheticStreamGenerator
from imu_height.models import MotionSample, Vector3
from imu_height.session import HeightMeasurementSession
from imu_height.settings import Settings

GRAVITY = Vector3(x=0.0, y=0.0, z=9.81)

# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def settings() -> Settings:
    """Provide default settings."""
    return Settings()


@pytest.fixture
def trace_settings() -> Settings:
    """Provide settings with per-sample tracing enabled."""
    return Settings(record_trace=True)


@pytest.fixture
def temp_config_file(tmp_path: Path) -> Path:
    """Create a temporary YAML config file path for testing."""
    return tmp_path / "config.yaml"


@pytest.fixture
def sample_config_dict() -> dict:
    """Provide a sample configuration dictionary."""
    return {
        "calibration": {"window_seconds": 2.0},
        "gravity_filter": {"alpha": 0.05},
        "stationary": {"zupt_seconds": 0.3},
        "record_trace": True,
    }


@pytest.fixture
def sample_config_file(temp_config_file: Path, sample_config_dict: dict) -> Path:
    """Create a temporary config file with sample data."""
    with open(temp_config_file, "w") as f:
        yaml.dump(sample_config_dict, f)
    return temp_config_file


@pytest.fixture
def fixtures_dir() -> Path:
    """Provide path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


# ============================================================================
# Sample Fixtures
# ============================================================================


@pytest.fixture
def make_sample():
    """
    Provide a factory for motion samples.

    Defaults to a device lying flat and still at t=0 with a 20 ms interval.
    """

    def _make(
        x: float = 0.0,
        y: float = 0.0,
        z: float = 9.81,
        timestamp_ms: float = 0.0,
        interval_ms: float | None = 20.0,
        rotation: tuple[float, float, float] | None = None,
    ) -> MotionSample:
        return MotionSample(
            acceleration_including_gravity=Vector3(x=x, y=y, z=z),
            rotation_rate=Vector3.from_sequence(rotation) if rotation else None,
            timestamp_ms=timestamp_ms,
            reported_interval_ms=interval_ms,
        )

    return _make


@pytest.fixture
def generator() -> SyntheticStreamGenerator:
    """Provide a noise-free synthetic stream generator at 50 Hz."""
    return SyntheticStreamGenerator(gravity=GRAVITY, interval_ms=20.0)


@pytest.fixture
def calibration_samples(generator: SyntheticStreamGenerator) -> list[MotionSample]:
    """Provide 1.5 s of flat, still samples."""
    return generator.flat(1.5)


# ============================================================================
# Session Fixtures
# ============================================================================


@pytest.fixture
def session(settings: Settings) -> HeightMeasurementSession:
    """Provide an idle session."""
    return HeightMeasurementSession(settings)


@pytest.fixture
def calibrated_session(
    session: HeightMeasurementSession, calibration_samples: list[MotionSample]
) -> HeightMeasurementSession:
    """Provide a session calibrated on flat samples."""
    session.calibrate(calibration_samples)
    return session


@pytest.fixture
def measuring_session(
    calibrated_session: HeightMeasurementSession,
) -> HeightMeasurementSession:
    """Provide a calibrated session with a measurement in progress."""
    calibrated_session.start_measurement()
    return calibrated_session


# ============================================================================
# Recording Fixtures
# ============================================================================


@pytest.fixture
def rise_recording(
    tmp_path: Path, settings: Settings, generator: SyntheticStreamGenerator
) -> Path:
    """Write a calibration span followed by a rise to a recording CSV."""
    path = tmp_path / "rise.csv"
    samples = generator.session(Scenario.RISE, calibration_seconds=1.5)
    MotionRecordingLoader(settings).save(samples, path)
    return path
