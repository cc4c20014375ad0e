"""IMU Height - standing height estimation from handheld inertial sensors."""

__version__ = "1.0.0"

from . import constants, data, engine, exceptions, models, services
from .data import (
    CapabilityStatus,
    MotionRecordingLoader,
    MotionSource,
    ReplayMotionSource,
    Subscription,
    SyntheticStreamGenerator,
)
from .engine import (
    CalibrationCollector,
    ConfidenceScorer,
    GravityTracker,
    MotionClassifier,
    SampleClock,
    VerticalIntegrator,
    convert_height,
)
from .models import (
    EngineState,
    IntegratorState,
    MeasurementSnapshot,
    MotionClassification,
    MotionLabel,
    MotionSample,
    SessionPhase,
    Vector3,
)
from .services import MeasurementResult, MeasurementService
from .session import HeightMeasurementSession
from .settings import Settings, load_settings


def get_version() -> str:
    """Get the current version of imu_height."""
    return __version__


def get_package_info() -> dict[str, str]:
    """Get package information including name and version."""
    return {
        "name": "imu-height",
        "version": __version__,
        "description": "Standing height estimation from handheld inertial sensors",
    }


__all__ = [
    # Version & Info
    "get_version",
    "get_package_info",
    # Models
    "EngineState",
    "IntegratorState",
    "MeasurementSnapshot",
    "MotionClassification",
    "MotionLabel",
    "MotionSample",
    "SessionPhase",
    "Vector3",
    # Engine
    "CalibrationCollector",
    "ConfidenceScorer",
    "GravityTracker",
    "MotionClassifier",
    "SampleClock",
    "VerticalIntegrator",
    "convert_height",
    # Data Layer
    "CapabilityStatus",
    "MotionRecordingLoader",
    "MotionSource",
    "ReplayMotionSource",
    "Subscription",
    "SyntheticStreamGenerator",
    # Session & Services
    "HeightMeasurementSession",
    "MeasurementResult",
    "MeasurementService",
    # Settings
    "Settings",
    "load_settings",
    # Modules
    "constants",
    "data",
    "engine",
    "exceptions",
    "models",
    "services",
]
