"""
Custom exceptions for the IMU Height package.

This module defines all custom exceptions used throughout the application,
providing a clear error hierarchy for sensor, calibration and session errors.
"""


class ImuHeightError(Exception):
    """Base exception for all IMU Height errors."""


class ConfigurationError(ImuHeightError):
    """Raised when there is an issue with configuration settings."""


class SensorUnavailableError(ImuHeightError):
    """Raised when the host has no inertial sensing capability."""


class PermissionDeniedError(ImuHeightError):
    """Raised when the host refuses access to motion sensors."""


class CalibrationError(ImuHeightError):
    """Raised when calibration cannot produce a gravity estimate."""


class CalibrationNoDataError(CalibrationError):
    """Raised when no samples arrived during the calibration window."""


class SessionStateError(ImuHeightError):
    """Raised when an operation is not valid in the current session phase."""


class NotCalibratedError(SessionStateError):
    """Raised when a measurement is started before a successful calibration."""


class InvalidPhaseError(SessionStateError):
    """Raised when an operation is attempted from the wrong phase."""


class InvalidSampleError(ImuHeightError):
    """Raised when a motion sample is malformed or has an unusable time delta."""


class DataLoadError(ImuHeightError):
    """Raised when there is an error loading or saving recordings."""


class ProcessingError(ImuHeightError):
    """Raised when a measurement workflow fails unexpectedly."""
