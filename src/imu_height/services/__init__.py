"""
Service layer for coordinating measurement workflows.

This package contains high-level services that connect motion sources to
measurement sessions.
"""

from .measurement_service import MeasurementResult, MeasurementService

__all__ = [
    "MeasurementResult",
    "MeasurementService",
]
