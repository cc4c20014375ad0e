"""
High-level service for running measurements against a motion source.

This service plays the host role: it checks sensor capability, times the
calibration window, and wires the source's subscription to the session.
"""

import logging
from dataclasses import dataclass
from typing import Protocol

import pandas as pd

from ..data.source import CapabilityStatus, MotionSource
from ..exceptions import (
    ImuHeightError,
    PermissionDeniedError,
    ProcessingError,
    SensorUnavailableError,
)
from ..models import GravityEstimate, MeasurementSnapshot, TraceRecord
from ..session import HeightMeasurementSession
from ..settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class MeasurementResult:
    """
    Result of a complete calibrate-and-measure run.

    Attributes:
        gravity: Calibrated gravity estimate
        snapshot: Final measurement snapshot
        accepted_samples: Samples integrated during the measurement
        dropped_samples: Samples dropped as invalid during the measurement
        trace: Per-sample trace (empty unless ``record_trace`` is enabled)
    """

    gravity: GravityEstimate
    snapshot: MeasurementSnapshot
    accepted_samples: int
    dropped_samples: int
    trace: pd.DataFrame


class MeasurementServiceProtocol(Protocol):
    """Protocol for measurement services."""

    def run(self, duration_seconds: float | None = None) -> MeasurementResult:
        """Calibrate, then measure."""
        ...


class MeasurementService:
    """
    Coordinates a motion source and a measurement session.

    This service orchestrates:
    - Capability and permission checks
    - The timed calibration window
    - Subscription and detachment during measurement
    """

    def __init__(
        self,
        settings: Settings,
        source: MotionSource,
        session: HeightMeasurementSession | None = None,
    ):
        """
        Initialize the measurement service.

        Args:
            settings: Application settings
            source: Host delivering motion samples
            session: Session to drive (a new one is created when omitted)
        """
        self.settings = settings
        self.source = source
        self.session = session or HeightMeasurementSession(settings)
        self.logger = logging.getLogger(__name__)

    def ensure_capability(self) -> None:
        """
        Check that the host can deliver motion samples.

        Raises:
            SensorUnavailableError: If the host has no motion sensors
            PermissionDeniedError: If access to the sensors was refused
        """
        if not self.source.is_available():
            raise SensorUnavailableError("Device motion sensors not available")
        if self.source.request_capability() != CapabilityStatus.GRANTED:
            raise PermissionDeniedError("Motion sensor permission denied")

    def calibrate(self) -> GravityEstimate:
        """
        Collect samples for the calibration window and seed gravity.

        If waiting fails or is interrupted, the session returns to IDLE.

        Returns:
            Calibrated gravity estimate

        Raises:
            CalibrationNoDataError: If the source delivered nothing in the window
        """
        self.ensure_capability()
        self.session.begin_calibration()

        subscription = self.source.subscribe(self.session.on_sample)
        try:
            self.source.wait(self.settings.calibration.window_seconds)
        except BaseException:
            self.session.cancel_calibration()
            raise
        finally:
            subscription.unsubscribe()

        return self.session.finish_calibration()

    def measure(self, duration_seconds: float | None = None) -> MeasurementSnapshot:
        """
        Run one measurement.

        Args:
            duration_seconds: How long to listen; None listens until the
                source's stream ends

        Returns:
            Final measurement snapshot
        """
        self.session.start_measurement()
        self.session.attach(self.source.subscribe(self.session.on_sample))
        try:
            self.source.wait(duration_seconds)
        except BaseException:
            self.session.detach()
            raise

        return self.session.stop_measurement()

    def run(self, duration_seconds: float | None = None) -> MeasurementResult:
        """
        Calibrate, then measure.

        Args:
            duration_seconds: Measurement duration (None until stream end)

        Returns:
            MeasurementResult with the final snapshot and diagnostics

        Raises:
            ImuHeightError: Domain errors propagate unchanged
            ProcessingError: If an unexpected error occurs
        """
        try:
            self.logger.info("=" * 40)
            self.logger.info("Starting height measurement")
            self.logger.info("=" * 40)

            gravity = self.calibrate()
            snapshot = self.measure(duration_seconds)

            return MeasurementResult(
                gravity=gravity,
                snapshot=snapshot,
                accepted_samples=self.session.accepted_samples,
                dropped_samples=self.session.dropped_samples,
                trace=self.trace_frame(),
            )

        except ImuHeightError:
            raise
        except Exception as e:
            self.logger.error(f"Measurement failed: {e}")
            raise ProcessingError(f"Measurement failed: {e}") from e

    def trace_frame(self) -> pd.DataFrame:
        """Return the session trace as a DataFrame (one row per sample)."""
        columns = list(TraceRecord.model_fields)
        return pd.DataFrame(
            [record.model_dump() for record in self.session.trace], columns=columns
        )
