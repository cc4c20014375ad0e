"""
Measurement session state machine.

A session owns one instance of every engine stage and moves through
IDLE -> CALIBRATING -> CALIBRATED -> MEASURING -> COMPLETE -> IDLE.
Samples are pushed in by the host through ``on_sample``; each one is processed
synchronously and committed all-or-nothing.
"""

import logging
from collections.abc import Iterable

from .data.source import Subscription
from .engine import (
    CalibrationCollector,
    ConfidenceScorer,
    GravityTracker,
    MotionClassifier,
    SampleClock,
    VerticalIntegrator,
)
from .exceptions import (
    CalibrationError,
    InvalidPhaseError,
    InvalidSampleError,
    NotCalibratedError,
)
from .models import (
    EngineState,
    GravityEstimate,
    MeasurementSnapshot,
    MotionSample,
    SessionPhase,
    TraceRecord,
)
from .settings import Settings

logger = logging.getLogger(__name__)


class HeightMeasurementSession:
    """
    One height measurement session.

    The session is the single owner of phase, gravity estimate and integrator
    state. It has no threads and no timers: the host times the calibration
    window and delivers samples from a single stream in arrival order.
    """

    def __init__(self, settings: Settings | None = None):
        """
        Initialize an idle session.

        Args:
            settings: Application settings (defaults are used when omitted)
        """
        self.settings = settings or Settings()
        self.logger = logging.getLogger(__name__)

        self.collector = CalibrationCollector(self.settings)
        self.gravity_tracker = GravityTracker(self.settings)
        self.classifier = MotionClassifier(self.settings)
        self.clock = SampleClock(self.settings)
        self.integrator = VerticalIntegrator(self.settings)
        self.scorer = ConfidenceScorer(self.settings)

        self._phase = SessionPhase.IDLE
        self._snapshot = MeasurementSnapshot.empty()
        self._subscription: Subscription | None = None
        self._accepted_samples = 0
        self._dropped_samples = 0
        self.trace: list[TraceRecord] = []

    # --- Observation ---

    @property
    def phase(self) -> SessionPhase:
        """Current session phase."""
        return self._phase

    @property
    def state(self) -> EngineState:
        """Phase, gravity and integrator state as one record."""
        return EngineState(
            phase=self._phase,
            gravity=self.gravity_tracker.estimate,
            integrator=self.integrator.state,
        )

    @property
    def snapshot(self) -> MeasurementSnapshot:
        """Latest measurement snapshot."""
        return self._snapshot

    @property
    def accepted_samples(self) -> int:
        """Samples integrated in the current measurement."""
        return self._accepted_samples

    @property
    def dropped_samples(self) -> int:
        """Samples dropped as invalid in the current measurement."""
        return self._dropped_samples

    @property
    def is_attached(self) -> bool:
        """Whether a host subscription is attached."""
        return self._subscription is not None

    # --- Host subscription ---

    def attach(self, subscription: Subscription) -> None:
        """
        Attach the host subscription feeding this session.

        The session releases it on ``stop_measurement`` and ``reset``.
        """
        self.detach()
        self._subscription = subscription

    def detach(self) -> None:
        """Release the attached subscription, if any."""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    # --- Calibration ---

    def begin_calibration(self) -> None:
        """
        Open the calibration window.

        Raises:
            InvalidPhaseError: If a measurement is in progress
        """
        if self._phase == SessionPhase.MEASURING:
            raise InvalidPhaseError("Cannot calibrate while measuring")

        self.collector.begin()
        self._phase = SessionPhase.CALIBRATING
        self.logger.info("Calibrating... keep the device flat and still")

    def finish_calibration(self) -> GravityEstimate:
        """
        Close the calibration window and seed the gravity tracker.

        Returns:
            Calibrated gravity estimate

        Raises:
            InvalidPhaseError: If calibration was not started
            CalibrationNoDataError: If no samples arrived (phase returns to IDLE)
        """
        if self._phase != SessionPhase.CALIBRATING:
            raise InvalidPhaseError("Calibration was not started")

        try:
            gravity = self.collector.finish()
        except CalibrationError:
            self._phase = SessionPhase.IDLE
            self.logger.error("Calibration failed: no sensor data")
            raise

        self.gravity_tracker.seed(gravity)
        self.integrator.reset()
        self._snapshot = MeasurementSnapshot.empty()
        self._phase = SessionPhase.CALIBRATED
        return gravity

    def cancel_calibration(self) -> None:
        """Abandon an open calibration window and return to IDLE."""
        if self._phase != SessionPhase.CALIBRATING:
            return

        self.collector.cancel()
        self._phase = SessionPhase.IDLE
        self.logger.warning("Calibration cancelled")

    def calibrate(self, samples: Iterable[MotionSample]) -> GravityEstimate:
        """
        Calibrate from samples already collected by the caller.

        Args:
            samples: Samples recorded during the calibration window

        Returns:
            Calibrated gravity estimate
        """
        self.begin_calibration()
        for sample in samples:
            self.collector.collect(sample)
        return self.finish_calibration()

    # --- Measurement ---

    def start_measurement(self) -> None:
        """
        Start a measurement; re-measuring after COMPLETE needs no recalibration.

        Raises:
            NotCalibratedError: If no calibration has succeeded (state unchanged)
        """
        if self._phase not in (SessionPhase.CALIBRATED, SessionPhase.COMPLETE):
            raise NotCalibratedError("Please calibrate first")

        self.integrator.reset()
        self.clock.reset()
        self._snapshot = MeasurementSnapshot.empty()
        self._accepted_samples = 0
        self._dropped_samples = 0
        self.trace = []
        self._phase = SessionPhase.MEASURING
        self.logger.info("Measuring... move the device straight up")

    def on_sample(self, sample: MotionSample) -> MeasurementSnapshot | None:
        """
        Process one sample delivered by the host.

        Args:
            sample: Incoming motion sample

        Returns:
            The updated snapshot while measuring (unchanged if the sample was
            dropped), otherwise None
        """
        if self._phase == SessionPhase.CALIBRATING:
            self.collector.collect(sample)
            return None
        if self._phase != SessionPhase.MEASURING:
            self.logger.warning(
                f"Ignoring sample delivered in phase '{self._phase.value}'"
            )
            return None

        try:
            dt = self.clock.resolve(sample)
        except InvalidSampleError as e:
            self._dropped_samples += 1
            self.logger.debug(f"Dropped sample at {sample.timestamp_ms:.1f}ms: {e}")
            return self._snapshot

        # Compute everything first, then commit together
        gravity_update = self.gravity_tracker.evaluate(sample)
        motion = self.classifier.classify(sample, gravity_update.estimate)
        new_state = self.integrator.advance(self.integrator.state, motion, dt)
        snapshot = self.scorer.build_snapshot(new_state, motion)

        if not gravity_update.accepted:
            self.logger.debug("Gravity estimate frozen during motion")

        self.gravity_tracker.commit(gravity_update)
        self.integrator.commit(new_state)
        self._snapshot = snapshot
        self._accepted_samples += 1

        if self.settings.record_trace:
            self.trace.append(
                TraceRecord(
                    timestamp_ms=sample.timestamp_ms,
                    dt_seconds=dt,
                    vertical_acceleration=motion.vertical_acceleration,
                    velocity_cm_per_s=new_state.velocity_cm_per_s,
                    displacement_cm=new_state.displacement_cm,
                    peak_displacement_cm=new_state.peak_displacement_cm,
                    is_stationary=motion.is_stationary,
                    gravity_accepted=gravity_update.accepted,
                )
            )

        return snapshot

    def stop_measurement(self) -> MeasurementSnapshot:
        """
        Stop measuring and return the final snapshot.

        Raises:
            InvalidPhaseError: If no measurement is in progress
        """
        if self._phase != SessionPhase.MEASURING:
            raise InvalidPhaseError("No measurement in progress")

        self.detach()
        self._phase = SessionPhase.COMPLETE
        self.logger.info(
            f"Final: {self._snapshot.height_cm}cm "
            f"({self._snapshot.height_feet}' {self._snapshot.height_inches}\") | "
            f"confidence {self._snapshot.confidence_percent}% | "
            f"{self._accepted_samples} samples, {self._dropped_samples} dropped"
        )
        return self._snapshot

    def reset(self) -> None:
        """Return to IDLE from any phase, discarding calibration and results."""
        self.detach()
        self.collector.cancel()
        self.gravity_tracker.reset()
        self.integrator.reset()
        self.clock.reset()
        self._snapshot = MeasurementSnapshot.empty()
        self._accepted_samples = 0
        self._dropped_samples = 0
        self.trace = []
        self._phase = SessionPhase.IDLE
