"""
Calibration sample collection.

While the device lies flat and motionless, every accelerometer reading is
buffered; the arithmetic mean of the buffer becomes the initial gravity
estimate. The collection window itself is timed by the caller.
"""

import logging

import numpy as np

from ..exceptions import CalibrationNoDataError, InvalidPhaseError
from ..models import GravityEstimate, MotionSample, Vector3
from ..settings import Settings

logger = logging.getLogger(__name__)


class CalibrationCollector:
    """Buffers accelerometer readings and averages them into a gravity vector."""

    def __init__(self, settings: Settings):
        """
        Initialize the collector.

        Args:
            settings: Application settings containing the calibration window
        """
        self.settings = settings
        self.logger = logging.getLogger(__name__)
        self._samples: list[Vector3] = []
        self._collecting = False

    @property
    def is_collecting(self) -> bool:
        """Whether a calibration window is currently open."""
        return self._collecting

    @property
    def sample_count(self) -> int:
        """Number of samples buffered in the current window."""
        return len(self._samples)

    def begin(self) -> None:
        """Open a new collection window, discarding any previous buffer."""
        self._samples = []
        self._collecting = True
        self.logger.debug(
            f"Calibration window opened "
            f"({self.settings.calibration.window_seconds:.2f}s expected)"
        )

    def collect(self, sample: MotionSample) -> None:
        """
        Buffer one sample.

        Raises:
            InvalidPhaseError: If no window is open
        """
        if not self._collecting:
            raise InvalidPhaseError("Calibration window is not open")
        self._samples.append(sample.acceleration_including_gravity)

    def finish(self) -> GravityEstimate:
        """
        Close the window and average the buffered readings.

        Returns:
            Mean acceleration vector, used as the initial gravity estimate

        Raises:
            CalibrationNoDataError: If no sample arrived during the window
        """
        self._collecting = False
        if not self._samples:
            raise CalibrationNoDataError("No sensor data during calibration")

        readings = np.array([v.as_tuple() for v in self._samples], dtype=float)
        gravity = Vector3.from_sequence(readings.mean(axis=0))
        self.logger.info(
            f"Calibrated from {len(self._samples)} samples | "
            f"|g|={gravity.norm():.2f} m/s²"
        )
        self._samples = []
        return gravity

    def cancel(self) -> None:
        """Close the window without producing an estimate."""
        self._collecting = False
        self._samples = []
