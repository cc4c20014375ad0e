"""
Synthetic motion streams.

Generates sample streams with a known vertical acceleration profile, for
demonstrations and tests. Motion is expressed along the engine's "up"
direction, i.e. the negated, normalized gravity vector.
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np

from ..constants import GravityConstants, UnitConversion
from ..models import MotionSample, Vector3


class Scenario(str, Enum):
    """Built-in synthetic scenarios."""

    FLAT = "flat"
    RISE = "rise"


@dataclass
class RiseProfile:
    """
    Vertical acceleration profile of a rise.

    Attributes:
        peak_accel: Plateau acceleration in m/s²
        ramp_seconds: Duration of the ramp from 0 to the plateau
        hold_seconds: Duration of the plateau
        decay_seconds: Duration of the decay back to 0
        settle_seconds: Still period after the decay
    """

    peak_accel: float = 2.0
    ramp_seconds: float = 0.3
    hold_seconds: float = 0.2
    decay_seconds: float = 0.3
    settle_seconds: float = 1.0

    @property
    def duration(self) -> float:
        """Total profile duration in seconds."""
        return (
            self.ramp_seconds
            + self.hold_seconds
            + self.decay_seconds
            + self.settle_seconds
        )

    def acceleration_at(self, t: np.ndarray) -> np.ndarray:
        """Evaluate the vertical acceleration (m/s²) at times ``t`` (seconds)."""
        hold_end = self.ramp_seconds + self.hold_seconds
        decay_end = hold_end + self.decay_seconds
        ramp = self.peak_accel * np.clip(t / self.ramp_seconds, 0.0, 1.0)
        decay = self.peak_accel * np.clip(
            (decay_end - t) / self.decay_seconds, 0.0, 1.0
        )
        return np.where(t < hold_end, ramp, decay)


class SyntheticStreamGenerator:
    """Builds MotionSample streams from vertical acceleration profiles."""

    def __init__(
        self,
        gravity: Vector3 | None = None,
        interval_ms: float = 20.0,
        noise_std: float = 0.0,
        seed: int | None = None,
    ):
        """
        Initialize the generator.

        Args:
            gravity: Device-frame gravity (defaults to the nominal vector)
            interval_ms: Sample period in ms
            noise_std: Standard deviation of Gaussian accelerometer noise (m/s²)
            seed: Seed for the noise generator
        """
        self.gravity = gravity or Vector3.from_sequence(
            GravityConstants.DEFAULT_VECTOR
        )
        self.interval_ms = interval_ms
        self.noise_std = noise_std
        self.rng = np.random.default_rng(seed)

    def from_vertical_acceleration(
        self, vertical: np.ndarray, start_ms: float = 0.0
    ) -> list[MotionSample]:
        """
        Build samples whose linear acceleration lies along "up".

        Args:
            vertical: Vertical acceleration per sample in m/s²
            start_ms: Timestamp of the first sample

        Returns:
            Samples spaced ``interval_ms`` apart, each reporting that interval
        """
        g = np.asarray(self.gravity.as_tuple())
        up = np.asarray((-self.gravity).normalized().as_tuple())
        readings = g + np.outer(np.asarray(vertical, dtype=float), up)
        if self.noise_std > 0:
            readings = readings + self.rng.normal(0.0, self.noise_std, readings.shape)

        timestamps = start_ms + np.arange(len(readings)) * self.interval_ms
        return [
            MotionSample(
                acceleration_including_gravity=Vector3.from_sequence(reading),
                rotation_rate=Vector3.zero(),
                timestamp_ms=float(ts),
                reported_interval_ms=self.interval_ms,
            )
            for reading, ts in zip(readings, timestamps, strict=True)
        ]

    def _sample_times(self, seconds: float) -> np.ndarray:
        count = int(round(seconds * UnitConversion.MS_PER_SECOND / self.interval_ms))
        return np.arange(count) * self.interval_ms / UnitConversion.MS_PER_SECOND

    def flat(self, seconds: float, start_ms: float = 0.0) -> list[MotionSample]:
        """Device lying still for ``seconds``."""
        t = self._sample_times(seconds)
        return self.from_vertical_acceleration(np.zeros_like(t), start_ms)

    def rise(
        self, profile: RiseProfile | None = None, start_ms: float = 0.0
    ) -> list[MotionSample]:
        """Device lifted following ``profile``, then held still."""
        profile = profile or RiseProfile()
        t = self._sample_times(profile.duration)
        return self.from_vertical_acceleration(profile.acceleration_at(t), start_ms)

    def session(
        self,
        scenario: Scenario,
        calibration_seconds: float,
        profile: RiseProfile | None = None,
        flat_seconds: float = 2.0,
    ) -> list[MotionSample]:
        """
        Build a complete stream: a still calibration span, then the scenario.

        Args:
            scenario: Which motion follows calibration
            calibration_seconds: Length of the leading still span
            profile: Rise profile (RISE only)
            flat_seconds: Measurement length (FLAT only)

        Returns:
            Continuous sample stream
        """
        calibration = self.flat(calibration_seconds)
        start_ms = 0.0
        if calibration:
            start_ms = calibration[-1].timestamp_ms + self.interval_ms
        if scenario == Scenario.RISE:
            return calibration + self.rise(profile, start_ms)
        return calibration + self.flat(flat_seconds, start_ms)
