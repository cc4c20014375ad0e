"""
Time-step resolution for incoming samples.

Prefers the platform-reported interval, falls back to the timestamp delta
against the previous sample, and finally to the nominal interval for the very
first sample. Implausible deltas invalidate the sample.
"""

import math

from ..constants import UnitConversion
from ..exceptions import InvalidSampleError
from ..models import MotionSample
from ..settings import Settings


class SampleClock:
    """Tracks sample timestamps and turns them into integration time steps."""

    def __init__(self, settings: Settings):
        """
        Initialize the clock.

        Args:
            settings: Application settings containing the dt limits
        """
        self.settings = settings
        self._last_timestamp_ms: float | None = None

    @property
    def last_timestamp_ms(self) -> float | None:
        """Latest timestamp seen, including those of dropped samples."""
        return self._last_timestamp_ms

    def reset(self) -> None:
        """Forget the timestamp history."""
        self._last_timestamp_ms = None

    def resolve(self, sample: MotionSample) -> float:
        """
        Resolve the time step for a sample.

        The timestamp history always advances, even when the sample is
        rejected, so a single glitch does not invalidate the following ones.

        Args:
            sample: Incoming motion sample

        Returns:
            Time step in seconds, clamped to [min_dt_seconds, max_dt_seconds]

        Raises:
            InvalidSampleError: If the timestamp is not finite, or the delta is
                non-positive or exceeds the configured gap limit
        """
        config = self.settings.integration
        if not math.isfinite(sample.timestamp_ms):
            raise InvalidSampleError(f"Non-finite timestamp: {sample.timestamp_ms}")

        previous = self._last_timestamp_ms
        if previous is None or sample.timestamp_ms > previous:
            self._last_timestamp_ms = sample.timestamp_ms

        interval = sample.reported_interval_ms
        if interval is not None and interval > 0:
            raw_dt = interval / UnitConversion.MS_PER_SECOND
        elif previous is not None:
            raw_dt = (sample.timestamp_ms - previous) / UnitConversion.MS_PER_SECOND
        else:
            raw_dt = config.nominal_interval_ms / UnitConversion.MS_PER_SECOND

        if not math.isfinite(raw_dt) or raw_dt <= 0:
            raise InvalidSampleError(f"Non-positive time step: {raw_dt:.4f}s")
        if raw_dt > config.max_gap_seconds:
            raise InvalidSampleError(
                f"Time step {raw_dt:.3f}s exceeds gap limit "
                f"{config.max_gap_seconds:.3f}s"
            )

        return min(max(raw_dt, config.min_dt_seconds), config.max_dt_seconds)
