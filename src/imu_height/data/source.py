"""
Host boundary for motion sample delivery.

The engine never listens for sensor events itself. A host implements
``MotionSource`` and hands samples to the session; subscriptions are explicit
objects that the host must release when a measurement stops.
"""

import logging
from collections.abc import Callable, Sequence
from enum import Enum
from itertools import count
from typing import Protocol

from ..constants import UnitConversion
from ..models import MotionSample

logger = logging.getLogger(__name__)

SampleCallback = Callable[[MotionSample], object]


class CapabilityStatus(str, Enum):
    """Result of asking the host for motion sensor access."""

    GRANTED = "granted"
    DENIED = "denied"


class Subscription:
    """Handle to an active sample subscription; unsubscribing is idempotent."""

    def __init__(self, on_unsubscribe: Callable[[], None]):
        self._on_unsubscribe = on_unsubscribe
        self._active = True

    @property
    def active(self) -> bool:
        """Whether samples are still being delivered."""
        return self._active

    def unsubscribe(self) -> None:
        """Stop delivery. Safe to call more than once."""
        if self._active:
            self._active = False
            self._on_unsubscribe()


class MotionSource(Protocol):
    """Protocol for hosts that deliver motion samples."""

    nominal_interval_ms: float | None

    def is_available(self) -> bool:
        """Whether the host has inertial sensors at all."""
        ...

    def request_capability(self) -> CapabilityStatus:
        """Ask for permission to read the motion sensors."""
        ...

    def subscribe(self, callback: SampleCallback) -> Subscription:
        """Start delivering samples to ``callback`` in arrival order."""
        ...

    def wait(self, seconds: float | None = None) -> None:
        """
        Let platform time pass while samples are delivered.

        ``None`` waits until the stream ends.
        """
        ...


class ReplayMotionSource:
    """
    Replays recorded samples through the ``MotionSource`` protocol.

    Time is virtual: ``wait`` advances a clock based on sample timestamps and
    delivers every sample that falls inside the waited span. Samples that
    arrive while nobody is subscribed are lost, as they would be on a device.
    """

    def __init__(
        self,
        samples: Sequence[MotionSample],
        available: bool = True,
        capability: CapabilityStatus = CapabilityStatus.GRANTED,
        nominal_interval_ms: float | None = None,
    ):
        """
        Initialize the replay source.

        Args:
            samples: Recorded samples in arrival order
            available: Whether the simulated host reports motion sensors
            capability: Permission answer returned by ``request_capability``
            nominal_interval_ms: Nominal sample period advertised to consumers
        """
        self.samples = list(samples)
        self.available = available
        self.capability = capability
        self.nominal_interval_ms = nominal_interval_ms
        self.logger = logging.getLogger(__name__)

        self._cursor = 0
        self._clock_ms = self.samples[0].timestamp_ms if self.samples else 0.0
        self._subscribers: dict[int, SampleCallback] = {}
        self._ids = count()

    @property
    def remaining(self) -> int:
        """Number of samples not yet delivered."""
        return len(self.samples) - self._cursor

    @property
    def subscriber_count(self) -> int:
        """Number of active subscriptions."""
        return len(self._subscribers)

    def is_available(self) -> bool:
        """Report the configured sensor availability."""
        return self.available

    def request_capability(self) -> CapabilityStatus:
        """Return the configured permission answer."""
        return self.capability

    def subscribe(self, callback: SampleCallback) -> Subscription:
        """Register a callback for delivered samples."""
        key = next(self._ids)
        self._subscribers[key] = callback
        return Subscription(lambda: self._subscribers.pop(key, None))

    def wait(self, seconds: float | None = None) -> None:
        """
        Deliver the samples inside the next ``seconds`` of recording time.

        The span is half-open: a sample exactly at the deadline belongs to
        the next wait.
        """
        if seconds is None:
            deadline = float("inf")
        else:
            deadline = self._clock_ms + seconds * UnitConversion.MS_PER_SECOND

        delivered = 0
        while self._cursor < len(self.samples):
            sample = self.samples[self._cursor]
            if sample.timestamp_ms >= deadline:
                break
            self._cursor += 1
            delivered += 1
            for callback in list(self._subscribers.values()):
                callback(sample)

        if seconds is not None:
            self._clock_ms = deadline
        elif self.samples:
            self._clock_ms = self.samples[-1].timestamp_ms
        self.logger.debug(f"Replay delivered {delivered} samples")
