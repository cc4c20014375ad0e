"""
Gravity tracking with a freeze gate.

The estimate follows the accelerometer through a slow exponential low-pass
filter, but only while the device is mostly still. During deliberate motion
the raw signal is dominated by real acceleration, so the estimate is frozen.
"""

import logging

from ..models import GravityEstimate, GravityUpdate, MotionSample
from ..settings import Settings

logger = logging.getLogger(__name__)


class GravityTracker:
    """Holds the device-frame gravity estimate for one session."""

    def __init__(self, settings: Settings):
        """
        Initialize the tracker at the default gravity vector.

        Args:
            settings: Application settings containing the filter configuration
        """
        self.settings = settings
        self.logger = logging.getLogger(__name__)
        self._estimate = settings.default_gravity_vector

    @property
    def estimate(self) -> GravityEstimate:
        """Current gravity estimate."""
        return self._estimate

    def seed(self, gravity: GravityEstimate) -> None:
        """Install a calibrated gravity estimate."""
        self._estimate = gravity

    def reset(self) -> None:
        """Restore the default gravity estimate."""
        self._estimate = self.settings.default_gravity_vector

    def evaluate(self, sample: MotionSample) -> GravityUpdate:
        """
        Compute the gravity estimate after this sample without committing it.

        Args:
            sample: Incoming motion sample

        Returns:
            The new estimate, and whether the low-pass candidate was accepted
        """
        config = self.settings.gravity_filter
        measured = sample.acceleration_including_gravity
        prior = self._estimate

        candidate = prior.scale(1 - config.alpha) + measured.scale(config.alpha)
        linear_magnitude = (measured - candidate).norm()
        rotation_magnitude = sample.rotation_magnitude

        mostly_still = (
            linear_magnitude < config.freeze_linear_accel
            and rotation_magnitude < config.freeze_rotation_deg_s
        )
        if not mostly_still:
            return GravityUpdate(estimate=prior, accepted=False)
        return GravityUpdate(estimate=candidate, accepted=True)

    def commit(self, update: GravityUpdate) -> None:
        """Apply an update produced by ``evaluate``."""
        self._estimate = update.estimate

    def update(self, sample: MotionSample) -> GravityUpdate:
        """Evaluate and commit in one step."""
        result = self.evaluate(sample)
        self.commit(result)
        return result
