"""
Stationary/moving classification of a single sample.

Thresholds are tuned empirically for handheld devices and come from
``StationaryDetectionConfig``.
"""

from ..models import GravityEstimate, MotionClassification, MotionSample
from ..settings import Settings


class MotionClassifier:
    """Classifies samples against the current gravity estimate. Holds no state."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def classify(
        self, sample: MotionSample, gravity: GravityEstimate
    ) -> MotionClassification:
        """
        Classify one sample.

        Args:
            sample: Incoming motion sample
            gravity: Gravity estimate to subtract

        Returns:
            Vertical acceleration (m/s², positive upward) and stationary verdict
        """
        thresholds = self.settings.stationary

        linear = sample.acceleration_including_gravity - gravity
        up = (-gravity).normalized()
        vertical = linear.dot(up)
        linear_magnitude = linear.norm()
        rotation_magnitude = sample.rotation_magnitude

        is_stationary = (
            abs(vertical) < thresholds.vertical_accel
            and rotation_magnitude < thresholds.rotation_deg_s
            and linear_magnitude < thresholds.linear_accel
        )

        return MotionClassification(
            vertical_acceleration=vertical,
            linear_acceleration_magnitude=linear_magnitude,
            rotation_magnitude=rotation_magnitude,
            is_stationary=is_stationary,
        )
