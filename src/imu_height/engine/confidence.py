"""
Confidence scoring and snapshot assembly.

Confidence grows with the distance travelled (more signal relative to noise)
and gets a bonus when the latest reading was taken while the device had
settled.
"""

from ..models import (
    IntegratorState,
    MeasurementSnapshot,
    MotionClassification,
)
from ..settings import Settings
from .units import convert_height


class ConfidenceScorer:
    """Scores confidence and builds measurement snapshots."""

    def __init__(self, settings: Settings):
        """
        Initialize the scorer.

        Args:
            settings: Application settings containing the confidence parameters
        """
        self.settings = settings

    def score(self, peak_displacement_cm: float, is_stationary: bool) -> float:
        """
        Compute the heuristic confidence.

        Args:
            peak_displacement_cm: Reported height in cm
            is_stationary: Classifier verdict of the latest sample

        Returns:
            Confidence in percent (unrounded)
        """
        config = self.settings.confidence
        distance_gain = min(
            config.distance_span,
            (peak_displacement_cm / config.reference_distance_cm)
            * config.distance_span,
        )
        base = min(config.moving_cap, config.base + distance_gain)
        if is_stationary:
            return min(config.maximum, base + config.stationary_bonus)
        return base

    def build_snapshot(
        self, state: IntegratorState, motion: MotionClassification
    ) -> MeasurementSnapshot:
        """
        Build the externally visible snapshot for the current state.

        Args:
            state: Integrator state after the latest sample
            motion: Classification of the latest sample

        Returns:
            Snapshot with rounded height, imperial conversion and confidence
        """
        height = convert_height(state.peak_displacement_cm)
        confidence = self.score(height.cm, motion.is_stationary)
        return MeasurementSnapshot(
            height_cm=height.cm,
            height_feet=height.feet,
            height_inches=height.inches,
            confidence_percent=round(confidence, 1),
            classifier_label=motion.label,
        )
