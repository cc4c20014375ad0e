"""
Inertial height estimation engine.

This package contains the per-sample processing stages, in dependency order:
- calibration: Initial gravity from a still window
- gravity: Low-pass gravity tracking with a freeze gate
- classifier: Stationary/moving classification
- timing: Time-step resolution and validation
- integrator: Velocity/displacement integration with ZUPT and peak tracking
- confidence: Confidence heuristic and snapshot assembly
- units: cm to feet/inches conversion
"""

from .calibration import CalibrationCollector
from .classifier import MotionClassifier
from .confidence import ConfidenceScorer
from .gravity import GravityTracker
from .integrator import VerticalIntegrator
from .timing import SampleClock
from .units import HeightConversion, convert_height

__all__ = [
    "CalibrationCollector",
    "ConfidenceScorer",
    "GravityTracker",
    "HeightConversion",
    "MotionClassifier",
    "SampleClock",
    "VerticalIntegrator",
    "convert_height",
]
