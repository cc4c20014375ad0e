"""
Data access layer.

This package contains the host boundary (motion sources and subscriptions),
recording I/O, and synthetic stream generation.
"""

from .loader import MotionRecordingLoader, samples_to_frame
from .source import CapabilityStatus, MotionSource, ReplayMotionSource, Subscription
from .synthetic import RiseProfile, Scenario, SyntheticStreamGenerator

__all__ = [
    "CapabilityStatus",
    "MotionRecordingLoader",
    "MotionSource",
    "ReplayMotionSource",
    "RiseProfile",
    "Scenario",
    "Subscription",
    "SyntheticStreamGenerator",
    "samples_to_frame",
]
