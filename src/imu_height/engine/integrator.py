"""
Vertical velocity and displacement integration.

This is the drift-controlled dead-reckoning core:
- Velocity integrates vertical acceleration (cm/s)
- Moving samples apply a light multiplicative damping
- Sustained stillness forces velocity to zero (ZUPT)
- Only upward velocity contributes to displacement
- The running peak of displacement is the reported height
"""

import logging

from ..constants import IntegrationLimits, UnitConversion
from ..models import IntegratorState, MotionClassification
from ..settings import Settings

logger = logging.getLogger(__name__)


class VerticalIntegrator:
    """Owns the integrator state of one measurement session."""

    def __init__(self, settings: Settings):
        """
        Initialize the integrator at rest.

        Args:
            settings: Application settings containing integration and ZUPT
                configuration
        """
        self.settings = settings
        self.logger = logging.getLogger(__name__)
        self._state = IntegratorState()

    @property
    def state(self) -> IntegratorState:
        """Current integrator state."""
        return self._state

    def reset(self) -> None:
        """Zero velocity, displacement, peak and stationary accumulation."""
        self._state = IntegratorState()

    def advance(
        self, state: IntegratorState, motion: MotionClassification, dt: float
    ) -> IntegratorState:
        """
        Compute the state after one accepted sample.

        Args:
            state: State before the sample
            motion: Classification of the sample
            dt: Time step in seconds (already validated and clamped)

        Returns:
            New integrator state; the input state is not modified
        """
        integration = self.settings.integration
        zupt_seconds = self.settings.stationary.zupt_seconds

        velocity = (
            state.velocity_cm_per_s
            + motion.vertical_acceleration * UnitConversion.CM_PER_M * dt
        )

        if motion.is_stationary:
            stationary_accum = state.stationary_accum_seconds + dt
        else:
            velocity *= integration.moving_damping
            stationary_accum = 0.0

        # ZUPT
        if stationary_accum >= zupt_seconds - IntegrationLimits.ACCUMULATION_TOLERANCE:
            if velocity != 0.0:
                self.logger.debug(
                    f"ZUPT after {stationary_accum:.2f}s still: "
                    f"velocity {velocity:.1f} cm/s -> 0"
                )
            velocity = 0.0

        # Downward motion never retracts displacement
        displacement = state.displacement_cm + max(0.0, velocity) * dt
        displacement = min(max(displacement, 0.0), integration.max_displacement_cm)
        peak = min(
            max(state.peak_displacement_cm, displacement),
            integration.max_displacement_cm,
        )

        return IntegratorState(
            velocity_cm_per_s=velocity,
            displacement_cm=displacement,
            peak_displacement_cm=peak,
            stationary_accum_seconds=stationary_accum,
        )

    def commit(self, state: IntegratorState) -> None:
        """Install a state produced by ``advance``."""
        self._state = state

    def step(self, motion: MotionClassification, dt: float) -> IntegratorState:
        """Advance and commit the state for one accepted sample."""
        self._state = self.advance(self._state, motion, dt)
        return self._state
