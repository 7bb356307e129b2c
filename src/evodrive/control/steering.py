"""
Steering Controller Module

This module implements a rule-based driver reading six rays: it steers away
from the closer side and uses the avoidance state machine for its speed.

Classes:
    SteeringController: Avoidance driver which also steers
"""

import numpy as np

from evodrive.control.avoidance import AvoidanceController
from evodrive.run.config import Config

# Angles (in degrees, relative to the heading) of the rays read by the controller
FORWARD_ANGLE    = 0.0
HALF_LEFT_ANGLE  = -25.0
HALF_RIGHT_ANGLE = 25.0
LEFT_ANGLE       = -80.0
RIGHT_ANGLE      = 80.0
BACKWARD_ANGLE   = 180.0

RAY_ANGLES = (FORWARD_ANGLE, HALF_LEFT_ANGLE, HALF_RIGHT_ANGLE, LEFT_ANGLE, RIGHT_ANGLE, BACKWARD_ANGLE)

class SteeringController(AvoidanceController):
    """
    Steers towards the side with more room:
        angular = (right - left) * angular_input_multiplier
                + (half_right - half_left) * half_angular_input_multiplier
    clipped to [-1, 1]. The linear command comes from the avoidance machine.
    """

    def __init__(self, config: Config | None = None):
        config = config if config is not None else Config()
        super().__init__(config)

        self.angular_input_multiplier     : float = config.angular_input_multiplier
        self.half_angular_input_multiplier: float = config.half_angular_input_multiplier

    def update_rays(self, readings) -> tuple[float, float]:
        """
        Run one tick from the six ray readings, ordered as RAY_ANGLES:
        forward, half left, half right, left, right, backward.

        Returns:
            (linear speed command, angular speed command)
        """
        if len(readings) != len(RAY_ANGLES):
            raise ValueError(f"Expected {len(RAY_ANGLES)} readings, got {len(readings)}")

        forward, half_left, half_right, left, right, backward = (self._cap(r) for r in readings)

        angular = (right - left) * self.angular_input_multiplier + \
                  (half_right - half_left) * self.half_angular_input_multiplier
        self.angular_speed_input = float(np.clip(angular, -1.0, 1.0))

        return self.update(forward, backward)
