"""
Avoidance Controller Module

This module implements a rule-based driver that avoids walls with a two-state
machine: drive forward while there is enough room ahead, reverse once a wall
gets close, and drive forward again only after the clearance ahead exceeds a
larger threshold. The gap between the two thresholds is the hysteresis that
keeps the machine from toggling every tick.

Classes:
    ForwardState:        Drive forward, proportionally to the clearance ahead
    BackwardState:       Reverse, proportionally to the clearance behind
    AvoidanceController: The controller owning the two-state machine
"""

import numpy as np

from evodrive.fsm import State, StateMachine, Transition
from evodrive.run.config import Config

class ForwardState(State['AvoidanceController']):

    name = "forward"

    def update(self, controller: 'AvoidanceController') -> None:
        controller.linear_speed_input = controller.forward_distance * controller.linear_input_multiplier

class BackwardState(State['AvoidanceController']):

    name = "backward"

    def update(self, controller: 'AvoidanceController') -> None:
        controller.linear_speed_input = -controller.backward_distance * controller.linear_input_multiplier

class AvoidanceController:
    """
    Computes a linear speed command from the clearances ahead and behind.

    Public Attributes:
        forward_distance:    The last clearance ahead
        backward_distance:   The last clearance behind
        linear_speed_input:  The linear speed command, in [-1, 1]
        angular_speed_input: The angular speed command (always 0 here)
        forward_state:       The state driving forward
        backward_state:      The state reversing

    Public Properties:
        machine:      The underlying StateMachine
        active_state: The currently active state

    Public Methods:
        update(forward_distance, backward_distance): Run one tick
    """

    def __init__(self, config: Config | None = None):
        config = config if config is not None else Config()

        self.close_distance         : float = config.close_distance
        self.clear_distance         : float = config.clear_distance
        self.linear_input_multiplier: float = config.linear_input_multiplier
        self.max_sensor_distance    : float = config.max_sensor_distance

        self.forward_distance   : float = self.max_sensor_distance
        self.backward_distance  : float = self.max_sensor_distance
        self.linear_speed_input : float = 0.0
        self.angular_speed_input: float = 0.0

        self.forward_state  = ForwardState()
        self.backward_state = BackwardState()

        self._machine = StateMachine(self, self.forward_state, [
            Transition(self.forward_state, self.backward_state,
                       lambda controller: controller.forward_distance < controller.close_distance),
            Transition(self.backward_state, self.forward_state,
                       lambda controller: controller.forward_distance > controller.clear_distance),
        ])

    @property
    def machine(self) -> StateMachine['AvoidanceController']:
        return self._machine

    @property
    def active_state(self) -> State['AvoidanceController']:
        return self._machine.active_state

    def _cap(self, distance: float) -> float:
        # no hit is reported as infinity
        return float(min(distance, self.max_sensor_distance))

    def update(self, forward_distance: float, backward_distance: float) -> tuple[float, float]:
        """
        Record the clearances and run the state machine for one tick.

        Parameters:
            forward_distance:  Distance to the nearest obstacle ahead
            backward_distance: Distance to the nearest obstacle behind

        Returns:
            (linear speed command, angular speed command)
        """
        self.forward_distance  = self._cap(forward_distance)
        self.backward_distance = self._cap(backward_distance)

        self._machine.update()

        self.linear_speed_input = float(np.clip(self.linear_speed_input, -1.0, 1.0))
        return self.linear_speed_input, self.angular_speed_input
