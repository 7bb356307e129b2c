"""
Control Package

This package contains rule-based (non-learned) drivers built on the finite
state machine.

Modules:
    avoidance: Two-state forward/backward avoidance driver
    steering:  Avoidance driver which also steers away from walls

Exported Classes:
    ForwardState:        Avoidance state driving forward
    BackwardState:       Avoidance state reversing
    AvoidanceController: Two-state avoidance driver
    SteeringController:  Six-ray steering driver
"""

from evodrive.control.avoidance import ForwardState, BackwardState, AvoidanceController
from evodrive.control.steering  import SteeringController, RAY_ANGLES

__all__ = ['ForwardState',
           'BackwardState',
           'AvoidanceController',
           'SteeringController',
           'RAY_ANGLES']
