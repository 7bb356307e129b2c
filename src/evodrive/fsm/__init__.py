"""
Finite State Machine Package

This package provides a generic finite state machine used to sequence the
discrete behaviors of rule-based controllers.

Modules:
    machine: State, Transition and StateMachine classes

Exported Classes:
    State:        Base class for states, with update/enter/exit hooks
    Transition:   A guarded edge between two states
    StateMachine: The machine holding the active state and the transitions
"""

from evodrive.fsm.machine import State, Transition, StateMachine

__all__ = ['State',
           'Transition',
           'StateMachine']
