"""
Finite State Machine Module

This module implements a small finite state machine, generic over a context
object (typically the controller owning the machine). States encapsulate the
behavior run while they are active, transitions are registered once, when the
machine is built, and are gated by guard functions of the context.

Classes:
    State:        Base class for states, with update/enter/exit hooks
    Transition:   A guarded edge between two states
    StateMachine: The machine holding the active state and the transitions
"""

from typing import Callable, Generic, Iterable, NamedTuple, TypeVar

T = TypeVar('T')

class State(Generic[T]):
    """
    A state of a StateMachine.

    Subclasses override 'update', which is called every time the machine is
    updated while the state is active, and optionally 'enter' and 'exit',
    called when the state becomes active and inactive respectively. All hooks
    receive the machine's context.

    Public Attributes:
        name: Human-readable name of the state
    """

    name: str = "state"

    def update(self, context: T) -> None:
        pass

    def enter(self, context: T) -> None:
        pass

    def exit(self, context: T) -> None:
        pass

    def __repr__(self):
        return f"{type(self).__name__}(name={self.name!r})"

class Transition(NamedTuple):
    """
    A transition from one state to another, taken when the guard returns True.
    """
    from_state: State
    to_state  : State
    guard     : Callable[[object], bool]

class StateMachine(Generic[T]):
    """
    A finite state machine with exactly one active state.

    On every update the active state is updated first, then the transitions are
    scanned in registration order; the first one leaving the active state whose
    guard holds is applied (exiting the old state, entering the new one). At most
    one transition is applied per update.

    Public Properties:
        context:      The object passed to all hooks and guards
        active_state: The currently active state
        transitions:  The registered transitions, in registration order

    Public Methods:
        update(): Update the active state and apply the first possible transition
    """

    def __init__(self, context: T, initial_state: State[T], transitions: Iterable[Transition] = ()):
        """
        Build the machine and enter the initial state.

        Parameters:
            context:       The object passed to all hooks and guards
            initial_state: The state active after construction
            transitions:   The transitions of the machine
        """
        self._context     : T                      = context
        self._transitions : tuple[Transition, ...] = tuple(Transition(*t) for t in transitions)
        self._active_state: State[T]               = initial_state

        self._active_state.enter(self._context)

    @property
    def context(self) -> T:
        return self._context

    @property
    def active_state(self) -> State[T]:
        return self._active_state

    @property
    def transitions(self) -> tuple[Transition, ...]:
        return self._transitions

    def update(self) -> bool:
        """
        Update the active state and apply the first possible transition.

        Returns:
            Whether a transition was applied
        """
        self._active_state.update(self._context)

        for transition in self._transitions:
            if transition.from_state is self._active_state and transition.guard(self._context):
                self._active_state.exit(self._context)
                self._active_state = transition.to_state
                self._active_state.enter(self._context)
                return True

        return False
