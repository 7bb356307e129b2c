"""
evodrive - Neuroevolution of driving networks.

This package evolves the weights of fixed-topology feedforward networks with a
generational genetic algorithm, and provides a generic finite state machine for
rule-based drivers. The environment (sensors, physics, fitness) is supplied by
the caller.

Main components:
- activations: Activation functions for neurons
- phenotype:   Layered networks and the neural driver
- genotype:    Genome codec (bytes and hexadecimal codes)
- pool:        Evolvable capability and the evolution manager
- fsm:         Finite state machine
- control:     Rule-based drivers
- run:         Configuration and trial loop

Example:
    >>> from evodrive import Config, Trial
    >>> class MyTrial(Trial):
    ...     def _step_member(self, individual, delta_time):
    ...         linear, angular = individual.drive(read_sensors(individual))
    ...         individual.add_fitness(max(0.0, linear) * delta_time)
    >>> MyTrial(Config("config.ini")).run(delta_time=0.02)
"""

__version__ = "0.1.0"

from evodrive.run.config import Config
from evodrive.run.trial import Trial
from evodrive.phenotype import Network, Individual
from evodrive.pool import Evolvable, EvolutionManager
from evodrive.fsm import State, Transition, StateMachine
from evodrive.control import AvoidanceController, SteeringController
from evodrive.genotype import to_code, from_code

__all__ = [
    "Config",
    "Trial",
    "Network",
    "Individual",
    "Evolvable",
    "EvolutionManager",
    "State",
    "Transition",
    "StateMachine",
    "AvoidanceController",
    "SteeringController",
    "to_code",
    "from_code",
]
