"""
Evolvable Module

This module defines the capability an agent must provide for the
EvolutionManager to evolve it. It is the only coupling point between the
genetic algorithm and a concrete controller.

Classes:
    Evolvable: Abstract base class for evolvable agents
"""

from abc    import ABC, abstractmethod
from typing import Sequence

import numpy as np

class Evolvable(ABC):
    """
    Abstract base class for agents evolved by the EvolutionManager.

    Evolvables are ordered by descending fitness: sorting a list of them puts
    the fittest one first.

    Public Properties (must be implemented by subclasses):
        fitness: Accumulated, non-negative fitness
        active:  Whether the agent is still taking part in its generation

    Public Methods (must be implemented by subclasses):
        get_genome():       Return a copy of the agent's genome
        set_genome(genome): Replace the agent's genome; raises ValueError
                            (leaving the agent unchanged) if the length is wrong
    """

    @property
    @abstractmethod
    def fitness(self) -> float:
        pass

    @property
    @abstractmethod
    def active(self) -> bool:
        pass

    @abstractmethod
    def get_genome(self) -> np.ndarray:
        pass

    @abstractmethod
    def set_genome(self, genome: Sequence[float]) -> None:
        pass

    def __lt__(self, other: 'Evolvable') -> bool:
        return self.fitness > other.fitness
