"""
Pool Package

This package contains the generational genetic algorithm which evolves the
genomes of a population of agents.

Modules:
    evolvable:         The capability an agent must provide to be evolved
    evolution_manager: Generations and their replacement through selection,
                       crossover and mutation

Exported Classes:
    Evolvable:        Abstract base class for evolvable agents
    Generation:       One cohort of members sharing a lifetime
    EvolutionManager: Creates and evolves generations of Evolvables
"""

from evodrive.pool.evolvable         import Evolvable
from evodrive.pool.evolution_manager import Generation, EvolutionManager

__all__ = [
    'Evolvable',
    'Generation',
    'EvolutionManager',
]
