"""
Evolution Manager Module

This module implements the generational genetic algorithm which evolves the
genomes of a population of Evolvable agents.

Every new generation consists of 'total_count' freshly spawned members. The
genomes of the first 'child_count' of them are overwritten: the first
'parent_count' slots hold (mutated) copies of the best genomes of the previous
generation, the following slots hold offspring of those parents built through
uniform crossover and mutation. The remaining (total_count - child_count)
members keep their random genomes, which keeps injecting diversity.

The first generation is entirely random.

Classes:
    Generation:       One cohort of members sharing a lifetime
    EvolutionManager: Creates and evolves generations of Evolvables
"""

import logging
from typing import Callable, Iterator, Sequence, TYPE_CHECKING

import numpy as np

from evodrive.genotype import to_code
from evodrive.pool.evolvable import Evolvable
if TYPE_CHECKING:
    from evodrive.run.config import Config

logger = logging.getLogger(__name__)

class Generation:
    """
    An ordered collection of members sharing one lifetime.

    Public Attributes:
        members: The members, in spawn order
        index:   The number of generations that came before this one
        age:     The time (in seconds) this generation has been alive
    """

    def __init__(self, members: list[Evolvable], index: int):
        self.members: list[Evolvable] = members
        self.index  : int             = index
        self.age    : float           = 0.0

    def any_active(self) -> bool:
        return any(member.active for member in self.members)

    def __len__(self):
        return len(self.members)

    def __iter__(self) -> Iterator[Evolvable]:
        return iter(self.members)

    def __getitem__(self, index: int) -> Evolvable:
        return self.members[index]

class EvolutionManager:
    """
    Handles creating and evolving generations of Evolvables.

    The manager never creates agents itself: it is handed a 'spawn' factory
    returning a new Evolvable with a random genome, and optionally an
    'initialize_member' hook the caller uses to customize new members
    (placement, color, ...) without the manager knowing about those concerns.

    Public Properties:
        current_generation:              The current Generation (None before the first one)
        generation_index:                The number of generations that have already passed
        generation_age:                  The age of the current generation
        best_genomes_of_last_generation: The parent genomes of the current generation (may be None)

    Public Methods:
        generate_first_generation():     Start evolution over with a random generation
        generate_next_generation():      Replace the current generation by evolved offspring
        update(delta_time):              Advance time and replace the generation when it is over
        get_best_genomes(amount):        The genomes of the fittest members
        get_best_genome():               The genome of the fittest member
        get_best_last_genome_codes():    Codes of the parent genomes of the current generation
        get_best_active_member():        The fittest member still active
        cross_genomes(count, parents):   Build new genomes from parent genomes
        mutate_genome(genome):           Mutate a genome in place
        get_mutation_adder():            Draw the value added to a mutated gene
    """

    def __init__(self,
                 config           : 'Config',
                 spawn            : Callable[[], Evolvable],
                 rng              : np.random.Generator | None = None,
                 initialize_member: Callable[[Evolvable], None] | None = None):
        """
        Parameters:
            config:            Stores configuration parameters
            spawn:             Factory creating a new member with a random genome
            rng:               Random generator used for crossover and mutation
            initialize_member: Hook called on every newly spawned member
        """
        self._config            = config
        self._spawn             = spawn
        self._rng               = rng if rng is not None else np.random.default_rng()
        self._initialize_member = initialize_member

        self.total_count           : int   = config.total_count
        self.child_count           : int   = config.child_count
        self.parent_count          : int   = config.parent_count
        self.mutation_chance       : float = config.mutation_chance
        self.minimum_mutation      : float = config.minimum_mutation
        self.maximum_mutation      : float = config.maximum_mutation
        self.maximum_generation_age: float = config.maximum_generation_age

        if self.total_count < self.child_count:
            logger.warning("total_count (%d) has to be at least child_count (%d), using %d",
                           self.total_count, self.child_count, self.child_count)
            self.total_count = self.child_count

        self._current_generation: Generation | None       = None
        self._generation_index  : int                     = 0
        self._best_genomes      : list[np.ndarray] | None = None

    @property
    def current_generation(self) -> Generation | None:
        return self._current_generation

    @property
    def generation_index(self) -> int:
        return self._generation_index

    @property
    def generation_age(self) -> float:
        if self._current_generation is None:
            return 0.0
        return self._current_generation.age

    @property
    def best_genomes_of_last_generation(self) -> list[np.ndarray] | None:
        return self._best_genomes

    def generate_first_generation(self) -> Generation:
        """
        Start evolution over with an entirely random generation.
        """
        self._generation_index   = 0
        self._best_genomes       = None
        self._current_generation = self._generate_base_generation()

        logger.info("Generation %d spawned with %d random members",
                    self._generation_index, self.total_count)
        return self._current_generation

    def generate_next_generation(self) -> Generation:
        """
        Replace the current generation by a new one built from its best genomes.

        Step 1: pick the genomes of the 'parent_count' fittest members
        Step 2: derive 'child_count' genomes from them (mutated parents + offspring)
        Step 3: spawn 'total_count' random members and overwrite the
                genomes of the first 'child_count' of them

        Raises:
            ValueError: if the parent/child counts are invalid; the current
                        generation is left untouched
            IndexError: if the current generation has fewer than 'parent_count' members
        """
        if self._current_generation is None:
            raise RuntimeError("generate_first_generation has to be called first")

        best_genomes = self.get_best_genomes(self.parent_count)
        new_genomes  = self.cross_genomes(self.child_count, best_genomes)
        best_fitness = max(member.fitness for member in self._current_generation)

        self._best_genomes      = best_genomes
        self._generation_index += 1
        self._current_generation = self._generate_base_generation()

        for member, genome in zip(self._current_generation, new_genomes):
            member.set_genome(genome)

        logger.info("Generation %d spawned (best fitness of previous generation: %.4f)",
                    self._generation_index, best_fitness)
        return self._current_generation

    def update(self, delta_time: float) -> bool:
        """
        Advance the age of the current generation, and replace the generation
        if no member is active anymore or it has exceeded its maximum age.

        Parameters:
            delta_time: Time passed since the last update

        Returns:
            Whether a new generation was spawned
        """
        if self._current_generation is None:
            return False

        self._current_generation.age += delta_time

        if not self._current_generation.any_active() or \
           self._current_generation.age > self.maximum_generation_age:
            self.generate_next_generation()
            return True

        return False

    def get_best_genomes(self, amount: int) -> list[np.ndarray]:
        """
        Get the genomes of the fittest members of the current generation.

        Members of equal fitness keep their spawn order.

        Parameters:
            amount: The number of genomes to return

        Returns:
            Copies of the genomes, ordered by non-increasing fitness

        Raises:
            IndexError: if the amount is negative or exceeds the generation size
        """
        if self._current_generation is None or amount < 0 or amount > len(self._current_generation):
            raise IndexError("The amount has to be between 0 and the number of current generation members")

        ranked = self._current_generation_sorted()
        return [np.array(member.get_genome(), dtype=np.float64) for member in ranked[:amount]]

    def get_best_genome(self) -> np.ndarray:
        return self.get_best_genomes(1)[0]

    def get_best_last_genome_codes(self) -> list[str]:
        if self._best_genomes is None:
            return []
        return [to_code(genome) for genome in self._best_genomes]

    def get_best_active_member(self) -> Evolvable | None:
        """
        The active member with the highest positive fitness, if any.
        """
        if self._current_generation is None:
            return None

        best, best_fitness = None, 0.0
        for member in self._current_generation:
            if member.active and member.fitness > best_fitness:
                best, best_fitness = member, member.fitness
        return best

    def cross_genomes(self, child_count: int, parent_genomes: Sequence[Sequence[float]]) -> list[np.ndarray]:
        """
        Build new genomes from parent genomes.

        The first genomes are mutated copies of the parents. Every further
        genome takes each gene from a parent picked uniformly at random and
        is then mutated. The parent genomes are not modified.

        Parameters:
            child_count:    The number of genomes to build, parents included
            parent_genomes: The parent genomes, all of the same length

        Returns:
            A list of 'child_count' new genomes

        Raises:
            ValueError: if there are fewer than 2 parents, not fewer parents
                        than 'child_count', or parents of different lengths
        """
        parent_count = len(parent_genomes)
        if parent_count < 2 or parent_count >= child_count:
            raise ValueError("Expected at least two and less than child_count parents")

        gene_count = len(parent_genomes[0])
        if any(len(genome) != gene_count for genome in parent_genomes):
            raise ValueError("All parents need to have the same amount of genes")

        parents = np.array(parent_genomes, dtype=np.float64).reshape(parent_count, gene_count)

        child_genomes = [self.mutate_genome(parent.copy()) for parent in parents]

        for _ in range(parent_count, child_count):
            # gene #g comes from parent #choice[g]
            choice = self._rng.integers(parent_count, size=gene_count)
            child  = parents[choice, np.arange(gene_count)]
            child_genomes.append(self.mutate_genome(child))

        return child_genomes

    def mutate_genome(self, genome: np.ndarray) -> np.ndarray:
        """
        Mutate a genome in place: every gene is, with probability
        'mutation_chance', shifted by a value drawn by 'get_mutation_adder'.

        Returns:
            The same array
        """
        for i in range(len(genome)):
            if self._rng.random() < self.mutation_chance:
                genome[i] += self.get_mutation_adder()
        return genome

    def get_mutation_adder(self) -> float:
        return float(self._rng.uniform(self.minimum_mutation, self.maximum_mutation))

    def _current_generation_sorted(self) -> list[Evolvable]:
        # sorted() is stable, so equal fitness keeps spawn order
        return sorted(self._current_generation.members, key=lambda member: member.fitness, reverse=True)

    def _generate_base_generation(self) -> Generation:
        members = []
        for _ in range(self.total_count):
            member = self._spawn()
            if self._initialize_member is not None:
                self._initialize_member(member)
            members.append(member)
        return Generation(members, self._generation_index)
