"""
Trial Module

This module defines the abstract base class coupling an environment to the
evolution of neural drivers.

A trial drives the simulation clock: every tick, each active driver of the
current generation is stepped through the environment (sensor readings in,
commands out, fitness accrued), then the EvolutionManager ages the generation
and replaces it once no driver is active or it has grown too old.
"""

import logging
from abc import ABC, abstractmethod

import numpy as np

from evodrive.phenotype  import Individual
from evodrive.pool       import EvolutionManager
from evodrive.run.config import Config

logger = logging.getLogger(__name__)

class Trial(ABC):
    """
    Abstract base class for evolving neural drivers in an environment.

    Subclasses must implement:
    - _step_member(individual, delta_time): Advance one driver by one tick in the environment:
      write its sensor readings, apply its commands and accrue its fitness; deactivate it
      when it crashes

    Subclasses can override:
    - _initialize_member(individual): Customize each newly spawned driver
    - _report_progress():             Report after each generation (default: log statistics)
    - _terminate():                   Custom termination logic (default: max generations)

    Public Attributes:
        manager: The EvolutionManager (None before 'run')

    Public Methods:
        run(delta_time, max_ticks): Execute a complete trial
        spawn_from_code(code):      Create a driver from a genome code
    """

    def __init__(self, config: Config, suppress_output: bool = False):
        """
        Initialize the trial.

        Parameters:
            config:          Configuration parameters
            suppress_output: If True, suppress progress reports
        """
        self._config         : Config                  = config
        self._rng            : np.random.Generator     = config.make_rng()
        self._suppress_output: bool                    = suppress_output
        self.manager         : EvolutionManager | None = None

    def run(self, delta_time: float, max_ticks: int | None = None) -> EvolutionManager:
        """
        Run the trial until the terminate condition is met.

        Parameters:
            delta_time: Simulated time per tick
            max_ticks:  Optional hard limit on the number of ticks

        Returns:
            The EvolutionManager holding the final generation
        """
        self.manager = EvolutionManager(self._config, self._spawn_member, self._rng, self._initialize_member)
        self.manager.generate_first_generation()

        ticks = 0
        while not self._terminate():
            if max_ticks is not None and ticks >= max_ticks:
                break
            ticks += 1

            for individual in self.manager.current_generation:
                if individual.active:
                    self._step_member(individual, delta_time)

            if self.manager.update(delta_time) and not self._suppress_output:
                self._report_progress()

        return self.manager

    def spawn_from_code(self, code: str) -> Individual | None:
        """
        Create a driver from a genome code, e.g. one exported by
        'EvolutionManager.get_best_last_genome_codes'.

        Returns:
            The driver, or None if the code is malformed or does not fit the
            configured network architecture
        """
        try:
            return Individual.from_code(code, self._config, self._rng)
        except ValueError as err:
            logger.error("The genome is invalid: %s", err)
            return None

    def _spawn_member(self) -> Individual:
        return Individual(self._config, self._rng)

    def _initialize_member(self, individual: Individual) -> None:
        pass

    @abstractmethod
    def _step_member(self, individual: Individual, delta_time: float) -> None:
        """
        Advance one driver by one tick.

        IMPORTANT: Fitness may only be increased, through 'individual.add_fitness'.

        Parameters:
            individual: The driver to step
            delta_time: Simulated time per tick
        """
        pass

    def _report_progress(self):
        best = self.manager.best_genomes_of_last_generation
        logger.info("Generation %d started, %d parent genomes carried over",
                    self.manager.generation_index, 0 if best is None else len(best))

    def _terminate(self) -> bool:
        return self.manager.generation_index >= self._config.max_number_generations
