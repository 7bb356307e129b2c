"""
Corridor Driving Implementation

This module evolves neural drivers in a straight, walled corridor. It is the
smallest environment in which a driver has to learn something: it starts near
the rear wall, is rewarded for every unit of forward progress, and crashes if
it touches either wall.

The Environment:
    A driver is a point moving along a corridor of length L. Each tick it
    reads four sensors (clearance ahead, behind, left and right), and its
    linear speed command moves it forward (positive) or backward (negative).
    Angular commands are ignored, the corridor being straight.

Fitness Function:
    Fitness = Σ max(0, forward progress per tick)

    A driver that reaches the far wall crashes, so the best drivers learn to
    slow down as the clearance ahead shrinks. The generation ends when every
    driver has crashed or it exceeds its maximum age.

Classes:
    Trial_Corridor: Neural driver evolution in the corridor

Usage:
    config = Config("config_corridor.ini")
    trial  = Trial_Corridor(config)
    trial.run(delta_time=0.05)
"""

import logging
from pathlib import Path

from evodrive.run.config import Config
from evodrive.phenotype  import Individual
from evodrive.run        import Trial

logger = logging.getLogger(__name__)

class Trial_Corridor(Trial):
    """
    Trial evolving drivers which advance in a corridor without crashing.

    Implemented Methods:
        _initialize_member(individual): Place the driver near the rear wall
        _step_member(individual, dt):   Sense, drive, accrue fitness, detect crashes
        _report_progress():             Log the best fitness of the last generation
    """

    def __init__(self,
                 config         : Config,
                 length         : float = 12.0,
                 width          : float = 2.0,
                 speed          : float = 2.0,
                 suppress_output: bool  = False):
        """
        Initialize the corridor trial.

        Parameters:
            config:          Configuration parameters
            length:          Distance between the two end walls
            width:           Distance between the two side walls
            speed:           Distance covered per second at full linear command
            suppress_output: If True, suppress progress reports
        """
        super().__init__(config, suppress_output)

        self.length = length
        self.width  = width
        self.speed  = speed

        self._positions   : dict[int, float] = {}
        self._best_fitness: float            = 0.0

    def _initialize_member(self, individual: Individual):
        self._positions[individual.ID] = 1.0

    def _readings(self, x: float) -> list[float]:
        side = self.width / 2.0
        return [self.length - x, x, side, side]

    def _step_member(self, individual: Individual, delta_time: float):
        x = self._positions[individual.ID]

        linear, _ = individual.drive(self._readings(x))
        new_x     = x + linear * self.speed * delta_time
        self._positions[individual.ID] = new_x

        individual.add_fitness(max(0.0, new_x - x))
        self._best_fitness = max(self._best_fitness, individual.fitness)

        if new_x <= 0.0 or new_x >= self.length:
            individual.deactivate()

    def _report_progress(self):
        logger.info("Generation %3d | best fitness so far: %.2f",
                    self.manager.generation_index, self._best_fitness)

        # drop the positions of the replaced generation
        self._positions = {individual.ID: self._positions[individual.ID]
                           for individual in self.manager.current_generation}


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    config  = Config(str(Path(__file__).parent / "config_corridor.ini"))
    trial   = Trial_Corridor(config)
    manager = trial.run(delta_time=0.05)

    codes = manager.get_best_last_genome_codes()
    if codes:
        print(f"Best genome code:\n{codes[0]}")
