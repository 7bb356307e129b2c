"""
Individual Module

This module implements the Individual class, a driving agent powered by a
layered neural network whose weights are evolved by the EvolutionManager.

Classes:
    Individual: A neural driver with a network, a fitness and an active flag
"""

import logging
from itertools import count
from typing    import Sequence, TYPE_CHECKING

import numpy as np

from evodrive.genotype          import from_code, to_code
from evodrive.phenotype.network import Network
from evodrive.pool.evolvable    import Evolvable
if TYPE_CHECKING:
    from evodrive.run.config import Config

logger = logging.getLogger(__name__)

class Individual(Evolvable):
    """
    A driving agent controlled by a neural network.

    Every tick, the environment hands the individual one reading per sensor
    (the distance to the nearest obstacle along a ray, or infinity when nothing
    is hit) and reads back two commands in [-1, 1]: the linear speed command and
    the angular speed command. The environment also accrues the fitness of the
    individual and deactivates it when it crashes.

    The network is built from the configuration: 'num_inputs' nerves followed
    by 'layer_sizes'; all layers use 'hidden_activation' except the last one,
    which uses 'output_activation'.

    Public Attributes:
        ID: Unique identifier for this individual

    Public Properties:
        network: The network powering this individual
        fitness: Accumulated fitness
        active:  Whether the individual is still driving

    Public Methods:
        sense(readings):     Feed sensor readings into the network
        drive(readings):     Sense, then predict the (linear, angular) commands
        add_fitness(amount): Accrue fitness
        deactivate():        Stop taking part in the current generation
        get_genome():        A copy of the network weights and biases
        set_genome(genome):  Replace the network weights and biases
        to_code():           The genome as a hexadecimal code
        from_code(code):     Create an individual from a hexadecimal code
    """

    _id_generator = count(0)

    def __init__(self, config: 'Config', rng: np.random.Generator | None = None):
        """
        Parameters:
            config: Stores configuration parameters
            rng:    Random generator used to draw the initial weights
        """
        self.ID                  : int      = next(Individual._id_generator)
        self._config             : 'Config' = config
        self._fitness            : float    = 0.0
        self._active             : bool     = True
        self._max_sensor_distance: float    = config.max_sensor_distance

        self._network = Network(config.num_inputs, *config.layer_sizes, rng=rng)
        self._network.set_all_activation_functions(config.hidden_activation)
        self._network.output_layer.set_all_activation_functions(config.output_activation)

        if len(self._network.outputs) != 2:
            raise ValueError("The last layer of a driving network needs exactly 2 neurons")

        logger.debug("Individual %d initial weights: %s", self.ID, self._network.get_all_weights())

    @classmethod
    def from_code(cls, code: str, config: 'Config', rng: np.random.Generator | None = None) -> 'Individual':
        """
        Create an individual whose genome is decoded from a hexadecimal code.

        Raises:
            ValueError: if the code is malformed or does not fit the network architecture
        """
        individual = cls(config, rng)
        individual.set_genome(from_code(code))
        return individual

    @property
    def network(self) -> Network:
        return self._network

    @property
    def fitness(self) -> float:
        return self._fitness

    @property
    def active(self) -> bool:
        return self._active

    def add_fitness(self, amount: float) -> None:
        if amount < 0.0:
            raise ValueError("Fitness can only be increased")
        self._fitness += amount

    def deactivate(self) -> None:
        self._active = False

    def sense(self, readings: Sequence[float]) -> None:
        """
        Feed sensor readings into the input nerves, capped at 'max_sensor_distance'.
        """
        readings = np.minimum(np.asarray(readings, dtype=np.float64), self._max_sensor_distance)
        self._network.set_input_values(readings)

    def drive(self, readings: Sequence[float]) -> tuple[float, float]:
        """
        Compute the driving commands from sensor readings.

        Returns:
            (linear speed command, angular speed command), each clipped to [-1, 1]
        """
        self.sense(readings)
        linear, angular = np.clip(self._network.predict(), -1.0, 1.0)
        return float(linear), float(angular)

    def get_genome(self) -> np.ndarray:
        return self._network.get_all_weights()

    def set_genome(self, genome: Sequence[float]) -> None:
        self._network.set_all_weights(genome)

    def to_code(self) -> str:
        return to_code(self.get_genome())

    def __str__(self):
        return f"ID={self.ID}, fitness={self._fitness:.4f}, active={self._active}"

    def __repr__(self):
        return f"Individual(ID={self.ID}, network={self._network!r})"
