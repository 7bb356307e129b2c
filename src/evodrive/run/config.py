import configparser
import os

import numpy as np

from evodrive.activations import activations

class Config:

    @staticmethod
    def _parse_layer_sizes(raw_sizes):
        """
        Parse layer_sizes from string to a tuple of ints.

        Parameters:
            raw_sizes: Either a comma-separated list, or already a sequence

        Returns:
            Tuple with the number of neurons of each layer
        """
        if isinstance(raw_sizes, str):
            raw_sizes = [size for size in raw_sizes.split(',') if size.strip()]
        sizes = tuple(int(size) for size in raw_sizes)

        if not sizes:
            raise ValueError("layer_sizes must name at least one layer")
        if any(size < 1 for size in sizes):
            raise ValueError(f"Invalid layer_sizes {sizes}: every layer needs at least one neuron")
        return sizes

    @staticmethod
    def _check_activation(name):
        if name not in activations:
            raise ValueError(f"Invalid activation function '{name}'")
        return name

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or create a default Config.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, creates a Config holding the default values.
        """

        if config_file is None:
            parser = configparser.ConfigParser()
        else:
            if not os.path.exists(config_file):
                raise FileNotFoundError(f"Configuration file '{config_file}' not found")
            parser = configparser.ConfigParser()
            parser.read(config_file)

        # Helper function to safely parse values
        def get_value(section, key, value_type, default):
            try:
                raw_value = parser.get(section, key)
            except (configparser.NoSectionError, configparser.NoOptionError):
                return default
            if raw_value.lower() == 'none':
                # only optional keys (those without a default) accept none
                if default is not None:
                    raise ValueError(f"[{section}] {key} cannot be none")
                return None
            if value_type == int:
                return parser.getint(section, key)
            elif value_type == float:
                return parser.getfloat(section, key)
            elif value_type == bool:
                return parser.getboolean(section, key)
            return raw_value

        # [POPULATION]

        # The total number of members in each generation.
        self.total_count = get_value('POPULATION', 'total_count', int, 20)

        # The number of members of a new generation whose genomes are derived
        # from the parents (mutated parents plus crossed offspring). The remaining
        # (total_count - child_count) members keep random genomes.
        self.child_count = get_value('POPULATION', 'child_count', int, 10)

        # The number of best members of a generation whose genomes are used
        # to create the next one. Must be at least 2 and less than child_count.
        self.parent_count = get_value('POPULATION', 'parent_count', int, 4)

        # [MUTATION]

        # The probability that a single gene is mutated.
        self.mutation_chance = get_value('MUTATION', 'mutation_chance', float, 0.05)

        # The range from which the value added to a mutated gene is drawn (uniformly).
        self.minimum_mutation = get_value('MUTATION', 'minimum_mutation', float, -0.1)
        self.maximum_mutation = get_value('MUTATION', 'maximum_mutation', float,  0.1)

        # [GENERATION]

        # The age (in seconds) after which a new generation is started,
        # even if some members of the current one are still active.
        self.maximum_generation_age = get_value('GENERATION', 'maximum_generation_age', float, 20.0)

        # [NETWORK]

        # The number of input nerves, one per sensor.
        self.num_inputs = get_value('NETWORK', 'num_inputs', int, 4)

        # The number of neurons of each layer; the last layer is the output layer.
        self.layer_sizes = self._parse_layer_sizes(get_value('NETWORK', 'layer_sizes', str, '4, 2'))

        # Activation function of the neurons of all but the last layer,
        # and of the neurons of the last layer.
        self.hidden_activation = self._check_activation(get_value('NETWORK', 'hidden_activation', str, 'identity'))
        self.output_activation = self._check_activation(get_value('NETWORK', 'output_activation', str, 'tanh'))

        # [SENSORS]

        # The reading reported by a sensor that does not hit anything.
        self.max_sensor_distance = get_value('SENSORS', 'max_sensor_distance', float, 10.0)

        # [AVOIDANCE]

        # Forward clearance below which the avoidance machine starts reversing.
        self.close_distance = get_value('AVOIDANCE', 'close_distance', float, 2.5)

        # Forward clearance above which the avoidance machine drives forward again.
        # Must be larger than 'close_distance', the difference provides hysteresis.
        self.clear_distance = get_value('AVOIDANCE', 'clear_distance', float, 3.5)

        # Factor turning a clearance into a linear speed command.
        self.linear_input_multiplier = get_value('AVOIDANCE', 'linear_input_multiplier', float, 0.1)

        # [STEERING]

        # Factors turning the (right - left) and (half right - half left)
        # clearance differences into an angular speed command.
        self.angular_input_multiplier      = get_value('STEERING', 'angular_input_multiplier', float, 2.0)
        self.half_angular_input_multiplier = get_value('STEERING', 'half_angular_input_multiplier', float, 7.0)

        # [TERMINATION]

        # The number of generations after which a trial stops.
        self.max_number_generations = get_value('TERMINATION', 'max_number_generations', int, 50)

        # [RANDOM]

        # Seed for the random generator; None draws fresh entropy.
        self.seed = get_value('RANDOM', 'seed', int, None)

        self._validate()

    def _validate(self):
        if self.parent_count < 2 or self.parent_count >= self.child_count:
            raise ValueError("parent_count must be at least 2 and less than child_count")
        if self.minimum_mutation > self.maximum_mutation:
            raise ValueError("minimum_mutation must not exceed maximum_mutation")
        if not 0.0 <= self.mutation_chance <= 1.0:
            raise ValueError("mutation_chance must be within [0, 1]")
        if self.clear_distance <= self.close_distance:
            raise ValueError("clear_distance must be larger than close_distance")

    def make_rng(self) -> np.random.Generator:
        """
        Create the random generator shared by all components of a run.
        """
        return np.random.default_rng(self.seed)

    def __setattr__(self, name, value):
        """
        Override 'setattr' to automatically parse layer_sizes when set.
        This allows users to write config.layer_sizes = "8, 2".
        """
        if name == 'layer_sizes':
            value = self._parse_layer_sizes(value)
        super().__setattr__(name, value)
