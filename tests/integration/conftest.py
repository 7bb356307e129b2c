"""
Shared fixtures for integration tests.
"""

import pytest
import numpy as np
from itertools import count

from evodrive.run.config import Config
from evodrive.phenotype.individual import Individual


class Corridor:
    """
    A straight corridor of the given length. A driver is a point at position
    'x' moving along the corridor; it crashes when it touches either end.
    Sensors report the clearance ahead, behind, and to both (constant) sides.
    """

    def __init__(self, length=12.0, width=2.0, speed=2.0):
        self.length = length
        self.width  = width
        self.speed  = speed

    def readings(self, x):
        side = self.width / 2.0
        return [self.length - x, x, side, side]

    def move(self, x, linear, delta_time):
        return x + linear * self.speed * delta_time

    def crashed(self, x):
        return x <= 0.0 or x >= self.length


@pytest.fixture(autouse=True)
def reset_id_generator():
    """Reset Individual ID generator so that IDs start from 0 in each test."""
    Individual._id_generator = count(0)
    yield


@pytest.fixture
def corridor():
    return Corridor()


@pytest.fixture
def corridor_config():
    """A small, seeded configuration for corridor trials."""
    config = Config()
    config.total_count = 10
    config.child_count = 6
    config.parent_count = 3
    config.mutation_chance = 0.1
    config.num_inputs = 4
    config.layer_sizes = "3, 2"
    config.maximum_generation_age = 5.0
    config.max_number_generations = 5
    config.seed = 42
    return config
