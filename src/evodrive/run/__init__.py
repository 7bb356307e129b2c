"""
Run Package

This package contains the configuration of a run and the trial loop coupling
an environment to the evolution of neural drivers.

Modules:
    config: INI-based configuration
    trial:  Abstract tick loop driving an EvolutionManager

Exported Classes:
    Config: Configuration parameters
    Trial:  Abstract base class for evolving drivers in an environment
"""

from evodrive.run.config import Config
from evodrive.run.trial  import Trial

__all__ = ['Config',
           'Trial']
