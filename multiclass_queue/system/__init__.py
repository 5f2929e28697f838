"""Simulation engine and run configuration."""

from .config import SimulationConfig
from .queueing_system import SimulationEngine, EventKind, EventRecord, run
from .replications import run_replications, confidence_interval

__all__ = [
    'SimulationConfig',
    'SimulationEngine',
    'EventKind',
    'EventRecord',
    'run',
    'run_replications',
    'confidence_interval'
]
