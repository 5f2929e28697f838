"""Three-class single-server queueing simulation package."""

from multiclass_queue.core import (
    CustomerClass,
    Customer,
    WaitingLine,
    StatisticsCollector,
    ConfigurationError,
    NoDataError,
    GeneratorInvariantError,
    EmptyLineError,
)
from multiclass_queue.distributions import VariateSource, time_seed
from multiclass_queue.system import (
    SimulationConfig,
    SimulationEngine,
    EventKind,
    EventRecord,
    run,
    run_replications,
)

__all__ = [
    'CustomerClass',
    'Customer',
    'WaitingLine',
    'StatisticsCollector',
    'ConfigurationError',
    'NoDataError',
    'GeneratorInvariantError',
    'EmptyLineError',
    'VariateSource',
    'time_seed',
    'SimulationConfig',
    'SimulationEngine',
    'EventKind',
    'EventRecord',
    'run',
    'run_replications'
]
