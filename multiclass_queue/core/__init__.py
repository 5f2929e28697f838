"""Core components of the queueing system."""

from .base import (
    CustomerClass,
    Customer,
    ConfigurationError,
    NoDataError,
    GeneratorInvariantError,
    EmptyLineError,
)
from .waiting_line import WaitingLine
from .statistics import StatisticsCollector

__all__ = [
    'CustomerClass',
    'Customer',
    'ConfigurationError',
    'NoDataError',
    'GeneratorInvariantError',
    'EmptyLineError',
    'WaitingLine',
    'StatisticsCollector'
]
